# src/scoring/calculators/__init__.py
"""Category score calculators."""

from .base import BaseScoreCalculator
from .consistency import ConsistencyCalculator
from .discipline import DisciplineCalculator
from .performance import PerformanceCalculator
from .risk_management import RiskManagementCalculator

__all__ = [
    "BaseScoreCalculator",
    "ConsistencyCalculator",
    "DisciplineCalculator",
    "PerformanceCalculator",
    "RiskManagementCalculator",
]
