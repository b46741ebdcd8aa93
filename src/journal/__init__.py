# src/journal/__init__.py
"""Journal module for trade history, metrics and tag patterns."""

from .metrics_calculator import MetricsCalculator
from .models import (
    InsightSeverity,
    InsightType,
    TagCombination,
    TagPatternAnalysis,
    TagPatternInsight,
    TagTrend,
    Trade,
    TradeType,
)
from .pattern_analyzer import TagPatternAnalyzer
from .settings import TagPatternSettings

__all__ = [
    "InsightSeverity",
    "InsightType",
    "MetricsCalculator",
    "TagCombination",
    "TagPatternAnalysis",
    "TagPatternAnalyzer",
    "TagPatternInsight",
    "TagPatternSettings",
    "TagTrend",
    "Trade",
    "TradeType",
]
