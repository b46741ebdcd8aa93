# src/scoring/__init__.py
"""Scoring module for trader performance scores."""

from .models import (
    CategoryScore,
    MultiPeriodScore,
    Period,
    ScoreAnalysis,
    ScoreBreakdown,
    ScoreHistory,
    ScoreHistoryEntry,
    ScoreMetrics,
    ScoreSummary,
    TradingPattern,
    Trend,
)
from .settings import (
    DynamicRiskSettings,
    ScoreSettings,
    ScoreTargets,
    ScoreThresholds,
    ScoreWeights,
)
from .dynamic_risk import PositionSizeNormalizer
from .pattern_extractor import TradingPatternExtractor
from .score_aggregator import ScoreAggregator
from .trend_detector import TrendDetector
from .recommendation_builder import Feedback, RecommendationBuilder
from .score_service import ScoreService

__all__ = [
    "CategoryScore",
    "DynamicRiskSettings",
    "Feedback",
    "MultiPeriodScore",
    "Period",
    "PositionSizeNormalizer",
    "RecommendationBuilder",
    "ScoreAggregator",
    "ScoreAnalysis",
    "ScoreBreakdown",
    "ScoreHistory",
    "ScoreHistoryEntry",
    "ScoreMetrics",
    "ScoreService",
    "ScoreSettings",
    "ScoreSummary",
    "ScoreTargets",
    "ScoreThresholds",
    "ScoreWeights",
    "TradingPattern",
    "TradingPatternExtractor",
    "Trend",
    "TrendDetector",
]
