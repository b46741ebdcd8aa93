# src/scoring/models.py
"""Data models for the scoring system."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

import pandas as pd

from src.journal.models import TagPatternAnalysis


class Period(str, Enum):
    """Calendar granularity of a scoring window."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


class Trend(str, Enum):
    """Trajectory of the score versus the previous period."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


@dataclass
class TradingPattern:
    """What normal trading looks like over the lookback window.

    Attributes:
        preferred_sessions: Most traded sessions, most frequent first.
        common_tags: Most used tags, most frequent first.
        avg_trades_per_day: Trades per calendar day of the lookback window.
        avg_trades_per_week: Trades per week of the lookback window.
        avg_position_size: Average trade size (risk-normalized when configured).
        avg_risk_reward: Average planned risk/reward of trades recording one.
        win_rate: Win percentage, breakevens excluded.
        profit_factor: Gross profit over gross loss (capped at 999).
        max_drawdown: Largest peak-to-trough decline, percent.
        trading_days: Weekdays with activity (0=Monday, 6=Sunday).
        pnl_volatility: Standard deviation of per-trade PnL.
        trade_count: Trades the pattern was built from.
    """

    preferred_sessions: list[str]
    common_tags: list[str]
    avg_trades_per_day: float
    avg_trades_per_week: float
    avg_position_size: float
    avg_risk_reward: float
    win_rate: float
    profit_factor: float
    max_drawdown: float
    trading_days: list[int]
    pnl_volatility: float = 0.0
    trade_count: int = 0

    @classmethod
    def empty(cls) -> "TradingPattern":
        """Pattern for a trader with no history in the lookback window."""
        return cls(
            preferred_sessions=[],
            common_tags=[],
            avg_trades_per_day=0.0,
            avg_trades_per_week=0.0,
            avg_position_size=0.0,
            avg_risk_reward=0.0,
            win_rate=0.0,
            profit_factor=0.0,
            max_drawdown=0.0,
            trading_days=[],
            pnl_volatility=0.0,
            trade_count=0,
        )

    @property
    def has_baseline(self) -> bool:
        return self.trade_count > 0


@dataclass
class CategoryScore:
    """Score of one category with its named factors (each 0-100)."""

    score: float
    factors: dict[str, float] = field(default_factory=dict)


@dataclass
class ScoreMetrics:
    """Category scores and the weighted overall score, each 0-100."""

    consistency: float
    risk_management: float
    performance: float
    discipline: float
    overall: float

    def components(self) -> dict[str, float]:
        """Category scores keyed by display name."""
        return {
            "Consistency": self.consistency,
            "Risk Management": self.risk_management,
            "Performance": self.performance,
            "Discipline": self.discipline,
        }


@dataclass
class ScoreBreakdown:
    """Factor-level detail for every category."""

    consistency: CategoryScore
    risk_management: CategoryScore
    performance: CategoryScore
    discipline: CategoryScore


@dataclass
class ScoreAnalysis:
    """Complete scoring result for one period."""

    period: Period
    target_date: datetime
    trade_count: int
    current_score: ScoreMetrics
    breakdown: ScoreBreakdown
    pattern: TradingPattern
    recommendations: list[str]
    strengths: list[str]
    weaknesses: list[str]
    trend: Trend
    recommended_score: float
    tag_pattern_analysis: TagPatternAnalysis | None = None


@dataclass
class ScoreHistoryEntry:
    """Score of a single past period."""

    date: datetime
    period: Period
    metrics: ScoreMetrics
    breakdown: ScoreBreakdown
    trade_count: int


@dataclass
class ScoreHistory:
    """Chronologically ordered score history."""

    period: Period
    entries: list[ScoreHistoryEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index: int) -> ScoreHistoryEntry:
        return self.entries[index]

    def to_dataframe(self) -> pd.DataFrame:
        """Flatten the history into one row per period, indexed by date."""
        columns = [
            "consistency",
            "risk_management",
            "performance",
            "discipline",
            "overall",
            "trade_count",
        ]
        rows = [
            {
                "date": entry.date,
                "consistency": entry.metrics.consistency,
                "risk_management": entry.metrics.risk_management,
                "performance": entry.metrics.performance,
                "discipline": entry.metrics.discipline,
                "overall": entry.metrics.overall,
                "trade_count": entry.trade_count,
            }
            for entry in self.entries
        ]
        if not rows:
            return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name="date"))
        return pd.DataFrame(rows).set_index("date")


@dataclass
class MultiPeriodScore:
    """Analyses for every period granularity at the same target date."""

    daily: ScoreAnalysis
    weekly: ScoreAnalysis
    monthly: ScoreAnalysis
    yearly: ScoreAnalysis

    def by_period(self) -> dict[Period, ScoreAnalysis]:
        return {
            Period.DAILY: self.daily,
            Period.WEEKLY: self.weekly,
            Period.MONTHLY: self.monthly,
            Period.YEARLY: self.yearly,
        }


@dataclass
class ScoreSummary:
    """Compact dashboard view of the current week."""

    current_weekly: ScoreMetrics
    trend: Trend
    key_metric: str
    recommendation: str
