# src/scoring/settings.py
"""Settings for the trading score engine."""
from pydantic import BaseModel, Field


class ScoreWeights(BaseModel):
    """Weights of each category in the overall score.

    The weights are expected to sum to 100. This is not enforced: other
    totals scale the overall score, which is then clamped to 0-100.
    """

    consistency: float = Field(default=40.0, ge=0, le=100)
    risk_management: float = Field(default=25.0, ge=0, le=100)
    performance: float = Field(default=20.0, ge=0, le=100)
    discipline: float = Field(default=15.0, ge=0, le=100)

    @property
    def total(self) -> float:
        return self.consistency + self.risk_management + self.performance + self.discipline


class ScoreThresholds(BaseModel):
    """Data requirements and tolerances for scoring.

    Attributes:
        min_trades_for_score: Trades a period needs before it is scored.
        lookback_period: Days of history used to build the baseline pattern.
        consistency_tolerance: Acceptable deviation from baseline, in percent.
    """

    min_trades_for_score: int = Field(default=3, ge=1)
    lookback_period: int = Field(default=30, ge=1, le=3650)
    consistency_tolerance: float = Field(default=15.0, ge=0, le=100)


class ScoreTargets(BaseModel):
    """Trader's performance goals."""

    win_rate: float = Field(default=60.0, ge=0, le=100)
    profit_factor: float = Field(default=1.5, ge=0)
    max_drawdown: float = Field(default=5.0, ge=0, le=100)
    avg_risk_reward: float = Field(default=2.0, ge=0)


class ScoreSettings(BaseModel):
    """Complete scoring configuration.

    Attributes:
        weights: Category weights for the overall score.
        thresholds: Data requirements and tolerances.
        targets: Performance goals.
        selected_tags: Restricts the baseline's common tags to these tags.
        excluded_tags_from_patterns: Tags ignored by tag combination mining.
    """

    weights: ScoreWeights = Field(default_factory=ScoreWeights)
    thresholds: ScoreThresholds = Field(default_factory=ScoreThresholds)
    targets: ScoreTargets = Field(default_factory=ScoreTargets)
    selected_tags: list[str] = Field(default_factory=list)
    excluded_tags_from_patterns: list[str] = Field(default_factory=list)


class DynamicRiskSettings(BaseModel):
    """Account risk configuration used to normalize position sizes.

    Attributes:
        account_balance: Starting account balance.
        risk_per_trade: Base risk per trade, percent of account value.
        dynamic_risk_enabled: Whether risk escalates after a profit threshold.
        increased_risk_percentage: Risk per trade once the threshold is met.
        profit_threshold_percentage: Cumulative profit, percent of balance,
            that unlocks the increased risk.
    """

    account_balance: float = Field(default=0.0, ge=0)
    risk_per_trade: float | None = Field(default=None, ge=0, le=100)
    dynamic_risk_enabled: bool = False
    increased_risk_percentage: float | None = Field(default=None, ge=0, le=100)
    profit_threshold_percentage: float | None = Field(default=None, ge=0)

    @property
    def escalation_configured(self) -> bool:
        """Whether every knob needed for risk escalation is set."""
        return bool(
            self.dynamic_risk_enabled
            and self.increased_risk_percentage
            and self.profit_threshold_percentage
            and self.account_balance > 0
        )
