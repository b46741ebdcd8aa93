# src/journal/settings.py
"""Settings for the journal module."""
from pydantic import BaseModel, Field, model_validator


class TagPatternSettings(BaseModel):
    """Configuration for tag combination mining.

    Attributes:
        min_total_trades: Trades required before any analysis is produced.
        min_trades_for_combination: Trades a combination needs to be reported.
        min_trades_for_insight: Trades a combination needs to back an insight.
        min_trades_for_triples: Triples are only mined above this trade count.
        recent_period_days: Length of the "recent" slice before the reference date.
        historical_period_days: Start of the "historical" slice before the reference date.
        min_slice_trades: Decisive trades each slice needs to classify a trend.
        trend_threshold: Win-rate delta (points) that marks a trend.
        high_performance_win_rate: Win rate a combination must exceed to be highlighted.
        decline_alert_threshold: Win-rate drop (points) that raises a declining insight.
        top_combinations_limit: Number of top combinations surfaced.
        declining_combinations_limit: Number of declining combinations surfaced.
        max_market_condition_alerts: Cap on session alerts.
        session_tags: Tag names treated as trading sessions.
        system_tag_prefixes: Tag prefixes that are never mined.
    """

    min_total_trades: int = Field(default=10, ge=1)
    min_trades_for_combination: int = Field(default=3, ge=1)
    min_trades_for_insight: int = Field(default=5, ge=1)
    min_trades_for_triples: int = Field(default=50, ge=0)

    recent_period_days: int = Field(default=30, ge=1, le=365)
    historical_period_days: int = Field(default=90, ge=2, le=3650)
    min_slice_trades: int = Field(default=3, ge=1)
    trend_threshold: float = Field(default=10.0, ge=0, le=100)

    high_performance_win_rate: float = Field(default=70.0, ge=0, le=100)
    decline_alert_threshold: float = Field(default=15.0, ge=0, le=100)

    top_combinations_limit: int = Field(default=5, ge=1)
    declining_combinations_limit: int = Field(default=5, ge=1)
    max_market_condition_alerts: int = Field(default=2, ge=0)

    session_tags: list[str] = Field(
        default_factory=lambda: ["Asia", "London", "NY AM", "NY PM"]
    )
    system_tag_prefixes: list[str] = Field(default_factory=lambda: ["Partials:"])

    @model_validator(mode="after")
    def validate_periods(self) -> "TagPatternSettings":
        """The historical slice must start before the recent one."""
        if self.historical_period_days <= self.recent_period_days:
            raise ValueError(
                "historical_period_days must be greater than recent_period_days"
            )
        return self
