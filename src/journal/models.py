# src/journal/models.py
"""Data models for the trading journal."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class TradeType(str, Enum):
    """Outcome classification of a closed trade."""

    WIN = "win"
    LOSS = "loss"
    BREAKEVEN = "breakeven"


class TagTrend(str, Enum):
    """Direction of a tag combination's recent win rate."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"


class InsightType(str, Enum):
    """Kind of finding produced by the tag pattern analyzer."""

    HIGH_PERFORMANCE = "high_performance"
    DECLINING_PATTERN = "declining_pattern"
    MARKET_CONDITION = "market_condition"


class InsightSeverity(str, Enum):
    """How urgently an insight should be acted upon."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass(frozen=True)
class Trade:
    """A single closed trade from the journal.

    Attributes:
        date: When the trade was taken (local time of the journal).
        amount: Signed profit or loss.
        trade_type: Win, loss or breakeven.
        session: Trading session name, if recorded.
        tags: Ordered tags, optionally in ``group:name`` form.
        risk_to_reward: Planned risk/reward ratio, if recorded.
        partials_taken: Whether partial profits were taken.
        trade_id: Identifier from the journal store.
    """

    date: datetime
    amount: float
    trade_type: TradeType
    session: str | None = None
    tags: tuple[str, ...] = ()
    risk_to_reward: float | None = None
    partials_taken: bool = False
    trade_id: str | None = None

    @property
    def is_win(self) -> bool:
        return self.trade_type == TradeType.WIN

    @property
    def is_loss(self) -> bool:
        return self.trade_type == TradeType.LOSS

    def has_tags(self, tags: list[str] | tuple[str, ...]) -> bool:
        """Check whether the trade carries every tag in ``tags``."""
        return all(tag in self.tags for tag in tags)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Trade":
        """Build a Trade from a journal export record.

        Accepts snake_case and camelCase keys so exports from the trade
        store can be passed through unchanged.

        Args:
            data: Raw trade record.

        Returns:
            Parsed Trade.

        Raises:
            KeyError: If the date, amount or type is missing.
            ValueError: If the date or trade type cannot be parsed.
        """
        raw_date = data["trade_date"] if "trade_date" in data else data["date"]
        trade_date = (
            raw_date if isinstance(raw_date, datetime) else datetime.fromisoformat(raw_date)
        )
        raw_type = data.get("trade_type", data.get("type"))
        if raw_type is None:
            raise KeyError("trade_type")

        risk_to_reward = data.get("risk_to_reward", data.get("riskToReward"))
        tags = data.get("tags") or ()

        return cls(
            date=trade_date,
            amount=float(data["amount"]),
            trade_type=TradeType(raw_type),
            session=data.get("session") or None,
            tags=tuple(tags),
            risk_to_reward=float(risk_to_reward) if risk_to_reward is not None else None,
            partials_taken=bool(data.get("partials_taken", data.get("partialsTaken", False))),
            trade_id=data.get("id", data.get("trade_id")),
        )


@dataclass
class TagCombination:
    """Aggregate performance of a set of co-occurring tags."""

    tags: list[str]
    win_rate: float
    total_trades: int
    wins: int
    losses: int
    total_pnl: float
    avg_pnl: float
    trend: TagTrend
    recent_win_rate: float
    historical_win_rate: float

    @property
    def win_rate_change(self) -> float:
        """Recent minus historical win rate, in percentage points."""
        return self.recent_win_rate - self.historical_win_rate

    @property
    def label(self) -> str:
        return " + ".join(self.tags)


@dataclass
class TagPatternInsight:
    """A single actionable finding about a tag combination."""

    insight_type: InsightType
    title: str
    description: str
    tag_combination: list[str]
    win_rate: float
    confidence: float
    recommendation: str
    severity: InsightSeverity


@dataclass
class TagPatternAnalysis:
    """Result of mining tag combinations for performance drift."""

    insights: list[TagPatternInsight] = field(default_factory=list)
    top_combinations: list[TagCombination] = field(default_factory=list)
    declining_combinations: list[TagCombination] = field(default_factory=list)
    market_condition_alerts: list[TagPatternInsight] = field(default_factory=list)
