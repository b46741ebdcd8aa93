# src/scoring/dynamic_risk.py
"""Position size normalization for accounts using dynamic risk."""
import math
from datetime import datetime
from typing import Sequence

from src.journal.models import Trade, TradeType
from src.scoring.settings import DynamicRiskSettings


def cumulative_pnl_to_date(target_date: datetime, trades: Sequence[Trade]) -> float:
    """PnL of all trades taken before the calendar day of ``target_date``."""
    day = target_date.date()
    return sum(t.amount for t in trades if t.date.date() < day)


def effective_risk_percentage(
    target_date: datetime,
    trades: Sequence[Trade],
    settings: DynamicRiskSettings,
) -> float:
    """Risk per trade in force on ``target_date``.

    The base risk applies until cumulative profit reaches the configured
    percentage of the account balance; from then on the increased risk
    applies.

    Args:
        target_date: Date of the trade being sized.
        trades: Full trade history.
        settings: Dynamic risk configuration.

    Returns:
        Risk percentage, or 0.0 when no base risk is configured.
    """
    if not settings.risk_per_trade:
        return 0.0

    if not settings.escalation_configured:
        return settings.risk_per_trade

    cumulative_pnl = cumulative_pnl_to_date(target_date, trades)
    profit_percentage = cumulative_pnl / settings.account_balance * 100

    if profit_percentage >= settings.profit_threshold_percentage:
        return settings.increased_risk_percentage
    return settings.risk_per_trade


class PositionSizeNormalizer:
    """Expresses trade sizes on a common risk basis.

    Trades taken while risk was escalated are scaled back to the base risk
    so that sizes stay comparable across the whole history. Without dynamic
    risk settings the raw trade magnitude is used.
    """

    def __init__(
        self,
        all_trades: Sequence[Trade] | None = None,
        settings: DynamicRiskSettings | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            all_trades: Full trade history, used to replay cumulative PnL.
            settings: Dynamic risk configuration. Not modified.
        """
        self._all_trades = list(all_trades or [])
        self._settings = settings

    def size(self, trade: Trade) -> float:
        """Risk-normalized magnitude of a trade's PnL."""
        magnitude = abs(trade.amount)
        if self._settings is None:
            return magnitude

        if (
            not trade.risk_to_reward
            or trade.partials_taken
            or trade.trade_type == TradeType.BREAKEVEN
        ):
            return magnitude

        effective_risk = effective_risk_percentage(
            trade.date, self._all_trades, self._settings
        )
        if effective_risk == 0:
            return magnitude

        base_risk = self._settings.risk_per_trade or 1.0
        return magnitude * base_risk / effective_risk

    def signed(self, trade: Trade) -> float:
        """Normalized size carrying the sign of the trade's PnL."""
        return math.copysign(self.size(trade), trade.amount) if trade.amount else 0.0

    def expected_risk_amount(self) -> float | None:
        """Amount at risk per trade at base risk, if configured."""
        if self._settings is None or not self._settings.risk_per_trade:
            return None
        if self._settings.account_balance <= 0:
            return None
        return self._settings.account_balance * self._settings.risk_per_trade / 100
