# src/journal/metrics_calculator.py
"""Calculator for trading performance metrics."""
import math
from typing import Callable, Iterable

import numpy as np

from src.journal.models import Trade

# Stand-in for an unbounded profit factor (profits without any losses).
PROFIT_FACTOR_CAP = 999.0


def coerce_finite(value: float, default: float = 0.0) -> float:
    """Replace NaN or infinite values with ``default``."""
    if value is None or not math.isfinite(value):
        return default
    return float(value)


def clamp_score(value: float) -> float:
    """Coerce a score to a finite value within 0-100."""
    return min(100.0, max(0.0, coerce_finite(value)))


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` when the denominator is zero."""
    if not denominator:
        return default
    return coerce_finite(numerator / denominator, default)


class MetricsCalculator:
    """Calculates trading performance metrics from journal trades.

    Amounts can be re-expressed through ``amount_of`` so the same arithmetic
    serves both raw and risk-normalized P&L.
    """

    def __init__(self, amount_of: Callable[[Trade], float] | None = None) -> None:
        """Initialize the calculator.

        Args:
            amount_of: Maps a trade to the signed amount to use. Defaults to
                the trade's raw P&L.
        """
        self._amount_of = amount_of or (lambda trade: trade.amount)

    def win_rate(self, trades: Iterable[Trade]) -> float:
        """Win percentage over decisive trades; breakevens are excluded."""
        trades = list(trades)
        wins = sum(1 for t in trades if t.is_win)
        losses = sum(1 for t in trades if t.is_loss)
        return safe_ratio(wins, wins + losses) * 100

    def profit_factor(self, trades: Iterable[Trade]) -> float:
        """Gross profit over gross loss.

        Returns:
            PROFIT_FACTOR_CAP when there are profits but no losses, 0.0 when
            there are neither.
        """
        amounts = [self._amount_of(t) for t in trades]
        gross_profit = sum(a for a in amounts if a > 0)
        gross_loss = abs(sum(a for a in amounts if a < 0))

        if gross_loss == 0:
            return PROFIT_FACTOR_CAP if gross_profit > 0 else 0.0
        return min(PROFIT_FACTOR_CAP, gross_profit / gross_loss)

    def max_drawdown_percent(
        self, trades: Iterable[Trade], peak_floor: float = 0.0
    ) -> float:
        """Calculate maximum drawdown from cumulative PnL.

        Trades are replayed in date order. Each drawdown is measured against
        the running peak; ``peak_floor`` keeps tiny peaks from producing
        enormous percentages. With a floor of 0, drawdowns before the first
        positive peak are ignored.

        Args:
            trades: Trades to replay.
            peak_floor: Minimum divisor for the percentage.

        Returns:
            Maximum drawdown as a positive percentage.
        """
        cumulative_pnl = 0.0
        peak = 0.0
        max_drawdown = 0.0

        for trade in sorted(trades, key=lambda t: t.date):
            cumulative_pnl += self._amount_of(trade)
            if cumulative_pnl > peak:
                peak = cumulative_pnl

            divisor = max(peak, peak_floor)
            if divisor <= 0:
                continue
            drawdown = (peak - cumulative_pnl) / divisor * 100
            if drawdown > max_drawdown:
                max_drawdown = drawdown

        return coerce_finite(max_drawdown)

    def pnl_std_dev(self, trades: Iterable[Trade]) -> float:
        """Population standard deviation of per-trade PnL."""
        amounts = [self._amount_of(t) for t in trades]
        if not amounts:
            return 0.0
        return coerce_finite(float(np.std(amounts)))

    def mean_amount(self, trades: Iterable[Trade]) -> float:
        amounts = [self._amount_of(t) for t in trades]
        if not amounts:
            return 0.0
        return coerce_finite(float(np.mean(amounts)))


def coefficient_of_variation(values: list[float]) -> float:
    """Standard deviation relative to the mean; 0.0 for empty or zero-mean input."""
    if not values:
        return 0.0
    mean = float(np.mean(values))
    if mean == 0:
        return 0.0
    return coerce_finite(float(np.std(values)) / abs(mean))
