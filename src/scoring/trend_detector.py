# src/scoring/trend_detector.py
"""Trend classification of the current period against the previous one."""
import logging
from datetime import datetime
from typing import Sequence

from src.journal.metrics_calculator import safe_ratio
from src.journal.models import Trade
from src.scoring.models import Period, Trend
from src.scoring.period_filter import (
    is_current_period,
    previous_period_date,
    trades_for_period,
)

logger = logging.getLogger(__name__)


class TrendDetector:
    """Detects whether the trader is improving, declining or stable.

    Only the period that is still in progress has a trend; past periods are
    final and always report STABLE. Periods are compared using a simplified
    score (win rate averaged with a return score) instead of the full
    category pipeline.

    Attributes:
        threshold: Score difference (points) needed to call a trend.
        min_trades: Trades each period needs for a comparison.
    """

    def __init__(self, threshold: float = 5.0, min_trades: int = 2):
        self.threshold = threshold
        self.min_trades = min_trades

    def detect(
        self,
        all_trades: Sequence[Trade],
        period: Period,
        target_date: datetime,
        now: datetime | None = None,
    ) -> Trend:
        """Classify the trend for the period containing ``target_date``.

        Args:
            all_trades: Full trade history.
            period: Period granularity.
            target_date: Date inside the evaluated period.
            now: Current time. Defaults to datetime.now().

        Returns:
            Trend classification.
        """
        now = now or datetime.now()

        try:
            if not is_current_period(target_date, period, now):
                return Trend.STABLE

            current_trades = trades_for_period(all_trades, period, target_date)
            previous_trades = trades_for_period(
                all_trades, period, previous_period_date(target_date, period)
            )

            if len(current_trades) < self.min_trades or len(previous_trades) < self.min_trades:
                return Trend.STABLE

            difference = self.simple_score(current_trades) - self.simple_score(previous_trades)
            logger.debug(f"{period.value} trend score difference: {difference:.2f}")

            if difference > self.threshold:
                return Trend.IMPROVING
            elif difference < -self.threshold:
                return Trend.DECLINING
            return Trend.STABLE
        except (ArithmeticError, TypeError, ValueError) as e:
            logger.error(f"Error calculating trend: {e}")
            return Trend.STABLE

    @staticmethod
    def simple_score(trades: Sequence[Trade]) -> float:
        """Quick 0-100 score from win rate and average return.

        Win rate here counts every trade, breakevens included. The return
        score is min(100, avg * 10) for a positive average return and
        max(0, 50 + avg * 10) otherwise.
        """
        if not trades:
            return 0.0

        win_rate = safe_ratio(sum(1 for t in trades if t.is_win), len(trades)) * 100
        avg_return = sum(t.amount for t in trades) / len(trades)

        if avg_return > 0:
            return_score = min(100.0, avg_return * 10)
        else:
            return_score = max(0.0, 50.0 + avg_return * 10)

        return (win_rate + return_score) / 2
