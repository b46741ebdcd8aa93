# src/scoring/calculators/discipline.py
"""Discipline score: plan adherence, trade frequency and emotional control."""
from datetime import timedelta

from src.journal.metrics_calculator import safe_ratio
from src.journal.models import Trade, TradeType
from src.scoring.calculators.base import BaseScoreCalculator
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import TradingPattern
from src.scoring.settings import ScoreSettings


class DisciplineCalculator(BaseScoreCalculator):
    """Scores behavioural discipline during the period.

    Factors:
        trading_plan_adherence: Average of session and tag adherence to the
            baseline.
        emotional_control: Penalizes revenge trading, i.e. trades entered
            within ``revenge_window`` of a losing trade.
        overtrading: Deviation of trade frequency from the baseline in either
            direction; deviations inside FREQUENCY_BAND percent are free.
        rule_following: Share of trades with session, tags and R:R recorded
            (breakevens need no R:R).
    """

    FACTOR_WEIGHTS = {
        "trading_plan_adherence": 0.25,
        "emotional_control": 0.25,
        "overtrading": 0.25,
        "rule_following": 0.25,
    }

    FREQUENCY_BAND = 50.0
    FREQUENCY_PENALTY_PER_POINT = 0.5

    def __init__(
        self,
        factor_weights: dict[str, float] | None = None,
        revenge_window: timedelta = timedelta(minutes=60),
    ):
        """Initialize the calculator.

        Args:
            factor_weights: Overrides for FACTOR_WEIGHTS.
            revenge_window: How soon after a loss a new trade counts as revenge.
        """
        super().__init__(factor_weights)
        self._revenge_window = revenge_window

    def _calculate_factors(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
        period_days: float | None,
    ) -> dict[str, float]:
        return {
            "trading_plan_adherence": self._plan_adherence(trades, pattern),
            "emotional_control": self._emotional_control(trades),
            "overtrading": self._frequency_control(trades, pattern, period_days),
            "rule_following": self._share(
                sum(1 for t in trades if self._follows_rules(t)), len(trades)
            ),
        }

    def _plan_adherence(self, trades: list[Trade], pattern: TradingPattern) -> float:
        session_trades = [t for t in trades if t.session]
        if session_trades and pattern.preferred_sessions:
            session_adherence = self._share(
                sum(1 for t in session_trades if t.session in pattern.preferred_sessions),
                len(session_trades),
            )
        else:
            session_adherence = self.NEUTRAL_SCORE

        tagged_trades = [t for t in trades if t.tags]
        if tagged_trades and pattern.common_tags:
            tag_adherence = self._share(
                sum(
                    1
                    for t in tagged_trades
                    if any(tag in pattern.common_tags for tag in t.tags)
                ),
                len(tagged_trades),
            )
        else:
            tag_adherence = self.NEUTRAL_SCORE

        return (session_adherence + tag_adherence) / 2

    def _emotional_control(self, trades: list[Trade]) -> float:
        """100 minus the percentage of losses followed by a quick re-entry."""
        losses_followed = 0
        revenge_trades = 0

        for previous, current in zip(trades, trades[1:]):
            if not previous.is_loss:
                continue
            losses_followed += 1
            if current.date - previous.date <= self._revenge_window:
                revenge_trades += 1

        if losses_followed == 0:
            return 100.0
        return 100.0 - self._share(revenge_trades, losses_followed)

    def _frequency_control(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        period_days: float | None,
    ) -> float:
        if pattern.avg_trades_per_day <= 0:
            return self.NEUTRAL_SCORE

        if not period_days:
            # Span of the trades themselves, in whole calendar days
            period_days = (trades[-1].date.date() - trades[0].date.date()).days + 1

        current_frequency = safe_ratio(len(trades), period_days)
        deviation = abs(current_frequency / pattern.avg_trades_per_day - 1) * 100

        return self._tolerance_score(
            deviation, self.FREQUENCY_BAND, self.FREQUENCY_PENALTY_PER_POINT
        )

    @staticmethod
    def _follows_rules(trade: Trade) -> bool:
        has_risk_reward = bool(trade.risk_to_reward) or trade.trade_type == TradeType.BREAKEVEN
        return bool(trade.session) and bool(trade.tags) and has_risk_reward
