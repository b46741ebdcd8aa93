# src/scoring/calculators/risk_management.py
"""Risk management score."""
from src.journal.metrics_calculator import MetricsCalculator, coefficient_of_variation
from src.journal.models import Trade, TradeType
from src.scoring.calculators.base import BaseScoreCalculator
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import TradingPattern
from src.scoring.settings import ScoreSettings


class RiskManagementCalculator(BaseScoreCalculator):
    """Scores how well risk was controlled during the period.

    Factors:
        risk_reward_ratio: Share of trades with a recorded R:R that meet the
            target average R:R.
        position_sizing: With a configured risk per trade, how close losses
            stay to the expected risk amount; otherwise how uniform trade
            sizes are (100 minus the coefficient of variation in percent).
        max_drawdown_adherence: 100 while drawdown stays within the target,
            10 points lost per percent beyond it.
        stop_loss_usage: Share of non-breakeven trades with a planned R:R,
            i.e. taken with a defined stop.
    """

    FACTOR_WEIGHTS = {
        "risk_reward_ratio": 0.25,
        "position_sizing": 0.25,
        "max_drawdown_adherence": 0.25,
        "stop_loss_usage": 0.25,
    }

    DRAWDOWN_PENALTY_PER_POINT = 10.0

    def _calculate_factors(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
        period_days: float | None,
    ) -> dict[str, float]:
        return {
            "risk_reward_ratio": self._risk_reward_achievement(trades, settings),
            "position_sizing": self._position_sizing(trades, settings, normalizer),
            "max_drawdown_adherence": self._drawdown_adherence(trades, settings, normalizer),
            "stop_loss_usage": self._stop_loss_usage(trades),
        }

    def _risk_reward_achievement(self, trades: list[Trade], settings: ScoreSettings) -> float:
        rr_trades = [t for t in trades if t.risk_to_reward and t.risk_to_reward > 0]
        if not rr_trades:
            return self.NEUTRAL_SCORE

        target = settings.targets.avg_risk_reward
        return self._share(
            sum(1 for t in rr_trades if t.risk_to_reward >= target), len(rr_trades)
        )

    def _position_sizing(
        self,
        trades: list[Trade],
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
    ) -> float:
        expected_risk = normalizer.expected_risk_amount()
        losses = [t for t in trades if t.is_loss]

        if expected_risk and losses:
            deviations = [
                self._relative_deviation(normalizer.size(t), expected_risk) for t in losses
            ]
            return self._tolerance_score(
                sum(deviations) / len(deviations),
                settings.thresholds.consistency_tolerance,
            )

        sizes = [normalizer.size(t) for t in trades]
        if sum(sizes) == 0:
            return self.NEUTRAL_SCORE
        return max(0.0, 100.0 - coefficient_of_variation(sizes) * 100)

    def _drawdown_adherence(
        self,
        trades: list[Trade],
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
    ) -> float:
        drawdown = MetricsCalculator(amount_of=normalizer.signed).max_drawdown_percent(trades)
        target = settings.targets.max_drawdown

        if drawdown <= target:
            return 100.0
        return max(0.0, 100.0 - (drawdown - target) * self.DRAWDOWN_PENALTY_PER_POINT)

    def _stop_loss_usage(self, trades: list[Trade]) -> float:
        decisive = [t for t in trades if t.trade_type != TradeType.BREAKEVEN]
        if not decisive:
            return self.NEUTRAL_SCORE
        return self._share(
            sum(1 for t in decisive if t.risk_to_reward and t.risk_to_reward > 0),
            len(decisive),
        )
