# src/scoring/calculators/performance.py
"""Performance score: stability of results relative to the baseline."""
from src.journal.metrics_calculator import MetricsCalculator, coefficient_of_variation
from src.journal.models import Trade
from src.scoring.calculators.base import BaseScoreCalculator
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import TradingPattern
from src.scoring.settings import ScoreSettings


class PerformanceCalculator(BaseScoreCalculator):
    """Scores whether the period's results are in line with the baseline.

    Deviation-based factors score 100 while the relative deviation stays
    within ``consistency_tolerance`` percent and lose a point per percent
    beyond it.

    Factors:
        win_rate_consistency: Win rate versus the baseline win rate.
        profit_factor_stability: Profit factor versus the baseline.
        returns_consistency: Dispersion of per-trade PnL relative to its mean.
        volatility_control: PnL standard deviation versus the baseline's;
            only increases beyond the tolerance are penalized.
    """

    FACTOR_WEIGHTS = {
        "win_rate_consistency": 0.25,
        "profit_factor_stability": 0.25,
        "returns_consistency": 0.25,
        "volatility_control": 0.25,
    }

    RETURNS_DISPERSION_PENALTY = 50.0

    def _calculate_factors(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
        period_days: float | None,
    ) -> dict[str, float]:
        metrics = MetricsCalculator(amount_of=normalizer.signed)
        tolerance = settings.thresholds.consistency_tolerance

        if pattern.win_rate > 0:
            win_rate_consistency = self._tolerance_score(
                self._relative_deviation(metrics.win_rate(trades), pattern.win_rate),
                tolerance,
            )
        else:
            win_rate_consistency = self.NEUTRAL_SCORE

        if pattern.profit_factor > 0:
            profit_factor_stability = self._tolerance_score(
                self._relative_deviation(metrics.profit_factor(trades), pattern.profit_factor),
                tolerance,
            )
        else:
            profit_factor_stability = self.NEUTRAL_SCORE

        returns = [normalizer.signed(t) for t in trades]
        if metrics.mean_amount(trades) != 0:
            returns_consistency = max(
                0.0,
                100.0 - coefficient_of_variation(returns) * self.RETURNS_DISPERSION_PENALTY,
            )
        else:
            returns_consistency = self.NEUTRAL_SCORE

        if pattern.pnl_volatility > 0:
            excess_percent = (metrics.pnl_std_dev(trades) / pattern.pnl_volatility - 1) * 100
            volatility_control = self._tolerance_score(excess_percent, tolerance)
        else:
            volatility_control = self.NEUTRAL_SCORE

        return {
            "win_rate_consistency": win_rate_consistency,
            "profit_factor_stability": profit_factor_stability,
            "returns_consistency": returns_consistency,
            "volatility_control": volatility_control,
        }
