# src/scoring/calculators/base.py
"""Base class for category score calculators."""
from abc import ABC, abstractmethod
from typing import Sequence

from src.journal.metrics_calculator import clamp_score, coerce_finite, safe_ratio
from src.journal.models import Trade
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import CategoryScore, TradingPattern
from src.scoring.settings import DynamicRiskSettings, ScoreSettings


class BaseScoreCalculator(ABC):
    """Scores evaluation-period trades against the baseline pattern.

    Subclasses compute named factors (each 0-100); the category score is
    their weighted average. Periods with fewer than ``min_trades_for_score``
    trades score 0 with every factor at 0. Factors that come out NaN or
    infinite fall back to NEUTRAL_SCORE.

    Attributes:
        FACTOR_WEIGHTS: Default relative weight of each factor.
    """

    FACTOR_WEIGHTS: dict[str, float] = {}

    # Factor value used when there is nothing to compare against
    NEUTRAL_SCORE = 50.0

    def __init__(self, factor_weights: dict[str, float] | None = None):
        """Initialize the calculator.

        Args:
            factor_weights: Overrides for FACTOR_WEIGHTS. Unknown factor names
                are ignored.
        """
        self._factor_weights = dict(self.FACTOR_WEIGHTS)
        if factor_weights:
            self._factor_weights.update(
                {k: v for k, v in factor_weights.items() if k in self.FACTOR_WEIGHTS}
            )

    @property
    def factor_weights(self) -> dict[str, float]:
        return dict(self._factor_weights)

    def calculate(
        self,
        trades: Sequence[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        all_trades: Sequence[Trade] | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        period_days: float | None = None,
    ) -> CategoryScore:
        """Score the evaluation-period trades.

        Args:
            trades: Trades of the evaluation period.
            pattern: Baseline pattern from the lookback window.
            settings: Scoring configuration.
            all_trades: Full trade history, used to replay dynamic risk.
            dynamic_risk: Optional dynamic risk settings.
            period_days: Days of the evaluation period over which trade
                frequency is measured.

        Returns:
            CategoryScore with the score and its factors.
        """
        min_trades = max(1, settings.thresholds.min_trades_for_score)
        if len(trades) < min_trades:
            return self._empty_score()

        ordered = sorted(trades, key=lambda t: t.date)
        normalizer = PositionSizeNormalizer(all_trades or ordered, dynamic_risk)

        raw_factors = self._calculate_factors(
            ordered, pattern, settings, normalizer, period_days
        )
        factors = {
            name: clamp_score(coerce_finite(value, self.NEUTRAL_SCORE))
            for name, value in raw_factors.items()
        }

        return CategoryScore(score=self._combine(factors), factors=factors)

    @abstractmethod
    def _calculate_factors(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
        period_days: float | None,
    ) -> dict[str, float]:
        """Compute the raw factor values for a non-empty, date-ordered period."""
        pass

    def _empty_score(self) -> CategoryScore:
        return CategoryScore(
            score=0.0, factors={name: 0.0 for name in self.FACTOR_WEIGHTS}
        )

    def _combine(self, factors: dict[str, float]) -> float:
        total_weight = sum(self._factor_weights.get(name, 0.0) for name in factors)
        weighted = sum(
            value * self._factor_weights.get(name, 0.0) for name, value in factors.items()
        )
        return clamp_score(safe_ratio(weighted, total_weight))

    @staticmethod
    def _share(matching: int, total: int) -> float:
        """Percentage of ``total`` that ``matching`` represents."""
        return safe_ratio(matching, total) * 100

    @staticmethod
    def _tolerance_score(
        deviation_percent: float, tolerance: float, penalty_per_point: float = 1.0
    ) -> float:
        """Full marks inside the tolerance band, linear penalty beyond it.

        Args:
            deviation_percent: Deviation from the reference, in percent.
            tolerance: Acceptable deviation, in percent.
            penalty_per_point: Score lost per percent beyond the band.

        Returns:
            Score from 0-100.
        """
        if deviation_percent <= tolerance:
            return 100.0
        return max(0.0, 100.0 - (deviation_percent - tolerance) * penalty_per_point)

    @staticmethod
    def _relative_deviation(current: float, baseline: float) -> float:
        """Absolute deviation of ``current`` from ``baseline``, in percent."""
        return safe_ratio(abs(current - baseline), baseline) * 100
