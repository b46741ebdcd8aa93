# src/scoring/score_aggregator.py
"""Weighted combination of category scores."""
import logging
import math

from src.journal.metrics_calculator import clamp_score, coerce_finite
from src.scoring.models import CategoryScore, ScoreBreakdown, ScoreMetrics
from src.scoring.settings import ScoreWeights

logger = logging.getLogger(__name__)


class ScoreAggregator:
    """Combines the four category scores into the overall score.

    overall = (consistency * w_c + risk_management * w_r
               + performance * w_p + discipline * w_d) / 100

    Weights are expected to sum to 100. Other totals are not corrected;
    the overall score is clamped to 0-100.
    """

    def aggregate(
        self,
        consistency: CategoryScore,
        risk_management: CategoryScore,
        performance: CategoryScore,
        discipline: CategoryScore,
        weights: ScoreWeights,
    ) -> tuple[ScoreMetrics, ScoreBreakdown]:
        """Build score metrics and breakdown.

        Args:
            consistency: Consistency category result.
            risk_management: Risk management category result.
            performance: Performance category result.
            discipline: Discipline category result.
            weights: Category weights.

        Returns:
            Tuple of (ScoreMetrics, ScoreBreakdown).
        """
        if not math.isclose(weights.total, 100.0):
            logger.warning(f"Score weights sum to {weights.total:.1f}, expected 100")

        scores = {
            "consistency": clamp_score(consistency.score),
            "risk_management": clamp_score(risk_management.score),
            "performance": clamp_score(performance.score),
            "discipline": clamp_score(discipline.score),
        }

        overall = (
            scores["consistency"] * weights.consistency
            + scores["risk_management"] * weights.risk_management
            + scores["performance"] * weights.performance
            + scores["discipline"] * weights.discipline
        ) / 100

        metrics = ScoreMetrics(
            consistency=scores["consistency"],
            risk_management=scores["risk_management"],
            performance=scores["performance"],
            discipline=scores["discipline"],
            overall=clamp_score(coerce_finite(overall)),
        )
        breakdown = ScoreBreakdown(
            consistency=consistency,
            risk_management=risk_management,
            performance=performance,
            discipline=discipline,
        )
        return metrics, breakdown
