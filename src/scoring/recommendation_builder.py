# src/scoring/recommendation_builder.py
"""Recommendation builder for score analyses."""
from dataclasses import dataclass, field

from src.journal.models import InsightType, TagPatternAnalysis
from src.scoring.models import ScoreBreakdown
from src.scoring.settings import ScoreSettings


@dataclass
class Feedback:
    """Advice derived from a score breakdown."""

    recommendations: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)


class RecommendationBuilder:
    """Turns a score breakdown into recommendations, strengths and weaknesses."""

    # Component targets used for the recommended score
    CONSISTENCY_TARGET = 75.0
    DISCIPLINE_TARGET = 70.0

    def __init__(
        self,
        weakness_threshold: float = 70.0,
        max_tag_insights: int = 2,
        min_recommended_score: float = 50.0,
        max_recommended_score: float = 90.0,
    ):
        """Initialize RecommendationBuilder with configurable thresholds.

        Args:
            weakness_threshold: Scores below this are treated as weaknesses.
            max_tag_insights: Tag pattern insights folded into the advice.
            min_recommended_score: Lower bound of the recommended score.
            max_recommended_score: Upper bound of the recommended score.
        """
        self.weakness_threshold = weakness_threshold
        self.max_tag_insights = max_tag_insights
        self.min_recommended_score = min_recommended_score
        self.max_recommended_score = max_recommended_score

    def build(
        self,
        breakdown: ScoreBreakdown,
        tag_pattern_analysis: TagPatternAnalysis | None = None,
    ) -> Feedback:
        """Build advice for a score breakdown.

        Args:
            breakdown: Category scores with their factors.
            tag_pattern_analysis: Optional tag analysis whose first insights
                are included.

        Returns:
            Feedback with recommendations, strengths and weaknesses.
        """
        feedback = Feedback()
        threshold = self.weakness_threshold

        consistency = breakdown.consistency
        if consistency.score < threshold:
            if consistency.factors.get("session_consistency", 0) < threshold:
                feedback.recommendations.append(
                    "Focus on trading during your most profitable sessions"
                )
                feedback.weaknesses.append("Inconsistent session timing")
            if consistency.factors.get("tag_consistency", 0) < threshold:
                feedback.recommendations.append(
                    "Stick to your proven trading strategies and setups"
                )
                feedback.weaknesses.append("Deviating from successful patterns")
        else:
            feedback.strengths.append("Consistent trading approach")

        risk = breakdown.risk_management
        if risk.score < threshold:
            if risk.factors.get("max_drawdown_adherence", 0) < threshold:
                feedback.recommendations.append("Reduce position sizes to control drawdown")
                feedback.weaknesses.append("Excessive drawdown risk")
            if risk.factors.get("risk_reward_ratio", 0) < threshold:
                feedback.recommendations.append("Improve risk/reward ratios on your trades")
                feedback.weaknesses.append("Poor risk/reward management")
        else:
            feedback.strengths.append("Strong risk management")

        performance = breakdown.performance
        if performance.score < threshold:
            if performance.factors.get("win_rate_consistency", 0) < threshold:
                feedback.recommendations.append("Focus on quality setups to maintain win rate")
                feedback.weaknesses.append("Declining win rate")
        else:
            feedback.strengths.append("Consistent performance")

        discipline = breakdown.discipline
        if discipline.score < threshold:
            if discipline.factors.get("overtrading", 0) < threshold:
                feedback.recommendations.append(
                    "Keep your trading frequency close to your usual pace"
                )
                feedback.weaknesses.append("Irregular trading frequency")
            if discipline.factors.get("emotional_control", 0) < threshold:
                feedback.recommendations.append(
                    "Take a break after losses instead of re-entering immediately"
                )
                feedback.weaknesses.append("Emotional trading patterns")
        else:
            feedback.strengths.append("Good trading discipline")

        if tag_pattern_analysis:
            self._add_tag_insights(feedback, tag_pattern_analysis)

        return feedback

    def _add_tag_insights(self, feedback: Feedback, analysis: TagPatternAnalysis) -> None:
        for insight in analysis.insights[: self.max_tag_insights]:
            label = " + ".join(insight.tag_combination)
            if insight.insight_type == InsightType.HIGH_PERFORMANCE:
                feedback.recommendations.append(
                    f'Focus on "{label}" pattern ({insight.win_rate:.1f}% win rate)'
                )
                feedback.strengths.append(f"Strong performance with {label} combination")
            elif insight.insight_type == InsightType.DECLINING_PATTERN:
                feedback.recommendations.append(
                    f'Review "{label}" strategy - performance declining'
                )
                feedback.weaknesses.append(f"Declining performance in {label} trades")

    def recommended_score(self, settings: ScoreSettings) -> float:
        """Target overall score implied by the trader's goals.

        Risk management and performance targets scale with the win rate,
        profit factor and R:R goals; consistency and discipline use fixed
        targets. The weighted result is bounded to the configured range.

        Args:
            settings: Scoring configuration with weights and targets.

        Returns:
            Recommended overall score.
        """
        targets = settings.targets
        weights = settings.weights

        risk_target = min(
            85.0,
            (targets.win_rate / 60) * 75 + min(10.0, (targets.avg_risk_reward / 2.0) * 10),
        )
        performance_target = min(
            80.0,
            min(60.0, (targets.profit_factor / 1.5) * 60)
            + min(20.0, (targets.win_rate / 60) * 20),
        )

        score = (
            self.CONSISTENCY_TARGET * weights.consistency
            + risk_target * weights.risk_management
            + performance_target * weights.performance
            + self.DISCIPLINE_TARGET * weights.discipline
        ) / 100

        return max(self.min_recommended_score, min(self.max_recommended_score, score))
