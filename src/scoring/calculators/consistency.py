# src/scoring/calculators/consistency.py
"""Consistency score: adherence to the trader's usual sessions, setups, days and size."""
from src.journal.models import Trade
from src.scoring.calculators.base import BaseScoreCalculator
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import TradingPattern
from src.scoring.settings import ScoreSettings


class ConsistencyCalculator(BaseScoreCalculator):
    """Measures how closely the period follows the baseline pattern.

    Factors:
        session_consistency: Share of session-tagged trades in a preferred session.
        tag_consistency: Share of tagged trades using at least one common tag.
        timing_consistency: Share of trades placed on usual trading weekdays.
        size_consistency: Average size within ``consistency_tolerance`` percent
            of the baseline scores 100; one point lost per percent beyond.
    """

    FACTOR_WEIGHTS = {
        "session_consistency": 0.25,
        "tag_consistency": 0.25,
        "timing_consistency": 0.25,
        "size_consistency": 0.25,
    }

    def _calculate_factors(
        self,
        trades: list[Trade],
        pattern: TradingPattern,
        settings: ScoreSettings,
        normalizer: PositionSizeNormalizer,
        period_days: float | None,
    ) -> dict[str, float]:
        session_trades = [t for t in trades if t.session]
        if session_trades and pattern.preferred_sessions:
            session_consistency = self._share(
                sum(1 for t in session_trades if t.session in pattern.preferred_sessions),
                len(session_trades),
            )
        else:
            session_consistency = self.NEUTRAL_SCORE

        tagged_trades = [t for t in trades if t.tags]
        if tagged_trades and pattern.common_tags:
            tag_consistency = self._share(
                sum(
                    1
                    for t in tagged_trades
                    if any(tag in pattern.common_tags for tag in t.tags)
                ),
                len(tagged_trades),
            )
        else:
            tag_consistency = self.NEUTRAL_SCORE

        if pattern.trading_days:
            timing_consistency = self._share(
                sum(1 for t in trades if t.date.weekday() in pattern.trading_days),
                len(trades),
            )
        else:
            timing_consistency = self.NEUTRAL_SCORE

        if pattern.avg_position_size > 0:
            avg_size = sum(normalizer.size(t) for t in trades) / len(trades)
            size_consistency = self._tolerance_score(
                self._relative_deviation(avg_size, pattern.avg_position_size),
                settings.thresholds.consistency_tolerance,
            )
        else:
            size_consistency = self.NEUTRAL_SCORE

        return {
            "session_consistency": session_consistency,
            "tag_consistency": tag_consistency,
            "timing_consistency": timing_consistency,
            "size_consistency": size_consistency,
        }
