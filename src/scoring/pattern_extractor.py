# src/scoring/pattern_extractor.py
"""Extraction of a trader's baseline pattern from historical trades."""
from collections import Counter
from datetime import datetime
from typing import Sequence

from src.journal.metrics_calculator import MetricsCalculator, safe_ratio
from src.journal.models import Trade
from src.scoring.dynamic_risk import PositionSizeNormalizer
from src.scoring.models import TradingPattern
from src.scoring.period_filter import historical_trades
from src.scoring.settings import DynamicRiskSettings


class TradingPatternExtractor:
    """Derives what normal trading looks like over a lookback window.

    Attributes:
        max_preferred_sessions: Number of sessions kept as preferred.
        max_common_tags: Number of tags kept as common.
    """

    def __init__(self, max_preferred_sessions: int = 2, max_common_tags: int = 5):
        self.max_preferred_sessions = max_preferred_sessions
        self.max_common_tags = max_common_tags

    def extract(
        self,
        target_date: datetime,
        trades: Sequence[Trade],
        lookback_days: int = 30,
        selected_tags: list[str] | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        all_trades: Sequence[Trade] | None = None,
    ) -> TradingPattern:
        """Build the baseline pattern.

        Args:
            target_date: End of the lookback window (inclusive).
            trades: Historical trades; anything outside the window is ignored.
            lookback_days: Length of the window in days.
            selected_tags: When non-empty, only these tags can become common tags.
            dynamic_risk: Optional risk settings used to normalize sizes.
            all_trades: Full history for replaying dynamic risk. Defaults to
                ``trades``.

        Returns:
            TradingPattern; all-zero when the window holds no trades.
        """
        recent = sorted(
            historical_trades(trades, target_date, lookback_days), key=lambda t: t.date
        )
        if not recent:
            return TradingPattern.empty()

        normalizer = PositionSizeNormalizer(all_trades or trades, dynamic_risk)
        metrics = MetricsCalculator(amount_of=normalizer.signed)

        avg_trades_per_day = safe_ratio(len(recent), lookback_days)

        return TradingPattern(
            preferred_sessions=self._preferred_sessions(recent),
            common_tags=self._common_tags(recent, selected_tags),
            avg_trades_per_day=avg_trades_per_day,
            avg_trades_per_week=avg_trades_per_day * 7,
            avg_position_size=sum(normalizer.size(t) for t in recent) / len(recent),
            avg_risk_reward=self._avg_risk_reward(recent),
            win_rate=metrics.win_rate(recent),
            profit_factor=metrics.profit_factor(recent),
            max_drawdown=metrics.max_drawdown_percent(recent, peak_floor=1.0),
            trading_days=sorted({t.date.weekday() for t in recent}),
            pnl_volatility=metrics.pnl_std_dev(recent),
            trade_count=len(recent),
        )

    def _preferred_sessions(self, trades: list[Trade]) -> list[str]:
        counts = Counter(t.session for t in trades if t.session)
        return [session for session, _ in counts.most_common(self.max_preferred_sessions)]

    def _common_tags(
        self, trades: list[Trade], selected_tags: list[str] | None
    ) -> list[str]:
        """Most frequent tags, restricted to ``selected_tags`` when given."""
        counts: Counter[str] = Counter()
        for trade in trades:
            for tag in trade.tags:
                if not selected_tags or tag in selected_tags:
                    counts[tag] += 1
        return [tag for tag, _ in counts.most_common(self.max_common_tags)]

    def _avg_risk_reward(self, trades: list[Trade]) -> float:
        ratios = [t.risk_to_reward for t in trades if t.risk_to_reward and t.risk_to_reward > 0]
        if not ratios:
            return 0.0
        return sum(ratios) / len(ratios)
