# src/journal/pattern_analyzer.py
"""Analyzer for identifying tag combination patterns."""
import logging
from collections import defaultdict
from datetime import datetime, timedelta
from itertools import combinations
from typing import Sequence

from src.journal.metrics_calculator import safe_ratio
from src.journal.models import (
    InsightSeverity,
    InsightType,
    TagCombination,
    TagPatternAnalysis,
    TagPatternInsight,
    TagTrend,
    Trade,
)
from src.journal.settings import TagPatternSettings

logger = logging.getLogger(__name__)


class TagPatternAnalyzer:
    """Finds tag combinations that correlate with winning or losing.

    Every combination of one, two or three tags observed together on a
    trade is evaluated. Its win rate over the last ``recent_period_days`` is
    compared with the win rate over the window before that (up to
    ``historical_period_days``) to detect drift.
    """

    def __init__(self, settings: TagPatternSettings | None = None) -> None:
        """Initialize the analyzer.

        Args:
            settings: Thresholds and windows for the analysis.
        """
        self._settings = settings or TagPatternSettings()

    def analyze(
        self,
        trades: Sequence[Trade],
        reference_date: datetime | None = None,
        excluded_tags: list[str] | None = None,
    ) -> TagPatternAnalysis | None:
        """Analyze tag combinations across the trade history.

        Args:
            trades: Full trade history.
            reference_date: End of the recent window. Defaults to now.
            excluded_tags: Tags left out of combination mining.

        Returns:
            TagPatternAnalysis, or None when there are too few trades.
        """
        if len(trades) < self._settings.min_total_trades:
            logger.debug(
                f"Skipping tag pattern analysis: {len(trades)} trades, "
                f"{self._settings.min_total_trades} required"
            )
            return None

        reference_date = reference_date or self._now(trades)
        recent_trades, historical_trades = self._split_windows(trades, reference_date)

        analyzed = [
            self._analyze_combination(combo, recent_trades, historical_trades, trades)
            for combo in self.generate_combinations(trades, excluded_tags)
        ]
        analyzed = [
            c for c in analyzed if c.total_trades >= self._settings.min_trades_for_combination
        ]

        top_combinations = sorted(
            analyzed, key=lambda c: (c.win_rate, c.total_trades), reverse=True
        )[: self._settings.top_combinations_limit]

        declining_combinations = sorted(
            (
                c
                for c in analyzed
                if c.trend == TagTrend.DECLINING
                and c.total_trades >= self._settings.min_trades_for_insight
            ),
            key=lambda c: c.win_rate_change,
        )[: self._settings.declining_combinations_limit]

        insights = self._generate_insights(top_combinations, declining_combinations)
        alerts = self._generate_market_condition_alerts(analyzed)

        logger.debug(
            f"Analyzed {len(analyzed)} tag combinations: "
            f"{len(insights)} insights, {len(alerts)} market alerts"
        )

        return TagPatternAnalysis(
            insights=insights + alerts,
            top_combinations=top_combinations,
            declining_combinations=declining_combinations,
            market_condition_alerts=alerts,
        )

    def combination_stats(
        self,
        trades: Sequence[Trade],
        tags: list[str],
        reference_date: datetime | None = None,
    ) -> TagCombination:
        """Statistics for one specific tag combination.

        Args:
            trades: Full trade history.
            tags: Tags that must all be present on a trade.
            reference_date: End of the recent window. Defaults to now.

        Returns:
            TagCombination for the given tags.
        """
        recent_trades, historical_trades = self._split_windows(
            trades, reference_date or self._now(trades)
        )
        return self._analyze_combination(tags, recent_trades, historical_trades, trades)

    @staticmethod
    def _now(trades: Sequence[Trade]) -> datetime:
        """Current time in the timezone of the trades."""
        return datetime.now(tz=trades[0].date.tzinfo if trades else None)

    def generate_combinations(
        self, trades: Sequence[Trade], excluded_tags: list[str] | None = None
    ) -> list[list[str]]:
        """Tag sets observed together on at least one trade.

        Single tags and pairs are always produced; triples only when there
        are more than ``min_trades_for_triples`` trades. System tags and
        excluded tags are skipped. Tags within a combination are sorted.

        Args:
            trades: Trades to mine.
            excluded_tags: Tags to ignore.

        Returns:
            List of tag combinations in first-seen order.
        """
        excluded = set(excluded_tags or [])
        by_size: dict[int, dict[tuple[str, ...], None]] = defaultdict(dict)

        for trade in trades:
            tags = sorted(
                {
                    tag
                    for tag in trade.tags
                    if tag not in excluded and not self._is_system_tag(tag)
                }
            )
            for size in (1, 2, 3):
                for combo in combinations(tags, size):
                    by_size[size][combo] = None

        sizes = [1, 2]
        if len(trades) > self._settings.min_trades_for_triples:
            sizes.append(3)

        return [list(combo) for size in sizes for combo in by_size[size]]

    def _is_system_tag(self, tag: str) -> bool:
        return any(tag.startswith(prefix) for prefix in self._settings.system_tag_prefixes)

    def _split_windows(
        self, trades: Sequence[Trade], reference_date: datetime
    ) -> tuple[list[Trade], list[Trade]]:
        """Split trades into the recent window and the historical window before it."""
        recent_cutoff = reference_date - timedelta(days=self._settings.recent_period_days)
        historical_cutoff = reference_date - timedelta(
            days=self._settings.historical_period_days
        )

        recent = [t for t in trades if recent_cutoff < t.date <= reference_date]
        historical = [t for t in trades if historical_cutoff < t.date <= recent_cutoff]
        return recent, historical

    @staticmethod
    def _win_stats(trades: list[Trade]) -> tuple[int, int, float]:
        """Wins, losses and win rate (percent) with breakevens excluded."""
        wins = sum(1 for t in trades if t.is_win)
        losses = sum(1 for t in trades if t.is_loss)
        return wins, losses, safe_ratio(wins, wins + losses) * 100

    def _analyze_combination(
        self,
        tags: list[str],
        recent_trades: list[Trade],
        historical_trades: list[Trade],
        all_trades: Sequence[Trade],
    ) -> TagCombination:
        matching = [t for t in all_trades if t.has_tags(tags)]
        recent_matching = [t for t in recent_trades if t.has_tags(tags)]
        historical_matching = [t for t in historical_trades if t.has_tags(tags)]

        wins, losses, win_rate = self._win_stats(matching)
        recent_wins, recent_losses, recent_win_rate = self._win_stats(recent_matching)
        hist_wins, hist_losses, historical_win_rate = self._win_stats(historical_matching)

        total_pnl = sum(t.amount for t in matching)

        trend = TagTrend.STABLE
        min_slice = self._settings.min_slice_trades
        if recent_wins + recent_losses >= min_slice and hist_wins + hist_losses >= min_slice:
            change = recent_win_rate - historical_win_rate
            if change > self._settings.trend_threshold:
                trend = TagTrend.IMPROVING
            elif change < -self._settings.trend_threshold:
                trend = TagTrend.DECLINING

        return TagCombination(
            tags=list(tags),
            win_rate=win_rate,
            total_trades=len(matching),
            wins=wins,
            losses=losses,
            total_pnl=total_pnl,
            avg_pnl=safe_ratio(total_pnl, len(matching)),
            trend=trend,
            recent_win_rate=recent_win_rate,
            historical_win_rate=historical_win_rate,
        )

    def _generate_insights(
        self,
        top_combinations: list[TagCombination],
        declining_combinations: list[TagCombination],
    ) -> list[TagPatternInsight]:
        insights: list[TagPatternInsight] = []

        for index, combo in enumerate(top_combinations[:3]):
            if (
                combo.win_rate > self._settings.high_performance_win_rate
                and combo.total_trades >= self._settings.min_trades_for_insight
            ):
                insights.append(
                    TagPatternInsight(
                        insight_type=InsightType.HIGH_PERFORMANCE,
                        title=f"High-Performance Pattern #{index + 1}",
                        description=(
                            f'The combination "{combo.label}" shows exceptional performance '
                            f"with {combo.win_rate:.1f}% win rate across "
                            f"{combo.total_trades} trades."
                        ),
                        tag_combination=combo.tags,
                        win_rate=combo.win_rate,
                        confidence=min(95.0, 50.0 + combo.total_trades * 2),
                        recommendation=(
                            "Consider focusing more on trades that match this pattern. "
                            f'Your success rate with "{combo.label}" is significantly '
                            "above average."
                        ),
                        severity=(
                            InsightSeverity.HIGH if combo.win_rate > 80 else InsightSeverity.MEDIUM
                        ),
                    )
                )

        for combo in declining_combinations:
            decline = -combo.win_rate_change
            if decline <= self._settings.decline_alert_threshold:
                continue
            insights.append(
                TagPatternInsight(
                    insight_type=InsightType.DECLINING_PATTERN,
                    title="Declining Pattern Alert",
                    description=(
                        f'The combination "{combo.label}" has declined from '
                        f"{combo.historical_win_rate:.1f}% to "
                        f"{combo.recent_win_rate:.1f}% win rate recently."
                    ),
                    tag_combination=combo.tags,
                    win_rate=combo.recent_win_rate,
                    confidence=min(90.0, 40.0 + combo.total_trades * 3),
                    recommendation=(
                        f'Review your approach with "{combo.label}" trades. Market '
                        "conditions may have changed, requiring strategy adjustment."
                    ),
                    severity=InsightSeverity.HIGH if decline > 25 else InsightSeverity.MEDIUM,
                )
            )

        return insights

    def _session_tag(self, combo: TagCombination) -> str | None:
        """First tag in the combination naming a trading session."""
        for tag in combo.tags:
            name = tag.split(":", 1)[-1].strip()
            if tag in self._settings.session_tags or name in self._settings.session_tags:
                return tag
        return None

    def _generate_market_condition_alerts(
        self, analyzed: list[TagCombination]
    ) -> list[TagPatternInsight]:
        alerts: list[TagPatternInsight] = []

        for combo in analyzed:
            if (
                combo.trend != TagTrend.DECLINING
                or combo.total_trades < self._settings.min_trades_for_insight
            ):
                continue
            session_tag = self._session_tag(combo)
            if session_tag is None:
                continue

            session = session_tag.split(":", 1)[-1].strip()
            others = [t for t in combo.tags if t != session_tag]
            context = f' with "{" + ".join(others)}"' if others else ""

            alerts.append(
                TagPatternInsight(
                    insight_type=InsightType.MARKET_CONDITION,
                    title=f"{session} Session Performance Decline",
                    description=(
                        f"Your performance during {session} session{context} "
                        "has declined recently."
                    ),
                    tag_combination=combo.tags,
                    win_rate=combo.recent_win_rate,
                    confidence=75.0,
                    recommendation=(
                        f"Consider adjusting your strategy for {session} session or "
                        "reducing position sizes during this time until performance improves."
                    ),
                    severity=InsightSeverity.MEDIUM,
                )
            )

        return alerts[: self._settings.max_market_condition_alerts]
