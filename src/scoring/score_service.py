# src/scoring/score_service.py
"""Score service orchestrating the trading score pipeline."""
import asyncio
import logging
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Sequence

from src.journal.models import Trade
from src.journal.pattern_analyzer import TagPatternAnalyzer
from src.journal.settings import TagPatternSettings
from src.scoring.calculators import (
    ConsistencyCalculator,
    DisciplineCalculator,
    PerformanceCalculator,
    RiskManagementCalculator,
)
from src.scoring.models import (
    MultiPeriodScore,
    Period,
    ScoreAnalysis,
    ScoreHistory,
    ScoreHistoryEntry,
    ScoreSummary,
)
from src.scoring.pattern_extractor import TradingPatternExtractor
from src.scoring.period_filter import (
    evaluated_period_days,
    historical_trades,
    shift_period,
    trades_for_period,
)
from src.scoring.recommendation_builder import RecommendationBuilder
from src.scoring.score_aggregator import ScoreAggregator
from src.scoring.settings import DynamicRiskSettings, ScoreSettings
from src.scoring.trend_detector import TrendDetector

if TYPE_CHECKING:
    from src.config.settings import Settings

logger = logging.getLogger(__name__)


class ScoreService:
    """Orchestrates the scoring pipeline.

    Pipeline:
    1. Select the trades of the evaluated period
    2. Build the baseline pattern from the lookback window
    3. Score consistency, risk management, performance and discipline
    4. Aggregate into the overall score
    5. Detect the trend against the previous period
    6. Analyze tag combinations over the full history
    7. Build recommendations

    Every call is a pure function of its arguments and the service holds no
    per-call state. The coroutines yield to the event loop between stages.
    Settings given to a query take precedence over the service defaults.
    """

    # Iterations between event loop yields while building history
    HISTORY_YIELD_EVERY = 3

    def __init__(
        self,
        settings: ScoreSettings | None = None,
        tag_settings: TagPatternSettings | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        tag_analyzer: TagPatternAnalyzer | None = None,
        pattern_extractor: TradingPatternExtractor | None = None,
        consistency_calculator: ConsistencyCalculator | None = None,
        risk_management_calculator: RiskManagementCalculator | None = None,
        performance_calculator: PerformanceCalculator | None = None,
        discipline_calculator: DisciplineCalculator | None = None,
        trend_detector: TrendDetector | None = None,
        aggregator: ScoreAggregator | None = None,
        recommendation_builder: RecommendationBuilder | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize the ScoreService.

        Args:
            settings: Default scoring configuration. Defaults to ScoreSettings().
            tag_settings: Tag pattern thresholds, used when no analyzer is given.
            dynamic_risk: Default dynamic risk settings for size normalization.
            tag_analyzer: Analyzer for tag combination patterns.
            pattern_extractor: Builder of the baseline pattern.
            consistency_calculator: Scorer for the consistency category.
            risk_management_calculator: Scorer for the risk management category.
            performance_calculator: Scorer for the performance category.
            discipline_calculator: Scorer for the discipline category.
            trend_detector: Detector for period-over-period trend.
            aggregator: Combiner of the category scores.
            recommendation_builder: Builder for advice strings.
            clock: Returns the current time. Defaults to the current time in
                the timezone of the trades being scored.
        """
        self._settings = settings or ScoreSettings()
        self._dynamic_risk = dynamic_risk
        self._tag_analyzer = tag_analyzer or TagPatternAnalyzer(tag_settings)
        self._pattern_extractor = pattern_extractor or TradingPatternExtractor()
        self._consistency = consistency_calculator or ConsistencyCalculator()
        self._risk_management = risk_management_calculator or RiskManagementCalculator()
        self._performance = performance_calculator or PerformanceCalculator()
        self._discipline = discipline_calculator or DisciplineCalculator()
        self._trend_detector = trend_detector or TrendDetector()
        self._aggregator = aggregator or ScoreAggregator()
        self._recommendation_builder = recommendation_builder or RecommendationBuilder()
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: "Settings", **components) -> "ScoreService":
        """Create a service from the application settings.

        Args:
            settings: Settings loaded with ``Settings.from_yaml``.
            **components: Optional component overrides, as for the constructor.

        Returns:
            ScoreService using the scoring, tag pattern and dynamic risk
            sections as its defaults.
        """
        return cls(
            settings.scoring,
            tag_settings=settings.tag_patterns,
            dynamic_risk=settings.dynamic_risk,
            **components,
        )

    @property
    def settings(self) -> ScoreSettings:
        """Default scoring configuration."""
        return self._settings

    def trades_for_period(
        self, trades: Sequence[Trade], period: Period | str, target_date: datetime
    ) -> list[Trade]:
        """Trades in the same period as ``target_date``."""
        return trades_for_period(trades, Period(period), target_date)

    def _now(self, all_trades: Sequence[Trade]) -> datetime:
        """Current time, in the trades' timezone unless a clock is injected."""
        if self._clock is not None:
            return self._clock()
        tzinfo = all_trades[0].date.tzinfo if all_trades else None
        return datetime.now(tz=tzinfo)

    async def calculate_score(
        self,
        all_trades: Sequence[Trade],
        period: Period | str = Period.WEEKLY,
        target_date: datetime | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        include_tag_patterns: bool = True,
        settings: ScoreSettings | None = None,
    ) -> ScoreAnalysis:
        """Calculate the full score analysis for one period.

        Args:
            all_trades: Full trade history (read-only snapshot).
            period: Period granularity.
            target_date: Date inside the evaluated period. Defaults to now.
            dynamic_risk: Optional dynamic risk settings for size normalization.
            include_tag_patterns: Whether to run the tag pattern analysis.
            settings: Scoring configuration for this call.

        Returns:
            ScoreAnalysis for the period.
        """
        period = Period(period)
        now = self._now(all_trades)
        target_date = target_date or now
        settings = settings or self._settings
        dynamic_risk = dynamic_risk or self._dynamic_risk

        # Step 1: evaluated period
        period_trades = trades_for_period(all_trades, period, target_date)
        await asyncio.sleep(0)

        # Step 2: baseline from the lookback window
        lookback = settings.thresholds.lookback_period
        pattern = self._pattern_extractor.extract(
            target_date=target_date,
            trades=historical_trades(all_trades, target_date, lookback),
            lookback_days=lookback,
            selected_tags=settings.selected_tags,
            dynamic_risk=dynamic_risk,
            all_trades=all_trades,
        )
        await asyncio.sleep(0)

        # Step 3: category scores
        calculator_args = dict(
            trades=period_trades,
            pattern=pattern,
            settings=settings,
            all_trades=all_trades,
            dynamic_risk=dynamic_risk,
            period_days=evaluated_period_days(period, target_date, now),
        )
        consistency = self._consistency.calculate(**calculator_args)
        risk_management = self._risk_management.calculate(**calculator_args)
        performance = self._performance.calculate(**calculator_args)
        discipline = self._discipline.calculate(**calculator_args)

        # Step 4: overall score
        metrics, breakdown = self._aggregator.aggregate(
            consistency=consistency,
            risk_management=risk_management,
            performance=performance,
            discipline=discipline,
            weights=settings.weights,
        )

        # Step 5: trend
        trend = self._trend_detector.detect(all_trades, period, target_date, now=now)

        # Step 6: tag patterns (skipped below the analyzer's minimum)
        tag_pattern_analysis = None
        if include_tag_patterns:
            await asyncio.sleep(0)
            tag_pattern_analysis = self._tag_analyzer.analyze(
                all_trades,
                reference_date=target_date,
                excluded_tags=settings.excluded_tags_from_patterns,
            )

        # Step 7: advice
        feedback = self._recommendation_builder.build(breakdown, tag_pattern_analysis)

        logger.info(
            f"Scored {period.value} period of {target_date.date()}: "
            f"{len(period_trades)} trades, overall {metrics.overall:.1f}, trend {trend.value}"
        )

        return ScoreAnalysis(
            period=period,
            target_date=target_date,
            trade_count=len(period_trades),
            current_score=metrics,
            breakdown=breakdown,
            pattern=pattern,
            recommendations=feedback.recommendations,
            strengths=feedback.strengths,
            weaknesses=feedback.weaknesses,
            trend=trend,
            recommended_score=self._recommendation_builder.recommended_score(settings),
            tag_pattern_analysis=tag_pattern_analysis,
        )

    async def get_score_history(
        self,
        all_trades: Sequence[Trade],
        period: Period | str,
        periods_back: int = 12,
        reference_date: datetime | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        settings: ScoreSettings | None = None,
    ) -> ScoreHistory:
        """Score each of the last ``periods_back`` periods.

        Periods without enough trades are left out: monthly and yearly
        periods need a single trade, shorter ones ``min_trades_for_score``.

        Args:
            all_trades: Full trade history.
            period: Period granularity.
            periods_back: Number of periods to walk back, current one included.
            reference_date: Date inside the most recent period. Defaults to now.
            dynamic_risk: Optional dynamic risk settings.
            settings: Scoring configuration for this call.

        Returns:
            ScoreHistory in chronological order.
        """
        period = Period(period)
        reference_date = reference_date or self._now(all_trades)
        settings = settings or self._settings

        if period in (Period.MONTHLY, Period.YEARLY):
            min_trades = 1
        else:
            min_trades = settings.thresholds.min_trades_for_score

        entries: list[ScoreHistoryEntry] = []
        for i in range(periods_back):
            target_date = shift_period(reference_date, period, i)
            period_trades = trades_for_period(all_trades, period, target_date)

            if len(period_trades) >= min_trades:
                analysis = await self.calculate_score(
                    all_trades,
                    period,
                    target_date,
                    dynamic_risk=dynamic_risk,
                    include_tag_patterns=False,
                    settings=settings,
                )
                entries.append(
                    ScoreHistoryEntry(
                        date=target_date,
                        period=period,
                        metrics=analysis.current_score,
                        breakdown=analysis.breakdown,
                        trade_count=len(period_trades),
                    )
                )

            if i % self.HISTORY_YIELD_EVERY == 0:
                await asyncio.sleep(0)

        entries.reverse()
        logger.info(f"Built {period.value} score history with {len(entries)} periods")
        return ScoreHistory(period=period, entries=entries)

    async def calculate_multi_period_score(
        self,
        all_trades: Sequence[Trade],
        target_date: datetime | None = None,
        dynamic_risk: DynamicRiskSettings | None = None,
        settings: ScoreSettings | None = None,
    ) -> MultiPeriodScore:
        """Score the daily, weekly, monthly and yearly periods concurrently.

        Each analysis is independent and equal to the corresponding
        single-period call.
        """
        target_date = target_date or self._now(all_trades)

        daily, weekly, monthly, yearly = await asyncio.gather(
            *(
                self.calculate_score(
                    all_trades, period, target_date, dynamic_risk, settings=settings
                )
                for period in (Period.DAILY, Period.WEEKLY, Period.MONTHLY, Period.YEARLY)
            )
        )

        logger.debug(
            "Multi-period scores: "
            + ", ".join(
                f"{a.period.value}={a.current_score.overall:.1f} ({a.trade_count} trades)"
                for a in (daily, weekly, monthly, yearly)
            )
        )
        return MultiPeriodScore(daily=daily, weekly=weekly, monthly=monthly, yearly=yearly)

    async def get_score_summary(
        self,
        all_trades: Sequence[Trade],
        dynamic_risk: DynamicRiskSettings | None = None,
        settings: ScoreSettings | None = None,
    ) -> ScoreSummary:
        """Summarize the current week for a dashboard.

        Returns:
            ScoreSummary with the weakest category as key metric and the
            first recommendation.
        """
        analysis = await self.calculate_score(
            all_trades,
            Period.WEEKLY,
            self._now(all_trades),
            dynamic_risk,
            settings=settings,
        )

        components = analysis.current_score.components()
        weakest = min(components, key=lambda name: components[name])

        return ScoreSummary(
            current_weekly=analysis.current_score,
            trend=analysis.trend,
            key_metric=f"{weakest}: {components[weakest]:.0f}%",
            recommendation=(
                analysis.recommendations[0]
                if analysis.recommendations
                else "Keep following your trading plan"
            ),
        )
