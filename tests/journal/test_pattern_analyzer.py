# tests/journal/test_pattern_analyzer.py
"""Tests for TagPatternAnalyzer."""
from datetime import datetime, timedelta, timezone

import pytest

from src.journal.models import InsightSeverity, InsightType, TagTrend, Trade, TradeType
from src.journal.pattern_analyzer import TagPatternAnalyzer
from src.journal.settings import TagPatternSettings

REFERENCE = datetime(2026, 6, 30, 18, 0)


def make_trade(
    days_ago: float,
    win: bool,
    tags: tuple[str, ...] = ("Strategy:Breakout",),
    amount: float = 100.0,
) -> Trade:
    """Create a trade ``days_ago`` days before the reference date."""
    return Trade(
        date=REFERENCE - timedelta(days=days_ago),
        amount=amount if win else -amount,
        trade_type=TradeType.WIN if win else TradeType.LOSS,
        tags=tags,
    )


def make_declining_trades(tags: tuple[str, ...]) -> list[Trade]:
    """Five historical wins followed by one win and four recent losses."""
    historical = [make_trade(40 + i * 5, True, tags) for i in range(5)]
    recent = [make_trade(1 + i, i == 0, tags) for i in range(5)]
    return historical + recent


class TestTagPatternAnalyzer:
    """Tests for TagPatternAnalyzer."""

    def test_returns_none_below_minimum_trades(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(i + 1, True) for i in range(9)]

        assert analyzer.analyze(trades, reference_date=REFERENCE) is None

    def test_present_at_minimum_trades(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(i + 1, i % 2 == 0) for i in range(10)]

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        assert result is not None
        assert result.top_combinations[0].tags == ["Strategy:Breakout"]
        assert result.top_combinations[0].total_trades == 10

    def test_top_combination_win_rate(self):
        """20 Breakout trades with 15 wins should report a 75% combination."""
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(i + 1, i >= 5) for i in range(20)]

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        combo = result.top_combinations[0]
        assert combo.tags == ["Strategy:Breakout"]
        assert combo.win_rate == pytest.approx(75.0)
        assert combo.wins == 15
        assert combo.losses == 5
        assert combo.total_pnl == pytest.approx(1000.0)
        assert combo.avg_pnl == pytest.approx(50.0)

    def test_top_combinations_sorted_and_limited(self):
        analyzer = TagPatternAnalyzer()
        trades = []
        # Six tags with decreasing win rates, 4 trades each
        for index, tag in enumerate(["A", "B", "C", "D", "E", "F"]):
            wins = 4 - min(index, 4)
            trades.extend(make_trade(j + 1, j < wins, (tag,)) for j in range(4))

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        assert len(result.top_combinations) == 5
        rates = [c.win_rate for c in result.top_combinations]
        assert rates == sorted(rates, reverse=True)
        assert result.top_combinations[0].tags == ["A"]

    def test_combinations_below_minimum_are_dropped(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(i + 1, True) for i in range(10)]
        trades.append(make_trade(2, True, ("Strategy:Breakout", "Rare")))

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        labels = [c.label for c in result.top_combinations]
        assert "Rare" not in labels
        assert "Rare + Strategy:Breakout" not in labels

    def test_declining_combination_and_insights(self):
        analyzer = TagPatternAnalyzer()
        trades = make_declining_trades(("London", "Setup:Flag"))

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        assert {tuple(c.tags) for c in result.declining_combinations} == {
            ("London",),
            ("Setup:Flag",),
            ("London", "Setup:Flag"),
        }
        combo = result.declining_combinations[0]
        assert combo.trend == TagTrend.DECLINING
        assert combo.historical_win_rate == pytest.approx(100.0)
        assert combo.recent_win_rate == pytest.approx(20.0)

        declining = [i for i in result.insights if i.insight_type == InsightType.DECLINING_PATTERN]
        assert len(declining) == 3
        assert all(i.severity == InsightSeverity.HIGH for i in declining)
        assert all(i.confidence == pytest.approx(70.0) for i in declining)

    def test_market_condition_alerts_for_session_tags(self):
        analyzer = TagPatternAnalyzer()
        trades = make_declining_trades(("London", "Setup:Flag"))

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        alerts = result.market_condition_alerts
        assert len(alerts) == 2
        assert all(a.insight_type == InsightType.MARKET_CONDITION for a in alerts)
        assert all(a.title == "London Session Performance Decline" for a in alerts)
        assert all(a.confidence == 75.0 for a in alerts)
        assert all("London" in a.tag_combination for a in alerts)
        # Alerts are included in the insight list after the other insights
        assert result.insights[-2:] == alerts

    def test_session_tag_in_group_form(self):
        analyzer = TagPatternAnalyzer()
        trades = make_declining_trades(("Session:NY AM",))

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        assert len(result.market_condition_alerts) == 1
        assert result.market_condition_alerts[0].title == "NY AM Session Performance Decline"

    def test_high_performance_insight(self):
        analyzer = TagPatternAnalyzer()
        # 9 wins out of 10 -> 90%
        trades = [make_trade(i + 1, i != 0) for i in range(10)]

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        insight = result.insights[0]
        assert insight.insight_type == InsightType.HIGH_PERFORMANCE
        assert insight.title == "High-Performance Pattern #1"
        assert insight.win_rate == pytest.approx(90.0)
        assert insight.confidence == pytest.approx(70.0)
        assert insight.severity == InsightSeverity.HIGH

    def test_trend_needs_trades_in_both_windows(self):
        analyzer = TagPatternAnalyzer()
        # Everything in the recent window: no historical slice
        trades = [make_trade(i + 1, i % 3 != 0) for i in range(12)]

        result = analyzer.analyze(trades, reference_date=REFERENCE)

        assert all(c.trend == TagTrend.STABLE for c in result.top_combinations)
        assert result.declining_combinations == []

    def test_improving_trend(self):
        analyzer = TagPatternAnalyzer()
        historical = [make_trade(40 + i * 5, i == 0) for i in range(5)]
        recent = [make_trade(1 + i, True) for i in range(5)]

        combo = analyzer.combination_stats(
            historical + recent, ["Strategy:Breakout"], reference_date=REFERENCE
        )

        assert combo.trend == TagTrend.IMPROVING
        assert combo.win_rate_change == pytest.approx(80.0)

    def test_trades_after_reference_are_not_recent(self):
        analyzer = TagPatternAnalyzer()
        future = [make_trade(-5, False) for _ in range(3)]
        historical = [make_trade(40 + i, True) for i in range(3)]
        recent = [make_trade(1 + i, True) for i in range(3)]

        combo = analyzer.combination_stats(
            future + historical + recent, ["Strategy:Breakout"], reference_date=REFERENCE
        )

        assert combo.recent_win_rate == pytest.approx(100.0)
        assert combo.trend == TagTrend.STABLE


class TestGenerateCombinations:
    """Tests for combination mining."""

    def test_singles_and_pairs(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(1, True, ("B", "A", "C"))]

        combos = analyzer.generate_combinations(trades)

        assert ["A"] in combos
        assert ["A", "B"] in combos
        assert ["B", "C"] in combos
        assert ["A", "B", "C"] not in combos

    def test_triples_above_threshold(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(1, True, ("A", "B", "C")) for _ in range(51)]

        assert ["A", "B", "C"] in analyzer.generate_combinations(trades)
        assert ["A", "B", "C"] not in analyzer.generate_combinations(trades[:50])

    def test_excluded_and_system_tags(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(1, True, ("A", "Partials:Yes", "Mistake:FOMO"))]

        combos = analyzer.generate_combinations(trades, excluded_tags=["Mistake:FOMO"])

        assert combos == [["A"]]

    def test_tags_within_combination_are_sorted(self):
        analyzer = TagPatternAnalyzer()
        trades = [make_trade(1, True, ("Zeta", "Alpha"))]

        assert ["Alpha", "Zeta"] in analyzer.generate_combinations(trades)


class TestCustomSettings:
    def test_custom_minimum(self):
        analyzer = TagPatternAnalyzer(TagPatternSettings(min_total_trades=3))
        trades = [make_trade(i + 1, True) for i in range(3)]

        assert analyzer.analyze(trades, reference_date=REFERENCE) is not None


class TestDefaultReferenceDate:
    def test_aware_trades_without_reference_date(self):
        now = datetime.now(timezone.utc)
        trades = [
            Trade(
                date=now - timedelta(days=i + 1),
                amount=100.0,
                trade_type=TradeType.WIN,
                tags=("Strategy:Breakout",),
            )
            for i in range(10)
        ]
        analyzer = TagPatternAnalyzer()

        analysis = analyzer.analyze(trades)
        stats = analyzer.combination_stats(trades, ["Strategy:Breakout"])

        assert analysis.top_combinations[0].total_trades == 10
        assert stats.win_rate == pytest.approx(100.0)
