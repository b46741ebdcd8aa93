# tests/journal/test_models.py
"""Tests for journal data models."""
from datetime import datetime

import pytest

from src.journal.models import (
    TagCombination,
    TagPatternAnalysis,
    TagTrend,
    Trade,
    TradeType,
)


class TestTrade:
    """Tests for Trade."""

    def test_outcome_properties(self):
        """is_win and is_loss should follow the trade type."""
        win = Trade(date=datetime(2026, 3, 2, 10), amount=120.0, trade_type=TradeType.WIN)
        loss = Trade(date=datetime(2026, 3, 2, 11), amount=-80.0, trade_type=TradeType.LOSS)
        breakeven = Trade(
            date=datetime(2026, 3, 2, 12), amount=0.0, trade_type=TradeType.BREAKEVEN
        )

        assert win.is_win and not win.is_loss
        assert loss.is_loss and not loss.is_win
        assert not breakeven.is_win and not breakeven.is_loss

    def test_has_tags_requires_every_tag(self):
        trade = Trade(
            date=datetime(2026, 3, 2, 10),
            amount=50.0,
            trade_type=TradeType.WIN,
            tags=("Strategy:Breakout", "Session:London"),
        )

        assert trade.has_tags(["Strategy:Breakout"])
        assert trade.has_tags(["Session:London", "Strategy:Breakout"])
        assert not trade.has_tags(["Strategy:Breakout", "Setup:Flag"])
        assert trade.has_tags([])

    def test_trade_is_immutable(self):
        trade = Trade(date=datetime(2026, 3, 2, 10), amount=50.0, trade_type=TradeType.WIN)

        with pytest.raises(AttributeError):
            trade.amount = 100.0

    def test_from_dict_snake_case(self):
        trade = Trade.from_dict(
            {
                "id": "t-1",
                "trade_date": "2026-03-02T09:30:00",
                "amount": "150.5",
                "trade_type": "win",
                "session": "London",
                "tags": ["Strategy:Breakout"],
                "risk_to_reward": 2.5,
                "partials_taken": True,
            }
        )

        assert trade.trade_id == "t-1"
        assert trade.date == datetime(2026, 3, 2, 9, 30)
        assert trade.amount == 150.5
        assert trade.trade_type == TradeType.WIN
        assert trade.session == "London"
        assert trade.tags == ("Strategy:Breakout",)
        assert trade.risk_to_reward == 2.5
        assert trade.partials_taken is True

    def test_from_dict_camel_case(self):
        trade = Trade.from_dict(
            {
                "date": datetime(2026, 3, 2, 9, 30),
                "amount": -40,
                "type": "loss",
                "riskToReward": "1.5",
                "partialsTaken": False,
            }
        )

        assert trade.trade_type == TradeType.LOSS
        assert trade.risk_to_reward == 1.5
        assert trade.session is None
        assert trade.tags == ()

    def test_from_dict_missing_type_raises(self):
        with pytest.raises(KeyError):
            Trade.from_dict({"date": "2026-03-02T09:30:00", "amount": 10})

    def test_from_dict_invalid_type_raises(self):
        with pytest.raises(ValueError):
            Trade.from_dict(
                {"date": "2026-03-02T09:30:00", "amount": 10, "trade_type": "scratch"}
            )


class TestTagCombination:
    """Tests for TagCombination."""

    def test_win_rate_change_and_label(self):
        combo = TagCombination(
            tags=["London", "Strategy:Breakout"],
            win_rate=60.0,
            total_trades=10,
            wins=6,
            losses=4,
            total_pnl=200.0,
            avg_pnl=20.0,
            trend=TagTrend.DECLINING,
            recent_win_rate=40.0,
            historical_win_rate=70.0,
        )

        assert combo.win_rate_change == pytest.approx(-30.0)
        assert combo.label == "London + Strategy:Breakout"


class TestTagPatternAnalysis:
    def test_defaults_are_empty(self):
        analysis = TagPatternAnalysis()

        assert analysis.insights == []
        assert analysis.top_combinations == []
        assert analysis.declining_combinations == []
        assert analysis.market_condition_alerts == []
