# tests/scoring/test_risk_management_calculator.py
"""Tests for RiskManagementCalculator."""
from datetime import datetime, timedelta

import pytest

from src.journal.models import Trade, TradeType
from src.scoring.calculators import RiskManagementCalculator
from src.scoring.models import TradingPattern
from src.scoring.settings import DynamicRiskSettings, ScoreSettings

START = datetime(2026, 3, 2, 10, 0)


def make_trade(index: int, amount: float, risk_to_reward: float | None = 2.0) -> Trade:
    if amount > 0:
        trade_type = TradeType.WIN
    elif amount < 0:
        trade_type = TradeType.LOSS
    else:
        trade_type = TradeType.BREAKEVEN
    return Trade(
        date=START + timedelta(hours=index),
        amount=amount,
        trade_type=trade_type,
        session="London",
        tags=("Breakout",),
        risk_to_reward=risk_to_reward,
    )


class TestRiskManagementCalculator:
    """Tests for RiskManagementCalculator."""

    def test_clean_period(self):
        trades = [make_trade(i, 100.0) for i in range(4)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings()
        )

        assert result.factors == {
            "risk_reward_ratio": 100.0,
            "position_sizing": 100.0,
            "max_drawdown_adherence": 100.0,
            "stop_loss_usage": 100.0,
        }
        assert result.score == pytest.approx(100.0)

    def test_risk_reward_and_stop_usage(self):
        trades = [
            make_trade(0, 100.0, 1.0),
            make_trade(1, 100.0, 2.0),
            make_trade(2, 100.0, 3.0),
            make_trade(3, 100.0, None),
            make_trade(4, 0.0, None),
        ]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings()
        )

        assert result.factors["risk_reward_ratio"] == pytest.approx(200 / 3)
        # Breakeven trades are left out of stop usage
        assert result.factors["stop_loss_usage"] == pytest.approx(75.0)

    def test_drawdown_beyond_target(self):
        # Peak 1000, trough 940: 6% drawdown, 1 point beyond the 5% target
        trades = [make_trade(0, 1000.0), make_trade(1, -60.0), make_trade(2, 10.0)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings()
        )

        assert result.factors["max_drawdown_adherence"] == pytest.approx(90.0)

    def test_uneven_sizes_penalized(self):
        # Sizes 50 and 150: mean 100, std 50 -> CV 0.5
        trades = [make_trade(0, 50.0), make_trade(1, 150.0), make_trade(2, 50.0), make_trade(3, 150.0)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings()
        )

        assert result.factors["position_sizing"] == pytest.approx(50.0)

    def test_position_sizing_against_expected_risk(self):
        dynamic_risk = DynamicRiskSettings(account_balance=10000, risk_per_trade=1.0)
        trades = [make_trade(0, 300.0), make_trade(1, -100.0), make_trade(2, -130.0)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings(), dynamic_risk=dynamic_risk
        )

        # Loss deviations from 100: 0% and 30%, mean 15% is within tolerance
        assert result.factors["position_sizing"] == pytest.approx(100.0)

    def test_oversized_losses_penalized(self):
        dynamic_risk = DynamicRiskSettings(account_balance=10000, risk_per_trade=1.0)
        trades = [make_trade(0, 300.0), make_trade(1, -100.0), make_trade(2, -150.0)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings(), dynamic_risk=dynamic_risk
        )

        assert result.factors["position_sizing"] == pytest.approx(90.0)

    def test_no_risk_reward_recorded_is_neutral(self):
        trades = [make_trade(i, 100.0, None) for i in range(3)]

        result = RiskManagementCalculator().calculate(
            trades, TradingPattern.empty(), ScoreSettings()
        )

        assert result.factors["risk_reward_ratio"] == 50.0
        assert result.factors["stop_loss_usage"] == 0.0
