# tests/scoring/test_settings.py
"""Tests for scoring settings."""
import pytest
from pydantic import ValidationError

from src.scoring.settings import (
    DynamicRiskSettings,
    ScoreSettings,
    ScoreWeights,
)


class TestScoreSettings:
    """Tests for ScoreSettings."""

    def test_defaults(self):
        settings = ScoreSettings()

        assert settings.weights.consistency == 40.0
        assert settings.weights.risk_management == 25.0
        assert settings.weights.performance == 20.0
        assert settings.weights.discipline == 15.0
        assert settings.weights.total == 100.0
        assert settings.thresholds.min_trades_for_score == 3
        assert settings.thresholds.lookback_period == 30
        assert settings.thresholds.consistency_tolerance == 15.0
        assert settings.targets.win_rate == 60.0
        assert settings.targets.profit_factor == 1.5
        assert settings.targets.max_drawdown == 5.0
        assert settings.targets.avg_risk_reward == 2.0
        assert settings.selected_tags == []
        assert settings.excluded_tags_from_patterns == []

    def test_nested_from_dict(self):
        settings = ScoreSettings(
            weights={"consistency": 25, "risk_management": 25, "performance": 25, "discipline": 25},
            thresholds={"lookback_period": 60},
        )

        assert settings.weights.consistency == 25
        assert settings.thresholds.lookback_period == 60
        assert settings.thresholds.min_trades_for_score == 3

    def test_weights_not_summing_to_100_are_accepted(self):
        weights = ScoreWeights(consistency=50, risk_management=50, performance=50, discipline=50)

        assert weights.total == 200

    def test_negative_weight_rejected(self):
        with pytest.raises(ValidationError):
            ScoreWeights(consistency=-1)

    def test_lookback_must_be_positive(self):
        with pytest.raises(ValidationError):
            ScoreSettings(thresholds={"lookback_period": 0})


class TestDynamicRiskSettings:
    """Tests for DynamicRiskSettings."""

    def test_defaults_disable_escalation(self):
        settings = DynamicRiskSettings()

        assert settings.risk_per_trade is None
        assert settings.escalation_configured is False

    def test_escalation_configured(self):
        settings = DynamicRiskSettings(
            account_balance=10000,
            risk_per_trade=1.0,
            dynamic_risk_enabled=True,
            increased_risk_percentage=2.0,
            profit_threshold_percentage=5.0,
        )

        assert settings.escalation_configured is True

    def test_escalation_needs_every_value(self):
        settings = DynamicRiskSettings(
            account_balance=10000,
            risk_per_trade=1.0,
            dynamic_risk_enabled=True,
            increased_risk_percentage=2.0,
        )

        assert settings.escalation_configured is False
