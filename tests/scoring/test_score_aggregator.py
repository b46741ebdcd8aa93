# tests/scoring/test_score_aggregator.py
"""Tests for ScoreAggregator."""
import logging
import math

import pytest

from src.scoring.models import CategoryScore
from src.scoring.score_aggregator import ScoreAggregator
from src.scoring.settings import ScoreWeights


def make_category(score: float) -> CategoryScore:
    return CategoryScore(score=score, factors={"factor": score})


class TestScoreAggregator:
    """Tests for ScoreAggregator."""

    def test_equal_weights_equal_scores(self):
        weights = ScoreWeights(consistency=25, risk_management=25, performance=25, discipline=25)

        metrics, _ = ScoreAggregator().aggregate(
            make_category(60), make_category(60), make_category(60), make_category(60), weights
        )

        assert metrics.overall == 60.0

    def test_default_weights(self):
        metrics, breakdown = ScoreAggregator().aggregate(
            make_category(80),
            make_category(60),
            make_category(50),
            make_category(40),
            ScoreWeights(),
        )

        assert metrics.overall == pytest.approx((80 * 40 + 60 * 25 + 50 * 20 + 40 * 15) / 100)
        assert metrics.consistency == 80
        assert breakdown.risk_management.score == 60
        assert breakdown.discipline.factors == {"factor": 40}

    def test_category_scores_clamped(self):
        metrics, _ = ScoreAggregator().aggregate(
            make_category(150),
            make_category(-20),
            make_category(math.nan),
            make_category(50),
            ScoreWeights(),
        )

        assert metrics.consistency == 100.0
        assert metrics.risk_management == 0.0
        assert metrics.performance == 0.0
        assert 0.0 <= metrics.overall <= 100.0

    def test_weights_over_100_warn_and_clamp(self, caplog):
        weights = ScoreWeights(consistency=50, risk_management=50, performance=50, discipline=50)

        with caplog.at_level(logging.WARNING):
            metrics, _ = ScoreAggregator().aggregate(
                make_category(80), make_category(80), make_category(80), make_category(80), weights
            )

        assert metrics.overall == 100.0
        assert "expected 100" in caplog.text

    def test_zero_scores(self):
        metrics, _ = ScoreAggregator().aggregate(
            make_category(0), make_category(0), make_category(0), make_category(0), ScoreWeights()
        )

        assert metrics.overall == 0.0

    def test_components_display_names(self):
        metrics, _ = ScoreAggregator().aggregate(
            make_category(10), make_category(20), make_category(30), make_category(40), ScoreWeights()
        )

        assert metrics.components() == {
            "Consistency": 10,
            "Risk Management": 20,
            "Performance": 30,
            "Discipline": 40,
        }
