"""
Unit tests for the attention-span assessor and the fatigue classifier.
"""

import pytest

from gentle_study.adaptive import (
    FatigueTier,
    InterventionAction,
    assess_attention_span,
    assess_fatigue,
)
from gentle_study.adaptive.fatigue import classify_score, linear_trend

TIER_ORDER = [FatigueTier.LOW, FatigueTier.MODERATE, FatigueTier.HIGH, FatigueTier.SEVERE]


class TestAttentionSpan:
    def test_empty_input(self):
        assert assess_attention_span([], []) == 0

    def test_all_errors(self):
        assert assess_attention_span([500, 510, 490, 505], [1, 1, 1, 1]) == 0

    def test_steady_responses(self):
        assert assess_attention_span([500, 500, 500, 500], [0, 0, 0, 0]) == 12

    def test_outlier_breaks_streak(self):
        # The 2000ms trial is outside one standard deviation of the mean
        rts = [500, 510, 490, 2000, 505, 495]
        assert assess_attention_span(rts, [0] * 6) == 9

    def test_error_breaks_streak(self):
        assert assess_attention_span([500] * 6, [0, 1, 0, 0, 0, 0]) == 12

    def test_mismatched_streams_truncate(self):
        assert assess_attention_span([500, 500, 500], [0, 0]) == 6


class TestFatigue:
    def test_too_few_samples(self):
        result = assess_fatigue([1000, 3000], [0.0, 0.5], self_reported_fatigue=10)
        assert result.tier == FatigueTier.LOW
        assert result.action == InterventionAction.CONTINUE
        assert result.score == 0
        assert result.confidence == pytest.approx(0.1)

    def test_mismatched_lengths_use_shorter(self):
        result = assess_fatigue([1000] * 5, [0.0, 0.0], self_reported_fatigue=9)
        assert result.confidence == pytest.approx(0.1)
        assert result.score == 0

    def test_fresh_learner(self):
        result = assess_fatigue([1000] * 5, [0.0] * 5, self_reported_fatigue=1)
        assert result.tier == FatigueTier.LOW
        assert result.score == 0
        assert result.confidence == pytest.approx(0.5)
        assert result.evidence == []

    def test_moderate(self):
        result = assess_fatigue([1000, 1000, 1000, 1000, 1600], [0.0] * 5, self_reported_fatigue=4)
        assert result.score == 3
        assert result.tier == FatigueTier.MODERATE
        assert result.action == InterventionAction.MICROBREAK

    def test_high(self):
        result = assess_fatigue([1000, 1000, 1000, 1000, 2250], [0.0] * 5, self_reported_fatigue=6)
        assert result.score == 5
        assert result.tier == FatigueTier.HIGH
        assert result.action == InterventionAction.BREAK

    def test_severe(self):
        result = assess_fatigue(
            [1000, 1200, 1500, 2000, 3600],
            [0.0, 0.1, 0.2, 0.4, 0.6],
            self_reported_fatigue=8,
        )
        assert result.rt_trend == pytest.approx(520)
        assert result.error_trend == pytest.approx(0.12)
        assert result.score == 9
        assert result.tier == FatigueTier.SEVERE
        assert result.action == InterventionAction.STOP
        assert len(result.evidence) == 3

    def test_trend_thresholds_are_strict(self):
        result = assess_fatigue([1000, 1000, 1000, 1000, 1500], [0.0] * 5, self_reported_fatigue=1)
        assert result.rt_trend == pytest.approx(100)
        assert result.score == 0

    def test_self_report_thresholds_are_inclusive(self):
        result = assess_fatigue([1000] * 5, [0.0] * 5, self_reported_fatigue=2)
        assert result.score == 1

    def test_only_recent_window_counts(self):
        result = assess_fatigue([5000] + [1000] * 5, [0.0] * 6, self_reported_fatigue=1)
        assert result.rt_trend == 0
        assert result.confidence == pytest.approx(0.6)

    def test_confidence_saturates(self):
        result = assess_fatigue([1000] * 20, [0.0] * 20, self_reported_fatigue=1)
        assert result.confidence == 1.0

    def test_tier_monotone_in_self_report(self):
        rts = [1000, 1000, 1000, 1000, 1750]
        tiers = [
            assess_fatigue(rts, [0.0] * 5, self_reported_fatigue=level).tier
            for level in range(1, 11)
        ]
        ranks = [TIER_ORDER.index(t) for t in tiers]
        assert ranks == sorted(ranks)

    @pytest.mark.parametrize(
        "score,tier",
        [(0, FatigueTier.LOW), (2, FatigueTier.LOW), (3, FatigueTier.MODERATE), (4, FatigueTier.MODERATE),
         (5, FatigueTier.HIGH), (7, FatigueTier.HIGH), (8, FatigueTier.SEVERE), (10, FatigueTier.SEVERE)],
    )
    def test_classify_score(self, score, tier):
        assert classify_score(score)[0] == tier

    def test_to_dict(self):
        data = assess_fatigue([1000] * 5, [0.0] * 5, self_reported_fatigue=1).to_dict()
        assert data["tier"] == "low"
        assert data["action"] == "continue"


def test_linear_trend():
    assert linear_trend([]) == 0.0
    assert linear_trend([100, 200, 300, 400]) == pytest.approx(75)
