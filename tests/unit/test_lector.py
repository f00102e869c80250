"""
Unit tests for the LECTOR multiplicative interval model.

Covers semantic interference, performance aggregation, the clamped
multipliers and the policy wrapper around the SM-2 base interval.
"""

import pytest

from gentle_study.study.lector import (
    LectorPolicy,
    ReviewContext,
    age_adjustment,
    aggregate_performance,
    coefficient_of_variation,
    interference_factor,
    lector_interval,
    word_overlap_similarity,
)


class TestInterference:
    def test_no_recent_concepts_is_neutral(self):
        assert interference_factor("tcp handshake", []) == 1.0

    def test_identical_concept_hits_ceiling(self):
        assert interference_factor("tcp handshake", ["tcp handshake"]) == pytest.approx(1.2)

    def test_partial_word_overlap(self):
        # {tcp, three, way, handshake} vs {udp, handshake}: 1 shared of 5
        factor = interference_factor("tcp three way handshake", ["udp handshake"])
        assert factor == pytest.approx(1.08)

    def test_similarity_matrix_either_key_order(self):
        matrix = {("mitosis", "meiosis"): 0.25}
        assert interference_factor("mitosis", ["meiosis"], matrix) == pytest.approx(1.1)
        assert interference_factor("meiosis", ["mitosis"], matrix) == pytest.approx(1.1)

    def test_only_recent_window_is_considered(self):
        recent = ["tcp handshake"] + [f"unrelated {i}" for i in range(10)]
        assert interference_factor("tcp handshake", recent, window=10) == pytest.approx(1.0)

    def test_word_overlap_empty_strings(self):
        assert word_overlap_similarity("", "") == 0.0

    @pytest.mark.parametrize("recent", [["a b"], ["a"], ["x y z"], ["a b c d"]])
    def test_factor_stays_in_range(self, recent):
        assert 0.8 <= interference_factor("a b c", recent) <= 1.2


class TestPerformance:
    def test_empty_history_is_neutral(self):
        metrics = aggregate_performance()
        assert metrics.mastery == 1.0
        assert metrics.personal == 1.0
        assert metrics.consistency == 0.5

    def test_mastery_from_accuracy_and_completion(self):
        metrics = aggregate_performance([80, 90], [100, 100])
        assert metrics.mastery == pytest.approx(1.85)

    def test_mastery_floor(self):
        assert aggregate_performance([10], [10]).mastery == 0.5

    def test_consistent_response_times(self):
        metrics = aggregate_performance(response_times=[1000, 1000, 1000])
        assert metrics.personal == pytest.approx(1.5)
        assert metrics.consistency == pytest.approx(1.0)

    def test_variable_response_times(self):
        metrics = aggregate_performance(response_times=[500, 1500])
        assert metrics.personal == pytest.approx(1.0)
        assert metrics.consistency == pytest.approx(0.5)

    def test_cv_undefined(self):
        assert coefficient_of_variation([1000]) is None
        assert coefficient_of_variation([0, 0]) is None


class TestLectorInterval:
    def test_neutral_factors_keep_base(self):
        assert lector_interval(10) == 10

    def test_extreme_factors_are_clamped(self):
        # 10 * 1.2 * 0.5 * 1.1 * 0.7 * 0.85 = 3.927
        assert lector_interval(10, semantic=5, mastery=0.1, repetitions=100, personal=0, age=10) == 4

    def test_tie_rounds_up(self):
        # 25 * 0.5 = 12.5
        assert lector_interval(25, mastery=0.5) == 13

    def test_never_below_one_day(self):
        assert lector_interval(1, semantic=0, mastery=0, repetitions=-50, personal=0, age=70) == 1

    @pytest.mark.parametrize("age,expected", [(None, 1.0), (12, 0.85), (30, 1.0), (60, 1.0), (61, 0.9)])
    def test_age_adjustment(self, age, expected):
        assert age_adjustment(age) == expected


class TestLectorPolicy:
    def test_neutral_context_matches_sm2(self):
        assert LectorPolicy().schedule(6, 2.5, 4) == (15, pytest.approx(2.5))

    def test_repetitions_lengthen_interval(self):
        interval, _ = LectorPolicy().schedule(6, 2.5, 4, repetitions=3)
        # 15 * 1.06 = 15.9
        assert interval == 16

    def test_lapse_returns_one_day(self):
        context = ReviewContext(age=30, accuracies=[100], completion_rates=[100])
        interval, ease = LectorPolicy().schedule(40, 2.5, 2, repetitions=8, context=context)
        assert interval == 1
        assert ease < 2.5

    def test_combined_factors(self):
        context = ReviewContext(
            age=16,
            concept="cell division",
            recent_concepts=["cell division"],
            accuracies=[100],
            completion_rates=[100],
        )
        interval, _ = LectorPolicy().schedule(6, 2.5, 5, context=context)
        # round(6 * 2.5) = 15; 15 * 1.2 * 2.0 * 1.0 * 1.0 * 0.85 = 30.6
        assert interval == 31

    def test_interference_window_is_configurable(self):
        context = ReviewContext(concept="graphs", recent_concepts=["graphs", "trees"])
        narrow = LectorPolicy(interference_window=1)
        wide = LectorPolicy(interference_window=10)
        assert narrow.schedule(6, 2.5, 4, context=context)[0] == 15
        assert wide.schedule(6, 2.5, 4, context=context)[0] == 18
