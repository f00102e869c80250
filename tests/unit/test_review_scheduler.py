"""
Unit tests for the review scheduler.

Covers session scoring, review placement, the advisory engagement date
and folding repeated reviews into a ReviewItem.
"""

from datetime import date, datetime

import pytest

from gentle_study.core.models import DifficultyTier, ReviewItem
from gentle_study.study import (
    LectorPolicy,
    ReviewScheduler,
    SM2Policy,
    calculate_session_quality,
    difficulty_from_quality,
    get_optimal_review_time,
    get_policy,
    items_due,
    suggest_engagement_date,
)


@pytest.fixture
def sm2_scheduler():
    return ReviewScheduler(policy=SM2Policy())


class TestSessionQuality:
    def test_strong_session_caps_at_five(self):
        assert calculate_session_quality(95, 1, 85, planned_duration=60, breaks_taken=1) == 5

    def test_weak_session(self):
        # 3 - 1 + 0 - 0.5 - 0.3
        quality = calculate_session_quality(40, 10, 50, planned_duration=30, breaks_taken=2)
        assert quality == pytest.approx(1.2)

    def test_middling_session(self):
        # 3 + 0.5 + 0.5 + 0 + 0.3
        quality = calculate_session_quality(75, 5, 70, planned_duration=120, breaks_taken=2)
        assert quality == pytest.approx(4.3)

    def test_never_negative(self):
        assert calculate_session_quality(0, 40, 0, planned_duration=0, breaks_taken=9) == 0

    @pytest.mark.parametrize(
        "quality,tier",
        [(5, DifficultyTier.EASY), (4, DifficultyTier.EASY), (3, DifficultyTier.MEDIUM),
         (2.5, DifficultyTier.MEDIUM), (2, DifficultyTier.HARD)],
    )
    def test_difficulty_from_quality(self, quality, tier):
        assert difficulty_from_quality(quality) == tier


class TestPlacement:
    def test_review_lands_at_review_hour(self):
        base = datetime(2026, 3, 2, 23, 59, 30, 5)
        assert get_optimal_review_time(base, 3) == datetime(2026, 3, 5, 10, 0)

    def test_custom_hour(self):
        assert get_optimal_review_time(datetime(2026, 3, 2, 8), 1, hour=7) == datetime(2026, 3, 3, 7, 0)

    def test_engagement_date_is_next_tuesday(self):
        # 2026-03-03 is a Tuesday
        assert suggest_engagement_date(datetime(2026, 3, 3, 10)) == date(2026, 3, 3)
        assert suggest_engagement_date(date(2026, 3, 4)) == date(2026, 3, 10)
        assert suggest_engagement_date(date(2026, 3, 9)) == date(2026, 3, 10)


class TestCompleteReview:
    def test_first_review_creates_item(self, sm2_scheduler, now):
        outcome = sm2_scheduler.complete_review(None, 4, now, subject="Biology", session_id="s-1")
        item = outcome.item

        assert item.subject == "Biology"
        assert item.interval == 1
        assert item.repetition_count == 1
        assert item.ease_factor == pytest.approx(2.5)
        assert item.difficulty == DifficultyTier.EASY
        assert item.last_reviewed == now
        assert item.next_review == datetime(2026, 3, 3, 10, 0)
        assert item.session_id == "s-1"
        assert outcome.next_review == item.next_review
        assert outcome.engagement_date == date(2026, 3, 3)
        assert outcome.policy == "sm2"

    def test_subject_required_for_new_item(self, sm2_scheduler, now):
        with pytest.raises(ValueError):
            sm2_scheduler.complete_review(None, 4, now)

    def test_input_item_not_mutated(self, sm2_scheduler, now):
        item = ReviewItem(subject="Chemistry", interval=6, repetition_count=2)
        outcome = sm2_scheduler.complete_review(item, 4, now)

        assert item.interval == 6
        assert item.repetition_count == 2
        assert outcome.item.interval == 15
        assert outcome.item.repetition_count == 3

    def test_replay_in_order(self, sm2_scheduler):
        reviews = [
            (4, datetime(2026, 3, 1, 18)),
            (4, datetime(2026, 3, 2, 18)),
            (4, datetime(2026, 3, 8, 18)),
        ]
        item = sm2_scheduler.replay(None, reviews, subject="History")
        assert item.interval == 15
        assert item.repetition_count == 3
        assert item.next_review == datetime(2026, 3, 23, 10, 0)

    def test_failure_resets_interval(self, sm2_scheduler, now):
        item = ReviewItem(subject="Physics", interval=15, ease_factor=2.5, repetition_count=3)
        outcome = sm2_scheduler.complete_review(item, 1, now)
        assert outcome.item.interval == 1
        assert outcome.item.ease_factor >= 1.3
        assert outcome.item.difficulty == DifficultyTier.HARD

    def test_default_policy_is_lector(self, now):
        scheduler = ReviewScheduler()
        assert isinstance(scheduler.policy, LectorPolicy)
        assert scheduler.complete_review(None, 5, now, subject="Art").policy == "lector"

    def test_out_of_range_quality_is_clamped(self, sm2_scheduler, now):
        outcome = sm2_scheduler.complete_review(None, 12, now, subject="Music")
        assert outcome.quality == 5
        assert outcome.item.ease_factor == pytest.approx(2.6)


class TestPolicies:
    def test_lookup(self):
        assert isinstance(get_policy("sm2"), SM2Policy)
        policy = get_policy("lector", interference_window=4)
        assert isinstance(policy, LectorPolicy)
        assert policy.interference_window == 4

    def test_unknown_policy(self):
        with pytest.raises(ValueError):
            get_policy("fsrs")


def test_items_due_sorted_earliest_first(now):
    items = [
        ReviewItem(subject="late", next_review=datetime(2026, 3, 2, 10)),
        ReviewItem(subject="future", next_review=datetime(2026, 3, 9, 10)),
        ReviewItem(subject="early", next_review=datetime(2026, 2, 20, 10)),
        ReviewItem(subject="new"),
    ]
    assert [i.subject for i in items_due(items, now)] == ["early", "late"]
