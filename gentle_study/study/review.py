"""
Review Scheduler - folds session outcomes into ReviewItem state.

Flow per completed session:
1. Score the session (completion, fatigue, focus, breaks) on the 0-5 scale
2. Run the configured interval policy (LECTOR or SM-2)
3. Place the next review at the review hour on the target date
4. Return a new ReviewItem; the caller persists it

Updates for one item must be applied in session-completion order: each
review is a fold over the previous state.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta
from typing import Iterable, Protocol

from loguru import logger

from gentle_study.core.models import DifficultyTier, ReviewItem
from gentle_study.study.lector import LectorPolicy, ReviewContext
from gentle_study.study.sm2 import SM2Policy, clamp_quality

REVIEW_HOUR = 10
ENGAGEMENT_WEEKDAY = 1  # Tuesday


class IntervalPolicy(Protocol):
    """Transition function shared by the SM-2 and LECTOR policies."""

    name: str

    def schedule(
        self,
        current_interval: int,
        ease_factor: float,
        quality: float,
        repetitions: int = 0,
        context: ReviewContext | None = None,
    ) -> tuple[int, float]: ...


def get_policy(name: str, interference_window: int = 10) -> IntervalPolicy:
    """Look up a policy by name ("lector" or "sm2")."""
    if name == "sm2":
        return SM2Policy()
    if name == "lector":
        return LectorPolicy(interference_window=interference_window)
    raise ValueError(f"Unknown interval policy: {name}")


# =============================================================================
# Session scoring
# =============================================================================


def calculate_session_quality(
    completion_rate: float,
    self_reported_fatigue: float = 1,
    focus_score: float = 70,
    planned_duration: float = 0,
    breaks_taken: int = 0,
) -> float:
    """
    Turn a finished session into an SM-2 quality score (0-5).

    Args:
        completion_rate: Percent of the planned session completed (0-100)
        self_reported_fatigue: 1-10
        focus_score: 0-100
        planned_duration: Planned minutes (one break per hour is expected)
        breaks_taken: Breaks actually taken

    Returns:
        Quality score clamped to 0-5
    """
    quality = 3.0

    if completion_rate >= 90:
        quality += 1
    elif completion_rate >= 70:
        quality += 0.5
    elif completion_rate < 50:
        quality -= 1

    # Fatigue works inversely
    quality += (10 - self_reported_fatigue) / 10

    if focus_score >= 80:
        quality += 0.5
    elif focus_score < 60:
        quality -= 0.5

    expected_breaks = int(planned_duration // 60)
    if breaks_taken <= expected_breaks:
        quality += 0.3
    else:
        quality -= 0.3

    return max(0.0, min(5.0, quality))


def difficulty_from_quality(quality: float) -> DifficultyTier:
    if quality >= 4:
        return DifficultyTier.EASY
    if quality >= 2.5:
        return DifficultyTier.MEDIUM
    return DifficultyTier.HARD


# =============================================================================
# Review placement
# =============================================================================


def get_optimal_review_time(base: datetime, interval_days: int, hour: int = REVIEW_HOUR) -> datetime:
    """Target date at the review hour, never the instant the last session ended."""
    target = base + timedelta(days=interval_days)
    return target.replace(hour=hour, minute=0, second=0, microsecond=0)


def suggest_engagement_date(review_at: datetime | date) -> date:
    """
    Advisory notification day: the next Tuesday on or after the review.

    Metadata only. The scheduled review date is never moved.
    """
    day = review_at.date() if isinstance(review_at, datetime) else review_at
    offset = (ENGAGEMENT_WEEKDAY - day.weekday()) % 7
    return day + timedelta(days=offset)


@dataclass
class ReviewOutcome:
    """Result of completing one review."""

    item: ReviewItem
    quality: float
    policy: str
    engagement_date: date

    @property
    def next_review(self) -> datetime | None:
        return self.item.next_review


class ReviewScheduler:
    """
    Applies review outcomes to ReviewItems.

    Stateless apart from its policy and review hour; safe to share.
    """

    def __init__(
        self,
        policy: IntervalPolicy | None = None,
        review_hour: int = REVIEW_HOUR,
    ):
        self.policy = policy or LectorPolicy()
        self.review_hour = review_hour

    def complete_review(
        self,
        item: ReviewItem | None,
        quality: float,
        reviewed_at: datetime,
        subject: str | None = None,
        context: ReviewContext | None = None,
        session_id: str | None = None,
    ) -> ReviewOutcome:
        """
        Fold one quality score into an item.

        Args:
            item: Current state, or None on the first completed session
            quality: Recall quality 0-5 (clamped)
            reviewed_at: When the session ended
            subject: Subject name, required when item is None
            context: Extra signals for the LECTOR policy

        Returns:
            ReviewOutcome carrying a new ReviewItem
        """
        if item is None:
            if not subject:
                raise ValueError("subject is required when creating a review item")
            item = ReviewItem(subject=subject, session_id=session_id)

        quality = clamp_quality(quality)
        interval, ease = self.policy.schedule(
            item.interval,
            item.ease_factor,
            quality,
            repetitions=item.repetition_count,
            context=context,
        )
        next_review = get_optimal_review_time(reviewed_at, interval, self.review_hour)

        updated = replace(
            item,
            difficulty=difficulty_from_quality(quality),
            interval=interval,
            ease_factor=ease,
            repetition_count=item.repetition_count + 1,
            last_reviewed=reviewed_at,
            next_review=next_review,
            session_id=session_id or item.session_id,
        )

        logger.info(
            f"Review '{updated.subject}' ({self.policy.name}): q={quality:.1f} "
            f"interval {item.interval}->{interval}d, EF {item.ease_factor:.2f}->{ease:.2f}"
        )

        return ReviewOutcome(
            item=updated,
            quality=quality,
            policy=self.policy.name,
            engagement_date=suggest_engagement_date(next_review),
        )

    def replay(
        self,
        item: ReviewItem | None,
        reviews: Iterable[tuple[float, datetime]],
        subject: str | None = None,
    ) -> ReviewItem | None:
        """Apply a sequence of (quality, reviewed_at) in order."""
        for quality, reviewed_at in reviews:
            item = self.complete_review(item, quality, reviewed_at, subject=subject).item
        return item


def items_due(items: Iterable[ReviewItem], now: datetime) -> list[ReviewItem]:
    """Items whose next review is at or before ``now``, earliest first."""
    due = [i for i in items if i.next_review is not None and i.next_review <= now]
    return sorted(due, key=lambda i: i.next_review)
