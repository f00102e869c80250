"""
Record schemas for the storage boundary.

The storage collaborator hands the engine whole records as plain data
(dicts decoded from JSON). These models validate a record once, at the edge,
and convert it into the engine's dataclasses. Results go back out through
``from_domain`` so the caller can persist them without touching engine types.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from gentle_study.core.exceptions import RecordError
from gentle_study.core.models import (
    Chronotype,
    DifficultyTier,
    LearnerProfile,
    ReviewItem,
    SegmentOutcome,
    StudyIntensity,
    Topic,
)


def _naive_local(value: datetime | None) -> datetime | None:
    """Stored timestamps carry a UTC offset; the engine compares against naive local time."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


class _Record(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class LearnerProfileRecord(_Record):
    """Stored learner profile (bounds follow the assessment form)."""

    id: str
    name: str = ""
    age: int = Field(ge=7, le=100)
    chronotype: Chronotype | None = Chronotype.INTERMEDIATE
    chronotype_score: float | None = Field(default=3.0, ge=1, le=5, alias="chronotypeScore")
    study_intensity: StudyIntensity | None = Field(
        default=StudyIntensity.CASUAL, alias="studyIntensity"
    )
    sustained_attention_span: float | None = Field(
        default=None, ge=0, alias="sustainedAttentionSpan"
    )
    working_memory_capacity: float | None = Field(
        default=None, gt=0, alias="workingMemoryCapacity"
    )

    def to_domain(self) -> LearnerProfile:
        return LearnerProfile(
            id=self.id,
            name=self.name,
            age=self.age,
            chronotype=self.chronotype,
            chronotype_score=self.chronotype_score,
            study_intensity=self.study_intensity,
            sustained_attention_span=self.sustained_attention_span,
            working_memory_capacity=self.working_memory_capacity,
        )


class ReviewItemRecord(_Record):
    """Stored spaced-repetition state for one subject."""

    subject: str
    session_id: str | None = Field(default=None, alias="sessionId")
    difficulty: DifficultyTier = DifficultyTier.MEDIUM
    interval: int = Field(default=0, ge=0)
    ease_factor: float = Field(default=2.5, ge=1.3, alias="easeFactor")
    repetition_count: int = Field(default=0, ge=0, alias="reviewCount")
    last_reviewed: datetime | None = Field(default=None, alias="lastReviewed")
    next_review: datetime | None = Field(default=None, alias="nextReview")

    @field_validator("last_reviewed", "next_review")
    @classmethod
    def normalize_timestamps(cls, value: datetime | None) -> datetime | None:
        return _naive_local(value)

    def to_domain(self) -> ReviewItem:
        return ReviewItem(
            subject=self.subject,
            session_id=self.session_id,
            difficulty=self.difficulty,
            interval=self.interval,
            ease_factor=self.ease_factor,
            repetition_count=self.repetition_count,
            last_reviewed=self.last_reviewed,
            next_review=self.next_review,
        )

    @classmethod
    def from_domain(cls, item: ReviewItem) -> "ReviewItemRecord":
        return cls(
            subject=item.subject,
            session_id=item.session_id,
            difficulty=item.difficulty,
            interval=item.interval,
            ease_factor=item.ease_factor,
            repetition_count=item.repetition_count,
            last_reviewed=item.last_reviewed,
            next_review=item.next_review,
        )


class TopicRecord(_Record):
    """A topic offered for an interleaved session."""

    id: str
    name: str
    difficulty: float = Field(ge=1, le=5)
    time_required: float = Field(gt=0, alias="timeRequired")
    last_studied: datetime | None = Field(default=None, alias="lastStudied")
    mastery_level: float | None = Field(default=None, ge=0, le=1, alias="masteryLevel")

    @field_validator("last_studied")
    @classmethod
    def normalize_last_studied(cls, value: datetime | None) -> datetime | None:
        return _naive_local(value)

    def to_domain(self) -> Topic:
        return Topic(
            id=self.id,
            name=self.name,
            difficulty=self.difficulty,
            time_required=self.time_required,
            last_studied=self.last_studied,
            mastery_level=self.mastery_level,
        )


class SegmentOutcomeRecord(_Record):
    """A logged interleaving segment with measured performance."""

    topic_id: str = Field(alias="topicId")
    duration: float = Field(ge=0)
    performance: float = Field(ge=0, le=1)
    switched_from: str | None = Field(default=None, alias="switchedFrom")

    def to_domain(self) -> SegmentOutcome:
        return SegmentOutcome(
            topic_id=self.topic_id,
            duration=self.duration,
            performance=self.performance,
            switched_from=self.switched_from,
        )


def load_profile(data: dict[str, Any]) -> LearnerProfile:
    """Validate a stored profile record and convert it."""
    try:
        return LearnerProfileRecord.model_validate(data).to_domain()
    except ValidationError as e:
        raise RecordError("profile", str(e)) from e


def load_review_item(data: dict[str, Any]) -> ReviewItem:
    """Validate a stored review item record and convert it."""
    try:
        return ReviewItemRecord.model_validate(data).to_domain()
    except ValidationError as e:
        raise RecordError("review item", str(e)) from e


def load_topics(data: List[dict[str, Any]]) -> list[Topic]:
    """Validate a list of topic records; returns fresh Topic copies."""
    try:
        return [TopicRecord.model_validate(row).to_domain() for row in data]
    except ValidationError as e:
        raise RecordError("topic", str(e)) from e


def load_segment_history(data: List[dict[str, Any]]) -> list[SegmentOutcome]:
    """Validate a list of logged segment outcomes."""
    try:
        return [SegmentOutcomeRecord.model_validate(row).to_domain() for row in data]
    except ValidationError as e:
        raise RecordError("segment outcome", str(e)) from e
