"""
Core data model for the study scheduling engine.

These are the plain records the engine consumes and returns. Persistence
belongs to the caller: every function in the engine takes these records as
explicit arguments and hands back new ones.

Design:
- LearnerProfile: demographic + self-test inputs (owned by the caller)
- StudySchedule: derived session plan, recomputed on demand
- ReviewItem: spaced-repetition state for one subject
- Topic / InterleavingSegment: interleaving input and output log
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Chronotype(str, Enum):
    """Circadian preference of a learner."""

    MORNING = "morning"
    EVENING = "evening"
    INTERMEDIATE = "intermediate"


class StudyIntensity(str, Enum):
    """How hard the learner is pushing (exam crunch vs long-term learning)."""

    INTENSIVE = "intensive"
    CASUAL = "casual"


class DifficultyTier(str, Enum):
    """Coarse difficulty label stored on a ReviewItem."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class BreakType(str, Enum):
    """Break tier, used to pick suitable break activities."""

    MICRO = "micro"
    SHORT = "short"
    LONG = "long"


@dataclass
class LearnerProfile:
    """
    Cognitive profile of a learner.

    Attributes:
        id: Caller-assigned identity
        age: Age in whole years
        chronotype: Circadian preference (None is treated as intermediate)
        chronotype_score: 1 (extreme morning) to 5 (extreme evening), 3 = neutral
        study_intensity: intensive or casual (None = not stated)
        sustained_attention_span: Measured span in seconds, if assessed
        working_memory_capacity: Measured capacity in chunks, if assessed
    """

    id: str
    age: int
    chronotype: Chronotype | None = Chronotype.INTERMEDIATE
    chronotype_score: float | None = 3.0
    study_intensity: StudyIntensity | None = StudyIntensity.CASUAL
    name: str = ""
    sustained_attention_span: float | None = None
    working_memory_capacity: float | None = None


@dataclass
class BaseParameters:
    """Attentional parameters derived from a profile."""

    attention_span: float  # minutes
    working_memory_capacity: float  # chunks


@dataclass
class ChronotypeAdjustment:
    """Start time and peak windows, in minutes from midnight."""

    optimal_start_time: float
    peak_windows: list[tuple[int, int]] = field(default_factory=list)


@dataclass
class SessionParameters:
    """Work/break lengths and cognitive-load ceiling for one session."""

    session_length: float  # minutes
    break_duration: float  # minutes
    max_concepts: int


@dataclass
class StudySchedule:
    """
    Complete study plan for a learner.

    Pure function of the LearnerProfile; never persisted by the engine.
    """

    session_length: float
    break_duration: float
    optimal_start_time: float
    peak_performance_windows: list[tuple[int, int]]
    max_daily_study_time: int
    max_concepts: int
    microbreak_interval: int = 15  # minutes
    microbreak_duration: int = 40  # seconds
    break_activities: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "session_length": self.session_length,
            "break_duration": self.break_duration,
            "optimal_start_time": self.optimal_start_time,
            "peak_performance_windows": [list(w) for w in self.peak_performance_windows],
            "max_daily_study_time": self.max_daily_study_time,
            "max_concepts": self.max_concepts,
            "microbreak_interval": self.microbreak_interval,
            "microbreak_duration": self.microbreak_duration,
            "break_activities": list(self.break_activities),
        }


@dataclass
class ReviewItem:
    """
    Spaced-repetition state for one subject.

    Invariants: ease_factor >= 1.3 and interval >= 1 once reviewed.
    Updates go through the review scheduler, which returns a new instance.
    """

    subject: str
    difficulty: DifficultyTier = DifficultyTier.MEDIUM
    interval: int = 0  # days
    ease_factor: float = 2.5
    repetition_count: int = 0
    last_reviewed: datetime | None = None
    next_review: datetime | None = None
    session_id: str | None = None

    @property
    def is_new(self) -> bool:
        return self.repetition_count == 0

    def to_dict(self) -> dict:
        return {
            "subject": self.subject,
            "session_id": self.session_id,
            "difficulty": self.difficulty.value,
            "interval": self.interval,
            "ease_factor": self.ease_factor,
            "repetition_count": self.repetition_count,
            "last_reviewed": self.last_reviewed.isoformat() if self.last_reviewed else None,
            "next_review": self.next_review.isoformat() if self.next_review else None,
        }


@dataclass
class Topic:
    """A candidate topic for an interleaved session."""

    id: str
    name: str
    difficulty: float  # 1-5
    time_required: float  # minutes
    last_studied: datetime | None = None
    mastery_level: float | None = None  # 0-1


@dataclass
class InterleavingSegment:
    """One scheduled slot of an interleaved session."""

    topic_id: str
    duration: float  # minutes
    order: int
    rationale: str

    def to_dict(self) -> dict:
        return {
            "topic_id": self.topic_id,
            "duration": self.duration,
            "order": self.order,
            "rationale": self.rationale,
        }


@dataclass
class SegmentOutcome:
    """A past segment with its measured performance, used as feedback."""

    topic_id: str
    duration: float
    performance: float  # 0-1
    switched_from: str | None = None
