"""
Core Module - Shared data model, configuration and logging.

Components:
- models: Engine records (LearnerProfile, StudySchedule, ReviewItem, Topic, ...)
- schemas: Pydantic record validation for the storage boundary
- config: Environment-driven settings
- log: Loguru sink setup

Design Principle:
Domain modules (profile/, study/, adaptive/) import their records from
gentle_study.core rather than defining their own copies.
"""

from gentle_study.core.exceptions import GentleStudyError, RecordError
from gentle_study.core.models import (
    BaseParameters,
    BreakType,
    Chronotype,
    ChronotypeAdjustment,
    DifficultyTier,
    InterleavingSegment,
    LearnerProfile,
    ReviewItem,
    SegmentOutcome,
    SessionParameters,
    StudyIntensity,
    StudySchedule,
    Topic,
)

__all__ = [
    # Records
    "LearnerProfile",
    "BaseParameters",
    "ChronotypeAdjustment",
    "SessionParameters",
    "StudySchedule",
    "ReviewItem",
    "Topic",
    "InterleavingSegment",
    "SegmentOutcome",
    # Enums
    "Chronotype",
    "StudyIntensity",
    "DifficultyTier",
    "BreakType",
    # Errors
    "GentleStudyError",
    "RecordError",
]
