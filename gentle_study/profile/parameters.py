"""
Profile Parameter Calculator.

Derives base attention span and working-memory capacity from a learner's
age band, blended with self-test measurements when the learner has
completed an assessment.

Age bands (each exclusive of the next):
- under 18:  attention = min(age * 3, 45),  capacity = 2 + (age - 7) * 0.2
- 18-25:     50 min / 4 chunks
- 26-60:     52 min / 4 chunks (the observed 52-minute focus block)
- over 60:   40 min / 3.5 chunks
"""
from __future__ import annotations

from loguru import logger

from gentle_study.core.models import BaseParameters, LearnerProfile

# (upper age bound inclusive, attention span minutes, working memory chunks)
ADULT_BANDS = [
    (25, 50.0, 4.0),
    (60, 52.0, 4.0),
]
OLDER_ADULT_BAND = (40.0, 3.5)
CHILD_ATTENTION_CAP = 45


def banded_parameters(age: int) -> BaseParameters:
    """Attention span and capacity from the age band alone."""
    if age < 18:
        return BaseParameters(
            attention_span=min(age * 3, CHILD_ATTENTION_CAP),
            working_memory_capacity=2 + (age - 7) * 0.2,
        )

    for upper, span, capacity in ADULT_BANDS:
        if age <= upper:
            return BaseParameters(attention_span=span, working_memory_capacity=capacity)

    span, capacity = OLDER_ADULT_BAND
    return BaseParameters(attention_span=span, working_memory_capacity=capacity)


def calculate_base_parameters(profile: LearnerProfile) -> BaseParameters:
    """
    Derive base attentional parameters for a profile.

    A measured sustained attention span (seconds) is averaged 50/50 with the
    banded estimate (minutes). A measured working-memory capacity replaces
    the banded estimate outright.

    Args:
        profile: Learner profile (never mutated)

    Returns:
        BaseParameters with attention_span in minutes
    """
    params = banded_parameters(profile.age)

    if profile.sustained_attention_span:
        params.attention_span = (params.attention_span + profile.sustained_attention_span / 60) / 2

    if profile.working_memory_capacity:
        params.working_memory_capacity = profile.working_memory_capacity

    logger.debug(
        f"Base parameters for age {profile.age}: "
        f"attention={params.attention_span:.1f}min capacity={params.working_memory_capacity:.2f}"
    )
    return params


def estimate_working_memory(age: int) -> float:
    """Initial capacity estimate recorded on a freshly assessed profile."""
    if age < 12:
        return 2.5
    if age < 18:
        return 3.5
    if age < 60:
        return 4.0
    return 3.5
