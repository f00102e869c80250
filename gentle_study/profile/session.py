"""
Session Parameter Synthesizer.

Combines base parameters, chronotype adjustment and study intensity into
a complete StudySchedule.

Session length/break policy, in priority order:
1. Age 18-60: the 52/17 work/break ratio. Intensive study caps the break
   at 15% of the session.
2. Intensive (other ages): session = min(attention, 45), break = 15%.
3. Otherwise: session = min(attention, 90 * 0.8), break = 22%.

Research basis:
- DeskTime productivity study (52 min work / 17 min break)
- Kleitman's basic rest-activity cycle (90-minute ultradian rhythm)
- Cowan (2001): working memory limit of 3-4 chunks
"""
from __future__ import annotations

import math

from loguru import logger

from gentle_study.core.models import (
    BaseParameters,
    BreakType,
    LearnerProfile,
    SessionParameters,
    StudyIntensity,
    StudySchedule,
)
from gentle_study.profile.chronotype import get_chronotype_adjustment
from gentle_study.profile.parameters import calculate_base_parameters

ULTRADIAN_CYCLE = 90  # minutes
OPTIMAL_WORK = 52
OPTIMAL_BREAK = 17
MICROBREAK_INTERVAL = 15  # minutes
MICROBREAK_DURATION = 40  # seconds

INTENSIVE_SESSION_CAP = 45
INTENSIVE_BREAK_RATIO = 0.15
CASUAL_BREAK_RATIO = 0.22

BREAK_ACTIVITIES: dict[BreakType, list[str]] = {
    BreakType.MICRO: [
        "Look at something at least 20 feet away",
        "Close your eyes and take three slow breaths",
        "Roll your shoulders and unclench your jaw",
    ],
    BreakType.SHORT: [
        "Stand up and stretch",
        "Look out of a window or at some plants",
        "Get a glass of water",
        "Take a few deep breaths",
    ],
    BreakType.LONG: [
        "Take a short walk outdoors",
        "Do some light physical movement",
        "Spend a few minutes in nature",
        "Rest or meditate with your eyes closed",
        "Have a healthy snack",
    ],
}


def calculate_session_parameters(
    base: BaseParameters,
    profile: LearnerProfile,
) -> SessionParameters:
    """
    Session length, break length and concept ceiling.

    Args:
        base: Output of calculate_base_parameters
        profile: Learner profile (age and intensity are read)

    Returns:
        SessionParameters in minutes
    """
    intensive = profile.study_intensity == StudyIntensity.INTENSIVE

    if 18 <= profile.age <= 60:
        session_length = float(OPTIMAL_WORK)
        break_duration = float(OPTIMAL_BREAK)
        if intensive:
            break_duration = min(break_duration, session_length * INTENSIVE_BREAK_RATIO)
    elif intensive:
        session_length = min(base.attention_span, INTENSIVE_SESSION_CAP)
        break_duration = session_length * INTENSIVE_BREAK_RATIO
    else:
        session_length = min(base.attention_span, ULTRADIAN_CYCLE * 0.8)
        break_duration = session_length * CASUAL_BREAK_RATIO

    # Cognitive-load ceiling: 3 new concepts for minors, 4 for adults
    ceiling = 3 if profile.age < 18 else 4
    max_concepts = min(math.floor(base.working_memory_capacity * 0.8), ceiling)

    return SessionParameters(
        session_length=session_length,
        break_duration=break_duration,
        max_concepts=max_concepts,
    )


def calculate_max_daily_study_time(profile: LearnerProfile) -> int:
    """Daily study cap in minutes."""
    if profile.age < 15:
        return 120
    if profile.age < 18:
        return 180
    if profile.study_intensity == StudyIntensity.INTENSIVE:
        return 360
    return 240


def classify_break(break_minutes: float) -> BreakType:
    """Break tier for a break of the given length."""
    if break_minutes < 1:
        return BreakType.MICRO
    if break_minutes < 10:
        return BreakType.SHORT
    return BreakType.LONG


def get_break_activities(break_minutes: float) -> list[str]:
    return list(BREAK_ACTIVITIES[classify_break(break_minutes)])


def calculate_optimal_study_schedule(profile: LearnerProfile) -> StudySchedule:
    """
    Build the full study schedule for a learner.

    Pure function of the profile; call it again whenever the profile
    changes rather than caching the result.
    """
    base = calculate_base_parameters(profile)
    adjustment = get_chronotype_adjustment(profile.chronotype, profile.chronotype_score)
    session = calculate_session_parameters(base, profile)

    schedule = StudySchedule(
        session_length=session.session_length,
        break_duration=session.break_duration,
        optimal_start_time=adjustment.optimal_start_time,
        peak_performance_windows=adjustment.peak_windows,
        max_daily_study_time=calculate_max_daily_study_time(profile),
        max_concepts=session.max_concepts,
        microbreak_interval=MICROBREAK_INTERVAL,
        microbreak_duration=MICROBREAK_DURATION,
        break_activities=get_break_activities(session.break_duration),
    )

    logger.info(
        f"Schedule for {profile.id}: {schedule.session_length:.0f}/{schedule.break_duration:.0f} min, "
        f"start {schedule.optimal_start_time:.0f}, max {schedule.max_concepts} concepts"
    )
    return schedule
