"""
Learner Profile Module.

Turns a learner profile into a concrete study schedule:
- Base parameters (attention span, working memory) by age band
- Chronotype adjustment (start time, peak windows) and questionnaire scoring
- Session synthesis (52/17 ratio, intensity, concept ceiling, daily cap)
"""

from gentle_study.profile.chronotype import (
    PEAK_WINDOWS,
    chronotype_score,
    classify_chronotype,
    get_chronotype_adjustment,
)
from gentle_study.profile.parameters import calculate_base_parameters, estimate_working_memory
from gentle_study.profile.session import (
    calculate_max_daily_study_time,
    calculate_optimal_study_schedule,
    calculate_session_parameters,
    get_break_activities,
)

__all__ = [
    "calculate_base_parameters",
    "estimate_working_memory",
    "get_chronotype_adjustment",
    "classify_chronotype",
    "chronotype_score",
    "PEAK_WINDOWS",
    "calculate_session_parameters",
    "calculate_max_daily_study_time",
    "calculate_optimal_study_schedule",
    "get_break_activities",
]
