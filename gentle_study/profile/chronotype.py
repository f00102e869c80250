"""
Chronotype Adjuster.

Maps a learner's chronotype to a preferred start time and two peak
performance windows, and scores the chronotype questionnaire that
produces those inputs.
"""
from __future__ import annotations

from loguru import logger

from gentle_study.core.models import Chronotype, ChronotypeAdjustment

BASELINE_START = 600  # 10:00
NEUTRAL_SCORE = 3.0
SHIFT_PER_POINT = 60  # minutes

# Literal lookup table, minutes from midnight
PEAK_WINDOWS: dict[Chronotype, list[tuple[int, int]]] = {
    Chronotype.MORNING: [(480, 720), (840, 960)],  # 8-12, 14-16
    Chronotype.EVENING: [(660, 780), (1020, 1260)],  # 11-13, 17-21
    Chronotype.INTERMEDIATE: [(600, 780), (900, 1020)],  # 10-13, 15-17
}


def clamp_chronotype_score(score: float | None) -> float:
    """Missing score means neutral; out-of-range scores are pulled into 1-5."""
    if score is None:
        return NEUTRAL_SCORE
    if score < 1 or score > 5:
        logger.warning(f"Chronotype score {score} outside 1-5, clamping")
        return max(1.0, min(5.0, score))
    return score


def get_chronotype_adjustment(
    chronotype: Chronotype | None,
    chronotype_score: float | None = None,
) -> ChronotypeAdjustment:
    """
    Optimal start time and peak windows for a chronotype.

    The start time shifts one hour per point away from the neutral score
    of 3, around a 10:00 baseline.
    """
    score = clamp_chronotype_score(chronotype_score)
    start = BASELINE_START + (score - NEUTRAL_SCORE) * SHIFT_PER_POINT

    windows = PEAK_WINDOWS.get(chronotype or Chronotype.INTERMEDIATE, PEAK_WINDOWS[Chronotype.INTERMEDIATE])

    return ChronotypeAdjustment(optimal_start_time=start, peak_windows=list(windows))


# =============================================================================
# Questionnaire scoring
# =============================================================================

# Option lists shown by the assessment; answers arrive as 0-based indices.
WAKE_TIME_OPTIONS = ["Before 6 AM", "6-7 AM", "7-8 AM", "8-9 AM", "After 9 AM"]
PRODUCTIVE_TIME_OPTIONS = [
    "Early morning (6-9 AM)",
    "Late morning (9 AM-12 PM)",
    "Early afternoon (12-3 PM)",
    "Late afternoon (3-6 PM)",
    "Evening (6-9 PM)",
    "Night (after 9 PM)",
]
SLEEP_TIME_OPTIONS = ["Before 9 PM", "9-10 PM", "10-11 PM", "11 PM-12 AM", "After midnight"]

DEFAULT_ANSWER_INDEX = 2


def classify_chronotype(
    wake_index: int | None = None,
    productive_index: int | None = None,
    sleep_index: int | None = None,
) -> Chronotype:
    """
    Classify a learner from the three timing questions.

    Each answer in the first two options counts 2 toward morning, each in
    the last options (index > 3) counts 2 toward evening. A side must lead
    by more than 2 points to win; otherwise the learner is intermediate.
    """
    morning = 0
    evening = 0

    for index in (wake_index, productive_index, sleep_index):
        if index is None:
            continue
        if index < 2:
            morning += 2
        if index > 3:
            evening += 2

    if morning > evening + 2:
        return Chronotype.MORNING
    if evening > morning + 2:
        return Chronotype.EVENING
    return Chronotype.INTERMEDIATE


def chronotype_score(wake_index: int | None = None, sleep_index: int | None = None) -> float:
    """Score from 1 (extreme morning) to 5 (extreme evening)."""
    wake = DEFAULT_ANSWER_INDEX if wake_index is None else wake_index
    sleep = DEFAULT_ANSWER_INDEX if sleep_index is None else sleep_index

    score = NEUTRAL_SCORE + (wake - DEFAULT_ANSWER_INDEX) * 0.5 + (sleep - DEFAULT_ANSWER_INDEX) * 0.5
    return max(1.0, min(5.0, score))
