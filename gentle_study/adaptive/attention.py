"""
Sustained attention span from a SART-style timed task.

Each trial is a fixed 3-second slot. A trial is "good" when it has no error
and its response time lies within one standard deviation of the mean. The
longest run of good trials, times 3, is the span in seconds.
"""
from __future__ import annotations

import statistics
from typing import Sequence

from loguru import logger

TRIAL_SECONDS = 3


def assess_attention_span(response_times: Sequence[float], errors: Sequence[int]) -> int:
    """
    Estimate sustained attention span in seconds.

    Args:
        response_times: Per-trial response time (ms)
        errors: Per-trial error flag (0 = correct, 1 = error)

    Returns:
        Longest good streak * 3 seconds; 0 for empty or all-error input
    """
    if len(response_times) != len(errors):
        logger.warning(
            f"Attention task streams differ in length ({len(response_times)} vs {len(errors)}), "
            "truncating to the shorter one"
        )
    trials = list(zip(response_times, errors))
    if not trials:
        return 0

    times = [rt for rt, _ in trials]
    mean_rt = statistics.fmean(times)
    std_rt = statistics.pstdev(times)

    streak = 0
    max_streak = 0
    for rt, error in trials:
        if error == 0 and abs(rt - mean_rt) <= std_rt:
            streak += 1
            max_streak = max(max_streak, streak)
        else:
            streak = 0

    logger.debug(f"Attention task: {len(trials)} trials, longest good streak {max_streak}")
    return max_streak * TRIAL_SECONDS
