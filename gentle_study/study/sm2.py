"""
SM-2 Spaced Repetition Policy.

SM-2 Quality Scale:
0 - Complete blackout, wrong response
1 - Incorrect, but upon seeing answer remembered
2 - Incorrect, but answer seemed easy to recall
3 - Correct, but with significant difficulty
4 - Correct, with some hesitation
5 - Correct, with perfect recall

Intervals: 1 day after the first success, 6 after the second, then
interval * EF rounded half up. Any quality below 3 is a lapse and resets to 1 day.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from loguru import logger


@dataclass
class SM2Config:
    """Configuration for SM-2 algorithm."""

    initial_easiness: float = 2.5
    minimum_easiness: float = 1.3
    first_interval: int = 1  # Days for first review
    second_interval: int = 6  # Days for second review
    passing_quality: int = 3


DEFAULT_SM2 = SM2Config()


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (built-in round() goes to even)."""
    return math.floor(value + 0.5)


def clamp_quality(quality: float) -> float:
    """Pull a recall quality into the 0-5 scale."""
    if quality < 0 or quality > 5:
        logger.warning(f"Quality {quality} outside 0-5, clamping")
        return max(0.0, min(5.0, quality))
    return quality


def calculate_next_interval(
    current_interval: int,
    ease_factor: float,
    quality: float,
    config: SM2Config = DEFAULT_SM2,
) -> int:
    """
    Next review interval in days.

    Args:
        current_interval: Interval before this review (0 for a new item)
        ease_factor: Easiness factor before this review
        quality: Recall quality 0-5

    Returns:
        Interval in days, always >= 1
    """
    quality = clamp_quality(quality)

    if quality < config.passing_quality:
        return config.first_interval

    if current_interval == 0:
        return config.first_interval
    if current_interval == 1:
        return config.second_interval
    return max(config.first_interval, round_half_up(current_interval * ease_factor))


def update_ease_factor(
    ease_factor: float,
    quality: float,
    config: SM2Config = DEFAULT_SM2,
) -> float:
    """
    Updated easiness factor, applied on pass and fail alike.

    EF' = EF + (0.1 - (5 - q) * (0.08 + (5 - q) * 0.02)), floored at 1.3.
    """
    quality = clamp_quality(quality)
    ef_delta = 0.1 - (5 - quality) * (0.08 + (5 - quality) * 0.02)
    return max(config.minimum_easiness, ease_factor + ef_delta)


class SM2Policy:
    """
    Classic SuperMemo 2 interval policy.

    Each item has an Easiness Factor (2.5 default, min 1.3) and an interval
    in days. The policy ignores review context beyond the quality score.
    """

    name = "sm2"

    def __init__(self, config: SM2Config | None = None):
        self.config = config or SM2Config()

    def schedule(
        self,
        current_interval: int,
        ease_factor: float,
        quality: float,
        repetitions: int = 0,
        context=None,
    ) -> tuple[int, float]:
        """Return (interval, ease_factor) after one review."""
        quality = clamp_quality(quality)
        interval = calculate_next_interval(current_interval, ease_factor, quality, self.config)
        new_ease = update_ease_factor(ease_factor, quality, self.config)
        return interval, new_ease
