"""
LECTOR - Extended Multiplicative Interval Model.

Layers four adjustments on top of a base SM-2 interval:

    interval' = round(max(1, base
                          * clamp(semantic,   0.8, 1.2)
                          * clamp(mastery,    0.5, 2.0)
                          * clamp(1 + 0.02 * repetitions, 0.9, 1.1)
                          * clamp(personal,   0.7, 1.5)
                          * age_adjustment))

- semantic: interference from recently studied, similar concepts
- mastery: accuracy + completion performance
- personal: response-time consistency (lower variance, higher factor)
- age_adjustment: 0.85 under 18, 0.9 over 60, else 1.0

Based on research from:
- Underwood (1957): proactive interference
- Pashler et al. (2007): spacing and individual differences
"""

from __future__ import annotations

import statistics
from dataclasses import dataclass, field
from typing import Mapping, Sequence

from loguru import logger

from gentle_study.study.sm2 import (
    SM2Config,
    calculate_next_interval,
    clamp_quality,
    round_half_up,
    update_ease_factor,
)

# Multiplier clamp ranges
SEMANTIC_RANGE = (0.8, 1.2)
MASTERY_RANGE = (0.5, 2.0)
REPETITION_RANGE = (0.9, 1.1)
PERSONAL_RANGE = (0.7, 1.5)

REPETITION_STEP = 0.02
INTERFERENCE_SLOPE = 0.4

# Neutral defaults when there is nothing to measure
NEUTRAL_MASTERY = 1.0
NEUTRAL_PERSONAL = 1.0
NEUTRAL_CONSISTENCY = 0.5


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def age_adjustment(age: int | None) -> float:
    """Younger and older learners get slightly shorter intervals."""
    if age is None:
        return 1.0
    if age < 18:
        return 0.85
    if age > 60:
        return 0.9
    return 1.0


# =============================================================================
# Semantic interference
# =============================================================================


def tokenize(text: str) -> set[str]:
    """Lowercase whitespace-separated word set."""
    return set(text.lower().split())


def word_overlap_similarity(a: str, b: str) -> float:
    """Intersection-over-union of the two word sets (0 when both are empty)."""
    words_a = tokenize(a)
    words_b = tokenize(b)
    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def interference_factor(
    concept: str,
    recent_concepts: Sequence[str],
    similarity_matrix: Mapping[tuple[str, str], float] | None = None,
    window: int = 10,
) -> float:
    """
    Semantic interference factor for a concept.

    Compares the concept against the most recent ``window`` studied concepts.
    A caller-supplied similarity matrix is consulted first (either key order);
    pairs missing from it fall back to word overlap.

    Returns:
        1.0 + 0.4 * max_similarity, kept inside 0.8-1.2
    """
    recent = list(recent_concepts)[-window:] if window > 0 else []
    if not recent:
        return 1.0

    max_similarity = 0.0
    for other in recent:
        similarity = None
        if similarity_matrix is not None:
            similarity = similarity_matrix.get((concept, other))
            if similarity is None:
                similarity = similarity_matrix.get((other, concept))
        if similarity is None:
            similarity = word_overlap_similarity(concept, other)
        max_similarity = max(max_similarity, clamp(similarity, 0.0, 1.0))

    return clamp(1.0 + INTERFERENCE_SLOPE * max_similarity, *SEMANTIC_RANGE)


# =============================================================================
# Performance metrics
# =============================================================================


@dataclass
class PerformanceMetrics:
    """Aggregated performance factors for one learner on one item."""

    mastery: float = NEUTRAL_MASTERY
    personal: float = NEUTRAL_PERSONAL
    consistency: float = NEUTRAL_CONSISTENCY


def coefficient_of_variation(values: Sequence[float]) -> float | None:
    """Population stdev / mean, or None when it is undefined."""
    if len(values) < 2:
        return None
    mean = statistics.fmean(values)
    if mean <= 0:
        return None
    return statistics.pstdev(values) / mean


def aggregate_performance(
    accuracies: Sequence[float] = (),
    completion_rates: Sequence[float] = (),
    response_times: Sequence[float] = (),
) -> PerformanceMetrics:
    """
    Fold raw performance history into LECTOR factors.

    Args:
        accuracies: Per-session accuracy, 0-100
        completion_rates: Per-session completion rate, 0-100
        response_times: Response times in ms

    Returns:
        PerformanceMetrics; neutral values for anything that cannot be measured
    """
    metrics = PerformanceMetrics()

    if accuracies or completion_rates:
        avg_accuracy = statistics.fmean(accuracies) if accuracies else 0.0
        avg_completion = statistics.fmean(completion_rates) if completion_rates else 0.0
        metrics.mastery = clamp((avg_accuracy + avg_completion) / 100, *MASTERY_RANGE)

    cv = coefficient_of_variation(response_times)
    if cv is not None:
        metrics.personal = clamp(1.5 - cv, *PERSONAL_RANGE)
        metrics.consistency = clamp(1.0 - cv, 0.0, 1.0)

    return metrics


# =============================================================================
# Interval model
# =============================================================================


def lector_interval(
    base_interval: float,
    semantic: float = 1.0,
    mastery: float = 1.0,
    repetitions: int = 0,
    personal: float = 1.0,
    age: int | None = None,
) -> int:
    """Apply the clamped multipliers to a base interval. Always >= 1."""
    factor = (
        clamp(semantic, *SEMANTIC_RANGE)
        * clamp(mastery, *MASTERY_RANGE)
        * clamp(1 + REPETITION_STEP * repetitions, *REPETITION_RANGE)
        * clamp(personal, *PERSONAL_RANGE)
        * age_adjustment(age)
    )
    return round_half_up(max(1.0, base_interval * factor))


@dataclass
class ReviewContext:
    """Everything LECTOR may consult beyond the quality score."""

    age: int | None = None
    concept: str = ""
    recent_concepts: list[str] = field(default_factory=list)
    similarity_matrix: dict[tuple[str, str], float] | None = None
    accuracies: list[float] = field(default_factory=list)
    completion_rates: list[float] = field(default_factory=list)
    response_times: list[float] = field(default_factory=list)


class LectorPolicy:
    """
    LECTOR interval policy.

    The SM-2 interval is the base; the ease factor follows the SM-2 update
    unchanged. A lapse (quality < 3) still resets to one day.
    """

    name = "lector"

    def __init__(self, config: SM2Config | None = None, interference_window: int = 10):
        self.config = config or SM2Config()
        self.interference_window = interference_window

    def schedule(
        self,
        current_interval: int,
        ease_factor: float,
        quality: float,
        repetitions: int = 0,
        context: ReviewContext | None = None,
    ) -> tuple[int, float]:
        """Return (interval, ease_factor) after one review."""
        context = context or ReviewContext()
        quality = clamp_quality(quality)

        base = calculate_next_interval(current_interval, ease_factor, quality, self.config)
        new_ease = update_ease_factor(ease_factor, quality, self.config)

        if quality < self.config.passing_quality:
            return self.config.first_interval, new_ease

        semantic = 1.0
        if context.concept:
            semantic = interference_factor(
                context.concept,
                context.recent_concepts,
                context.similarity_matrix,
                window=self.interference_window,
            )
        metrics = aggregate_performance(
            context.accuracies, context.completion_rates, context.response_times
        )

        interval = lector_interval(
            base,
            semantic=semantic,
            mastery=metrics.mastery,
            repetitions=repetitions,
            personal=metrics.personal,
            age=context.age,
        )

        logger.debug(
            f"LECTOR: base={base} semantic={semantic:.2f} mastery={metrics.mastery:.2f} "
            f"reps={repetitions} personal={metrics.personal:.2f} -> {interval}d"
        )
        return interval, new_ease
