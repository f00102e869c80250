"""
Real-time Fatigue Classification.

Recomputed on every check during a session. Three independent signals,
each scored on its own ladder (highest matching threshold wins):

- Response-time trend over the last window:  >100 / >200 / >500 ms -> 1 / 2 / 3
- Error-rate trend over the last window:     >0.05 / >0.1 / >0.2   -> 1 / 2 / 3
- Self-reported fatigue (1-10):              >=2 / >=4 / >=6 / >=8 -> 1 / 2 / 3 / 4

Total score (0-10) maps to a tier and a recommended action:
    <=2 low -> continue, <=4 moderate -> microbreak,
    <=7 high -> break,   >7 severe -> stop

Fewer than 3 samples is not enough to read a trend; the assessor then
returns a fixed low-confidence "continue".
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from loguru import logger


class FatigueTier(str, Enum):
    """Fatigue classification."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"
    SEVERE = "severe"


class InterventionAction(str, Enum):
    """Recommended intervention for a fatigue tier."""
    CONTINUE = "continue"
    MICROBREAK = "microbreak"
    BREAK = "break"
    STOP = "stop"


# (threshold, points) pairs, checked from the top
THRESHOLDS = {
    "rt_trend_ms": [(500, 3), (200, 2), (100, 1)],
    "error_trend": [(0.2, 3), (0.1, 2), (0.05, 1)],
    "self_report": [(8, 4), (6, 3), (4, 2), (2, 1)],
    # Upper score bound (inclusive) per tier
    "tiers": [
        (2, FatigueTier.LOW, InterventionAction.CONTINUE),
        (4, FatigueTier.MODERATE, InterventionAction.MICROBREAK),
        (7, FatigueTier.HIGH, InterventionAction.BREAK),
    ],
    "min_samples": 3,
    "full_confidence_samples": 10,
    "default_window": 5,
}

LOW_CONFIDENCE = 0.1


@dataclass
class FatigueAssessment:
    """
    Fatigue reading for one check.

    Attributes:
        tier: Classified fatigue tier
        action: Recommended intervention
        score: Additive score 0-10
        confidence: min(1, samples / 10)
        rt_trend: (last - first) / window over response times, ms
        error_trend: (last - first) / window over error rates
        evidence: Human-readable reasons behind the score
    """
    tier: FatigueTier = FatigueTier.LOW
    action: InterventionAction = InterventionAction.CONTINUE
    score: int = 0
    confidence: float = LOW_CONFIDENCE
    rt_trend: float = 0.0
    error_trend: float = 0.0
    evidence: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "tier": self.tier.value,
            "action": self.action.value,
            "score": self.score,
            "confidence": self.confidence,
            "rt_trend": self.rt_trend,
            "error_trend": self.error_trend,
            "evidence": self.evidence,
        }


def linear_trend(values: Sequence[float]) -> float:
    """(last - first) / window length; 0 for an empty window."""
    if not values:
        return 0.0
    return (values[-1] - values[0]) / len(values)


def _ladder_points(value: float, ladder: list[tuple[float, int]], inclusive: bool = False) -> int:
    for threshold, points in ladder:
        if value > threshold or (inclusive and value == threshold):
            return points
    return 0


def classify_score(score: int) -> tuple[FatigueTier, InterventionAction]:
    for upper, tier, action in THRESHOLDS["tiers"]:
        if score <= upper:
            return tier, action
    return FatigueTier.SEVERE, InterventionAction.STOP


def assess_fatigue(
    response_times: Sequence[float],
    error_rates: Sequence[float],
    self_reported_fatigue: float,
    window: int = THRESHOLDS["default_window"],
) -> FatigueAssessment:
    """
    Classify current fatigue from recent performance and self-report.

    Args:
        response_times: Response-time history (ms), oldest first
        error_rates: Error-rate history (0-1), oldest first
        self_reported_fatigue: 1-10
        window: How many of the most recent samples feed the trends

    Returns:
        FatigueAssessment with tier, action and confidence
    """
    history = min(len(response_times), len(error_rates))
    if history < THRESHOLDS["min_samples"]:
        return FatigueAssessment(evidence=[f"Only {history} samples, not enough to read a trend"])

    rt_window = list(response_times)[-window:]
    err_window = list(error_rates)[-window:]
    rt_trend = linear_trend(rt_window)
    error_trend = linear_trend(err_window)

    evidence = []
    rt_points = _ladder_points(rt_trend, THRESHOLDS["rt_trend_ms"])
    if rt_points:
        evidence.append(f"Response time rising {rt_trend:.0f}ms per sample")

    error_points = _ladder_points(error_trend, THRESHOLDS["error_trend"])
    if error_points:
        evidence.append(f"Error rate rising {error_trend:.2f} per sample")

    report_points = _ladder_points(self_reported_fatigue, THRESHOLDS["self_report"], inclusive=True)
    if report_points:
        evidence.append(f"Self-reported fatigue {self_reported_fatigue:g}/10")

    score = rt_points + error_points + report_points
    tier, action = classify_score(score)
    confidence = min(1.0, history / THRESHOLDS["full_confidence_samples"])

    if tier in (FatigueTier.HIGH, FatigueTier.SEVERE):
        logger.info(f"Fatigue {tier.value} (score {score}): recommending {action.value}")
    else:
        logger.debug(f"Fatigue {tier.value} (score {score})")

    return FatigueAssessment(
        tier=tier,
        action=action,
        score=score,
        confidence=confidence,
        rt_trend=rt_trend,
        error_trend=error_trend,
        evidence=evidence,
    )
