"""
Interleaving Scheduler for multi-topic sessions.

Implements adaptive interleaving that:
- Scores each topic by how atypical its difficulty is, how stale it is,
  and how far from mastered it is
- Keeps at most 3 topics (bounded by working-memory capacity)
- Round-robins through them (A-B-C-A-B-C) in time-boxed segments,
  giving harder topics slightly longer slots

Based on Rohrer's research showing interleaving improves discrimination
learning and long-term retention over blocked practice.

The caller's Topic records are never modified: remaining time is tracked
on a per-call working copy.
"""
from __future__ import annotations

import math
import statistics
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional, Sequence

from loguru import logger

from gentle_study.core.models import InterleavingSegment, LearnerProfile, SegmentOutcome, Topic
from gentle_study.profile.parameters import calculate_base_parameters
from gentle_study.study.sm2 import round_half_up


@dataclass
class InterleaveConfig:
    """Configuration for interleaving algorithm."""
    max_topics: int = 3
    max_segment_minutes: float = 15
    min_remaining_minutes: float = 5
    difficulty_weight: float = 0.3
    staleness_weight: float = 0.4
    staleness_days: float = 7
    mastery_weight: float = 0.3
    difficulty_step: float = 0.1  # slot length change per difficulty point above 3


@dataclass
class _WorkingTopic:
    """Per-call copy of a topic with its remaining requirement."""
    topic: Topic
    score: float
    remaining: float

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0


class InterleavingScheduler:
    """
    Builds an ordered, time-boxed sequence of topic segments.

    The algorithm:
    1. Score every topic (difficulty spread, staleness, mastery gap)
    2. Keep the top min(capacity, topic count, 3)
    3. Round-robin, each visit taking min(15, topic left, session left,
       session left / active topics) scaled by difficulty
    4. Stop once 5 minutes or less remain or every topic is done
    """

    def __init__(self, config: Optional[InterleaveConfig] = None):
        """
        Initialize scheduler with configuration.

        Args:
            config: InterleaveConfig or None for defaults
        """
        self.config = config or InterleaveConfig()

    def score_topic(self, topic: Topic, avg_difficulty: float, now: datetime) -> float:
        """Interleaving priority: higher for atypical, stale or unmastered topics."""
        cfg = self.config
        score = 1.0
        score += cfg.difficulty_weight * (abs(topic.difficulty - avg_difficulty) / 5)

        if topic.last_studied is None:
            score += cfg.staleness_weight
        else:
            days = max(0.0, (now - topic.last_studied).total_seconds() / 86400)
            score += cfg.staleness_weight * min(days / cfg.staleness_days, 1.0)

        mastery = topic.mastery_level or 0.0
        score += 1 - cfg.mastery_weight * mastery
        return score

    def select_topics(
        self,
        topics: Sequence[Topic],
        capacity: float,
        now: datetime,
    ) -> list[_WorkingTopic]:
        """Score, sort descending and keep the top topics as working copies."""
        avg_difficulty = statistics.fmean(t.difficulty for t in topics)
        scored = [
            _WorkingTopic(topic=t, score=self.score_topic(t, avg_difficulty, now), remaining=t.time_required)
            for t in topics
        ]
        scored.sort(key=lambda w: w.score, reverse=True)

        keep = max(1, math.floor(min(capacity, len(scored), self.config.max_topics)))
        return scored[:keep]

    def schedule(
        self,
        topics: Sequence[Topic],
        total_minutes: float,
        profile: LearnerProfile,
        now: datetime | None = None,
    ) -> list[InterleavingSegment]:
        """
        Plan an interleaved session.

        Args:
            topics: Candidate topics (not modified)
            total_minutes: Session budget
            profile: Learner profile; its working-memory capacity bounds topic count
            now: Reference time for staleness (defaults to now)

        Returns:
            Segments in study order
        """
        if not topics or total_minutes <= 0:
            return []

        if len(topics) == 1:
            only = topics[0]
            return [
                InterleavingSegment(
                    topic_id=only.id,
                    duration=min(only.time_required, total_minutes),
                    order=0,
                    rationale=f"Focused block on {only.name}: nothing to interleave with",
                )
            ]

        now = now or datetime.now()
        capacity = calculate_base_parameters(profile).working_memory_capacity
        selected = self.select_topics(topics, capacity, now)

        segments: list[InterleavingSegment] = []
        remaining_session = float(total_minutes)
        index = 0
        previous: Topic | None = None

        while remaining_session > self.config.min_remaining_minutes:
            active = [w for w in selected if not w.exhausted]
            if not active:
                break

            current = selected[index % len(selected)]
            index += 1
            if current.exhausted:
                continue

            base = min(
                self.config.max_segment_minutes,
                current.remaining,
                remaining_session,
                remaining_session / len(active),
            )
            multiplier = 1 + self.config.difficulty_step * (current.topic.difficulty - 3)
            duration = min(round_half_up(base * multiplier), math.floor(remaining_session))

            if duration <= 0:
                current.remaining = 0
                continue

            current.remaining = max(0.0, current.remaining - duration)
            remaining_session -= duration

            segments.append(
                InterleavingSegment(
                    topic_id=current.topic.id,
                    duration=duration,
                    order=len(segments),
                    rationale=self._rationale(current.topic, previous, len(segments)),
                )
            )
            previous = current.topic

        logger.info(
            f"Interleaved {len(selected)}/{len(topics)} topics into {len(segments)} segments "
            f"({total_minutes - remaining_session:.0f}/{total_minutes:.0f} min)"
        )
        return segments

    def _rationale(self, topic: Topic, previous: Topic | None, position: int) -> str:
        """Human-readable reason for a segment, chosen by its position."""
        if position == 0:
            if topic.difficulty >= 4:
                return f"Starting with {topic.name} while attention is fresh: it is the most demanding topic"
            if topic.last_studied is None:
                return f"Starting with {topic.name} because it is new material"
            return f"Starting with {topic.name}, the topic most in need of practice"

        if previous is not None and previous.id != topic.id:
            return (
                f"Switching from {previous.name} to {topic.name} to sharpen discrimination "
                f"between the two"
            )
        return f"Returning to {topic.name} after spacing, which limits interference"

    def get_session_summary(self, segments: Sequence[InterleavingSegment]) -> dict:
        """
        Get summary of an interleaved session.

        Args:
            segments: Output of schedule()

        Returns:
            Dictionary with session stats
        """
        per_topic: dict[str, float] = {}
        for segment in segments:
            per_topic[segment.topic_id] = per_topic.get(segment.topic_id, 0) + segment.duration

        switches = sum(
            1 for a, b in zip(segments, segments[1:]) if a.topic_id != b.topic_id
        )
        return {
            "total_segments": len(segments),
            "total_minutes": sum(s.duration for s in segments),
            "minutes_per_topic": per_topic,
            "topic_switches": switches,
        }


# =============================================================================
# Effectiveness feedback
# =============================================================================

BUCKET_MINUTES = 5
MIN_BUCKET_SAMPLES = 2
DEFAULT_SEGMENT_MINUTES = 15


@dataclass
class EffectivenessReport:
    """Whether interleaving is helping, from a log of past segments."""
    average_performance: float = 0.5
    switching_benefit: float = 0.0
    recommended_duration: float = DEFAULT_SEGMENT_MINUTES
    sample_size: int = 0
    bucket_performance: dict[int, float] = field(default_factory=dict)
    message: str = "Need more data: complete a few more interleaved sessions"

    def to_dict(self) -> dict:
        return {
            "average_performance": self.average_performance,
            "switching_benefit": self.switching_benefit,
            "recommended_duration": self.recommended_duration,
            "sample_size": self.sample_size,
            "bucket_performance": dict(self.bucket_performance),
            "message": self.message,
        }


def analyze_effectiveness(history: Sequence[SegmentOutcome]) -> EffectivenessReport:
    """
    Score past interleaved segments.

    - average_performance: mean of all segment performances
    - switching_benefit: mean(switched-into) - mean(not switched)
    - recommended_duration: start of the best 5-minute duration bucket
      with at least 2 samples

    Fewer than 2 entries returns the neutral defaults.
    """
    if len(history) < 2:
        return EffectivenessReport(sample_size=len(history))

    average = statistics.fmean(h.performance for h in history)

    switched = [h.performance for h in history if h.switched_from]
    stayed = [h.performance for h in history if not h.switched_from]
    benefit = 0.0
    if switched and stayed:
        benefit = statistics.fmean(switched) - statistics.fmean(stayed)

    buckets: dict[int, list[float]] = {}
    for h in history:
        bucket = int(h.duration // BUCKET_MINUTES) * BUCKET_MINUTES
        buckets.setdefault(bucket, []).append(h.performance)

    bucket_performance = {
        bucket: statistics.fmean(values)
        for bucket, values in buckets.items()
        if len(values) >= MIN_BUCKET_SAMPLES
    }

    recommended: float = DEFAULT_SEGMENT_MINUTES
    if bucket_performance:
        best = max(bucket_performance, key=lambda b: bucket_performance[b])
        recommended = max(BUCKET_MINUTES, best)

    if benefit > 0.05:
        message = "Interleaving is helping: switching topics improves performance"
    elif benefit < -0.05:
        message = "Switching topics is costing performance: try longer segments"
    else:
        message = "Interleaving shows no clear effect yet"

    report = EffectivenessReport(
        average_performance=average,
        switching_benefit=benefit,
        recommended_duration=recommended,
        sample_size=len(history),
        bucket_performance=bucket_performance,
        message=message,
    )
    logger.debug(
        f"Interleaving feedback: avg={average:.2f} benefit={benefit:+.2f} "
        f"recommended={recommended}min"
    )
    return report
