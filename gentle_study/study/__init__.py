"""
Study Module - spaced repetition and interleaving.

Provides:
- SM-2 and LECTOR interval policies
- Review completion (session quality, review placement, due items)
- Multi-topic interleaving and its effectiveness feedback
- Session statistics
"""

from gentle_study.study.interleaver import (
    EffectivenessReport,
    InterleaveConfig,
    InterleavingScheduler,
    analyze_effectiveness,
)
from gentle_study.study.lector import (
    LectorPolicy,
    PerformanceMetrics,
    ReviewContext,
    aggregate_performance,
    interference_factor,
    lector_interval,
)
from gentle_study.study.review import (
    ReviewOutcome,
    ReviewScheduler,
    calculate_session_quality,
    difficulty_from_quality,
    get_optimal_review_time,
    get_policy,
    items_due,
    suggest_engagement_date,
)
from gentle_study.study.sm2 import SM2Config, SM2Policy, calculate_next_interval, update_ease_factor
from gentle_study.study.session_stats import SessionRecord, summarize_sessions

__all__ = [
    "SM2Config",
    "SM2Policy",
    "calculate_next_interval",
    "update_ease_factor",
    "LectorPolicy",
    "ReviewContext",
    "PerformanceMetrics",
    "aggregate_performance",
    "interference_factor",
    "lector_interval",
    "ReviewScheduler",
    "ReviewOutcome",
    "calculate_session_quality",
    "difficulty_from_quality",
    "get_optimal_review_time",
    "get_policy",
    "items_due",
    "suggest_engagement_date",
    "InterleavingScheduler",
    "InterleaveConfig",
    "EffectivenessReport",
    "analyze_effectiveness",
    "SessionRecord",
    "summarize_sessions",
]
