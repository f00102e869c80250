"""
gentle-study: adaptive study scheduling and spaced repetition.

Pure, synchronous functions over explicit records:
- profile/: session length, breaks, start time and daily cap from a learner profile
- study/: SM-2 and LECTOR review intervals, interleaving, statistics
- adaptive/: attention span, fatigue classification, interventions
"""

__version__ = "1.0.0"
