"""
Session statistics over caller-supplied session records.

The engine never loads sessions itself; the caller passes whatever it
has stored and gets back plain summary numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Iterable


@dataclass
class SessionRecord:
    """The parts of a finished study session the statistics need."""

    start_time: datetime
    actual_duration: float = 0.0  # minutes
    focus_score: float = 0.0  # 0-100
    completion_rate: float = 0.0  # 0-100
    completed: bool = True


def summarize_sessions(
    sessions: Iterable[SessionRecord],
    days: int = 7,
    now: datetime | None = None,
) -> dict:
    """
    Totals and averages for completed sessions in the last ``days`` days.

    Averages over an empty window are 0; every figure is rounded to 2 places.
    """
    now = now or datetime.now()
    cutoff = now - timedelta(days=days)

    recent = [s for s in sessions if s.completed and s.start_time >= cutoff]
    count = len(recent)
    divisor = count or 1

    total_minutes = sum(s.actual_duration for s in recent)
    average_focus = sum(s.focus_score for s in recent) / divisor
    completion_rate = sum(s.completion_rate for s in recent) / divisor

    return {
        "total_sessions": count,
        "total_minutes": round(total_minutes, 2),
        "average_focus": round(average_focus, 2),
        "completion_rate": round(completion_rate, 2),
        "sessions_per_day": round(count / days, 2) if days > 0 else 0.0,
    }
