"""
Just-in-Time Adaptive Interventions.

The engine decides *that* and *when* an intervention is warranted and
returns message descriptors. Presenting them is the job of a notification
collaborator, passed in as a Notifier at the boundary; nothing here holds
one.

Trigger selection follows Fogg's Behavior Model (B = MAT):
- low motivation, low ability   -> spark       (get started)
- high motivation, low ability  -> facilitator (make it easy)
- high ability                  -> signal      (just a reminder)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

from loguru import logger

from gentle_study.core.models import Chronotype


class TriggerType(str, Enum):
    SPARK = "spark"
    FACILITATOR = "facilitator"
    SIGNAL = "signal"


class TriggerContext(str, Enum):
    START = "start"
    DURING = "during"
    BREAK = "break"


@dataclass
class InterventionMessage:
    """Descriptor handed to the notification collaborator."""

    title: str
    body: str
    tag: str
    trigger: TriggerType | None = None
    action: str | None = None
    actions: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "body": self.body,
            "tag": self.tag,
            "trigger": self.trigger.value if self.trigger else None,
            "action": self.action,
            "actions": self.actions,
        }


class Notifier(Protocol):
    """Notification capability supplied by the caller."""

    def notify(self, message: InterventionMessage) -> None: ...


MESSAGES: dict[TriggerType, dict[TriggerContext, str]] = {
    TriggerType.SPARK: {
        TriggerContext.START: "Every expert was once a beginner. Start small and build momentum!",
        TriggerContext.DURING: "You're making progress! Each minute counts toward your goal.",
        TriggerContext.BREAK: "Great work! You've earned this break. Recharge and come back stronger.",
    },
    TriggerType.FACILITATOR: {
        TriggerContext.START: "Everything is set up for you. Just open your materials and begin.",
        TriggerContext.DURING: "Focus on one concept at a time. You've got this!",
        TriggerContext.BREAK: "Step away from your desk. A short walk will refresh your mind.",
    },
    TriggerType.SIGNAL: {
        TriggerContext.START: "Time to study: Your scheduled session begins now.",
        TriggerContext.DURING: "Halfway through! Maintain your focus.",
        TriggerContext.BREAK: "Break time: Step away for optimal recovery.",
    },
}

# Used when the context is not one of start/during/break
FALLBACK_MESSAGES = {
    TriggerType.SPARK: "Keep going!",
    TriggerType.FACILITATOR: "You can do this!",
    TriggerType.SIGNAL: "Continue your session.",
}

TRIGGER_ACTIONS = {
    TriggerType.SPARK: "Start with just 5 minutes",
    TriggerType.FACILITATOR: "Your materials are ready",
    TriggerType.SIGNAL: "Study time",
}

# Minutes from midnight
NOTIFICATION_TIMES: dict[Chronotype, list[int]] = {
    Chronotype.MORNING: [360, 480, 600, 840],
    Chronotype.EVENING: [600, 780, 1020, 1320],
    Chronotype.INTERMEDIATE: [480, 660, 900, 1200],
}

MOTIVATION_THRESHOLD = 3
ABILITY_THRESHOLD = 3


def get_adaptive_trigger(
    motivation: float,
    ability: float,
    context: TriggerContext | str,
) -> InterventionMessage:
    """
    Pick the trigger family for a motivation/ability pair and fill in its message.

    An unrecognized context gets the family's generic encouragement.
    """
    try:
        known: TriggerContext | None = TriggerContext(context)
    except ValueError:
        known = None

    if ability < ABILITY_THRESHOLD:
        trigger = TriggerType.SPARK if motivation < MOTIVATION_THRESHOLD else TriggerType.FACILITATOR
    else:
        trigger = TriggerType.SIGNAL

    return InterventionMessage(
        title=trigger.value.title(),
        body=MESSAGES[trigger][known] if known is not None else FALLBACK_MESSAGES[trigger],
        tag=known.value if known is not None else str(context),
        trigger=trigger,
        action=TRIGGER_ACTIONS[trigger],
    )


def optimal_notification_times(chronotype: Chronotype | None) -> list[int]:
    return list(NOTIFICATION_TIMES[chronotype or Chronotype.INTERMEDIATE])


# =============================================================================
# Session timer messages
# =============================================================================


def break_message() -> InterventionMessage:
    return InterventionMessage(
        title="Time for a Break!",
        body="Your study session is complete. Take a break to maintain optimal performance.",
        tag="break",
        actions=[
            {"action": "start-break", "title": "Start Break"},
            {"action": "snooze-5", "title": "Snooze 5 min"},
        ],
    )


def resume_message() -> InterventionMessage:
    return InterventionMessage(
        title="Ready to Resume?",
        body="Your break is over. Time to get back to studying!",
        tag="resume",
        actions=[
            {"action": "resume", "title": "Resume Study"},
            {"action": "extend-break", "title": "Extend Break"},
        ],
    )


def microbreak_message(duration_seconds: int = 40) -> InterventionMessage:
    return InterventionMessage(
        title="Microbreak Time",
        body=f"Take {duration_seconds} seconds to look away from the screen or view nature.",
        tag="microbreak",
        actions=[{"action": "done", "title": "Done"}],
    )


# =============================================================================
# Fatigue response
# =============================================================================


@dataclass
class FatigueResponse:
    """What to do about a self-reported fatigue level."""

    start_break: bool = False
    messages: list[InterventionMessage] = field(default_factory=list)
    recommended_session_length: float | None = None


def plan_fatigue_response(
    fatigue_level: float,
    elapsed_minutes: float,
    planned_duration: float,
    on_break: bool = False,
) -> FatigueResponse:
    """
    Decide the intervention for a self-reported fatigue level (1-10).

    >=8 starts a break immediately, >=6 sends an adaptive trigger (and a
    microbreak after 15 minutes), >=4 a gentle wellness note. Fatigue of 7+
    before the halfway mark also suggests shorter future sessions.
    """
    response = FatigueResponse()

    if fatigue_level >= 8:
        if not on_break:
            response.start_break = True
            response.messages.append(
                InterventionMessage(
                    title="Critical Fatigue Detected",
                    body="Starting immediate break to prevent burnout",
                    tag="fatigue",
                )
            )
    elif fatigue_level >= 6:
        trigger = get_adaptive_trigger(10 - fatigue_level, ABILITY_THRESHOLD, TriggerContext.DURING)
        response.messages.append(
            InterventionMessage(
                title="High Fatigue Detected",
                body=trigger.body,
                tag="fatigue",
                trigger=trigger.trigger,
                action=trigger.action,
            )
        )
        if not on_break and elapsed_minutes >= 15:
            response.messages.append(microbreak_message())
    elif fatigue_level >= 4:
        response.messages.append(
            InterventionMessage(
                title="Take Care",
                body="Consider a short break or some deep breaths",
                tag="wellness",
            )
        )

    if fatigue_level >= 7 and elapsed_minutes < planned_duration * 0.5:
        recommended = max(15.0, planned_duration * 0.85)
        response.recommended_session_length = recommended
        response.messages.append(
            InterventionMessage(
                title="Session Optimization",
                body=f"Consider {round(recommended)}-minute sessions for better focus",
                tag="optimization",
            )
        )

    if response.messages:
        logger.info(
            f"Fatigue {fatigue_level:g}/10 at {elapsed_minutes:.0f}min: "
            f"{len(response.messages)} intervention(s), break={response.start_break}"
        )
    return response


def dispatch(messages: Iterable[InterventionMessage], notifier: Notifier | None) -> int:
    """
    Hand messages to the notification collaborator.

    Returns:
        Number of messages delivered (0 when no notifier is available)
    """
    if notifier is None:
        return 0

    sent = 0
    for message in messages:
        notifier.notify(message)
        sent += 1
    return sent
