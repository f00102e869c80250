"""
Adaptive Module - attention, fatigue and interventions.

Components:
- assess_attention_span: SART-style sustained attention estimate
- assess_fatigue: Real-time fatigue tier and recommended action
- interventions: Adaptive triggers and fatigue responses for a notifier
"""
from gentle_study.adaptive.attention import assess_attention_span
from gentle_study.adaptive.fatigue import (
    FatigueAssessment,
    FatigueTier,
    InterventionAction,
    assess_fatigue,
)
from gentle_study.adaptive.interventions import (
    FatigueResponse,
    InterventionMessage,
    Notifier,
    TriggerContext,
    TriggerType,
    dispatch,
    get_adaptive_trigger,
    optimal_notification_times,
    plan_fatigue_response,
)

__all__ = [
    "assess_attention_span",
    "assess_fatigue",
    "FatigueAssessment",
    "FatigueTier",
    "InterventionAction",
    "get_adaptive_trigger",
    "plan_fatigue_response",
    "optimal_notification_times",
    "dispatch",
    "FatigueResponse",
    "InterventionMessage",
    "Notifier",
    "TriggerContext",
    "TriggerType",
]
