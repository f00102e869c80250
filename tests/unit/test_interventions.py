"""
Unit tests for adaptive triggers, fatigue responses and dispatch.
"""

import pytest

from gentle_study.adaptive import (
    TriggerContext,
    TriggerType,
    dispatch,
    get_adaptive_trigger,
    optimal_notification_times,
    plan_fatigue_response,
)
from gentle_study.adaptive.interventions import break_message, microbreak_message, resume_message
from gentle_study.core.models import Chronotype


class RecordingNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, message):
        self.sent.append(message)


class TestAdaptiveTrigger:
    @pytest.mark.parametrize(
        "motivation,ability,expected",
        [
            (2, 2, TriggerType.SPARK),
            (4, 2, TriggerType.FACILITATOR),
            (1, 4, TriggerType.SIGNAL),
            (5, 3, TriggerType.SIGNAL),
        ],
    )
    def test_trigger_family(self, motivation, ability, expected):
        assert get_adaptive_trigger(motivation, ability, TriggerContext.START).trigger == expected

    def test_message_text(self):
        message = get_adaptive_trigger(2, 2, TriggerContext.START)
        assert message.body == "Every expert was once a beginner. Start small and build momentum!"
        assert message.action == "Start with just 5 minutes"
        assert message.tag == "start"

    def test_context_accepts_plain_string(self):
        message = get_adaptive_trigger(4, 4, "break")
        assert message.body == "Break time: Step away for optimal recovery."

    @pytest.mark.parametrize(
        "motivation,ability,body",
        [
            (2, 2, "Keep going!"),
            (4, 2, "You can do this!"),
            (4, 4, "Continue your session."),
        ],
    )
    def test_unknown_context_falls_back(self, motivation, ability, body):
        message = get_adaptive_trigger(motivation, ability, "lunch")
        assert message.body == body
        assert message.tag == "lunch"


class TestFatigueResponse:
    def test_critical_fatigue_starts_break(self):
        response = plan_fatigue_response(8, elapsed_minutes=10, planned_duration=60)
        assert response.start_break is True
        assert response.messages[0].title == "Critical Fatigue Detected"
        # Early high fatigue also suggests shorter sessions: max(15, 60 * 0.85)
        assert response.recommended_session_length == pytest.approx(51)
        assert response.messages[-1].body == "Consider 51-minute sessions for better focus"

    def test_critical_fatigue_on_break(self):
        response = plan_fatigue_response(9, elapsed_minutes=10, planned_duration=60, on_break=True)
        assert response.start_break is False
        assert [m.tag for m in response.messages] == ["optimization"]

    def test_high_fatigue_sends_trigger_and_microbreak(self):
        response = plan_fatigue_response(6, elapsed_minutes=20, planned_duration=50)
        assert [m.tag for m in response.messages] == ["fatigue", "microbreak"]
        assert response.messages[0].body == "Halfway through! Maintain your focus."
        assert response.recommended_session_length is None

    def test_high_fatigue_early_has_no_microbreak(self):
        response = plan_fatigue_response(6, elapsed_minutes=10, planned_duration=50)
        assert [m.tag for m in response.messages] == ["fatigue"]

    def test_fatigue_seven_late_in_session(self):
        response = plan_fatigue_response(7, elapsed_minutes=40, planned_duration=50)
        assert [m.tag for m in response.messages] == ["fatigue", "microbreak"]

    def test_moderate_fatigue_wellness_note(self):
        response = plan_fatigue_response(4, elapsed_minutes=5, planned_duration=50)
        assert [m.tag for m in response.messages] == ["wellness"]

    def test_low_fatigue_no_messages(self):
        response = plan_fatigue_response(2, elapsed_minutes=30, planned_duration=50)
        assert response.messages == []
        assert response.start_break is False


class TestMessages:
    def test_timer_messages(self):
        assert break_message().tag == "break"
        assert resume_message().tag == "resume"
        assert "40 seconds" in microbreak_message().body
        assert "20 seconds" in microbreak_message(20).body

    def test_notification_times(self):
        assert optimal_notification_times(Chronotype.MORNING) == [360, 480, 600, 840]
        assert optimal_notification_times(None) == [480, 660, 900, 1200]

    def test_to_dict(self):
        data = get_adaptive_trigger(4, 2, TriggerContext.DURING).to_dict()
        assert data["trigger"] == "facilitator"
        assert data["body"] == "Focus on one concept at a time. You've got this!"


class TestDispatch:
    def test_delivers_every_message(self):
        notifier = RecordingNotifier()
        messages = plan_fatigue_response(6, elapsed_minutes=20, planned_duration=50).messages
        assert dispatch(messages, notifier) == 2
        assert notifier.sent == messages

    def test_no_notifier(self):
        assert dispatch([break_message()], None) == 0
