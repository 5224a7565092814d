"""
Tests for the sunscreen reminder state machine.
"""
import pytest

from reminder import REMINDER_MESSAGE, Reminder, ReminderError


class TestReminder:

    def test_starts_idle(self):
        reminder = Reminder()

        assert reminder.state == Reminder.IDLE
        assert reminder.to_dict()["message"] is None

    def test_trigger_and_dismiss(self):
        reminder = Reminder()

        reminder.trigger("14:30", now=100.0)

        assert reminder.is_notifying
        assert reminder.scheduled_for == "14:30"
        assert reminder.to_dict()["message"] == REMINDER_MESSAGE
        assert reminder.dismiss() is True
        assert reminder.state == Reminder.IDLE
        assert reminder.scheduled_for is None

    def test_requires_time(self):
        with pytest.raises(ReminderError):
            Reminder().trigger("")

    def test_no_duplicate_popup(self):
        reminder = Reminder()
        reminder.trigger("09:00")

        with pytest.raises(ReminderError):
            reminder.trigger("10:00")
        assert reminder.scheduled_for == "09:00"

    def test_dismiss_when_idle_is_noop(self):
        assert Reminder().dismiss() is False

    def test_without_timeout_stays_until_dismissed(self):
        reminder = Reminder()
        reminder.trigger("09:00", now=0.0)

        assert reminder.tick(now=10_000.0) is False
        assert reminder.is_notifying

    def test_timeout_auto_dismisses(self):
        reminder = Reminder()
        reminder.trigger("09:00", timeout_seconds=3, now=50.0)

        assert reminder.tick(now=52.0) is False
        assert reminder.is_notifying
        assert reminder.tick(now=53.0) is True
        assert reminder.state == Reminder.IDLE

    @pytest.mark.parametrize("timeout", [0, -1, "3", True])
    def test_bad_timeout(self, timeout):
        reminder = Reminder()

        with pytest.raises(ReminderError):
            reminder.trigger("09:00", timeout_seconds=timeout)
        assert reminder.state == Reminder.IDLE

    def test_round_trip_through_dict(self):
        reminder = Reminder()
        reminder.trigger("18:00", timeout_seconds=5, now=1.0)

        restored = Reminder.from_dict(reminder.to_dict())

        assert restored.is_notifying
        assert restored.timeout_seconds == 5
        assert restored.tick(now=6.0) is True
        assert Reminder.from_dict({}).state == Reminder.IDLE
