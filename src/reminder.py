# src/reminder.py
import logging
import time

logger = logging.getLogger(__name__)

REMINDER_MESSAGE = "Please wear your sunscreen!"


class ReminderError(Exception):
    pass


class Reminder:
    """Sunscreen reminder popup: Idle -> Notifying -> Idle.

    Leaves Notifying on dismiss(), or on tick() once the optional
    timeout_seconds has elapsed. One instance per session.
    """

    IDLE = "idle"
    NOTIFYING = "notifying"

    def __init__(self, state=IDLE, scheduled_for=None, started_at=None, timeout_seconds=None):
        self.state = state
        self.scheduled_for = scheduled_for
        self.started_at = started_at
        self.timeout_seconds = timeout_seconds

    @property
    def is_notifying(self):
        return self.state == self.NOTIFYING

    def trigger(self, at_time, timeout_seconds=None, now=None):
        if self.is_notifying:
            raise ReminderError("A reminder is already showing.")
        if not at_time:
            raise ReminderError("Select a time for the reminder first.")
        if timeout_seconds is not None and (
            isinstance(timeout_seconds, bool)
            or not isinstance(timeout_seconds, (int, float))
            or timeout_seconds <= 0
        ):
            raise ReminderError("timeout_seconds must be a positive number")

        self.state = self.NOTIFYING
        self.scheduled_for = at_time
        self.started_at = time.time() if now is None else now
        self.timeout_seconds = timeout_seconds
        logger.info("Reminder set for %s", at_time)

    def dismiss(self):
        if not self.is_notifying:
            return False
        self.state = self.IDLE
        self.scheduled_for = None
        self.started_at = None
        self.timeout_seconds = None
        return True

    def tick(self, now=None):
        """Auto-dismiss when a timeout was given and has run out."""
        if not self.is_notifying or self.timeout_seconds is None:
            return False
        now = time.time() if now is None else now
        if now - self.started_at >= self.timeout_seconds:
            logger.debug("Reminder timed out after %ss", self.timeout_seconds)
            return self.dismiss()
        return False

    def to_dict(self):
        return {
            "state": self.state,
            "scheduled_for": self.scheduled_for,
            "started_at": self.started_at,
            "timeout_seconds": self.timeout_seconds,
            "message": REMINDER_MESSAGE if self.is_notifying else None,
        }

    @classmethod
    def from_dict(cls, data):
        if not data:
            return cls()
        return cls(
            state=data.get("state", cls.IDLE),
            scheduled_for=data.get("scheduled_for"),
            started_at=data.get("started_at"),
            timeout_seconds=data.get("timeout_seconds"),
        )
