"""Input validation for meetingscheduler.

The engine assumes well-formed input. These checks run where meetings and
availability enter the system, before anything reaches optimize().
"""

from datetime import datetime
from typing import Optional

from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.constants import MIN_PRIORITY, MAX_PRIORITY
from meetingscheduler.models.meeting import Meeting


def validate_meeting(meeting: Meeting, now: Optional[datetime] = None) -> None:
    """Raise ValueError if a meeting cannot be accepted for scheduling."""
    if now is None:
        now = datetime.utcnow()

    if not meeting.title or not meeting.title.strip():
        raise ValueError("Meeting title is required")

    if meeting.priority < MIN_PRIORITY or meeting.priority > MAX_PRIORITY:
        raise ValueError(f"Meeting priority must be between {MIN_PRIORITY} and {MAX_PRIORITY}")

    if meeting.duration_minutes <= 0:
        raise ValueError("Meeting duration must be positive")

    if meeting.deadline is None:
        raise ValueError("Meeting deadline is required")

    if meeting.deadline < now:
        raise ValueError("Meeting deadline cannot be in the past")


def validate_availability(window: AvailabilityWindow, now: Optional[datetime] = None) -> None:
    """Raise ValueError if an availability window cannot be accepted."""
    if now is None:
        now = datetime.utcnow()

    if window.end_time <= window.start_time:
        raise ValueError("End time must be after start time")

    if window.start_time < now:
        raise ValueError("Start time cannot be in the past")
