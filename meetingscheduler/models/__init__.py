"""Data models for meetingscheduler."""

from meetingscheduler.models.meeting import Meeting, MeetingStatus
from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.placement import OccupiedInterval, Placement
from meetingscheduler.models.schedule import Schedule
from meetingscheduler.models.notification import Notification, NotificationType

__all__ = [
    "Meeting",
    "MeetingStatus",
    "AvailabilityWindow",
    "OccupiedInterval",
    "Placement",
    "Schedule",
    "Notification",
    "NotificationType",
]
