"""Meeting lifecycle operations for meetingscheduler."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from meetingscheduler.database.repository import MeetingRepository
from meetingscheduler.engine.validation import validate_meeting
from meetingscheduler.models.meeting import Meeting, MeetingStatus
from meetingscheduler.models.notification import NotificationType
from meetingscheduler.services.notifications import notify

logger = logging.getLogger(__name__)

# Fields a caller may change on an existing meeting
UPDATABLE_FIELDS = ("title", "description", "priority", "duration_minutes", "deadline")


class MeetingService:
    """Create, update and retire meetings for one database session."""

    def __init__(self, db: Session):
        self.db = db
        self.meetings = MeetingRepository(db)

    def list_meetings(self, user_id: str) -> List[Meeting]:
        return self.meetings.get_all(user_id)

    def list_pending(self, user_id: str) -> List[Meeting]:
        return self.meetings.get_pending(user_id)

    def create_meeting(
        self,
        user_id: str,
        *,
        title: str,
        priority: int,
        duration_minutes: int,
        deadline: Optional[datetime],
        description: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Meeting:
        """Validate and store a new pending meeting."""
        meeting = Meeting(
            id=str(uuid.uuid4()),
            user_id=user_id,
            title=title,
            description=description,
            priority=priority,
            duration_minutes=duration_minutes,
            deadline=deadline,
            status=MeetingStatus.PENDING,
        )
        validate_meeting(meeting, now=now)

        created = self.meetings.create(meeting)
        notify(self.db, user_id, NotificationType.MEETING_CREATED, f"New meeting created: {created.title}")
        return created

    def update_meeting(self, user_id: str, meeting_id: str, changes: Dict[str, Any]) -> Meeting:
        """Apply a partial update. Fields set to None are left unchanged."""
        existing = self._get_owned(user_id, meeting_id, "update")

        update = {
            field: value
            for field, value in changes.items()
            if field in UPDATABLE_FIELDS and value is not None
        }
        # Round-trip through the constructor so field constraints are re-checked.
        updated = Meeting(**{**existing.model_dump(), **update})
        if updated.duration_minutes <= 0:
            raise ValueError("Meeting duration must be positive")
        if not updated.title.strip():
            raise ValueError("Meeting title is required")

        return self.meetings.update(updated)

    def delete_meeting(self, user_id: str, meeting_id: str) -> None:
        meeting = self._get_owned(user_id, meeting_id, "delete")
        self.meetings.delete(user_id, meeting_id)
        notify(self.db, user_id, NotificationType.MEETING_CANCELLED, f"Meeting cancelled: {meeting.title}")

    def complete_meeting(self, user_id: str, meeting_id: str) -> Meeting:
        meeting = self._get_owned(user_id, meeting_id, "mark as completed")
        updated = self.meetings.update_status(user_id, meeting_id, MeetingStatus.COMPLETED)
        notify(self.db, user_id, NotificationType.MEETING_COMPLETED, f"Meeting completed: {meeting.title}")
        return updated

    def _get_owned(self, user_id: str, meeting_id: str, action: str) -> Meeting:
        meeting = self.meetings.get_any_user(meeting_id)
        if meeting is None:
            raise LookupError(f"Meeting not found with ID: {meeting_id}")
        if meeting.user_id != user_id:
            raise ValueError(f"You can only {action} your own meetings")
        return meeting
