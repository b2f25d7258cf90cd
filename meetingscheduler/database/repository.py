"""Repository layer for meeting database operations."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from meetingscheduler.models.meeting import Meeting, MeetingStatus
from meetingscheduler.database.models import MeetingDB, enum_to_value

logger = logging.getLogger(__name__)


class MeetingRepository:
    """Repository for Meeting database operations."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def create(self, meeting: Meeting) -> Meeting:
        """Create a new meeting."""
        try:
            meeting_db = MeetingDB.from_pydantic(meeting)
            self.db.add(meeting_db)
            self.db.commit()
            self.db.refresh(meeting_db)
            logger.debug(f"Created meeting {meeting.id}: {meeting.title[:50]}")
            return meeting_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create meeting {meeting.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def get(self, user_id: str, meeting_id: str) -> Optional[Meeting]:
        """Get meeting by ID for a specific user."""
        meeting_db = self.db.query(MeetingDB).filter(
            MeetingDB.id == meeting_id,
            MeetingDB.user_id == user_id,
        ).first()
        return meeting_db.to_pydantic() if meeting_db else None

    def get_any_user(self, meeting_id: str) -> Optional[Meeting]:
        """Get meeting by ID regardless of owner (for ownership checks)."""
        meeting_db = self.db.query(MeetingDB).filter(MeetingDB.id == meeting_id).first()
        return meeting_db.to_pydantic() if meeting_db else None
    
    def get_all(self, user_id: str) -> List[Meeting]:
        """Get all meetings for a user sorted by creation date (newest first)."""
        meetings_db = self.db.query(MeetingDB).filter(
            MeetingDB.user_id == user_id,
        ).order_by(desc(MeetingDB.created_at)).all()
        return [m.to_pydantic() for m in meetings_db]
    
    def get_pending(self, user_id: str) -> List[Meeting]:
        """Get pending meetings for a user, highest priority then earliest deadline first."""
        meetings_db = self.db.query(MeetingDB).filter(
            MeetingDB.user_id == user_id,
            MeetingDB.status == MeetingStatus.PENDING.value,
        ).order_by(desc(MeetingDB.priority), MeetingDB.deadline, MeetingDB.created_at).all()
        return [m.to_pydantic() for m in meetings_db]
    
    def update(self, meeting: Meeting, commit: bool = True) -> Meeting:
        """Update an existing meeting (user_id must match meeting.user_id).

        With commit=False the change is only flushed; the caller owns the transaction.
        """
        meeting_db = self.db.query(MeetingDB).filter(
            MeetingDB.id == meeting.id,
            MeetingDB.user_id == meeting.user_id,
        ).first()
        if not meeting_db:
            raise ValueError(f"Meeting {meeting.id} not found")
        
        meeting_db.title = meeting.title
        meeting_db.description = meeting.description
        meeting_db.priority = meeting.priority
        meeting_db.duration_minutes = meeting.duration_minutes
        meeting_db.deadline = meeting.deadline
        meeting_db.status = enum_to_value(meeting.status)
        
        try:
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            self.db.refresh(meeting_db)
            logger.debug(f"Updated meeting {meeting.id}: {meeting.title[:50]}")
            return meeting_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update meeting {meeting.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def update_status(
        self,
        user_id: str,
        meeting_id: str,
        status: MeetingStatus,
        commit: bool = True,
    ) -> Optional[Meeting]:
        """Set a meeting's status. Returns None if the meeting does not exist."""
        meeting = self.get(user_id, meeting_id)
        if meeting is None:
            return None
        return self.update(meeting.with_status(status), commit=commit)
    
    def delete(self, user_id: str, meeting_id: str) -> bool:
        """Delete a meeting by ID for a specific user."""
        meeting_db = self.db.query(MeetingDB).filter(
            MeetingDB.id == meeting_id,
            MeetingDB.user_id == user_id,
        ).first()
        if not meeting_db:
            return False
        
        try:
            self.db.delete(meeting_db)
            self.db.commit()
            logger.debug(f"Deleted meeting {meeting_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete meeting {meeting_id}: {type(e).__name__}: {str(e)}")
            raise
