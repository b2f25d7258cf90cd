"""Repository for Schedule database operations."""

import logging
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from meetingscheduler.models.schedule import Schedule
from meetingscheduler.database.models import ScheduleDB

logger = logging.getLogger(__name__)


class ScheduleRepository:
    """Repository for Schedule database operations."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def create(self, schedule: Schedule, commit: bool = True) -> Schedule:
        """Create a new schedule.

        With commit=False the row is only flushed; the caller owns the transaction.
        """
        try:
            schedule_db = ScheduleDB.from_pydantic(schedule)
            self.db.add(schedule_db)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            self.db.refresh(schedule_db)
            logger.debug(f"Created schedule {schedule.id} for meeting {schedule.meeting_id}")
            return schedule_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create schedule {schedule.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def get_all(self, user_id: str) -> List[Schedule]:
        """Get all schedules for a user, highest optimization score first."""
        rows = self.db.query(ScheduleDB).filter(
            ScheduleDB.user_id == user_id
        ).order_by(desc(ScheduleDB.optimization_score), ScheduleDB.scheduled_start).all()
        return [row.to_pydantic() for row in rows]
    
    def get_for_meeting(self, user_id: str, meeting_id: str) -> Optional[Schedule]:
        """Get the schedule of a meeting (user-scoped)."""
        row = self.db.query(ScheduleDB).filter(
            ScheduleDB.user_id == user_id,
            ScheduleDB.meeting_id == meeting_id,
        ).first()
        return row.to_pydantic() if row else None
    
    def delete_for_meeting(self, meeting_id: str, commit: bool = True) -> int:
        """Delete every schedule of a meeting. Returns the number removed."""
        try:
            count = self.db.query(ScheduleDB).filter(
                ScheduleDB.meeting_id == meeting_id
            ).delete(synchronize_session=False)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            if count:
                logger.debug(f"Deleted {count} existing schedules for meeting {meeting_id}")
            return count
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete schedules for meeting {meeting_id}: {type(e).__name__}: {str(e)}")
            raise
    
    def update_times(
        self,
        user_id: str,
        schedule_id: str,
        *,
        scheduled_start: datetime,
        scheduled_end: datetime,
        commit: bool = True,
    ) -> Optional[Schedule]:
        """Move a schedule to new times (user-scoped)."""
        try:
            row = self.db.query(ScheduleDB).filter(
                ScheduleDB.user_id == user_id,
                ScheduleDB.id == schedule_id,
            ).first()
            if row is None:
                return None
            row.scheduled_start = scheduled_start
            row.scheduled_end = scheduled_end
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            self.db.refresh(row)
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update times for schedule {schedule_id}: {type(e).__name__}: {str(e)}")
            raise
