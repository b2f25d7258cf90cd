"""Repository for AvailabilityWindow database operations."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.database.models import AvailabilityDB

logger = logging.getLogger(__name__)


class AvailabilityRepository:
    """Repository for AvailabilityWindow database operations."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def create(self, window: AvailabilityWindow) -> AvailabilityWindow:
        """Create a new availability window."""
        try:
            window_db = AvailabilityDB.from_pydantic(window)
            self.db.add(window_db)
            self.db.commit()
            self.db.refresh(window_db)
            logger.debug(f"Created availability {window_db.id} for user {window_db.user_id}")
            return window_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create availability: {type(e).__name__}: {str(e)}")
            raise
    
    def get(self, user_id: str, availability_id: str) -> Optional[AvailabilityWindow]:
        """Get an availability window by ID (user-scoped)."""
        row = self.db.query(AvailabilityDB).filter(
            AvailabilityDB.id == availability_id,
            AvailabilityDB.user_id == user_id,
        ).first()
        return row.to_pydantic() if row else None
    
    def get_all(self, user_id: str) -> List[AvailabilityWindow]:
        """Get all availability windows for a user sorted by start_time."""
        rows = self.db.query(AvailabilityDB).filter(
            AvailabilityDB.user_id == user_id
        ).order_by(AvailabilityDB.start_time).all()
        return [row.to_pydantic() for row in rows]
    
    def delete(self, user_id: str, availability_id: str) -> bool:
        """Delete an availability window (user-scoped)."""
        row = self.db.query(AvailabilityDB).filter(
            AvailabilityDB.id == availability_id,
            AvailabilityDB.user_id == user_id,
        ).first()
        if row is None:
            return False
        try:
            self.db.delete(row)
            self.db.commit()
            logger.debug(f"Deleted availability {availability_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete availability {availability_id}: {type(e).__name__}: {str(e)}")
            raise
