"""Repository for Notification database operations."""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from meetingscheduler.models.notification import Notification
from meetingscheduler.database.models import NotificationDB

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Repository for Notification database operations."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def create(self, notification: Notification, commit: bool = True) -> Notification:
        """Record a new notification (flush only with commit=False)."""
        try:
            row = NotificationDB.from_pydantic(notification)
            self.db.add(row)
            if commit:
                self.db.commit()
            else:
                self.db.flush()
            self.db.refresh(row)
            logger.debug(f"Created notification {notification.id} ({row.type}) for user {notification.user_id}")
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create notification {notification.id}: {type(e).__name__}: {str(e)}")
            raise
    
    def get_all(self, user_id: str) -> List[Notification]:
        """Get all notifications for a user, newest first."""
        rows = self.db.query(NotificationDB).filter(
            NotificationDB.user_id == user_id
        ).order_by(desc(NotificationDB.created_at)).all()
        return [row.to_pydantic() for row in rows]
    
    def mark_read(self, user_id: str, notification_id: str) -> Optional[Notification]:
        """Mark a notification as read (user-scoped)."""
        try:
            row = self.db.query(NotificationDB).filter(
                NotificationDB.user_id == user_id,
                NotificationDB.id == notification_id,
            ).first()
            if row is None:
                return None
            row.is_read = True
            self.db.commit()
            self.db.refresh(row)
            return row.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to mark notification {notification_id} read: {type(e).__name__}: {str(e)}")
            raise
