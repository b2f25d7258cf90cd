"""Notification dispatch for meetingscheduler.

Notifications are recorded in the database; delivery to the user is up to
whatever reads them back (the API lists them per user).
"""

import logging
import uuid

from sqlalchemy.orm import Session

from meetingscheduler.database.notification_repository import NotificationRepository
from meetingscheduler.models.notification import Notification, NotificationType

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: str,
    notification_type: NotificationType,
    message: str,
    commit: bool = True,
) -> Notification:
    """Record a notification for a user."""
    notification = Notification(
        id=str(uuid.uuid4()),
        user_id=user_id,
        type=notification_type,
        message=message,
    )
    created = NotificationRepository(db).create(notification, commit=commit)
    logger.info("Notified user %s (%s): %s", user_id, created.type, message)
    return created
