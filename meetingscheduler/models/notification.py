"""Notification data model for meetingscheduler."""

from datetime import datetime
from enum import Enum
from pydantic import BaseModel, Field


class NotificationType(str, Enum):
    """Notification type enumeration."""
    MEETING_CREATED = "meeting_created"
    MEETING_SCHEDULED = "meeting_scheduled"
    SCHEDULE_OPTIMIZED = "schedule_optimized"
    MEETING_CANCELLED = "meeting_cancelled"
    MEETING_COMPLETED = "meeting_completed"


class Notification(BaseModel):
    """Message recorded for a user after a meeting or schedule change."""
    
    id: str = Field(..., description="Unique notification identifier")
    user_id: str = Field(..., description="Recipient user ID")
    type: NotificationType = Field(..., description="Type of notification")
    message: str = Field(..., description="Human-readable message")
    is_read: bool = Field(False, description="Whether the user has read it")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Notification timestamp")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True
