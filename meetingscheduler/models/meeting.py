"""Meeting data model for meetingscheduler."""

from datetime import datetime
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field


class MeetingStatus(str, Enum):
    """Meeting status enumeration."""
    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class Meeting(BaseModel):
    """A unit of work waiting to be placed on the actor's calendar."""
    
    id: str = Field(..., description="Unique meeting identifier (UUID v4)")
    user_id: str = Field(..., description="User ID who owns this meeting")
    title: str = Field(..., description="Meeting title")
    description: Optional[str] = Field(None, description="Meeting description")
    priority: int = Field(..., ge=1, le=10, description="Priority on a 1-10 scale (10 = most important)")
    duration_minutes: int = Field(..., description="Meeting length in minutes")
    deadline: Optional[datetime] = Field(None, description="Latest time the meeting may end")
    status: MeetingStatus = Field(MeetingStatus.PENDING, description="Meeting status")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Meeting creation timestamp")
    
    class Config:
        """Pydantic configuration."""
        use_enum_values = True
        frozen = True

    def with_status(self, status: MeetingStatus) -> "Meeting":
        """Return a copy of this meeting carrying a new status."""
        return self.model_copy(update={"status": status})
