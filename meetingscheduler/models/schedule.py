"""Schedule data model for meetingscheduler."""

from datetime import datetime
from pydantic import BaseModel, Field


class Schedule(BaseModel):
    """Persisted placement of one meeting on the owner's calendar."""
    
    id: str = Field(..., description="Unique schedule identifier")
    user_id: str = Field(..., description="User ID who owns this schedule")
    meeting_id: str = Field(..., description="ID of the scheduled meeting")
    scheduled_start: datetime = Field(..., description="Scheduled start time")
    scheduled_end: datetime = Field(..., description="Scheduled end time")
    optimization_score: float = Field(..., description="Score of this individual placement")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")
