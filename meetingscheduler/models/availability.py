"""AvailabilityWindow data model for meetingscheduler."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class AvailabilityWindow(BaseModel):
    """A contiguous open time range in which meetings may be placed.

    Windows may arrive in any order and may overlap each other. Well-formedness
    (start before end) is checked by the collaborator that accepts them, not here.
    """
    
    id: Optional[str] = Field(None, description="Unique availability identifier")
    user_id: Optional[str] = Field(None, description="User ID who owns this window")
    start_time: datetime = Field(..., description="Window start time")
    end_time: datetime = Field(..., description="Window end time")
    created_at: datetime = Field(default_factory=datetime.utcnow, description="Creation timestamp")
    
    class Config:
        """Pydantic configuration."""
        frozen = True

    @property
    def duration_minutes(self) -> float:
        return (self.end_time - self.start_time).total_seconds() / 60
