"""Placement data models for meetingscheduler."""

from datetime import datetime
from pydantic import BaseModel, Field

from meetingscheduler.models.meeting import Meeting


class OccupiedInterval(BaseModel):
    """Time range taken by a committed placement (half-open: [start_time, end_time))."""
    
    start_time: datetime = Field(..., description="Interval start")
    end_time: datetime = Field(..., description="Interval end (exclusive)")
    
    class Config:
        """Pydantic configuration."""
        frozen = True


class Placement(BaseModel):
    """A meeting committed to a concrete start and end time."""
    
    meeting: Meeting = Field(..., description="Meeting that was placed")
    start_time: datetime = Field(..., description="Committed start time")
    end_time: datetime = Field(..., description="Committed end time")
    score: float = Field(..., description="Placement score evaluated at start_time")
    
    class Config:
        """Pydantic configuration."""
        frozen = True

    def to_interval(self) -> OccupiedInterval:
        return OccupiedInterval(start_time=self.start_time, end_time=self.end_time)
