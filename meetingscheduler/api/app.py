"""FastAPI web application for meetingscheduler."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session

from meetingscheduler import __version__
from meetingscheduler.database.database import get_db, init_db
from meetingscheduler.database.notification_repository import NotificationRepository
from meetingscheduler.engine.optimizer import OptimizationResult
from meetingscheduler.engine.scoring import ScoringConfig
from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.meeting import Meeting
from meetingscheduler.models.notification import Notification
from meetingscheduler.models.schedule import Schedule
from meetingscheduler.services.availability_service import AvailabilityService
from meetingscheduler.services.meeting_service import MeetingService
from meetingscheduler.services.scheduling_service import ScheduleService

logger = logging.getLogger(__name__)


def load_scoring_config() -> ScoringConfig:
    """Build the scoring configuration from the environment.

    Raises:
        RuntimeError: if an environment override is invalid
    """
    try:
        return ScoringConfig.from_env()
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid scoring configuration: {str(e)}")
        raise RuntimeError(f"Invalid scoring configuration: {str(e)}") from e


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.scoring_config = load_scoring_config()
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="meetingscheduler API",
    description="Places pending meetings into open availability, most important and most urgent first",
    version=__version__,
    lifespan=lifespan,
)


# Request models
class MeetingCreateRequest(BaseModel):
    """Request body for creating a meeting."""
    title: str
    description: Optional[str] = None
    priority: int = Field(..., ge=1, le=10)
    duration_minutes: int = Field(..., gt=0)
    deadline: datetime


class MeetingUpdateRequest(BaseModel):
    """Request body for a partial meeting update."""
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[int] = Field(None, ge=1, le=10)
    duration_minutes: Optional[int] = Field(None, gt=0)
    deadline: Optional[datetime] = None


class AvailabilityCreateRequest(BaseModel):
    """Request body for creating an availability window."""
    start_time: datetime
    end_time: datetime


class ScheduleTimesRequest(BaseModel):
    """Request body for placing a meeting by hand."""
    meeting_id: str
    start_time: datetime
    end_time: datetime


# Response models
class MeetingResponse(BaseModel):
    """Response wrapping a single meeting."""
    meeting: Meeting


class MeetingListResponse(BaseModel):
    """Response for meeting listings."""
    meetings: List[Meeting]


class AvailabilityListResponse(BaseModel):
    """Response for availability listings."""
    availability: List[AvailabilityWindow]


class ScheduledMeetingResponse(BaseModel):
    """One placement produced by an optimization run."""
    meeting: Meeting
    scheduled_start: datetime
    scheduled_end: datetime
    score: float


class OptimizeResponse(BaseModel):
    """Response for schedule optimization."""
    scheduled_meetings: List[ScheduledMeetingResponse]
    unscheduled_meetings: List[Meeting]
    optimization_score: float
    reference_time: Optional[datetime]


class ScheduleListResponse(BaseModel):
    """Response for schedule listings."""
    schedules: List[Schedule]


class NotificationListResponse(BaseModel):
    """Response for notification listings."""
    notifications: List[Notification]


def get_scoring_config(request: Request) -> ScoringConfig:
    """Scoring configuration dependency, built once at startup."""
    return request.app.state.scoring_config


def _optimize_response(result: OptimizationResult) -> OptimizeResponse:
    return OptimizeResponse(
        scheduled_meetings=[
            ScheduledMeetingResponse(
                meeting=p.meeting,
                scheduled_start=p.start_time,
                scheduled_end=p.end_time,
                score=p.score,
            )
            for p in result.placements
        ],
        unscheduled_meetings=result.unscheduled_meetings,
        optimization_score=result.optimization_score,
        reference_time=result.reference_time,
    )


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


# Meetings

@app.post("/users/{user_id}/meetings", response_model=MeetingResponse, status_code=201)
def create_meeting(user_id: str, request: MeetingCreateRequest, db: Session = Depends(get_db)):
    """Create a pending meeting."""
    try:
        meeting = MeetingService(db).create_meeting(
            user_id,
            title=request.title,
            description=request.description,
            priority=request.priority,
            duration_minutes=request.duration_minutes,
            deadline=request.deadline,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MeetingResponse(meeting=meeting)


@app.get("/users/{user_id}/meetings", response_model=MeetingListResponse)
def list_meetings(user_id: str, db: Session = Depends(get_db)):
    """List all meetings of a user, newest first."""
    return MeetingListResponse(meetings=MeetingService(db).list_meetings(user_id))


@app.get("/users/{user_id}/meetings/pending", response_model=MeetingListResponse)
def list_pending_meetings(user_id: str, db: Session = Depends(get_db)):
    """List pending meetings, highest priority then earliest deadline first."""
    return MeetingListResponse(meetings=MeetingService(db).list_pending(user_id))


@app.put("/users/{user_id}/meetings/{meeting_id}", response_model=MeetingResponse)
def update_meeting(user_id: str, meeting_id: str, request: MeetingUpdateRequest, db: Session = Depends(get_db)):
    """Partially update a meeting."""
    try:
        meeting = MeetingService(db).update_meeting(user_id, meeting_id, request.model_dump())
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MeetingResponse(meeting=meeting)


@app.delete("/users/{user_id}/meetings/{meeting_id}", status_code=204)
def delete_meeting(user_id: str, meeting_id: str, db: Session = Depends(get_db)):
    """Delete a meeting."""
    try:
        MeetingService(db).delete_meeting(user_id, meeting_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return None


@app.post("/users/{user_id}/meetings/{meeting_id}/complete", response_model=MeetingResponse)
def complete_meeting(user_id: str, meeting_id: str, db: Session = Depends(get_db)):
    """Mark a meeting as completed."""
    try:
        meeting = MeetingService(db).complete_meeting(user_id, meeting_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return MeetingResponse(meeting=meeting)


# Availability

@app.post("/users/{user_id}/availability", response_model=AvailabilityWindow, status_code=201)
def create_availability(user_id: str, request: AvailabilityCreateRequest, db: Session = Depends(get_db)):
    """Add an availability window."""
    try:
        return AvailabilityService(db).create_availability(user_id, request.start_time, request.end_time)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/users/{user_id}/availability", response_model=AvailabilityListResponse)
def list_availability(user_id: str, db: Session = Depends(get_db)):
    """List availability windows by start time."""
    return AvailabilityListResponse(availability=AvailabilityService(db).list_availability(user_id))


@app.delete("/users/{user_id}/availability/{availability_id}", status_code=204)
def delete_availability(user_id: str, availability_id: str, db: Session = Depends(get_db)):
    """Delete an availability window."""
    try:
        AvailabilityService(db).delete_availability(user_id, availability_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return None


# Schedules

@app.get("/users/{user_id}/schedules", response_model=ScheduleListResponse)
def list_schedules(user_id: str, db: Session = Depends(get_db)):
    """List schedules, highest optimization score first."""
    return ScheduleListResponse(schedules=ScheduleService(db).get_schedules(user_id))


@app.post("/users/{user_id}/schedules/optimize", response_model=OptimizeResponse)
def optimize_schedule(
    user_id: str,
    db: Session = Depends(get_db),
    config: ScoringConfig = Depends(get_scoring_config),
):
    """Place the user's pending meetings into their availability."""
    try:
        result = ScheduleService(db, config=config).optimize_schedule(user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error optimizing schedule for user {user_id}: {type(e).__name__}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to optimize schedule: {str(e)}")
    return _optimize_response(result)


@app.post("/users/{user_id}/schedules/custom", response_model=Schedule)
def create_custom_schedule(user_id: str, request: ScheduleTimesRequest, db: Session = Depends(get_db)):
    """Place a meeting at a hand-picked time."""
    try:
        return ScheduleService(db).create_custom_schedule(
            user_id, request.meeting_id, request.start_time, request.end_time
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.put("/users/{user_id}/schedules", response_model=Schedule)
def update_meeting_schedule(user_id: str, request: ScheduleTimesRequest, db: Session = Depends(get_db)):
    """Move a meeting's schedule (creating one if needed)."""
    try:
        return ScheduleService(db).update_meeting_schedule(
            user_id, request.meeting_id, request.start_time, request.end_time
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# Notifications

@app.get("/users/{user_id}/notifications", response_model=NotificationListResponse)
def list_notifications(user_id: str, db: Session = Depends(get_db)):
    """List notifications, newest first."""
    return NotificationListResponse(notifications=NotificationRepository(db).get_all(user_id))


@app.post("/users/{user_id}/notifications/{notification_id}/read", response_model=Notification)
def mark_notification_read(user_id: str, notification_id: str, db: Session = Depends(get_db)):
    """Mark a notification as read."""
    notification = NotificationRepository(db).mark_read(user_id, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification
