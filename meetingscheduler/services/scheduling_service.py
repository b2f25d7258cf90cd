"""Schedule optimization service for meetingscheduler.

Feeds a user's pending meetings and availability into the optimization engine,
then persists what it placed: each placed meeting is marked scheduled and gets
exactly one Schedule row (replacing any earlier one), and the user is notified
with a summary.
"""

import logging
import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from meetingscheduler.database.availability_repository import AvailabilityRepository
from meetingscheduler.database.repository import MeetingRepository
from meetingscheduler.database.schedule_repository import ScheduleRepository
from meetingscheduler.engine.optimizer import OptimizationResult, optimize
from meetingscheduler.engine.scoring import ScoringConfig
from meetingscheduler.engine.trace import OptimizationTrace
from meetingscheduler.models.constants import CUSTOM_SCHEDULE_SCORE
from meetingscheduler.models.meeting import Meeting, MeetingStatus
from meetingscheduler.models.notification import NotificationType
from meetingscheduler.models.schedule import Schedule
from meetingscheduler.services.notifications import notify

logger = logging.getLogger(__name__)


class ScheduleService:
    """Run and record schedule optimizations for one database session."""

    def __init__(self, db: Session, config: Optional[ScoringConfig] = None):
        self.db = db
        self.config = config
        self.meetings = MeetingRepository(db)
        self.availability = AvailabilityRepository(db)
        self.schedules = ScheduleRepository(db)

    def get_schedules(self, user_id: str) -> List[Schedule]:
        """Schedules for a user, highest optimization score first."""
        return self.schedules.get_all(user_id)

    def optimize_schedule(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        trace: Optional[OptimizationTrace] = None,
    ) -> OptimizationResult:
        """Optimize a user's pending meetings into their availability.

        Raises:
            ValueError: if the user has no pending meetings or no availability
        """
        pending = self.meetings.get_pending(user_id)
        if not pending:
            logger.warning("No pending meetings found for user %s", user_id)
            raise ValueError("No pending meetings found for optimization")

        windows = self.availability.get_all(user_id)
        if not windows:
            logger.warning("No availability slots found for user %s", user_id)
            raise ValueError("No availability slots found. Please set your availability first.")

        result = optimize(pending, windows, now=now, config=self.config, trace=trace)

        with self._transaction(f"persist optimization for user {user_id}"):
            persisted: List[Meeting] = []
            for placement in result.placements:
                self.schedules.delete_for_meeting(placement.meeting.id, commit=False)
                self.schedules.create(
                    Schedule(
                        id=str(uuid.uuid4()),
                        user_id=user_id,
                        meeting_id=placement.meeting.id,
                        scheduled_start=placement.start_time,
                        scheduled_end=placement.end_time,
                        optimization_score=placement.score,
                    ),
                    commit=False,
                )
                persisted.append(
                    self.meetings.update_status(
                        user_id, placement.meeting.id, MeetingStatus.SCHEDULED, commit=False
                    )
                )

            notify(
                self.db,
                user_id,
                NotificationType.SCHEDULE_OPTIMIZED,
                f"Schedule optimized! {result.scheduled_count} meetings scheduled "
                f"(score {result.optimization_score:.3f}).",
                commit=False,
            )

        # Placements keep pointing at the meetings the engine saw; report the stored status.
        result.placements = [
            placement.model_copy(update={"meeting": meeting})
            for placement, meeting in zip(result.placements, persisted)
        ]
        return result

    def create_custom_schedule(
        self,
        user_id: str,
        meeting_id: str,
        start_time: datetime,
        end_time: datetime,
    ) -> Schedule:
        """Place a meeting by hand, bypassing the optimizer.

        Replaces any schedule the meeting already has.
        """
        meeting = self._get_owned(user_id, meeting_id)
        _check_times(start_time, end_time)

        with self._transaction(f"custom schedule meeting {meeting_id}"):
            self.schedules.delete_for_meeting(meeting_id, commit=False)
            self.meetings.update_status(user_id, meeting_id, MeetingStatus.SCHEDULED, commit=False)
            schedule = self.schedules.create(
                Schedule(
                    id=str(uuid.uuid4()),
                    user_id=user_id,
                    meeting_id=meeting_id,
                    scheduled_start=start_time,
                    scheduled_end=end_time,
                    optimization_score=CUSTOM_SCHEDULE_SCORE,
                ),
                commit=False,
            )
            notify(
                self.db,
                user_id,
                NotificationType.MEETING_SCHEDULED,
                f"Meeting '{meeting.title}' has been custom scheduled",
                commit=False,
            )
        return schedule

    def update_meeting_schedule(
        self,
        user_id: str,
        meeting_id: str,
        start_time: datetime,
        end_time: datetime,
    ) -> Schedule:
        """Move a meeting's schedule, creating one if it has none yet."""
        meeting = self._get_owned(user_id, meeting_id)
        _check_times(start_time, end_time)

        with self._transaction(f"update schedule of meeting {meeting_id}"):
            existing = self.schedules.get_for_meeting(user_id, meeting_id)
            if existing is not None:
                schedule = self.schedules.update_times(
                    user_id,
                    existing.id,
                    scheduled_start=start_time,
                    scheduled_end=end_time,
                    commit=False,
                )
            else:
                self.meetings.update_status(user_id, meeting_id, MeetingStatus.SCHEDULED, commit=False)
                schedule = self.schedules.create(
                    Schedule(
                        id=str(uuid.uuid4()),
                        user_id=user_id,
                        meeting_id=meeting_id,
                        scheduled_start=start_time,
                        scheduled_end=end_time,
                        optimization_score=CUSTOM_SCHEDULE_SCORE,
                    ),
                    commit=False,
                )

            notify(
                self.db,
                user_id,
                NotificationType.MEETING_SCHEDULED,
                f"Meeting '{meeting.title}' schedule has been updated",
                commit=False,
            )
        return schedule

    @contextmanager
    def _transaction(self, action: str):
        """Commit everything written inside the block, or roll all of it back."""
        try:
            yield
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {type(e).__name__}: {str(e)}")
            raise

    def _get_owned(self, user_id: str, meeting_id: str) -> Meeting:
        meeting = self.meetings.get_any_user(meeting_id)
        if meeting is None:
            raise LookupError("Meeting not found")
        if meeting.user_id != user_id:
            raise ValueError("Meeting does not belong to the specified user")
        return meeting


def _check_times(start_time: datetime, end_time: datetime) -> None:
    if end_time <= start_time:
        raise ValueError("End time must be after start time")
