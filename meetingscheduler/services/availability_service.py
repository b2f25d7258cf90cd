"""Availability window operations for meetingscheduler."""

import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from meetingscheduler.database.availability_repository import AvailabilityRepository
from meetingscheduler.engine.validation import validate_availability
from meetingscheduler.models.availability import AvailabilityWindow


class AvailabilityService:
    """Manage the open time windows of a user."""

    def __init__(self, db: Session):
        self.availability = AvailabilityRepository(db)

    def list_availability(self, user_id: str) -> List[AvailabilityWindow]:
        return self.availability.get_all(user_id)

    def create_availability(
        self,
        user_id: str,
        start_time: datetime,
        end_time: datetime,
        now: Optional[datetime] = None,
    ) -> AvailabilityWindow:
        window = AvailabilityWindow(
            id=str(uuid.uuid4()),
            user_id=user_id,
            start_time=start_time,
            end_time=end_time,
        )
        validate_availability(window, now=now)
        return self.availability.create(window)

    def delete_availability(self, user_id: str, availability_id: str) -> None:
        if not self.availability.delete(user_id, availability_id):
            raise LookupError(f"Availability not found with ID: {availability_id}")
