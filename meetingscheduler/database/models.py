"""SQLAlchemy database models for meetingscheduler."""

from datetime import datetime
import uuid
from typing import Union, TypeVar, Type
from sqlalchemy import Column, String, Integer, Float, Boolean, DateTime, ForeignKey

from meetingscheduler.database.database import Base
from meetingscheduler.models.meeting import MeetingStatus
from meetingscheduler.models.notification import NotificationType

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string)."""
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.
    
    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails
        
    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


class MeetingDB(Base):
    """Database model for Meeting."""
    
    __tablename__ = "meetings"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    priority = Column(Integer, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    deadline = Column(DateTime, nullable=True)
    status = Column(String, nullable=False, default=MeetingStatus.PENDING.value, index=True)
    
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from meetingscheduler.models.meeting import Meeting
        return Meeting(
            id=self.id,
            user_id=self.user_id,
            title=self.title,
            description=self.description,
            priority=self.priority,
            duration_minutes=self.duration_minutes,
            deadline=self.deadline,
            status=value_to_enum(self.status, MeetingStatus, MeetingStatus.PENDING),
            created_at=self.created_at,
        )
    
    @classmethod
    def from_pydantic(cls, meeting):
        """Create database model from Pydantic model."""
        return cls(
            id=meeting.id,
            user_id=meeting.user_id,
            title=meeting.title,
            description=meeting.description,
            priority=meeting.priority,
            duration_minutes=meeting.duration_minutes,
            deadline=meeting.deadline,
            status=enum_to_value(meeting.status),
            created_at=meeting.created_at,
        )


class AvailabilityDB(Base):
    """Database model for AvailabilityWindow."""
    
    __tablename__ = "availability"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from meetingscheduler.models.availability import AvailabilityWindow
        return AvailabilityWindow(
            id=self.id,
            user_id=self.user_id,
            start_time=self.start_time,
            end_time=self.end_time,
            created_at=self.created_at,
        )
    
    @classmethod
    def from_pydantic(cls, window):
        """Create database model from Pydantic model."""
        return cls(
            id=window.id or str(uuid.uuid4()),
            user_id=window.user_id,
            start_time=window.start_time,
            end_time=window.end_time,
            created_at=window.created_at,
        )


class ScheduleDB(Base):
    """Database model for Schedule."""
    
    __tablename__ = "schedules"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    meeting_id = Column(String, ForeignKey("meetings.id", ondelete="CASCADE"), nullable=False, index=True)
    scheduled_start = Column(DateTime, nullable=False)
    scheduled_end = Column(DateTime, nullable=False)
    optimization_score = Column(Float, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from meetingscheduler.models.schedule import Schedule
        return Schedule(
            id=self.id,
            user_id=self.user_id,
            meeting_id=self.meeting_id,
            scheduled_start=self.scheduled_start,
            scheduled_end=self.scheduled_end,
            optimization_score=self.optimization_score,
            created_at=self.created_at,
        )
    
    @classmethod
    def from_pydantic(cls, schedule):
        """Create database model from Pydantic model."""
        return cls(
            id=schedule.id,
            user_id=schedule.user_id,
            meeting_id=schedule.meeting_id,
            scheduled_start=schedule.scheduled_start,
            scheduled_end=schedule.scheduled_end,
            optimization_score=schedule.optimization_score,
            created_at=schedule.created_at,
        )


class NotificationDB(Base):
    """Database model for Notification."""
    
    __tablename__ = "notifications"
    
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)
    message = Column(String, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    
    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from meetingscheduler.models.notification import Notification
        return Notification(
            id=self.id,
            user_id=self.user_id,
            type=value_to_enum(self.type, NotificationType, NotificationType.MEETING_CREATED),
            message=self.message,
            is_read=self.is_read,
            created_at=self.created_at,
        )
    
    @classmethod
    def from_pydantic(cls, notification):
        """Create database model from Pydantic model."""
        return cls(
            id=notification.id,
            user_id=notification.user_id,
            type=enum_to_value(notification.type),
            message=notification.message,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )
