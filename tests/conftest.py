"""Pytest fixtures and configuration for meetingscheduler tests."""

import os

# Keep the app's module-level engine off the developer's database file.
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
import uuid
from datetime import datetime, timedelta
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from meetingscheduler.database.database import Base
from meetingscheduler.database import models  # noqa: F401  (registers tables)
from meetingscheduler.database.repository import MeetingRepository
from meetingscheduler.database.availability_repository import AvailabilityRepository
from meetingscheduler.database.schedule_repository import ScheduleRepository
from meetingscheduler.database.notification_repository import NotificationRepository
from meetingscheduler.models.availability import AvailabilityWindow
from meetingscheduler.models.meeting import Meeting, MeetingStatus


# Use in-memory SQLite database for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Fixed clock for engine tests: Monday 2025-03-03 08:00
NOW = datetime(2025, 3, 3, 8, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture(scope="function")
def db_session():
    """Create a database session for testing.
    
    Uses an in-memory SQLite database that is created fresh for each test.
    """
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    @event.listens_for(engine, "connect")
    def set_sqlite_pragmas(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def meeting_repository(db_session: Session):
    return MeetingRepository(db_session)


@pytest.fixture
def availability_repository(db_session: Session):
    return AvailabilityRepository(db_session)


@pytest.fixture
def schedule_repository(db_session: Session):
    return ScheduleRepository(db_session)


@pytest.fixture
def notification_repository(db_session: Session):
    return NotificationRepository(db_session)


@pytest.fixture
def test_user_id():
    """Test user ID for multi-user testing."""
    return "test-user-123"


@pytest.fixture
def sample_meeting_base(test_user_id):
    """Base meeting data for creating test meetings.
    
    Returns a dict with default meeting attributes that can be overridden.
    Deadline is the end of the day of NOW.
    """
    return {
        "id": str(uuid.uuid4()),
        "user_id": test_user_id,
        "title": "Test Meeting",
        "description": "Test description",
        "priority": 5,
        "duration_minutes": 60,
        "deadline": NOW.replace(hour=23, minute=59),
        "status": MeetingStatus.PENDING,
        "created_at": NOW,
    }


@pytest.fixture
def make_meeting(sample_meeting_base):
    """Factory for meetings: make_meeting(priority=8, title="x", ...)."""
    def _make(**overrides):
        return Meeting(**{**sample_meeting_base, "id": str(uuid.uuid4()), **overrides})
    return _make


@pytest.fixture
def sample_meeting(make_meeting):
    return make_meeting()


@pytest.fixture
def make_window(test_user_id):
    """Factory for availability windows from (start, end) datetimes."""
    def _make(start: datetime, end: datetime):
        return AvailabilityWindow(id=str(uuid.uuid4()), user_id=test_user_id, start_time=start, end_time=end, created_at=NOW)
    return _make


@pytest.fixture
def workday_window(make_window):
    """09:00-17:00 on the day of NOW."""
    return make_window(NOW.replace(hour=9), NOW.replace(hour=17))


@pytest.fixture
def future_day():
    """09:00 tomorrow in real time, for tests that go through validation against the wall clock."""
    tomorrow = datetime.utcnow() + timedelta(days=1)
    return tomorrow.replace(hour=9, minute=0, second=0, microsecond=0)


@pytest.fixture
def test_client(db_session: Session):
    """Create a FastAPI test client with overridden database dependency."""
    from meetingscheduler.api.app import app
    from meetingscheduler.database.database import get_db
    
    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Don't close the session here, let the fixture handle it
    
    app.dependency_overrides[get_db] = override_get_db
    
    with TestClient(app) as client:
        yield client
    
    app.dependency_overrides.clear()
