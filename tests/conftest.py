"""
Pytest configuration file.
"""
import pytest
from unittest.mock import Mock
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from eventease.core.database import Base, get_db
from eventease.models.venue import Venue
from eventease.models.event import Event
from eventease.models.event_type import EventType
from eventease.models.booking import Booking
from eventease.utils.blob_storage import BlobStorage, get_blob_storage
from main import app
from datetime import date, datetime, timedelta
import uuid

SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///./test.db"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_BUCKET_URL = "https://test-bucket.s3.amazonaws.com"

BOOKING_DAY = date.today() + timedelta(days=7)


def at(hour: int, minute: int = 0, day: date = BOOKING_DAY) -> datetime:
    """Naive datetime on the shared booking day."""
    return datetime(day.year, day.month, day.day, hour, minute)


def override_get_db():
    """Override database dependency for testing."""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


@pytest.fixture(scope="function")
def db():
    """Create test database."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    yield db
    db.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def other_session(db):
    """A second, independent session on the same database."""
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture
def mock_s3_client():
    return Mock()


@pytest.fixture
def blob_storage(mock_s3_client):
    return BlobStorage(
        client=mock_s3_client,
        bucket="test-bucket",
        public_base_url=TEST_BUCKET_URL
    )


@pytest.fixture(scope="function")
def client(db, blob_storage):
    """Create test client."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_storage] = lambda: blob_storage
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_event_type(db):
    """Create a sample event type."""
    event_type = EventType(
        id=str(uuid.uuid4()),
        name="Conference"
    )
    db.add(event_type)
    db.commit()
    db.refresh(event_type)
    return event_type


@pytest.fixture
def sample_venue(db):
    """Create a sample venue."""
    venue = Venue(
        id=str(uuid.uuid4()),
        name="Grand Ballroom",
        location="123 Main Street, Downtown",
        capacity=500,
        description="Elegant ballroom with crystal chandeliers"
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return venue


@pytest.fixture
def sample_other_venue(db):
    """Create a second venue with no bookings."""
    venue = Venue(
        id=str(uuid.uuid4()),
        name="Garden Pavilion",
        location="789 Park Avenue",
        capacity=150
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return venue


@pytest.fixture
def sample_event(db, sample_venue, sample_event_type):
    """Create a sample event at the sample venue."""
    event = Event(
        id=str(uuid.uuid4()),
        name="Annual Tech Summit",
        title="Annual Tech Summit 2026",
        date=BOOKING_DAY,
        description="The biggest technology conference of the year",
        venue_id=sample_venue.id,
        event_type_id=sample_event_type.id
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    return event


@pytest.fixture
def sample_booking(db, sample_venue, sample_event):
    """Book the sample venue from 09:00 to 17:00 on the booking day."""
    booking = Booking(
        id=str(uuid.uuid4()),
        reference=str(uuid.uuid4()),
        venue_id=sample_venue.id,
        event_id=sample_event.id,
        start_time=at(9),
        end_time=at(17)
    )
    db.add(booking)
    db.commit()
    db.refresh(booking)
    return booking
