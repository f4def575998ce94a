"""
Venue endpoint tests: CRUD, delete restrictions, availability and images.
"""
import io
import pytest
from fastapi import status
from datetime import timedelta
from botocore.exceptions import ClientError
from sqlalchemy.exc import SQLAlchemyError
from eventease.models.booking import Booking
from eventease.models.venue import Venue
from eventease.services.venue_service import VenueService
from conftest import BOOKING_DAY, TEST_BUCKET_URL, at
import uuid


# =============================================================================
# TEST: Venue CRUD (/api/venues)
# =============================================================================
class TestVenueCrud:
    """Test venue create/read/update endpoints."""

    def test_create_venue_success(self, client):
        response = client.post(
            "/api/venues",
            json={
                "name": "Tech Conference Center",
                "location": "456 Innovation Drive",
                "capacity": 300,
                "description": "Modern conference space with AV equipment"
            }
        )

        assert response.status_code == status.HTTP_201_CREATED
        venue = response.json()["venue"]
        assert venue["name"] == "Tech Conference Center"
        assert venue["capacity"] == 300
        assert venue["imageUrl"] is None
        assert "id" in venue

    def test_create_venue_zero_capacity_rejected(self, client):
        response = client.post(
            "/api/venues",
            json={"name": "Closet", "location": "Basement", "capacity": 0}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_create_venue_missing_location_rejected(self, client):
        response = client.post("/api/venues", json={"name": "Nowhere", "capacity": 10})

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_list_venues_sorted_by_name(self, client, sample_venue, sample_other_venue):
        response = client.get("/api/venues")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["success"] is True
        assert [v["name"] for v in data["venues"]] == ["Garden Pavilion", "Grand Ballroom"]

    def test_list_venues_search(self, client, sample_venue, sample_other_venue):
        response = client.get("/api/venues", params={"search": "park avenue"})

        assert [v["name"] for v in response.json()["venues"]] == ["Garden Pavilion"]

    def test_list_venues_empty(self, client, db):
        response = client.get("/api/venues")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["venues"] == []

    def test_get_venue(self, client, sample_venue):
        response = client.get(f"/api/venues/{sample_venue.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["venue"]["location"] == "123 Main Street, Downtown"

    def test_get_venue_not_found(self, client, db):
        response = client.get(f"/api/venues/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        data = response.json()
        assert data["success"] is False
        assert data["error"]["code"] == "NOT_FOUND"

    def test_update_venue_partial(self, client, sample_venue):
        response = client.put(f"/api/venues/{sample_venue.id}", json={"capacity": 450})

        assert response.status_code == status.HTTP_200_OK
        venue = response.json()["venue"]
        assert venue["capacity"] == 450
        assert venue["name"] == "Grand Ballroom"

    def test_update_venue_clears_description(self, client, sample_venue):
        response = client.put(f"/api/venues/{sample_venue.id}", json={"description": None})

        assert response.status_code == status.HTTP_200_OK
        venue = response.json()["venue"]
        assert venue["description"] is None
        assert venue["name"] == "Grand Ballroom"

    def test_update_venue_null_name_keeps_name(self, client, sample_venue):
        response = client.put(f"/api/venues/{sample_venue.id}", json={"name": None, "capacity": 80})

        assert response.status_code == status.HTTP_200_OK
        venue = response.json()["venue"]
        assert venue["name"] == "Grand Ballroom"
        assert venue["description"] == "Elegant ballroom with crystal chandeliers"


# =============================================================================
# TEST: Delete venue (DELETE /api/venues/{id})
# =============================================================================
class TestDeleteVenue:

    def test_delete_venue_without_bookings(self, client, db, sample_other_venue):
        venue_id = sample_other_venue.id
        response = client.delete(f"/api/venues/{venue_id}")

        assert response.status_code == status.HTTP_200_OK
        db.expire_all()
        assert db.query(Venue).filter(Venue.id == venue_id).first() is None

    def test_delete_venue_with_bookings_restricted(self, client, db, sample_booking, sample_venue):
        response = client.delete(f"/api/venues/{sample_venue.id}")

        assert response.status_code == status.HTTP_409_CONFLICT
        error = response.json()["error"]
        assert error["code"] == "REFERENCE_IN_USE"
        assert error["message"] == "Cannot delete this venue as it has associated bookings."
        db.expire_all()
        assert db.query(Venue).filter(Venue.id == sample_venue.id).first() is not None

    def test_delete_venue_with_events_restricted(self, client, sample_event, sample_venue):
        response = client.delete(f"/api/venues/{sample_venue.id}")

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_delete_venue_removes_stored_image(self, client, db, sample_other_venue, mock_s3_client):
        sample_other_venue.image_url = f"{TEST_BUCKET_URL}/venues/pavilion.png"
        db.commit()

        response = client.delete(f"/api/venues/{sample_other_venue.id}")

        assert response.status_code == status.HTTP_200_OK
        mock_s3_client.delete_object.assert_called_once_with(
            Bucket="test-bucket", Key="venues/pavilion.png"
        )

    def test_delete_venue_survives_image_cleanup_failure(self, client, db, sample_other_venue, mock_s3_client):
        sample_other_venue.image_url = f"{TEST_BUCKET_URL}/venues/pavilion.png"
        db.commit()
        mock_s3_client.delete_object.side_effect = ClientError(
            {"Error": {"Code": "500", "Message": "boom"}}, "DeleteObject"
        )

        response = client.delete(f"/api/venues/{sample_other_venue.id}")

        assert response.status_code == status.HTTP_200_OK

    def test_delete_venue_not_found(self, client, db):
        response = client.delete(f"/api/venues/{uuid.uuid4()}")

        assert response.status_code == status.HTTP_404_NOT_FOUND


# =============================================================================
# TEST: Availability (GET /api/venues/{id}/availability)
# =============================================================================
class TestVenueAvailability:

    def test_booked_day_is_unavailable(self, client, sample_booking, sample_venue):
        response = client.get(
            f"/api/venues/{sample_venue.id}/availability",
            params={"date": BOOKING_DAY.isoformat()}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["isAvailable"] is False
        assert [slot["reference"] for slot in data["bookedSlots"]] == [sample_booking.reference]

    def test_free_day_is_available(self, client, sample_booking, sample_venue):
        response = client.get(
            f"/api/venues/{sample_venue.id}/availability",
            params={"date": (BOOKING_DAY + timedelta(days=1)).isoformat()}
        )

        data = response.json()
        assert data["isAvailable"] is True
        assert data["bookedSlots"] == []

    def test_availability_requires_date(self, client, sample_venue):
        response = client.get(f"/api/venues/{sample_venue.id}/availability")

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY

    def test_availability_unknown_venue(self, client, db):
        response = client.get(
            f"/api/venues/{uuid.uuid4()}/availability",
            params={"date": BOOKING_DAY.isoformat()}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_overnight_booking_blocks_next_day(self, client, db, sample_venue, sample_event):
        db.add(Booking(
            id=str(uuid.uuid4()),
            reference=str(uuid.uuid4()),
            venue_id=sample_venue.id,
            event_id=sample_event.id,
            start_time=at(22, day=BOOKING_DAY - timedelta(days=1)),
            end_time=at(2)
        ))
        db.commit()

        response = client.get(
            f"/api/venues/{sample_venue.id}/availability",
            params={"date": BOOKING_DAY.isoformat()}
        )

        assert response.json()["isAvailable"] is False

    def test_booking_ending_at_midnight_leaves_day_free(self, client, db, sample_venue, sample_event):
        db.add(Booking(
            id=str(uuid.uuid4()),
            reference=str(uuid.uuid4()),
            venue_id=sample_venue.id,
            event_id=sample_event.id,
            start_time=at(20, day=BOOKING_DAY - timedelta(days=1)),
            end_time=at(0)
        ))
        db.commit()

        response = client.get(
            f"/api/venues/{sample_venue.id}/availability",
            params={"date": BOOKING_DAY.isoformat()}
        )

        assert response.json()["isAvailable"] is True

    def test_bookings_on_day_ignore_other_venues(self, db, sample_booking, sample_other_venue):
        assert VenueService(db).get_bookings_on(sample_other_venue.id, BOOKING_DAY) == []


# =============================================================================
# TEST: Venue images (/api/venues/{id}/image)
# =============================================================================
class TestVenueImage:

    def test_upload_image(self, client, sample_venue, mock_s3_client):
        response = client.post(
            f"/api/venues/{sample_venue.id}/image",
            files={"image": ("ballroom.PNG", b"\x89PNG fake", "image/png")}
        )

        assert response.status_code == status.HTTP_200_OK
        image_url = response.json()["venue"]["imageUrl"]
        assert image_url.startswith(f"{TEST_BUCKET_URL}/venues/")
        assert image_url.endswith(".png")

        mock_s3_client.upload_fileobj.assert_called_once()
        args, kwargs = mock_s3_client.upload_fileobj.call_args
        assert args[1] == "test-bucket"
        assert kwargs["ExtraArgs"] == {"ContentType": "image/png"}
        mock_s3_client.delete_object.assert_not_called()

    def test_upload_replaces_previous_image(self, client, db, sample_venue, mock_s3_client):
        sample_venue.image_url = f"{TEST_BUCKET_URL}/venues/old.jpg"
        db.commit()

        response = client.post(
            f"/api/venues/{sample_venue.id}/image",
            files={"image": ("new.jpg", b"jpeg bytes", "image/jpeg")}
        )

        assert response.status_code == status.HTTP_200_OK
        mock_s3_client.delete_object.assert_called_once_with(Bucket="test-bucket", Key="venues/old.jpg")

    def test_upload_rejects_non_image(self, client, sample_venue, mock_s3_client):
        response = client.post(
            f"/api/venues/{sample_venue.id}/image",
            files={"image": ("notes.txt", b"hello", "text/plain")}
        )

        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
        mock_s3_client.upload_fileobj.assert_not_called()

    def test_upload_storage_failure_returns_502(self, client, sample_venue, mock_s3_client):
        mock_s3_client.upload_fileobj.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
        )

        response = client.post(
            f"/api/venues/{sample_venue.id}/image",
            files={"image": ("ballroom.png", b"png", "image/png")}
        )

        assert response.status_code == status.HTTP_502_BAD_GATEWAY
        assert response.json()["error"]["code"] == "STORAGE_ERROR"

    def test_remove_image(self, client, db, sample_venue, mock_s3_client):
        sample_venue.image_url = f"{TEST_BUCKET_URL}/venues/old.jpg"
        db.commit()

        response = client.delete(f"/api/venues/{sample_venue.id}/image")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["venue"]["imageUrl"] is None
        mock_s3_client.delete_object.assert_called_once_with(Bucket="test-bucket", Key="venues/old.jpg")

    def test_upload_discards_new_blob_when_save_fails(self, db, sample_venue, blob_storage, mock_s3_client, monkeypatch):
        service = VenueService(db, storage=blob_storage)

        def failing_update(venue, **kwargs):
            raise SQLAlchemyError("database unavailable")

        monkeypatch.setattr(service.venue_repo, "update", failing_update)

        with pytest.raises(SQLAlchemyError):
            service.upload_image(sample_venue.id, io.BytesIO(b"png"), "hall.png", "image/png")

        uploaded_key = mock_s3_client.upload_fileobj.call_args[0][2]
        mock_s3_client.delete_object.assert_called_once_with(Bucket="test-bucket", Key=uploaded_key)
