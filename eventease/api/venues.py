from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from eventease.core.database import get_db
from eventease.schemas.venue import (
    VenueAvailabilityResponse,
    VenueCreate,
    VenueDetailResponse,
    VenueResponse,
    VenueUpdate,
    VenuesResponse,
)
from eventease.services.venue_service import VenueService
from eventease.utils.blob_storage import BlobStorage, get_blob_storage

router = APIRouter(prefix="/venues", tags=["Venues"])


@router.get("", response_model=VenuesResponse)
def list_venues(
    search: Optional[str] = Query(None, description="Match against venue name or location"),
    db: Session = Depends(get_db)
):
    venues = VenueService(db).list_venues(search=search)
    return VenuesResponse(venues=[VenueResponse(**venue.to_dict()) for venue in venues])


@router.post("", response_model=VenueDetailResponse, status_code=status.HTTP_201_CREATED)
def create_venue(venue_data: VenueCreate, db: Session = Depends(get_db)):
    venue = VenueService(db).create_venue(venue_data)
    return VenueDetailResponse(venue=VenueResponse(**venue.to_dict()))


@router.get("/{venue_id}", response_model=VenueDetailResponse)
def get_venue(venue_id: str, db: Session = Depends(get_db)):
    venue = VenueService(db).get_venue(venue_id)
    return VenueDetailResponse(venue=VenueResponse(**venue.to_dict()))


@router.put("/{venue_id}", response_model=VenueDetailResponse)
def update_venue(venue_id: str, venue_data: VenueUpdate, db: Session = Depends(get_db)):
    venue = VenueService(db).update_venue(venue_id, venue_data)
    return VenueDetailResponse(venue=VenueResponse(**venue.to_dict()))


@router.delete("/{venue_id}")
def delete_venue(
    venue_id: str,
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    VenueService(db, storage=storage).delete_venue(venue_id)
    return {"success": True, "message": "Venue deleted"}


@router.get("/{venue_id}/availability", response_model=VenueAvailabilityResponse)
def get_venue_availability(
    venue_id: str,
    day: date = Query(..., alias="date", description="Day to check (YYYY-MM-DD)"),
    db: Session = Depends(get_db)
):
    bookings = VenueService(db).get_bookings_on(venue_id, day)
    return VenueAvailabilityResponse(
        venueId=venue_id,
        date=day.isoformat(),
        isAvailable=not bookings,
        bookedSlots=[
            {
                "reference": booking.reference,
                "startTime": booking.start_time.isoformat(),
                "endTime": booking.end_time.isoformat(),
            }
            for booking in bookings
        ]
    )


@router.post("/{venue_id}/image", response_model=VenueDetailResponse)
def upload_venue_image(
    venue_id: str,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    venue = VenueService(db, storage=storage).upload_image(
        venue_id,
        fileobj=image.file,
        filename=image.filename,
        content_type=image.content_type
    )
    return VenueDetailResponse(venue=VenueResponse(**venue.to_dict()))


@router.delete("/{venue_id}/image", response_model=VenueDetailResponse)
def remove_venue_image(
    venue_id: str,
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    venue = VenueService(db, storage=storage).remove_image(venue_id)
    return VenueDetailResponse(venue=VenueResponse(**venue.to_dict()))
