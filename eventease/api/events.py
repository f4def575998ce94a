from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, File, Query, UploadFile, status
from sqlalchemy.orm import Session

from eventease.core.database import get_db
from eventease.schemas.event import (
    EventCreate,
    EventDetailResponse,
    EventResponse,
    EventUpdate,
    EventsResponse,
)
from eventease.services.event_service import EventService
from eventease.utils.blob_storage import BlobStorage, get_blob_storage

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventsResponse)
def list_events(
    search: Optional[str] = Query(None, description="Match against name, title or description"),
    eventTypeId: Optional[str] = Query(None),
    venueId: Optional[str] = Query(None),
    startDate: Optional[date] = Query(None),
    endDate: Optional[date] = Query(None),
    db: Session = Depends(get_db)
):
    events = EventService(db).list_events(
        search=search,
        event_type_id=eventTypeId,
        venue_id=venueId,
        start_date=startDate,
        end_date=endDate
    )
    return EventsResponse(
        events=[EventResponse(**event.to_dict(include_relations=True)) for event in events]
    )


@router.post("", response_model=EventDetailResponse, status_code=status.HTTP_201_CREATED)
def create_event(event_data: EventCreate, db: Session = Depends(get_db)):
    event = EventService(db).create_event(event_data)
    return EventDetailResponse(event=EventResponse(**event.to_dict(include_relations=True)))


@router.get("/{event_id}", response_model=EventDetailResponse)
def get_event(event_id: str, db: Session = Depends(get_db)):
    event = EventService(db).get_event(event_id)
    return EventDetailResponse(event=EventResponse(**event.to_dict(include_relations=True)))


@router.put("/{event_id}", response_model=EventDetailResponse)
def update_event(event_id: str, event_data: EventUpdate, db: Session = Depends(get_db)):
    event = EventService(db).update_event(event_id, event_data)
    return EventDetailResponse(event=EventResponse(**event.to_dict(include_relations=True)))


@router.delete("/{event_id}")
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    EventService(db, storage=storage).delete_event(event_id)
    return {"success": True, "message": "Event deleted"}


@router.post("/{event_id}/image", response_model=EventDetailResponse)
def upload_event_image(
    event_id: str,
    image: UploadFile = File(...),
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    event = EventService(db, storage=storage).upload_image(
        event_id,
        fileobj=image.file,
        filename=image.filename,
        content_type=image.content_type
    )
    return EventDetailResponse(event=EventResponse(**event.to_dict(include_relations=True)))


@router.delete("/{event_id}/image", response_model=EventDetailResponse)
def remove_event_image(
    event_id: str,
    db: Session = Depends(get_db),
    storage: BlobStorage = Depends(get_blob_storage)
):
    event = EventService(db, storage=storage).remove_image(event_id)
    return EventDetailResponse(event=EventResponse(**event.to_dict(include_relations=True)))
