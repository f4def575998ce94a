from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from eventease.core.database import get_db
from eventease.schemas.event_type import (
    EventTypeCreate,
    EventTypeDetailResponse,
    EventTypeResponse,
    EventTypeUpdate,
    EventTypesResponse,
)
from eventease.services.event_type_service import EventTypeService

router = APIRouter(prefix="/event-types", tags=["Event Types"])


@router.get("", response_model=EventTypesResponse)
def list_event_types(db: Session = Depends(get_db)):
    event_types = EventTypeService(db).list_event_types()
    return EventTypesResponse(
        eventTypes=[EventTypeResponse(**event_type.to_dict()) for event_type in event_types]
    )


@router.post("", response_model=EventTypeDetailResponse, status_code=status.HTTP_201_CREATED)
def create_event_type(event_type_data: EventTypeCreate, db: Session = Depends(get_db)):
    event_type = EventTypeService(db).create_event_type(event_type_data)
    return EventTypeDetailResponse(eventType=EventTypeResponse(**event_type.to_dict()))


@router.get("/{event_type_id}", response_model=EventTypeDetailResponse)
def get_event_type(event_type_id: str, db: Session = Depends(get_db)):
    event_type = EventTypeService(db).get_event_type(event_type_id)
    return EventTypeDetailResponse(eventType=EventTypeResponse(**event_type.to_dict()))


@router.put("/{event_type_id}", response_model=EventTypeDetailResponse)
def update_event_type(
    event_type_id: str,
    event_type_data: EventTypeUpdate,
    db: Session = Depends(get_db)
):
    event_type = EventTypeService(db).update_event_type(event_type_id, event_type_data)
    return EventTypeDetailResponse(eventType=EventTypeResponse(**event_type.to_dict()))


@router.delete("/{event_type_id}")
def delete_event_type(event_type_id: str, db: Session = Depends(get_db)):
    EventTypeService(db).delete_event_type(event_type_id)
    return {"success": True, "message": "Event type deleted"}
