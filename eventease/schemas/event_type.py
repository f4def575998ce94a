from pydantic import BaseModel, Field
from typing import Optional


class EventTypeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)


class EventTypeCreate(EventTypeBase):
    pass


class EventTypeUpdate(EventTypeBase):
    pass


class EventTypeResponse(BaseModel):
    id: str
    name: str
    createdAt: Optional[str] = None
    
    class Config:
        from_attributes = True


class EventTypeDetailResponse(BaseModel):
    success: bool = True
    eventType: EventTypeResponse


class EventTypesResponse(BaseModel):
    success: bool = True
    eventTypes: list[EventTypeResponse]
