from pydantic import BaseModel, Field
from typing import Optional, List


class VenueBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    location: str = Field(..., min_length=1, max_length=255)
    capacity: int = Field(..., ge=1, description="Maximum capacity")
    description: Optional[str] = Field(None, max_length=1000)


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    capacity: Optional[int] = Field(None, ge=1)
    description: Optional[str] = Field(None, max_length=1000)


class VenueResponse(BaseModel):
    id: str
    name: str
    location: str
    capacity: int
    description: Optional[str] = None
    imageUrl: Optional[str] = None
    createdAt: Optional[str] = None
    updatedAt: Optional[str] = None
    
    class Config:
        from_attributes = True


class VenueDetailResponse(BaseModel):
    success: bool = True
    venue: VenueResponse


class VenuesResponse(BaseModel):
    success: bool = True
    venues: List[VenueResponse]


class VenueAvailabilityResponse(BaseModel):
    success: bool = True
    venueId: str
    date: str
    isAvailable: bool
    bookedSlots: List[dict] = []
