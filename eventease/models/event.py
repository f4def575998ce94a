from sqlalchemy import Column, String, DateTime, Date, Text, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventease.core.database import Base


DEFAULT_EVENT_IMAGE = "/images/event-placeholder.jpg"


class Event(Base):
    __tablename__ = "events"
    
    id = Column(String(36), primary_key=True, index=True)
    
    name = Column(String(100), nullable=False)
    title = Column(String(150), nullable=False)
    date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False)
    image_url = Column(String(500), nullable=False, default=DEFAULT_EVENT_IMAGE)
    
    venue_id = Column(
        String(36),
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    event_type_id = Column(
        String(36),
        ForeignKey("event_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now()
    )
    
    venue = relationship("Venue", back_populates="events")
    event_type = relationship("EventType", back_populates="events")
    bookings = relationship("Booking", back_populates="event", lazy="dynamic")
    
    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.date})>"
    
    @property
    def has_custom_image(self) -> bool:
        return bool(self.image_url) and self.image_url != DEFAULT_EVENT_IMAGE
    
    def to_dict(self, include_relations: bool = False) -> dict:
        event_dict = {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "description": self.description,
            "imageUrl": self.image_url,
            "venueId": self.venue_id,
            "eventTypeId": self.event_type_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        
        if include_relations:
            event_dict["venue"] = {
                "id": self.venue.id,
                "name": self.venue.name,
                "location": self.venue.location
            } if self.venue else None
            event_dict["eventType"] = {
                "id": self.event_type.id,
                "name": self.event_type.name
            } if self.event_type else None
        
        return event_dict
