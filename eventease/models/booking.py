from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, CheckConstraint, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventease.core.database import Base


class Booking(Base):
    """
    Reservation of a venue for an event during [start_time, end_time).

    Bookings at the same venue must not overlap. The overlap check itself
    lives in BookingValidator; the table only guarantees end > start and a
    unique reference.
    """
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("end_time > start_time", name="ck_bookings_time_range"),
        Index("ix_bookings_venue_start", "venue_id", "start_time"),
    )
    
    id = Column(String(36), primary_key=True, index=True)
    
    reference = Column(String(36), nullable=False, unique=True, index=True)
    
    start_time = Column(DateTime, nullable=False)
    end_time = Column(DateTime, nullable=False)
    
    venue_id = Column(
        String(36),
        ForeignKey("venues.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    event_id = Column(
        String(36),
        ForeignKey("events.id", ondelete="RESTRICT"),
        nullable=False,
        index=True
    )
    
    version = Column(Integer, nullable=False, comment="Optimistic concurrency counter")
    
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
    
    venue = relationship("Venue", back_populates="bookings")
    event = relationship("Event", back_populates="bookings")
    
    __mapper_args__ = {"version_id_col": version}
    
    def __repr__(self) -> str:
        return f"<Booking(id={self.id}, reference={self.reference}, venue_id={self.venue_id}, start={self.start_time}, end={self.end_time})>"
    
    def to_dict(self, include_relations: bool = False) -> dict:
        booking_dict = {
            "id": self.id,
            "reference": self.reference,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "endTime": self.end_time.isoformat() if self.end_time else None,
            "venueId": self.venue_id,
            "eventId": self.event_id,
            "version": self.version,
            "bookingDate": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
        
        if include_relations:
            booking_dict["venue"] = {
                "id": self.venue.id,
                "name": self.venue.name,
                "location": self.venue.location
            } if self.venue else None
            booking_dict["event"] = {
                "id": self.event.id,
                "name": self.event.name,
                "title": self.event.title,
                "date": self.event.date.isoformat() if self.event.date else None
            } if self.event else None
        
        return booking_dict
