from sqlalchemy import Column, String, DateTime, Integer, Text, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventease.core.database import Base


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_venues_capacity_positive"),
    )
    
    id = Column(String(36), primary_key=True, index=True)
    
    name = Column(String(100), nullable=False)
    location = Column(String(255), nullable=False)
    capacity = Column(Integer, nullable=False, comment="Maximum capacity of venue")
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True, comment="Public URL of the uploaded venue image")
    
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
    
    bookings = relationship("Booking", back_populates="venue", lazy="dynamic")
    events = relationship("Event", back_populates="venue", lazy="dynamic")
    
    def __repr__(self) -> str:
        return f"<Venue(id={self.id}, name={self.name}, location={self.location})>"
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "location": self.location,
            "capacity": self.capacity,
            "description": self.description,
            "imageUrl": self.image_url,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }
