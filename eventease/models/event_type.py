from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from eventease.core.database import Base


class EventType(Base):
    """
    Category applied to events (e.g. Conference, Wedding, Concert).
    An event type cannot be deleted while events still use it.
    """
    __tablename__ = "event_types"
    
    id = Column(String(36), primary_key=True, index=True)
    
    name = Column(String(100), nullable=False, unique=True)
    
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now()
    )
    
    events = relationship("Event", back_populates="event_type", lazy="dynamic")
    
    def __repr__(self) -> str:
        return f"<EventType(id={self.id}, name={self.name})>"
    
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
