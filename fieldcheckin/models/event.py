"""
Event model
"""

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from fieldcheckin.core.db import Base
from fieldcheckin.models.account import new_id, utcnow

class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    region = Column(String(255), nullable=False)
    mid_region = Column(String(255), nullable=True)
    local_region = Column(String(255), nullable=True)
    owner_id = Column(String(36), ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships; the database performs the cascade (passive_deletes)
    owner = relationship("Account", back_populates="events")
    participants = relationship(
        "Participant", back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
    check_in_logs = relationship(
        "CheckInLog", back_populates="event", cascade="all, delete-orphan", passive_deletes=True
    )
