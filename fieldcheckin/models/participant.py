"""
Participant model
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from fieldcheckin.core.db import Base
from fieldcheckin.models.account import new_id, utcnow

class Participant(Base):
    __tablename__ = "participants"

    id = Column(String(36), primary_key=True, default=new_id)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    id_number = Column(String(50), nullable=False)

    # Demographics are re-entered at every check-in and overwrite these
    name = Column(String(255), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    sex = Column(String(20), nullable=False)
    region = Column(String(255), nullable=True)
    mid_region = Column(String(255), nullable=True)
    local_region = Column(String(255), nullable=True)
    polling_center = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    event = relationship("Event", back_populates="participants")
    check_in_logs = relationship(
        "CheckInLog",
        back_populates="participant",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CheckInLog.checked_in_at.desc()",
    )

    __table_args__ = (
        UniqueConstraint("event_id", "id_number", name="uq_participant_event_id_number"),
    )
