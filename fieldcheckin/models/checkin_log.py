"""
Check-in log model
"""

from sqlalchemy import Column, String, Date, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from fieldcheckin.core.db import Base
from fieldcheckin.models.account import new_id, utcnow

class CheckInLog(Base):
    __tablename__ = "check_in_logs"

    id = Column(String(36), primary_key=True, default=new_id)
    participant_id = Column(String(36), ForeignKey("participants.id", ondelete="CASCADE"), nullable=False)
    event_id = Column(String(36), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    recorded_by_id = Column(String(36), ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=False)
    check_in_date = Column(Date, nullable=False)  # reporting-day, local timezone
    checked_in_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    participant = relationship("Participant", back_populates="check_in_logs")
    event = relationship("Event", back_populates="check_in_logs")
    recorded_by = relationship("Account")

    __table_args__ = (
        UniqueConstraint(
            "participant_id", "event_id", "check_in_date", name="uq_checkin_participant_event_date"
        ),
    )
