"""
Account model
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship

from fieldcheckin.core.db import Base


def utcnow():
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


class AccountRole(str, enum.Enum):
    OWNER = "owner"
    DELEGATE = "delegate"


class Account(Base):
    __tablename__ = "accounts"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(Enum(AccountRole, values_callable=lambda e: [m.value for m in e]), nullable=False)
    # Set only on delegates; owners never have an owner of their own
    owner_id = Column(String(36), ForeignKey("accounts.id", ondelete="RESTRICT"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    # Relationships
    owner = relationship("Account", remote_side=[id], back_populates="delegates")
    delegates = relationship("Account", back_populates="owner")
    events = relationship("Event", back_populates="owner")
