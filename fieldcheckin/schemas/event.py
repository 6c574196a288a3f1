"""
Event-related Pydantic schemas
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel

class EventCreate(BaseModel):
    """Schema for creating an event"""
    name: str
    region: str
    mid_region: Optional[str] = None
    local_region: Optional[str] = None

class OwnerSummary(BaseModel):
    """Creator of an event"""
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True

class EventResponse(BaseModel):
    """Basic event response"""
    id: str
    name: str
    region: str
    mid_region: Optional[str] = None
    local_region: Optional[str] = None
    owner: OwnerSummary
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
