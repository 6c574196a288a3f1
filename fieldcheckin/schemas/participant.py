"""
Participant and check-in Pydantic schemas
"""

from datetime import date, datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict

class SearchRequest(BaseModel):
    """Identity registry lookup request"""
    event_id: str
    id_number: str

class CheckInRequest(BaseModel):
    """Check-in submission; demographics are re-entered on every visit"""
    event_id: str
    id_number: str
    name: str
    date_of_birth: str
    sex: str
    region: Optional[str] = None
    mid_region: Optional[str] = None
    local_region: Optional[str] = None
    polling_center: Optional[str] = None

class VerifiedRecord(BaseModel):
    """Record returned by the identity registry"""
    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)

    id_number: Optional[str] = None
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    sex: Optional[str] = None
    region: Optional[str] = None
    mid_region: Optional[str] = None
    local_region: Optional[str] = None
    polling_center: Optional[str] = None

class RecorderSummary(BaseModel):
    """Account that recorded a check-in"""
    id: str
    name: str
    email: str

    class Config:
        from_attributes = True

class ParticipantResponse(BaseModel):
    """Participant snapshot"""
    id: str
    event_id: str
    id_number: str
    name: str
    date_of_birth: date
    sex: str
    region: Optional[str] = None
    mid_region: Optional[str] = None
    local_region: Optional[str] = None
    polling_center: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

class CheckInResponse(BaseModel):
    """A single recorded check-in"""
    id: str
    participant_id: str
    event_id: str
    check_in_date: date
    checked_in_at: datetime

    class Config:
        from_attributes = True

class CheckInHistoryEntry(BaseModel):
    """Check-in as listed under its participant"""
    id: str
    check_in_date: date
    checked_in_at: datetime
    recorded_by: RecorderSummary

    class Config:
        from_attributes = True

class ParticipantHistory(ParticipantResponse):
    """Participant with the full check-in history for an event"""
    check_in_logs: List[CheckInHistoryEntry]
    total_check_ins: int

class DailyCheckIn(BaseModel):
    """Check-in on a given day joined with participant and recorder"""
    check_in_id: str
    check_in_date: date
    checked_in_at: datetime
    participant: ParticipantResponse
    recorded_by: RecorderSummary
