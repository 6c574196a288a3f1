"""
Pydantic schemas package
"""

from .common import *
from .event import *
from .participant import *
from .account import *

__all__ = [
    "StandardResponse",
    "ErrorResponse",
    "EventCreate",
    "EventResponse",
    "OwnerSummary",
    "SearchRequest",
    "CheckInRequest",
    "VerifiedRecord",
    "RecorderSummary",
    "ParticipantResponse",
    "CheckInResponse",
    "CheckInHistoryEntry",
    "ParticipantHistory",
    "DailyCheckIn",
    "AccountResponse",
    "DelegateAssign",
]
