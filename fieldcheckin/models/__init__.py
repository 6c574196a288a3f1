"""
Database models package
"""

from .account import Account, AccountRole
from .event import Event
from .participant import Participant
from .checkin_log import CheckInLog

__all__ = ["Account", "AccountRole", "Event", "Participant", "CheckInLog"]
