"""
Check-in ledger.

A participant is credited at most once per event per reporting day. The
``uq_checkin_participant_event_date`` constraint is what guarantees it: the
lookup before the insert only saves a round trip in the common case, and a
constraint violation on insert is always reported as ``AlreadyCheckedIn``
even if that lookup saw nothing.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fieldcheckin.core.config import settings
from fieldcheckin.core.errors import AlreadyCheckedIn, ValidationError
from fieldcheckin.models import Account, CheckInLog, Event, Participant
from fieldcheckin.services.participant_service import ParticipantService
from fieldcheckin.services.repositories import CheckInLogRepo, ParticipantRepo
from fieldcheckin.utils.dates import parse_iso_date

logger = logging.getLogger(__name__)


def reporting_day(when: datetime, tz_name: Optional[str] = None) -> date:
    """Calendar day of a timestamp in the reporting timezone"""
    tz = ZoneInfo(tz_name or settings.REPORTING_TIMEZONE)
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return when.astimezone(tz).date()


def parse_report_date(value: str) -> date:
    """Parse a YYYY-MM-DD path parameter"""
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError("Invalid date format. Use YYYY-MM-DD")


class CheckInService:
    """Service for recording and reporting attendance"""

    @staticmethod
    def record_check_in(
        db: Session,
        participant_id: str,
        event_id: str,
        recorded_by: Account,
        when: Optional[datetime] = None,
    ) -> CheckInLog:
        """Record attendance for the participant's reporting day, once"""
        when = when or datetime.now(timezone.utc)
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        when = when.astimezone(timezone.utc)
        day = reporting_day(when)

        if CheckInLogRepo.get_for_day(db, participant_id, event_id, day):
            raise AlreadyCheckedIn()

        log = CheckInLog(
            participant_id=participant_id,
            event_id=event_id,
            recorded_by_id=recorded_by.id,
            check_in_date=day,
            checked_in_at=when,
        )
        db.add(log)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if CheckInLogRepo.get_for_day(db, participant_id, event_id, day):
                raise AlreadyCheckedIn()
            raise

        db.refresh(log)
        logger.info(f"Participant {participant_id} checked in to event {event_id} for {day} by {recorded_by.id}")
        return log

    @staticmethod
    def check_in_participant(
        db: Session,
        event: Event,
        account: Account,
        id_number: str,
        demographics: Mapping[str, Any],
        when: Optional[datetime] = None,
    ) -> Tuple[CheckInLog, Participant]:
        """Resolve the participant for the event, then record today's attendance"""
        participant = ParticipantService.resolve_for_check_in(db, event.id, id_number, demographics)
        try:
            log = CheckInService.record_check_in(db, participant.id, event.id, account, when)
        except AlreadyCheckedIn:
            logger.info(f"Participant {participant.id} already checked in to event {event.id} today")
            raise
        return log, participant

    @staticmethod
    def list_for_event(db: Session, event_id: str) -> List[Dict[str, Any]]:
        """Participants with their full check-in history, newest participant first"""
        participants = ParticipantRepo.list_with_history(db, event_id)
        return [
            {
                "participant": participant,
                "check_in_logs": list(participant.check_in_logs),
                "total_check_ins": len(participant.check_in_logs),
            }
            for participant in participants
        ]

    @staticmethod
    def list_for_event_on_date(db: Session, event_id: str, day: date) -> List[CheckInLog]:
        """Check-ins on one reporting day, newest first, with participant and recorder loaded"""
        return CheckInLogRepo.list_for_event(db, event_id, day)
