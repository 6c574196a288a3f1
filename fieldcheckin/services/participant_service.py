"""
Participant registry: per-event identity records and demographic merge
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from fieldcheckin.core.errors import ValidationError
from fieldcheckin.models import Participant
from fieldcheckin.services.repositories import ParticipantRepo
from fieldcheckin.utils.dates import parse_iso_date

logger = logging.getLogger(__name__)


@dataclass
class Demographics:
    """Hand-entered details submitted with each check-in"""
    name: str
    date_of_birth: date
    sex: str
    region: Optional[str] = None
    mid_region: Optional[str] = None
    local_region: Optional[str] = None
    polling_center: Optional[str] = None

    def apply_to(self, participant: Participant) -> None:
        # Every field is overwritten, including optional ones the caller left out
        participant.name = self.name
        participant.date_of_birth = self.date_of_birth
        participant.sex = self.sex
        participant.region = self.region
        participant.mid_region = self.mid_region
        participant.local_region = self.local_region
        participant.polling_center = self.polling_center


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_date_of_birth(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError("Date of birth must be a valid date (YYYY-MM-DD)")


def validate_demographics(id_number: Any, data: Mapping[str, Any]) -> Demographics:
    """Check the required fields and normalise the submission"""
    missing = [
        field for field, value in (
            ("id_number", id_number),
            ("name", data.get("name")),
            ("date_of_birth", data.get("date_of_birth")),
            ("sex", data.get("sex")),
        )
        if _text(value) is None
    ]
    if missing:
        raise ValidationError(
            "ID number, name, date of birth, and sex are required",
            details={"missing": missing},
        )

    return Demographics(
        name=_text(data.get("name")),
        date_of_birth=parse_date_of_birth(data.get("date_of_birth")),
        sex=_text(data.get("sex")),
        region=_text(data.get("region")),
        mid_region=_text(data.get("mid_region")),
        local_region=_text(data.get("local_region")),
        polling_center=_text(data.get("polling_center")),
    )


class ParticipantService:
    """Service for resolving participants at check-in"""

    @staticmethod
    def resolve_for_check_in(
        db: Session,
        event_id: str,
        id_number: str,
        demographics: Mapping[str, Any],
    ) -> Participant:
        """Find or create the participant for (event, id number) and overwrite its details.

        The same key always yields the same row; the stored demographics are
        always the latest submission.
        """
        details = validate_demographics(id_number, demographics)
        id_number = _text(id_number)

        participant = ParticipantRepo.get_by_key(db, event_id, id_number)
        if participant is None:
            participant = Participant(event_id=event_id, id_number=id_number)
            details.apply_to(participant)
            db.add(participant)
            try:
                db.commit()
            except IntegrityError:
                # Lost a race with a concurrent first check-in for the same key
                db.rollback()
                participant = ParticipantRepo.get_by_key(db, event_id, id_number)
                if participant is None:
                    raise
                logger.info(f"Participant {id_number} for event {event_id} created concurrently, updating")
            else:
                db.refresh(participant)
                logger.info(f"Participant {participant.id} registered for event {event_id}")
                return participant

        details.apply_to(participant)
        db.commit()
        db.refresh(participant)
        return participant
