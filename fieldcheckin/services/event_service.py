"""
Event directory: creation, lookup, scoped listing and deletion
"""

import logging
from typing import List, Optional
from sqlalchemy.orm import Session

from fieldcheckin.core.errors import Forbidden, NotFound, ValidationError
from fieldcheckin.models import Account, AccountRole, Event
from fieldcheckin.services.access_control import can_delete, ensure_access, scope_owner_id
from fieldcheckin.services.repositories import CheckInLogRepo, EventRepo, ParticipantRepo

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class EventService:
    """Service for event directory operations"""

    @staticmethod
    def create_event(
        db: Session,
        name: Optional[str],
        region: Optional[str],
        owner: Account,
        mid_region: Optional[str] = None,
        local_region: Optional[str] = None,
    ) -> Event:
        """Create an event owned by the calling owner account"""
        if owner.role != AccountRole.OWNER:
            raise Forbidden("Only owner accounts can create events")

        name, region = _clean(name), _clean(region)
        mid_region, local_region = _clean(mid_region), _clean(local_region)

        if not name or not region:
            raise ValidationError("Event name and region are required")
        if local_region and not mid_region:
            raise ValidationError("Local region requires a mid-level region")

        event = EventRepo.create(db, name, region, mid_region, local_region, owner.id)
        logger.info(f"Event {event.id} created by {owner.id}")
        return event

    @staticmethod
    def get_event(db: Session, event_id: str) -> Event:
        event = EventRepo.get_by_id(db, event_id)
        if not event:
            raise NotFound("Event not found")
        return event

    @staticmethod
    def get_accessible_event(db: Session, event_id: str, account: Account) -> Event:
        """Resolve an event and check the account may use it"""
        event = EventService.get_event(db, event_id)
        ensure_access(event, account)
        return event

    @staticmethod
    def list_events(db: Session, account: Account) -> List[Event]:
        """Events in the account's scope, newest first"""
        owner_id = scope_owner_id(account)
        if owner_id is None:
            return []
        return EventRepo.list_owned_by(db, owner_id)

    @staticmethod
    def delete_event(db: Session, event_id: str, account: Account) -> None:
        """Delete an event; participants and check-ins go with it"""
        event = EventService.get_event(db, event_id)
        if not can_delete(event, account):
            raise Forbidden("Only the owner who created this event can delete it")

        participants = ParticipantRepo.count_for_event(db, event.id)
        check_ins = CheckInLogRepo.count_for_event(db, event.id)

        db.delete(event)
        db.commit()
        logger.info(
            f"Event {event_id} deleted by {account.id} "
            f"({participants} participants, {check_ins} check-ins removed)"
        )
