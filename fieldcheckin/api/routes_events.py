"""
Event API routes - requires authentication
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from fieldcheckin.core.db import get_db
from fieldcheckin.models import Account
from fieldcheckin.schemas.event import EventCreate, EventResponse
from fieldcheckin.services.event_service import EventService
from fieldcheckin.utils.security import get_current_account, require_owner
from fieldcheckin.utils.responses import success_response

router = APIRouter()

@router.post("")
def create_event(
    event_data: EventCreate,
    db: Session = Depends(get_db),
    account: Account = Depends(require_owner)
):
    """Create a new event owned by the caller"""
    event = EventService.create_event(
        db,
        name=event_data.name,
        region=event_data.region,
        mid_region=event_data.mid_region,
        local_region=event_data.local_region,
        owner=account,
    )

    return success_response(
        message="Event created successfully",
        data={"event": EventResponse.model_validate(event)},
        status_code=201
    )

@router.get("")
def list_events(
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """List events in the caller's access scope"""
    events = EventService.list_events(db, account)

    return success_response(
        message="Events retrieved successfully",
        data={"events": [EventResponse.model_validate(event) for event in events]}
    )

@router.get("/{event_id}")
def get_event(
    event_id: str,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Get a single event"""
    event = EventService.get_accessible_event(db, event_id, account)

    return success_response(
        message="Event retrieved successfully",
        data={"event": EventResponse.model_validate(event)}
    )

@router.delete("/{event_id}")
def delete_event(
    event_id: str,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Delete an event with all its participants and check-ins"""
    EventService.delete_event(db, event_id, account)

    return success_response(message="Event deleted successfully")
