"""
Participant API routes: identity search, check-in and attendance reports
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import Response
from sqlalchemy.orm import Session

from fieldcheckin.core.db import get_db
from fieldcheckin.core.errors import NotFound
from fieldcheckin.models import Account
from fieldcheckin.schemas.participant import (
    CheckInHistoryEntry,
    CheckInRequest,
    CheckInResponse,
    DailyCheckIn,
    ParticipantHistory,
    ParticipantResponse,
    RecorderSummary,
    SearchRequest,
)
from fieldcheckin.services.checkin_service import CheckInService, parse_report_date
from fieldcheckin.services.event_service import EventService
from fieldcheckin.services.excel_service import ExcelService
from fieldcheckin.services.identity_gateway import IdentityGateway, get_identity_gateway
from fieldcheckin.utils.security import get_current_account
from fieldcheckin.utils.responses import success_response

router = APIRouter()

def _load_event_for_lookup(db: Session, event_id: str, account: Account):
    event = EventService.get_accessible_event(db, event_id, account)
    # Nothing else is read or written; release the connection before the registry call
    db.close()
    return event

@router.post("/search")
async def search_participant(
    search_data: SearchRequest,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account),
    gateway: IdentityGateway = Depends(get_identity_gateway)
):
    """Look up an identity number in the registry within the event's location"""
    event = await run_in_threadpool(_load_event_for_lookup, db, search_data.event_id, account)

    record = await gateway.verify_for_event(event, search_data.id_number)
    if record is None:
        raise NotFound("Participant not found")

    return success_response(
        message="Participant found",
        data={"participant": record.model_dump()}
    )

@router.post("/checkin")
def check_in_participant(
    checkin_data: CheckInRequest,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Register today's attendance for a participant"""
    event = EventService.get_accessible_event(db, checkin_data.event_id, account)

    log, participant = CheckInService.check_in_participant(
        db,
        event=event,
        account=account,
        id_number=checkin_data.id_number,
        demographics=checkin_data.model_dump(exclude={"event_id", "id_number"}),
    )

    return success_response(
        message="Participant checked in successfully",
        data={
            "check_in": CheckInResponse.model_validate(log),
            "participant": ParticipantResponse.model_validate(participant),
        },
        status_code=201
    )

@router.get("/event/{event_id}")
def list_event_participants(
    event_id: str,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Participants of an event with their full check-in history"""
    event = EventService.get_accessible_event(db, event_id, account)

    entries = CheckInService.list_for_event(db, event.id)
    participants = [
        ParticipantHistory(
            **ParticipantResponse.model_validate(entry["participant"]).model_dump(),
            check_in_logs=[CheckInHistoryEntry.model_validate(log) for log in entry["check_in_logs"]],
            total_check_ins=entry["total_check_ins"],
        )
        for entry in entries
    ]

    return success_response(
        message="Participants retrieved successfully",
        data={"participants": participants}
    )

@router.get("/event/{event_id}/date/{date}")
def list_event_check_ins_on_date(
    event_id: str,
    date: str,
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Check-ins recorded for an event on a single day"""
    event = EventService.get_accessible_event(db, event_id, account)
    day = parse_report_date(date)

    logs = CheckInService.list_for_event_on_date(db, event.id, day)
    check_ins = [
        DailyCheckIn(
            check_in_id=log.id,
            check_in_date=log.check_in_date,
            checked_in_at=log.checked_in_at,
            participant=ParticipantResponse.model_validate(log.participant),
            recorded_by=RecorderSummary.model_validate(log.recorded_by),
        )
        for log in logs
    ]

    return success_response(
        message="Participants retrieved successfully",
        data={"date": day.isoformat(), "count": len(check_ins), "participants": check_ins}
    )

@router.get("/event/{event_id}/export.xlsx")
def export_event_attendance(
    event_id: str,
    date: Optional[str] = Query(None, description="Restrict to one day (YYYY-MM-DD)"),
    db: Session = Depends(get_db),
    account: Account = Depends(get_current_account)
):
    """Download the attendance register as an Excel workbook"""
    event = EventService.get_accessible_event(db, event_id, account)
    day = parse_report_date(date) if date else None

    content = ExcelService.export_attendance(db, event, day)
    suffix = f"_{day.isoformat()}" if day else ""

    return Response(
        content=content,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f"attachment; filename=attendance_{event.id}{suffix}.xlsx"}
    )
