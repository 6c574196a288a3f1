"""
Repository layer over the SQLAlchemy session.

Repositories only read and stage rows; services decide when to commit.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload, selectinload

from fieldcheckin.models import Account, CheckInLog, Event, Participant


# -------- Account repository --------

class AccountRepo:
    @staticmethod
    def get_by_id(db: Session, account_id: str) -> Optional[Account]:
        return db.query(Account).filter(Account.id == account_id).first()

    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[Account]:
        return db.query(Account).filter(Account.email == email).first()

    @staticmethod
    def list_delegates(db: Session, owner_id: str) -> List[Account]:
        return db.query(Account).filter(Account.owner_id == owner_id).order_by(Account.created_at.desc()).all()


# -------- Event repository --------

class EventRepo:
    @staticmethod
    def get_by_id(db: Session, event_id: str) -> Optional[Event]:
        return db.query(Event).options(joinedload(Event.owner)).filter(Event.id == event_id).first()

    @staticmethod
    def list_owned_by(db: Session, owner_id: str) -> List[Event]:
        return (
            db.query(Event)
            .options(joinedload(Event.owner))
            .filter(Event.owner_id == owner_id)
            .order_by(Event.created_at.desc())
            .all()
        )

    @staticmethod
    def create(db: Session, name: str, region: str, mid_region: Optional[str],
               local_region: Optional[str], owner_id: str) -> Event:
        event = Event(
            name=name,
            region=region,
            mid_region=mid_region,
            local_region=local_region,
            owner_id=owner_id,
        )
        db.add(event)
        db.commit()
        db.refresh(event)
        return event


# -------- Participant repository --------

class ParticipantRepo:
    @staticmethod
    def get_by_key(db: Session, event_id: str, id_number: str) -> Optional[Participant]:
        return db.query(Participant).filter(
            Participant.event_id == event_id,
            Participant.id_number == id_number
        ).first()

    @staticmethod
    def count_for_event(db: Session, event_id: str) -> int:
        return db.query(Participant).filter(Participant.event_id == event_id).count()

    @staticmethod
    def list_with_history(db: Session, event_id: str) -> List[Participant]:
        return (
            db.query(Participant)
            .options(selectinload(Participant.check_in_logs).joinedload(CheckInLog.recorded_by))
            .filter(Participant.event_id == event_id)
            .order_by(Participant.created_at.desc())
            .all()
        )


# -------- Check-in log repository --------

class CheckInLogRepo:
    @staticmethod
    def get_for_day(db: Session, participant_id: str, event_id: str, day: date) -> Optional[CheckInLog]:
        return db.query(CheckInLog).filter(
            CheckInLog.participant_id == participant_id,
            CheckInLog.event_id == event_id,
            CheckInLog.check_in_date == day
        ).first()

    @staticmethod
    def count_for_event(db: Session, event_id: str) -> int:
        return db.query(CheckInLog).filter(CheckInLog.event_id == event_id).count()

    @staticmethod
    def list_for_event(db: Session, event_id: str, day: Optional[date] = None) -> List[CheckInLog]:
        query = (
            db.query(CheckInLog)
            .options(joinedload(CheckInLog.participant), joinedload(CheckInLog.recorded_by))
            .filter(CheckInLog.event_id == event_id)
        )
        if day is not None:
            query = query.filter(CheckInLog.check_in_date == day)
        return query.order_by(CheckInLog.checked_in_at.desc()).all()
