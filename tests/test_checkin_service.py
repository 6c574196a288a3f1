"""
Tests for the check-in ledger
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from fieldcheckin.core.db import Base, enable_sqlite_foreign_keys
from fieldcheckin.core.errors import AlreadyCheckedIn, ValidationError
from fieldcheckin.models import Account, AccountRole, CheckInLog, Event, Participant
from fieldcheckin.services.checkin_service import CheckInService, parse_report_date, reporting_day

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_checkins.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False, "timeout": 30})
sa_event.listen(engine, "connect", enable_sqlite_foreign_keys)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

DAY_D = datetime(2024, 6, 15, 9, 0, tzinfo=timezone.utc)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def owner(db_session):
    account = Account(name="Owner O", email="owner@example.com", role=AccountRole.OWNER)
    db_session.add(account)
    db_session.commit()
    db_session.refresh(account)
    return account

@pytest.fixture
def sample_event(db_session, owner):
    event = Event(name="Rally", region="R1", owner_id=owner.id)
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

@pytest.fixture
def participant(db_session, sample_event):
    participant = Participant(
        event_id=sample_event.id,
        id_number="123",
        name="Jane Wanjiku",
        date_of_birth=date(1990, 5, 1),
        sex="F",
    )
    db_session.add(participant)
    db_session.commit()
    db_session.refresh(participant)
    return participant

def test_reporting_day_uses_reporting_timezone():
    """Test the calendar day is taken in the reporting timezone, not UTC"""
    late_utc = datetime(2024, 6, 15, 22, 30, tzinfo=timezone.utc)
    assert reporting_day(late_utc, "Africa/Nairobi") == date(2024, 6, 16)
    assert reporting_day(late_utc, "UTC") == date(2024, 6, 15)

def test_reporting_day_treats_naive_as_utc():
    """Test naive timestamps are interpreted as UTC"""
    assert reporting_day(datetime(2024, 6, 15, 22, 30), "Africa/Nairobi") == date(2024, 6, 16)

def test_parse_report_date():
    """Test report dates must be YYYY-MM-DD"""
    assert parse_report_date("2024-06-15") == date(2024, 6, 15)
    for bad in ["2024-6-15", "15-06-2024", "2024-02-30", "yesterday", "", "2024-W24-6", "2024-06-15T09:00", "20240615"]:
        with pytest.raises(ValidationError):
            parse_report_date(bad)

def test_record_check_in(db_session, owner, sample_event, participant):
    """Test a first check-in is recorded with day and exact timestamp"""
    log = CheckInService.record_check_in(db_session, participant.id, sample_event.id, owner, DAY_D)

    assert log.id is not None
    assert log.participant_id == participant.id
    assert log.event_id == sample_event.id
    assert log.recorded_by_id == owner.id
    assert log.check_in_date == reporting_day(DAY_D)
    assert log.checked_in_at.replace(tzinfo=None) == DAY_D.replace(tzinfo=None)

def test_second_check_in_same_day_is_rejected(db_session, owner, sample_event, participant):
    """Test the same participant cannot be credited twice in one day"""
    CheckInService.record_check_in(db_session, participant.id, sample_event.id, owner, DAY_D)

    with pytest.raises(AlreadyCheckedIn):
        CheckInService.record_check_in(
            db_session, participant.id, sample_event.id, owner, DAY_D + timedelta(hours=3)
        )
    assert db_session.query(CheckInLog).count() == 1

def test_check_in_next_day_is_recorded(db_session, owner, sample_event, participant):
    """Test a new day opens a new check-in for the same participant"""
    first = CheckInService.record_check_in(db_session, participant.id, sample_event.id, owner, DAY_D)
    second = CheckInService.record_check_in(
        db_session, participant.id, sample_event.id, owner, DAY_D + timedelta(days=1)
    )

    assert first.id != second.id
    assert first.participant_id == second.participant_id
    assert db_session.query(CheckInLog).count() == 2

def test_storage_rejects_duplicate_triple(db_session, owner, sample_event, participant):
    """Test the database itself refuses a second row for the same day"""
    for _ in range(2):
        db_session.add(CheckInLog(
            participant_id=participant.id,
            event_id=sample_event.id,
            recorded_by_id=owner.id,
            check_in_date=date(2024, 6, 15),
            checked_in_at=DAY_D,
        ))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()

def test_constraint_wins_when_precheck_misses(db_session, owner, sample_event, participant, monkeypatch):
    """Test a constraint violation is reported as AlreadyCheckedIn even if the pre-check saw nothing"""
    CheckInService.record_check_in(db_session, participant.id, sample_event.id, owner, DAY_D)

    from fieldcheckin.services import checkin_service
    real_get_for_day = checkin_service.CheckInLogRepo.get_for_day
    calls = []

    def stale_get_for_day(db, participant_id, event_id, day):
        calls.append(day)
        # First call is the optimistic pre-check; pretend it raced
        if len(calls) == 1:
            return None
        return real_get_for_day(db, participant_id, event_id, day)

    monkeypatch.setattr(checkin_service.CheckInLogRepo, "get_for_day", staticmethod(stale_get_for_day))

    with pytest.raises(AlreadyCheckedIn):
        CheckInService.record_check_in(db_session, participant.id, sample_event.id, owner, DAY_D)
    assert db_session.query(CheckInLog).count() == 1

def test_concurrent_check_ins_have_one_winner(db_session, owner, sample_event, participant):
    """Test concurrent attempts on one triple yield exactly one recorded check-in"""
    workers = 8
    participant_id, event_id = participant.id, sample_event.id
    recorder = SimpleNamespace(id=owner.id)
    barrier = threading.Barrier(workers)

    def attempt(_):
        db = TestingSessionLocal()
        try:
            barrier.wait()
            CheckInService.record_check_in(db, participant_id, event_id, recorder, DAY_D)
            return "recorded"
        except AlreadyCheckedIn:
            return "duplicate"
        finally:
            db.close()

    with ThreadPoolExecutor(max_workers=workers) as pool:
        results = list(pool.map(attempt, range(workers)))

    assert results.count("recorded") == 1
    assert results.count("duplicate") == workers - 1
    assert db_session.query(CheckInLog).filter(CheckInLog.participant_id == participant_id).count() == 1

def test_check_in_participant_resolves_then_records(db_session, owner, sample_event):
    """Test the full flow registers the participant and the check-in"""
    log, participant = CheckInService.check_in_participant(
        db_session,
        event=sample_event,
        account=owner,
        id_number="456",
        demographics={"name": "John Otieno", "date_of_birth": "1985-01-20", "sex": "M"},
        when=DAY_D,
    )

    assert participant.id_number == "456"
    assert log.participant_id == participant.id

    # Demographic corrections are kept even when the repeat check-in is refused
    with pytest.raises(AlreadyCheckedIn):
        CheckInService.check_in_participant(
            db_session,
            event=sample_event,
            account=owner,
            id_number="456",
            demographics={"name": "John O. Otieno", "date_of_birth": "1985-01-20", "sex": "M"},
            when=DAY_D,
        )
    db_session.expire_all()
    assert db_session.get(Participant, participant.id).name == "John O. Otieno"

def test_list_for_event_orders_newest_first(db_session, owner, sample_event):
    """Test participants and their logs are listed newest first"""
    for id_number in ["111", "222"]:
        CheckInService.check_in_participant(
            db_session, sample_event, owner, id_number,
            {"name": f"P{id_number}", "date_of_birth": "1980-01-01", "sex": "F"}, when=DAY_D,
        )
    CheckInService.check_in_participant(
        db_session, sample_event, owner, "111",
        {"name": "P111", "date_of_birth": "1980-01-01", "sex": "F"}, when=DAY_D + timedelta(days=1),
    )

    entries = CheckInService.list_for_event(db_session, sample_event.id)

    assert [e["participant"].id_number for e in entries] == ["222", "111"]
    history = entries[1]
    assert history["total_check_ins"] == 2
    dates = [log.check_in_date for log in history["check_in_logs"]]
    assert dates == sorted(dates, reverse=True)
    assert history["check_in_logs"][0].recorded_by.id == owner.id

def test_list_for_event_on_date(db_session, owner, sample_event):
    """Test the daily report returns only that day's check-ins, newest first"""
    for hour, id_number in [(8, "111"), (10, "222")]:
        CheckInService.check_in_participant(
            db_session, sample_event, owner, id_number,
            {"name": f"P{id_number}", "date_of_birth": "1980-01-01", "sex": "F"},
            when=DAY_D.replace(hour=hour),
        )
    CheckInService.check_in_participant(
        db_session, sample_event, owner, "333",
        {"name": "P333", "date_of_birth": "1980-01-01", "sex": "F"}, when=DAY_D + timedelta(days=1),
    )

    logs = CheckInService.list_for_event_on_date(db_session, sample_event.id, reporting_day(DAY_D))

    assert [log.participant.id_number for log in logs] == ["222", "111"]
    assert all(log.recorded_by.email == "owner@example.com" for log in logs)
    assert CheckInService.list_for_event_on_date(db_session, sample_event.id, date(2020, 1, 1)) == []
