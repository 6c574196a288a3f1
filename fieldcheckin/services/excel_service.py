"""
Excel export of an event's attendance register
"""

import io
from datetime import date
from typing import Optional
import pandas as pd
from sqlalchemy.orm import Session

from fieldcheckin.core.config import settings
from fieldcheckin.models import Event
from fieldcheckin.services.repositories import CheckInLogRepo

class ExcelService:
    """Service for handling Excel operations"""

    COLUMNS = [
        'ID Number', 'Name', 'Date of Birth', 'Sex', 'Region', 'Mid Region',
        'Local Region', 'Polling Center', 'Check-in Date', 'Checked In At', 'Recorded By'
    ]

    @staticmethod
    def sheet_name(day: Optional[date] = None) -> str:
        # Excel caps sheet names at 31 characters
        return (f"Attendance {day.isoformat()}" if day else "Attendance")[:31]

    @staticmethod
    def export_attendance(db: Session, event: Event, day: Optional[date] = None) -> bytes:
        """Export check-ins for the event, optionally for a single day"""
        logs = CheckInLogRepo.list_for_event(db, event.id, day)

        data = []
        for log in logs:
            participant = log.participant
            checked_in_at = pd.Timestamp(log.checked_in_at)
            if checked_in_at.tzinfo is None:
                checked_in_at = checked_in_at.tz_localize('UTC')
            data.append({
                'ID Number': participant.id_number,
                'Name': participant.name,
                'Date of Birth': participant.date_of_birth.isoformat(),
                'Sex': participant.sex,
                'Region': participant.region,
                'Mid Region': participant.mid_region,
                'Local Region': participant.local_region,
                'Polling Center': participant.polling_center,
                'Check-in Date': log.check_in_date.isoformat(),
                # Excel has no timezone support; write local wall-clock time
                'Checked In At': checked_in_at.tz_convert(settings.REPORTING_TIMEZONE).strftime('%Y-%m-%d %H:%M:%S'),
                'Recorded By': log.recorded_by.name,
            })

        df = pd.DataFrame(data, columns=ExcelService.COLUMNS)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name=ExcelService.sheet_name(day))

        return buffer.getvalue()
