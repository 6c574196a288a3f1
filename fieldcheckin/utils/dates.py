"""
Date parsing helpers
"""

import re
from datetime import date, datetime

ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")

def parse_iso_date(value) -> date:
    """Parse exactly YYYY-MM-DD; raises ValueError for anything else"""
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()
