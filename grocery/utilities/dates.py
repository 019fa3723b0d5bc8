"""Boundary date helpers. Dates travel as DD-MM-YYYY strings and are otherwise opaque."""
from datetime import date, datetime
from typing import Optional

from grocery.utilities.config import DATE_FORMAT


def today_str() -> str:
    return date.today().strftime(DATE_FORMAT)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a boundary date string; None when missing or malformed (used for ordering only)."""
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None
