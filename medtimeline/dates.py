"""
Date coercion helpers - whole calendar days, no timezone component
"""
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser

from medtimeline.config import settings
from medtimeline.exceptions import InvalidInputError


# Tried before falling back to dateutil; day-first forms match the source documents
DATE_FORMATS = [
    '%Y-%m-%d', '%d/%m/%Y', '%d-%m-%Y',
    '%Y/%m/%d', '%d.%m.%Y',
]

# isoparse also accepts "2025" and "2025-10"; only hand it full dates
ISO_FULL_DATE = re.compile(r'^\d{4}-?\d{2}-?\d{2}(?:[T ]|$)')

# Two unrelated fill-in values: a component dateutil had to borrow shows up as a difference
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2004, 2, 2))


def coerce_date(value: Any, field: str = "date") -> Optional[date]:
    """
    Normalize a date-like value to a ``date``.
    
    Args:
        value: date, datetime, date string, or None/empty string
        field: field name reported in errors
        
    Returns:
        The calendar day, or None when the value is absent
        
    Raises:
        InvalidInputError: value is present but is not a complete date
    """
    if value is None:
        return None
    
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    
    if isinstance(value, date):
        return value
    
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        
        # ISO timestamps such as 2025-10-23T00:00:00.000Z
        if ISO_FULL_DATE.match(text):
            try:
                return date_parser.isoparse(text).date()
            except ValueError:
                pass

        try:
            first, second = (date_parser.parse(text, dayfirst=True, default=d).date() for d in _PARSE_DEFAULTS)
        except (ValueError, OverflowError) as e:
            raise InvalidInputError(field, f"unrecognized date {value!r}") from e

        if first != second:
            raise InvalidInputError(field, f"incomplete date {value!r}, day, month and year are required")
        return first
    
    raise InvalidInputError(field, f"expected a date, got {type(value).__name__}")


def add_days(day: date, days: int) -> date:
    """Shift a calendar day by a whole number of days"""
    return day + timedelta(days=days)


def format_day(day: Optional[date], fmt: Optional[str] = None) -> str:
    """Format a day for display labels (dd/mm/yyyy by default)"""
    if day is None:
        return ""
    return day.strftime(fmt or settings.DATE_LABEL_FORMAT)
