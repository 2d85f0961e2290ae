"""Fiscal calendar conversion engine.

Sunday-start weeks, 4-4-5 months and occasional 53-week years, driven by a
per-year offset table. See `fiscal/calendar/engine.py` for `convert`.
"""

from .engine import calendar_rows, convert
from .errors import FiscalCalendarError, InvalidDirection, MalformedInput, NotConfigured, OutOfRange
from .table import DEFAULT_TABLE, CalendarTable

__all__ = [
    "CalendarTable",
    "DEFAULT_TABLE",
    "FiscalCalendarError",
    "InvalidDirection",
    "MalformedInput",
    "NotConfigured",
    "OutOfRange",
    "calendar_rows",
    "convert",
]
