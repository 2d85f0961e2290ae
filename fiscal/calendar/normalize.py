from __future__ import annotations
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, FrozenSet, Tuple
import re

from fiscal.calendar.errors import InvalidDirection, MalformedInput, OutOfRange
from fiscal.calendar.table import CalendarTable

DATE = "date"
FISCAL_WEEK = "fiscal week"
WEEK_BEGINNING = "week beginning"
WEEK_ENDING = "week ending"
FISCAL_MONTH = "fiscal month"
FISCAL_YEAR = "fiscal year"

# from -> allowed targets
DIRECTIONS: Dict[str, FrozenSet[str]] = {
    DATE: frozenset({WEEK_BEGINNING, WEEK_ENDING, FISCAL_WEEK, FISCAL_MONTH, FISCAL_YEAR}),
    FISCAL_WEEK: frozenset({WEEK_BEGINNING, WEEK_ENDING, FISCAL_MONTH}),
}

_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_FISCAL_WEEK_RE = re.compile(r"^([0-9]{2})\.([0-9]{4})$")


@dataclass(frozen=True)
class FiscalWeek:
    week: int
    year: int

    @property
    def label(self) -> str:
        return f"{self.week:02d}.{self.year}"

    def __str__(self) -> str:
        return self.label


def _norm_name(s: Any) -> str:
    if not isinstance(s, str):
        return ""
    return re.sub(r"[\s_-]+", " ", s.strip().lower())


def normalize_direction(from_: Any, to: Any) -> Tuple[str, str]:
    """Canonicalize a (from, to) pair; case and `_`/`-` separators are ignored."""
    f, t = _norm_name(from_), _norm_name(to)
    if f not in DIRECTIONS:
        raise InvalidDirection(f"from={from_!r} is not supported; expected one of {sorted(DIRECTIONS)}")
    allowed = DIRECTIONS[f]
    if t not in allowed:
        raise InvalidDirection(
            f"cannot convert from {f!r} to {to!r}; expected one of {sorted(allowed)}"
        )
    return f, t


def parse_date(value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        s = value.strip()
        if _DATE_RE.match(s):
            try:
                return date.fromisoformat(s)
            except ValueError:
                pass
    raise MalformedInput(f"{value!r} is not a date; input should be in the format 'YYYY-MM-DD' when from is 'date'")


def parse_fiscal_week(value: Any) -> FiscalWeek:
    m = _FISCAL_WEEK_RE.match(value.strip()) if isinstance(value, str) else None
    if not m:
        raise MalformedInput(
            f"{value!r} is not a fiscal week; input should be in the format 'WW.YYYY' when from is 'fiscal week'"
        )
    return FiscalWeek(week=int(m.group(1)), year=int(m.group(2)))


def check_date_range(d: date, table: CalendarTable) -> date:
    if d < table.min_date or d > table.max_date:
        raise OutOfRange(f"date {d.isoformat()} is outside the supported range ({table.min_date} to {table.max_date})")
    return d


def check_fiscal_week_range(fw: FiscalWeek, table: CalendarTable) -> FiscalWeek:
    if fw.year < table.min_year or fw.year > table.max_year:
        raise OutOfRange(
            f"fiscal week {fw.label} is outside the supported range ({table.min_year} to {table.max_year})"
        )
    n = table.weeks_in_year(fw.year)
    if not (1 <= fw.week <= n):
        raise OutOfRange(f"fiscal week {fw.label} does not exist; fiscal {fw.year} has weeks 01 to {n}")
    return fw


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))
