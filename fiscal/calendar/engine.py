from __future__ import annotations
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Union
import logging

from fiscal.calendar.errors import MalformedInput, OutOfRange
from fiscal.calendar.months import month_number
from fiscal.calendar.normalize import (
    DATE,
    FISCAL_WEEK,
    FISCAL_YEAR,
    WEEK_BEGINNING,
    WEEK_ENDING,
    FiscalWeek,
    check_date_range,
    check_fiscal_week_range,
    is_sequence,
    normalize_direction,
    parse_date,
    parse_fiscal_week,
)
from fiscal.calendar.table import CalendarTable, load_table

logger = logging.getLogger(__name__)

Result = Union[date, int, str]


def week_beginning(d: date) -> date:
    """Sunday on or before `d`."""
    return d - timedelta(days=(d.weekday() + 1) % 7)


def week_ending(d: date) -> date:
    """Saturday on or after `d` (the next Sunday after `d`, minus a day)."""
    return week_beginning(d) + timedelta(days=6)


def fiscal_week_of(d: date, table: CalendarTable) -> FiscalWeek:
    """Fiscal week and year containing calendar date `d`.

    The date is shifted by its year's offset and numbered in 7-day blocks from
    January 1st of the shifted year. Blocks that spill across a year boundary
    are then corrected; every rule reads the uncorrected values.
    """
    year = d.year
    shifted = d + timedelta(days=table.offset_for(year))
    raw_week = (shifted.timetuple().tm_yday - 1) // 7 + 1
    raw_year = shifted.year

    if raw_year < year and table.has_53_weeks(raw_year):
        # tail of a 53-week previous year
        week, fy = 53, raw_year
    elif raw_year < year:
        week, fy = 52, raw_year
    elif raw_week == 53 and not table.has_53_weeks(year):
        # leftover days at the end of a 52-week year open the next fiscal year
        week, fy = 1, year + 1
    elif raw_year > year and table.has_53_weeks(year):
        week, fy = 53, year
    else:
        week, fy = raw_week, raw_year
    return FiscalWeek(week=week, year=fy)


def fiscal_month_start(week: int, year: int, table: CalendarTable) -> date:
    m = month_number(week, table.has_53_weeks(year))
    if m is None:
        raise OutOfRange(f"fiscal week {week:02d}.{year} has no fiscal month")
    return date(year, int(m), 1)


def date_to_fiscal(d: date, to: str, table: CalendarTable) -> Result:
    if to == WEEK_BEGINNING:
        return week_beginning(d)
    if to == WEEK_ENDING:
        return week_ending(d)
    fw = fiscal_week_of(d, table)
    if to == FISCAL_YEAR:
        return fw.year
    if to == FISCAL_WEEK:
        return fw.label
    return fiscal_month_start(fw.week, fw.year, table)


def fiscal_week_to_date(fw: FiscalWeek, to: str, table: CalendarTable) -> date:
    start = table.fiscal_year_start(fw.year)
    if to == WEEK_ENDING:
        return start + timedelta(days=fw.week * 7 - 1)
    if to == WEEK_BEGINNING:
        return start + timedelta(days=(fw.week - 1) * 7)
    return fiscal_month_start(fw.week, fw.year, table)


def _parser(from_: str, table: CalendarTable) -> Callable[[Any], Any]:
    if from_ == DATE:
        return lambda v: check_date_range(parse_date(v), table)
    return lambda v: check_fiscal_week_range(parse_fiscal_week(v), table)


def convert(value: Any, from_: str, to: str, table: Optional[CalendarTable] = None) -> Union[Result, List[Result]]:
    """Convert a date or `WW.YYYY` fiscal week, or a list of them.

    Supported directions:
    - 'date' -> 'week beginning' | 'week ending' | 'fiscal week' | 'fiscal month' | 'fiscal year'
    - 'fiscal week' -> 'week beginning' | 'week ending' | 'fiscal month'

    Dates come back as `datetime.date`, fiscal weeks as 'WW.YYYY' strings and
    fiscal years as ints. A list or tuple input gives a list in the same
    order; every element is validated before any is converted.
    """
    f, t = normalize_direction(from_, to)
    if table is None:
        table = load_table()
    parse = _parser(f, table)
    step = date_to_fiscal if f == DATE else fiscal_week_to_date

    if is_sequence(value):
        parsed = [parse(v) for v in value]
        logger.debug("converting %d values from %r to %r", len(parsed), f, t)
        return [step(p, t, table) for p in parsed]
    return step(parse(value), t, table)


def calendar_rows(start: Any, end: Any, table: Optional[CalendarTable] = None) -> List[Dict[str, Any]]:
    """One row per day in [start, end] with its weeks and fiscal period.

    Handy as a lookup table to join reporting data onto fiscal periods.
    """
    if table is None:
        table = load_table()
    first = check_date_range(parse_date(start), table)
    last = check_date_range(parse_date(end), table)
    if first > last:
        raise MalformedInput(f"start {first.isoformat()} is after end {last.isoformat()}")

    rows: List[Dict[str, Any]] = []
    d = first
    while d <= last:
        fw = fiscal_week_of(d, table)
        rows.append({
            "date": d.isoformat(),
            "week_beginning": week_beginning(d).isoformat(),
            "week_ending": week_ending(d).isoformat(),
            "fiscal_week": fw.label,
            "fiscal_month": fiscal_month_start(fw.week, fw.year, table).isoformat(),
            "fiscal_year": fw.year,
        })
        d += timedelta(days=1)
    logger.debug("built %d calendar rows for %s..%s", len(rows), first, last)
    return rows
