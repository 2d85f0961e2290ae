from __future__ import annotations
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional
import json
import logging

from fiscal.calendar.errors import MalformedInput, NotConfigured
from fiscal.config.env import get_calendar_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalendarTable:
    """Per-year offsets and 53-week years of the fiscal calendar.

    The offset of a year is the number of days added to the first day of
    that fiscal year to reach January 1st of the calendar year, e.g. fiscal
    2019 started on 2018-12-30 so its offset is 2.

    `years_with_53_weeks` may name years outside [min_date, max_date]: a date
    early in January can belong to the last week of the previous fiscal year.
    """

    offsets: Mapping[int, int]
    years_with_53_weeks: FrozenSet[int]
    min_date: date
    max_date: date

    def __post_init__(self):
        # read-only views so a shared table cannot be edited in place
        object.__setattr__(self, "offsets", MappingProxyType(dict(self.offsets)))
        object.__setattr__(self, "years_with_53_weeks", frozenset(self.years_with_53_weeks))
        if self.min_date > self.max_date:
            raise NotConfigured(f"min_date {self.min_date} is after max_date {self.max_date}")
        missing = [y for y in range(self.min_year, self.max_year + 1) if y not in self.offsets]
        if missing:
            raise NotConfigured(f"no offset configured for year(s) {missing}")

    @property
    def min_year(self) -> int:
        return self.min_date.year

    @property
    def max_year(self) -> int:
        return self.max_date.year

    def offset_for(self, year: int) -> int:
        try:
            return self.offsets[year]
        except KeyError:
            raise NotConfigured(f"no offset configured for year {year}") from None

    def has_53_weeks(self, year: int) -> bool:
        return year in self.years_with_53_weeks

    def weeks_in_year(self, year: int) -> int:
        return 53 if self.has_53_weeks(year) else 52

    def fiscal_year_start(self, year: int) -> date:
        """First day (a Sunday) of fiscal `year`."""
        return date(year, 1, 1) - timedelta(days=self.offset_for(year))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "offsets": {str(y): o for y, o in sorted(self.offsets.items())},
            "years_with_53_weeks": sorted(self.years_with_53_weeks),
            "min_date": self.min_date.isoformat(),
            "max_date": self.max_date.isoformat(),
        }

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "CalendarTable":
        try:
            offsets = {int(y): int(o) for y, o in data["offsets"].items()}
            years_53 = frozenset(int(y) for y in data.get("years_with_53_weeks", []))
            min_date = date.fromisoformat(str(data["min_date"]))
            max_date = date.fromisoformat(str(data["max_date"]))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise MalformedInput(
                f"invalid calendar table ({e!r}); expected keys 'offsets', "
                "'years_with_53_weeks', 'min_date' and 'max_date' (YYYY-MM-DD)"
            ) from e
        return CalendarTable(
            offsets=offsets,
            years_with_53_weeks=years_53,
            min_date=min_date,
            max_date=max_date,
        )

    @staticmethod
    def from_json_path(path: str | Path) -> "CalendarTable":
        try:
            data = json.loads(Path(path).read_text())
        except json.JSONDecodeError as e:
            raise MalformedInput(f"calendar table {path} is not valid JSON: {e}") from e
        except OSError as e:
            raise NotConfigured(f"cannot read calendar table {path}: {e.strerror or e}") from e
        table = CalendarTable.from_dict(data)
        logger.debug("loaded calendar table from %s covering %s..%s", path, table.min_date, table.max_date)
        return table


# Reference configuration. To extend the supported range add offsets (and any
# new 53-week year) and move max_date.
DEFAULT_TABLE = CalendarTable(
    offsets={
        2014: -4,
        2015: -3,
        2016: -2,
        2017: 0,
        2018: 1,
        2019: 2,
        2020: -4,
        2021: -2,
    },
    years_with_53_weeks=frozenset({2013, 2019}),
    min_date=date(2014, 1, 1),
    max_date=date(2021, 12, 31),
)


def load_table(path: Optional[str | Path] = None) -> CalendarTable:
    """Return the table at `path`, else at FISCAL_CALENDAR_PATH, else DEFAULT_TABLE."""
    if path is None:
        path = get_calendar_config().table_path
    if not path:
        return DEFAULT_TABLE
    p = Path(path)
    try:
        mtime = p.stat().st_mtime_ns
    except OSError as e:
        raise NotConfigured(f"cannot read calendar table {p}: {e.strerror or e}") from e
    return _load_cached(str(p), mtime)


@lru_cache(maxsize=8)
def _load_cached(path: str, mtime_ns: int) -> CalendarTable:
    # keyed on mtime so an edited file is picked up without a restart
    return CalendarTable.from_json_path(path)
