from __future__ import annotations
from typing import Optional, Tuple

# Cumulative week count closing each fiscal month (4-4-5 per quarter). From
# month 08 onwards a 53-week year shifts every threshold by one week.
_THRESHOLDS: Tuple[int, ...] = (4, 8, 13, 17, 21, 26, 30, 34, 39, 43, 47, 52)
_FIRST_SHIFTED_MONTH = 8


def thresholds(is_53_week_year: bool) -> Tuple[int, ...]:
    extra = 1 if is_53_week_year else 0
    return tuple(
        t + extra if m >= _FIRST_SHIFTED_MONTH else t
        for m, t in enumerate(_THRESHOLDS, start=1)
    )


def month_number(week: int, is_53_week_year: bool) -> Optional[str]:
    """Two-digit fiscal month ("01".."12") containing fiscal `week`.

    Returns None when the week lies outside the year (below 1, or past week
    52 / 53); callers validate weeks before getting here.
    """
    if week < 1:
        return None
    for m, limit in enumerate(thresholds(is_53_week_year), start=1):
        if week <= limit:
            return f"{m:02d}"
    return None


def weeks_per_month(is_53_week_year: bool) -> Tuple[int, ...]:
    """Number of weeks in each fiscal month, e.g. (4, 4, 5, 4, 4, 5, ...)."""
    out = []
    prev = 0
    for limit in thresholds(is_53_week_year):
        out.append(limit - prev)
        prev = limit
    return tuple(out)
