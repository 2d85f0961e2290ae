from __future__ import annotations
from typing import List, Dict, Any, Iterable
import csv
import io

SCHEMAS = {
    "calendar": [
        "date","week_beginning","week_ending","fiscal_week","fiscal_month","fiscal_year"
    ],
}


def write_csv(rows: Iterable[Dict[str, Any]], columns: List[str]) -> str:
    buf = io.StringIO()
    w = csv.DictWriter(buf, fieldnames=columns, extrasaction="ignore")
    w.writeheader()
    for r in rows:
        w.writerow({k: r.get(k) for k in columns})
    return buf.getvalue()


def write_calendar(rows: Iterable[Dict[str, Any]]) -> str:
    return write_csv(rows, SCHEMAS["calendar"])
