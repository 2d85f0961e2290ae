from __future__ import annotations
import os
from dataclasses import dataclass

@dataclass(frozen=True)
class CalendarConfig:
    table_path: str | None = None  # JSON table replacing the built-in one


def get_calendar_config() -> CalendarConfig:
    return CalendarConfig(table_path=os.getenv("FISCAL_CALENDAR_PATH") or None)


@dataclass(frozen=True)
class APIConfig:
    api_key: str | None = None
    rate_limit_n: int = 5
    rate_limit_window_sec: float = 1.0


def get_api_config() -> APIConfig:
    return APIConfig(
        api_key=os.getenv("API_KEY") or None,
        rate_limit_n=int(os.getenv("RATE_LIMIT_N", "5")),
        rate_limit_window_sec=float(os.getenv("RATE_LIMIT_WINDOW_SEC", "1.0")),
    )
