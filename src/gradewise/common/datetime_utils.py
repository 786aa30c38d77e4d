from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    return datetime.fromisoformat(value)


def parse_hhmm(value: str) -> time:
    """Parse HH:MM string into time."""
    return datetime.strptime(value.strip(), "%H:%M").time()


def format_hhmm(value: time) -> str:
    return value.strftime("%H:%M")


def now_local() -> datetime:
    """School-local wall clock. Services also accept an explicit ``now``."""
    return datetime.now()


def start_of_week(day: date) -> date:
    """Monday of the week containing ``day``."""
    return day - timedelta(days=day.weekday())


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def at_time_of_day(moment: datetime, time_of_day: time) -> datetime:
    """Same calendar day as ``moment`` at ``time_of_day`` (seconds zeroed)."""
    return moment.replace(hour=time_of_day.hour, minute=time_of_day.minute, second=0, microsecond=0)
