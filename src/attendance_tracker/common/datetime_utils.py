from __future__ import annotations

from datetime import date, datetime, time, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM or HH:MM:SS into a time."""
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value.strip(), fmt).time()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_window(today: date) -> tuple[date, date]:
    """First day of today's month through today, inclusive."""
    return today.replace(day=1), today


def trailing_days(today: date, count: int) -> list[date]:
    """`count` calendar days ending at today, oldest first."""
    return [today - timedelta(days=offset) for offset in range(count - 1, -1, -1)]


def weekday_label(day: date) -> str:
    return day.strftime("%a")
