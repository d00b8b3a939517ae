# motorph_payroll/utils/date_converter.py

from datetime import date, datetime, time, timedelta
from typing import Iterator, Optional, Union

from motorph_payroll.constants import DATE_FORMAT, TIME_FORMAT


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """Parses a YYYY-MM-DD string (a trailing time part is ignored). Returns None for empty input."""
    if not date_str:
        return None
    return datetime.strptime(date_str.split(" ")[0], DATE_FORMAT).date()


def parse_time(time_str: Optional[str]) -> Optional[time]:
    """Parses HH:MM:SS or HH:MM. Returns None for empty input."""
    if not time_str:
        return None
    for fmt in (TIME_FORMAT, "%H:%M"):
        try:
            return datetime.strptime(time_str, fmt).time()
        except ValueError:
            continue
    raise ValueError(f"Invalid time value: {time_str!r}")


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yields every calendar date from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_weekday(day: date) -> bool:
    return day.weekday() < 5


def count_weekdays(start: date, end: date) -> int:
    return sum(1 for d in iter_dates(start, end) if is_weekday(d))


def from_qdate(q_date: 'QDate') -> date:
    """Converts a PyQt QDate to a standard python date."""
    return q_date.toPyDate()


def to_qdate(g_date: Optional[Union[date, datetime]]) -> 'QDate':
    """Converts a python date to a PyQt QDate (today when None)."""
    from PyQt5.QtCore import QDate
    if g_date is None:
        return QDate.currentDate()
    return QDate(g_date.year, g_date.month, g_date.day)
