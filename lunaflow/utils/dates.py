"""
Calendar date utilities for cycle tracking.

Every function takes and returns YYYY-MM-DD strings. Strings are parsed into
plain ``date`` values (no time of day, no UTC conversion) before any
arithmetic, so a date never shifts by a day near midnight or across a
daylight-saving change.

The current day only ever comes from a clock object. Functions that need
"today" accept an optional ``clock`` and fall back to the system clock.

Typical usage:
    clock = FixedClock("2024-02-02")
    duration_in_days("2024-01-29", clock=clock)  # 5
    list(expand_range("2024-01-29", "2024-02-01"))
"""
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from lunaflow.services.constants import DATE_FORMAT, MAX_RANGE_DAYS


class SystemClock:
    """Clock reading the caller's local calendar date."""

    def today(self) -> str:
        return date.today().isoformat()


class FixedClock:
    """Clock frozen on a single day, for deterministic calculations."""

    def __init__(self, today: Union[str, date]):
        if isinstance(today, date):
            today = today.isoformat()
        parse_date(today)
        self._today = today

    def today(self) -> str:
        return self._today


_system_clock = SystemClock()


def parse_date(value: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Raises:
        ValueError: If the string is not a valid calendar date
    """
    return datetime.strptime(value, DATE_FORMAT).date()


def today(clock=None) -> str:
    """Return today's local calendar date as a string."""
    return (clock or _system_clock).today()


def add_days(value: str, days: int) -> str:
    """Shift a date string by a number of days."""
    return (parse_date(value) + timedelta(days=days)).isoformat()


def days_between(start: str, end: str) -> int:
    """
    Count calendar days from start to end.

    Args:
        start: First date
        end: Second date

    Returns:
        Signed day count, negative when end is before start

    Example:
        >>> days_between("2024-01-01", "2024-01-29")
        28
    """
    return (parse_date(end) - parse_date(start)).days


def duration_in_days(start: str, end: Optional[str] = None, clock=None) -> int:
    """
    Inclusive day count of a span, where the start date is day 1.

    An open span runs through today. The result is clamped to at least 1,
    also when start falls after the effective end.

    Args:
        start: First day of the span
        end: Last day of the span, None for a span still in progress
        clock: Optional clock used when end is None

    Returns:
        Number of days in the span, at least 1
    """
    effective_end = end or today(clock)
    return max(1, days_between(start, effective_end) + 1)


class DateRange:
    """
    Ascending run of date strings from start to end inclusive.

    Dates are generated on iteration, so the range can be iterated any
    number of times. Never yields more than ``limit`` dates.
    """

    def __init__(self, start: str, end: str, limit: int = MAX_RANGE_DAYS):
        self.start = start
        self.end = end
        self.limit = limit
        self._first = parse_date(start)
        self._count = days_between(start, end) + 1
        if self._count < 1:
            # Reversed range: fall back to the start date alone
            self._count = 1
        self._count = min(self._count, limit)

    def __iter__(self) -> Iterator[str]:
        for offset in range(self._count):
            yield (self._first + timedelta(days=offset)).isoformat()

    def __len__(self) -> int:
        return self._count

    def __getitem__(self, index):
        return list(self)[index]

    def __eq__(self, other) -> bool:
        if isinstance(other, DateRange):
            return list(self) == list(other)
        if isinstance(other, (list, tuple)):
            return list(self) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"DateRange({self.start!r}, {self.end!r}, days={self._count})"


def expand_range(start: str, end: Optional[str] = None, clock=None) -> DateRange:
    """
    Produce every date from start to end inclusive.

    An open range runs through today. If start is after the effective end,
    the range holds only the start date. At most MAX_RANGE_DAYS dates are
    produced.

    Example:
        >>> list(expand_range("2024-01-30", "2024-02-01"))
        ['2024-01-30', '2024-01-31', '2024-02-01']
    """
    return DateRange(start, end or today(clock))


def format_date(value: Optional[str]) -> str:
    """Format a date string for display, e.g. "Jan 5, 2024"."""
    if not value:
        return ""
    d = parse_date(value)
    return f"{d.strftime('%b')} {d.day}, {d.year}"


def format_short_date(value: Optional[str]) -> str:
    """Format a date string without the year, e.g. "Jan 5"."""
    if not value:
        return ""
    d = parse_date(value)
    return f"{d.strftime('%b')} {d.day}"


def format_day_of_week(value: Optional[str]) -> str:
    """Abbreviated weekday name, e.g. "Fri"."""
    if not value:
        return ""
    return parse_date(value).strftime("%a")
