"""Date window calculations over plain calendar dates.

Every window is built from ``datetime.date`` values only. Nothing here touches
a clock, a timestamp or a timezone, so the same inputs give the same dates on
any machine regardless of its UTC offset.
"""

from __future__ import annotations

import calendar
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Union

from ..errors import InvalidWindowSpec

_YEAR_MONTH_RE = re.compile(r"^\s*(\d{4})-(\d{1,2})\s*$")


@dataclass(frozen=True, slots=True)
class YearMonth:
    """A calendar month identified by integer year and month."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.year <= 9999:
            raise InvalidWindowSpec(f"year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise InvalidWindowSpec(f"month out of range: {self.month}")

    @classmethod
    def of(cls, day: date) -> "YearMonth":
        return cls(day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return date(self.year, self.month, calendar.monthrange(self.year, self.month)[1])

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def parse_year_month(value: str) -> YearMonth:
    """Parse ``YYYY-MM`` into a :class:`YearMonth`.

    Year and month are read as integers; the string never goes through a
    date/time parser that could read it as midnight UTC.
    """

    if not isinstance(value, str):
        raise InvalidWindowSpec(f"year-month must be a string, got {type(value).__name__}")
    match = _YEAR_MONTH_RE.match(value)
    if match is None:
        raise InvalidWindowSpec(f"malformed year-month {value!r}, expected YYYY-MM")
    return YearMonth(int(match.group(1)), int(match.group(2)))


@dataclass(frozen=True, slots=True)
class SingleDay:
    """The reference date alone."""


@dataclass(frozen=True, slots=True)
class TrailingDays:
    """The ``days`` dates ending at (and including) the reference date."""

    days: int


@dataclass(frozen=True, slots=True)
class CalendarMonth:
    """Every day of one calendar month; the reference date is not used."""

    year_month: YearMonth

    @classmethod
    def parse(cls, value: str) -> "CalendarMonth":
        return cls(parse_year_month(value))


@dataclass(frozen=True, slots=True)
class MonthToDate:
    """First day of the reference date's month through the reference date."""


WindowKind = Union[SingleDay, TrailingDays, CalendarMonth, MonthToDate]


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive range of calendar dates, oldest first."""

    start: date
    end: date
    dates: tuple[date, ...]

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def __len__(self) -> int:
        return len(self.dates)


def date_range(start: date, end: date) -> tuple[date, ...]:
    """Return every date from ``start`` to ``end`` inclusive."""

    if end < start:
        raise InvalidWindowSpec(f"end {end.isoformat()} is before start {start.isoformat()}")
    span = (end - start).days
    return tuple(start + timedelta(days=offset) for offset in range(span + 1))


def _window(start: date, end: date) -> DateWindow:
    return DateWindow(start=start, end=end, dates=date_range(start, end))


def compute_window(reference: date, kind: WindowKind) -> DateWindow:
    """Resolve ``kind`` against ``reference`` into a concrete :class:`DateWindow`."""

    if isinstance(kind, SingleDay):
        return _window(reference, reference)

    if isinstance(kind, TrailingDays):
        if isinstance(kind.days, bool) or not isinstance(kind.days, int) or kind.days <= 0:
            raise InvalidWindowSpec(f"trailing window needs a positive day count, got {kind.days!r}")
        try:
            start = reference - timedelta(days=kind.days - 1)
        except OverflowError as exc:
            raise InvalidWindowSpec(f"{kind.days} days before {reference} is out of range") from exc
        return _window(start, reference)

    if isinstance(kind, CalendarMonth):
        ym = kind.year_month
        return _window(ym.first_day, ym.last_day)

    if isinstance(kind, MonthToDate):
        return _window(YearMonth.of(reference).first_day, reference)

    raise InvalidWindowSpec(f"unknown window kind: {kind!r}")
