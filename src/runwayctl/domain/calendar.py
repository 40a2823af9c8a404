"""Calendar index — month values and pure month arithmetic.

Every date the timeline and the runway projection deal with is a whole
calendar month.  :class:`CalendarMonth` is the internal representation;
the canonical ``"YYYY-MM"`` string only appears at serialization
boundaries (drop-target ids, callback parameters, scenario files).

INVARIANT: ordering is a strict total order by ``year * 12 + month``.
"""

from __future__ import annotations

import math
import re
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import date

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)

_KEY_PATTERN = re.compile(r"^(-?\d+)-(\d{1,2})$")


class ParseError(ValueError):
    """Raised when a month key is not two dash-separated integers."""


@dataclass(frozen=True, order=True)
class CalendarMonth:
    """A single calendar month.

    Field order matters: ``order=True`` compares ``(year, month)`` tuples,
    which is the same order as ``year * 12 + month``.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            msg = f"Month must be in 1..12, got {self.month}"
            raise ValueError(msg)

    @property
    def ordinal(self) -> int:
        """Months since year 0, January."""
        return self.year * 12 + (self.month - 1)

    @classmethod
    def from_ordinal(cls, ordinal: int) -> CalendarMonth:
        year, zero_based = divmod(ordinal, 12)
        return cls(year=year, month=zero_based + 1)

    @property
    def key(self) -> str:
        return to_key(self)

    def __str__(self) -> str:
        return to_key(self)


def to_key(month: CalendarMonth) -> str:
    """Canonical ``YYYY-MM`` key for *month*."""
    return f"{month.year:04d}-{month.month:02d}"


def from_key(key: str) -> CalendarMonth:
    """Parse a ``YYYY-MM`` key.

    Raises:
        ParseError: if *key* is not two dash-separated integers or the
            month part is outside 1..12.
    """
    if not isinstance(key, str):
        msg = f"Month key must be a string, got {type(key).__name__}"
        raise ParseError(msg)
    match = _KEY_PATTERN.match(key.strip())
    if match is None:
        msg = f"Invalid month key {key!r} (expected YYYY-MM)"
        raise ParseError(msg)
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        msg = f"Invalid month key {key!r} (month must be 01-12)"
        raise ParseError(msg)
    return CalendarMonth(year=year, month=month)


def add_months(month: CalendarMonth, n: int) -> CalendarMonth:
    """Return the month *n* months after *month* (negative *n* goes back)."""
    return CalendarMonth.from_ordinal(month.ordinal + n)


def subtract_months(month: CalendarMonth, n: int) -> CalendarMonth:
    """Return the month *n* months before *month*."""
    return CalendarMonth.from_ordinal(month.ordinal - n)


def months_between(a: CalendarMonth, b: CalendarMonth) -> int:
    """Signed number of months from *a* to *b*.

    >>> months_between(CalendarMonth(2025, 3), CalendarMonth(2025, 9))
    6
    """
    return b.ordinal - a.ordinal


def compare(a: CalendarMonth, b: CalendarMonth) -> int:
    """Three-way comparison returning -1, 0 or 1."""
    if a.ordinal < b.ordinal:
        return -1
    if a.ordinal > b.ordinal:
        return 1
    return 0


def quarter_of(month: CalendarMonth) -> int:
    """Quarter number 1..4."""
    return math.ceil(month.month / 3)


def quarter_label(month: CalendarMonth) -> str:
    """``"Q{quarter} {year}"``, e.g. ``"Q1 2025"``."""
    return f"Q{quarter_of(month)} {month.year}"


def month_label(month: CalendarMonth, *, with_year: bool = True) -> str:
    """Short display label: ``"Jan 2025"`` or just ``"Jan"``."""
    abbrev = MONTH_ABBREVIATIONS[month.month - 1]
    if with_year:
        return f"{abbrev} {month.year}"
    return abbrev


def is_quarter_start(month: CalendarMonth) -> bool:
    return month.month % 3 == 1


def is_year_start(month: CalendarMonth) -> bool:
    return month.month == 1


def month_range(first: CalendarMonth, count: int) -> Iterator[CalendarMonth]:
    """Yield *count* contiguous months starting at *first*."""
    for offset in range(max(0, count)):
        yield add_months(first, offset)


def current_month(today: date | None = None) -> CalendarMonth:
    """The month containing *today* (default: the local date)."""
    day = today or date.today()
    return CalendarMonth(year=day.year, month=day.month)
