# hotelbook/utils/date_utils.py
"""
Date utilities for stay intervals.

Notes:
- Stays are half-open ``[check_in, check_out)``: the check-in night is
  included, the check-out day is not.
- Only calendar dates are compared. A ``datetime`` is truncated to its date.
"""

from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Tuple, Union

from hotelbook.core.exceptions import InvalidInterval

logger = logging.getLogger(__name__)

DateInput = Union[date, datetime, str, None]


@dataclass(frozen=True)
class StayInterval:
    """A validated half-open stay ``[check_in, check_out)``."""

    check_in: date
    check_out: date

    def __post_init__(self) -> None:
        if self.check_out <= self.check_in:
            raise InvalidInterval(
                "Check-out date must be after check-in date",
                start_date=self.check_in.isoformat(),
                end_date=self.check_out.isoformat(),
            )

    @property
    def nights(self) -> int:
        return (self.check_out - self.check_in).days

    def overlaps(self, other: "StayInterval") -> bool:
        return intervals_overlap(self.check_in, self.check_out, other.check_in, other.check_out)

    def contains_night(self, night: date) -> bool:
        """True when the guest sleeps in the room on ``night``."""
        return self.check_in <= night < self.check_out

    def nights_iter(self) -> Iterator[date]:
        return daterange(self.check_in, self.check_out)


def to_date(value: DateInput, field: str = "date") -> date:
    """
    Coerce a date, datetime or ISO ``YYYY-MM-DD`` string to a calendar date.

    Raises InvalidInterval when the value is missing or cannot be parsed.
    """
    if value is None or value == "":
        raise InvalidInterval(f"Missing {field}")

    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            logger.debug(f"Unparsable {field}: {value!r}")
            raise InvalidInterval(f"Invalid {field}: {value!r}") from None

    raise InvalidInterval(f"Invalid {field}: {value!r}")


def make_interval(check_in: DateInput, check_out: DateInput) -> StayInterval:
    """Parse and validate a stay interval."""
    return StayInterval(
        check_in=to_date(check_in, "check-in date"),
        check_out=to_date(check_out, "check-out date"),
    )


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    """Half-open overlap test. Back-to-back ranges do not overlap."""
    return a_start < b_end and b_start < a_end


def daterange(start: date, end: date) -> Iterator[date]:
    """Yield each date from ``start`` up to but excluding ``end``."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def month_range(year: int, month: int) -> Tuple[date, date]:
    """Return ``(first_day, first_day_of_next_month)`` for the month."""
    if not 1 <= month <= 12:
        raise InvalidInterval(f"Invalid month: {month}")
    _, num_days = calendar.monthrange(year, month)
    first = date(year, month, 1)
    return first, first + timedelta(days=num_days)
