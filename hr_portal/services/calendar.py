"""Business-day counting over inclusive calendar-date ranges.

Dates are plain ``datetime.date`` values: a (year, month, day) triple with no
time-of-day and no offset. Parsing builds the date from its integer
components and every date of the range is ``start + timedelta(days=offset)``, so
the result never depends on the host timezone, locale or DST rules.

"Business days" (non-rest-days in the range) and "total calendar days" (the
raw inclusive span) are different quantities with separate functions.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Collection, Iterable, Iterator
from dataclasses import dataclass
from datetime import date, timedelta

from hr_portal.exceptions import InvalidDateFormatError, InvalidRangeError, RangeTooLongError

RestDayPolicy = Callable[[date], bool]

_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_SUNDAY = 6
_SATURDAY = 5


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_calendar_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string into a calendar date.

    Raises InvalidDateFormatError for any other shape or for components that
    do not form a real date (month 13, February 30, ...).
    """
    if not isinstance(value, str):
        raise InvalidDateFormatError(value)
    match = _DATE_PATTERN.fullmatch(value)
    if match is None:
        raise InvalidDateFormatError(value)
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        raise InvalidDateFormatError(value) from None


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DateRange:
    """Closed interval of calendar dates, ``start <= end``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidRangeError(self.start, self.end)

    @classmethod
    def parse(cls, start: str, end: str) -> DateRange:
        """Build a range from two ``YYYY-MM-DD`` strings."""
        return cls(parse_calendar_date(start), parse_calendar_date(end))

    @property
    def total_days(self) -> int:
        return (self.end - self.start).days + 1

    def days(self) -> Iterator[date]:
        """Yield every date from start to end inclusive."""
        for offset in range(self.total_days):
            yield self.start + timedelta(days=offset)

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end

    def overlaps(self, other: DateRange) -> bool:
        return self.start <= other.end and other.start <= self.end


@dataclass(frozen=True)
class BusinessDayCount:
    """Outcome of counting a range: the count plus the audit partition."""

    count: int
    included: tuple[date, ...]
    excluded: tuple[date, ...]

    @property
    def total_days(self) -> int:
        return self.count + len(self.excluded)


# ---------------------------------------------------------------------------
# Rest-day policies
# ---------------------------------------------------------------------------


def sunday_rest_day(day: date) -> bool:
    """Default policy: only Sundays are rest days."""
    return day.weekday() == _SUNDAY


def weekend_rest_days(day: date) -> bool:
    """Saturdays and Sundays are rest days."""
    return day.weekday() >= _SATURDAY


def weekday_rest_policy(weekdays: Iterable[int]) -> RestDayPolicy:
    """Rest on the given weekday numbers (Monday=0 ... Sunday=6)."""
    rest = frozenset(weekdays)
    invalid = sorted(w for w in rest if not 0 <= w <= _SUNDAY)
    if invalid:
        msg = f"Weekday numbers must be between 0 and 6, got {invalid}"
        raise ValueError(msg)

    def _policy(day: date) -> bool:
        return day.weekday() in rest

    return _policy


def with_holidays(policy: RestDayPolicy, holidays: Collection[date]) -> RestDayPolicy:
    """Extend a policy so that the given dates are also rest days."""
    holiday_set = frozenset(holidays)
    if not holiday_set:
        return policy

    def _policy(day: date) -> bool:
        return day in holiday_set or policy(day)

    return _policy


# ---------------------------------------------------------------------------
# Counting
# ---------------------------------------------------------------------------


def count_business_days(date_range: DateRange, policy: RestDayPolicy = sunday_rest_day) -> BusinessDayCount:
    """Count the days in the range that are not rest days under ``policy``."""
    included: list[date] = []
    excluded: list[date] = []
    for day in date_range.days():
        if policy(day):
            excluded.append(day)
        else:
            included.append(day)
    return BusinessDayCount(count=len(included), included=tuple(included), excluded=tuple(excluded))


def count_business_days_between(
    start: str,
    end: str,
    policy: RestDayPolicy = sunday_rest_day,
) -> BusinessDayCount:
    """String entry point: parse both ends as ``YYYY-MM-DD`` and count."""
    return count_business_days(DateRange.parse(start, end), policy)


def total_calendar_days(date_range: DateRange) -> int:
    """Inclusive span of the range with no rest-day exclusion."""
    return date_range.total_days


def ensure_max_length(date_range: DateRange, max_days: int) -> DateRange:
    """Return the range unchanged, or raise RangeTooLongError past ``max_days`` calendar days."""
    span = total_calendar_days(date_range)
    if span > max_days:
        raise RangeTooLongError(span, max_days)
    return date_range
