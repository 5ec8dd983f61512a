"""Enrollment calendar: periods on campus and how far into them we are."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class Period:
    """A stretch of the semester on campus, both ends inclusive."""

    name: str
    start: date
    end: date

    @property
    def days(self) -> int:
        """Number of days in the period, counting both ends."""
        return (self.end - self.start).days + 1

    def contains(self, day: date) -> bool:
        """Return True if day falls within the period."""
        return self.start <= day <= self.end


FALL_2024: tuple[Period, ...] = (
    Period("Orientation to Fall Break", date(2024, 8, 25), date(2024, 10, 11)),
    Period("After Fall Break to Thanksgiving", date(2024, 10, 21), date(2024, 11, 26)),
    Period("After Thanksgiving to Winter Break", date(2024, 12, 2), date(2024, 12, 15)),
)


def validate_periods(periods: Sequence[Period]) -> None:
    """
    Check periods are well formed and in order.

    Raises:
        ValueError: If a period ends before it starts, or periods overlap
            or are out of order
    """
    for period in periods:
        if period.end < period.start:
            raise ValueError(f"Period '{period.name}' ends before it starts")

    for earlier, later in zip(periods, periods[1:]):
        if later.start <= earlier.end:
            raise ValueError(
                f"Period '{later.name}' must start after '{earlier.name}' ends"
            )


def total_days(periods: Sequence[Period]) -> int:
    """Days on campus across all periods; breaks are not counted."""
    return sum(period.days for period in periods)


def current_day_index(periods: Sequence[Period], now: date | datetime) -> int:
    """
    Count the days on campus up to and including ``now``.

    Whole periods that ended before ``now`` count in full; the period
    containing ``now`` counts up to and including that day. A date in a
    break counts only the periods already finished, a date before the
    first period is day 0, and a date after the last is the total.

    Args:
        periods: Ordered, non-overlapping periods
        now: Date (or datetime; the time of day is ignored)

    Returns:
        Day index between 0 and total_days(periods)
    """
    if isinstance(now, datetime):
        now = now.date()

    day_index = 0
    for period in periods:
        if period.contains(now):
            return day_index + (now - period.start).days + 1
        if now > period.end:
            day_index += period.days
    return day_index
