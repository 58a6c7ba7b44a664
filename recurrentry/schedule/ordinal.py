"""
Ordinal day resolution ("third Wednesday", "last weekday", ...) within a month.
"""

from datetime import date
from typing import AbstractSet, Iterable, List, Optional, Union

from recurrentry.conventions.types import DayCategory, DayOfWeek, Ordinal, OrdinalPosition
from recurrentry.errors import ConfigurationError
from recurrentry.schedule.adjustments import days_in_month


def _weekday_days(first: date, last_day: int, weekday: DayOfWeek) -> List[int]:
    """Days of the month falling on a given weekday, computed from the 1st."""
    offset = (weekday.value - first.isoweekday()) % 7
    return list(range(1 + offset, last_day + 1, 7))


def _category_days(
    first: date, last_day: int, category: DayCategory, weekend_days: AbstractSet[int]
) -> List[int]:
    if category == DayCategory.DAY:
        return list(range(1, last_day + 1))

    want_weekend = category == DayCategory.WEEKEND
    first_weekday = first.isoweekday()
    days = []
    for day in range(1, last_day + 1):
        iso = (first_weekday + day - 2) % 7 + 1
        if (iso in weekend_days) == want_weekend:
            days.append(day)
    return days


def get_ordinal_date(
    dt: date,
    on: Union[Ordinal, str],
    weekend_days: Iterable[int] = (),
) -> Optional[date]:
    """
    Resolve an ordinal specification within the month of dt.

    Args:
        dt: Any date in the target month
        on: Ordinal such as "first-monday" or "nextToLast-weekday"
        weekend_days: ISO weekday numbers forming the weekend

    Returns:
        The matching date, or None if the month has no such day
        (e.g. "fifth-friday" in a month with four Fridays)

    Raises:
        ConfigurationError: weekday/weekend category without weekend days
    """
    ordinal = Ordinal.parse(on)
    weekend = frozenset(weekend_days)
    if ordinal.needs_weekend_days and not weekend:
        raise ConfigurationError(
            f"weekendDays must be provided when using {ordinal.target.value} day category"
        )

    first = dt.replace(day=1)
    last_day = days_in_month(dt)

    if isinstance(ordinal.target, DayOfWeek):
        matching = _weekday_days(first, last_day, ordinal.target)
    else:
        matching = _category_days(first, last_day, ordinal.target, weekend)

    if not matching:
        return None

    if ordinal.position == OrdinalPosition.LAST:
        day = matching[-1]
    elif ordinal.position == OrdinalPosition.NEXT_TO_LAST:
        day = matching[-2] if len(matching) > 1 else matching[-1]
    else:
        rank = ordinal.position.rank()
        if rank >= len(matching):
            return None
        day = matching[rank]
    return first.replace(day=day)
