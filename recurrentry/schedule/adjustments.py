"""
Date arithmetic and payment-date adjustment for occurrence generation.
"""

import calendar
from datetime import date, timedelta
from typing import AbstractSet, Iterable, Optional, Union

from dateutil.relativedelta import relativedelta

from recurrentry.conventions.types import Period, WorkdayDirection
from recurrentry.errors import ConfigurationError, InvalidDate
from recurrentry.schedule.core import DateAdjustment
from recurrentry.utils.date import DateLike, is_valid_date, to_holiday_set


def add_by_period(dt: date, amount: int, period: Union[Period, str]) -> date:
    """Add weeks, months or years; anything else is treated as days."""
    if not isinstance(period, Period):
        try:
            period = Period(period)
        except ValueError:
            period = None

    if period == Period.YEAR:
        return dt + relativedelta(years=amount)
    elif period == Period.MONTH:
        return dt + relativedelta(months=amount)
    elif period == Period.WEEK:
        return dt + relativedelta(weeks=amount)
    else:
        return dt + relativedelta(days=amount)


def get_month_end(year: int, month: int) -> date:
    """Get the last calendar day of a given month."""
    return date(year, month, calendar.monthrange(year, month)[1])


def days_in_month(dt: date) -> int:
    return calendar.monthrange(dt.year, dt.month)[1]


def apply_date_adjustment(dt: date, adjustment: Optional[DateAdjustment]) -> date:
    """Shift a generated date by a carried adjustment (months first, then days)."""
    if adjustment is None or adjustment.is_zero:
        return dt
    return dt + relativedelta(months=adjustment.months, days=adjustment.days)


def shift_within_year(dt: date, adjustment: Optional[DateAdjustment]) -> date:
    """
    Move a date to another month/day of the same year.

    Both components are clamped instead of rolled over, so an adjustment never
    pushes an explicitly selected month into the next year.
    """
    if adjustment is None or adjustment.is_zero:
        return dt
    month = min(12, max(1, dt.month + adjustment.months))
    last_day = get_month_end(dt.year, month).day
    day = min(last_day, max(1, min(dt.day, last_day) + adjustment.days))
    return date(dt.year, month, day)


def _is_non_working(dt: date, holidays: AbstractSet[date], weekend_days: AbstractSet[int]) -> bool:
    return dt.isoweekday() in weekend_days or dt in holidays


def roll_to_workday(
    dt: date,
    direction: WorkdayDirection,
    holidays: AbstractSet[date],
    weekend_days: AbstractSet[int],
) -> date:
    """Walk day by day in the given direction until dt is neither weekend nor holiday."""
    step = direction.step()
    if step == 0 or (not holidays and not weekend_days):
        return dt
    if len(weekend_days) >= 7:
        raise ConfigurationError("weekendDays cannot cover the whole week")

    while _is_non_working(dt, holidays, weekend_days):
        dt += timedelta(days=step)
    return dt


def adjust_payment_date(
    dt: date,
    grace_period: int,
    holidays: AbstractSet[date],
    weekend_days: AbstractSet[int],
    direction: WorkdayDirection,
) -> date:
    """Grace period then workday roll, on already validated inputs."""
    if grace_period and grace_period > 0:
        dt = dt + timedelta(days=grace_period)
    return roll_to_workday(dt, direction, holidays, weekend_days)


def payment_date(
    current: date,
    grace_period: int = 0,
    holidays: Iterable[DateLike] = (),
    weekend_days: Iterable[int] = (),
    workdays_only: Union[WorkdayDirection, str, bool, None] = WorkdayDirection.NONE,
) -> date:
    """
    Compute the payment date of an occurrence.

    Args:
        current: The occurrence's actual date
        grace_period: Days added before any workday roll; values <= 0 are ignored
        holidays: Dates treated as non-working days
        weekend_days: ISO weekday numbers (1=Monday .. 7=Sunday) treated as weekend
        workdays_only: "next", "previous" or none

    Returns:
        The adjusted payment date

    Raises:
        InvalidDate: If current is not a calendar date
        InvalidHolidaySet: If any holiday is not a calendar date
    """
    if not is_valid_date(current):
        raise InvalidDate(f"Invalid current date provided: {current!r}")

    holiday_set = to_holiday_set(holidays)
    return adjust_payment_date(
        current,
        grace_period,
        holiday_set,
        frozenset(weekend_days),
        WorkdayDirection.coerce(workdays_only),
    )
