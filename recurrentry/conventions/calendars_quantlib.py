"""
QuantLib-backed holiday calendars.

The engine itself only needs a plain holiday list and a set of weekend day
numbers; this module derives both from QuantLib's maintained market calendars.
"""

import logging
from datetime import date, datetime
from typing import FrozenSet, List, Union

import QuantLib as ql

from recurrentry.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _to_ql_date(dt: Union[date, datetime]) -> ql.Date:
    """Convert Python date/datetime to QuantLib Date."""
    if isinstance(dt, datetime):
        dt = dt.date()
    return ql.Date(dt.day, dt.month, dt.year)


def _to_py_date(ql_date: ql.Date) -> date:
    """Convert QuantLib Date to Python date."""
    return date(ql_date.year(), ql_date.month(), ql_date.dayOfMonth())


class Calendar:
    """Named wrapper around a QuantLib calendar."""

    def __init__(self, name: str, ql_calendar: ql.Calendar):
        self.name = name
        self._ql_calendar = ql_calendar

    def __repr__(self) -> str:
        return f"Calendar({self.name!r})"

    def weekend_days(self) -> FrozenSet[int]:
        """Weekend as ISO weekday numbers (1=Monday .. 7=Sunday)."""
        # QuantLib numbers weekdays from Sunday=1 to Saturday=7
        return frozenset(
            7 if ql_weekday == 1 else ql_weekday - 1
            for ql_weekday in range(1, 8)
            if self._ql_calendar.isWeekend(ql_weekday)
        )

    def holidays_between(self, start: Union[date, datetime], end: Union[date, datetime]) -> List[date]:
        """Holidays in [start, end] that do not fall on a weekend."""
        current = _to_ql_date(start)
        last = _to_ql_date(end)
        if current > last:
            raise ValueError("start must not be after end")

        holidays = []
        while current <= last:
            if self._ql_calendar.isHoliday(current) and not self._ql_calendar.isWeekend(current.weekday()):
                holidays.append(_to_py_date(current))
            current += 1

        logger.debug("%s: %d holidays between %s and %s", self.name, len(holidays), start, end)
        return holidays


# Calendar registry
CALENDARS = {
    "TARGET": lambda: Calendar("TARGET", ql.TARGET()),
    "WEEKEND": lambda: Calendar("WEEKEND", ql.WeekendsOnly()),
    "UK": lambda: Calendar("UK", ql.UnitedKingdom()),
    "USNY": lambda: Calendar("USNY", ql.UnitedStates(ql.UnitedStates.Settlement)),
    "SOUTH_KOREA": lambda: Calendar("SOUTH_KOREA", ql.SouthKorea(ql.SouthKorea.Settlement)),
}
CALENDARS["EUR"] = CALENDARS["TARGET"]


def get_calendar(name: str) -> Calendar:
    """
    Get a calendar by name.

    Args:
        name: "TARGET" (alias "EUR"), "WEEKEND", "UK", "USNY" or "SOUTH_KOREA"
    """
    key = name.upper()
    if key not in CALENDARS:
        raise ConfigurationError(
            f"Unknown calendar: {name}. Available: {list(CALENDARS.keys())}"
        )
    return CALENDARS[key]()
