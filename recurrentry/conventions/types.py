"""
Basic types and enums used across the recurrence engine.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from recurrentry.errors import ConfigurationError


class Period(Enum):
    """Recurrence periods."""

    NONE = "none"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


class WorkdayDirection(Enum):
    """Direction used to walk off weekends and holidays."""

    NONE = "none"
    PREVIOUS = "previous"
    NEXT = "next"

    def step(self) -> int:
        return {"none": 0, "previous": -1, "next": 1}[self.value]

    @classmethod
    def coerce(cls, value: Union["WorkdayDirection", str, bool, None]) -> "WorkdayDirection":
        """Accept the enum, its string value, or a legacy boolean flag."""
        if isinstance(value, cls):
            return value
        if value is None or value is False:
            return cls.NONE
        if value is True:
            return cls.NEXT
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ConfigurationError(f"Unknown workday direction: {value!r}") from None


class OrdinalPosition(Enum):
    """Ordinal positions within a month."""

    FIRST = "first"
    SECOND = "second"
    THIRD = "third"
    FOURTH = "fourth"
    FIFTH = "fifth"
    NEXT_TO_LAST = "nextToLast"
    LAST = "last"

    def rank(self) -> Optional[int]:
        """Zero-based rank for the counted positions, None for last/nextToLast."""
        return _RANKS.get(self)


_RANKS = {
    OrdinalPosition.FIRST: 0,
    OrdinalPosition.SECOND: 1,
    OrdinalPosition.THIRD: 2,
    OrdinalPosition.FOURTH: 3,
    OrdinalPosition.FIFTH: 4,
}


class DayCategory(Enum):
    """Categories of days matched by an ordinal."""

    DAY = "day"
    WEEKDAY = "weekday"
    WEEKEND = "weekend"


class DayOfWeek(Enum):
    """Days of the week, valued by ISO weekday number (Monday=1)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @classmethod
    def from_name(cls, name: str) -> "DayOfWeek":
        return cls[name.upper()]


@dataclass(frozen=True)
class Ordinal:
    """An ordinal day specification such as ``third-wednesday``."""

    position: OrdinalPosition
    target: Union[DayCategory, DayOfWeek]

    @classmethod
    def parse(cls, value: Union["Ordinal", str]) -> "Ordinal":
        if isinstance(value, cls):
            return value
        if not isinstance(value, str) or value.count("-") != 1:
            raise ConfigurationError(f"Invalid ordinal specification: {value!r}")

        position_str, target_str = value.split("-")
        try:
            position = OrdinalPosition(position_str)
        except ValueError:
            raise ConfigurationError(f"Invalid ordinal position: {position_str!r}") from None

        target: Union[DayCategory, DayOfWeek]
        try:
            target = DayCategory(target_str)
        except ValueError:
            try:
                target = DayOfWeek.from_name(target_str)
            except KeyError:
                raise ConfigurationError(f"Invalid ordinal day: {target_str!r}") from None
        return cls(position, target)

    @property
    def needs_weekend_days(self) -> bool:
        return self.target in (DayCategory.WEEKDAY, DayCategory.WEEKEND)

    def __str__(self) -> str:
        target = self.target.value if isinstance(self.target, DayCategory) else self.target.name.lower()
        return f"{self.position.value}-{target}"
