"""
Core data structures for occurrence generation.
"""

from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from recurrentry.utils.date import datetime_to_str


@dataclass
class GeneratedEntry:
    """A single dated occurrence of an entry."""

    data: Dict[str, Any]
    index: int
    actual_date: date
    payment_date: date
    entry_id: Union[str, int, None] = None

    def as_dict(self) -> Dict[str, Any]:
        """Flat view with ISO dates, keyed the way callers of the engine expect."""
        return {
            "$": dict(self.data),
            "index": self.index,
            "actualDate": datetime_to_str(self.actual_date),
            "paymentDate": datetime_to_str(self.payment_date),
        }


@dataclass(frozen=True)
class DateAdjustment:
    """Relative shift re-applied to dates generated after a date override."""

    days: int = 0
    months: int = 0

    @property
    def is_zero(self) -> bool:
        return self.days == 0 and self.months == 0

    def __add__(self, other: "DateAdjustment") -> "DateAdjustment":
        return DateAdjustment(days=self.days + other.days, months=self.months + other.months)


_EMPTY: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class CarryState:
    """Per-entry state threaded through the interval loop."""

    override_payload: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    date_adjustment: Optional[DateAdjustment] = None
    halted: bool = False

    @property
    def has_override(self) -> bool:
        return bool(self.override_payload)
