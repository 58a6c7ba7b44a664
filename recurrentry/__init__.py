"""Recurring entry expansion engine.

Expands recurrence rules (single, weekly, monthly, yearly) attached to
arbitrary entries into dated occurrences, applies per-occurrence
modifications and computes payment dates around weekends and holidays.

Key modules:
- schedule: Occurrence generation, ordinal days, payment dates, modifications
- schema: Entry, recurrence configuration and modification types
- conventions: Period/ordinal enums and QuantLib holiday calendars
- factory: Generators with pre-bound weekend days and holidays
"""

__version__ = "1.0.0"

from recurrentry.conventions.types import Ordinal, Period, WorkdayDirection
from recurrentry.errors import (
    ConfigurationError,
    InvalidDate,
    InvalidHolidaySet,
    RecurrentryError,
)
from recurrentry.factory import Recurrentry, create_generator
from recurrentry.schedule import (
    GeneratedEntry,
    ScheduleGenerator,
    add_by_period,
    generate,
    get_ordinal_date,
    payment_date,
)
from recurrentry.schema import (
    MAX_INTERVALS,
    DateRange,
    Entry,
    Modification,
    MonthlyPayment,
    SinglePayment,
    WeeklyPayment,
    YearlyPayment,
)
from recurrentry.utils.date import create_date

__all__ = [
    "__version__",
    "ConfigurationError",
    "DateRange",
    "Entry",
    "GeneratedEntry",
    "InvalidDate",
    "InvalidHolidaySet",
    "MAX_INTERVALS",
    "Modification",
    "MonthlyPayment",
    "Ordinal",
    "Period",
    "Recurrentry",
    "RecurrentryError",
    "ScheduleGenerator",
    "SinglePayment",
    "WeeklyPayment",
    "WorkdayDirection",
    "YearlyPayment",
    "add_by_period",
    "create_date",
    "create_generator",
    "generate",
    "get_ordinal_date",
    "payment_date",
]
