# Re-export convention types
from .types import (
    DayCategory,
    DayOfWeek,
    Ordinal,
    OrdinalPosition,
    Period,
    WorkdayDirection,
)
