# Re-export schedule components
from .adjustments import (
    add_by_period,
    apply_date_adjustment,
    get_month_end,
    payment_date,
)
from .core import CarryState, DateAdjustment, GeneratedEntry
from .generator import GeneratorConfig, ScheduleGenerator, calculate_max_interval, generate
from .modifications import Action, ModificationIndex, Verdict, calculate_date_adjustment
from .ordinal import get_ordinal_date
