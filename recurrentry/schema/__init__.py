from .entries import (
    MAX_INTERVALS,
    DateRange,
    Entry,
    Modification,
    MonthlyPayment,
    RecurrenceConfig,
    SinglePayment,
    WeeklyPayment,
    YearlyPayment,
    recurrence_config_from_mapping,
    resolve_max_intervals,
)
