"""
Main occurrence generation logic.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import AbstractSet, Any, Iterable, List, Mapping, Optional, Sequence, Union

from recurrentry.conventions.types import Period
from recurrentry.errors import ConfigurationError
from recurrentry.schema.entries import (
    DateRange,
    Entry,
    Modification,
    MonthlyPayment,
    SinglePayment,
    WeeklyPayment,
    YearlyPayment,
    resolve_max_intervals,
)
from recurrentry.utils.date import DateLike, to_holiday_set

from .adjustments import (
    add_by_period,
    adjust_payment_date,
    apply_date_adjustment,
    get_month_end,
    shift_within_year,
)
from .core import CarryState, GeneratedEntry
from .modifications import Action, ModificationIndex
from .ordinal import get_ordinal_date

logger = logging.getLogger(__name__)


@dataclass
class GeneratorConfig:
    """Calendar settings shared by every entry of a generation call."""

    max_intervals: Mapping[Any, int] = field(default_factory=dict)
    holidays: Iterable[DateLike] = ()
    weekend_days: Iterable[int] = ()


def calculate_max_interval(interval: int, period: Period, caps: Mapping[Period, int]) -> int:
    """Number of intervals to examine; 0 means the period's default cap."""
    if period == Period.NONE:
        return 1
    cap = caps[period]
    return cap if interval == 0 else min(interval, cap)


class ScheduleGenerator:
    """Expands recurring entries into dated occurrences."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.max_intervals = resolve_max_intervals(self.config.max_intervals)
        self.holidays: AbstractSet[date] = to_holiday_set(self.config.holidays)
        self.weekend_days: AbstractSet[int] = self._check_weekend_days(self.config.weekend_days)

    @staticmethod
    def _check_weekend_days(weekend_days: Iterable[int]) -> AbstractSet[int]:
        days = frozenset(weekend_days)
        for day in days:
            if isinstance(day, bool) or not isinstance(day, int) or not 1 <= day <= 7:
                raise ConfigurationError(f"weekendDays must be ISO weekday numbers 1-7, got {day!r}")
        if len(days) == 7:
            raise ConfigurationError("weekendDays cannot cover the whole week")
        return days

    def _coerce_entries(self, data: Iterable[Union[Entry, Mapping]]) -> List[Entry]:
        entries = []
        for raw in data:
            entry = raw if isinstance(raw, Entry) else Entry.from_mapping(raw)
            on = entry.config.on if entry.config is not None else None
            if on is not None and on.needs_weekend_days and not self.weekend_days:
                raise ConfigurationError(
                    f"weekendDays must be provided when using {on.target.value} day category"
                )
            entries.append(entry)
        return entries

    def generate(
        self,
        data: Iterable[Union[Entry, Mapping]],
        modifications: Iterable[Union[Modification, Mapping]] = (),
        date_range: Union[DateRange, Mapping, None] = None,
    ) -> List[GeneratedEntry]:
        """
        Generate occurrences for all entries.

        Args:
            data: Entries (or flat mappings) to expand, in output order
            modifications: Per-occurrence overrides and deletions
            date_range: Optional inclusive window on actual dates

        Returns:
            Occurrences grouped by entry, ascending index within a group

        Raises:
            InvalidDate: An entry or range carries something that is not a date
            ConfigurationError: A configuration can never be evaluated
        """
        entries = self._coerce_entries(data)
        mods = ModificationIndex(modifications)
        window = DateRange.coerce(date_range)

        result: List[GeneratedEntry] = []
        for entry in entries:
            result.extend(self._generate_entry(entry, mods, window))

        logger.info(
            "Generated %d occurrences for %d entries (%d modifications)",
            len(result),
            len(entries),
            len(mods),
        )
        return result

    def _generate_entry(
        self, entry: Entry, mods: ModificationIndex, window: Optional[DateRange]
    ) -> List[GeneratedEntry]:
        config = entry.config
        period = entry.period
        max_interval = calculate_max_interval(getattr(config, "interval", 1), period, self.max_intervals)

        occurrences: List[GeneratedEntry] = []
        carry = CarryState()
        index = 0

        for i in range(max_interval):
            for actual in self._interval_dates(entry, i, carry):
                index += 1
                occurrence = self._build_occurrence(entry, index, actual, carry)
                verdict = mods.evaluate(entry.id, occurrence, period, carry)
                # Generated dates only move backwards when a new shift is carried
                passed_end = (
                    window is not None
                    and window.is_past(actual)
                    and verdict.carry.date_adjustment == carry.date_adjustment
                )
                carry = verdict.carry

                if verdict.action == Action.HALT:
                    logger.debug("Entry %s halted at occurrence %d", entry.id, index)
                    return occurrences
                if verdict.action == Action.KEEP:
                    kept = verdict.occurrence
                    if window is None or window.contains(kept.actual_date):
                        occurrences.append(kept)
                if passed_end:
                    logger.debug("Entry %s passed range end after %d intervals", entry.id, i + 1)
                    return occurrences

        logger.debug("Entry %s: %d occurrences over %d intervals", entry.id, len(occurrences), max_interval)
        return occurrences

    def _build_occurrence(
        self, entry: Entry, index: int, actual: date, carry: CarryState
    ) -> GeneratedEntry:
        data = entry.base_data()
        if carry.has_override:
            data.update(carry.override_payload)

        config = entry.config
        if config is None:
            paid = actual
        else:
            paid = adjust_payment_date(
                actual,
                config.grace_period,
                self.holidays,
                self.weekend_days,
                config.workdays_only,
            )
        return GeneratedEntry(data=data, index=index, actual_date=actual, payment_date=paid, entry_id=entry.id)

    def _interval_dates(self, entry: Entry, i: int, carry: CarryState) -> List[date]:
        """Candidate dates of interval i, ascending; empty when nothing matches."""
        config = entry.config
        if config is None or isinstance(config, SinglePayment):
            return [entry.date]

        adjustment = carry.date_adjustment
        if config.each:
            if isinstance(config, WeeklyPayment):
                return self._weekly_each_dates(config, i, adjustment)
            elif isinstance(config, MonthlyPayment):
                return self._monthly_each_dates(config, i, adjustment)
            return self._yearly_each_dates(config, i, adjustment)

        if isinstance(config, WeeklyPayment):
            # Fixed 7-day stride, independent of calendar week boundaries
            base = config.start + timedelta(days=i * config.every * 7)
        else:
            base = add_by_period(config.start, i * config.every, config.period)
        base = apply_date_adjustment(base, adjustment)

        if config.on is not None:
            resolved = get_ordinal_date(base, config.on, self.weekend_days)
            return [resolved] if resolved is not None else []
        return [base]

    def _weekly_each_dates(self, config: WeeklyPayment, i, adjustment) -> List[date]:
        period_start = config.start + timedelta(days=i * config.every * 7)
        week_start = period_start - timedelta(days=period_start.isoweekday() - 1)

        dates = []
        for target in sorted(set(config.each)):
            if not 1 <= target <= 7:
                continue
            dates.append(apply_date_adjustment(week_start + timedelta(days=target - 1), adjustment))
        return sorted(dates)

    def _monthly_each_dates(self, config: MonthlyPayment, i, adjustment) -> List[date]:
        base = add_by_period(config.start, i * config.every, Period.MONTH)

        dates = set()
        for target in sorted(set(config.each)):
            if not 1 <= target <= 31:
                continue
            try:
                target_date = base.replace(day=target)
            except ValueError:
                continue
            target_date = apply_date_adjustment(target_date, adjustment)
            if config.on is not None:
                target_date = get_ordinal_date(target_date, config.on, self.weekend_days)
                if target_date is None:
                    continue
            dates.add(target_date)
        return sorted(dates)

    def _yearly_each_dates(self, config: YearlyPayment, i, adjustment) -> List[date]:
        base = add_by_period(config.start, i * config.every, Period.YEAR)

        dates = set()
        for target in sorted(set(config.each)):
            if not 1 <= target <= 12:
                continue
            target_date = base.replace(day=min(base.day, get_month_end(base.year, target).day), month=target)
            target_date = shift_within_year(target_date, adjustment)
            if config.on is not None:
                target_date = get_ordinal_date(target_date, config.on, self.weekend_days)
                if target_date is None:
                    continue
            dates.add(target_date)
        return sorted(dates)


def generate(
    data: Iterable[Union[Entry, Mapping]],
    modifications: Iterable[Union[Modification, Mapping]] = (),
    max_intervals: Optional[Mapping[Any, int]] = None,
    holidays: Iterable[DateLike] = (),
    weekend_days: Sequence[int] = (),
    range: Union[DateRange, Mapping, None] = None,
) -> List[GeneratedEntry]:
    """
    Expand entries into occurrences, applying modifications and payment-date rules.

    Args:
        data: Entries (or flat mappings with id, date, config and payload fields)
        modifications: Overrides/deletions keyed by item id and occurrence index
        max_intervals: Per-period caps overriding the defaults
        holidays: Dates treated as non-working days for workday adjustment
        weekend_days: ISO weekday numbers (1=Monday .. 7=Sunday) forming the weekend
        range: Optional {start, end} window on actual dates, both inclusive

    Returns:
        List of GeneratedEntry grouped by input entry order
    """
    generator = ScheduleGenerator(
        GeneratorConfig(
            max_intervals=max_intervals or {},
            holidays=holidays,
            weekend_days=weekend_days,
        )
    )
    return generator.generate(data, modifications, range)
