"""
Factory for pre-configured generators.

Binds weekend days and holidays once so callers only pass entries,
modifications and an optional range on each call.
"""

import logging
from datetime import date
from typing import Any, Iterable, List, Mapping, Optional, Union

from recurrentry.schedule.core import GeneratedEntry
from recurrentry.schedule.generator import GeneratorConfig, ScheduleGenerator
from recurrentry.schema.entries import DateRange, Entry, Modification
from recurrentry.utils.date import DateLike, to_date

logger = logging.getLogger(__name__)

DEFAULT_WEEKEND_DAYS = (6, 7)


class Recurrentry:
    """A generator with weekend days, holidays and caps bound up front."""

    def __init__(
        self,
        weekend_days: Iterable[int] = (),
        holidays: Iterable[DateLike] = (),
        max_intervals: Optional[Mapping[Any, int]] = None,
    ):
        self._generator = ScheduleGenerator(
            GeneratorConfig(
                max_intervals=max_intervals or {},
                holidays=holidays,
                weekend_days=weekend_days,
            )
        )

    @property
    def weekend_days(self):
        return self._generator.weekend_days

    @property
    def holidays(self):
        return self._generator.holidays

    def generate(
        self,
        data: Iterable[Union[Entry, Mapping]],
        modifications: Iterable[Union[Modification, Mapping]] = (),
        range: Union[DateRange, Mapping, None] = None,
    ) -> List[GeneratedEntry]:
        """Generate occurrences with the bound calendar settings."""
        return self._generator.generate(data, modifications, range)


def create_generator(
    calendar_name: str,
    start: DateLike,
    end: DateLike,
    weekend_days: Optional[Iterable[int]] = None,
    max_intervals: Optional[Mapping[Any, int]] = None,
) -> Recurrentry:
    """
    Create a generator whose holidays come from a QuantLib market calendar.

    Args:
        calendar_name: Calendar registry name (e.g. "TARGET", "UK")
        start: First date of the holiday window
        end: Last date of the holiday window
        weekend_days: Override for the weekend; defaults to the calendar's own
        max_intervals: Per-period caps overriding the defaults

    Returns:
        Configured Recurrentry instance
    """
    # QuantLib is only needed for calendar-backed generators
    from recurrentry.conventions.calendars_quantlib import get_calendar

    calendar = get_calendar(calendar_name)
    window_start: date = to_date(start)
    window_end: date = to_date(end)
    holidays = calendar.holidays_between(window_start, window_end)
    if weekend_days is None:
        weekend_days = calendar.weekend_days() or DEFAULT_WEEKEND_DAYS

    logger.info(
        "Bound %d %s holidays between %s and %s",
        len(holidays),
        calendar.name,
        window_start,
        window_end,
    )
    return Recurrentry(weekend_days=weekend_days, holidays=holidays, max_intervals=max_intervals)
