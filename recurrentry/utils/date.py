from typing import Any, Iterable, List, Union
from datetime import datetime, date

from pandas import Timestamp

from recurrentry.errors import InvalidDate, InvalidHolidaySet

DATE_FMT = "%Y-%m-%d"
COMPACT_FMT = "%Y%m%d"

DateLike = Union[str, date, datetime, Timestamp]


def to_date(date_like: DateLike) -> date:
    """
    Convert a string, datetime or pandas Timestamp to a plain calendar date.
    Accepts 'YYYY-MM-DD' and 'YYYYMMDD' string formats.
    """
    if isinstance(date_like, Timestamp):
        return date_like.date()
    if isinstance(date_like, datetime):
        return date_like.date()
    if isinstance(date_like, date):
        return date_like
    if isinstance(date_like, str):
        for fmt in (DATE_FMT, COMPACT_FMT):
            try:
                return datetime.strptime(date_like, fmt).date()
            except ValueError:
                continue
        raise InvalidDate(f"Unsupported date string format: {date_like!r}")
    raise InvalidDate(f"Unsupported type for date: {type(date_like)}")


def create_date(date_string: str) -> date:
    """Parse an ISO 'YYYY-MM-DD' string."""
    return to_date(date_string)


def is_valid_date(value: Any) -> bool:
    """True if value is a plain calendar date (datetimes are not)."""
    return isinstance(value, date) and not isinstance(value, datetime)


def to_holiday_set(holidays: Iterable[DateLike]) -> frozenset:
    """
    Coerce a holiday list into a set of dates.
    Any entry that is not a calendar date raises InvalidHolidaySet.
    """
    result: List[date] = []
    for holiday in holidays:
        try:
            result.append(to_date(holiday))
        except InvalidDate as exc:
            raise InvalidHolidaySet(f"Invalid holiday date found: {holiday!r}") from exc
    return frozenset(result)


def datetime_to_str(datetime_date: DateLike) -> str:
    """
    Format a date-like into 'YYYY-MM-DD' string.
    """
    return to_date(datetime_date).strftime(DATE_FMT)
