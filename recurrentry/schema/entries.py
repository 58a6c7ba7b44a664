"""
Entry, recurrence configuration and modification schemas.

Each recurrence period has its own configuration class carrying only the
options that are valid for it, so an impossible combination (an ordinal on a
weekly rule, a zero step) fails when the configuration is built.
"""

from dataclasses import dataclass, field, fields
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from recurrentry.conventions.types import Ordinal, Period, WorkdayDirection
from recurrentry.errors import ConfigurationError
from recurrentry.utils.date import DateLike, to_date

# Default per-period caps on the number of intervals examined
MAX_INTERVALS = MappingProxyType(
    {
        Period.WEEK: 1248,
        Period.MONTH: 240,
        Period.YEAR: 20,
    }
)

ENTRY_FIELDS = ("id", "date", "config")


def _check_every(every: int) -> int:
    if isinstance(every, bool) or not isinstance(every, int) or every < 1:
        raise ConfigurationError(f"every must be a positive integer, got {every!r}")
    return every


def _check_interval(interval: int) -> int:
    if isinstance(interval, bool) or not isinstance(interval, int) or interval < 0:
        raise ConfigurationError(f"interval must be a non-negative integer, got {interval!r}")
    return interval


def _check_each(each, period: Period) -> Optional[Tuple[int, ...]]:
    if each is None:
        return None
    values = tuple(each)
    if not values:
        return None
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"each values for {period.value} must be integers, got {value!r}")
    return values


@dataclass(frozen=True)
class SinglePayment:
    """A one-off entry; the options only shape its payment date."""

    start: date
    grace_period: int = 0
    workdays_only: WorkdayDirection = WorkdayDirection.NONE

    period = Period.NONE
    interval = 1
    every = 1
    each = None
    on = None

    def __post_init__(self):
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "workdays_only", WorkdayDirection.coerce(self.workdays_only))


@dataclass(frozen=True)
class WeeklyPayment:
    """Every N weeks, optionally on explicit ISO days of week (1-7)."""

    start: date
    interval: int = 0
    every: int = 1
    each: Optional[Tuple[int, ...]] = None
    workdays_only: WorkdayDirection = WorkdayDirection.NONE
    grace_period: int = 0

    period = Period.WEEK
    on = None

    def __post_init__(self):
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "interval", _check_interval(self.interval))
        object.__setattr__(self, "every", _check_every(self.every))
        object.__setattr__(self, "each", _check_each(self.each, self.period))
        object.__setattr__(self, "workdays_only", WorkdayDirection.coerce(self.workdays_only))


@dataclass(frozen=True)
class MonthlyPayment:
    """Every N months, optionally on explicit days of month or an ordinal day."""

    start: date
    interval: int = 0
    every: int = 1
    each: Optional[Tuple[int, ...]] = None
    on: Optional[Ordinal] = None
    workdays_only: WorkdayDirection = WorkdayDirection.NONE
    grace_period: int = 0

    period = Period.MONTH

    def __post_init__(self):
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "interval", _check_interval(self.interval))
        object.__setattr__(self, "every", _check_every(self.every))
        object.__setattr__(self, "each", _check_each(self.each, self.period))
        if self.on is not None:
            object.__setattr__(self, "on", Ordinal.parse(self.on))
        object.__setattr__(self, "workdays_only", WorkdayDirection.coerce(self.workdays_only))


@dataclass(frozen=True)
class YearlyPayment:
    """Every N years, optionally in explicit months and on an ordinal day."""

    start: date
    interval: int = 0
    every: int = 1
    each: Optional[Tuple[int, ...]] = None
    on: Optional[Ordinal] = None
    workdays_only: WorkdayDirection = WorkdayDirection.NONE
    grace_period: int = 0

    period = Period.YEAR

    def __post_init__(self):
        object.__setattr__(self, "start", to_date(self.start))
        object.__setattr__(self, "interval", _check_interval(self.interval))
        object.__setattr__(self, "every", _check_every(self.every))
        object.__setattr__(self, "each", _check_each(self.each, self.period))
        if self.on is not None:
            object.__setattr__(self, "on", Ordinal.parse(self.on))
        object.__setattr__(self, "workdays_only", WorkdayDirection.coerce(self.workdays_only))


RecurrenceConfig = Union[SinglePayment, WeeklyPayment, MonthlyPayment, YearlyPayment]

_CONFIG_TYPES = {
    Period.NONE: SinglePayment,
    Period.WEEK: WeeklyPayment,
    Period.MONTH: MonthlyPayment,
    Period.YEAR: YearlyPayment,
}

_OPTION_ALIASES = {
    "workdaysOnly": "workdays_only",
    "gracePeriod": "grace_period",
}


def recurrence_config_from_mapping(raw: Mapping[str, Any]) -> RecurrenceConfig:
    """
    Build the matching configuration variant from a plain mapping.

    Args:
        raw: ``{"period": ..., "start": ..., "interval": ..., "options": {...}}``

    Returns:
        One of SinglePayment, WeeklyPayment, MonthlyPayment, YearlyPayment

    Raises:
        ConfigurationError: unknown period or an option the period does not allow
    """
    raw_period = raw.get("period", Period.NONE)
    try:
        period = raw_period if isinstance(raw_period, Period) else Period(raw_period)
    except ValueError:
        raise ConfigurationError(f"Unknown period: {raw_period!r}") from None

    config_type = _CONFIG_TYPES[period]
    allowed = {f.name for f in fields(config_type)}

    kwargs: Dict[str, Any] = {"start": raw.get("start")}
    if "interval" in allowed and raw.get("interval") is not None:
        kwargs["interval"] = raw["interval"]

    for key, value in dict(raw.get("options") or {}).items():
        name = _OPTION_ALIASES.get(key, key)
        if value is None:
            continue
        if name not in allowed or name in ("start", "interval"):
            raise ConfigurationError(f"Option {key!r} is not allowed for period {period.value!r}")
        kwargs[name] = value

    return config_type(**kwargs)


@dataclass(frozen=True)
class Entry:
    """A caller-owned record: identity, fallback date, optional recurrence."""

    id: Union[str, int]
    date: date
    config: Optional[RecurrenceConfig] = None
    payload: Mapping[str, Any] = field(default_factory=dict)
    # The config exactly as the caller supplied it, echoed back in occurrence data
    source_config: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "date", to_date(self.date))
        if self.source_config is None:
            object.__setattr__(self, "source_config", self.config)
        if isinstance(self.config, Mapping):
            raw = dict(self.config)
            raw.setdefault("start", self.date)
            object.__setattr__(self, "config", recurrence_config_from_mapping(raw))
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Entry":
        """Split a flat record into identity fields and opaque payload."""
        if "id" not in raw or "date" not in raw:
            raise ConfigurationError("An entry needs both 'id' and 'date'")
        payload = {k: v for k, v in raw.items() if k not in ENTRY_FIELDS}
        return cls(id=raw["id"], date=raw["date"], config=raw.get("config"), payload=payload)

    @property
    def period(self) -> Period:
        return self.config.period if self.config is not None else Period.NONE

    def base_data(self) -> Dict[str, Any]:
        """The displayed fields of an occurrence before any modification."""
        data = {"id": self.id, "date": self.date}
        data.update(self.payload)
        if self.source_config is not None:
            data["config"] = self.source_config
        return data


@dataclass(frozen=True)
class Modification:
    """An override or deletion addressed by (item_id, 1-based occurrence index)."""

    item_id: Union[str, int]
    index: int
    payload: Mapping[str, Any] = field(default_factory=dict)
    rest_payload: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload or {})))
        if self.rest_payload is not None:
            object.__setattr__(self, "rest_payload", MappingProxyType(dict(self.rest_payload)))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Modification":
        return cls(
            item_id=raw.get("itemId", raw.get("item_id")),
            index=raw["index"],
            payload=raw.get("payload") or {},
            rest_payload=raw.get("restPayload", raw.get("rest_payload")),
        )

    @property
    def key(self) -> Tuple[str, int]:
        return (str(self.item_id), self.index)

    @property
    def deletes(self) -> bool:
        return bool(self.payload.get("deleted"))

    @property
    def deletes_rest(self) -> bool:
        return bool(self.rest_payload and self.rest_payload.get("deleted"))


@dataclass(frozen=True)
class DateRange:
    """Inclusive date window; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None:
            object.__setattr__(self, "start", to_date(self.start))
        if self.end is not None:
            object.__setattr__(self, "end", to_date(self.end))

    @classmethod
    def coerce(cls, value: Union["DateRange", Mapping[str, DateLike], None]) -> Optional["DateRange"]:
        if value is None or isinstance(value, cls):
            return value
        return cls(start=value.get("start"), end=value.get("end"))

    def contains(self, dt: date) -> bool:
        if self.start is not None and dt < self.start:
            return False
        if self.end is not None and dt > self.end:
            return False
        return True

    def is_past(self, dt: date) -> bool:
        return self.end is not None and dt > self.end


def resolve_max_intervals(overrides: Optional[Mapping[Any, int]] = None) -> Dict[Period, int]:
    """Merge caller caps over the defaults; keys may be Period members or their values."""
    caps = dict(MAX_INTERVALS)
    for key, value in (overrides or {}).items():
        period = key if isinstance(key, Period) else Period(key)
        caps[period] = value
    return caps
