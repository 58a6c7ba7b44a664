"""Exceptions raised by the recurrence engine.

Structural problems with the caller's input abort the whole generation call.
A rule that simply has no matching day in some month is not an error: the
resolvers return ``None`` and the occurrence is skipped.
"""


class RecurrentryError(ValueError):
    """Base class for all recurrence engine errors."""

    pass


class InvalidDate(RecurrentryError):
    """Raised when a supplied value is not a well-formed calendar date."""

    pass


class InvalidHolidaySet(RecurrentryError):
    """Raised when a holiday entry is not a well-formed calendar date."""

    pass


class ConfigurationError(RecurrentryError):
    """Raised for recurrence configurations that can never be evaluated."""

    pass
