"""Per-occurrence modifications: overrides, deletions and their cascade."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum
from typing import Dict, Iterable, Mapping, Optional, Tuple, Union

from recurrentry.conventions.types import Period
from recurrentry.schedule.core import CarryState, DateAdjustment, GeneratedEntry
from recurrentry.schema.entries import Modification
from recurrentry.utils.date import to_date

logger = logging.getLogger(__name__)


class Action(Enum):
    """What the generator should do with an occurrence."""

    KEEP = "KEEP"
    DELETE = "DELETE"
    HALT = "HALT"


@dataclass(frozen=True)
class Verdict:
    """Outcome of looking up one occurrence."""

    action: Action
    occurrence: Optional[GeneratedEntry]
    carry: CarryState


def calculate_date_adjustment(original: date, modified: date, period: Period) -> DateAdjustment:
    """
    Relative shift to re-apply to later occurrences after a date override.

    The whole-period part of the move is implied by interval stepping, so only
    the position inside the period is carried: day of month for monthly rules,
    month and day for yearly rules and day of week for weekly rules.
    """
    if period == Period.YEAR:
        return DateAdjustment(
            days=modified.day - original.day,
            months=modified.month - original.month,
        )
    elif period == Period.MONTH:
        return DateAdjustment(days=modified.day - original.day)
    elif period == Period.WEEK:
        return DateAdjustment(days=modified.isoweekday() - original.isoweekday())
    return DateAdjustment()


class ModificationIndex:
    """Modifications keyed by (item id, occurrence index), built once per call."""

    def __init__(self, modifications: Iterable[Union[Modification, Mapping]] = ()):
        self._by_key: Dict[Tuple[str, int], Modification] = {}
        for mod in modifications:
            if not isinstance(mod, Modification):
                mod = Modification.from_mapping(mod)
            if mod.key in self._by_key:
                logger.debug("Modification for %s replaces an earlier one", mod.key)
            self._by_key[mod.key] = mod

    def __len__(self) -> int:
        return len(self._by_key)

    def lookup(self, entry_id: Union[str, int], index: int) -> Optional[Modification]:
        if not self._by_key:
            return None
        return self._by_key.get((str(entry_id), index))

    def evaluate(
        self,
        entry_id: Union[str, int],
        occurrence: GeneratedEntry,
        period: Period,
        carry: CarryState,
    ) -> Verdict:
        """
        Apply the modification registered for this occurrence, if any.

        Args:
            entry_id: Identity of the entry being expanded
            occurrence: The occurrence as generated, carry payload already merged
            period: Period of the entry, scopes any derived date adjustment
            carry: Carry state in force before this occurrence

        Returns:
            Verdict with the (possibly overridden) occurrence and the carry state
            for the following occurrences
        """
        mod = self.lookup(entry_id, occurrence.index)
        if mod is None:
            return Verdict(Action.KEEP, occurrence, carry)

        if mod.deletes_rest:
            logger.debug("Entry %s: deleting occurrence %d and all after it", entry_id, occurrence.index)
            return Verdict(Action.HALT, None, replace(carry, halted=True))
        if mod.deletes:
            return Verdict(Action.DELETE, None, carry)

        data = dict(occurrence.data)
        if mod.rest_payload is not None:
            data.update(mod.rest_payload)
        data.update(mod.payload)
        modified = replace(occurrence, data=data)

        if "date" in mod.payload and mod.payload["date"] is not None:
            override = to_date(mod.payload["date"])
            modified = replace(modified, actual_date=override, payment_date=override)
            if mod.rest_payload is not None:
                adjustment = None
                if period != Period.NONE:
                    adjustment = calculate_date_adjustment(occurrence.actual_date, override, period)
                    # occurrence.actual_date already carries the earlier shift
                    if carry.date_adjustment is not None:
                        adjustment = carry.date_adjustment + adjustment
                return Verdict(
                    Action.KEEP,
                    modified,
                    replace(carry, override_payload=mod.rest_payload, date_adjustment=adjustment),
                )

        if mod.rest_payload is not None:
            return Verdict(Action.KEEP, modified, replace(carry, override_payload=mod.rest_payload))
        return Verdict(Action.KEEP, modified, carry)
