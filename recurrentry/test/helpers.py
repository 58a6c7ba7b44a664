"""Shared builders for generator tests."""

from datetime import date
from typing import Any, Dict, List


def make_entry(
    entry_id="1",
    start: date = date(2024, 1, 1),
    period: str = "month",
    interval: int = 1,
    amount: int = 100,
    **options: Any,
) -> Dict[str, Any]:
    """A flat entry record the way callers hand them to the engine."""
    config: Dict[str, Any] = {"period": period, "start": start, "interval": interval}
    if options:
        config["options"] = options
    return {"id": entry_id, "date": start, "amount": amount, "config": config}


def actual_dates(result) -> List[date]:
    return [occurrence.actual_date for occurrence in result]


def payment_dates(result) -> List[date]:
    return [occurrence.payment_date for occurrence in result]
