"""Tests for one-off entries."""

from datetime import date

from recurrentry import generate
from recurrentry.test.helpers import make_entry

WEEKEND = [6, 7]


def _single(entry_date=date(2024, 1, 1), **options):
    return make_entry(start=entry_date, period="none", interval=1, **options)


def test_entry_without_config_yields_one_occurrence():
    result = generate([{"id": "a", "date": date(2024, 3, 5), "amount": 10}])

    assert len(result) == 1
    assert result[0].index == 1
    assert result[0].actual_date == date(2024, 3, 5)
    assert result[0].payment_date == date(2024, 3, 5)
    assert result[0].data["amount"] == 10


def test_single_without_options():
    result = generate([_single()], weekend_days=WEEKEND)

    assert len(result) == 1
    assert result[0].index == 1
    assert result[0].actual_date == date(2024, 1, 1)
    assert result[0].payment_date == date(2024, 1, 1)


def test_single_with_grace_period():
    result = generate([_single(gracePeriod=5)], weekend_days=WEEKEND)

    assert result[0].actual_date == date(2024, 1, 1)
    assert result[0].payment_date == date(2024, 1, 6)


def test_single_with_grace_period_and_workdays():
    # January 6 is a Saturday, moves to Monday January 8
    result = generate([_single(gracePeriod=5, workdaysOnly="next")], weekend_days=WEEKEND)

    assert result[0].actual_date == date(2024, 1, 1)
    assert result[0].payment_date == date(2024, 1, 8)


def test_single_on_weekend_with_workdays():
    result = generate([_single(date(2024, 1, 6), workdaysOnly=True)], weekend_days=WEEKEND)

    assert result[0].actual_date == date(2024, 1, 6)
    assert result[0].payment_date == date(2024, 1, 8)


def test_single_on_holiday():
    result = generate(
        [_single(workdaysOnly="next")],
        weekend_days=WEEKEND,
        holidays=[date(2024, 1, 1)],
    )

    assert result[0].actual_date == date(2024, 1, 1)
    assert result[0].payment_date == date(2024, 1, 2)


def test_single_on_holiday_rolls_back():
    result = generate(
        [_single(date(2024, 1, 2), workdaysOnly="previous")],
        weekend_days=WEEKEND,
        holidays=[date(2024, 1, 1), date(2024, 1, 2)],
    )

    # Dec 31 2023 is a Sunday, Dec 29 the Friday before
    assert result[0].payment_date == date(2023, 12, 29)


def test_single_grace_period_landing_on_holiday():
    result = generate(
        [_single(gracePeriod=5, workdaysOnly="next")],
        weekend_days=WEEKEND,
        holidays=[date(2024, 1, 6)],
    )

    assert result[0].payment_date == date(2024, 1, 8)


def test_single_uses_entry_date_as_actual_date():
    entry = _single(date(2024, 5, 1))
    entry["date"] = date(2024, 5, 3)

    result = generate([entry])

    assert result[0].actual_date == date(2024, 5, 3)
