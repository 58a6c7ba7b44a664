"""Tests for monthly recurrences."""

from datetime import date

import pytest

from recurrentry import generate
from recurrentry.errors import ConfigurationError
from recurrentry.test.helpers import actual_dates, make_entry

WEEKEND = [6, 7]


def test_every_month():
    result = generate([make_entry(interval=4, every=1)])

    assert actual_dates(result) == [
        date(2024, 1, 1),
        date(2024, 2, 1),
        date(2024, 3, 1),
        date(2024, 4, 1),
    ]
    assert [r.payment_date for r in result] == actual_dates(result)


def test_every_n_months():
    result = generate([make_entry(interval=3, every=2)])

    assert actual_dates(result) == [date(2024, 1, 1), date(2024, 3, 1), date(2024, 5, 1)]


def test_month_end_start_clamps_without_drift():
    result = generate([make_entry(start=date(2024, 1, 31), interval=4)])

    assert actual_dates(result) == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
    ]


def test_specific_day():
    result = generate([make_entry(interval=2, each=[15])])

    assert actual_dates(result) == [date(2024, 1, 15), date(2024, 2, 15)]


def test_multiple_days_ordered_within_month():
    result = generate([make_entry(interval=2, each=[15, 1])])

    assert actual_dates(result) == [
        date(2024, 1, 1),
        date(2024, 1, 15),
        date(2024, 2, 1),
        date(2024, 2, 15),
    ]
    assert [r.index for r in result] == [1, 2, 3, 4]


def test_days_invalid_for_month_are_skipped():
    result = generate([make_entry(interval=3, each=[31, 0, 32])])

    assert actual_dates(result) == [date(2024, 1, 31), date(2024, 3, 31)]
    assert [r.index for r in result] == [1, 2]


def test_first_monday():
    result = generate([make_entry(interval=2, on="first-monday")])

    assert actual_dates(result) == [date(2024, 1, 1), date(2024, 2, 5)]


def test_last_weekday():
    result = generate([make_entry(interval=2, on="last-weekday")], weekend_days=WEEKEND)

    assert actual_dates(result) == [date(2024, 1, 31), date(2024, 2, 29)]


@pytest.mark.parametrize("position", ["first", "second", "third", "fourth", "fifth", "nextToLast", "last"])
def test_all_ordinal_positions(position):
    result = generate([make_entry(interval=1, on=f"{position}-weekday")], weekend_days=WEEKEND)

    assert len(result) == 1
    assert result[0].actual_date.month == 1


def test_weekend_category_without_weekend_days():
    with pytest.raises(ConfigurationError):
        generate([make_entry(interval=1, on="first-weekend")])


def test_missing_ordinal_skips_month_without_consuming_index():
    # January and February 2024 have four Fridays, March has five
    result = generate([make_entry(interval=3, on="fifth-friday")])

    assert actual_dates(result) == [date(2024, 3, 29)]
    assert result[0].index == 1


def test_each_with_ordinal_collapses_to_one_date():
    result = generate([make_entry(interval=2, each=[1, 15], on="last-friday")])

    assert actual_dates(result) == [date(2024, 1, 26), date(2024, 2, 23)]


def test_workdays_only_previous():
    # June 1 2024 is a Saturday
    result = generate(
        [make_entry(start=date(2024, 6, 1), interval=1, workdaysOnly="previous")],
        weekend_days=WEEKEND,
    )

    assert result[0].actual_date == date(2024, 6, 1)
    assert result[0].payment_date == date(2024, 5, 31)


def test_monthly_default_cap_and_override():
    assert len(generate([make_entry(interval=0)])) == 240
    assert len(generate([make_entry(interval=10)], max_intervals={"month": 5})) == 5
