"""Tests for weekly recurrences."""

from datetime import date

from recurrentry import generate
from recurrentry.test.helpers import actual_dates, make_entry, payment_dates

WEEKEND = [6, 7]


def test_weekly_every_week():
    result = generate([make_entry(period="week", interval=5, every=1)])

    assert actual_dates(result) == [
        date(2024, 1, 1),
        date(2024, 1, 8),
        date(2024, 1, 15),
        date(2024, 1, 22),
        date(2024, 1, 29),
    ]
    assert [r.index for r in result] == [1, 2, 3, 4, 5]


def test_weekly_specific_days_every_two_weeks():
    result = generate([make_entry(period="week", interval=4, every=2, each=[1, 5])])

    assert actual_dates(result) == [
        date(2024, 1, 1),
        date(2024, 1, 5),
        date(2024, 1, 15),
        date(2024, 1, 19),
        date(2024, 1, 29),
        date(2024, 2, 2),
        date(2024, 2, 12),
        date(2024, 2, 16),
    ]


def test_weekly_each_is_sorted_within_week():
    result = generate([make_entry(period="week", interval=1, each=[5, 2])])

    assert actual_dates(result) == [date(2024, 1, 2), date(2024, 1, 5)]
    assert [r.index for r in result] == [1, 2]


def test_weekly_each_uses_calendar_week_of_start():
    # Start on a Wednesday: Monday of that week is still emitted
    result = generate([make_entry(start=date(2024, 1, 3), period="week", interval=2, each=[1, 3])])

    assert actual_dates(result) == [
        date(2024, 1, 1),
        date(2024, 1, 3),
        date(2024, 1, 8),
        date(2024, 1, 10),
    ]


def test_weekly_each_discards_days_outside_week():
    result = generate([make_entry(period="week", interval=2, each=[0, 3, 8])])

    assert actual_dates(result) == [date(2024, 1, 3), date(2024, 1, 10)]


def test_weekly_workdays_only_with_holiday():
    result = generate(
        [make_entry(period="week", interval=3, workdaysOnly="next")],
        weekend_days=WEEKEND,
        holidays=[date(2024, 1, 15)],
    )

    assert actual_dates(result) == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 15)]
    assert payment_dates(result) == [date(2024, 1, 1), date(2024, 1, 8), date(2024, 1, 16)]


def test_weekly_grace_period():
    result = generate([make_entry(period="week", interval=3, gracePeriod=2)])

    assert payment_dates(result) == [date(2024, 1, 3), date(2024, 1, 10), date(2024, 1, 17)]


def test_weekly_grace_period_landing_on_saturday():
    result = generate(
        [make_entry(period="week", interval=1, gracePeriod=5, workdaysOnly="next")],
        weekend_days=WEEKEND,
    )

    assert result[0].actual_date == date(2024, 1, 1)
    assert result[0].payment_date == date(2024, 1, 8)


def test_weekly_grace_period_and_holidays():
    result = generate(
        [make_entry(period="week", interval=4, gracePeriod=3, workdaysOnly="next")],
        weekend_days=WEEKEND,
        holidays=[date(2024, 1, 18), date(2024, 1, 25)],
    )

    assert payment_dates(result) == [
        date(2024, 1, 4),
        date(2024, 1, 11),
        date(2024, 1, 19),
        date(2024, 1, 26),
    ]


def test_weekly_default_cap():
    result = generate([make_entry(period="week", interval=0)])

    assert len(result) == 1248
    assert result[-1].index == 1248


def test_weekly_interval_above_cap_is_capped():
    result = generate([make_entry(period="week", interval=10**9)], max_intervals={"week": 10})

    assert len(result) == 10
