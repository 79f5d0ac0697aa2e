from datetime import date, datetime

import pytest

from patients.services import (
    InvalidDateError,
    compute_next_dose_date,
    compute_reminder_dates,
    milestone_label,
)


def test_three_dates_ascending():
    assert compute_reminder_dates(date(2024, 6, 4)) == [
        "2024-06-01",
        "2024-06-03",
        "2024-06-04",
    ]


def test_same_input_same_output():
    due = date(2024, 9, 15)
    assert compute_reminder_dates(due) == compute_reminder_dates(due)


def test_leap_year_month_boundary():
    assert compute_reminder_dates(date(2024, 3, 1)) == [
        "2024-02-27",
        "2024-02-29",
        "2024-03-01",
    ]


def test_non_leap_month_boundary():
    assert compute_reminder_dates(date(2023, 3, 1)) == [
        "2023-02-26",
        "2023-02-28",
        "2023-03-01",
    ]


def test_year_boundary():
    assert compute_reminder_dates(date(2024, 1, 2)) == [
        "2023-12-30",
        "2024-01-01",
        "2024-01-02",
    ]


def test_time_of_day_is_discarded():
    assert compute_reminder_dates(datetime(2024, 3, 1, 23, 59)) == [
        "2024-02-27",
        "2024-02-29",
        "2024-03-01",
    ]


@pytest.mark.parametrize("value", ["2024-03-01", "2024-03-01T08:15:00Z", "2024-03-01T08:15:00.000+03:00"])
def test_iso_strings_accepted(value):
    assert compute_reminder_dates(value)[-1] == "2024-03-01"


@pytest.mark.parametrize("value", ["2024-02-30", "next tuesday", "", None, 20240301])
def test_invalid_dates_rejected(value):
    with pytest.raises(InvalidDateError):
        compute_reminder_dates(value)


def test_out_of_range_result_rejected():
    with pytest.raises(InvalidDateError):
        compute_reminder_dates(date.min)


def test_milestone_labels():
    due = date(2024, 6, 4)

    assert milestone_label(date(2024, 6, 1), due) == "3 days left"
    assert milestone_label(date(2024, 6, 3), due) == "1 day left"
    assert milestone_label(due, due) == "Due today"
    assert milestone_label(date(2024, 6, 2), due) is None


def test_next_dose_date_crosses_leap_day():
    assert compute_next_dose_date(date(2024, 2, 27), 3) == date(2024, 3, 1)


@pytest.mark.parametrize("days", [0, -2, "abc", None])
def test_next_dose_date_requires_positive_interval(days):
    with pytest.raises(InvalidDateError):
        compute_next_dose_date(date(2024, 2, 27), days)
