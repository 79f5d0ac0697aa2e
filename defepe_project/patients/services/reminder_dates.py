"""
patients/services/reminder_dates.py

Reminder-date calculator.

This is the only place the reminder-date set is derived. Both the
persisted PatientReminderDate rows and any read-time preview go
through compute_reminder_dates().
"""

from datetime import date, datetime, timedelta


# ============================================================
# REMINDER MILESTONES (DAYS BEFORE THE DOSE IS DUE)
# ============================================================

REMINDER_MILESTONES = {
    3: "3 days left",
    1: "1 day left",
    0: "Due today",
}


class InvalidDateError(ValueError):
    """Raised when the calculator is given something that is not a calendar date."""


def parse_calendar_date(value):
    """
    Coerce value into a datetime.date.

    Accepts a date, a datetime (time-of-day is discarded) or an
    ISO 8601 date / datetime string.
    """
    # datetime is a subclass of date, check it first
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) > 10:
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return datetime.fromisoformat(text).date()
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidDateError(f"Invalid calendar date: {value!r}") from exc

    raise InvalidDateError(f"Invalid calendar date: {value!r}")


def reminder_days(next_dose_date):
    """Reminder dates as date objects, ascending."""
    due = parse_calendar_date(next_dose_date)

    try:
        return [
            due - timedelta(days=offset)
            for offset in sorted(REMINDER_MILESTONES, reverse=True)
        ]
    except OverflowError as exc:
        raise InvalidDateError(
            f"Reminder dates for {due.isoformat()} fall outside the calendar"
        ) from exc


def compute_reminder_dates(next_dose_date):
    """
    Return the three reminder dates for a dose due on next_dose_date.

    Output is ascending and formatted YYYY-MM-DD:
    due - 3 days, due - 1 day, due.
    """
    return [day.isoformat() for day in reminder_days(next_dose_date)]


def milestone_label(reminder_date, next_dose_date):
    """Human label for a reminder date relative to the dose date, or None."""
    days_remaining = (
        parse_calendar_date(next_dose_date) - parse_calendar_date(reminder_date)
    ).days
    return REMINDER_MILESTONES.get(days_remaining)
