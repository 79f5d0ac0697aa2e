"""
Patient service layer.

Date arithmetic for dose scheduling lives here so that models,
views and the reminder sweep share one implementation.
"""

from .reminder_dates import (
    REMINDER_MILESTONES,
    InvalidDateError,
    compute_reminder_dates,
    milestone_label,
    parse_calendar_date,
    reminder_days,
)

from .onboarding import (
    compute_next_dose_date,
    sync_reminder_dates,
)

__all__ = [
    # Calculator
    "REMINDER_MILESTONES",
    "InvalidDateError",
    "compute_reminder_dates",
    "milestone_label",
    "parse_calendar_date",
    "reminder_days",

    # Onboarding
    "compute_next_dose_date",
    "sync_reminder_dates",
]
