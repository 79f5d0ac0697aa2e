"""
Reminder notification service layer.

Time-based reminder emitters triggered by the scheduler
or the send_dose_reminders management command.

Reminder logic is:
- service-layer only
- date-based (set membership on stored reminder dates)
- failure-isolated per patient, no retries
"""

from .dose import (
    DispatchResult,
    PatientRecord,
    ReminderSweepJob,
    StoreQueryError,
    SweepSummary,
    build_reminder_message,
    find_patients_with_reminder_on,
    get_default_job,
    reminder_today,
    report_sweep,
    send_dose_reminders,
)

__all__ = [
    "DispatchResult",
    "PatientRecord",
    "ReminderSweepJob",
    "StoreQueryError",
    "SweepSummary",
    "build_reminder_message",
    "find_patients_with_reminder_on",
    "get_default_job",
    "reminder_today",
    "report_sweep",
    "send_dose_reminders",
]
