"""
notifications/services/reminders/dose.py

Daily dose reminder sweep.

Finds every active patient whose reminder-date set contains
"today" and emails each of them once. The job is stateless
between runs; a failed send is logged and not retried.
"""

import logging
import threading
from dataclasses import dataclass, field
from datetime import date
from time import monotonic
from zoneinfo import ZoneInfo

from django.conf import settings
from django.db import DatabaseError
from django.utils import timezone

from notifications.models import Notification
from notifications.services.email import EmailDispatchError, send_email
from notifications.services.system import notify_super_admins
from patients.models import Patient
from patients.services import milestone_label, parse_calendar_date

logger = logging.getLogger(__name__)


class StoreQueryError(Exception):
    """The patient store could not answer the reminder query."""


# ============================================================
# RECORDS
# ============================================================

@dataclass(frozen=True)
class PatientRecord:
    """The slice of a patient the sweep needs."""

    id: str
    email: str
    firstname: str
    lastname: str
    drug: str
    drug_category: str
    next_dose_date: date | None = None

    @classmethod
    def from_patient(cls, patient):
        return cls(
            id=str(patient.pk),
            email=patient.email,
            firstname=patient.firstname,
            lastname=patient.lastname,
            drug=patient.drug.name,
            drug_category=patient.drug.category.name,
            next_dose_date=patient.next_dose_date,
        )


@dataclass
class DispatchResult:
    SENT = "sent"
    FAILED = "failed"
    SKIPPED = "skipped"

    patient_id: str
    email: str
    status: str
    error: str = ""


@dataclass
class SweepSummary:
    run_date: date
    matched: int = 0
    sent: int = 0
    failed: int = 0
    skipped: int = 0
    cancelled: bool = False
    aborted: bool = False
    overlapped: bool = False
    error: str = ""
    results: list = field(default_factory=list)

    def record(self, result):
        self.results.append(result)

        if result.status == DispatchResult.SENT:
            self.sent += 1
        elif result.status == DispatchResult.FAILED:
            self.failed += 1
        else:
            self.skipped += 1

    @property
    def ok(self):
        return not (self.aborted or self.failed)

    def describe(self):
        text = (
            f"{self.run_date:%Y-%m-%d}: {self.matched} matched, "
            f"{self.sent} sent, {self.failed} failed, {self.skipped} skipped"
        )
        if self.overlapped:
            text += " (skipped: a sweep is already running)"
        if self.cancelled:
            text += " (cancelled)"
        if self.aborted:
            text += f" (aborted: {self.error})"
        return text


# ============================================================
# COLLABORATORS
# ============================================================

def reminder_today(tz_name=None):
    """Current calendar date in the configured reminder timezone."""
    zone = ZoneInfo(tz_name or settings.REMINDER_TIME_ZONE)
    return timezone.now().astimezone(zone).date()


def find_patients_with_reminder_on(day):
    """
    Active patients whose reminder-date set contains day.
    """
    try:
        return [
            PatientRecord.from_patient(patient)
            for patient in Patient.objects.with_reminder_on(day)
        ]
    except DatabaseError as exc:
        raise StoreQueryError(
            f"Patient reminder query for {day:%Y-%m-%d} failed: {exc}"
        ) from exc


def build_reminder_message(patient, today):
    """
    Subject and plain-text body for one reminder.
    """
    due = patient.next_dose_date or today
    label = milestone_label(today, due) or "Reminder"

    if due == today:
        subject = f"Reminder: Your Dose of {patient.drug} is Due Today"
    else:
        subject = f"Reminder: Your Next Dose is Due on {due:%Y-%m-%d}"

    body = (
        f"Hi {patient.firstname} {patient.lastname},\n\n"
        f"This is a reminder that your next dose of {patient.drug} "
        f"({patient.drug_category}) is due on {due:%A, %d %B %Y}.\n"
        f"Time remaining: {label}.\n\n"
        f"Please ensure you take your medication on time.\n\n"
        f"Best regards,\n"
        f"{settings.PHARMACY_NAME}"
    )

    return subject, body


# ============================================================
# SWEEP JOB
# ============================================================

class ReminderSweepJob:
    """
    One sweep per call to run().

    find_patients(day) -> iterable of PatientRecord-like objects
    send(to, subject, body) -> None, raises on failure
    """

    def __init__(self, find_patients=None, send=None, today=None, timeout=None):
        self.find_patients = find_patients or find_patients_with_reminder_on
        self.send = send or send_email
        self.today = today or reminder_today
        self.timeout = timeout
        self._lock = threading.Lock()

    @property
    def is_running(self):
        return self._lock.locked()

    def run(self, day=None, cancel_event=None):
        """
        Run one sweep. Never raises for query or email failures;
        they are reported on the returned SweepSummary.
        """
        run_date = parse_calendar_date(day) if day is not None else self.today()

        if not self._lock.acquire(blocking=False):
            logger.warning(
                "Dose reminder sweep already running, skipping run for %s",
                run_date.isoformat(),
            )
            return SweepSummary(run_date=run_date, overlapped=True)

        try:
            return self._sweep(run_date, cancel_event)
        finally:
            self._lock.release()

    def _sweep(self, run_date, cancel_event):
        summary = SweepSummary(run_date=run_date)
        logger.info("Checking for dose reminders due %s", run_date.isoformat())

        try:
            patients = list(self.find_patients(run_date))
        except StoreQueryError as exc:
            logger.exception("Error fetching patients for %s", run_date.isoformat())
            summary.aborted = True
            summary.error = str(exc)
            return summary
        except Exception as exc:
            logger.exception(
                "Unexpected error fetching patients for %s", run_date.isoformat()
            )
            summary.aborted = True
            summary.error = f"{type(exc).__name__}: {exc}"
            return summary

        summary.matched = len(patients)
        deadline = monotonic() + self.timeout if self.timeout else None

        for patient in patients:
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Dose reminder sweep cancelled")
                summary.cancelled = True
                break

            if deadline is not None and monotonic() >= deadline:
                logger.warning(
                    "Dose reminder sweep timed out after %s seconds", self.timeout
                )
                summary.cancelled = True
                break

            summary.record(self.dispatch(patient, run_date))

        logger.info("Dose reminder sweep finished: %s", summary.describe())
        return summary

    def dispatch(self, patient, run_date):
        """Send one reminder; failures stay with this patient."""
        patient_id = str(patient.id)

        if not patient.email:
            logger.info("Patient %s has no email address, skipping", patient_id)
            return DispatchResult(patient_id, "", DispatchResult.SKIPPED)

        subject, body = build_reminder_message(patient, run_date)

        try:
            self.send(patient.email, subject, body)
        except EmailDispatchError as exc:
            logger.warning("Failed to send reminder to %s: %s", patient.email, exc)
            return DispatchResult(patient_id, patient.email, DispatchResult.FAILED, str(exc))
        except Exception as exc:
            logger.exception("Failed to send reminder to %s", patient.email)
            return DispatchResult(patient_id, patient.email, DispatchResult.FAILED, str(exc))

        logger.info(
            "Reminder email sent to %s for %s", patient.email, run_date.isoformat()
        )
        return DispatchResult(patient_id, patient.email, DispatchResult.SENT)


# ============================================================
# ENTRY POINT (SCHEDULER + MANAGEMENT COMMAND)
# ============================================================

_default_job = None
_default_job_lock = threading.Lock()


def get_default_job():
    """Process-wide job, so every caller shares one run lock."""
    global _default_job

    with _default_job_lock:
        if _default_job is None:
            _default_job = ReminderSweepJob(
                timeout=getattr(settings, "REMINDER_SWEEP_TIMEOUT", None),
            )
        return _default_job


def report_sweep(summary):
    """
    Tell super admins about runs that missed reminders.
    """
    if summary.ok:
        return 0

    if summary.aborted:
        priority = Notification.Priority.DANGER
        title = "Dose reminder sweep aborted"
    else:
        priority = Notification.Priority.WARNING
        title = "Dose reminders failed to send"

    try:
        return notify_super_admins(
            f"Dose reminder sweep for {summary.describe()}.",
            title=title,
            priority=priority,
            category=Notification.Category.REMINDER,
        )
    except DatabaseError:
        logger.exception("Could not record sweep report for %s", summary.run_date)
        return 0


def send_dose_reminders(day=None, *, job=None, cancel_event=None):
    """
    Run one sweep and report it. Returns the SweepSummary.
    """
    job = job or get_default_job()
    summary = job.run(day=day, cancel_event=cancel_event)
    report_sweep(summary)
    return summary
