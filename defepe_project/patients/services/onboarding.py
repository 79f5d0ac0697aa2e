"""
patients/services/onboarding.py

Dose scheduling helpers used when a patient is created or edited.
"""

from datetime import timedelta

from django.db import transaction

from .reminder_dates import InvalidDateError, parse_calendar_date, reminder_days


def compute_next_dose_date(purchase_date, days_until_next_dose):
    """purchase_date + days_until_next_dose, as a calendar date."""
    purchase = parse_calendar_date(purchase_date)

    try:
        days = int(days_until_next_dose)
    except (TypeError, ValueError) as exc:
        raise InvalidDateError(
            f"Invalid dosing interval: {days_until_next_dose!r}"
        ) from exc

    if days < 1:
        raise InvalidDateError("Days until next dose must be at least 1")

    try:
        return purchase + timedelta(days=days)
    except OverflowError as exc:
        raise InvalidDateError(
            f"Next dose date for {purchase.isoformat()} is out of range"
        ) from exc


@transaction.atomic
def sync_reminder_dates(patient):
    """
    Rewrite the stored reminder-date set of a patient
    from its current next_dose_date.
    """
    from patients.models import PatientReminderDate

    PatientReminderDate.objects.filter(patient=patient).delete()

    if not patient.next_dose_date:
        return []

    rows = PatientReminderDate.objects.bulk_create([
        PatientReminderDate(patient=patient, reminder_date=day)
        for day in reminder_days(patient.next_dose_date)
    ])

    return [row.reminder_date for row in rows]
