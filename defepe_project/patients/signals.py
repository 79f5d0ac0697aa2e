"""
patients/signals.py

Keeps the stored reminder-date set in step with next_dose_date.
"""

import logging

from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from patients.models import Patient
from patients.services import sync_reminder_dates

logger = logging.getLogger(__name__)


# ============================================================
# PRE_SAVE: TRACK IF NEXT_DOSE_DATE CHANGED
# ============================================================

@receiver(pre_save, sender=Patient)
def track_next_dose_change(sender, instance, **kwargs):
    """
    Sets a flag that post_save can check.
    """
    if kwargs.get("raw"):
        instance._next_dose_changed = False
        return

    previous = (
        Patient.objects
        .filter(pk=instance.pk)
        .values_list("next_dose_date", flat=True)
        .first()
    )

    instance._next_dose_changed = previous != instance.next_dose_date


# ============================================================
# POST_SAVE: REWRITE REMINDER DATES
# ============================================================

@receiver(post_save, sender=Patient)
def refresh_reminder_dates(sender, instance, created, **kwargs):
    if kwargs.get("raw"):
        return

    if not created and not getattr(instance, "_next_dose_changed", False):
        return

    days = sync_reminder_dates(instance)

    logger.info(
        "Reminder dates for patient %s set to %s",
        instance.pk,
        ", ".join(day.isoformat() for day in days),
    )
