import uuid

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone

from patients.services import compute_next_dose_date, parse_calendar_date


# =====================================================
# DRUG CATALOG
# =====================================================

class DrugCategory(models.Model):
    name = models.CharField(max_length=150, unique=True)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "drug categories"

    def __str__(self):
        return self.name


class Drug(models.Model):
    name = models.CharField(max_length=150)

    category = models.ForeignKey(
        DrugCategory,
        on_delete=models.PROTECT,
        related_name="drugs",
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]
        unique_together = ("name", "category")

    def __str__(self):
        return f"{self.name} ({self.category.name})"


# =====================================================
# PATIENTS
# =====================================================

class PatientQuerySet(models.QuerySet):

    def active(self):
        return self.filter(deleted_at__isnull=True)

    def trashed(self):
        return self.filter(deleted_at__isnull=False)

    def with_reminder_on(self, day):
        """
        Active patients whose stored reminder-date set contains day.
        Set membership, not a range.
        """
        return (
            self.active()
            .filter(reminder_dates__reminder_date=day)
            .select_related("drug", "drug__category")
            .distinct()
        )


class Patient(models.Model):
    """
    A pharmacy customer on a repeat medication.

    next_dose_date is always purchase_date + days_until_next_dose,
    and its reminder-date set is kept in PatientReminderDate.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # =====================================================
    # CONTACT
    # =====================================================
    firstname = models.CharField(max_length=100)
    lastname = models.CharField(max_length=100)
    email = models.EmailField(db_index=True)
    phone_number = models.CharField(max_length=20, blank=True)

    # =====================================================
    # MEDICATION
    # =====================================================
    drug = models.ForeignKey(
        Drug,
        on_delete=models.PROTECT,
        related_name="patients",
    )

    # =====================================================
    # DOSE SCHEDULING
    # =====================================================
    purchase_date = models.DateField()

    days_until_next_dose = models.PositiveIntegerField(
        validators=[MinValueValidator(1)],
    )

    next_dose_date = models.DateField(editable=False, db_index=True)

    # =====================================================
    # STATE
    # =====================================================
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PatientQuerySet.as_manager()

    class Meta:
        ordering = ["lastname", "firstname"]

    def __str__(self):
        return f"{self.full_name} <{self.email}>"

    def save(self, *args, **kwargs):
        self.purchase_date = parse_calendar_date(self.purchase_date)
        self.next_dose_date = compute_next_dose_date(
            self.purchase_date,
            self.days_until_next_dose,
        )

        update_fields = kwargs.get("update_fields")
        if update_fields is not None:
            kwargs["update_fields"] = set(update_fields) | {"next_dose_date"}

        super().save(*args, **kwargs)

    @property
    def full_name(self):
        return f"{self.firstname} {self.lastname}".strip()

    @property
    def drug_category(self):
        return self.drug.category

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def reminder_date_strings(self):
        # .all() so a prefetch_related("reminder_dates") is reused
        return sorted(
            row.reminder_date.isoformat()
            for row in self.reminder_dates.all()
        )

    # =====================================================
    # SOFT DELETE
    # =====================================================
    def soft_delete(self):
        if self.deleted_at is None:
            self.deleted_at = timezone.now()
            self.save(update_fields=["deleted_at", "updated_at"])

    def restore(self):
        if self.deleted_at is not None:
            self.deleted_at = None
            self.save(update_fields=["deleted_at", "updated_at"])

    def to_dict(self):
        return {
            "id": str(self.id),
            "firstname": self.firstname,
            "lastname": self.lastname,
            "email": self.email,
            "phone_number": self.phone_number,
            "drug": self.drug.name,
            "drug_category": self.drug.category.name,
            "purchase_date": self.purchase_date.isoformat(),
            "days_until_next_dose": self.days_until_next_dose,
            "next_dose_date": self.next_dose_date.isoformat(),
            "reminder_dates": self.reminder_date_strings,
            "deleted_at": self.deleted_at.isoformat() if self.deleted_at else None,
        }


class PatientReminderDate(models.Model):
    """
    One member of a patient's reminder-date set.
    Written only by sync_reminder_dates().
    """

    patient = models.ForeignKey(
        Patient,
        on_delete=models.CASCADE,
        related_name="reminder_dates",
    )

    reminder_date = models.DateField(db_index=True)

    class Meta:
        ordering = ["reminder_date"]
        unique_together = ("patient", "reminder_date")

    def __str__(self):
        return f"{self.patient.full_name} | {self.reminder_date:%Y-%m-%d}"
