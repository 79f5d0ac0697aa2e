from django import forms
from django.core.exceptions import ValidationError

from patients.services import InvalidDateError, compute_next_dose_date, reminder_days

from .models import Drug, DrugCategory, Patient


class PatientForm(forms.ModelForm):
    """
    Onboarding / edit form. next_dose_date and the reminder dates
    are derived on save, never entered.
    """

    class Meta:
        model = Patient
        fields = [
            "firstname",
            "lastname",
            "email",
            "phone_number",
            "drug",
            "purchase_date",
            "days_until_next_dose",
        ]

    # ----------------------------
    # VALIDATION
    # ----------------------------
    def clean(self):
        cleaned_data = super().clean()

        purchase_date = cleaned_data.get("purchase_date")
        days = cleaned_data.get("days_until_next_dose")

        if purchase_date and days:
            try:
                # The reminder set reaches three days before the due date
                reminder_days(compute_next_dose_date(purchase_date, days))
            except InvalidDateError as exc:
                raise ValidationError(str(exc)) from exc

        return cleaned_data


class DrugCategoryForm(forms.ModelForm):
    class Meta:
        model = DrugCategory
        fields = ["name", "description"]


class DrugForm(forms.ModelForm):
    class Meta:
        model = Drug
        fields = ["name", "category"]
