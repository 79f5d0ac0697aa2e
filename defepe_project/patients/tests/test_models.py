from datetime import date

import pytest

from patients.models import Patient, PatientReminderDate

pytestmark = pytest.mark.django_db


def test_reminder_dates_stored_on_create(make_patient):
    patient = make_patient()

    assert patient.next_dose_date == date(2024, 6, 4)
    assert patient.reminder_date_strings == ["2024-06-01", "2024-06-03", "2024-06-04"]


def test_reminder_dates_rewritten_when_interval_changes(make_patient):
    patient = make_patient()

    patient.days_until_next_dose = 30
    patient.save()

    patient.refresh_from_db()
    assert patient.next_dose_date == date(2024, 6, 27)
    assert patient.reminder_date_strings == ["2024-06-24", "2024-06-26", "2024-06-27"]
    assert PatientReminderDate.objects.filter(patient=patient).count() == 3


def test_unrelated_edit_keeps_reminder_rows(make_patient):
    patient = make_patient()
    before = set(patient.reminder_dates.values_list("id", flat=True))

    patient.phone_number = "+254711111111"
    patient.save()

    after = set(patient.reminder_dates.values_list("id", flat=True))
    assert before == after


def test_string_purchase_date_is_parsed(drug):
    patient = Patient.objects.create(
        firstname="Ann",
        lastname="Otieno",
        email="ann@example.com",
        drug=drug,
        purchase_date="2024-02-27",
        days_until_next_dose=3,
    )

    assert patient.purchase_date == date(2024, 2, 27)
    assert patient.next_dose_date == date(2024, 3, 1)


def test_with_reminder_on_is_set_membership(make_patient):
    due_soon = make_patient()
    make_patient(
        firstname="Grace",
        email="grace@example.com",
        purchase_date=date(2024, 6, 1),
        days_until_next_dose=9,
    )

    matched = list(Patient.objects.with_reminder_on(date(2024, 6, 3)))
    assert matched == [due_soon]

    # 2024-06-02 is between two reminder dates, not one of them
    assert list(Patient.objects.with_reminder_on(date(2024, 6, 2))) == []


def test_soft_deleted_patient_gets_no_reminder(make_patient):
    patient = make_patient()
    patient.soft_delete()

    assert patient.is_deleted
    assert list(Patient.objects.with_reminder_on(date(2024, 6, 3))) == []
    assert list(Patient.objects.trashed()) == [patient]

    patient.restore()

    assert not patient.is_deleted
    assert list(Patient.objects.with_reminder_on(date(2024, 6, 3))) == [patient]


def test_to_dict_exposes_reminder_fields(make_patient):
    data = make_patient().to_dict()

    assert data["drug"] == "Amlodipine"
    assert data["drug_category"] == "Antihypertensives"
    assert data["next_dose_date"] == "2024-06-04"
    assert data["reminder_dates"] == ["2024-06-01", "2024-06-03", "2024-06-04"]
    assert data["deleted_at"] is None
