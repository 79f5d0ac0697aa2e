from datetime import date

import pytest
from django.contrib.auth import get_user_model

from accounts.models import AdminProfile
from patients.models import Drug, DrugCategory, Patient


@pytest.fixture
def category(db):
    return DrugCategory.objects.create(name="Antihypertensives")


@pytest.fixture
def drug(category):
    return Drug.objects.create(name="Amlodipine", category=category)


@pytest.fixture
def make_patient(drug):
    def _make(**overrides):
        data = {
            "firstname": "Mark",
            "lastname": "Kamau",
            "email": "mark.kamau@example.com",
            "phone_number": "+254700000001",
            "drug": drug,
            "purchase_date": date(2024, 5, 28),
            "days_until_next_dose": 7,
        }
        data.update(overrides)
        return Patient.objects.create(**data)

    return _make


@pytest.fixture
def staff_user(db):
    User = get_user_model()
    user = User.objects.create_user(
        username="pharmacist",
        email="pharmacist@example.com",
        password="not-a-real-password",
    )
    AdminProfile.objects.create(user=user, role=AdminProfile.Role.ADMIN)
    return user


@pytest.fixture
def super_admin(db):
    User = get_user_model()
    user = User.objects.create_user(
        username="owner",
        email="owner@example.com",
        password="not-a-real-password",
    )
    AdminProfile.objects.create(user=user, role=AdminProfile.Role.SUPER_ADMIN)
    return user


@pytest.fixture
def staff_client(client, staff_user):
    client.force_login(staff_user)
    return client
