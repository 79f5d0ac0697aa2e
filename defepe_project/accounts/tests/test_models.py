import pytest
from django.contrib.auth import get_user_model

from accounts.models import AdminProfile, is_super_admin, super_admins

pytestmark = pytest.mark.django_db


def test_role_helpers(super_admin, staff_user):
    assert is_super_admin(super_admin)
    assert not is_super_admin(staff_user)
    assert list(super_admins()) == [super_admin]


def test_user_without_profile_is_not_super_admin():
    user = get_user_model().objects.create_user(username="walkin", password="x")
    assert not is_super_admin(user)


def test_inactive_super_admin_excluded(super_admin):
    super_admin.is_active = False
    super_admin.save()

    assert list(super_admins()) == []


def test_str_shows_role(super_admin):
    super_admin.first_name = "Jane"
    super_admin.last_name = "Doe"
    super_admin.save()

    profile = AdminProfile.objects.get(user=super_admin)
    assert str(profile) == "Jane Doe (owner) [Super Admin]"


def test_revoking_access_deactivates_user(staff_user):
    profile = AdminProfile.objects.get(user=staff_user)

    profile.set_access_revoked(True)
    staff_user.refresh_from_db()
    assert profile.access_revoked
    assert not staff_user.is_active

    profile.set_access_revoked(False)
    staff_user.refresh_from_db()
    assert not profile.access_revoked
    assert staff_user.is_active


def test_revoked_super_admin_loses_role(super_admin):
    profile = AdminProfile.objects.get(user=super_admin)
    profile.set_access_revoked(True)

    assert not profile.is_super_admin
    assert list(super_admins()) == []
