import pytest
from django.contrib.auth import get_user_model
from django.urls import reverse

from accounts.models import AdminProfile
from notifications.models import Notification

pytestmark = pytest.mark.django_db


@pytest.fixture
def owner_client(client, super_admin):
    client.force_login(super_admin)
    return client


@pytest.fixture
def staff_profile(staff_user):
    return AdminProfile.objects.get(user=staff_user)


def test_list_requires_super_admin(staff_client):
    response = staff_client.get(reverse("accounts:admin-list"))

    assert response.status_code == 403
    assert response.json()["success"] is False


def test_list_shows_all_admin_profiles(owner_client, staff_profile):
    data = owner_client.get(reverse("accounts:admin-list")).json()

    assert [p["username"] for p in data] == ["pharmacist", "owner"]
    assert data[0]["access_revoked"] is False
    assert data[1]["role"] == AdminProfile.Role.SUPER_ADMIN


def test_revoke_and_restore_notify_super_admins(owner_client, super_admin, staff_profile):
    response = owner_client.post(reverse("accounts:admin-revoke", args=[staff_profile.id]))

    assert response.status_code == 200
    assert response.json()["profile"]["access_revoked"] is True
    staff_profile.refresh_from_db()
    assert staff_profile.access_revoked
    assert not get_user_model().objects.get(username="pharmacist").is_active

    notice = Notification.objects.get()
    assert notice.recipient == super_admin
    assert notice.category == Notification.Category.SYSTEM
    assert notice.priority == Notification.Priority.WARNING
    assert notice.message == f"Access revoked for admin pharmacist (ID: {staff_profile.id})."

    owner_client.post(reverse("accounts:admin-restore", args=[staff_profile.id]))

    staff_profile.refresh_from_db()
    assert not staff_profile.access_revoked
    assert Notification.objects.filter(title="Admin access restored").count() == 1


def test_revoked_admin_is_signed_out(client, staff_user, staff_profile):
    client.force_login(staff_user)
    staff_profile.set_access_revoked(True)

    response = client.get(reverse("patients:list"))

    assert response.status_code == 302


def test_regular_admin_cannot_revoke(staff_client, super_admin):
    profile = AdminProfile.objects.get(user=super_admin)

    response = staff_client.post(reverse("accounts:admin-revoke", args=[profile.id]))

    assert response.status_code == 403
    profile.refresh_from_db()
    assert not profile.access_revoked
    assert not Notification.objects.exists()


def test_super_admin_cannot_change_own_account(owner_client, super_admin):
    profile = AdminProfile.objects.get(user=super_admin)

    assert owner_client.post(reverse("accounts:admin-revoke", args=[profile.id])).status_code == 400
    assert owner_client.post(reverse("accounts:admin-delete", args=[profile.id])).status_code == 400
    assert get_user_model().objects.filter(username="owner").exists()


def test_delete_removes_user_and_notifies(owner_client, super_admin, staff_profile):
    profile_id = staff_profile.id

    response = owner_client.post(reverse("accounts:admin-delete", args=[profile_id]))

    assert response.status_code == 200
    assert not get_user_model().objects.filter(username="pharmacist").exists()
    assert not AdminProfile.objects.filter(id=profile_id).exists()

    notice = Notification.objects.get()
    assert notice.recipient == super_admin
    assert notice.priority == Notification.Priority.DANGER
    assert notice.message == f"Admin account pharmacist (ID: {profile_id}) has been deleted."


def test_unknown_profile_is_404(owner_client):
    assert owner_client.post(reverse("accounts:admin-delete", args=[9999])).status_code == 404


def test_delete_rejects_get(owner_client, staff_profile):
    response = owner_client.get(reverse("accounts:admin-delete", args=[staff_profile.id]))

    assert response.status_code == 405
