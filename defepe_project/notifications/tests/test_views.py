import json
from datetime import timedelta
from unittest import mock

import pytest
from django.core import mail
from django.urls import reverse
from django.utils import timezone

from notifications.models import Notification
from notifications.services import create_super_admin_notification, notify_super_admins
from notifications.services.email import EmailDispatchError

pytestmark = pytest.mark.django_db


def post_json(client, url, payload):
    return client.post(url, data=json.dumps(payload), content_type="application/json")


def test_send_email_api(staff_client):
    response = post_json(
        staff_client,
        reverse("notifications:send-email"),
        {"to": "ann@example.com", "subject": "Hi", "body": "Your refill is ready."},
    )

    assert response.status_code == 200
    assert mail.outbox[0].subject == "Hi"


def test_send_email_api_requires_all_fields(staff_client):
    response = post_json(
        staff_client,
        reverse("notifications:send-email"),
        {"to": "ann@example.com", "subject": "Hi"},
    )

    assert response.status_code == 400
    assert mail.outbox == []


def test_send_email_api_rejects_bad_json(staff_client):
    response = staff_client.post(
        reverse("notifications:send-email"),
        data="{not json",
        content_type="application/json",
    )

    assert response.status_code == 400


def test_send_email_api_reports_provider_failure(staff_client):
    with mock.patch(
        "notifications.views.send_email",
        side_effect=EmailDispatchError("ann@example.com", "rejected"),
    ):
        response = post_json(
            staff_client,
            reverse("notifications:send-email"),
            {"to": "ann@example.com", "subject": "Hi", "body": "Body"},
        )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Failed to send email"}


def test_feed_lists_own_notifications_unread_first(client, super_admin, staff_user):
    read = create_super_admin_notification(super_admin, "old news")
    read.mark_as_read()
    unread = create_super_admin_notification(super_admin, "fresh news")
    create_super_admin_notification(staff_user, "not for the owner")

    client.force_login(super_admin)
    data = client.get(reverse("notifications:feed")).json()

    assert [n["id"] for n in data["notifications"]] == [unread.id, read.id]
    assert data["unread_count"] == 1


def test_feed_since_cursor(client, super_admin):
    older = create_super_admin_notification(super_admin, "older")
    Notification.objects.filter(id=older.id).update(
        created_at=timezone.now() - timedelta(hours=2)
    )
    newer = create_super_admin_notification(super_admin, "newer")

    client.force_login(super_admin)
    since = (timezone.now() - timedelta(hours=1)).isoformat()
    data = client.get(reverse("notifications:feed"), {"since": since}).json()

    assert [n["id"] for n in data["notifications"]] == [newer.id]


def test_feed_rejects_bad_cursor(client, super_admin):
    client.force_login(super_admin)

    response = client.get(reverse("notifications:feed"), {"since": "yesterday"})

    assert response.status_code == 400


def test_mark_read_only_own_notification(client, super_admin, staff_user):
    mine = create_super_admin_notification(super_admin, "mine")
    theirs = create_super_admin_notification(staff_user, "theirs")

    client.force_login(super_admin)

    assert client.post(reverse("notifications:mark-read", args=[mine.id])).status_code == 200
    assert client.post(reverse("notifications:mark-read", args=[theirs.id])).status_code == 404

    mine.refresh_from_db()
    assert mine.is_read and mine.read_at is not None


def test_mark_all_read(client, super_admin):
    create_super_admin_notification(super_admin, "one")
    create_super_admin_notification(super_admin, "two")

    client.force_login(super_admin)
    response = client.post(reverse("notifications:mark-all-read"))

    assert response.json()["updated"] == 2
    assert not Notification.objects.filter(is_read=False).exists()


def test_notify_super_admins_skips_regular_admins(super_admin, staff_user):
    count = notify_super_admins("Nightly sweep failed", title="Sweep")

    assert count == 1
    assert Notification.objects.get().recipient == super_admin
