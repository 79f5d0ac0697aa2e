import json
import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.utils.dateparse import parse_datetime
from django.views.decorators.http import require_GET, require_POST

from notifications.models import Notification
from notifications.services import EmailDispatchError, send_email

logger = logging.getLogger(__name__)

FEED_LIMIT = 50


# ============================================================
# NOTIFICATION FEED (POLLED BY THE DASHBOARD)
# ============================================================

@login_required
@require_GET
def notification_feed(request):
    """
    Newest first. ?since=<ISO timestamp> returns only newer items,
    ?unread=1 only unread ones, ?category= one category.
    """
    qs = Notification.objects.filter(recipient=request.user)

    since = request.GET.get("since")
    if since:
        since_dt = parse_datetime(since)
        if since_dt is None:
            return JsonResponse(
                {"success": False, "error": "Invalid 'since' timestamp."},
                status=400,
            )
        qs = qs.filter(created_at__gt=since_dt)

    category = request.GET.get("category")
    if category:
        qs = qs.filter(category=category)

    if request.GET.get("unread"):
        qs = qs.filter(is_read=False)

    # Unread first, then newest
    notifications = [n.to_dict() for n in qs.order_by("is_read", "-created_at")[:FEED_LIMIT]]

    return JsonResponse({
        "notifications": notifications,
        "unread_count": Notification.objects.filter(
            recipient=request.user, is_read=False
        ).count(),
    })


@login_required
@require_POST
def notification_mark_read(request, notification_id):
    notification = get_object_or_404(
        Notification, id=notification_id, recipient=request.user
    )
    notification.mark_as_read()

    return JsonResponse({"success": True})


@login_required
@require_POST
def notification_mark_all_read(request):
    updated = Notification.mark_all_as_read(
        request.user, category=request.POST.get("category") or None
    )

    return JsonResponse({"success": True, "updated": updated})


# ============================================================
# EMAIL API
# ============================================================

@login_required
@require_POST
def send_email_api(request):
    try:
        payload = json.loads(request.body or b"{}")
    except (ValueError, UnicodeDecodeError):
        payload = None

    if not isinstance(payload, dict):
        return JsonResponse(
            {"success": False, "error": "Request body must be a JSON object."},
            status=400,
        )

    to = payload.get("to")
    subject = payload.get("subject")
    body = payload.get("body")

    if not to or not subject or not body:
        return JsonResponse(
            {"success": False, "error": "Missing required fields: to, subject, or body."},
            status=400,
        )

    try:
        send_email(to, subject, body)
    except EmailDispatchError as exc:
        logger.error("Error sending email: %s", exc)
        return JsonResponse(
            {"success": False, "error": "Failed to send email"},
            status=500,
        )

    return JsonResponse({"success": True, "message": "Email sent successfully"})
