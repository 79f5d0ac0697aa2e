# accounts/views.py

import logging

from django.contrib.auth.decorators import login_required
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_GET, require_POST

from accounts.models import AdminProfile, is_super_admin
from notifications.models import Notification
from notifications.services import notify_super_admins

logger = logging.getLogger(__name__)


def _forbidden():
    return JsonResponse(
        {"success": False, "error": "Only super admins can manage admin accounts."},
        status=403,
    )


def _own_account():
    return JsonResponse(
        {"success": False, "error": "You cannot change your own account here."},
        status=400,
    )


# ============================================================
# ADMIN ACCOUNTS (SUPER ADMIN DASHBOARD)
# ============================================================

@login_required
@require_GET
def admin_list(request):
    if not is_super_admin(request.user):
        return _forbidden()

    profiles = AdminProfile.objects.select_related("user")
    return JsonResponse([p.to_dict() for p in profiles], safe=False)


def _set_access(request, profile_id, revoked):
    if not is_super_admin(request.user):
        return _forbidden()

    profile = get_object_or_404(AdminProfile.objects.select_related("user"), id=profile_id)
    if profile.user_id == request.user.id:
        return _own_account()

    profile.set_access_revoked(revoked)

    action = "revoked" if revoked else "restored"
    logger.info(
        "Access %s for %s by %s", action, profile.user.username, request.user.username
    )
    notify_super_admins(
        f"Access {action} for admin {profile.user.username} (ID: {profile.id}).",
        title=f"Admin access {action}",
        priority=Notification.Priority.WARNING if revoked else Notification.Priority.INFO,
    )

    return JsonResponse({"success": True, "profile": profile.to_dict()})


@login_required
@require_POST
def admin_revoke(request, profile_id):
    return _set_access(request, profile_id, revoked=True)


@login_required
@require_POST
def admin_restore(request, profile_id):
    return _set_access(request, profile_id, revoked=False)


@login_required
@require_POST
def admin_delete(request, profile_id):
    """Deletes the Django user; the profile goes with it."""
    if not is_super_admin(request.user):
        return _forbidden()

    profile = get_object_or_404(AdminProfile.objects.select_related("user"), id=profile_id)
    if profile.user_id == request.user.id:
        return _own_account()

    username = profile.user.username
    profile.user.delete()

    logger.info("Admin account %s deleted by %s", username, request.user.username)
    notify_super_admins(
        f"Admin account {username} (ID: {profile_id}) has been deleted.",
        title="Admin account deleted",
        priority=Notification.Priority.DANGER,
    )

    return JsonResponse({"success": True})
