"""
notifications/services/system.py

In-app notifications for super admins.
"""

import logging

from accounts.models import super_admins
from notifications.models import Notification

logger = logging.getLogger(__name__)


def create_super_admin_notification(
    user,
    message,
    *,
    title="System notice",
    priority=Notification.Priority.INFO,
    category=Notification.Category.SYSTEM,
):
    """
    Create one in-app notification for a super admin.
    """
    return Notification.objects.create(
        recipient=user,
        category=category,
        priority=priority,
        title=title,
        message=message,
    )


def notify_super_admins(
    message,
    *,
    title="System notice",
    priority=Notification.Priority.INFO,
    category=Notification.Category.SYSTEM,
):
    """
    Fan a notification out to every active super admin.
    Returns the number created.
    """
    count = 0

    for user in super_admins():
        create_super_admin_notification(
            user,
            message,
            title=title,
            priority=priority,
            category=category,
        )
        count += 1

    logger.info("Notified %d super admin(s): %s", count, title)
    return count
