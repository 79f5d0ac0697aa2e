"""
Notification service layer.

Functions here emit notifications and emails. Visibility and
filtering are handled in the feed views.
"""

# =====================================================
# EMAIL
# =====================================================
from .email import (
    EmailDispatchError,
    send_email,
)

# =====================================================
# SYSTEM
# =====================================================
from .system import (
    create_super_admin_notification,
    notify_super_admins,
)

# =====================================================
# REMINDERS
# =====================================================
from .reminders import (
    ReminderSweepJob,
    StoreQueryError,
    SweepSummary,
    send_dose_reminders,
)

__all__ = [
    # Email
    "EmailDispatchError",
    "send_email",

    # System
    "create_super_admin_notification",
    "notify_super_admins",

    # Reminders
    "ReminderSweepJob",
    "StoreQueryError",
    "SweepSummary",
    "send_dose_reminders",
]
