from django.conf import settings
from django.db import models
from django.utils import timezone


class Notification(models.Model):
    """
    An in-app notification for pharmacy staff.
    Derived from events elsewhere (reminder sweeps, admin account changes);
    never the source of truth.
    """

    # =====================================================
    # CATEGORY
    # =====================================================
    class Category(models.TextChoices):
        REMINDER = "reminder", "Reminder"
        SYSTEM = "system", "System"

    # =====================================================
    # PRIORITY
    # =====================================================
    class Priority(models.TextChoices):
        INFO = "info", "Info"
        WARNING = "warning", "Warning"
        DANGER = "danger", "Danger"

    # =====================================================
    # CORE RELATIONSHIPS
    # =====================================================
    recipient = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="notifications",
        help_text="Staff member who sees this item"
    )

    # =====================================================
    # CLASSIFICATION
    # =====================================================
    category = models.CharField(
        max_length=20,
        choices=Category.choices,
        default=Category.SYSTEM,
        db_index=True
    )

    priority = models.CharField(
        max_length=20,
        choices=Priority.choices,
        default=Priority.INFO,
        db_index=True
    )

    # =====================================================
    # CONTENT
    # =====================================================
    title = models.CharField(
        max_length=200,
        help_text="Headline shown in the dashboard feed"
    )

    message = models.TextField(
        help_text="Full text shown when the item is opened"
    )

    # =====================================================
    # STATE
    # =====================================================
    is_read = models.BooleanField(
        default=False,
        db_index=True
    )

    read_at = models.DateTimeField(
        null=True,
        blank=True
    )

    created_at = models.DateTimeField(
        default=timezone.now,
        db_index=True
    )

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["recipient", "is_read"], name="notif_recipient_read_idx"),
            models.Index(fields=["recipient", "category", "is_read"], name="notif_recipient_cat_read_idx"),
        ]

    def __str__(self):
        return (
            f"{self.recipient} | "
            f"{self.category.upper()} | "
            f"{self.title}"
        )

    def mark_as_read(self):
        if not self.is_read:
            self.is_read = True
            self.read_at = timezone.now()
            self.save(update_fields=["is_read", "read_at"])

    @classmethod
    def mark_all_as_read(cls, user, category=None):
        """
        Mark all unread notifications (optionally by category)
        as read for a user.
        """
        qs = cls.objects.filter(recipient=user, is_read=False)
        if category:
            qs = qs.filter(category=category)

        return qs.update(
            is_read=True,
            read_at=timezone.now()
        )

    def to_dict(self):
        return {
            "id": self.id,
            "category": self.category,
            "priority": self.priority,
            "title": self.title,
            "message": self.message,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat(),
        }
