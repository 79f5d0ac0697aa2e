from django.contrib import admin
from django.utils.html import format_html

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "id",
        "recipient",
        "category",
        "priority",
        "colored_title",
        "is_read",
        "created_at",
    )

    list_filter = (
        "category",
        "priority",
        "is_read",
        "created_at",
    )

    search_fields = (
        "title",
        "message",
        "recipient__username",
    )

    ordering = ("-created_at",)
    list_per_page = 25

    # =====================================================
    # FIELDSETS (DETAIL VIEW)
    # =====================================================
    fieldsets = (
        ("Recipient", {
            "fields": ("recipient",),
        }),
        ("Classification", {
            "fields": ("category", "priority"),
        }),
        ("Content", {
            "fields": ("title", "message"),
        }),
        ("Status", {
            "fields": ("is_read", "read_at", "created_at"),
        }),
    )

    readonly_fields = (
        "created_at",
        "read_at",
    )

    actions = (
        "mark_as_read",
        "mark_as_unread",
    )

    @admin.display(description="Title")
    def colored_title(self, obj):
        color_map = {
            Notification.Priority.INFO: "#2563eb",
            Notification.Priority.WARNING: "#f59e0b",
            Notification.Priority.DANGER: "#dc2626",
        }

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color_map.get(obj.priority, "#000000"),
            obj.title,
        )

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Mark selected notifications as READ")
    def mark_as_read(self, request, queryset):
        queryset.update(is_read=True)

    @admin.action(description="Mark selected notifications as UNREAD")
    def mark_as_unread(self, request, queryset):
        queryset.update(is_read=False)
