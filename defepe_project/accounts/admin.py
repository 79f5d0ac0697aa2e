from django.contrib import admin

from .models import AdminProfile


@admin.register(AdminProfile)
class AdminProfileAdmin(admin.ModelAdmin):
    list_display = (
        "user",
        "role",
        "access_revoked",
        "phone_number",
        "created_at",
    )

    list_filter = ("role", "access_revoked")

    search_fields = (
        "user__username",
        "user__first_name",
        "user__last_name",
        "user__email",
    )

    readonly_fields = ("created_at", "updated_at")
