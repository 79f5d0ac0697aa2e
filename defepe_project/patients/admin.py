from django.contrib import admin

from .models import Drug, DrugCategory, Patient, PatientReminderDate


@admin.register(DrugCategory)
class DrugCategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(Drug)
class DrugAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "created_at")
    list_filter = ("category",)
    search_fields = ("name", "category__name")


class PatientReminderDateInline(admin.TabularInline):
    model = PatientReminderDate
    extra = 0
    can_delete = False
    readonly_fields = ("reminder_date",)

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Patient)
class PatientAdmin(admin.ModelAdmin):

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "lastname",
        "firstname",
        "email",
        "drug",
        "purchase_date",
        "next_dose_date",
        "is_active",
    )

    list_filter = (
        "drug__category",
        "next_dose_date",
        "deleted_at",
    )

    search_fields = (
        "firstname",
        "lastname",
        "email",
        "phone_number",
    )

    list_per_page = 25

    # =====================================================
    # DETAIL VIEW
    # =====================================================
    fieldsets = (
        ("Contact", {
            "fields": ("firstname", "lastname", "email", "phone_number"),
        }),
        ("Medication", {
            "fields": ("drug", "purchase_date", "days_until_next_dose", "next_dose_date"),
        }),
        ("Status", {
            "fields": ("deleted_at", "created_at", "updated_at"),
        }),
    )

    readonly_fields = (
        "next_dose_date",
        "created_at",
        "updated_at",
    )

    inlines = (PatientReminderDateInline,)

    actions = (
        "soft_delete_selected",
        "restore_selected",
    )

    @admin.display(boolean=True, description="Active")
    def is_active(self, obj):
        return not obj.is_deleted

    # =====================================================
    # ADMIN ACTIONS
    # =====================================================
    @admin.action(description="Move selected patients to trash")
    def soft_delete_selected(self, request, queryset):
        for patient in queryset:
            patient.soft_delete()

    @admin.action(description="Restore selected patients from trash")
    def restore_selected(self, request, queryset):
        for patient in queryset:
            patient.restore()
