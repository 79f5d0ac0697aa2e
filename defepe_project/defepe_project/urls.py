from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    # DJANGO ADMIN (STAFF ONLY)
    path("django/admin/", admin.site.urls),

    # JSON API
    path("api/admins/", include("accounts.urls")),
    path("api/patients/", include("patients.urls")),
    path("api/notifications/", include("notifications.urls")),
]
