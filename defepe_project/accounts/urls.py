from django.urls import path

from .views import admin_delete, admin_list, admin_restore, admin_revoke

app_name = "accounts"

urlpatterns = [
    path("", admin_list, name="admin-list"),
    path("<int:profile_id>/revoke/", admin_revoke, name="admin-revoke"),
    path("<int:profile_id>/restore/", admin_restore, name="admin-restore"),
    path("<int:profile_id>/delete/", admin_delete, name="admin-delete"),
]
