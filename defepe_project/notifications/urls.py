from django.urls import path

from .views import (
    notification_feed, notification_mark_read,
    notification_mark_all_read, send_email_api,
)

app_name = "notifications"

urlpatterns = [
    path("", notification_feed, name="feed"),
    path("<int:notification_id>/read/", notification_mark_read, name="mark-read"),
    path("read-all/", notification_mark_all_read, name="mark-all-read"),
    path("send-email/", send_email_api, name="send-email"),
]
