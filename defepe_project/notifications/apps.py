from django.apps import AppConfig
from django.conf import settings
import os


class NotificationsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "notifications"

    def ready(self):
        # --------------------------------------------------
        # Start APScheduler SAFELY
        # --------------------------------------------------
        # Prevent duplicate scheduler from Django autoreload;
        # other serving processes opt in with SCHEDULER_AUTOSTART.
        autostart = getattr(settings, "SCHEDULER_AUTOSTART", False)
        if os.environ.get("RUN_MAIN") != "true" and not autostart:
            return

        from .scheduler import start_scheduler
        start_scheduler()
