import atexit
import logging
import threading

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from django.conf import settings

from notifications.services.reminders import get_default_job, send_dose_reminders

logger = logging.getLogger(__name__)


class DoseReminderScheduler:
    """
    Owns the single daily timer for dose reminders.

    The sweep job and the clock settings are injected; start() and
    stop() are explicit. trigger() is what the timer calls and never
    raises, so one failed run cannot stop the next.
    """

    JOB_ID = "send_dose_reminders"

    def __init__(self, job=None, *, hour=None, minute=None, timezone_name=None):
        self.job = job or get_default_job()
        self.hour = settings.REMINDER_SWEEP_HOUR if hour is None else hour
        self.minute = settings.REMINDER_SWEEP_MINUTE if minute is None else minute
        self.timezone_name = timezone_name or settings.REMINDER_TIME_ZONE

        self._scheduler = None
        self._cancel = threading.Event()

    @property
    def running(self):
        return self._scheduler is not None and self._scheduler.running

    @property
    def next_run_time(self):
        if not self.running:
            return None
        job = self._scheduler.get_job(self.JOB_ID)
        return job.next_run_time if job else None

    def start(self):
        if self.running:
            logger.info("Dose reminder scheduler already running, skipping start")
            return

        self._cancel.clear()

        self._scheduler = BackgroundScheduler(timezone=self.timezone_name)

        # --------------------------------------------
        # SCHEDULE: DAILY AT HOUR:MINUTE (REMINDER TZ)
        # --------------------------------------------
        self._scheduler.add_job(
            self.trigger,
            trigger=CronTrigger(
                hour=self.hour,
                minute=self.minute,
                timezone=self.timezone_name,
            ),
            id=self.JOB_ID,
            replace_existing=True,
            max_instances=1,      # Prevent overlapping runs
            coalesce=True,        # Merge missed runs if server was down
        )

        self._scheduler.start()

        logger.info(
            "APScheduler started: dose reminders scheduled daily at %02d:%02d (%s)",
            self.hour,
            self.minute,
            self.timezone_name,
        )

    def stop(self, wait=True):
        # In-flight sweep stops before its next patient.
        self._cancel.set()

        if self.running:
            self._scheduler.shutdown(wait=wait)
            logger.info("APScheduler stopped")

        self._scheduler = None

    def trigger(self):
        """
        Timer callback. Runs one sweep and returns its summary,
        or None if the run crashed.
        """
        try:
            return send_dose_reminders(job=self.job, cancel_event=self._cancel)
        except Exception:
            logger.exception("Scheduled dose reminder sweep crashed")
            return None


# ============================================================
# GLOBAL SAFETY LOCK
# Prevents scheduler from starting more than once
# ============================================================
_scheduler = None


def start_scheduler():
    """
    Start the dose reminder scheduler once per process.

    - Respects ENABLE_SCHEDULER setting
    - Prevents double start (Django autoreload, imports)
    """
    global _scheduler

    if not getattr(settings, "ENABLE_SCHEDULER", False):
        logger.info("APScheduler disabled via settings (ENABLE_SCHEDULER=False)")
        return None

    if _scheduler is not None:
        logger.info("APScheduler already running, skipping initialization")
        return _scheduler

    _scheduler = DoseReminderScheduler()
    _scheduler.start()

    atexit.register(stop_scheduler)
    return _scheduler


def stop_scheduler():
    global _scheduler

    if _scheduler is None:
        return

    _scheduler.stop(wait=False)
    _scheduler = None
