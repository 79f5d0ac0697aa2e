"""
notifications/management/commands/send_dose_reminders.py

Runs one dose reminder sweep on demand.

The scheduler runs the same sweep daily; this command is for
catching up a missed day or checking a specific date.
"""

from django.core.management.base import BaseCommand, CommandError
from django.utils import timezone

from notifications.services.reminders import send_dose_reminders
from patients.services import InvalidDateError, parse_calendar_date


class Command(BaseCommand):
    help = "Email patients whose dose reminder falls on today (or --date)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--date",
            help="Run the sweep for this date (YYYY-MM-DD) instead of today",
        )

    def handle(self, *args, **options):
        day = None
        if options.get("date"):
            try:
                day = parse_calendar_date(options["date"])
            except InvalidDateError as exc:
                raise CommandError(str(exc)) from exc

        now = timezone.now()

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting dose reminder sweep"
            )
        )

        summary = send_dose_reminders(day)

        if summary.aborted:
            raise CommandError(f"Sweep aborted: {summary.error}")

        style = self.style.SUCCESS if summary.ok else self.style.WARNING

        self.stdout.write(
            style(f"[{now:%Y-%m-%d %H:%M:%S}] Completed: {summary.describe()}")
        )
