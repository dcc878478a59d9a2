"""
Run the reminder dispatcher once.

For cron-driven deployments without a Django-Q cluster, or to catch up
by hand. Safe to run repeatedly: the ledger suppresses repeats.

Usage:
    python manage.py send_reminders [--skip-events] [--skip-tasks]
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.notifications.tasks import check_due_tasks, check_event_reminders


class Command(BaseCommand):
    help = "Send event reminders and due/overdue task reminders owed right now"

    def add_arguments(self, parser):
        parser.add_argument(
            '--skip-events',
            action='store_true',
            help='Do not send event reminders',
        )
        parser.add_argument(
            '--skip-tasks',
            action='store_true',
            help='Do not send due/overdue task reminders',
        )

    def handle(self, *args, **options):
        started = timezone.now()

        self.stdout.write(
            self.style.NOTICE(
                f"[{started:%Y-%m-%d %H:%M:%S}] Starting reminder dispatch"
            )
        )

        event_count = 0 if options['skip_events'] else check_event_reminders()
        task_count = 0 if options['skip_tasks'] else check_due_tasks()

        self.stdout.write(
            self.style.SUCCESS(
                f"[{started:%Y-%m-%d %H:%M:%S}] Completed: "
                f"{event_count} event reminders, "
                f"{task_count} task reminders"
            )
        )
