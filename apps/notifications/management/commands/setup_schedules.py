"""
Management command to set up Django-Q2 schedules for reminder jobs.

This command creates/updates the scheduled task required for:
- Reminder dispatch (event reminders + due/overdue tasks), every minute

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
Existing schedules will be updated if their configuration changes.
"""
from django.core.management.base import BaseCommand
from django_q.models import Schedule


REMINDER_SCHEDULE_NAME = 'Reminder Dispatch'


class Command(BaseCommand):
    help = 'Set up Django-Q2 schedules for reminder jobs'

    def add_arguments(self, parser):
        parser.add_argument(
            '--minutes',
            type=int,
            default=1,
            help='Dispatch interval in minutes (default: 1)',
        )

    def handle(self, *args, **options):
        minutes = options['minutes']
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        # Runs both reminder passes; the window slack must cover half
        # of this interval (REMINDER_WINDOW_SLACK_MINUTES)
        schedule, created = Schedule.objects.update_or_create(
            name=REMINDER_SCHEDULE_NAME,
            defaults={
                'func': 'apps.notifications.tasks.dispatch_reminders',
                'schedule_type': Schedule.MINUTES,
                'minutes': minutes,
                'repeats': -1,  # Run forever
            }
        )
        if created:
            self.stdout.write(
                self.style.SUCCESS(f'✓ Created schedule: {REMINDER_SCHEDULE_NAME} (every {minutes} min)')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'↻ Updated schedule: {REMINDER_SCHEDULE_NAME} (every {minutes} min)')
            )

        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
