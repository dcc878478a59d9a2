"""
Scheduled tasks for notifications app.

Background jobs run by the Django-Q2 cluster (see setup_schedules):
- dispatch_reminders: event reminders and due/overdue task reminders,
  every minute

These are the only places that read the clock; everything below them
receives `now` explicitly.
"""

import logging

from django.utils import timezone

from .reminders import send_due_task_reminders, send_event_reminders

logger = logging.getLogger(__name__)


def check_event_reminders():
    """Send event reminders owed right now."""
    return send_event_reminders(timezone.now())


def check_due_tasks():
    """Send due-soon and overdue task reminders owed right now."""
    return send_due_task_reminders(timezone.now())


def dispatch_reminders():
    """
    Scheduled job to run every minute.

    Returns a summary dict that Django-Q stores as the task result:
        {'reminders_sent': int, 'task_reminders_sent': int}

    Store failures inside a group are absorbed by the reminder functions.
    Anything else propagates so the run is recorded as failed; the next
    tick retries from scratch.
    """
    now = timezone.now()
    summary = {
        'reminders_sent': send_event_reminders(now),
        'task_reminders_sent': send_due_task_reminders(now),
    }
    logger.info(
        "Reminder dispatch at %s: %s event reminders, %s task reminders",
        now.isoformat(), summary['reminders_sent'], summary['task_reminders_sent'],
    )
    return summary
