"""
Views for notifications app.

trigger_notifications: HTTP entrypoint for external schedulers (cron
services, uptime pingers) that cannot run the Django-Q cluster.
"""

import logging

from django.conf import settings
from django.http import JsonResponse
from django.utils.crypto import constant_time_compare
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .tasks import dispatch_reminders

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def trigger_notifications(request):
    """
    Run one reminder dispatch.

    Requires the X-Trigger-Token header to match NOTIFICATIONS_TRIGGER_TOKEN.
    Failures answer 500 and are left to the caller's next tick.
    """
    expected = settings.NOTIFICATIONS_TRIGGER_TOKEN
    supplied = request.headers.get('X-Trigger-Token', '')
    if not expected or not constant_time_compare(supplied, expected):
        logger.warning("Rejected reminder trigger with missing or invalid token")
        return JsonResponse({'error': 'Invalid trigger token'}, status=403)

    try:
        summary = dispatch_reminders()
    except Exception as exc:
        logger.exception("Reminder trigger failed")
        return JsonResponse({'error': str(exc)}, status=500)

    return JsonResponse({
        'success': True,
        'remindersSent': summary['reminders_sent'],
        'taskRemindersSent': summary['task_reminders_sent'],
        'message': f"Sent {summary['reminders_sent']} event reminders",
    })
