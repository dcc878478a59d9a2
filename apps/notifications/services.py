"""
Service layer for notifications app.

- get_or_create_preferences: lazily create a member's reminder settings
- notify_task_assigned: tell a member someone handed them a task
"""

import logging

from . import ledger, stores
from .ledger import NotificationRecord
from .models import NotificationPreference
from .payloads import TaskAssignedData

logger = logging.getLogger(__name__)


def get_or_create_preferences(user, family):
    """
    Return the user's preferences for this family, creating the
    default row on first access.

    Defaults: 15-minute lead time; assignment, due-date and event
    reminders on; daily summary, email and browser delivery off.
    """
    preference, created = NotificationPreference.objects.get_or_create(
        user=user,
        family=family,
    )
    if created:
        logger.info("Default notification preferences created for user %s", user.pk)
    return preference


def notify_task_assigned(task, now):
    """
    Send notification when a task is assigned.
    Only for delegated tasks (assignee != creator).

    Returns:
        The notification id, or None when nothing was sent
    """
    if not task.assignee_id or not task.created_by_id:
        return None
    if task.assignee_id == task.created_by_id:
        return None

    if not stores.get_task_assignment_preference(task.assignee_id, task.family_id):
        logger.debug("User %s has disabled task assignment notifications", task.assignee_id)
        return None

    assigner_name = task.created_by.display_name or 'Someone'

    notification_id = ledger.insert(NotificationRecord(
        family_id=task.family_id,
        user_id=task.assignee_id,
        title='New Task Assigned',
        message=f'{assigner_name} assigned you the task: {task.title}',
        payload=TaskAssignedData(task_id=task.pk, assigned_by=task.created_by_id),
        created_at=now,
    ))
    logger.info("Task assignment notification created for user %s", task.assignee_id)
    return notification_id
