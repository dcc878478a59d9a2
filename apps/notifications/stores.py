"""
Read-side queries the reminder dispatcher depends on.

Preferences, events, tasks and family members are owned by other flows;
the dispatcher never writes them.
"""

from collections import namedtuple

from django.conf import settings

from apps.events.models import CalendarEvent
from apps.families.models import FamilyMember
from apps.tasks.models import Task
from .models import NotificationPreference


EventReminderPreference = namedtuple(
    'EventReminderPreference', ['user_id', 'family_id', 'advance_minutes']
)

Member = namedtuple('Member', ['user_id', 'family_id', 'display_name'])


def list_enabled_event_reminder_preferences():
    """
    All (user, family) pairs that opted in to event reminders.

    A blank lead time falls back to REMINDER_DEFAULT_ADVANCE_MINUTES.
    Zero is a valid lead time and is kept as is.
    """
    default_advance = settings.REMINDER_DEFAULT_ADVANCE_MINUTES
    rows = (
        NotificationPreference.objects
        .filter(event_reminders=True)
        .values_list('user_id', 'family_id', 'reminder_advance_minutes')
    )
    return [
        EventReminderPreference(
            user_id=user_id,
            family_id=family_id,
            advance_minutes=default_advance if advance is None else advance,
        )
        for user_id, family_id, advance in rows
    ]


def _preference_flag(user_id, family_id, field_name):
    value = (
        NotificationPreference.objects
        .filter(user_id=user_id, family_id=family_id)
        .values_list(field_name, flat=True)
        .first()
    )
    if value is None:
        return NotificationPreference.default_for(field_name)
    return value


def get_task_reminder_preference(user_id, family_id):
    """Whether due/overdue reminders are on. Missing rows mean defaults."""
    return _preference_flag(user_id, family_id, 'task_due_reminders')


def get_task_assignment_preference(user_id, family_id):
    """Whether task assignment notifications are on."""
    return _preference_flag(user_id, family_id, 'task_assignments')


def find_events_starting_between(family_ids, start, end):
    """Events of the given families whose start lies in [start, end]."""
    return list(
        CalendarEvent.objects
        .filter(
            family_id__in=family_ids,
            start_time__gte=start,
            start_time__lte=end,
        )
        .order_by('start_time', 'pk')
    )


def find_due_tasks(before):
    """Open, assigned tasks due at or before `before`, overdue ones included."""
    return list(
        Task.objects
        .filter(
            status=Task.Status.TODO,
            assignee__isnull=False,
            due_date__isnull=False,
            due_date__lte=before,
        )
        .order_by('due_date', 'pk')
    )


def list_members(family_ids):
    """Members of the given families with their display names."""
    memberships = (
        FamilyMember.objects
        .filter(family_id__in=family_ids)
        .select_related('user')
    )
    return [
        Member(
            user_id=membership.user_id,
            family_id=membership.family_id,
            display_name=membership.display_name,
        )
        for membership in memberships
    ]
