from datetime import timedelta
from unittest import mock

import pytest
from django.db import DatabaseError

from apps.notifications import stores
from apps.notifications.models import Notification
from apps.notifications.reminders import send_due_task_reminders
from apps.tasks.models import Task

pytestmark = pytest.mark.django_db

TASK_TYPES = [Notification.Type.TASK_DUE_SOON, Notification.Type.TASK_OVERDUE]


def _task_reminders(**filters):
    return Notification.objects.filter(type__in=TASK_TYPES, **filters).order_by('created_at')


def test_task_due_within_a_day_is_due_soon(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    task = make_task(family, 'Take out bins', ann, now + timedelta(hours=5))

    assert send_due_task_reminders(now) == 1

    notification = _task_reminders().get()
    assert notification.type == Notification.Type.TASK_DUE_SOON
    assert notification.user == ann
    assert notification.title == 'Task Due Soon'
    assert notification.message == 'Task "Take out bins" is due soon'
    assert notification.data == {'taskId': task.pk, 'dueDate': task.due_date.isoformat()}


def test_past_due_task_is_overdue(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Homework', ann, now - timedelta(days=3))

    assert send_due_task_reminders(now) == 1

    notification = _task_reminders().get()
    assert notification.type == Notification.Type.TASK_OVERDUE
    assert notification.title == 'Task Overdue'
    assert notification.message == 'Task "Homework" is overdue'


def test_tasks_due_later_are_left_alone(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Taxes', ann, now + timedelta(hours=25))

    assert send_due_task_reminders(now) == 0


def test_overdue_reminder_repeats_after_cooldown(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Homework', ann, now - timedelta(hours=1))

    assert send_due_task_reminders(now) == 1
    assert send_due_task_reminders(now + timedelta(hours=6)) == 0
    assert send_due_task_reminders(now + timedelta(hours=11, minutes=59)) == 0
    assert send_due_task_reminders(now + timedelta(hours=12, minutes=1)) == 1

    assert [n.type for n in _task_reminders()] == [Notification.Type.TASK_OVERDUE] * 2


def test_due_soon_then_overdue(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Pay rent', ann, now + timedelta(hours=2))

    assert send_due_task_reminders(now) == 1
    # Overdue at +3h, but still inside the cooldown of the due-soon reminder
    assert send_due_task_reminders(now + timedelta(hours=3)) == 0
    assert send_due_task_reminders(now + timedelta(hours=13)) == 1

    assert [n.type for n in _task_reminders()] == [
        Notification.Type.TASK_DUE_SOON,
        Notification.Type.TASK_OVERDUE,
    ]


def test_done_task_stops_reminding(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    task = make_task(family, 'Homework', ann, now - timedelta(hours=1))
    assert send_due_task_reminders(now) == 1

    task.status = Task.Status.DONE
    task.save()

    for hours in (13, 26, 100):
        assert send_due_task_reminders(now + timedelta(hours=hours)) == 0
    assert _task_reminders().count() == 1


def test_in_progress_and_unassigned_tasks_are_skipped(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Painting', ann, now + timedelta(hours=1), status=Task.Status.PROGRESS)
    make_task(family, 'Anyone?', None, now + timedelta(hours=1))
    make_task(family, 'Someday', ann, None)

    assert send_due_task_reminders(now) == 0


def test_clearing_the_assignee_stops_reminding(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    task = make_task(family, 'Homework', ann, now - timedelta(hours=1))
    assert send_due_task_reminders(now) == 1

    task.assignee = None
    task.save()

    assert send_due_task_reminders(now + timedelta(hours=13)) == 0


def test_opted_out_assignee_gets_nothing(family, make_member, make_task, opt_in, now):
    ann = make_member(family, 'Ann', 'Lee')
    opt_in(ann, family, task_due_reminders=False)
    make_task(family, 'Homework', ann, now + timedelta(hours=1))

    assert send_due_task_reminders(now) == 0


def test_missing_preference_means_defaults(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Homework', ann, now + timedelta(hours=1))

    assert stores.get_task_reminder_preference(ann.pk, family.pk) is True
    assert send_due_task_reminders(now) == 1


def test_cooldown_is_per_user_and_task(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    bob = make_member(family, 'Bob', 'Lee')
    make_task(family, 'Dishes', ann, now + timedelta(hours=1))
    make_task(family, 'Laundry', ann, now + timedelta(hours=1))
    make_task(family, 'Dishes', bob, now + timedelta(hours=1))

    assert send_due_task_reminders(now) == 3


def test_store_error_yields_zero_for_the_batch(family, make_member, make_task, now):
    ann = make_member(family, 'Ann', 'Lee')
    make_task(family, 'Homework', ann, now + timedelta(hours=1))

    with mock.patch.object(stores, 'find_due_tasks', side_effect=DatabaseError('timeout')):
        assert send_due_task_reminders(now) == 0

    assert send_due_task_reminders(now) == 1
