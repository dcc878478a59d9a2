import pytest

from apps.notifications.models import Notification, NotificationPreference
from apps.notifications.services import get_or_create_preferences
from apps.tasks.models import Task

pytestmark = pytest.mark.django_db


def _assignments(user):
    return Notification.objects.filter(user=user, type=Notification.Type.TASK_ASSIGNED)


def test_assigning_a_task_notifies_the_assignee(family, make_member):
    mum = make_member(family, 'Grace', 'Lee', role='parent')
    ann = make_member(family, 'Ann', 'Lee', role='child')

    task = Task.objects.create(family=family, title='Feed the cat', assignee=ann, created_by=mum)

    notification = _assignments(ann).get()
    assert notification.title == 'New Task Assigned'
    assert notification.message == 'Grace Lee assigned you the task: Feed the cat'
    assert notification.family == family
    assert notification.data == {'taskId': task.pk, 'assignedBy': mum.pk}
    assert notification.correlation_id == str(task.pk)


def test_nameless_assigner_is_someone(family, make_member):
    anon = make_member(family, '')
    ann = make_member(family, 'Ann')

    Task.objects.create(family=family, title='Water plants', assignee=ann, created_by=anon)

    assert _assignments(ann).get().message == 'Someone assigned you the task: Water plants'


def test_self_assigned_task_is_silent(family, make_member):
    ann = make_member(family, 'Ann')

    Task.objects.create(family=family, title='Read a book', assignee=ann, created_by=ann)

    assert not Notification.objects.exists()


def test_assignment_notifications_can_be_turned_off(family, make_member, opt_in):
    mum = make_member(family, 'Grace')
    ann = make_member(family, 'Ann')
    opt_in(ann, family, task_assignments=False)

    Task.objects.create(family=family, title='Feed the cat', assignee=ann, created_by=mum)

    assert not Notification.objects.exists()


def test_reassigning_notifies_the_new_assignee(family, make_member):
    mum = make_member(family, 'Grace')
    ann = make_member(family, 'Ann')
    bob = make_member(family, 'Bob')
    task = Task.objects.create(family=family, title='Mow lawn', assignee=ann, created_by=mum)

    task.assignee = bob
    task.save()

    assert _assignments(ann).count() == 1
    assert _assignments(bob).count() == 1


def test_saving_without_reassigning_is_silent(family, make_member):
    mum = make_member(family, 'Grace')
    ann = make_member(family, 'Ann')
    task = Task.objects.create(family=family, title='Mow lawn', assignee=ann, created_by=mum)

    task.title = 'Mow the back lawn'
    task.status = Task.Status.PROGRESS
    task.save()

    assert _assignments(ann).count() == 1


def test_unassigned_task_is_silent(family, make_member):
    mum = make_member(family, 'Grace')

    Task.objects.create(family=family, title='Someone, please', created_by=mum)

    assert not Notification.objects.exists()


def test_preferences_are_created_with_defaults(family, make_member):
    ann = make_member(family, 'Ann')

    preference = get_or_create_preferences(ann, family)

    assert preference.reminder_advance_minutes == 15
    assert preference.event_reminders is True
    assert preference.task_due_reminders is True
    assert preference.task_assignments is True
    assert preference.daily_summary is False
    assert preference.email_notifications is False
    assert preference.browser_notifications is False


def test_preferences_are_created_once(family, make_member):
    ann = make_member(family, 'Ann')

    first = get_or_create_preferences(ann, family)
    first.reminder_advance_minutes = 60
    first.save()
    second = get_or_create_preferences(ann, family)

    assert second.pk == first.pk
    assert second.reminder_advance_minutes == 60
    assert NotificationPreference.objects.count() == 1
