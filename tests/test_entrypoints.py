from datetime import timedelta
from io import StringIO
from unittest import mock

import pytest
from django.core.management import call_command
from django.urls import reverse
from django.utils import timezone
from django_q.models import Schedule

from apps.notifications.models import Notification
from apps.notifications.tasks import dispatch_reminders

pytestmark = pytest.mark.django_db

TOKEN = 'test-trigger-token'


@pytest.fixture
def trigger_url():
    return reverse('notifications:trigger')


@pytest.fixture
def owed_reminders(family, make_member, opt_in, make_event, make_task):
    """One event reminder and one overdue task reminder, owed right now."""
    ann = make_member(family, 'Ann', 'Lee')
    opt_in(ann, family, advance_minutes=15)
    current = timezone.now()
    make_event(family, 'Dentist', current + timedelta(minutes=15))
    make_task(family, 'Homework', ann, current - timedelta(hours=1))
    return ann


def test_dispatch_reminders_summary(owed_reminders):
    assert dispatch_reminders() == {'reminders_sent': 1, 'task_reminders_sent': 1}
    assert dispatch_reminders() == {'reminders_sent': 0, 'task_reminders_sent': 0}


def test_trigger_requires_token(client, trigger_url):
    response = client.post(trigger_url)

    assert response.status_code == 403
    assert 'error' in response.json()


def test_trigger_rejects_wrong_token(client, trigger_url):
    response = client.post(trigger_url, HTTP_X_TRIGGER_TOKEN='guess')

    assert response.status_code == 403


def test_trigger_rejects_everything_without_configured_token(client, trigger_url, settings):
    settings.NOTIFICATIONS_TRIGGER_TOKEN = ''

    response = client.post(trigger_url, HTTP_X_TRIGGER_TOKEN='')

    assert response.status_code == 403


def test_trigger_is_post_only(client, trigger_url):
    response = client.get(trigger_url, HTTP_X_TRIGGER_TOKEN=TOKEN)

    assert response.status_code == 405


def test_trigger_runs_dispatch(client, trigger_url, owed_reminders):
    response = client.post(trigger_url, HTTP_X_TRIGGER_TOKEN=TOKEN)

    assert response.status_code == 200
    assert response.json() == {
        'success': True,
        'remindersSent': 1,
        'taskRemindersSent': 1,
        'message': 'Sent 1 event reminders',
    }
    assert Notification.objects.filter(user=owed_reminders).count() == 2


def test_trigger_reports_failure(client, trigger_url):
    with mock.patch(
        'apps.notifications.views.dispatch_reminders',
        side_effect=RuntimeError('cluster down'),
    ):
        response = client.post(trigger_url, HTTP_X_TRIGGER_TOKEN=TOKEN)

    assert response.status_code == 500
    assert response.json() == {'error': 'cluster down'}


def test_send_reminders_command(owed_reminders):
    out = StringIO()

    call_command('send_reminders', stdout=out)

    assert 'Starting reminder dispatch' in out.getvalue()
    assert 'Completed: 1 event reminders, 1 task reminders' in out.getvalue()


def test_send_reminders_command_can_skip_passes(owed_reminders):
    out = StringIO()

    call_command('send_reminders', '--skip-tasks', stdout=out)

    assert 'Completed: 1 event reminders, 0 task reminders' in out.getvalue()
    assert not Notification.objects.filter(type=Notification.Type.TASK_OVERDUE).exists()


def test_setup_schedules_is_idempotent():
    call_command('setup_schedules', stdout=StringIO())
    out = StringIO()
    call_command('setup_schedules', '--minutes', '2', stdout=out)

    schedule = Schedule.objects.get(name='Reminder Dispatch')
    assert Schedule.objects.count() == 1
    assert schedule.func == 'apps.notifications.tasks.dispatch_reminders'
    assert schedule.schedule_type == Schedule.MINUTES
    assert schedule.minutes == 2
    assert schedule.repeats == -1
    assert 'Updated schedule' in out.getvalue()
