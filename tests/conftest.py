"""
Shared fixtures for reminder dispatch tests.

All scenarios run against a fixed clock: 2026-03-02 10:00 UTC.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from itertools import count

import pytest

from apps.accounts.models import User
from apps.events.models import CalendarEvent
from apps.families.models import Family, FamilyMember
from apps.notifications.models import NotificationPreference
from apps.tasks.models import Task

_emails = count(1)


@pytest.fixture
def now():
    return datetime(2026, 3, 2, 10, 0, tzinfo=dt_timezone.utc)


@pytest.fixture
def family(db):
    return Family.objects.create(name='Lee Household')


@pytest.fixture
def make_member(db):
    def _make(family, first_name, last_name='', **extra):
        user = User.objects.create_user(
            email=f'member{next(_emails)}@example.com',
            password='not-used-in-tests',
            first_name=first_name,
            last_name=last_name,
        )
        FamilyMember.objects.create(family=family, user=user, **extra)
        return user
    return _make


@pytest.fixture
def opt_in(db):
    def _opt_in(user, family, advance_minutes=15, **flags):
        return NotificationPreference.objects.create(
            user=user,
            family=family,
            reminder_advance_minutes=advance_minutes,
            **flags,
        )
    return _opt_in


@pytest.fixture
def make_event(db):
    def _make(family, title, start_time, assignees=None):
        return CalendarEvent.objects.create(
            family=family,
            title=title,
            start_time=start_time,
            end_time=start_time + timedelta(hours=1),
            assignees=assignees or [],
        )
    return _make


@pytest.fixture
def make_task(db):
    def _make(family, title, assignee, due_date, status=Task.Status.TODO):
        return Task.objects.create(
            family=family,
            title=title,
            assignee=assignee,
            due_date=due_date,
            status=status,
        )
    return _make
