"""
Reminder dispatch.

Runs once per scheduler tick (about every minute):

- send_event_reminders: groups opted-in users by lead time, finds events
  whose start falls in each group's window, resolves who each event is for,
  and emits one "Upcoming Event" notification per (user, event), ever.
- send_due_task_reminders: emits due-soon/overdue notifications for open
  assigned tasks, at most once per 12 hours per (user, task).

Both take the current time as an argument. Nothing here reads the clock.
"""

import logging
import math
from collections import defaultdict
from dataclasses import dataclass
from datetime import timedelta

from django.conf import settings
from django.db import DatabaseError, transaction

from apps.events.models import CalendarEvent
from . import ledger, stores
from .ledger import EVENT_REMINDER_POLICY, TASK_REMINDER_COOLDOWN_POLICY, NotificationRecord
from .payloads import EventReminderData, TaskDueSoonData, TaskOverdueData

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SLACK_MINUTES = 2


# =============================================================================
# Reminder Window
# =============================================================================

def reminder_window(now, advance_minutes, slack_minutes=DEFAULT_WINDOW_SLACK_MINUTES):
    """
    Start times that owe a reminder if the dispatcher runs at `now`.

    Returns the inclusive interval
    [now + advance - slack, now + advance + slack].

    The slack must cover at least half the polling interval so that every
    start time lands in some window; the ledger stops it landing twice.
    """
    if advance_minutes < 0:
        raise ValueError(f"advance_minutes must be >= 0, got {advance_minutes}")
    if slack_minutes < 0:
        raise ValueError(f"slack_minutes must be >= 0, got {slack_minutes}")

    target = now + timedelta(minutes=advance_minutes)
    slack = timedelta(minutes=slack_minutes)
    return target - slack, target + slack


def minutes_until(start_time, now):
    """Whole minutes from now to start_time, halves rounded up."""
    return math.floor((start_time - now).total_seconds() / 60 + 0.5)


# =============================================================================
# Candidate Resolution
# =============================================================================

@dataclass(frozen=True)
class ReminderCandidate:
    """An (event, user) pair entitled to a reminder, before dedup."""

    event: CalendarEvent
    user_id: int
    advance_minutes: int
    minutes_until_event: int

    @property
    def family_id(self):
        return self.event.family_id


def normalize_name(name):
    """Case-fold and collapse whitespace so "  ann  LEE" matches "Ann Lee"."""
    return ' '.join(str(name).split()).casefold()


def group_by_advance(preferences):
    """Bucket preferences by lead time: {advance_minutes: [preference, ...]}."""
    groups = defaultdict(list)
    for preference in preferences:
        groups[preference.advance_minutes].append(preference)
    return dict(groups)


def build_member_directory(members):
    """Map (family_id, normalized display name) to the matching user ids."""
    directory = defaultdict(set)
    for member in members:
        if not member.display_name:
            continue
        directory[(member.family_id, normalize_name(member.display_name))].add(member.user_id)
    return directory


def resolve_assignee_ids(event, directory):
    """
    User ids named in event.assignees.

    Names without a matching member are dropped: renames and partial
    profiles are expected.
    """
    user_ids = set()
    for name in event.assignees:
        matched = directory.get((event.family_id, normalize_name(name)))
        if matched:
            user_ids |= matched
        else:
            logger.debug(
                "Assignee %r on event %s matches no member of family %s",
                name, event.pk, event.family_id,
            )
    return user_ids


def resolve_candidates(advance_minutes, preferences, now, slack_minutes):
    """
    Candidates for one lead-time group.

    One event query for the whole group; member profiles are fetched only
    if some event restricts its assignees.
    """
    window_start, window_end = reminder_window(now, advance_minutes, slack_minutes)

    users_by_family = defaultdict(set)
    for preference in preferences:
        users_by_family[preference.family_id].add(preference.user_id)
    family_ids = sorted(users_by_family)

    logger.info(
        "Checking for events starting between %s and %s (in ~%s minutes) for %s users",
        window_start.isoformat(), window_end.isoformat(),
        advance_minutes, len(preferences),
    )

    events = stores.find_events_starting_between(family_ids, window_start, window_end)
    if not events:
        logger.debug("No events in the %s-minute reminder window", advance_minutes)
        return set()

    directory = None
    candidates = set()

    for event in events:
        family_users = users_by_family.get(event.family_id, set())

        if event.assignees:
            if directory is None:
                directory = build_member_directory(stores.list_members(family_ids))
            eligible = family_users & resolve_assignee_ids(event, directory)
        else:
            eligible = family_users

        minutes_left = minutes_until(event.start_time, now)
        for user_id in eligible:
            candidates.add(ReminderCandidate(
                event=event,
                user_id=user_id,
                advance_minutes=advance_minutes,
                minutes_until_event=minutes_left,
            ))

    return candidates


# =============================================================================
# Event Reminder Dispatch
# =============================================================================

def build_event_reminder(candidate, now):
    event = candidate.event
    return NotificationRecord(
        family_id=candidate.family_id,
        user_id=candidate.user_id,
        title='Upcoming Event',
        message=f'"{event.title}" starts in {candidate.minutes_until_event} minutes',
        payload=EventReminderData(
            event_id=event.pk,
            start_time=event.start_time,
            advance_minutes=candidate.advance_minutes,
            actual_minutes_until_event=candidate.minutes_until_event,
        ),
        created_at=now,
    )


def _dispatch_group(advance_minutes, preferences, now, slack_minutes):
    sent = 0
    for candidate in resolve_candidates(advance_minutes, preferences, now, slack_minutes):
        event_id = candidate.event.pk

        if EVENT_REMINDER_POLICY.is_suppressed(candidate.user_id, event_id, now):
            logger.debug(
                "Reminder already sent for event %s to user %s",
                event_id, candidate.user_id,
            )
            continue

        if ledger.insert(build_event_reminder(candidate, now)) is None:
            continue

        sent += 1
        logger.info(
            'Event reminder sent to user %s for event "%s" (%s minutes until start)',
            candidate.user_id, candidate.event.title, candidate.minutes_until_event,
        )
    return sent


def send_event_reminders(now, slack_minutes=None):
    """
    Emit every event reminder owed at `now`.

    Each lead-time group runs in its own transaction. A store error
    rolls back and skips that group only; the next tick retries it.

    Returns:
        Number of reminders sent
    """
    if slack_minutes is None:
        slack_minutes = settings.REMINDER_WINDOW_SLACK_MINUTES

    preferences = stores.list_enabled_event_reminder_preferences()
    if not preferences:
        logger.info("No users have event reminders enabled")
        return 0

    sent = 0
    for advance_minutes, group in sorted(group_by_advance(preferences).items()):
        try:
            with transaction.atomic():
                group_sent = _dispatch_group(advance_minutes, group, now, slack_minutes)
        except DatabaseError:
            logger.exception(
                "Store error in the %s-minute reminder group, skipping it this cycle",
                advance_minutes,
            )
            continue
        sent += group_sent

    logger.info("Total event reminders sent: %s", sent)
    return sent


# =============================================================================
# Due / Overdue Task Dispatch
# =============================================================================

def build_task_reminder(task, now):
    """Overdue once the due date has passed, due-soon before that."""
    if task.due_date < now:
        title = 'Task Overdue'
        message = f'Task "{task.title}" is overdue'
        payload = TaskOverdueData(task_id=task.pk, due_date=task.due_date)
    else:
        title = 'Task Due Soon'
        message = f'Task "{task.title}" is due soon'
        payload = TaskDueSoonData(task_id=task.pk, due_date=task.due_date)

    return NotificationRecord(
        family_id=task.family_id,
        user_id=task.assignee_id,
        title=title,
        message=message,
        payload=payload,
        created_at=now,
    )


def _dispatch_due_tasks(now, horizon):
    sent = 0
    tasks = stores.find_due_tasks(horizon)
    if not tasks:
        logger.info("No due tasks found")
        return 0

    for task in tasks:
        if TASK_REMINDER_COOLDOWN_POLICY.is_suppressed(task.assignee_id, task.pk, now):
            logger.debug("Recent due task notification already exists for task %s", task.pk)
            continue

        if not stores.get_task_reminder_preference(task.assignee_id, task.family_id):
            logger.debug("User %s has disabled due task notifications", task.assignee_id)
            continue

        record = build_task_reminder(task, now)
        if ledger.insert(record) is None:
            continue

        sent += 1
        logger.info(
            "%s notification created for user %s, task %s",
            record.type, task.assignee_id, task.pk,
        )
    return sent


def send_due_task_reminders(now):
    """
    Emit due-soon and overdue reminders owed at `now`.

    Covers open (todo) tasks with an assignee due within TASK_DUE_SOON_HOURS,
    including ones already past due. Done tasks drop out on their own
    because the query only sees todo tasks.

    Returns:
        Number of reminders sent
    """
    horizon = now + timedelta(hours=settings.TASK_DUE_SOON_HOURS)
    try:
        with transaction.atomic():
            sent = _dispatch_due_tasks(now, horizon)
    except DatabaseError:
        logger.exception("Store error in the due task pass, skipping it this cycle")
        return 0

    logger.info("Total task reminders sent: %s", sent)
    return sent
