"""
Notification ledger and dedup gate.

The ledger is the append-only Notification table. Two dedup policies
read it before anything is emitted:

- EVENT_REMINDER_POLICY: permanent. One event reminder per (user, event).
- TASK_REMINDER_COOLDOWN_POLICY: cooldown. A due/overdue reminder for the same
  (user, task) is suppressed for TASK_REMINDER_COOLDOWN_HOURS, after which
  a still-open task is reminded again.

Inserts run inside their own savepoint; a unique constraint violation
means another writer got there first and is treated as a no-op.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from django.conf import settings
from django.db import IntegrityError, transaction

from .models import Notification
from .payloads import correlation_id_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationRecord:
    """A notification ready to be appended to the ledger."""

    family_id: int
    user_id: int
    title: str
    message: str
    payload: object
    created_at: datetime

    @property
    def type(self):
        return self.payload.type


def exists(user_id, types, correlation_id, since=None):
    """
    Check whether a notification of any of `types` exists for
    (user, correlation id), optionally only those created after `since`.
    """
    if isinstance(types, str):
        types = [types]

    queryset = Notification.objects.filter(
        user_id=user_id,
        type__in=list(types),
        correlation_id=str(correlation_id),
    )
    if since is not None:
        queryset = queryset.filter(created_at__gt=since)
    return queryset.exists()


def insert(record):
    """
    Append a record to the ledger.

    Returns:
        The new notification id, or None when the row already existed.
    """
    data = record.payload.to_dict()
    correlation_id = correlation_id_for(record.type, data)

    try:
        with transaction.atomic():
            notification = Notification.objects.create(
                family_id=record.family_id,
                user_id=record.user_id,
                type=record.type,
                title=record.title,
                message=record.message,
                data=data,
                correlation_id=correlation_id,
                created_at=record.created_at,
            )
    except IntegrityError:
        logger.info(
            "Duplicate %s for user %s (%s) skipped",
            record.type, record.user_id, correlation_id,
        )
        return None

    return notification.pk


@dataclass(frozen=True)
class DedupPolicy:
    """
    Which earlier notifications suppress a new one.

    `cooldown` of None means an earlier notification suppresses forever.
    """

    name: str
    types: tuple
    cooldown: Optional[timedelta] = None

    def is_suppressed(self, user_id, correlation_id, now):
        since = now - self.cooldown if self.cooldown is not None else None
        return exists(user_id, self.types, correlation_id, since=since)


EVENT_REMINDER_POLICY = DedupPolicy(
    name='event-reminder',
    types=(Notification.Type.EVENT_REMINDER,),
)

TASK_REMINDER_COOLDOWN_POLICY = DedupPolicy(
    name='task-reminder-cooldown',
    types=(Notification.Type.TASK_DUE_SOON, Notification.Type.TASK_OVERDUE),
    cooldown=timedelta(hours=settings.TASK_REMINDER_COOLDOWN_HOURS),
)
