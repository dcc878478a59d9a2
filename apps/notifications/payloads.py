"""
Typed payloads stored in Notification.data.

Each notification type has exactly one payload class. The class names the
key that carries its correlation id, so the ledger can always tell which
entity a notification is about.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from .models import Notification


@dataclass(frozen=True)
class EventReminderData:
    type: ClassVar[str] = Notification.Type.EVENT_REMINDER
    correlation_key: ClassVar[str] = 'eventId'

    event_id: int
    start_time: datetime
    advance_minutes: int
    actual_minutes_until_event: int

    @property
    def correlation_id(self) -> str:
        return str(self.event_id)

    def to_dict(self) -> dict:
        return {
            'eventId': self.event_id,
            'startTime': self.start_time.isoformat(),
            'advanceMinutes': self.advance_minutes,
            'actualMinutesUntilEvent': self.actual_minutes_until_event,
        }


@dataclass(frozen=True)
class TaskDueSoonData:
    type: ClassVar[str] = Notification.Type.TASK_DUE_SOON
    correlation_key: ClassVar[str] = 'taskId'

    task_id: int
    due_date: datetime

    @property
    def correlation_id(self) -> str:
        return str(self.task_id)

    def to_dict(self) -> dict:
        return {
            'taskId': self.task_id,
            'dueDate': self.due_date.isoformat(),
        }


@dataclass(frozen=True)
class TaskOverdueData(TaskDueSoonData):
    type: ClassVar[str] = Notification.Type.TASK_OVERDUE


@dataclass(frozen=True)
class TaskAssignedData:
    type: ClassVar[str] = Notification.Type.TASK_ASSIGNED
    correlation_key: ClassVar[str] = 'taskId'

    task_id: int
    assigned_by: int

    @property
    def correlation_id(self) -> str:
        return str(self.task_id)

    def to_dict(self) -> dict:
        return {
            'taskId': self.task_id,
            'assignedBy': self.assigned_by,
        }


PAYLOAD_TYPES = {
    payload_class.type: payload_class
    for payload_class in (
        EventReminderData,
        TaskDueSoonData,
        TaskOverdueData,
        TaskAssignedData,
    )
}


def correlation_id_for(notification_type, data):
    """
    Extract the correlation id from a stored payload dict.

    Raises:
        KeyError: unknown notification type or payload missing its key
    """
    payload_class = PAYLOAD_TYPES[notification_type]
    return str(data[payload_class.correlation_key])
