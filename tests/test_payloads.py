from datetime import datetime, timezone as dt_timezone

import pytest

from apps.notifications.models import Notification
from apps.notifications.payloads import (
    PAYLOAD_TYPES,
    EventReminderData,
    TaskOverdueData,
    correlation_id_for,
)


def test_every_notification_type_has_a_payload():
    assert set(PAYLOAD_TYPES) == set(Notification.Type.values)


def test_event_reminder_payload_shape():
    start = datetime(2026, 3, 2, 10, 15, tzinfo=dt_timezone.utc)
    payload = EventReminderData(
        event_id=7, start_time=start, advance_minutes=15, actual_minutes_until_event=15,
    )
    assert payload.to_dict() == {
        'eventId': 7,
        'startTime': '2026-03-02T10:15:00+00:00',
        'advanceMinutes': 15,
        'actualMinutesUntilEvent': 15,
    }
    assert payload.correlation_id == '7'


def test_overdue_payload_is_its_own_type():
    payload = TaskOverdueData(task_id=3, due_date=datetime(2026, 3, 1, tzinfo=dt_timezone.utc))
    assert payload.type == Notification.Type.TASK_OVERDUE
    assert correlation_id_for(payload.type, payload.to_dict()) == '3'


def test_unknown_type_is_rejected():
    with pytest.raises(KeyError):
        correlation_id_for('daily_summary', {'taskId': 1})
