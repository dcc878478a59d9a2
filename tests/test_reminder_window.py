from datetime import datetime, timedelta, timezone as dt_timezone

import pytest

from apps.notifications.reminders import minutes_until, normalize_name, reminder_window

NOW = datetime(2026, 3, 2, 10, 0, tzinfo=dt_timezone.utc)


def test_window_brackets_the_lead_time():
    start, end = reminder_window(NOW, 15, 2)
    assert start == datetime(2026, 3, 2, 10, 13, tzinfo=dt_timezone.utc)
    assert end == datetime(2026, 3, 2, 10, 17, tzinfo=dt_timezone.utc)


def test_zero_lead_time_is_centred_on_now():
    start, end = reminder_window(NOW, 0, 1)
    assert start == NOW - timedelta(minutes=1)
    assert end == NOW + timedelta(minutes=1)


def test_default_slack_covers_a_one_minute_poller():
    start, end = reminder_window(NOW, 30)
    assert end - start >= timedelta(minutes=1)


def test_consecutive_ticks_leave_no_gap():
    first_start, first_end = reminder_window(NOW, 15, 1)
    second_start, _ = reminder_window(NOW + timedelta(minutes=1), 15, 1)
    assert second_start <= first_end


@pytest.mark.parametrize('advance, slack', [(-1, 2), (15, -1)])
def test_negative_arguments_are_rejected(advance, slack):
    with pytest.raises(ValueError):
        reminder_window(NOW, advance, slack)


@pytest.mark.parametrize('offset_seconds, expected', [
    (15 * 60, 15),
    (14 * 60 + 30, 15),
    (14 * 60 + 29, 14),
    (-90, -1),
])
def test_minutes_until_rounds_half_up(offset_seconds, expected):
    assert minutes_until(NOW + timedelta(seconds=offset_seconds), NOW) == expected


def test_normalize_name_ignores_case_and_spacing():
    assert normalize_name('  Ann   LEE ') == normalize_name('ann lee')
    assert normalize_name('Ann Lee') != normalize_name('Anne Lee')
