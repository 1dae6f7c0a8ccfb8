from datetime import datetime

import pytest

from chatplugins.schedule import first_weekday, is_due, next_wake_time
from chatplugins.timer import Timer


def _weekday(d):
    return (d.weekday() + 1) % 7


@pytest.mark.parametrize("now", [
    datetime(2022, 6, 15, 10, 0),
    datetime(2022, 6, 18, 17, 0),
    datetime(2022, 12, 31, 23, 59),
])
def test_next_wake_time_weekly(now):
    ts = Timer()
    ts.month = -1
    ts.week = 6
    ts.hour = 16
    ts.minute = 30
    wake = next_wake_time(ts, now)
    assert wake > now
    assert _weekday(wake) == 6
    assert (wake.hour, wake.minute) == (16, 30)


def test_next_wake_time_every_minute_is_future():
    ts = Timer()
    ts.month, ts.day, ts.hour, ts.minute = -1, -1, -1, -1
    now = datetime(2022, 1, 1, 0, 0)
    wake = next_wake_time(ts, now)
    assert now < wake


def test_next_wake_time_daily():
    ts = Timer()
    ts.month, ts.day, ts.hour, ts.minute = -1, -1, 8, 0
    now = datetime(2022, 3, 3, 9, 0)
    wake = next_wake_time(ts, now)
    assert wake > now
    assert (wake.hour, wake.minute) == (8, 0)


def test_first_weekday():
    d = first_weekday(datetime(2022, 6, 20), 1)
    assert d.month == 6
    assert d.day <= 7
    assert _weekday(d) == 1


def test_is_due():
    ts = Timer()
    ts.month, ts.day, ts.week, ts.hour, ts.minute = -1, 0, 6, 16, 30
    assert is_due(ts, datetime(2022, 6, 18, 16, 30))
    assert not is_due(ts, datetime(2022, 6, 18, 16, 31))
    assert not is_due(ts, datetime(2022, 6, 17, 16, 30))
    ts.month = 5
    assert not is_due(ts, datetime(2022, 6, 18, 16, 30))