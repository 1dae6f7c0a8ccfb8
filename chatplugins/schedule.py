"""When a date-based timer should next wake, and whether it is due."""

from __future__ import annotations

from datetime import datetime, timedelta

from .timer import Timer


def _weekday(d: datetime) -> int:
    """Weekday with Sunday as 0."""
    return (d.weekday() + 1) % 7


def _make(year, month, day, hour, minute, second, micro) -> datetime:
    """Build a datetime, letting out-of-range parts carry over."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1) + timedelta(
        days=day - 1, hours=hour, minutes=minute, seconds=second, microseconds=micro
    )


def _add_date(d: datetime, years: int, months: int, days: int) -> datetime:
    return _make(d.year + years, d.month + months, d.day + days,
                 d.hour, d.minute, d.second, d.microsecond)


def first_weekday(date: datetime, week: int) -> datetime:
    """First day of ``date``'s month falling on ``week`` (Sunday is 0)."""
    d = _add_date(date, 0, 0, 1 - date.day)
    while _weekday(d) != week:
        d = _add_date(d, 0, 0, 1)
    return d


def next_wake_time(timer: Timer, now: datetime) -> datetime:
    m, d, h, mn, w = timer.month, timer.day, timer.hour, timer.minute, timer.week
    unit = timedelta(0)
    if mn >= 0:
        if h < 0:
            unit = timedelta(hours=1)
        elif d < 0 or w < 0:
            unit = timedelta(days=1)
        elif d == 0 and w >= 0:
            delta = timedelta(days=w - _weekday(now))
            if delta < timedelta(0):
                delta = timedelta(days=7)
            unit += delta
    else:
        unit = timedelta(minutes=1)

    stable = 0
    if mn < 0:
        mn = now.minute
    if h < 0:
        h = now.hour
    else:
        stable |= 0x8
    if d < 0:
        d = now.day
    elif d > 0:
        stable |= 0x4
    else:
        d = now.day
        if w >= 0:
            stable |= 0x2
    if m < 0:
        m = now.month
    else:
        stable |= 0x1

    if stable == 0b0101:
        if timer.day != now.day or timer.month != now.month:
            h = 0
    elif stable == 0b1001:
        if timer.month != now.month:
            d = 0
    elif stable == 0b0001:
        if timer.month != now.month:
            d = 0
            h = 0

    date = _make(now.year, m, d, h, mn, now.second, now.microsecond)
    if unit > timedelta(0):
        date += unit

    if date <= now:
        if timer.month < 0:
            if timer.day > 0 or (timer.day == 0 and timer.week >= 0):
                date = _add_date(date, 0, 1, 0)
            elif timer.day < 0 or timer.week < 0:
                if timer.hour > 0:
                    date = _add_date(date, 0, 0, 1)
                elif timer.minute > 0:
                    date += timedelta(hours=1)
        else:
            date = _add_date(date, 1, 0, 0)

    hour = timedelta(hours=1)
    if stable & 0x8 and date.hour != h:
        if stable & 0x4 == 0:
            date = _add_date(date, 0, 0, 1) - hour
        elif stable & 0x2 == 0:
            date = _add_date(date, 0, 0, 7) - hour
        elif stable == 0:
            date = _add_date(date, 0, 1, 0) - hour
        else:
            date = _add_date(date, 1, 0, 0) - hour
    if stable & 0x4 and date.day != d:
        date = _add_date(date, 0, 1, -1) if stable == 0 else _add_date(date, 1, 0, -1)
    if stable & 0x2 and _weekday(date) != w:
        date = _add_date(date, 0, 1, 0) if stable == 0 else _add_date(date, 1, 0, 0)
        date = first_weekday(date, w)
    if date <= now:
        date = now + timedelta(minutes=1)
    return date


def _hour_minute_match(timer: Timer, now: datetime) -> bool:
    return (timer.hour < 0 or timer.hour == now.hour) and (
        timer.minute < 0 or timer.minute == now.minute
    )


def is_due(timer: Timer, now: datetime) -> bool:
    """Whether the timer should fire at ``now``."""
    if timer.month >= 0 and timer.month != now.month:
        return False
    if timer.day < 0 or timer.day == now.day:
        return _hour_minute_match(timer, now)
    if timer.day == 0 and (timer.week < 0 or timer.week == _weekday(now)):
        return _hour_minute_match(timer, now)
    return False