"""Daily slacker's reminder: days until the weekend and the public holidays."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Union

HOLIDAY_NAMES = ("元旦", "春节", "清明节", "劳动节", "端午节", "中秋节", "国庆节")

GREETING = (
    "上午好，摸鱼人！\n工作再累，一定不要忘记摸鱼哦！有事没事起身去茶水间，去厕所，"
    "去廊道走走别老在工位上坐着，钱是老板的,但命是自己的。\n"
)
CLOSING = "上班是帮老板赚钱，摸鱼是赚老板的钱！最后，祝愿天下所有摸鱼人，都能愉快的渡过每一天…"

_RECORD = re.compile(
    r"\s*([+-]?\d+)(?:_([+-]?\d+)(?:_([+-]?\d+)(?:_([+-]?\d+))?)?)?"
)


def _local_date(year: int, month: int, day: int) -> datetime:
    """Midnight of the given date, with month and day carrying over."""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    if not 1 <= year <= 9999:
        return datetime.min
    try:
        return datetime(year, month, 1) + timedelta(days=day - 1)
    except OverflowError:
        return datetime.min


@dataclass
class Holiday:
    name: str
    date: datetime
    duration: timedelta = timedelta(0)

    def describe(self, now: datetime) -> str:
        d = self.date - now
        if d >= timedelta(0):
            days = d.total_seconds() / 86400
            return f"距离{self.name}还有: {days:.2f}天！"
        if d + self.duration >= timedelta(0):
            return f"好好享受 {self.name} 假期吧!"
        return f"今年 {self.name} 假期已过"


def parse_holiday(name: str, record: str) -> Holiday:
    """Parse a "days_year_month_day" record; unread fields count as zero."""
    values = [0, 0, 0, 0]
    match = _RECORD.match(record)
    if match:
        values = [int(g) if g is not None else 0 for g in match.groups()]
    dur, year, month, day = values
    return Holiday(name, _local_date(year, month, day), timedelta(days=dur))


def weekend_message(today: Union[date, datetime]) -> str:
    weekday = (today.weekday() + 1) % 7  # Sunday is 0
    if weekday in (0, 6):
        return "好好享受周末吧！"
    return f"距离周末还有:{5 - weekday}天！"


def daily_message(holidays: Iterable[Holiday], now: datetime) -> str:
    """The full reminder text for ``now``."""
    parts = [now.strftime("%Y-%m-%d"), GREETING, weekend_message(now)]
    for holiday in holidays:
        parts.append("\n")
        parts.append(holiday.describe(now))
    parts.append("\n")
    parts.append(CLOSING)
    return "".join(parts)