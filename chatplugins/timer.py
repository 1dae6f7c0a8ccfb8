"""Group reminder timers with their compact bit-packed schedule."""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from typing import Sequence

_DIGITS = re.compile(r"[0-9]+")
_CHINESE_DIGITS = "零一二三四五六七八九十"

AT_ALL = {"type": "at", "data": {"qq": "all"}}


@dataclass
class Timer:
    """A reminder; ``packed`` holds en(1) month(4) day(5) week(3) hour(5) minute(6)."""

    id: int = 0
    packed: int = 0
    self_id: int = 0
    grp_id: int = 0
    alert: str = ""
    cron: str = ""
    url: str = ""

    @property
    def en(self) -> bool:
        return self.packed & 0x800000 != 0

    @en.setter
    def en(self, value: bool) -> None:
        if value:
            self.packed |= 0x800000
        else:
            self.packed &= 0x7FFFFF

    @property
    def month(self) -> int:
        mon = (self.packed & 0x780000) >> 19
        return -1 if mon == 0b1111 else mon

    @month.setter
    def month(self, value: int) -> None:
        self.packed = ((value << 19) & 0x780000) | (self.packed & 0x87FFFF)

    @property
    def day(self) -> int:
        d = (self.packed & 0x07C000) >> 14
        return -1 if d == 0b11111 else d

    @day.setter
    def day(self, value: int) -> None:
        self.packed = ((value << 14) & 0x07C000) | (self.packed & 0xF83FFF)

    @property
    def week(self) -> int:
        """Weekday with Sunday as 0, or -1 for every week."""
        w = (self.packed & 0x003800) >> 11
        return -1 if w == 0b111 else w

    @week.setter
    def week(self, value: int) -> None:
        self.packed = ((value << 11) & 0x003800) | (self.packed & 0xFFC7FF)

    @property
    def hour(self) -> int:
        h = (self.packed & 0x0007C0) >> 6
        return -1 if h == 0b11111 else h

    @hour.setter
    def hour(self, value: int) -> None:
        self.packed = ((value << 6) & 0x0007C0) | (self.packed & 0xFFF83F)

    @property
    def minute(self) -> int:
        m = self.packed & 0x00003F
        return -1 if m == 0b111111 else m

    @minute.setter
    def minute(self, value: int) -> None:
        self.packed = (value & 0x00003F) | (self.packed & 0xFFFFC0)

    def timer_info(self) -> str:
        """Normalised description used to derive the timer id."""
        if self.cron:
            return f"[{self.grp_id}]{self.cron}"
        return (
            f"[{self.grp_id}]{self.month}月{self.day}日{self.week}周"
            f"{self.hour}:{self.minute}"
        )

    def timer_id(self) -> int:
        digest = hashlib.md5(self.timer_info().encode("utf-8")).digest()
        return int.from_bytes(digest[:4], "little")

    def render(self) -> list[dict]:
        """Message segments sent to the group when the timer fires."""
        segments = [
            {"type": AT_ALL["type"], "data": dict(AT_ALL["data"])},
            {"type": "text", "data": {"text": self.alert}},
        ]
        if self.url:
            segments.append({"type": "image", "data": {"file": self.url, "cache": "0"}})
        return segments


def filled_cron_timer(croncmd: str, alert: str, img: str, botqq: int, gid: int) -> Timer:
    return Timer(self_id=botqq, grp_id=gid, alert=alert, cron=croncmd, url=img)


def filled_timer(
    date_strs: Sequence[str], botqq: int, grp: int, match_date_only: bool
) -> Timer:
    """Build a timer from regex groups; on invalid input ``alert`` says why."""
    month_str = date_strs[1]
    day_week = date_strs[2]
    hour_str = date_strs[3]
    minute_str = date_strs[4]

    t = Timer()
    mon = chinese_num_to_int(month_str)
    if (mon != -1 and mon <= 0) or mon > 12:
        t.alert = "月份非法！"
        return t
    t.month = mon

    if len(day_week) == 4:
        d = chinese_num_to_int(day_week[0] + day_week[2])
        if (d != -1 and d <= 0) or d > 31:
            t.alert = "日期非法1！"
            return t
        t.day = d
    elif day_week[-1] == "日":
        d = chinese_num_to_int(day_week[:-1])
        if (d != -1 and d <= 0) or d > 31:
            t.alert = "日期非法2！"
            return t
        t.day = d
    elif day_week[0] == "每":
        t.week = -1
    else:
        w = chinese_num_to_int(day_week[1:])
        if w == 7:
            w = 0
        if w < 0 or w > 6:
            t.alert = "星期非法！"
            return t
        t.week = w

    if len(hour_str) == 3:
        hour_str = hour_str[0] + hour_str[2]
    h = chinese_num_to_int(hour_str)
    if h < -1 or h > 23:
        t.alert = "小时非法！"
        return t
    t.hour = h

    if len(minute_str) == 3:
        minute_str = minute_str[0] + minute_str[2]
    mn = chinese_num_to_int(minute_str)
    if mn < -1 or mn > 59:
        t.alert = "分钟非法！"
        return t
    t.minute = mn

    if not match_date_only:
        url_str = date_strs[5]
        if url_str:
            t.url = url_str[1:]
            if not t.url.startswith("http"):
                t.url = "illegal"
                return t
        t.alert = date_strs[6]
        t.en = True
    t.self_id = botqq
    t.grp_id = grp
    return t


def chinese_num_to_int(text: str) -> int:
    """Convert -10..99 written in digits or Chinese; "每" is -1, "每二" is -2."""
    if not text:
        raise ValueError("empty number")
    if text[0].isdigit():
        return int(text) if _DIGITS.fullmatch(text) else 0
    if text[0] == "每":
        return -chinese_char_to_int(text[1]) if len(text) == 2 else -1
    if len(text) == 1:
        return chinese_char_to_int(text[0])
    ten = chinese_char_to_int(text[0])
    if ten != 10:
        ten *= 10
    ge = chinese_char_to_int(text[1])
    if ge == 10:
        ge = 0
    return ten + ge


def chinese_char_to_int(c: str) -> int:
    """Map one Chinese numeral to 0..10; 日 and 天 (Sunday) give 7."""
    if c in ("日", "天"):
        return 7
    index = _CHINESE_DIGITS.find(c)
    return index if index >= 0 else 0