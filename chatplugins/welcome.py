"""Join and leave greetings, and the arithmetic quiz given to newcomers."""

from __future__ import annotations

import random
import re
import sqlite3
from typing import Optional

TABLES = ("welcome", "farewell")

FLAG_VERIFY = 0x1
FLAG_GIST = 0x10

ENABLE_OPTIONS = {"开启", "打开", "启用"}
DISABLE_OPTIONS = {"关闭", "关掉", "禁用"}

_INT = re.compile(r"[+-]?[0-9]+")
_INT64_MASK = 0x7FFF_FFFF_FFFF_FFFF


class WelcomeStore:
    """Per-group greeting templates, one table for joins and one for leaves."""

    def __init__(self, path: str):
        self._db = sqlite3.connect(path)
        for table in TABLES:
            self._db.execute(
                f"CREATE TABLE IF NOT EXISTS {table} (gid INTEGER PRIMARY KEY, msg TEXT)"
            )
        self._db.commit()

    @staticmethod
    def _check_table(table: str) -> str:
        if table not in TABLES:
            raise ValueError(f"unknown table: {table!r}")
        return table

    def set_message(self, table: str, gid: int, msg: str) -> None:
        table = self._check_table(table)
        self._db.execute(
            f"INSERT OR REPLACE INTO {table} (gid, msg) VALUES (?, ?)", (gid, msg)
        )
        self._db.commit()

    def get_message(self, table: str, gid: int) -> str:
        """The stored template; raises KeyError when the group has none."""
        table = self._check_table(table)
        row = self._db.execute(f"SELECT msg FROM {table} WHERE gid = ?", (gid,)).fetchone()
        if row is None:
            raise KeyError(gid)
        return row[0]

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> "WelcomeStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def welcome_to_cq(template: str, uid: int, nickname: str, gid: int, group_name: str) -> str:
    """Fill the {at} {nickname} {avatar} {uid} {gid} {groupname} placeholders."""
    uid_text = str(uid)
    replacements = [
        ("{at}", f"[CQ:at,qq={uid_text}]"),
        ("{nickname}", nickname),
        ("{avatar}", f"[CQ:image,file=http://q4.qlogo.cn/g?b=qq&nk={uid_text}&s=640]"),
        ("{uid}", uid_text),
        ("{gid}", str(gid)),
        ("{groupname}", group_name),
    ]
    result = template
    for placeholder, value in replacements:
        result = result.replace(placeholder, value)
    return result


def make_quiz(rng: Optional[random.Random], nickname: str) -> tuple[str, int]:
    """A sum question for a newcomer and its answer."""
    rng = rng or random.Random()
    a = rng.randrange(100)
    b = rng.randrange(100)
    question = (
        f"考你一道题：{a}+{b}=?\n"
        f"如果60秒之内答不上来，{nickname}就要把你踢出去了哦~"
    )
    return question, a + b


def check_answer(text: str, expected: int) -> Optional[bool]:
    """True if correct, False if a wrong number, None if the text is no number."""
    cleaned = text.replace(" ", "")
    if not _INT.fullmatch(cleaned):
        return None
    return int(cleaned) == expected


def toggle_flag(data: int, option: str, bit: int) -> int:
    """Set or clear ``bit`` in a group's plugin data according to ``option``."""
    if option in ENABLE_OPTIONS:
        return data | bit
    if option in DISABLE_OPTIONS:
        return data & ~bit & _INT64_MASK
    raise ValueError(f"unknown option: {option!r}")