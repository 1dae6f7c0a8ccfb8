"""Per-group collections of "wife" pictures and the daily draw."""

from __future__ import annotations

import hashlib
import os
import random
from datetime import date
from typing import Union

_DIGITS36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def group_folder_name(gid: int) -> str:
    """The group number written in lower-case base 36."""
    if gid == 0:
        return "0"
    sign = "-" if gid < 0 else ""
    n = abs(gid)
    digits = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_DIGITS36[r])
    return sign + "".join(reversed(digits))


def clean_name(text: str, prefix: str) -> str:
    """The name following the last ``prefix``, without spaces or slashes."""
    text = text.replace(" ", "")
    index = text.rfind(prefix)
    if index < 0:
        raise ValueError(f"missing {prefix!r}")
    name = text[index + len(prefix):].replace("/", "").replace("\\", "")
    if not name:
        raise ValueError("没有找到wife的名字！")
    return name


class WifeGallery:
    """Pictures stored as ``base/<group in base 36>/<name>``."""

    def __init__(self, base: str):
        self.base = base

    def _folder(self, gid: int) -> str:
        return os.path.join(self.base, group_folder_name(gid))

    def list_wives(self, gid: int) -> list[str]:
        try:
            return sorted(os.listdir(self._folder(gid)))
        except FileNotFoundError:
            return []

    def draw(self, gid: int, nickname: str, today: Union[date, None] = None) -> str:
        """The wife of ``nickname`` for the day; raises LookupError if none exist."""
        wives = self.list_wives(gid)
        if not wives:
            raise LookupError("一个wife也没有哦~")
        if len(wives) == 1:
            return wives[0]
        today = today or date.today()
        key = f"{nickname}{today.year}{today.month}{today.day}".encode("utf-8")
        seed = int.from_bytes(hashlib.md5(key).digest()[:8], "little")
        return wives[random.Random(seed).randrange(len(wives))]

    def add(self, gid: int, name: str, data: bytes) -> str:
        """Store a picture under ``name``; returns its path."""
        folder = self._folder(gid)
        os.makedirs(folder, exist_ok=True)
        path = os.path.join(folder, name)
        with open(path, "wb") as f:
            f.write(data)
        return path

    def remove(self, gid: int, name: str) -> None:
        """Delete a picture; raises FileNotFoundError if it is not there."""
        os.remove(os.path.join(self._folder(gid), name))