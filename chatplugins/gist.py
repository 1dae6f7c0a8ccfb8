"""Approving join requests by a timestamp posted to a GitHub gist."""

from __future__ import annotations

import hashlib
import re
import sqlite3
import time
from typing import Callable, Optional, Union

import requests

GIST_RAW = "https://gist.githubusercontent.com/{}/{}/raw/{}"
ANSWER_MARK = "答案："
VALID_SECONDS = 600

_INT = re.compile(r"[+-]?[0-9]+")


class MemberStore:
    """Members who joined through a gist, keyed by QQ number."""

    def __init__(self, path: str):
        self._db = sqlite3.connect(path)
        self._db.execute(
            "CREATE TABLE IF NOT EXISTS member (qq INTEGER PRIMARY KEY, ghun TEXT)"
        )
        self._db.commit()

    def has_github_user(self, ghun: str) -> bool:
        row = self._db.execute("SELECT 1 FROM member WHERE ghun = ?", (ghun,)).fetchone()
        return row is not None

    def add(self, qq: int, ghun: str) -> None:
        self._db.execute(
            "INSERT OR REPLACE INTO member (qq, ghun) VALUES (?, ?)", (qq, ghun)
        )
        self._db.commit()

    def close(self) -> None:
        self._db.close()

    def __enter__(self) -> "MemberStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def gist_url(ghun: str, hash: str, gid: int) -> str:
    """Raw URL of the gist file named after the md5 of the group number."""
    name = hashlib.md5(str(gid).encode("ascii")).hexdigest()
    return GIST_RAW.format(ghun, hash, name)


def parse_join_answer(comment: str) -> tuple[str, str]:
    """Split the join answer "username/gisthash"; raises ValueError if malformed."""
    start = comment.find(ANSWER_MARK)
    if start < 0:
        raise ValueError("格式错误!")
    answer = comment[start + len(ANSWER_MARK):]
    divider = answer.find("/")
    if divider <= 0:
        raise ValueError("格式错误!")
    return answer[:divider], answer[divider + 1:]


def _http_fetch(url: str) -> bytes:
    response = requests.get(url, timeout=30)
    response.raise_for_status()
    return response.content


def check_new_user(
    store: MemberStore,
    qq: int,
    gid: int,
    ghun: str,
    hash: str,
    fetch: Callable[[str], Union[bytes, str]] = _http_fetch,
    now: Optional[float] = None,
) -> tuple[bool, str]:
    """Verify the gist timestamp; on success record the member. Returns (ok, reason)."""
    if store.has_github_user(ghun):
        return False, "该github用户已入群"
    try:
        data = fetch(gist_url(ghun, hash, gid))
    except OSError as exc:
        return False, "无法连接到gist: " + str(exc)
    text = data.decode("utf-8", "replace") if isinstance(data, bytes) else data
    if not _INT.fullmatch(text):
        return False, "时间戳格式错误: " + text
    stamp = int(text)
    current = int(time.time() if now is None else now)
    if abs(current - stamp) < VALID_SECONDS:
        store.add(qq, ghun)
        return True, ""
    return False, "时间戳超时"