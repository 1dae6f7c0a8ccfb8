"""Collecting and serving pictures from the jandan.net picture board."""

from __future__ import annotations

import re
import sqlite3
import threading
from dataclasses import dataclass, field
from typing import Callable, Optional

import lxml.html

API = "http://jandan.net/pic"

_POLY_ISO_REVERSED = 0xD800000000000000
_MASK64 = 0xFFFFFFFFFFFFFFFF
_NUMBER = re.compile(r"\d+")


def _make_table() -> list[int]:
    table = []
    for i in range(256):
        crc = i
        for _ in range(8):
            crc = (crc >> 1) ^ _POLY_ISO_REVERSED if crc & 1 else crc >> 1
        table.append(crc)
    return table


_TABLE = _make_table()


def crc64_iso(data: bytes) -> int:
    """CRC-64 with the ISO polynomial, inverted before and after."""
    crc = _MASK64
    for byte in data:
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK64


def _signed(value: int) -> int:
    return value - (1 << 64) if value >= 1 << 63 else value


class PictureStore:
    """Picture URLs keyed by the CRC-64 of the URL."""

    def __init__(self, path: str):
        self._lock = threading.RLock()
        self._db = sqlite3.connect(path, check_same_thread=False)
        self._db.execute("CREATE TABLE IF NOT EXISTS picture (id INTEGER PRIMARY KEY, url TEXT)")
        self._db.commit()

    def random_url(self) -> str:
        """A random stored URL; raises LookupError when the store is empty."""
        with self._lock:
            row = self._db.execute(
                "SELECT url FROM picture ORDER BY RANDOM() LIMIT 1"
            ).fetchone()
        if row is None:
            raise LookupError("no pictures")
        return row[0]

    def contains(self, pid: int) -> bool:
        with self._lock:
            row = self._db.execute(
                "SELECT 1 FROM picture WHERE id = ?", (_signed(pid),)
            ).fetchone()
        return row is not None

    def insert(self, pid: int, url: str) -> None:
        with self._lock:
            self._db.execute(
                "INSERT OR REPLACE INTO picture (id, url) VALUES (?, ?)", (_signed(pid), url)
            )
            self._db.commit()

    def count(self) -> int:
        with self._lock:
            return self._db.execute("SELECT COUNT(*) FROM picture").fetchone()[0]

    def close(self) -> None:
        with self._lock:
            self._db.close()

    def __enter__(self) -> "PictureStore":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


@dataclass
class Page:
    """What one board page holds."""

    current: Optional[int]
    pictures: list[str] = field(default_factory=list)
    previous: Optional[str] = None


def scrape_page(html: str) -> Page:
    """Current page number, picture URLs and the link to the previous page."""
    doc = lxml.html.document_fromstring(html)
    current = None
    texts = doc.xpath(
        "//*[@id='comments']/div[2]/div/span[@class='current-comment-page']/text()"
    )
    if texts:
        found = _NUMBER.search(str(texts[0]))
        if found:
            current = int(found.group())
    pictures = [
        "https:" + (a.get("href") or "") for a in doc.xpath("//*[@class='view_img_link']")
    ]
    previous = None
    links = doc.xpath(
        "//*[@id='comments']/div[@class='comments']/div[@class='cp-pagenavi']"
        "/a[@class='previous-comment-page']"
    )
    if links and links[0].get("href"):
        previous = "https:" + links[0].get("href")
    return Page(current, pictures, previous)


def update(store: PictureStore, fetch: Callable[[str], str]) -> int:
    """Walk back through the board until a known picture; returns how many were added."""
    url = API
    first = scrape_page(fetch(url))
    if first.current is None:
        raise ValueError("page number not found")
    total = first.current
    added = 0
    for i in range(total):
        page = scrape_page(fetch(url))
        for picture in page.pictures:
            pid = crc64_iso(picture.encode("utf-8"))
            if store.contains(pid):
                return added
            store.insert(pid, picture)
            added += 1
        if i != total - 1:
            if page.previous is None:
                raise ValueError("previous page link not found")
            url = page.previous
    return added