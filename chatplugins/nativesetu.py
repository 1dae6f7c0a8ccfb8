"""A local picture library: one table per folder, keyed by difference hash."""

from __future__ import annotations

import io
import os
import sqlite3
import threading
from dataclasses import dataclass

from PIL import Image

IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".gif", ".webp")


@dataclass(frozen=True)
class SetuImage:
    imgid: int
    name: str
    path: str


def _quote(name: str) -> str:
    return '"' + name.replace('"', '""') + '"'


def is_image_name(name: str) -> bool:
    return name.lower().endswith(IMAGE_SUFFIXES)


def difference_hash(image: Image.Image) -> int:
    """64-bit difference hash of a 9x8 grey thumbnail, as a signed integer."""
    small = image.convert("RGBA").convert("RGBa").resize((9, 8), Image.BILINEAR)
    px = small.load()
    value = 0
    for y in range(8):
        row = [
            0.299 * px[x, y][0] + 0.587 * px[x, y][1] + 0.114 * px[x, y][2]
            for x in range(9)
        ]
        for left, right in zip(row, row[1:]):
            value = (value << 1) | (1 if left < right else 0)
    return value - (1 << 64) if value >= 1 << 63 else value


class SetuLibrary:
    """Pictures found under a root folder, grouped by the folder they sit in."""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._lock = threading.RLock()
        self._db = sqlite3.connect(db_path, check_same_thread=False)

    def _create(self, name: str) -> None:
        self._db.execute(
            f"CREATE TABLE IF NOT EXISTS {_quote(name)} "
            "(imgid INTEGER PRIMARY KEY, name TEXT, path TEXT)"
        )
        self._db.commit()

    def list_classes(self) -> list[str]:
        with self._lock:
            rows = self._db.execute(
                "SELECT name FROM sqlite_master WHERE type = 'table'"
            ).fetchall()
        return [r[0] for r in rows]

    def scan_all(self, root: str) -> None:
        """Rebuild the whole library from the folders below ``root``."""
        with self._lock:
            self._db.close()
            if os.path.exists(self.db_path):
                os.remove(self.db_path)
            self._db = sqlite3.connect(self.db_path, check_same_thread=False)
        for dirpath, dirnames, _ in os.walk(root):
            dirnames.sort()
            rel = os.path.relpath(dirpath, root)
            if rel == ".":
                continue
            name = os.path.basename(dirpath)
            with self._lock:
                self._create(name)
            self.scan_class(root, rel.replace(os.sep, "/"), name)

    def scan_class(self, root: str, path: str, name: str) -> None:
        """Refill table ``name`` from the pictures directly in ``root/path``."""
        folder = os.path.join(root, path)
        entries = sorted(os.scandir(folder), key=lambda e: e.name)
        with self._lock:
            self._db.execute(f"DROP TABLE IF EXISTS {_quote(name)}")
            self._create(name)
        for entry in entries:
            if entry.is_dir() or not is_image_name(entry.name):
                continue
            relpath = path + "/" + entry.name
            with open(os.path.join(root, relpath), "rb") as f:
                data = f.read()
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                imgid = difference_hash(img)
            with self._lock:
                self._db.execute(
                    f"INSERT OR REPLACE INTO {_quote(name)} (imgid, name, path) VALUES (?, ?, ?)",
                    (imgid, entry.name, relpath),
                )
                self._db.commit()

    def pick(self, name: str) -> SetuImage:
        """A random picture of class ``name``; raises LookupError if there is none."""
        try:
            with self._lock:
                row = self._db.execute(
                    f"SELECT imgid, name, path FROM {_quote(name)} ORDER BY RANDOM() LIMIT 1"
                ).fetchone()
        except sqlite3.OperationalError as exc:
            raise LookupError(name) from exc
        if row is None:
            raise LookupError(name)
        return SetuImage(*row)

    def count(self, name: str) -> int:
        try:
            with self._lock:
                return self._db.execute(f"SELECT COUNT(*) FROM {_quote(name)}").fetchone()[0]
        except sqlite3.OperationalError as exc:
            raise LookupError(name) from exc

    def close(self) -> None:
        with self._lock:
            self._db.close()

    def __enter__(self) -> "SetuLibrary":
        return self

    def __exit__(self, *exc) -> None:
        self.close()