"""The Ogura Hyakunin Isshu: one hundred poems by one hundred poets."""

from __future__ import annotations

import csv
import os
from dataclasses import astuple, dataclass

BED = os.environ.get("HYAKU_BASE", "https://example.com/OguraHyakuninIsshu/")
POEM_COUNT = 100

_LABELS = (
    ("●", "番号"),
    ("◉", "歌人"),
    ("○", "上の句"),
    ("○", "下の句"),
    ("◎", "上の句ひらがな"),
    ("◎", "下の句ひらがな"),
)


@dataclass(frozen=True)
class Poem:
    number: str
    poet: str
    upper: str
    lower: str
    upper_kana: str
    lower_kana: str

    def __str__(self) -> str:
        return "".join(
            f"{mark}{label}：{value}\n"
            for (mark, label), value in zip(_LABELS, astuple(self))
        )


def load_poems(path: str) -> list[Poem]:
    """Read the CSV (with a header row); raises ValueError if it is malformed."""
    with open(path, newline="", encoding="utf-8") as f:
        records = list(csv.reader(f))[1:]
    if len(records) != POEM_COUNT:
        raise ValueError("invalid csvfile")
    poems = []
    for expected, record in enumerate(records, 1):
        if len(record) != 6:
            raise ValueError("invalid csvfile")
        if int(record[0]) != expected:
            raise ValueError("invalid csvfile")
        poems.append(Poem(*record))
    return poems


def image_urls(number: int) -> tuple[str, str]:
    """The card picture and the calligraphy picture of poem ``number``."""
    return f"{BED}img/{number:03d}.jpg", f"{BED}img/{number:03d}.png"


def get_poem(poems: list[Poem], number: int) -> Poem:
    """Poem by its 1-based number; raises ValueError outside 1..100."""
    if number > POEM_COUNT or number < 1:
        raise ValueError("超出范围")
    return poems[number - 1]