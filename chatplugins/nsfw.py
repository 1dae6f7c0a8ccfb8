"""Turning image classifier scores into a short verdict."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

HSO = "https://gchat.qpic.cn/gchatpic_new//--4234EDEC5F147A4C319A41149D7E0EA9/0"
THRESHOLD = 0.3


@dataclass(frozen=True)
class Scores:
    drawings: float = 0.0
    hentai: float = 0.0
    neutral: float = 0.0
    porn: float = 0.0
    sexy: float = 0.0


def _tags(p: Scores) -> list[str]:
    return [
        tag
        for tag, score in (("hentai", p.hentai), ("porn", p.porn), ("hso", p.sexy))
        if score > THRESHOLD
    ]


def judge(p: Scores) -> str:
    """Verdict for a picture someone asked to be rated."""
    if p.neutral > THRESHOLD:
        return "普通哦"
    kind = "二次元" if p.drawings > THRESHOLD or p.neutral < THRESHOLD else "三次元"
    return "".join([kind, *(" " + t for t in _tags(p))])


def auto_judge(p: Scores) -> Optional[str]:
    """Verdict for an unprompted picture, or None when nothing is worth saying."""
    if p.neutral > THRESHOLD:
        return None
    tags = _tags(p)
    if not tags:
        return None
    kind = "二次元" if p.drawings > THRESHOLD else "三次元"
    return "".join([kind, *(" " + t for t in tags)])