"""The "绝绝子" sentence generator."""

from __future__ import annotations

import json
from typing import Callable, Sequence

import requests

JUEJUEZI_URL = "https://www.offjuan.com/api/juejuezi/text"
REFERER = "https://juejuezi.offjuan.com/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/96.0.4664.110 Safari/537.36"
)
KEYWORD = "绝绝子"


def build_payload(verb: str, noun: str) -> str:
    """JSON body of the generator request."""
    return json.dumps({"verb": verb, "noun": noun}, ensure_ascii=False, separators=(",", ":"))


def split_input(text: str, segmenter: Callable[[str], Sequence[str]]) -> tuple[str, str]:
    """Verb and noun from a message; longer text is cut into words by ``segmenter``."""
    rest = text.replace(KEYWORD, "")
    if len(rest) < 2:
        raise ValueError("不要只输入绝绝子")
    if len(rest) == 2:
        return rest[0], rest[1]
    words = list(segmenter(rest))
    if len(words) < 2:
        raise ValueError("无法分词")
    return str(words[0]), str(words[1])


def request_text(verb: str, noun: str) -> str:
    """Ask the generator for a sentence; an unreadable answer gives ""."""
    response = requests.post(
        JUEJUEZI_URL,
        data=build_payload(verb, noun).encode("utf-8"),
        headers={"Referer": REFERER, "User-Agent": USER_AGENT},
        timeout=30,
    )
    try:
        parsed = json.loads(response.content)
    except ValueError:
        return ""
    if not isinstance(parsed, dict):
        return ""
    value = parsed.get("text")
    if value is None:
        return ""
    return value if isinstance(value, str) else json.dumps(value, ensure_ascii=False)