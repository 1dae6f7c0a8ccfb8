"""Keyword picture search and the description of a found illustration."""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Mapping
from urllib.parse import quote_plus

import requests

SEARCH_API = "https://api.pixivel.moe/v2/pixiv/illust/search/"
REFERER = "https://pixivel.moe/"
USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/94.0.4606.61 Safari/537.36"
)

_HREF = re.compile(r'<a href=".*">')


def print_tags(tags: Iterable[Mapping[str, Any]]) -> str:
    """Each tag on its own line as "#name (translation)"."""
    parts = []
    for tag in tags:
        line = "\n#" + str(tag.get("name", ""))
        translation = tag.get("translation") or ""
        if translation:
            line += f" ({translation})"
        parts.append(line)
    return "".join(parts)


def clean_description(text: str) -> str:
    """Turn line breaks into newlines and drop links."""
    text = text.replace("<br />", "\n").replace("</a>", "")
    return _HREF.sub("", text)


def search(keyword: str) -> list[dict]:
    """Illustrations matching ``keyword``; an API error raises RuntimeError."""
    url = SEARCH_API + quote_plus(keyword) + "?page=0"
    response = requests.get(
        url, headers={"Referer": REFERER, "User-Agent": USER_AGENT}, timeout=30
    )
    result = json.loads(response.content)
    if result.get("error"):
        raise RuntimeError(result.get("message", ""))
    data = result.get("data") or {}
    return list(data.get("illusts") or [])


def format_illust(illust: Mapping[str, Any], user_name: str, user_id: Any) -> str:
    """Caption sent with a picture."""
    return (
        f"{illust.get('width', 0)}x{illust.get('height', 0)}\n"
        f"标题: {illust.get('title', '')}\n"
        f"副标题: {illust.get('altTitle', '')}\n"
        f"ID: {illust.get('id', 0)}\n"
        f"画师: {user_name} ({user_id})\n"
        f"分级:{illust.get('sanity', 0)}\n"
        f"{clean_description(illust.get('description', '') or '')}"
        f"{print_tags(illust.get('tags') or [])}"
    )