"""Guessing what an abbreviation made of pinyin initials stands for."""

from __future__ import annotations

import json
from typing import Any, Union

import requests

API = "https://lab.magiconch.com/api/nbnhhsh/guess"


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def guesses_from_json(data: Union[bytes, str]) -> list[str]:
    """Pick the translations, or failing that the candidates being collected."""
    try:
        parsed = json.loads(data)
    except (ValueError, TypeError):
        return []
    if not isinstance(parsed, list) or not parsed or not isinstance(parsed[0], dict):
        return []
    first = parsed[0]
    value = first["trans"] if "trans" in first else first.get("inputting")
    if value is None:
        return []
    if isinstance(value, list):
        return [_as_text(v) for v in value]
    return [_as_text(value)]


def guess(text: str) -> list[str]:
    """Ask the service; on failure the only entry is the error message."""
    try:
        response = requests.post(API, data={"text": text}, timeout=30)
        body = response.content
    except requests.RequestException as exc:
        return [str(exc)]
    return guesses_from_json(body)