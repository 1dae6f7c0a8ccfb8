"""Hearthstone card search and deck images from the fbigame card database."""

from __future__ import annotations

import json

import requests

SITE = "https://hs.fbigame.com"
AJAX = "https://hs.fbigame.com/ajax.php?"
PARAMS = (
    "mod=get_cards_list&"
    "mode=-1&"
    "extend=-1&"
    "mutil_extend=&"
    "hero=-1&"
    "rarity=-1&"
    "cost=-1&"
    "mutil_cost=&"
    "techlevel=-1&"
    "type=-1&"
    "collectible=-1&"
    "isbacon=-1&"
    "page=1&"
    "search_type=1&"
    "deckmode=normal"
)
USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/86.0.4240.198 Mobile Safari/537.36"
)
_HASH_MARK = 'var hash = "'


def _get(url: str) -> bytes:
    response = requests.get(
        url, headers={"Referer": SITE, "User-Agent": USER_AGENT}, timeout=30
    )
    response.raise_for_status()
    return response.content


def extract_hash(page: str) -> str:
    """The request hash embedded in the site's front page."""
    _, found, rest = page.partition(_HASH_MARK)
    if not found:
        raise ValueError("hash not found in page")
    return rest.split('"', 1)[0]


def search_url(page_hash: str, keyword: str) -> str:
    return AJAX + PARAMS + "&hash=" + page_hash + "&search=" + keyword


def deck_url(page_hash: str, code: str) -> str:
    return (
        AJAX + PARAMS + "mod=general_deck_image&deck_code=" + code
        + "&deck_text=&hash=" + page_hash + "&search=" + code
    )


def _front_hash() -> str:
    return extract_hash(_get(SITE).decode("utf-8", "replace"))


def search_cards(keyword: str) -> list[dict]:
    """Cards matching ``keyword``; each holds at least CardID and auth_key."""
    body = _get(search_url(_front_hash(), keyword))
    parsed = json.loads(body)
    if not isinstance(parsed, dict):
        return []
    cards = parsed.get("list")
    return list(cards) if isinstance(cards, list) else []


def deck_image(code: str) -> str:
    """The deck picture for a deck code, as a base64:// URI."""
    body = _get(deck_url(_front_hash(), code))
    parsed = json.loads(body)
    image = parsed.get("img") if isinstance(parsed, dict) else None
    return "base64://" + (image if isinstance(image, str) else "")