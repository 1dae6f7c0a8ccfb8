"""Searching GitHub repositories and describing the best match."""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

import requests

SEARCH_API = "https://api.github.com/search/repositories"
OPENGRAPH = "https://opengraph.githubassets.com/0/"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/88.0.4324.182 Safari/537.36"
)

_COMMAND = re.compile(r"^>github\s(-.{1,10}? )?(.*)$", re.DOTALL)


def not_null(text: str, default: str) -> str:
    """``text`` unless it is empty, then ``default``."""
    return text if text else default


def parse_command(text: str) -> tuple[str, str]:
    """Split ">github [-x ]query" into (flag, query); raises ValueError otherwise."""
    match = _COMMAND.match(text)
    if match is None:
        raise ValueError(f"not a github command: {text!r}")
    return match.group(1) or "", match.group(2)


def net_get(dest: str, headers: Optional[Mapping[str, str]] = None) -> bytes:
    """GET ``dest`` and return the body; any status but 200 raises RuntimeError."""
    response = requests.get(dest, headers=dict(headers or {}), timeout=30)
    body = response.content
    if response.status_code != 200:
        raise RuntimeError(f"code {response.status_code}")
    return body


def search_repositories(query: str) -> dict:
    """The top repository for ``query``; raises LookupError when there is none."""
    url = SEARCH_API + "?" + urlencode({"q": query})
    body = net_get(url, {"User-Agent": USER_AGENT})
    info = json.loads(body)
    if not int(info.get("total_count") or 0):
        raise LookupError("没有找到这样的仓库")
    return info["items"][0]


def _str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _int(value: Any) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        return 0


def describe_repo(repo: Mapping[str, Any]) -> str:
    """Text summary of a repository as returned by the search API."""
    license_info = repo.get("license") or {}
    license_key = _str(license_info.get("key") if isinstance(license_info, Mapping) else "")
    return (
        f"{_str(repo.get('full_name'))}\n"
        f"Description: {_str(repo.get('description'))}\n"
        f"Star/Fork/Issue: {_int(repo.get('watchers'))}/{_int(repo.get('forks'))}"
        f"/{_int(repo.get('open_issues'))}\n"
        f"Language: {not_null(_str(repo.get('language')), 'None')}\n"
        f"License: {not_null(license_key.upper(), 'None')}\n"
        f"Last pushed: {_str(repo.get('pushed_at'))}\n"
        f"Jump: {_str(repo.get('html_url'))}\n"
    )


def opengraph_url(full_name: str) -> str:
    """Social preview picture of a repository."""
    return OPENGRAPH + full_name