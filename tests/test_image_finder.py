import json
from unittest import mock

import pytest

from chatplugins import image_finder


class _Response:
    def __init__(self, payload):
        self.content = json.dumps(payload).encode()
        self.status_code = 200


def test_print_tags():
    tags = [{"name": "a", "translation": ""}, {"name": "b", "translation": "c"}]
    assert image_finder.print_tags(tags) == "\n#a\n#b (c)"


def test_print_tags_empty():
    assert image_finder.print_tags([]) == ""


def test_clean_description():
    text = 'one<br />two <a href="x">link</a>'
    assert image_finder.clean_description(text) == "one\ntwo link"


def test_format_illust():
    illust = {
        "id": 5, "title": "T", "altTitle": "A", "width": 10, "height": 20,
        "sanity": 2, "description": "d<br />e",
        "tags": [{"name": "tag", "translation": "tr"}],
    }
    text = image_finder.format_illust(illust, "artist", 99)
    assert text.startswith("10x20\n标题: T\n副标题: A\nID: 5\n")
    assert "画师: artist (99)\n" in text
    assert text.endswith("分级:2\nd\ne\n#tag (tr)")


def test_search_returns_illusts():
    payload = {"error": False, "message": "", "data": {"illusts": [{"id": 1}, {"id": 2}]}}
    with mock.patch("requests.get", return_value=_Response(payload)) as get:
        illusts = image_finder.search("猫 耳")
    assert [i["id"] for i in illusts] == [1, 2]
    assert get.call_args.args[0].endswith("?page=0")
    assert " " not in get.call_args.args[0]


def test_search_error():
    payload = {"error": True, "message": "rate limited"}
    with mock.patch("requests.get", return_value=_Response(payload)):
        with pytest.raises(RuntimeError, match="rate limited"):
            image_finder.search("x")