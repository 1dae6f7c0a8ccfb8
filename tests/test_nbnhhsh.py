import json
from unittest import mock

import requests

from chatplugins import nbnhhsh


def test_translations_are_preferred():
    data = json.dumps([{"name": "yyds", "trans": ["永远的神", "永远单身"], "inputting": ["x"]}])
    assert nbnhhsh.guesses_from_json(data) == ["永远的神", "永远单身"]


def test_inputting_used_without_trans():
    data = json.dumps([{"name": "abc", "inputting": ["甲", "乙"]}]).encode("utf-8")
    assert nbnhhsh.guesses_from_json(data) == ["甲", "乙"]


def test_missing_fields_give_nothing():
    assert nbnhhsh.guesses_from_json(json.dumps([{"name": "q"}])) == []


def test_invalid_json_gives_nothing():
    assert nbnhhsh.guesses_from_json(b"<html>") == []
    assert nbnhhsh.guesses_from_json("[]") == []


def test_guess_posts_form_and_parses():
    response = mock.Mock()
    response.content = json.dumps([{"trans": ["好好说话"]}]).encode("utf-8")
    with mock.patch("chatplugins.nbnhhsh.requests.post", return_value=response) as post:
        result = nbnhhsh.guess("hhsh")
    assert result == ["好好说话"]
    args, kwargs = post.call_args
    assert args[0] == nbnhhsh.API
    assert kwargs["data"] == {"text": "hhsh"}


def test_guess_reports_connection_error():
    with mock.patch(
        "chatplugins.nbnhhsh.requests.post",
        side_effect=requests.ConnectionError("boom"),
    ):
        assert nbnhhsh.guess("hhsh") == ["boom"]