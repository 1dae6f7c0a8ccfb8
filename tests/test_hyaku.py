import csv

import pytest

from chatplugins.hyaku import Poem, get_poem, image_urls, load_poems

HEADER = ["番号", "歌人", "上の句", "下の句", "上の句ひらがな", "下の句ひらがな"]


def _write(path, rows):
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(HEADER)
        writer.writerows(rows)


def _rows(n=100):
    return [[str(i), f"poet{i}", f"u{i}", f"l{i}", f"uk{i}", f"lk{i}"] for i in range(1, n + 1)]


def test_load_poems(tmp_path):
    path = tmp_path / "hyaku.csv"
    _write(path, _rows())
    poems = load_poems(str(path))
    assert len(poems) == 100
    assert poems[41].poet == "poet42"


def test_load_rejects_wrong_count(tmp_path):
    path = tmp_path / "hyaku.csv"
    _write(path, _rows(99))
    with pytest.raises(ValueError):
        load_poems(str(path))


def test_load_rejects_out_of_order(tmp_path):
    rows = _rows()
    rows[0], rows[1] = rows[1], rows[0]
    path = tmp_path / "hyaku.csv"
    _write(path, rows)
    with pytest.raises(ValueError):
        load_poems(str(path))


def test_load_rejects_short_row(tmp_path):
    rows = _rows()
    rows[5] = rows[5][:5]
    path = tmp_path / "hyaku.csv"
    _write(path, rows)
    with pytest.raises(ValueError):
        load_poems(str(path))


def test_poem_str():
    poem = Poem("1", "p", "a", "b", "c", "d")
    lines = str(poem).splitlines()
    assert lines[0] == "●番号：1"
    assert lines[1] == "◉歌人：p"
    assert lines[2] == "○上の句：a"
    assert lines[5] == "◎下の句ひらがな：d"
    assert str(poem).endswith("\n")


def test_image_urls():
    jpg, png = image_urls(7)
    assert jpg.endswith("img/007.jpg")
    assert png.endswith("img/007.png")


def test_get_poem(tmp_path):
    path = tmp_path / "hyaku.csv"
    _write(path, _rows())
    poems = load_poems(str(path))
    assert get_poem(poems, 1).number == "1"
    assert get_poem(poems, 100).number == "100"
    with pytest.raises(ValueError):
        get_poem(poems, 0)
    with pytest.raises(ValueError):
        get_poem(poems, 101)