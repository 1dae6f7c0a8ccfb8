import pytest

from chatplugins import jandan


def _page(number, pictures, previous=None):
    links = "".join(f'<a class="view_img_link" href="{p}">view</a>' for p in pictures)
    nav = f'<a class="previous-comment-page" href="{previous}">prev</a>' if previous else ""
    return (
        "<html><body><div id='comments'><div>top</div>"
        f"<div><div><span class='current-comment-page'>[{number}]</span></div></div>"
        f"<div class='comments'><div class='cp-pagenavi'>{nav}</div></div>"
        f"{links}</div></body></html>"
    )


def test_crc64_check_value():
    assert jandan.crc64_iso(b"123456789") == 0xB90956C775A41001
    assert jandan.crc64_iso(b"") == 0


def test_store_round_trip(tmp_path):
    with jandan.PictureStore(str(tmp_path / "pics.db")) as store:
        big = (1 << 64) - 5
        store.insert(big, "https://example.com/a.jpg")
        assert store.contains(big)
        assert not store.contains(1)
        assert store.count() == 1
        assert store.random_url() == "https://example.com/a.jpg"


def test_store_empty_raises(tmp_path):
    with jandan.PictureStore(str(tmp_path / "pics.db")) as store:
        with pytest.raises(LookupError):
            store.random_url()


def test_scrape_page():
    page = jandan.scrape_page(_page(7, ["//img.example.com/1.jpg"], "//jandan.net/pic/page-6"))
    assert page.current == 7
    assert page.pictures == ["https://img.example.com/1.jpg"]
    assert page.previous == "https://jandan.net/pic/page-6"


def test_update_walks_pages(tmp_path):
    pages = {
        jandan.API: _page(2, ["//img.example.com/1.jpg", "//img.example.com/2.jpg"],
                          "//jandan.net/pic/page-1"),
        "https://jandan.net/pic/page-1": _page(1, ["//img.example.com/3.jpg"]),
    }
    calls = []

    def fetch(url):
        calls.append(url)
        return pages[url]

    with jandan.PictureStore(str(tmp_path / "pics.db")) as store:
        assert jandan.update(store, fetch) == 3
        assert store.count() == 3
        assert calls[-1] == "https://jandan.net/pic/page-1"
        assert jandan.update(store, fetch) == 0
        assert store.count() == 3


def test_update_stops_at_known_picture(tmp_path):
    pictures = ["//img.example.com/new.jpg", "//img.example.com/old.jpg",
                "//img.example.com/later.jpg"]
    html = _page(1, pictures)
    with jandan.PictureStore(str(tmp_path / "pics.db")) as store:
        old = "https://img.example.com/old.jpg"
        store.insert(jandan.crc64_iso(old.encode()), old)
        assert jandan.update(store, lambda url: html) == 1
        assert not store.contains(jandan.crc64_iso(b"https://img.example.com/later.jpg"))


def test_update_without_page_number(tmp_path):
    with jandan.PictureStore(str(tmp_path / "pics.db")) as store:
        with pytest.raises(ValueError):
            jandan.update(store, lambda url: "<html><body></body></html>")