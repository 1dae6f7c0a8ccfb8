import pytest
from PIL import Image

from chatplugins.nativesetu import SetuLibrary, difference_hash, is_image_name


def _gradient(increasing: bool) -> Image.Image:
    img = Image.new("L", (90, 8))
    for x in range(90):
        v = x * 2 if increasing else 255 - x * 2
        for y in range(8):
            img.putpixel((x, y), v)
    return img


@pytest.fixture
def root(tmp_path):
    base = tmp_path / "pics"
    (base / "cats").mkdir(parents=True)
    (base / "dogs").mkdir()
    _gradient(True).save(base / "cats" / "a.png")
    _gradient(False).save(base / "cats" / "b.PNG")
    (base / "cats" / "notes.txt").write_text("not a picture")
    _gradient(True).save(base / "dogs" / "c.png")
    return base


def test_is_image_name():
    assert is_image_name("x.JPEG")
    assert is_image_name("y.webp")
    assert not is_image_name("z.txt")


def test_difference_hash_gradients():
    assert difference_hash(_gradient(True)) == -1
    assert difference_hash(_gradient(False)) == 0
    assert difference_hash(Image.new("RGB", (20, 20), (50, 60, 70))) == 0


def test_scan_all_and_pick(tmp_path, root):
    with SetuLibrary(str(tmp_path / "data.db")) as lib:
        lib.scan_all(str(root))
        assert lib.list_classes() == ["cats", "dogs"]
        assert lib.count("cats") == 2
        assert lib.count("dogs") == 1
        picked = lib.pick("dogs")
        assert picked.path == "dogs/c.png"
        assert picked.name == "c.png"
        assert lib.pick("cats").path in {"cats/a.png", "cats/b.PNG"}


def test_scan_class_refreshes(tmp_path, root):
    with SetuLibrary(str(tmp_path / "data.db")) as lib:
        lib.scan_all(str(root))
        (root / "cats" / "b.PNG").unlink()
        lib.scan_class(str(root), "cats", "cats")
        assert lib.count("cats") == 1


def test_bad_image_raises(tmp_path, root):
    (root / "dogs" / "bad.png").write_bytes(b"junk")
    with SetuLibrary(str(tmp_path / "data.db")) as lib:
        with pytest.raises(OSError):
            lib.scan_class(str(root), "dogs", "dogs")


def test_pick_unknown_class(tmp_path):
    with SetuLibrary(str(tmp_path / "data.db")) as lib:
        with pytest.raises(LookupError):
            lib.pick("missing")
        with pytest.raises(LookupError):
            lib.count("missing")