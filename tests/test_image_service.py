import pytest

pytest.importorskip("PySide6.QtGui")

from infrastructure.image_service import (  # noqa: E402
    ImageService,
    _compute_cache_key,
    _LRUCache,
    fit_size,
)


@pytest.mark.parametrize(
    "src,box,expected",
    [
        ((4000, 3000), (700, 500), (667, 500)),
        ((3000, 4000), (300, 300), (225, 300)),
        ((100, 50), (300, 300), (300, 150)),
        ((300, 300), (300, 300), (300, 300)),
        ((10000, 1), (100, 100), (100, 1)),
        ((0, 10), (100, 100), (0, 0)),
        ((10, 10), (0, 100), (0, 0)),
    ],
)
def test_fit_size(src, box, expected):
    assert fit_size(*src, *box) == expected


def test_lru_cache_evicts_least_recently_used():
    cache = _LRUCache(2)
    cache.put("a", "A")
    cache.put("b", "B")
    assert cache.get("a") == "A"
    cache.put("c", "C")
    assert cache.get("b") is None
    assert cache.get("a") == "A"
    assert cache.get("c") == "C"
    assert len(cache) == 2


def test_cache_key_depends_on_box(tmp_path):
    path = tmp_path / "a.png"
    path.write_bytes(b"x")
    assert _compute_cache_key(str(path), 10, 10) != _compute_cache_key(str(path), 20, 10)
    assert _compute_cache_key(str(path), 10, 10) == _compute_cache_key(str(path), 10, 10)


def test_get_scaled_fits_box(image_folder):
    folder = image_folder(["a.png"])
    service = ImageService()
    img = service.get_scaled(str(folder / "a.png"), 40, 40)
    # 4x3 source scaled up to the box width
    assert (img.width(), img.height()) == (40, 30)
    assert service.get_scaled(str(folder / "a.png"), 40, 40) is not None


def test_unreadable_file_gives_placeholder(tmp_path):
    bad = tmp_path / "bad.jpg"
    bad.write_bytes(b"nope")
    img = ImageService().get_scaled(str(bad), 100, 100)
    assert img.width() == ImageService.PLACEHOLDER_SIDE
