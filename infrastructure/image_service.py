"""Image decoding, scaling and caching for the operator views.

Decoding uses Qt's `QImageReader`; results are kept in a small in-memory LRU
cache keyed on path, mtime, size and requested box.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import hashlib
import os

from PySide6.QtCore import QSize, Qt
from PySide6.QtGui import QColor, QImage, QImageReader
from loguru import logger


def fit_size(width: int, height: int, box_w: int, box_h: int) -> tuple[int, int]:
    """Return the largest (w, h) with the source aspect ratio inside the box.

    Degenerate inputs yield (0, 0).
    """
    if width <= 0 or height <= 0 or box_w <= 0 or box_h <= 0:
        return 0, 0
    scale = min(box_w / width, box_h / height)
    return max(1, round(width * scale)), max(1, round(height * scale))


def scale_to_fit(image: QImage, box_w: int, box_h: int) -> QImage:
    """Scale `image` to fit inside `box_w` x `box_h`, keeping aspect ratio."""
    if image.isNull():
        return image
    w, h = fit_size(image.width(), image.height(), box_w, box_h)
    if (w, h) == (0, 0):
        return QImage()
    return image.scaled(w, h, Qt.IgnoreAspectRatio, Qt.SmoothTransformation)


def _compute_cache_key(path: str, box_w: int, box_h: int) -> str:
    """Compute a stable cache key from path, mtime, size, and requested box."""
    try:
        st = os.stat(path)
        sig = f"{path}|{int(st.st_mtime_ns)}|{int(st.st_size)}|{box_w}x{box_h}"
    except OSError:
        sig = f"{path}|0|0|{box_w}x{box_h}"
    return hashlib.sha1(sig.encode("utf-8", errors="ignore")).hexdigest()


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = _MemCacheItem(key, image)
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)


class ImageService:
    """Loads images scaled to a bounding box, with memory caching."""

    PLACEHOLDER_SIDE = 64

    def __init__(self, settings: object | None = None, scaler=scale_to_fit) -> None:
        """Initialize the cache from settings; `scaler` is the pure scaling function."""
        cache_size = 64
        if settings is not None:
            try:
                cache_size = int(settings.get("preview.cache_size", 64) or 64)
            except (ValueError, TypeError):
                cache_size = 64
        self._cache = _LRUCache(cache_size)
        self._scaler = scaler

    def get_scaled(self, path: str, box_w: int, box_h: int) -> QImage:
        """Return `path` decoded and scaled to fit the box (placeholder on failure)."""
        key = _compute_cache_key(path, box_w, box_h)
        cached = self._cache.get(key)
        if cached is not None and not cached.isNull():
            return cached

        img = self._load(path, box_w, box_h)
        if img is None or img.isNull():
            return self._placeholder()
        self._cache.put(key, img)
        return img

    def _load(self, path: str, box_w: int, box_h: int) -> QImage | None:
        reader = QImageReader(path)
        reader.setAutoTransform(True)
        size = reader.size()
        if size.isValid():
            w, h = fit_size(size.width(), size.height(), box_w, box_h)
            # Let the reader decode at reduced size when shrinking
            if 0 < w < size.width():
                reader.setScaledSize(QSize(w, h))
        img = reader.read()
        if img.isNull():
            logger.debug("QImageReader failed for {}: {}", path, reader.errorString())
            return None
        return self._scaler(img, box_w, box_h)

    def _placeholder(self) -> QImage:
        side = self.PLACEHOLDER_SIDE
        img = QImage(side, side, QImage.Format_ARGB32)
        img.fill(QColor(220, 220, 220))
        return img
