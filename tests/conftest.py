from __future__ import annotations

from pathlib import Path
import struct
import zlib

import pytest

from core.lot_model import LotModel
from core.models import ImageHandle


def make_png(width: int = 4, height: int = 3, color: tuple[int, int, int] = (200, 30, 30)) -> bytes:
    """Build a small valid RGB PNG."""

    def chunk(tag: bytes, data: bytes) -> bytes:
        crc = zlib.crc32(tag + data) & 0xFFFFFFFF
        return struct.pack(">I", len(data)) + tag + data + struct.pack(">I", crc)

    raw = b"".join(b"\x00" + bytes(color) * width for _ in range(height))
    header = struct.pack(">IIBBBBB", width, height, 8, 2, 0, 0, 0)
    return (
        b"\x89PNG\r\n\x1a\n"
        + chunk(b"IHDR", header)
        + chunk(b"IDAT", zlib.compress(raw))
        + chunk(b"IEND", b"")
    )


@pytest.fixture
def png_bytes():
    return make_png


@pytest.fixture
def image_folder(tmp_path):
    """Factory writing PNG content under the given names; returns the folder path.

    The image format is sniffed from content, so `.jpg` names with PNG bytes
    are fine for the exporter.
    """

    def _make(names, folder: Path | None = None) -> Path:
        target = folder or tmp_path / "photos"
        target.mkdir(parents=True, exist_ok=True)
        for i, name in enumerate(names):
            (target / name).write_bytes(make_png(color=(i * 40 % 256, 100, 200)))
        return target

    return _make


@pytest.fixture
def handles():
    """Factory for handles named after the given filenames."""

    def _make(*names: str) -> list[ImageHandle]:
        return [ImageHandle(path=f"/photos/{n}") for n in names]

    return _make


@pytest.fixture
def abcd(handles):
    return handles("a.jpg", "b.jpg", "c.jpg", "d.jpg")


@pytest.fixture
def model(abcd):
    return LotModel(abcd)
