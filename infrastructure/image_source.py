"""Folder enumeration for source images.

Lists a directory once at load time, keeps only supported raster files and
hands out `ImageHandle` objects sorted by filename.
"""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from core.errors import FolderReadFailure, ImageReadFailure
from core.models import ImageHandle
from core.services.interfaces import IImageReader

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png")


def is_supported_image(name: str) -> bool:
    """True if `name` ends in a supported extension (case-insensitive)."""
    return name.lower().endswith(IMAGE_EXTENSIONS)


class FolderImageSource(IImageReader):
    """Ordered, read-only sequence of the images in one folder."""

    def __init__(self, folder: str | Path) -> None:
        self._folder = Path(folder)
        self._images = self._scan()

    def _scan(self) -> list[ImageHandle]:
        try:
            entries = list(os.scandir(self._folder))
        except OSError as ex:
            logger.error("Folder scan failed for {}: {}", self._folder, ex)
            raise FolderReadFailure(str(self._folder), str(ex)) from ex

        handles: list[ImageHandle] = []
        for entry in entries:
            try:
                if not entry.is_file():
                    continue
            except OSError as ex:
                logger.debug("Skipping unreadable entry {}: {}", entry.path, ex)
                continue
            if is_supported_image(entry.name):
                handles.append(ImageHandle(path=entry.path, name=entry.name))

        handles.sort(key=lambda h: h.sort_key)
        logger.info("Scanned {}: {} image(s) of {} entries", self._folder, len(handles), len(entries))
        return handles

    @property
    def folder(self) -> Path:
        return self._folder

    @property
    def images(self) -> list[ImageHandle]:
        return list(self._images)

    def __len__(self) -> int:
        return len(self._images)

    def __getitem__(self, index: int) -> ImageHandle:
        return self._images[index]

    def __iter__(self):
        return iter(self._images)

    def is_empty(self) -> bool:
        return not self._images

    def read_bytes(self, handle: ImageHandle) -> bytes:
        """Return the raw file content of `handle`."""
        try:
            return Path(handle.path).read_bytes()
        except OSError as ex:
            logger.error("Read failed for {}: {}", handle.path, ex)
            raise ImageReadFailure(handle.path, str(ex)) from ex
