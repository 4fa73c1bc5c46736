"""Core service interfaces and shared data structures.

This module defines the export result and the collaborator interfaces the
views depend on, so tests can substitute simple doubles.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from core.models import ImageHandle, LotProjection


@dataclass
class ExportResult:
    """Outcome of a document export.

    Attributes:
        path: Absolute path of the written document.
        lot_count: Number of lots written.
        image_count: Number of images embedded.
    """

    path: str
    lot_count: int
    image_count: int


class IImageReader:
    """Interface for reading the raw bytes of an image."""

    def read_bytes(self, handle: ImageHandle) -> bytes:
        """Return the file content of `handle` or raise `ImageReadFailure`."""
        raise NotImplementedError


class IDocumentExporter:
    """Interface for writing a lot projection to a document."""

    def export(
        self,
        lots: LotProjection,
        path: str,
        cancelled: Callable[[], bool] | None = None,
        progress: Callable[[int, int], None] | None = None,
    ) -> ExportResult:
        """Write `lots` to `path`; raise an `ExportError` on failure."""
        raise NotImplementedError
