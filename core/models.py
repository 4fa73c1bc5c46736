"""Core domain models for image handles and lots."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ImageHandle:
    """Identity of one source image; equal iff the paths are equal."""

    path: str
    name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if not self.name:
            object.__setattr__(self, "name", Path(self.path).name)

    @property
    def sort_key(self) -> tuple[str, str]:
        """Lexicographic on filename, tie-broken by full path."""
        return (self.name, self.path)


@dataclass
class Lot:
    """A lot number with its images in handle order."""

    number: int
    images: list[ImageHandle] = field(default_factory=list)

    @property
    def image_count(self) -> int:
        return len(self.images)


LotProjection = dict[int, list[ImageHandle]]
