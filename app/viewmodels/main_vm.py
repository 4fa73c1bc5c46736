"""Session view-model: owns the image source and lot model, tracks the active view."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from pathlib import Path

from loguru import logger

from app.viewmodels.lot_vm import LotVM
from app.viewmodels.sorting_vm import SortingVM
from core.lot_model import LotModel
from infrastructure.image_source import FolderImageSource


class ActiveView(Enum):
    EMPTY = "empty"
    SORTING = "sorting"
    LOT = "lot"


class SessionVM:
    """Top-level state machine.

    EMPTY --open_folder--> SORTING --switch_to_lot_view--> LOT --back_to_sorting--> SORTING
    """

    def __init__(
        self,
        source_factory: Callable[[str], FolderImageSource] = FolderImageSource,
        max_lot_images: int = 3,
    ) -> None:
        """Create a SessionVM.

        Args:
            source_factory: Builds an image source from a folder path.
            max_lot_images: Images shown per lot in the lot view.
        """
        self._source_factory = source_factory
        self._max_lot_images = max_lot_images
        self.active = ActiveView.EMPTY
        self.source: FolderImageSource | None = None
        self.model: LotModel | None = None
        self.sorting: SortingVM | None = None
        self.lots: LotVM | None = None

    def open_folder(self, folder: str | Path) -> SortingVM:
        """Load `folder` and start a fresh sorting session.

        Raises FolderReadFailure when the folder cannot be listed; an empty
        folder still opens (the sorting view reports it).
        """
        source = self._source_factory(str(folder))
        self.source = source
        self.model = LotModel(source.images)
        self.sorting = SortingVM(source.images, self.model)
        self.lots = LotVM(self.model, max_images=self._max_lot_images)
        self.active = ActiveView.SORTING
        if source.is_empty():
            logger.warning("No images found in {}", folder)
        logger.info("Session opened: {} | images={}", folder, len(source))
        return self.sorting

    def switch_to_lot_view(self) -> LotVM:
        """Raises NoAssignments and stays in SORTING when nothing is assigned."""
        self._require(ActiveView.SORTING)
        self.sorting.ensure_can_switch()
        self.lots.refresh()
        self.active = ActiveView.LOT
        logger.info("Switched to lot view | lots={}", self.model.lot_count)
        return self.lots

    def back_to_sorting(self) -> SortingVM:
        """Return to the sorting view at the index it last had."""
        self._require(ActiveView.LOT)
        self.active = ActiveView.SORTING
        logger.info("Back to sorting view at index {}", self.sorting.index)
        return self.sorting

    def _require(self, view: ActiveView) -> None:
        if self.active is not view:
            raise RuntimeError(f"operation requires {view.value} view, active is {self.active.value}")
