"""ViewModel for the image-at-a-time sorting view."""

from __future__ import annotations

from collections.abc import Sequence

from core.errors import EmptyFolder, NoAssignments
from core.lot_model import LotModel
from core.models import ImageHandle


class SortingVM:
    """Walks the image sequence and forwards lot mutations to `LotModel`.

    Navigation wraps around in both directions. With an empty sequence the
    index is None and every operation is a no-op returning None.
    """

    def __init__(self, images: Sequence[ImageHandle], model: LotModel) -> None:
        self._images = list(images)
        self._model = model
        self.index: int | None = 0 if self._images else None

    @property
    def model(self) -> LotModel:
        return self._model

    @property
    def total(self) -> int:
        return len(self._images)

    @property
    def current(self) -> ImageHandle | None:
        if self.index is None:
            return None
        return self._images[self.index]

    # Navigation
    def next(self) -> None:
        if self.index is not None:
            self.index = (self.index + 1) % len(self._images)

    def previous(self) -> None:
        if self.index is not None:
            self.index = (self.index - 1) % len(self._images)

    def jump_to(self, handle: ImageHandle) -> None:
        """Move to `handle` if it is part of the sequence."""
        if handle in self._images:
            self.index = self._images.index(handle)

    # Mutations
    def hide(self) -> str | None:
        current = self.current
        if current is None:
            return None
        self._model.hide(current)
        return f"Image hidden: {current.name}"

    def assign_next(self) -> str | None:
        current = self.current
        if current is None:
            return None
        lot_number = self._model.assign_to_next_lot(current)
        self.next()
        return f"{current.name} assigned to Lot {lot_number}"

    def assign_previous(self) -> str | None:
        """Raises NoPreviousLot without advancing."""
        current = self.current
        if current is None:
            return None
        lot_number = self._model.assign_to_previous_lot(current)
        self.next()
        return f"{current.name} assigned to Lot {lot_number}"

    def assign_manual(self, value: object) -> str | None:
        """Raises InvalidLotNumber without advancing."""
        current = self.current
        if current is None:
            return None
        lot_number = self._model.assign_to_manual_lot(current, value)
        self.next()
        return f"{current.name} manually assigned to Lot {lot_number}"

    def ensure_can_switch(self) -> None:
        """Raise NoAssignments unless at least one image carries a lot."""
        if self._model.is_empty():
            raise NoAssignments()

    # Display
    def status_text(self) -> str:
        current = self.current
        if current is None:
            return str(EmptyFolder())
        lot_number = self._model.lot_of(current)
        lot_info = f"Lot {lot_number}" if lot_number is not None else "Unassigned"
        hidden = " (Hidden)" if self._model.is_hidden(current) else ""
        return f"Image {self.index + 1} of {self.total}: {current.name} | {lot_info}{hidden}"
