"""ViewModel for the lot-at-a-time review view."""

from __future__ import annotations

from loguru import logger

from core.errors import ExportBusy, LotNotFound, NoMoreLots, NoPreviousLots
from core.lot_model import LotModel, parse_lot_number
from core.models import ImageHandle, Lot, LotProjection


class LotVM:
    """Pages through the lot projection in ascending lot order.

    The projection is re-read from the model on `refresh()`; navigation does
    not wrap around.
    """

    def __init__(self, model: LotModel, max_images: int = 3) -> None:
        self._model = model
        self._max_images = max(1, int(max_images))
        self._lots: dict[int, Lot] = {}
        self.current_lot: int | None = None
        self._exporting = False
        self.refresh()

    def refresh(self) -> None:
        """Re-read the model, keeping the current lot when it still exists."""
        self._lots = {lot.number: lot for lot in self._model.lots()}
        if self.current_lot not in self._lots:
            self.current_lot = next(iter(self._lots), None)

    @property
    def lot_numbers(self) -> list[int]:
        return list(self._lots)

    @property
    def current_images(self) -> list[ImageHandle]:
        if self.current_lot is None:
            return []
        return list(self._lots[self.current_lot].images)

    @property
    def visible_images(self) -> list[ImageHandle]:
        """At most `max_images` images of the current lot."""
        return self.current_images[: self._max_images]

    # Navigation
    def next_lot(self) -> int:
        keys = self.lot_numbers
        pos = self._position(keys)
        if pos is None or pos >= len(keys) - 1:
            raise NoMoreLots()
        self.current_lot = keys[pos + 1]
        return self.current_lot

    def previous_lot(self) -> int:
        keys = self.lot_numbers
        pos = self._position(keys)
        if pos is None or pos <= 0:
            raise NoPreviousLots()
        self.current_lot = keys[pos - 1]
        return self.current_lot

    def go_to_lot(self, value: object) -> int:
        """Raises InvalidLotNumber for bad input, LotNotFound for unknown lots."""
        lot_number = parse_lot_number(value)
        if lot_number not in self._lots:
            raise LotNotFound(lot_number)
        self.current_lot = lot_number
        return lot_number

    def _position(self, keys: list[int]) -> int | None:
        if self.current_lot is None:
            return None
        return keys.index(self.current_lot)

    # Export gate
    @property
    def is_exporting(self) -> bool:
        return self._exporting

    def begin_export(self) -> LotProjection:
        """Mark an export in flight and return the projection to write."""
        if self._exporting:
            raise ExportBusy()
        self._exporting = True
        lots = self._model.snapshot_lots()
        logger.info("Export requested for {} lot(s)", len(lots))
        return lots

    def finish_export(self) -> None:
        self._exporting = False

    # Display
    def status_text(self) -> str:
        if self.current_lot is None:
            return "No lots to display."
        count = self._lots[self.current_lot].image_count
        return f"Viewing Lot {self.current_lot} ({count} image(s))"
