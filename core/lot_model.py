"""Lot assignment model shared by the sorting and lot views.

`LotModel` owns the assignment map (image -> lot number), the hidden set and
the current-lot counter. Views hold a reference to it, never a copy, and
re-read it after each mutation.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
import re

from loguru import logger

from core.errors import InvalidLotNumber, NoPreviousLot, UnknownImage
from core.models import ImageHandle, Lot, LotProjection

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


def parse_lot_number(value: object) -> int:
    """Return `value` as a positive lot number or raise `InvalidLotNumber`.

    Accepts ints and ASCII decimal strings with an optional sign (surrounding
    whitespace ignored).
    """
    if isinstance(value, bool):
        raise InvalidLotNumber(value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not _DECIMAL_RE.fullmatch(text):
            raise InvalidLotNumber(value)
        number = int(text, 10)
    else:
        raise InvalidLotNumber(value)
    if number <= 0:
        raise InvalidLotNumber(value)
    return number


def group_assignments(assignments: dict[ImageHandle, int]) -> LotProjection:
    """Group an assignment map into lot number -> images, both sorted."""
    grouped: dict[int, list[ImageHandle]] = defaultdict(list)
    for handle, lot_number in assignments.items():
        grouped[lot_number].append(handle)
    return {
        lot_number: sorted(grouped[lot_number], key=lambda h: h.sort_key)
        for lot_number in sorted(grouped)
    }


class LotModel:
    """Single source of truth for lot assignments."""

    def __init__(self, images: Iterable[ImageHandle] = ()) -> None:
        self._images: frozenset[ImageHandle] = frozenset(images)
        self._assignments: dict[ImageHandle, int] = {}
        self._hidden: set[ImageHandle] = set()
        self._current_lot = 1

    # Mutations
    def assign_to_next_lot(self, handle: ImageHandle) -> int:
        """Stamp `handle` with the counter, then advance the counter."""
        self._check_known(handle)
        lot_number = self._current_lot
        self._assignments[handle] = lot_number
        self._current_lot += 1
        logger.info("{} assigned to lot {} (next lot)", handle.name, lot_number)
        return lot_number

    def assign_to_previous_lot(self, handle: ImageHandle) -> int:
        """Append `handle` to the last lot started by `assign_to_next_lot`."""
        self._check_known(handle)
        if self._current_lot <= 1:
            raise NoPreviousLot()
        lot_number = self._current_lot - 1
        self._assignments[handle] = lot_number
        logger.info("{} assigned to lot {} (previous lot)", handle.name, lot_number)
        return lot_number

    def assign_to_manual_lot(self, handle: ImageHandle, value: object) -> int:
        """Assign `handle` to an explicit lot; the counter is left untouched."""
        self._check_known(handle)
        lot_number = parse_lot_number(value)
        self._assignments[handle] = lot_number
        logger.info("{} assigned to lot {} (manual)", handle.name, lot_number)
        return lot_number

    def hide(self, handle: ImageHandle) -> None:
        self._check_known(handle)
        if handle not in self._hidden:
            self._hidden.add(handle)
            logger.info("{} hidden", handle.name)

    # Queries
    def snapshot_lots(self) -> LotProjection:
        """Return the lot projection; callers get fresh containers each time."""
        return group_assignments(self._assignments)

    def lots(self) -> list[Lot]:
        return [Lot(number=n, images=imgs) for n, imgs in self.snapshot_lots().items()]

    def is_empty(self) -> bool:
        return not self._assignments

    def lot_of(self, handle: ImageHandle) -> int | None:
        return self._assignments.get(handle)

    def is_hidden(self, handle: ImageHandle) -> bool:
        return handle in self._hidden

    @property
    def current_lot(self) -> int:
        """Lot number the next `assign_to_next_lot` call will stamp."""
        return self._current_lot

    @property
    def assignments(self) -> dict[ImageHandle, int]:
        return dict(self._assignments)

    @property
    def hidden(self) -> frozenset[ImageHandle]:
        return frozenset(self._hidden)

    @property
    def lot_count(self) -> int:
        return len(set(self._assignments.values()))

    def _check_known(self, handle: ImageHandle) -> None:
        if handle not in self._images:
            raise UnknownImage(handle.path)
