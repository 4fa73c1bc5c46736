"""Lot window: review lots one at a time and export the catalogue."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from app.viewmodels.lot_vm import LotVM
from app.views import constants as c
from app.views.components.menu_controller import MenuController
from app.views.handlers.dialog_handler import DialogHandler
from app.views.handlers.export_handler import ExportHandler
from app.views.image_tasks import ImageTaskRunner
from core.errors import CatalogError
from core.services.interfaces import IDocumentExporter


class _Tile(QWidget):
    """Thumbnail with its filename underneath."""

    def __init__(self, side: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        self.picture = QLabel("")
        self.picture.setAlignment(Qt.AlignCenter)
        self.picture.setFrameShape(QFrame.Box)
        self.picture.setFixedSize(side, side)
        self.caption = QLabel("")
        self.caption.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.picture)
        layout.addWidget(self.caption)

    def clear(self) -> None:
        self.picture.clear()
        self.caption.clear()
        self.setToolTip("")


class LotWindow(QMainWindow):
    """Lot-at-a-time view over a `LotVM`.

    Shows up to `max_images` thumbnails of the current lot, each labelled with
    its filename; the status line carries the true image count.
    """

    imageLoaded = Signal(str, str, object)  # token, path, QImage
    backRequested = Signal()

    def __init__(
        self,
        vm: LotVM,
        exporter: IDocumentExporter,
        image_service: Any | None = None,
        settings: Any | None = None,
        thumb_side: int = c.DEFAULT_LOT_THUMB_SIDE,
        max_images: int = c.DEFAULT_LOT_MAX_IMAGES,
    ) -> None:
        super().__init__()
        self._vm = vm
        self._thumb_side = thumb_side
        self._max_images = max_images
        self._runner = ImageTaskRunner(service=image_service, receiver=self)
        self._tokens: dict[str, _Tile] = {}
        self.dialogs = DialogHandler(self, c.APP_TITLE)

        self._setup_ui()
        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus([("export", "Generate Document…")])

        self.export_handler = ExportHandler(
            lot_vm=vm,
            exporter=exporter,
            settings=settings,
            dialogs=self.dialogs,
            status_reporter=self,
            parent=self,
        )
        self.export_handler.finished.connect(self._sync_export_buttons)
        self.imageLoaded.connect(self._on_image_loaded)
        self.refresh()

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"Lot Viewer - {c.APP_TITLE}")
        self.resize(*c.LOT_SIZE)

        central = QWidget(self)
        root = QVBoxLayout(central)

        self.status_label = QLabel("Lot Viewer")
        self.status_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self.status_label)

        row = QHBoxLayout()
        row.setSpacing(10)
        self.tiles: list[_Tile] = []
        for _ in range(self._max_images):
            tile = _Tile(self._thumb_side)
            row.addWidget(tile)
            self.tiles.append(tile)
        root.addLayout(row, stretch=1)

        buttons = QHBoxLayout()
        self.buttons: dict[str, QPushButton] = {}
        for key, label, handler in (
            ("previous_lot", c.BTN_PREVIOUS_LOT, self.on_previous_lot),
            ("next_lot", c.BTN_NEXT_LOT, self.on_next_lot),
            ("go_to_lot", c.BTN_GO_TO_LOT, self.on_go_to_lot),
            ("back", c.BTN_BACK_TO_SORTING, self.backRequested.emit),
            ("export", c.BTN_GENERATE_DOC, self.on_export),
            ("cancel_export", c.BTN_CANCEL_EXPORT, self.on_cancel_export),
        ):
            button = QPushButton(label)
            button.clicked.connect(handler)
            buttons.addWidget(button)
            self.buttons[key] = button
        root.addLayout(buttons)

        self.setCentralWidget(central)

    # Public API
    @property
    def vm(self) -> LotVM:
        return self._vm

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """StatusReporter implementation for the export handler."""
        self.statusBar().showMessage(message, timeout)

    def refresh(self) -> None:
        """Re-read the current lot from the view-model and redraw."""
        self.status_label.setText(self._vm.status_text())
        self._tokens.clear()
        for tile in self.tiles:
            tile.clear()
        box = (self._thumb_side, self._thumb_side)
        for tile, handle in zip(self.tiles, self._vm.visible_images):
            tile.picture.setText("Loading…")
            tile.caption.setText(handle.name)
            tile.setToolTip(handle.path)
            token = self._runner.request(f"lot{self._vm.current_lot}", handle.path, box)
            self._tokens[token] = tile
        self._sync_export_buttons()

    # Button handlers
    def on_next_lot(self) -> None:
        self._run(self._vm.next_lot)

    def on_previous_lot(self) -> None:
        self._run(self._vm.previous_lot)

    def on_go_to_lot(self) -> None:
        text = self.dialogs.ask_lot_number()
        if text is None:
            return
        self._run(lambda: self._vm.go_to_lot(text))

    def on_export(self) -> None:
        self.export_handler.start_export()
        self._sync_export_buttons()

    def on_cancel_export(self) -> None:
        self.export_handler.cancel_export()

    def _run(self, action) -> None:
        try:
            action()
        except CatalogError as ex:
            self.dialogs.show_error(ex)
            return
        self.refresh()

    def _sync_export_buttons(self) -> None:
        self.buttons["cancel_export"].setEnabled(self.export_handler.busy)

    def _on_image_loaded(self, token: str, path: str, image: Any) -> None:
        tile = self._tokens.get(token)
        if tile is None:
            return
        if image is None or image.isNull():
            tile.picture.setText("(preview unavailable)")
            return
        tile.picture.setPixmap(QPixmap.fromImage(image))
