"""Sorting window: browse images one at a time and assign them to lots."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QKeySequence, QPixmap, QShortcut
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.viewmodels.sorting_vm import SortingVM
from app.views import constants as c
from app.views.components.menu_controller import MenuController
from app.views.handlers.dialog_handler import DialogHandler
from app.views.image_tasks import ImageTaskRunner
from core.errors import CatalogError


class SortingWindow(QMainWindow):
    """Image-at-a-time view over a `SortingVM`.

    Every button maps to one view-model call; after each call the whole
    display is re-read from the view-model.
    """

    imageLoaded = Signal(str, str, object)  # token, path, QImage
    lotViewRequested = Signal()
    openFolderRequested = Signal()

    def __init__(
        self, vm: SortingVM, image_service: Any | None = None, max_side: int = 1600
    ) -> None:
        super().__init__()
        self._vm = vm
        self._max_side = max_side
        self._runner = ImageTaskRunner(service=image_service, receiver=self)
        self._pending_token: str | None = None
        self.dialogs = DialogHandler(self, c.APP_TITLE)

        self._setup_ui()
        self.menu_controller = MenuController(self)
        self.menu_controller.setup_menus([("open_folder", "Open Folder…")])
        self.imageLoaded.connect(self._on_image_loaded)
        self._setup_shortcuts()
        self.refresh()

    def _setup_ui(self) -> None:
        self.setWindowTitle(f"Image Sorting - {c.APP_TITLE}")
        self.resize(*c.SORTING_SIZE)

        central = QWidget(self)
        root = QVBoxLayout(central)

        self.status_label = QLabel("")
        self.status_label.setAlignment(Qt.AlignCenter)
        root.addWidget(self.status_label)

        self.image_label = QLabel("")
        self.image_label.setAlignment(Qt.AlignCenter)
        self.image_label.setMinimumSize(*c.PREVIEW_FALLBACK_SIZE)
        self.image_label.setSizePolicy(QSizePolicy.Ignored, QSizePolicy.Ignored)
        self.image_label.setFrameShape(QFrame.Box)
        root.addWidget(self.image_label, stretch=1)

        buttons = QHBoxLayout()
        self.buttons: dict[str, QPushButton] = {}
        for key, label, handler in (
            ("previous", c.BTN_PREVIOUS, self.on_previous),
            ("next", c.BTN_NEXT, self.on_next),
            ("hide", c.BTN_HIDE, self.on_hide),
            ("assign_next", c.BTN_ASSIGN_NEXT, self.on_assign_next),
            ("assign_previous", c.BTN_ASSIGN_PREVIOUS, self.on_assign_previous),
            ("assign_manual", c.BTN_ASSIGN_MANUAL, self.on_assign_manual),
            ("switch", c.BTN_SWITCH_TO_LOTS, self.lotViewRequested.emit),
        ):
            button = QPushButton(label)
            button.clicked.connect(handler)
            buttons.addWidget(button)
            self.buttons[key] = button
        root.addLayout(buttons)

        self.setCentralWidget(central)

    def _setup_shortcuts(self) -> None:
        for key, handler in (
            ("Left", self.on_previous),
            ("Right", self.on_next),
            ("H", self.on_hide),
            ("N", self.on_assign_next),
            ("P", self.on_assign_previous),
            ("M", self.on_assign_manual),
            ("L", self.lotViewRequested.emit),
        ):
            QShortcut(QKeySequence(key), self, activated=handler)

    # Public API
    @property
    def vm(self) -> SortingVM:
        return self._vm

    def refresh(self) -> None:
        """Re-read status and preview from the view-model."""
        self.status_label.setText(self._vm.status_text())
        empty = self._vm.current is None
        for key in ("previous", "next", "hide", "assign_next", "assign_previous", "assign_manual"):
            self.buttons[key].setEnabled(not empty)
        self._request_preview()

    # Button handlers
    def on_next(self) -> None:
        self._vm.next()
        self.refresh()

    def on_previous(self) -> None:
        self._vm.previous()
        self.refresh()

    def on_hide(self) -> None:
        message = self._vm.hide()
        self.refresh()
        if message:
            self.dialogs.show_info(message)

    def on_assign_next(self) -> None:
        self._run(self._vm.assign_next)

    def on_assign_previous(self) -> None:
        self._run(self._vm.assign_previous)

    def on_assign_manual(self) -> None:
        if self._vm.current is None:
            return
        text = self.dialogs.ask_lot_number()
        if text is None:
            return
        self._run(lambda: self._vm.assign_manual(text))

    def _run(self, action) -> None:
        try:
            message = action()
        except CatalogError as ex:
            self.dialogs.show_error(ex)
            return
        if message:
            self.statusBar().showMessage(message, c.STATUS_TIMEOUT_MS)
        self.refresh()

    # Preview
    def _preview_box(self) -> tuple[int, int]:
        w, h = self.image_label.width(), self.image_label.height()
        if w <= 0 or h <= 0:
            return c.PREVIEW_FALLBACK_SIZE
        return min(w, self._max_side), min(h, self._max_side)

    def _request_preview(self) -> None:
        current = self._vm.current
        if current is None:
            self._pending_token = None
            self.image_label.clear()
            return
        self.image_label.setText("Loading…")
        self._pending_token = self._runner.request("single", current.path, self._preview_box())

    def _on_image_loaded(self, token: str, path: str, image: Any) -> None:
        if token != self._pending_token:
            return
        if image is None or image.isNull():
            logger.warning("No preview for {}", path)
            self.image_label.setText("(preview unavailable)")
            return
        self.image_label.setPixmap(QPixmap.fromImage(image))

    def resizeEvent(self, event) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        if self._vm.current is not None:
            self._request_preview()
