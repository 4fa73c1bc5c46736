"""AppController: keeps exactly one window visible for the session's active view."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject
from PySide6.QtWidgets import QMainWindow
from loguru import logger

from app.viewmodels.main_vm import ActiveView, SessionVM
from app.views import constants as c
from app.views.lot_window import LotWindow
from app.views.opening_window import OpeningWindow
from app.views.sorting_window import SortingWindow
from core.errors import CatalogError, ExportBusy
from infrastructure.docx_exporter import DocxLotExporter
from infrastructure.logging import open_latest_log, open_log_directory


class AppController(QObject):
    """Owns the session and its windows; windows only emit requests."""

    def __init__(
        self,
        session: SessionVM,
        image_service: Any | None = None,
        settings: Any | None = None,
        log_dir: str | None = None,
    ) -> None:
        super().__init__()
        self.session = session
        self._img = image_service
        self._settings = settings
        self._log_dir = log_dir
        self.opening = OpeningWindow()
        self.opening.folderChosen.connect(self.open_folder)
        self.sorting_window: SortingWindow | None = None
        self.lot_window: LotWindow | None = None

    def start(self) -> None:
        self.opening.show()

    def open_folder(self, folder: str) -> None:
        """Start a new session on `folder`, replacing any previous one."""
        try:
            if self.lot_window is not None and self.lot_window.export_handler.busy:
                raise ExportBusy()
            sorting_vm = self.session.open_folder(folder)
        except CatalogError as ex:
            self._active_window().dialogs.show_error(ex)
            return

        self._close_session_windows()
        self.sorting_window = SortingWindow(
            sorting_vm,
            image_service=self._img,
            max_side=self._setting_int("preview.max_side", 1600),
        )
        self.sorting_window.lotViewRequested.connect(self.switch_to_lot_view)
        self.sorting_window.openFolderRequested.connect(self.opening.on_select_folder)
        self.sorting_window.menu_controller.connect_actions(
            self._log_handlers() | {"open_folder": self.sorting_window.openFolderRequested.emit}
        )

        exporter = DocxLotExporter(
            self.session.source,
            image_side_pt=self._setting_int("export.image_side_pt", 150),
        )
        self.lot_window = LotWindow(
            self.session.lots,
            exporter,
            image_service=self._img,
            settings=self._settings,
            thumb_side=self._setting_int("lot_view.thumb_side", c.DEFAULT_LOT_THUMB_SIDE),
            max_images=self._setting_int("lot_view.max_images", c.DEFAULT_LOT_MAX_IMAGES),
        )
        self.lot_window.backRequested.connect(self.back_to_sorting)
        self.lot_window.menu_controller.connect_actions(
            self._log_handlers() | {"export": self.lot_window.on_export}
        )
        self._show_active()

    def switch_to_lot_view(self) -> None:
        try:
            self.session.switch_to_lot_view()
        except CatalogError as ex:
            self.sorting_window.dialogs.show_error(ex)
            return
        self.lot_window.refresh()
        self._show_active()

    def back_to_sorting(self) -> None:
        self.session.back_to_sorting()
        self.sorting_window.refresh()
        self._show_active()

    # Internal helpers
    def _active_window(self) -> QMainWindow:
        if self.session.active is ActiveView.LOT and self.lot_window is not None:
            return self.lot_window
        if self.session.active is ActiveView.SORTING and self.sorting_window is not None:
            return self.sorting_window
        return self.opening

    def _show_active(self) -> None:
        active = self._active_window()
        for window in (self.opening, self.sorting_window, self.lot_window):
            if window is not None and window is not active:
                window.hide()
        active.show()
        active.raise_()
        logger.debug("Active view: {}", self.session.active.value)

    def _close_session_windows(self) -> None:
        for window in (self.sorting_window, self.lot_window):
            if window is not None:
                window.hide()
                window.deleteLater()
        self.sorting_window = None
        self.lot_window = None

    def _log_handlers(self) -> dict:
        return {
            "open_latest_log": lambda: open_latest_log(self._log_dir),
            "open_log_directory": lambda: open_log_directory(self._log_dir),
        }

    def _setting_int(self, key: str, default: int) -> int:
        if self._settings is None:
            return default
        return self._settings.get_int(key, default)
