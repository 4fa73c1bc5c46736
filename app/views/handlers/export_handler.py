"""ExportHandler: Runs the document export off the GUI thread."""

from __future__ import annotations

import threading
from typing import Any, Protocol

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal
from loguru import logger

from app.viewmodels.lot_vm import LotVM
from app.views.handlers.dialog_handler import DialogHandler
from core.errors import CatalogError, ExportError
from core.models import LotProjection
from core.services.interfaces import IDocumentExporter
from infrastructure.docx_exporter import DEFAULT_FILENAME, default_export_path


class StatusReporter(Protocol):
    """Protocol for status reporting callback."""

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message."""
        ...


class _ExportSignals(QObject):
    finished = Signal(object, object)  # ExportResult | None, Exception | None
    progress = Signal(int, int)


class _ExportTask(QRunnable):
    """QRunnable wrapping `IDocumentExporter.export`.

    Results and errors travel back through `_ExportSignals`, which lives in
    the GUI thread.
    """

    def __init__(
        self,
        *,
        exporter: IDocumentExporter,
        lots: LotProjection,
        path: str,
        cancel_event: threading.Event,
        signals: _ExportSignals,
    ) -> None:
        super().__init__()
        self._exporter = exporter
        self._lots = lots
        self._path = path
        self._cancel_event = cancel_event
        self._signals = signals

    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._exporter.export(
                self._lots,
                self._path,
                cancelled=self._cancel_event.is_set,
                progress=self._signals.progress.emit,
            )
        except CatalogError as ex:
            self._signals.finished.emit(None, ex)
            return
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.exception("Export failed unexpectedly: {}", ex)
            self._signals.finished.emit(None, ExportError(f"Error generating document:\n{ex}"))
            return
        self._signals.finished.emit(result, None)


class ExportHandler(QObject):
    """Handles the export workflow for the lot view.

    This class encapsulates:
    - The busy gate (a second export is rejected with ExportBusy)
    - Save path selection
    - Worker dispatch, cancellation and result reporting
    """

    finished = Signal()

    def __init__(
        self,
        lot_vm: LotVM,
        exporter: IDocumentExporter,
        settings: Any,
        dialogs: DialogHandler,
        status_reporter: StatusReporter,
        parent: QObject | None = None,
        pool: QThreadPool | None = None,
    ) -> None:
        super().__init__(parent)
        self.lot_vm = lot_vm
        self.exporter = exporter
        self.settings = settings
        self.dialogs = dialogs
        self.status_reporter = status_reporter
        self._cancel_event = threading.Event()
        self._signals = _ExportSignals(self)
        self._signals.finished.connect(self._on_finished)
        self._signals.progress.connect(self._on_progress)
        self._pool = pool or QThreadPool.globalInstance()

    @property
    def busy(self) -> bool:
        return self.lot_vm.is_exporting

    def start_export(self) -> bool:
        """Start an export; returns False if it was rejected or cancelled by the operator."""
        try:
            lots = self.lot_vm.begin_export()
        except CatalogError as ex:
            self.dialogs.show_error(ex)
            return False

        path = self._choose_path()
        if path is None:
            self.lot_vm.finish_export()
            return False

        self._cancel_event.clear()
        task = _ExportTask(
            exporter=self.exporter,
            lots=lots,
            path=path,
            cancel_event=self._cancel_event,
            signals=self._signals,
        )
        self._pool.start(task)
        self.status_reporter.show_status(f"Exporting to {path}…", 0)
        return True

    def cancel_export(self) -> None:
        if self.busy:
            logger.info("Export cancellation requested")
            self._cancel_event.set()

    def _choose_path(self) -> str | None:
        filename = DEFAULT_FILENAME
        ask = True
        if self.settings is not None:
            filename = str(self.settings.get("export.filename", filename) or filename)
            ask = bool(self.settings.get("export.ask_for_path", True))
        default_path = default_export_path(filename)
        if not ask:
            return default_path
        return self.dialogs.ask_save_path(default_path)

    def _on_progress(self, done: int, total: int) -> None:
        self.status_reporter.show_status(f"Exporting… {done}/{total} image(s)", 0)

    def _on_finished(self, result: Any, error: Any) -> None:
        self.lot_vm.finish_export()
        self.finished.emit()
        if error is not None:
            self.status_reporter.show_status("Export failed")
            self.dialogs.show_error(error)
            return
        self.status_reporter.show_status("Export completed")
        self.dialogs.show_info(f"Document saved as {result.path}")
