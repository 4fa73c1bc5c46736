"""DialogHandler: Coordinates message boxes and input prompts for a window."""

from __future__ import annotations

from PySide6.QtWidgets import QFileDialog, QInputDialog, QMessageBox, QWidget
from loguru import logger

from core.errors import CatalogError


class DialogHandler:
    """Coordinates dialog operations and user interactions.

    This class encapsulates:
    - Presenting `CatalogError` kinds with the right severity
    - The lot number prompt
    - The export save dialog
    """

    def __init__(self, parent_widget: QWidget, title: str) -> None:
        """Initialize with parent widget and dialog title.

        Args:
            parent_widget: Parent widget for dialogs
            title: Window title used for message boxes
        """
        self.parent = parent_widget
        self.title = title

    def show_error(self, ex: CatalogError) -> None:
        """Show `ex` as an information or error dialog."""
        if ex.severity == "error":
            logger.warning("{}: {}", type(ex).__name__, ex)
            QMessageBox.critical(self.parent, "Error", str(ex))
        else:
            logger.info("{}: {}", type(ex).__name__, ex)
            QMessageBox.information(self.parent, self.title, str(ex))

    def show_info(self, message: str) -> None:
        QMessageBox.information(self.parent, self.title, message)

    def ask_lot_number(self) -> str | None:
        """Prompt for a lot number; returns the raw text or None when cancelled."""
        text, ok = QInputDialog.getText(self.parent, self.title, "Enter lot number:")
        if not ok:
            return None
        return text

    def ask_save_path(self, default_path: str) -> str | None:
        """Ask where to save the document; returns None when cancelled."""
        path, _ = QFileDialog.getSaveFileName(
            self.parent, "Save Catalogue", default_path, "Word Documents (*.docx)"
        )
        if not path:
            return None
        if not path.lower().endswith(".docx"):
            path += ".docx"
        return path

    def ask_folder(self) -> str | None:
        """Ask for the image folder; returns None when cancelled."""
        folder = QFileDialog.getExistingDirectory(self.parent, "Select Image Folder")
        return folder or None
