"""Error kinds surfaced to the operator.

Every error carries the message shown in the dialog, so views only need to
catch `CatalogError` and display `str(ex)`.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for all operator-facing errors."""

    #: Dialog severity: "info" or "error".
    severity = "info"


class NoPreviousLot(CatalogError):
    def __init__(self) -> None:
        super().__init__("No previous lot available.")


class InvalidLotNumber(CatalogError):
    severity = "error"

    def __init__(self, value: object = None) -> None:
        super().__init__("Invalid lot number.")
        self.value = value


class LotNotFound(CatalogError):
    def __init__(self, lot_number: int) -> None:
        super().__init__(f"Lot {lot_number} not found.")
        self.lot_number = lot_number


class NoMoreLots(CatalogError):
    def __init__(self) -> None:
        super().__init__("No more lots.")


class NoPreviousLots(CatalogError):
    def __init__(self) -> None:
        super().__init__("No previous lots.")


class NoAssignments(CatalogError):
    def __init__(self) -> None:
        super().__init__("No images have been assigned to lots yet.")


class EmptyFolder(CatalogError):
    def __init__(self, folder: str = "") -> None:
        super().__init__("No images found in the selected folder.")
        self.folder = folder


class FolderReadFailure(CatalogError):
    severity = "error"

    def __init__(self, folder: str, reason: str) -> None:
        super().__init__(f"Cannot read folder {folder}:\n{reason}")
        self.folder = folder


class UnknownImage(CatalogError):
    """Raised when a handle does not belong to the loaded image sequence."""

    severity = "error"

    def __init__(self, path: str) -> None:
        super().__init__(f"Image is not part of the loaded folder: {path}")
        self.path = path


class ExportError(CatalogError):
    """Base class for document export failures."""

    severity = "error"


class IOFailure(ExportError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot write {path}:\n{reason}")
        self.path = path


class ImageReadFailure(ExportError):
    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot read image {path}:\n{reason}")
        self.path = path


class UnsupportedImage(ExportError):
    def __init__(self, path: str, reason: str = "") -> None:
        message = f"Unsupported image format: {path}"
        if reason:
            message = f"{message}\n{reason}"
        super().__init__(message)
        self.path = path


class ExportCancelled(ExportError):
    severity = "info"

    def __init__(self) -> None:
        super().__init__("Export cancelled.")


class ExportBusy(CatalogError):
    def __init__(self) -> None:
        super().__init__("An export is already in progress.")
