"""Word document export of the lot catalogue.

Each lot becomes a bold "Lot N" title followed by a one-row, two-column table:
the left cell holds the lot's pictures (embedded, one centred paragraph per
image) and the right cell the reserve price / estimation field.

The document is written to a temporary file in the destination folder and
moved over the target only once complete.
"""

from __future__ import annotations

from collections.abc import Callable
import io
import os
from pathlib import Path
import stat
import tempfile

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.image.exceptions import (
    InvalidImageStreamError,
    UnexpectedEndOfFileError,
    UnrecognizedImageError,
)
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import Pt
from loguru import logger

from core.errors import ExportCancelled, IOFailure, UnsupportedImage
from core.models import ImageHandle, LotProjection
from core.services.interfaces import ExportResult, IDocumentExporter, IImageReader

DEFAULT_FILENAME = "AuctionLots.docx"
TITLE_FONT_PT = 14
INFO_FONT_PT = 12
INFO_TEXT = "Reserve price:\nEstimation:"
# OOXML expresses percentages in fiftieths of a percent
FULL_WIDTH_PCT = "5000"


def default_export_path(filename: str = DEFAULT_FILENAME) -> str:
    """Return `filename` resolved against the process working directory."""
    return str(Path.cwd() / filename)


def _read_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


# Process umask, captured at import
_UMASK = _read_umask()


def _target_mode(target: Path) -> int:
    """Mode for the finished document: that of the file it replaces, else 0666 minus umask."""
    try:
        return stat.S_IMODE(target.stat().st_mode)
    except FileNotFoundError:
        return 0o666 & ~_UMASK


def _set_full_width(table) -> None:
    tbl_pr = table._tbl.tblPr
    tbl_w = tbl_pr.find(qn("w:tblW"))
    if tbl_w is None:
        tbl_w = OxmlElement("w:tblW")
        tbl_pr.append(tbl_w)
    tbl_w.set(qn("w:type"), "pct")
    tbl_w.set(qn("w:w"), FULL_WIDTH_PCT)


class DocxLotExporter(IDocumentExporter):
    """Serialise a lot projection to a `.docx` file with python-docx."""

    def __init__(self, reader: IImageReader, image_side_pt: int = 150) -> None:
        self._reader = reader
        self._image_side = Pt(image_side_pt)

    def export(
        self,
        lots: LotProjection,
        path: str,
        cancelled: Callable[[], bool] | None = None,
        progress: Callable[[int, int], None] | None = None,
    ) -> ExportResult:
        """Write `lots` to `path`, replacing any previous file only on success."""
        # Copy so later model changes cannot leak into this export
        snapshot = {number: list(images) for number, images in sorted(lots.items())}
        total = sum(len(images) for images in snapshot.values())
        target = Path(path).resolve()
        logger.info("Export started: {} | lots={} images={}", target, len(snapshot), total)

        doc = self._build_document(snapshot, total, cancelled, progress)
        self._save_atomically(doc, target)

        result = ExportResult(path=str(target), lot_count=len(snapshot), image_count=total)
        logger.info("Export completed: {} | lots={} images={}", target, len(snapshot), total)
        return result

    def _build_document(self, snapshot, total, cancelled, progress):
        doc = Document()
        done = 0
        for number, images in snapshot.items():
            self._add_title(doc, number)
            table = doc.add_table(rows=1, cols=2)
            _set_full_width(table)
            left, right = table.rows[0].cells

            for i, handle in enumerate(images):
                if cancelled is not None and cancelled():
                    logger.info("Export cancelled after {} of {} images", done, total)
                    raise ExportCancelled()
                para = left.paragraphs[0] if i == 0 else left.add_paragraph()
                para.alignment = WD_ALIGN_PARAGRAPH.CENTER
                self._add_picture(para, handle)
                done += 1
                if progress is not None:
                    progress(done, total)

            info_run = right.paragraphs[0].add_run(INFO_TEXT)
            info_run.font.size = Pt(INFO_FONT_PT)
        return doc

    def _add_title(self, doc, number: int) -> None:
        run = doc.add_paragraph().add_run(f"Lot {number}")
        run.bold = True
        run.font.size = Pt(TITLE_FONT_PT)

    def _add_picture(self, paragraph, handle: ImageHandle) -> None:
        data = self._reader.read_bytes(handle)
        try:
            paragraph.add_run().add_picture(
                io.BytesIO(data), width=self._image_side, height=self._image_side
            )
        except (UnrecognizedImageError, InvalidImageStreamError, UnexpectedEndOfFileError) as ex:
            logger.error("Cannot embed {}: {}", handle.path, ex)
            raise UnsupportedImage(handle.path, str(ex) or type(ex).__name__) from ex

    def _save_atomically(self, doc, target: Path) -> None:
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{target.stem}-", suffix=".tmp", dir=str(target.parent)
            )
            os.close(fd)
        except OSError as ex:
            logger.error("Cannot create temporary file next to {}: {}", target, ex)
            raise IOFailure(str(target), str(ex)) from ex

        try:
            doc.save(tmp_name)
            os.chmod(tmp_name, _target_mode(target))
            os.replace(tmp_name, target)
        except OSError as ex:
            logger.error("Saving {} failed: {}", target, ex)
            raise IOFailure(str(target), str(ex)) from ex
        finally:
            if os.path.exists(tmp_name):
                try:
                    os.remove(tmp_name)
                except OSError as ex:
                    logger.warning("Cannot remove temporary file {}: {}", tmp_name, ex)


__all__ = ["DocxLotExporter", "default_export_path", "DEFAULT_FILENAME"]
