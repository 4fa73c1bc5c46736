from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class _ImageTask(QRunnable):
    """QRunnable for background image loading.

    Emits `receiver.imageLoaded(token, path, image)` upon completion. The
    receiver is expected to own a Qt `Signal(str, str, object)` named
    `imageLoaded`; the queued connection brings the result back to the GUI
    thread.
    """

    def __init__(
        self, *, path: str, box: tuple[int, int], service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._path = path
        self._box = box
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            img = self._service.get_scaled(self._path, *self._box)
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.error("Image task failed for {}: {}", self._path, ex)
            img = None
        try:
            self._receiver.imageLoaded.emit(self._token, self._path, img)  # type: ignore[attr-defined]
        except RuntimeError as ex:  # pragma: no cover - receiver already destroyed
            logger.debug("Image result dropped for {}: {}", self._path, ex)


def make_token(kind: str, path: str, box: tuple[int, int]) -> str:
    """Token format: "{kind}|{path}|{w}x{h}"."""
    return f"{kind}|{path}|{box[0]}x{box[1]}"


class ImageTaskRunner:
    """Dispatches image load tasks to the global thread pool."""

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request(self, kind: str, path: str, box: tuple[int, int]) -> str:
        """Request `path` scaled to fit `box`. Returns the token string."""
        token = make_token(kind, path, box)
        if self._service is None:
            return token
        task = _ImageTask(
            path=path, box=box, service=self._service, receiver=self._receiver, token=token
        )
        self._pool.start(task)
        return token
