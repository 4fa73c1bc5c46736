from __future__ import annotations

from pathlib import Path
import sys

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.main_vm import SessionVM
from app.views.app_controller import AppController
from app.views.constants import APP_TITLE, DEFAULT_LOT_MAX_IMAGES
from infrastructure.image_service import ImageService
from infrastructure.logging import init_logging
from infrastructure.settings import JsonSettings

BASE_DIR = Path(__file__).parent


def main() -> int:
    settings = JsonSettings(BASE_DIR / "settings.json")
    log_dir = settings.get("log_dir")
    init_logging(log_dir)
    logger.info("{} starting | cwd={}", APP_TITLE, Path.cwd())

    app = QApplication(sys.argv)
    app.setApplicationName(APP_TITLE)

    session = SessionVM(
        max_lot_images=settings.get_int("lot_view.max_images", DEFAULT_LOT_MAX_IMAGES)
    )
    controller = AppController(
        session, image_service=ImageService(settings), settings=settings, log_dir=log_dir
    )
    controller.start()

    # Optional folder argument skips the opening window
    if len(sys.argv) > 1:
        controller.open_folder(sys.argv[1])

    code = app.exec()
    logger.info("{} exiting with code {}", APP_TITLE, code)
    return code


if __name__ == "__main__":
    raise SystemExit(main())
