"""Opening window: asks the operator for the image folder."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLabel, QMainWindow, QPushButton, QVBoxLayout, QWidget

from app.views.constants import APP_TITLE, OPENING_SIZE
from app.views.handlers.dialog_handler import DialogHandler


class OpeningWindow(QMainWindow):
    """Welcome screen with a single "Select Folder" button."""

    folderChosen = Signal(str)

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(APP_TITLE)
        self.resize(*OPENING_SIZE)
        self.dialogs = DialogHandler(self, APP_TITLE)

        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(50, 20, 50, 20)

        intro = QLabel(
            f"<h2>Welcome to {APP_TITLE}</h2>"
            "Choose a folder containing all the images you want to catalogue."
        )
        intro.setAlignment(Qt.AlignCenter)
        intro.setWordWrap(True)
        layout.addWidget(intro)
        layout.addSpacing(30)

        self.select_button = QPushButton("Select Folder")
        font = QFont("SansSerif", 20)
        font.setBold(True)
        self.select_button.setFont(font)
        self.select_button.setMinimumSize(200, 50)
        self.select_button.clicked.connect(self.on_select_folder)
        layout.addWidget(self.select_button, alignment=Qt.AlignCenter)

        self.setCentralWidget(central)

    def on_select_folder(self) -> None:
        folder = self.dialogs.ask_folder()
        if folder:
            self.folderChosen.emit(folder)
