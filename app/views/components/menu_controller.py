"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QMenuBar


class MenuController:
    """Builds a window's menu bar from (key, label) entries.

    Each window declares its own File menu entries; the Log menu is shared.
    """

    LOG_ENTRIES: list[tuple[str, str]] = [
        ("open_latest_log", "Open Latest Log"),
        ("open_log_directory", "Open Log Directory"),
    ]

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}

    def setup_menus(self, file_entries: list[tuple[str, str]]) -> dict[str, QAction]:
        """Create the File and Log menus and return action references.

        Args:
            file_entries: (action key, label) pairs for the File menu; "exit"
                is always appended after a separator.
        """
        menubar = QMenuBar(self.window)

        file_menu = menubar.addMenu("File")
        for key, label in file_entries:
            self.actions[key] = file_menu.addAction(label)
        file_menu.addSeparator()
        self.actions["exit"] = file_menu.addAction("Exit")

        log_menu = menubar.addMenu("Log")
        for key, label in self.LOG_ENTRIES:
            self.actions[key] = log_menu.addAction(label)

        self.window.setMenuBar(menubar)
        return self.actions

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for key, action in self.actions.items():
            if key in handlers:
                action.triggered.connect(handlers[key])
            elif key == "exit":
                action.triggered.connect(self.window.close)

