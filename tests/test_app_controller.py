import os
from pathlib import Path

import pytest

pytest.importorskip("PySide6.QtWidgets")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtWidgets import QApplication  # noqa: E402

from app.viewmodels.main_vm import ActiveView, SessionVM  # noqa: E402
from app.views.app_controller import AppController  # noqa: E402
from app.views.handlers.dialog_handler import DialogHandler  # noqa: E402
from core.errors import ExportBusy, NoAssignments  # noqa: E402

# Ensure a QApplication exists
app = QApplication.instance() or QApplication([])


@pytest.fixture
def shown(monkeypatch):
    """Record dialogs instead of opening modal message boxes."""
    messages = {"errors": [], "infos": []}
    monkeypatch.setattr(DialogHandler, "show_error", lambda self, ex: messages["errors"].append(ex))
    monkeypatch.setattr(DialogHandler, "show_info", lambda self, msg: messages["infos"].append(msg))
    return messages


@pytest.fixture
def controller(shown):
    ctrl = AppController(SessionVM())
    yield ctrl
    for window in (ctrl.opening, ctrl.sorting_window, ctrl.lot_window):
        if window is not None:
            window.close()


def test_open_folder_shows_only_sorting_window(controller, image_folder):
    controller.start()
    controller.open_folder(str(image_folder(["a.jpg", "b.jpg"])))

    assert controller.session.active is ActiveView.SORTING
    assert controller.sorting_window.isVisible()
    assert not controller.opening.isVisible()
    assert not controller.lot_window.isVisible()
    assert controller.sorting_window.status_label.text() == "Image 1 of 2: a.jpg | Unassigned"


def test_switch_without_assignments_stays_in_sorting(controller, shown, image_folder):
    controller.open_folder(str(image_folder(["a.jpg"])))

    controller.switch_to_lot_view()

    assert [type(e) for e in shown["errors"]] == [NoAssignments]
    assert controller.session.active is ActiveView.SORTING
    assert controller.sorting_window.isVisible()


def test_switch_to_lots_and_back(controller, image_folder):
    controller.open_folder(str(image_folder(["a.jpg", "b.jpg", "c.jpg"])))
    controller.sorting_window.on_assign_next()

    controller.switch_to_lot_view()
    assert controller.lot_window.isVisible()
    assert not controller.sorting_window.isVisible()
    assert controller.lot_window.status_label.text() == "Viewing Lot 1 (1 image(s))"
    assert controller.lot_window.tiles[0].caption.text() == "a.jpg"

    controller.back_to_sorting()
    assert controller.sorting_window.isVisible()
    assert controller.sorting_window.vm.index == 1


def test_open_folder_refused_while_exporting(controller, shown, image_folder, tmp_path):
    first = image_folder(["a.jpg"])
    controller.open_folder(str(first))
    sorting_window = controller.sorting_window
    controller.session.lots.begin_export()

    controller.open_folder(str(image_folder(["x.jpg"], folder=tmp_path / "other")))

    assert [type(e) for e in shown["errors"]] == [ExportBusy]
    assert controller.session.source.folder == Path(first)
    assert controller.sorting_window is sorting_window


def test_export_button_while_busy_is_rejected(controller, shown, image_folder):
    controller.open_folder(str(image_folder(["a.jpg"])))
    controller.sorting_window.on_assign_next()
    controller.switch_to_lot_view()
    controller.session.lots.begin_export()

    controller.lot_window.on_export()

    assert [type(e) for e in shown["errors"]] == [ExportBusy]
    assert controller.lot_window.buttons["cancel_export"].isEnabled()
