import pytest

from app.viewmodels.lot_vm import LotVM
from core.errors import (
    ExportBusy,
    InvalidLotNumber,
    LotNotFound,
    NoMoreLots,
    NoPreviousLots,
)
from core.lot_model import LotModel


@pytest.fixture
def spread(handles):
    """Model with lots {1, 4, 9}; lot 4 holds five images."""
    images = handles("a.jpg", "b.jpg", "c.jpg", "d.jpg", "e.jpg", "f.jpg", "g.jpg")
    model = LotModel(images)
    model.assign_to_manual_lot(images[0], 1)
    for h in images[1:6]:
        model.assign_to_manual_lot(h, 4)
    model.assign_to_manual_lot(images[6], 9)
    return model, images


def test_bounded_navigation(spread):
    model, _ = spread
    vm = LotVM(model)
    assert vm.current_lot == 1
    assert vm.next_lot() == 4
    assert vm.next_lot() == 9
    with pytest.raises(NoMoreLots):
        vm.next_lot()
    assert vm.current_lot == 9


def test_previous_stops_at_first_lot(spread):
    vm = LotVM(spread[0])
    with pytest.raises(NoPreviousLots):
        vm.previous_lot()
    assert vm.current_lot == 1
    vm.go_to_lot(9)
    assert vm.previous_lot() == 4


def test_go_to_lot(spread):
    vm = LotVM(spread[0])
    assert vm.go_to_lot("9") == 9
    with pytest.raises(LotNotFound) as info:
        vm.go_to_lot(5)
    assert str(info.value) == "Lot 5 not found."
    for text in ("nine", "4_0", "٩"):
        with pytest.raises(InvalidLotNumber):
            vm.go_to_lot(text)
    assert vm.current_lot == 9


def test_display_shows_three_but_counts_all(spread):
    model, images = spread
    vm = LotVM(model)
    vm.go_to_lot(4)
    assert vm.visible_images == images[1:4]
    assert vm.current_images == images[1:6]
    assert vm.status_text() == "Viewing Lot 4 (5 image(s))"


def test_empty_projection(handles):
    vm = LotVM(LotModel(handles("a.jpg")))
    assert vm.current_lot is None
    assert vm.visible_images == []
    assert vm.status_text() == "No lots to display."
    with pytest.raises(NoMoreLots):
        vm.next_lot()
    with pytest.raises(NoPreviousLots):
        vm.previous_lot()


def test_refresh_keeps_current_lot_when_present(spread):
    model, images = spread
    vm = LotVM(model)
    vm.go_to_lot(9)
    model.assign_to_manual_lot(images[0], 2)
    vm.refresh()
    assert vm.current_lot == 9
    assert vm.lot_numbers == [2, 4, 9]
    model.assign_to_manual_lot(images[6], 4)
    vm.refresh()
    assert vm.current_lot == 2


def test_second_export_is_rejected_until_first_finishes(spread):
    vm = LotVM(spread[0])
    lots = vm.begin_export()
    assert list(lots) == [1, 4, 9]
    assert vm.is_exporting
    with pytest.raises(ExportBusy):
        vm.begin_export()
    vm.finish_export()
    assert not vm.is_exporting
    vm.begin_export()


def test_export_snapshot_is_detached_from_model(spread):
    model, images = spread
    vm = LotVM(model)
    lots = vm.begin_export()
    model.assign_to_manual_lot(images[0], 50)
    assert 50 not in lots
    assert lots[1] == [images[0]]
