import pytest

from app.viewmodels.sorting_vm import SortingVM
from core.errors import InvalidLotNumber, NoAssignments, NoPreviousLot
from core.lot_model import LotModel


@pytest.fixture
def vm(model, abcd):
    return SortingVM(abcd, model)


def test_starts_on_first_image(vm, abcd):
    assert vm.index == 0
    assert vm.current == abcd[0]
    assert vm.status_text() == "Image 1 of 4: a.jpg | Unassigned"


def test_wrap_around_browsing(handles):
    images = handles("1.jpg", "2.jpg", "3.jpg")
    vm = SortingVM(images, LotModel(images))
    vm.next()
    vm.next()
    vm.next()
    assert vm.index == 0
    vm.previous()
    assert vm.index == 2


def test_next_and_previous_are_inverse_bijections(handles):
    images = handles(*[f"{i}.jpg" for i in range(5)])
    vm = SortingVM(images, LotModel(images))
    seen = set()
    for start in range(5):
        vm.index = start
        vm.next()
        seen.add(vm.index)
        vm.previous()
        assert vm.index == start
        vm.previous()
        vm.next()
        assert vm.index == start
    assert seen == set(range(5))


def test_sequential_grouping_through_the_view(vm, model, abcd):
    a, b, c, d = abcd
    assert vm.assign_next() == "a.jpg assigned to Lot 1"
    assert vm.assign_previous() == "b.jpg assigned to Lot 1"
    assert vm.assign_next() == "c.jpg assigned to Lot 2"
    assert vm.assign_manual("7") == "d.jpg manually assigned to Lot 7"
    assert model.assignments == {a: 1, b: 1, c: 2, d: 7}
    assert model.current_lot == 3
    # advanced past the last image and wrapped
    assert vm.index == 0
    assert vm.status_text() == "Image 1 of 4: a.jpg | Lot 1"


def test_manual_invalid_input_does_not_advance(vm, model):
    vm.next()
    with pytest.raises(InvalidLotNumber):
        vm.assign_manual("abc")
    assert vm.index == 1
    assert model.is_empty()


def test_previous_lot_failure_does_not_advance(vm, model):
    with pytest.raises(NoPreviousLot):
        vm.assign_previous()
    assert vm.index == 0
    assert model.is_empty()


def test_hide_marks_status_and_keeps_position(vm, abcd):
    vm.next()
    assert vm.hide() == "Image hidden: b.jpg"
    assert vm.index == 1
    assert vm.status_text() == "Image 2 of 4: b.jpg | Unassigned (Hidden)"


def test_switch_requires_an_assignment(vm):
    with pytest.raises(NoAssignments):
        vm.ensure_can_switch()
    vm.assign_next()
    vm.ensure_can_switch()


def test_empty_sequence_makes_everything_a_no_op():
    model = LotModel([])
    vm = SortingVM([], model)
    assert vm.index is None
    assert vm.current is None
    vm.next()
    vm.previous()
    assert vm.hide() is None
    assert vm.assign_next() is None
    assert vm.assign_previous() is None
    assert vm.assign_manual("3") is None
    assert vm.index is None
    assert model.is_empty()
    assert vm.status_text() == "No images found in the selected folder."


def test_jump_to_restores_position(vm, abcd, handles):
    vm.jump_to(abcd[2])
    assert vm.index == 2
    vm.jump_to(handles("zzz.jpg")[0])
    assert vm.index == 2
