from mask_engine import InputMask, Selection
from mask_engine.buffer import EditKind, HistoryMode


def make_mask(pattern: str = "11-11", **options: object) -> InputMask:
    return InputMask(pattern=pattern, **options)


def type_text(mask: InputMask, text: str) -> None:
    for char in text:
        assert mask.input(char) is True


def test_undo_with_no_history() -> None:
    mask = make_mask()

    assert mask.undo() is False
    assert mask.redo() is False


def test_contiguous_typing_is_one_undo_step() -> None:
    mask = make_mask()
    type_text(mask, "1234")

    assert len(mask.history) == 1
    assert mask.undo() is True
    assert mask.get_value() == "__-__"
    assert mask.selection == Selection.caret(0)
    assert mask.undo() is False


def test_undo_then_redo_restores_pre_undo_state() -> None:
    mask = make_mask()
    type_text(mask, "123")
    value, selection = mask.get_value(), mask.selection

    assert mask.undo() is True
    assert mask.redo() is True

    assert mask.get_value() == value
    assert mask.selection == selection
    assert mask.history.mode is HistoryMode.LIVE
    assert len(mask.history) == 1


def test_moving_the_caret_starts_a_new_step() -> None:
    mask = make_mask()
    type_text(mask, "12")
    mask.selection = Selection.caret(0)
    type_text(mask, "9")

    assert len(mask.history) == 2
    mask.undo()
    assert mask.get_value() == "12-__"
    mask.undo()
    assert mask.get_value() == "__-__"


def test_backspace_runs_coalesce() -> None:
    mask = make_mask()
    type_text(mask, "1234")
    assert mask.backspace() is True
    assert mask.backspace() is True
    assert mask.get_value() == "12-__"

    assert len(mask.history) == 2
    mask.undo()
    assert mask.get_value() == "12-34"
    assert mask.last_op is EditKind.INPUT


def test_selection_edit_always_starts_a_new_step() -> None:
    mask = make_mask()
    type_text(mask, "12")
    mask.selection = Selection(0, 2)
    type_text(mask, "7")

    assert len(mask.history) == 2


def test_editing_after_undo_discards_redo() -> None:
    mask = make_mask()
    type_text(mask, "12")
    mask.backspace()
    mask.undo()
    assert mask.get_value() == "12-__"

    type_text(mask, "5")

    assert mask.history.mode is HistoryMode.LIVE
    assert mask.redo() is False
    assert mask.get_value() == "12-5_"
    mask.undo()
    assert mask.get_value() == "12-__"


def test_multi_step_undo_and_redo() -> None:
    mask = make_mask()
    type_text(mask, "12")
    mask.selection = Selection.caret(2)
    mask.backspace()
    mask.selection = Selection.caret(3)
    type_text(mask, "4")
    final = mask.get_value()
    assert final == "1_-4_"

    assert mask.undo() is True
    assert mask.get_value() == "1_-__"
    assert mask.undo() is True
    assert mask.get_value() == "12-__"
    assert mask.undo() is True
    assert mask.get_value() == "__-__"
    assert mask.undo() is False

    assert mask.redo() is True
    assert mask.get_value() == "12-__"
    assert mask.redo() is True
    assert mask.redo() is True
    assert mask.get_value() == final
    assert mask.redo() is False


def test_set_pattern_clears_history() -> None:
    mask = make_mask()
    type_text(mask, "12")

    mask.set_pattern("111", value="9")

    assert len(mask.history) == 0
    assert mask.undo() is False
    assert mask.get_value() == "9__"


def test_undo_then_redo_from_middle_of_replay() -> None:
    mask = make_mask()
    type_text(mask, "12")
    mask.selection = Selection.caret(2)
    mask.backspace()
    mask.selection = Selection.caret(3)
    type_text(mask, "4")
    assert mask.get_value() == "1_-4_"

    assert mask.undo() is True
    assert mask.get_value() == "1_-__"
    assert mask.undo() is True
    middle = (mask.get_value(), mask.selection)
    assert middle == ("12-__", Selection.caret(2))

    assert mask.undo() is True
    assert mask.get_value() == "__-__"
    assert mask.redo() is True
    assert (mask.get_value(), mask.selection) == middle
    assert mask.history.mode is HistoryMode.REPLAYING

    assert mask.redo() is True
    assert mask.redo() is True
    assert mask.get_value() == "1_-4_"
    assert mask.history.mode is HistoryMode.LIVE
    assert len(mask.history) == 3
    assert mask.redo() is False
