"""
Tests for the Shift+Enter / Ctrl+Enter gesture router.
"""

import itertools
import logging

import pytest

from notebook_cells.commands import ExecuteFocusedCell, FocusCell, FocusEditor, FocusNextCell, FocusNextCellEditor
from notebook_cells.gestures import (
    GestureRouter,
    KeyEvent,
    Modifier,
    ctrl_like,
    gesture_commands,
    qualifying_modifier,
)

EXECUTE_AND_ADVANCE = [
    ExecuteFocusedCell(),
    FocusNextCell(id=None, create_if_undefined=True),
    FocusNextCellEditor(id=None),
]
EXECUTE_IN_PLACE = [ExecuteFocusedCell()]

BOOLS = [False, True]


@pytest.fixture
def router(dispatched):
    return GestureRouter(dispatched)


class TestCtrlLike:
    @pytest.mark.parametrize("ctrl,meta", list(itertools.product(BOOLS, BOOLS)))
    def test_non_mac_is_ctrl(self, ctrl, meta):
        event = KeyEvent("Enter", ctrl_pressed=ctrl, meta_pressed=meta)
        assert ctrl_like(event) is ctrl

    @pytest.mark.parametrize("ctrl,meta,expected", [
        (False, False, False),
        (True, False, True),
        (False, True, True),
        (True, True, False),
    ])
    def test_mac_alias(self, ctrl, meta, expected):
        event = KeyEvent("Enter", ctrl_pressed=ctrl, meta_pressed=meta, platform_is_mac=True)
        assert ctrl_like(event) is expected


class TestNonMacGestures:
    @pytest.mark.parametrize("shift,ctrl,meta", list(itertools.product(BOOLS, BOOLS, BOOLS)))
    def test_qualifies_iff_exactly_one_of_shift_ctrl(self, shift, ctrl, meta):
        event = KeyEvent("Enter", shift_pressed=shift, ctrl_pressed=ctrl, meta_pressed=meta)
        commands = gesture_commands(event)
        if shift and not ctrl:
            assert commands == EXECUTE_AND_ADVANCE
        elif ctrl and not shift:
            assert commands == EXECUTE_IN_PLACE
        else:
            assert commands == []

    def test_meta_alone_does_nothing(self):
        assert gesture_commands(KeyEvent("Enter", meta_pressed=True)) == []

    def test_plain_enter_not_consumed(self):
        assert qualifying_modifier(KeyEvent("Enter")) is None


class TestMacGestures:
    def test_cmd_enter_executes_in_place(self):
        event = KeyEvent("Enter", meta_pressed=True, platform_is_mac=True)
        assert qualifying_modifier(event) == Modifier.CTRL
        assert gesture_commands(event) == EXECUTE_IN_PLACE

    def test_ctrl_enter_executes_in_place(self):
        event = KeyEvent("Enter", ctrl_pressed=True, platform_is_mac=True)
        assert gesture_commands(event) == EXECUTE_IN_PLACE

    def test_cmd_ctrl_enter_cancels(self):
        event = KeyEvent("Enter", meta_pressed=True, ctrl_pressed=True, platform_is_mac=True)
        assert ctrl_like(event) is False
        assert gesture_commands(event) == []

    def test_shift_cmd_ctrl_enter_advances(self):
        """Cancelled alias leaves shift as the only modifier."""
        event = KeyEvent("Enter", shift_pressed=True, meta_pressed=True, ctrl_pressed=True,
                         platform_is_mac=True)
        assert gesture_commands(event) == EXECUTE_AND_ADVANCE

    def test_shift_cmd_enter_does_nothing(self):
        event = KeyEvent("Enter", shift_pressed=True, meta_pressed=True, platform_is_mac=True)
        assert gesture_commands(event) == []


class TestOtherKeys:
    @pytest.mark.parametrize("key", ["a", "Tab", "ArrowDown", "enter", " "])
    def test_non_enter_ignored(self, key, router, dispatched):
        event = KeyEvent(key, shift_pressed=True)
        assert router.handle_key_down(event) is False
        assert event.default_prevented is False
        assert dispatched == []


class TestGestureRouter:
    def test_shift_enter_dispatches_in_order(self, router, dispatched):
        event = KeyEvent("Enter", shift_pressed=True)
        assert router.handle_key_down(event) is True
        assert event.default_prevented is True
        assert dispatched == EXECUTE_AND_ADVANCE

    def test_ctrl_enter_dispatches_execute_only(self, router, dispatched):
        event = KeyEvent("Enter", ctrl_pressed=True)
        assert router(event) is True
        assert dispatched == EXECUTE_IN_PLACE

    def test_unqualified_enter_keeps_default(self, router, dispatched):
        event = KeyEvent("Enter", shift_pressed=True, ctrl_pressed=True)
        assert router.handle_key_down(event) is False
        assert event.default_prevented is False
        assert dispatched == []

    def test_each_keypress_independent(self, router, dispatched):
        router.handle_key_down(KeyEvent("Enter", ctrl_pressed=True))
        router.handle_key_down(KeyEvent("Enter"))
        router.handle_key_down(KeyEvent("Enter", ctrl_pressed=True))
        assert dispatched == EXECUTE_IN_PLACE * 2


class TestExecuteBeforeAdvance:
    def test_shift_enter_executes_focused_cell_then_moves(self, store, executor):
        store.dispatch(FocusNextCell(id=None))  # focus A
        GestureRouter(store.dispatch).handle_key_down(KeyEvent("Enter", shift_pressed=True))

        executed = executor.call_args.args[0]
        assert executed.id == "A"
        assert store.focus.focused_cell_id == "B"
        assert store.focus.focused_editor_id == "B"

    def test_shift_enter_on_last_cell_creates_cell(self, store, executor):
        store.dispatch(FocusNextCell(id="B"))  # focus C
        GestureRouter(store.dispatch).handle_key_down(KeyEvent("Enter", shift_pressed=True))

        assert executor.call_args.args[0].id == "C"
        assert len(store.document) == 4
        new_id = store.document.cell_order[-1]
        assert store.focus.focused_cell_id == new_id
        assert store.focus.focused_editor_id == new_id

    def test_ctrl_enter_keeps_focus(self, store, executor):
        store.dispatch(FocusNextCell(id="B"))  # focus C
        GestureRouter(store.dispatch).handle_key_down(KeyEvent("Enter", ctrl_pressed=True))

        assert executor.call_count == 1
        assert store.focus.focused_cell_id == "C"
        assert len(store.document) == 3

    def test_shift_enter_after_selecting_another_cell(self, store, executor):
        store.dispatch(FocusCell(id="A"))
        store.dispatch(FocusEditor(id="A"))
        store.dispatch(FocusCell(id="B"))  # click B, editor stays on A
        GestureRouter(store.dispatch).handle_key_down(KeyEvent("Enter", shift_pressed=True))

        assert executor.call_count == 0  # B is markdown
        assert store.focus.focused_cell_id == "C"
        assert store.focus.focused_editor_id == "C"
        assert store.focus.consistent


class TestGestureLogging:
    def test_logs_modifier(self, router, caplog):
        with caplog.at_level(logging.DEBUG, logger="notebook_cells.gestures"):
            router.handle_key_down(KeyEvent("Enter", meta_pressed=True, platform_is_mac=True))
        assert "Gesture ctrl+Enter -> 1 command(s)" in caplog.text
