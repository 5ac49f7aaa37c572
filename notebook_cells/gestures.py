"""
Keyboard gestures: Shift+Enter and Ctrl+Enter.

Each keypress is judged on its own. A qualifying Enter chord executes the
focused cell; Shift+Enter then advances focus to the next cell, creating one
at the end of the notebook if needed. Ctrl+Enter (Cmd+Enter on macOS)
executes in place.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from notebook_cells.commands import (
    Command,
    Dispatch,
    ExecuteFocusedCell,
    FocusNextCell,
    FocusNextCellEditor,
)

logger = logging.getLogger(__name__)

ENTER_KEY = "Enter"


@dataclass
class KeyEvent:
    """A keydown event as delivered by the keyboard source."""
    key: str
    shift_pressed: bool = False
    ctrl_pressed: bool = False
    meta_pressed: bool = False
    platform_is_mac: bool = False
    default_prevented: bool = False

    def prevent_default(self):
        """Stop the editor's own handling (newline insertion) of this key."""
        self.default_prevented = True


class Modifier(str, Enum):
    SHIFT = "shift"
    CTRL = "ctrl"


def ctrl_like(event: KeyEvent) -> bool:
    """
    Whether the ctrl modifier counts as pressed.

    On macOS Cmd aliases Ctrl, but holding both cancels the alias so a
    chord of overlapping modifiers cannot trigger twice.
    """
    if not event.platform_is_mac:
        return event.ctrl_pressed
    return (event.meta_pressed or event.ctrl_pressed) and not (
        event.meta_pressed and event.ctrl_pressed
    )


def qualifying_modifier(event: KeyEvent) -> Optional[Modifier]:
    """The single modifier that makes this an execute gesture, if any."""
    if event.key != ENTER_KEY:
        return None
    shift = event.shift_pressed
    ctrl = ctrl_like(event)
    if shift == ctrl:
        # neither, or both at once
        return None
    return Modifier.SHIFT if shift else Modifier.CTRL


def gesture_commands(event: KeyEvent) -> list[Command]:
    """Commands a keypress produces, in dispatch order. Empty if it does not qualify."""
    return _commands_for(qualifying_modifier(event))


def _commands_for(modifier: Optional[Modifier]) -> list[Command]:
    if modifier is None:
        return []

    # Execute must reach the store before focus moves, or the wrong cell runs.
    commands: list[Command] = [ExecuteFocusedCell()]
    if modifier == Modifier.SHIFT:
        commands.append(FocusNextCell(id=None, create_if_undefined=True))
        commands.append(FocusNextCellEditor(id=None))
    return commands


class GestureRouter:
    """Routes keydown events to the store as execute/advance commands."""

    def __init__(self, dispatch: Dispatch):
        self.dispatch = dispatch

    def handle_key_down(self, event: KeyEvent) -> bool:
        """
        Handle one keydown event.

        Returns:
            True if the event was consumed (its default behaviour suppressed)
        """
        modifier = qualifying_modifier(event)
        if modifier is None:
            return False

        commands = _commands_for(modifier)
        event.prevent_default()
        logger.debug("Gesture %s+Enter -> %d command(s)", modifier.value, len(commands))
        for command in commands:
            self.dispatch(command)
        return True

    __call__ = handle_key_down
