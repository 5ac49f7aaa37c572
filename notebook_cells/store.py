"""
NotebookStore: in-memory store that applies notebook commands.

The store owns the document, the focus state and the transient per-cell
state (status, pagers). Commands are applied synchronously and strictly in
submission order; a command dispatched while another is being applied (for
example from a subscriber) is queued and applied right after it.
"""

import logging
from collections import deque
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict

from notebook_cells.commands import (
    Command,
    CreateCell,
    ExecuteFocusedCell,
    FocusCell,
    FocusEditor,
    FocusNextCell,
    FocusNextCellEditor,
    FocusPreviousCell,
    FocusPreviousCellEditor,
    MoveCell,
    UpdateOutputMetadata,
)
from notebook_cells.focus import FocusState
from notebook_cells.notebook import Cell, CellStatus, CellType, NotebookDocument, OutputRecord
from notebook_cells.reorder import InvalidMove, move_cell

logger = logging.getLogger(__name__)

Executor = Callable[[Cell], None]
Subscriber = Callable[["NotebookStore", Command], None]


class KernelRef(BaseModel):
    """The active kernel as far as cell rendering cares."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str = "python3"
    codemirror_mode: Union[str, dict[str, Any], None] = None
    channels: Any = None

    @property
    def streaming(self) -> bool:
        """True while the kernel's output channel is live."""
        return self.channels is not None


class NotebookStore:
    """
    Reference implementation of the notebook store.

    Args:
        document: Notebook to hold, or a new empty one
        executor: Called with the focused code cell on ExecuteFocusedCell.
            Execution is fire-and-forget; results come back through
            set_cell_status() and set_outputs().
        kernel: Active kernel, if any
        theme: User-selected display theme name
    """

    def __init__(
        self,
        document: Optional[NotebookDocument] = None,
        executor: Optional[Executor] = None,
        kernel: Optional[KernelRef] = None,
        theme: str = "light",
    ):
        self.document = document if document is not None else NotebookDocument.new()
        self.focus = FocusState()
        self.executor = executor
        self.kernel = kernel
        self.theme = theme
        self.pagers: dict[str, list[OutputRecord]] = {}
        self.history: list[Command] = []
        self._subscribers: list[Subscriber] = []
        self._pending: deque[Command] = deque()
        self._dispatching = False
        self._handlers: dict[type, Callable[[Any], None]] = {
            ExecuteFocusedCell: self._execute_focused_cell,
            FocusCell: self._focus_cell,
            FocusEditor: self._focus_editor,
            FocusNextCell: self._focus_next_cell,
            FocusPreviousCell: self._focus_previous_cell,
            FocusNextCellEditor: self._focus_next_cell_editor,
            FocusPreviousCellEditor: self._focus_previous_cell_editor,
            MoveCell: self._move_cell,
            CreateCell: self._create_cell,
            UpdateOutputMetadata: self._update_output_metadata,
        }

    # ------------------------------------------------------------------ #
    # Dispatch
    # ------------------------------------------------------------------ #

    def dispatch(self, command: Command):
        """Apply a command, after any command already being applied."""
        self._pending.append(command)
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                current = self._pending.popleft()
                self._apply(current)
                for subscriber in list(self._subscribers):
                    subscriber(self, current)
        except Exception:
            self._pending.clear()
            raise
        finally:
            self._dispatching = False

    __call__ = dispatch

    def _apply(self, command: Command):
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unknown command {command!r}")
        logger.debug("Applying %r", command)
        handler(command)
        self.history.append(command)

    def subscribe(self, subscriber: Subscriber) -> Callable[[], None]:
        """
        Call subscriber(store, command) after every applied command.

        Returns:
            A callable that removes the subscription
        """
        self._subscribers.append(subscriber)

        def unsubscribe():
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

        return unsubscribe

    # ------------------------------------------------------------------ #
    # Reports from the kernel pipeline
    # ------------------------------------------------------------------ #

    def set_cell_status(self, cell_id: str, status: CellStatus):
        self.document.get_cell(cell_id).status = CellStatus(status)

    def set_outputs(self, cell_id: str, outputs: list, execution_count: Optional[int] = None):
        """Replace a cell's outputs and, if given, its execution count."""
        cell = self.document.get_cell(cell_id)
        cell.outputs = [o if isinstance(o, OutputRecord) else OutputRecord(**o) for o in outputs]
        if execution_count is not None:
            cell.execution_count = execution_count

    def set_pager(self, cell_id: str, entries: list):
        self.document.get_cell(cell_id)
        self.pagers[cell_id] = [e if isinstance(e, OutputRecord) else OutputRecord(**e) for e in entries]

    # ------------------------------------------------------------------ #
    # Command handlers
    # ------------------------------------------------------------------ #

    def _execute_focused_cell(self, command: ExecuteFocusedCell):
        cell_id = self.focus.focused_cell_id
        if cell_id is None:
            logger.warning("Execute requested with no focused cell")
            return

        cell = self.document.get_cell(cell_id)
        if cell.type != CellType.CODE:
            logger.debug("Skipping execution of %s cell %s", cell.type.value, cell_id)
            return

        cell.status = CellStatus.QUEUED
        if self.executor is not None:
            self.executor(cell)

    def _focus_cell(self, command: FocusCell):
        self.document.index_of(command.id)
        self.focus.focused_cell_id = command.id

    def _focus_editor(self, command: FocusEditor):
        if command.id is not None:
            self.document.index_of(command.id)
        self.focus.focused_editor_id = command.id

    def _focus_next_cell(self, command: FocusNextCell):
        order = self.document.cell_order
        anchor = command.id or self.focus.focused_cell_id
        # with nothing focused the first cell is next
        index = self.document.index_of(anchor) if anchor is not None else -1
        next_index = index + 1

        if next_index < len(order):
            self.focus.focused_cell_id = order[next_index]
            return

        if not command.create_if_undefined:
            return

        anchor_type = self.document.get_cell(anchor).type if anchor is not None else CellType.CODE
        new_type = CellType.CODE if anchor_type == CellType.CODE else CellType.MARKDOWN
        cell = self.document.insert_cell(next_index, type=new_type)
        logger.debug("Created %s cell %s at end of notebook", new_type.value, cell.id)
        self.focus.focused_cell_id = cell.id

    def _focus_previous_cell(self, command: FocusPreviousCell):
        anchor = command.id or self.focus.focused_cell_id
        if anchor is None:
            return
        index = self.document.index_of(anchor)
        self.focus.focused_cell_id = self.document.cell_order[max(0, index - 1)]

    def _focus_next_cell_editor(self, command: FocusNextCellEditor):
        cell_id = self.focus.focused_cell_id
        if command.id is None and cell_id is not None and self.focus.focused_editor_id != cell_id:
            # editor missing or left behind on another cell: it joins the focused cell
            self.focus.focused_editor_id = cell_id
            return

        anchor = command.id or self.focus.focused_editor_id
        if anchor is None:
            self.focus.focused_editor_id = cell_id
            return
        self.focus.focused_editor_id = self.document.next_id(anchor)

    def _focus_previous_cell_editor(self, command: FocusPreviousCellEditor):
        anchor = command.id or self.focus.focused_editor_id
        if anchor is None:
            self.focus.focused_editor_id = self.focus.focused_cell_id
            return
        index = self.document.index_of(anchor)
        self.focus.focused_editor_id = self.document.cell_order[max(0, index - 1)]

    def _move_cell(self, command: MoveCell):
        result = move_cell(self.document.cell_order, command.id, command.destination_id, command.above)
        if isinstance(result, InvalidMove):
            logger.warning("Ignoring move: %s", result)
            return
        self.document.cell_order = result

    def _create_cell(self, command: CreateCell):
        index = self.document.index_of(command.id)
        cell = self.document.insert_cell(index if command.above else index + 1, type=command.cell_type)
        logger.debug("Created %s cell %s %s %s", cell.type.value, cell.id,
                     "above" if command.above else "below", command.id)

    def _update_output_metadata(self, command: UpdateOutputMetadata):
        cell = self.document.get_cell(command.id)
        if command.index < 0 or command.index >= len(cell.outputs):
            raise ValueError(
                f"Output index {command.index} out of range (0-{len(cell.outputs) - 1})"
            )
        output = cell.outputs[command.index]
        cell.outputs[command.index] = output.model_copy(update={"metadata": dict(command.metadata)})
