"""
Focus coordination: which cell is selected and which cell's editor has focus.

Cell focus and editor focus are separate fields changed by separate
commands. Moving focus to another cell is always issued as two commands,
cell first and editor second, so a store that has applied only the first
shows the new cell selected with its editor not yet focused.
"""

import logging
from typing import Optional

from pydantic import BaseModel

from notebook_cells.commands import (
    Dispatch,
    FocusCell,
    FocusEditor,
    FocusNextCell,
    FocusNextCellEditor,
    unfocus_editor,
)
from notebook_cells.notebook import NotebookDocument

logger = logging.getLogger(__name__)


class FocusState(BaseModel):
    """Focused cell and focused editor. Nothing is focused initially."""
    focused_cell_id: Optional[str] = None
    focused_editor_id: Optional[str] = None

    def is_cell_focused(self, cell_id: str) -> bool:
        return self.focused_cell_id == cell_id

    def is_editor_focused(self, cell_id: str) -> bool:
        return self.focused_editor_id == cell_id

    @property
    def consistent(self) -> bool:
        """An editor may only be focused inside the focused cell."""
        return self.focused_editor_id is None or self.focused_editor_id == self.focused_cell_id


class FocusCoordinator:
    """
    Turns focus requests into store commands.

    Holds no focus state of its own; each operation receives the current
    document and validates ids against its order before dispatching.
    """

    def __init__(self, dispatch: Dispatch):
        self.dispatch = dispatch

    def select_cell(self, document: NotebookDocument, cell_id: str):
        """Make cell_id the focused cell."""
        document.index_of(cell_id)
        self.dispatch(FocusCell(id=cell_id))

    def focus_editor(self, document: NotebookDocument, cell_id: str):
        """Focus the editor of cell_id."""
        document.index_of(cell_id)
        self.dispatch(FocusEditor(id=cell_id))

    def unfocus_editor(self):
        """Clear editor focus, whichever cell holds it."""
        self.dispatch(unfocus_editor())

    def focus_above_cell(self, document: NotebookDocument, cell_id: str) -> bool:
        """
        Move cell and editor focus to the cell above cell_id.

        Returns:
            False without dispatching if cell_id is the first cell
        """
        previous_id = document.previous_id(cell_id)
        if previous_id is None:
            logger.debug("No cell above %s", cell_id)
            return False

        self.select_cell(document, previous_id)
        self.focus_editor(document, previous_id)
        return True

    def focus_below_cell(
        self,
        document: NotebookDocument,
        cell_id: str,
        create_if_undefined: bool = False,
    ) -> bool:
        """
        Move cell and editor focus to the cell below cell_id.

        If cell_id is the last cell and create_if_undefined is set, the store
        is asked to append a new cell and focus it.

        Returns:
            False without dispatching if there is nothing to focus
        """
        next_id = document.next_id(cell_id)
        if next_id is not None:
            self.select_cell(document, next_id)
            self.focus_editor(document, next_id)
            return True

        if not create_if_undefined:
            logger.debug("No cell below %s", cell_id)
            return False

        self.dispatch(FocusNextCell(id=cell_id, create_if_undefined=True))
        self.dispatch(FocusNextCellEditor(id=cell_id))
        return True
