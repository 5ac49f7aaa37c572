"""
Exceptions raised when a caller breaks the notebook-cells contract.
"""


class NotebookCellsError(Exception):
    """Base class for notebook-cells errors."""


class CellNotFoundError(NotebookCellsError, LookupError):
    """A cell id was referenced that is not part of the notebook order."""

    def __init__(self, cell_id):
        self.cell_id = cell_id
        super().__init__(f"Cell {cell_id!r} not found inside cell map")


class NotebookModelError(NotebookCellsError):
    """The document handed to a notebook view is not a notebook."""


class ListenerStateError(NotebookCellsError):
    """A keyboard listener was used outside its registration window."""
