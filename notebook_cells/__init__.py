"""
notebook-cells: coordination core for interactive notebook cells.

This package decides what a notebook cell should show and how keyboard and
drag-and-drop input turns into store commands:
- Visibility flags derived from cell type, metadata and outputs
- Advisory banners for papermill parameter cells
- Focus navigation between cells and their editors
- Validated reordering of the cell sequence
- Shift+Enter / Ctrl+Enter execute gestures
"""

from notebook_cells.notebook import Cell, CellMetadata, CellStatus, CellType, NotebookDocument, OutputRecord
from notebook_cells.visibility import DerivedVisibility, resolve
from notebook_cells.banners import BannerKind, banners_for
from notebook_cells.reorder import InvalidMove, InvalidMoveReason, move_cell
from notebook_cells.focus import FocusCoordinator, FocusState
from notebook_cells.gestures import GestureRouter, KeyEvent
from notebook_cells.store import KernelRef, NotebookStore
from notebook_cells.app import NotebookApp

__version__ = "0.1.0"
__all__ = [
    "Cell",
    "CellMetadata",
    "CellStatus",
    "CellType",
    "NotebookDocument",
    "OutputRecord",
    "DerivedVisibility",
    "resolve",
    "BannerKind",
    "banners_for",
    "InvalidMove",
    "InvalidMoveReason",
    "move_cell",
    "FocusCoordinator",
    "FocusState",
    "GestureRouter",
    "KeyEvent",
    "KernelRef",
    "NotebookStore",
    "NotebookApp",
]
