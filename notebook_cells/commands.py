"""
Commands issued against the notebook store.

Every coordinator in this package talks to the store only through these
values, handed to a Dispatch callable one at a time and in order.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from notebook_cells.notebook import CellType


@dataclass(frozen=True)
class ExecuteFocusedCell:
    """Execute whichever cell is focused when the store applies this."""


@dataclass(frozen=True)
class FocusCell:
    id: str


@dataclass(frozen=True)
class FocusEditor:
    """Focus the editor of a cell; id=None unfocuses any editor."""
    id: Optional[str]


@dataclass(frozen=True)
class FocusNextCell:
    """Focus the cell after id (the focused cell when id is None)."""
    id: Optional[str] = None
    create_if_undefined: bool = False


@dataclass(frozen=True)
class FocusPreviousCell:
    id: Optional[str] = None


@dataclass(frozen=True)
class FocusNextCellEditor:
    """Focus the editor after id (the focused editor when id is None)."""
    id: Optional[str] = None


@dataclass(frozen=True)
class FocusPreviousCellEditor:
    id: Optional[str] = None


@dataclass(frozen=True)
class MoveCell:
    id: str
    destination_id: str
    above: bool


@dataclass(frozen=True)
class CreateCell:
    """Insert a new empty cell above or below id."""
    id: str
    above: bool = False
    cell_type: CellType = CellType.CODE


@dataclass(frozen=True)
class UpdateOutputMetadata:
    id: str
    index: int
    metadata: dict[str, Any] = field(default_factory=dict)


Command = Union[
    ExecuteFocusedCell,
    FocusCell,
    FocusEditor,
    FocusNextCell,
    FocusPreviousCell,
    FocusNextCellEditor,
    FocusPreviousCellEditor,
    MoveCell,
    CreateCell,
    UpdateOutputMetadata,
]

Dispatch = Callable[[Command], None]


def unfocus_editor() -> FocusEditor:
    return FocusEditor(id=None)
