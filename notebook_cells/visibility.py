"""
Derived display flags for a cell.

Visibility is recomputed from cell type, metadata and output count on every
read and never stored.
"""

from typing import NamedTuple, Union

from notebook_cells.notebook import Cell, CellMetadata, CellType


class DerivedVisibility(NamedTuple):
    """Display flags for one cell."""
    source_hidden: bool = False
    output_hidden: bool = False
    output_expanded: bool = False


def resolve(
    cell_type: Union[CellType, str],
    metadata: CellMetadata,
    output_count: int,
) -> DerivedVisibility:
    """
    Compute the display flags of a cell.

    Only code cells can hide their source or outputs; the legacy hide_input
    flag is honoured next to inputHidden. A code cell without outputs always
    has its output area hidden.

    Args:
        cell_type: Type of the cell
        metadata: Typed cell metadata
        output_count: Number of outputs the cell currently has

    Returns:
        DerivedVisibility for the cell
    """
    if CellType(cell_type) != CellType.CODE:
        return DerivedVisibility()

    return DerivedVisibility(
        source_hidden=metadata.input_hidden or metadata.hide_input,
        output_hidden=output_count == 0 or metadata.output_hidden,
        output_expanded=metadata.output_expanded,
    )


def resolve_cell(cell: Cell) -> DerivedVisibility:
    """Shortcut for resolve() on a whole cell record."""
    return resolve(cell.type, cell.metadata, len(cell.outputs))
