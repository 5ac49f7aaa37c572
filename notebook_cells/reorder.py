"""
Reordering of the notebook cell sequence.

move_cell is the whole of drag-and-drop at the logical level: take a cell out
of the order and put it back directly above or below a destination cell.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from notebook_cells.commands import Dispatch, MoveCell

logger = logging.getLogger(__name__)


class InvalidMoveReason(str, Enum):
    SAME_CELL = "same_cell"
    UNKNOWN_CELL = "unknown_cell"
    UNKNOWN_DESTINATION = "unknown_destination"


@dataclass(frozen=True)
class InvalidMove:
    """A move that cannot be applied. Returned, never raised."""
    reason: InvalidMoveReason
    id: str
    destination_id: str

    def __str__(self) -> str:
        return f"cannot move {self.id!r} next to {self.destination_id!r}: {self.reason.value}"


MoveResult = Union[list[str], InvalidMove]


def _validate(order: Sequence[str], cell_id: str, destination_id: str):
    if cell_id == destination_id:
        return InvalidMove(InvalidMoveReason.SAME_CELL, cell_id, destination_id)
    if cell_id not in order:
        return InvalidMove(InvalidMoveReason.UNKNOWN_CELL, cell_id, destination_id)
    if destination_id not in order:
        return InvalidMove(InvalidMoveReason.UNKNOWN_DESTINATION, cell_id, destination_id)
    return None


def move_cell(order: Sequence[str], cell_id: str, destination_id: str, above: bool) -> MoveResult:
    """
    Move cell_id directly above or below destination_id.

    Args:
        order: Current cell order
        cell_id: Cell to move
        destination_id: Cell to move next to
        above: Insert before destination_id if True, after it otherwise

    Returns:
        A new order (the input is not modified), or InvalidMove
    """
    invalid = _validate(order, cell_id, destination_id)
    if invalid is not None:
        return invalid

    new_order = [c for c in order if c != cell_id]
    position = new_order.index(destination_id)
    new_order.insert(position if above else position + 1, cell_id)
    return new_order


def is_noop_drop(order: Sequence[str], cell_id: str, destination_id: str, above: bool) -> bool:
    """True if cell_id already sits on the requested side of destination_id."""
    source = list(order).index(cell_id)
    target = list(order).index(destination_id)
    return source == (target - 1 if above else target + 1)


def drop_cell(
    order: Sequence[str],
    cell_id: str,
    destination_id: str,
    above: bool,
    dispatch: Dispatch,
) -> MoveResult:
    """
    Handle a drag-and-drop of cell_id onto destination_id.

    Dispatches MoveCell only when the drop changes the order. A drop onto
    the cell's current slot succeeds without dispatching anything.

    Returns:
        The resulting order, or InvalidMove for a malformed drop
    """
    invalid = _validate(order, cell_id, destination_id)
    if invalid is not None:
        logger.debug("Rejected drop: %s", invalid)
        return invalid

    if is_noop_drop(order, cell_id, destination_id, above):
        logger.debug("Ignoring drop of %s onto its current position", cell_id)
        return list(order)

    dispatch(MoveCell(id=cell_id, destination_id=destination_id, above=above))
    return move_cell(order, cell_id, destination_id, above)
