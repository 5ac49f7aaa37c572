"""
Read-side projections of the store for rendering.

CellView holds everything a renderer needs to draw one cell, CellActions the
callbacks bound to that cell, and NotebookView the notebook-level state.
None of them render anything.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from notebook_cells.banners import BannerKind, banners_for
from notebook_cells.commands import UpdateOutputMetadata
from notebook_cells.errors import NotebookModelError
from notebook_cells.focus import FocusCoordinator
from notebook_cells.notebook import CellStatus, CellType, OutputRecord
from notebook_cells.store import KernelRef, NotebookStore
from notebook_cells.visibility import DerivedVisibility, resolve_cell

PLACEHOLDER_MODEL_TYPES = ("dummy", "unknown")
PLAIN_TEXT_MODE = {"name": "text/plain"}


def resolve_theme(name: Optional[str]) -> str:
    """Map a user theme name onto a supported theme. Light is the default."""
    return "dark" if name == "dark" else "light"


def _require_notebook(store: NotebookStore):
    if not store.document.is_notebook:
        raise NotebookModelError(
            "Cell views should not be used with non-notebook models "
            f"(got {store.document.model_type!r})"
        )


@dataclass(frozen=True)
class CellView:
    """Derived, read-only properties of one cell."""
    id: str
    cell_type: CellType
    source: str
    execution_count: Optional[int]
    outputs: list[OutputRecord]
    pager: list[OutputRecord]
    status: CellStatus
    cell_focused: bool
    editor_focused: bool
    visibility: DerivedVisibility
    banners: list[BannerKind]
    tags: frozenset[str]
    metadata: dict[str, Any]
    theme: str
    channels: Any = None

    @property
    def running(self) -> bool:
        return self.status == CellStatus.BUSY

    @property
    def queued(self) -> bool:
        return self.status == CellStatus.QUEUED

    @property
    def source_hidden(self) -> bool:
        return self.visibility.source_hidden

    @property
    def output_hidden(self) -> bool:
        return self.visibility.output_hidden

    @property
    def output_expanded(self) -> bool:
        return self.visibility.output_expanded

    @classmethod
    def build(cls, store: NotebookStore, cell_id: str) -> "CellView":
        """
        Project the store state for cell_id.

        Raises:
            NotebookModelError: if the store does not hold a notebook
            CellNotFoundError: if cell_id is not in the notebook
        """
        _require_notebook(store)
        cell = store.document.get_cell(cell_id)
        return cls(
            id=cell.id,
            cell_type=cell.type,
            source=cell.source,
            execution_count=cell.execution_count,
            outputs=list(cell.outputs),
            pager=list(store.pagers.get(cell_id, [])),
            status=cell.status,
            cell_focused=store.focus.is_cell_focused(cell_id),
            editor_focused=store.focus.is_editor_focused(cell_id),
            visibility=resolve_cell(cell),
            banners=banners_for(cell.tags),
            tags=cell.tags,
            metadata=cell.metadata.to_raw(),
            theme=resolve_theme(store.theme),
            channels=store.kernel.channels if store.kernel is not None else None,
        )


class CellActions:
    """Callbacks for one cell, bound to its id."""

    def __init__(self, store: NotebookStore, cell_id: str):
        self.store = store
        self.cell_id = cell_id
        self.focus = FocusCoordinator(store.dispatch)

    def select(self):
        self.focus.select_cell(self.store.document, self.cell_id)

    def focus_editor(self):
        self.focus.focus_editor(self.store.document, self.cell_id)

    def unfocus_editor(self):
        self.focus.unfocus_editor()

    def focus_above(self) -> bool:
        return self.focus.focus_above_cell(self.store.document, self.cell_id)

    def focus_below(self) -> bool:
        # arrowing down off the last cell opens a new one
        return self.focus.focus_below_cell(self.store.document, self.cell_id, create_if_undefined=True)

    def update_output_metadata(self, index: int, metadata: dict[str, Any]):
        self.store.dispatch(UpdateOutputMetadata(id=self.cell_id, index=index, metadata=metadata))


@dataclass(frozen=True)
class NotebookView:
    """Notebook-level render state."""
    cell_order: list[str]
    codemirror_mode: Union[str, dict[str, Any]]
    theme: str
    kernel_ref: Optional[KernelRef] = None
    model_type: str = "notebook"

    @classmethod
    def build(cls, store: NotebookStore) -> "NotebookView":
        """
        Project the notebook-level store state.

        Placeholder models ("dummy", "unknown") render as an empty notebook;
        any other non-notebook model is an error.
        """
        document = store.document
        theme = resolve_theme(store.theme)

        if document.model_type in PLACEHOLDER_MODEL_TYPES:
            return cls(
                cell_order=[],
                codemirror_mode=dict(PLAIN_TEXT_MODE),
                theme=theme,
                model_type=document.model_type,
            )

        if not document.is_notebook:
            raise NotebookModelError(
                f"Notebook view requires a notebook model (got {document.model_type!r})"
            )

        kernel = store.kernel
        if kernel is not None and kernel.codemirror_mode:
            mode = kernel.codemirror_mode
        else:
            mode = document.codemirror_mode()

        return cls(
            cell_order=list(document.cell_order),
            codemirror_mode=mode,
            theme=theme,
            kernel_ref=kernel,
        )

    def creator_slots(self) -> list[tuple[Optional[str], bool]]:
        """
        Positions of the insert-cell controls as (cell id, above).

        One above the first cell, then one below every cell. An empty
        notebook gets a single slot with no anchor.
        """
        if not self.cell_order:
            return [(None, True)]
        return [(self.cell_order[0], True)] + [(cell_id, False) for cell_id in self.cell_order]
