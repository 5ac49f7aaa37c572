"""
NotebookApp: the notebook view's lifecycle.

While mounted, the app owns the single keyboard listener that turns Enter
chords into execute/advance commands. It also exposes the per-cell and
notebook projections and the drag-and-drop entry point.
"""

import logging
from typing import Any, Optional

from notebook_cells.config import Settings
from notebook_cells.gestures import GestureRouter, KeyEvent
from notebook_cells.listener import KeyboardHub, KeyboardListener
from notebook_cells.reorder import MoveResult, drop_cell
from notebook_cells.store import NotebookStore
from notebook_cells.view import CellActions, CellView, NotebookView

logger = logging.getLogger(__name__)


class NotebookApp:
    """
    Binds a store to a keyboard source for as long as the view is mounted.

    Use as a context manager to guarantee the listener is released:

        with NotebookApp(store, hub):
            hub.emit(KeyEvent("Enter", shift_pressed=True))
    """

    def __init__(self, store: NotebookStore, source: KeyboardHub, settings: Optional[Settings] = None):
        self.store = store
        self.source = source
        self.settings = settings or Settings.from_env()
        self.router = GestureRouter(store.dispatch)
        self._listener: Optional[KeyboardListener] = None

    @property
    def mounted(self) -> bool:
        return self._listener is not None and self._listener.registered

    def mount(self):
        """Register the keyboard listener. Mounting twice is a no-op."""
        if self.mounted:
            return
        self._listener = KeyboardListener(self.source, self._on_key_down)
        self._listener.register()

    def unmount(self):
        """Deregister the keyboard listener."""
        if self._listener is None:
            return
        self._listener.deregister()
        self._listener = None

    def _on_key_down(self, event: KeyEvent) -> bool:
        event.platform_is_mac = self.settings.is_mac
        return self.router.handle_key_down(event)

    def __enter__(self):
        self.mount()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unmount()

    # ------------------------------------------------------------------ #
    # Projections and actions
    # ------------------------------------------------------------------ #

    def notebook_view(self) -> NotebookView:
        return NotebookView.build(self.store)

    def cell_view(self, cell_id: str) -> CellView:
        return CellView.build(self.store, cell_id)

    def cell_actions(self, cell_id: str) -> CellActions:
        return CellActions(self.store, cell_id)

    def drop(self, cell_id: str, destination_id: str, above: bool) -> MoveResult:
        """Handle a cell dropped above or below destination_id."""
        return drop_cell(self.store.document.cell_order, cell_id, destination_id, above, self.store.dispatch)

    def render_state(self) -> list[dict[str, Any]]:
        """Per-cell summary of what the renderer would draw, in order."""
        rows = []
        for cell_id in self.notebook_view().cell_order:
            view = self.cell_view(cell_id)
            rows.append({
                "id": view.id,
                "type": view.cell_type.value,
                "focused": view.cell_focused,
                "editing": view.editor_focused,
                "source_hidden": view.source_hidden,
                "output_hidden": view.output_hidden,
                "banners": [b.text for b in view.banners],
            })
        return rows
