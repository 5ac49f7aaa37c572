"""Keyboard sources and scoped keydown listeners."""

import logging
from typing import Any, Callable, Optional

from notebook_cells.errors import ListenerStateError
from notebook_cells.gestures import KeyEvent

logger = logging.getLogger(__name__)

KeyHandler = Callable[[KeyEvent], Any]


class KeyboardHub:
    """In-process keyboard source that fans keydown events out to listeners."""

    def __init__(self):
        self._listeners: list[KeyHandler] = []

    def add_listener(self, handler: KeyHandler) -> None:
        self._listeners.append(handler)

    def remove_listener(self, handler: KeyHandler) -> None:
        if handler in self._listeners:
            self._listeners.remove(handler)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self, event: KeyEvent) -> KeyEvent:
        """Deliver event to every listener and return it."""
        for handler in list(self._listeners):
            handler(event)
        return event


class KeyboardListener:
    """A keydown registration on a keyboard source.

    Registered on enter and always deregistered on exit, exceptions
    included. Once deregistered the handler never sees another event, and
    the listener cannot be registered again.
    """

    def __init__(self, source: KeyboardHub, handler: KeyHandler):
        self.source = source
        self.handler = handler
        self._registered = False
        self._closed = False

    @property
    def registered(self) -> bool:
        return self._registered

    def register(self) -> None:
        """Start receiving keydown events."""
        if self._closed:
            raise ListenerStateError("Keyboard listener was already deregistered")
        if self._registered:
            return
        self.source.add_listener(self._on_key_down)
        self._registered = True
        logger.info("Keyboard listener registered")

    def deregister(self) -> None:
        """Stop receiving keydown events."""
        if not self._registered:
            return
        self.source.remove_listener(self._on_key_down)
        self._registered = False
        self._closed = True
        logger.info("Keyboard listener deregistered")

    def _on_key_down(self, event: KeyEvent) -> Optional[Any]:
        # a source may still hold a snapshot of its listeners mid-emit
        if not self._registered:
            return None
        return self.handler(event)

    def __enter__(self):
        self.register()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.deregister()
