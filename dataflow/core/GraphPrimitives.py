from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Optional, Tuple, TYPE_CHECKING

import logging
import uuid
import weakref

if TYPE_CHECKING:
    from .Node import Node
    from .NodePort import Inlet, Outlet

logger = logging.getLogger(__name__)


class EventBus:
    """
    Ordered, synchronous publish/subscribe.

    Listeners are called on the emitting thread, in the order they subscribed,
    before emit() returns. A listener registered with subscribe_all() receives
    the event key as its first argument. A listener that raises is logged and
    skipped; the remaining listeners still run.
    """

    def __init__(self, owner: Any = None) -> None:
        # (event or None for catch-all, callback)
        self._listeners: List[Tuple[Any, Callable[..., None]]] = []
        self._suppress_depth = 0
        self._owner_ref = weakref.ref(owner) if owner is not None else None

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def subscribe(self, event: Any, callback: Callable[..., None]) -> None:
        if event is None:
            raise ValueError("event key must not be None, use subscribe_all()")
        self._add(event, callback)

    def subscribe_all(self, callback: Callable[..., None]) -> None:
        self._add(None, callback)

    def unsubscribe(self, event: Any, callback: Callable[..., None]) -> None:
        self._remove(event, callback)

    def unsubscribe_all(self, callback: Callable[..., None]) -> None:
        self._remove(None, callback)

    def listener_count(self) -> int:
        return len(self._listeners)

    def _add(self, event: Any, callback: Callable[..., None]) -> None:
        if not callable(callback):
            raise TypeError(f"listener for {event!r} is not callable: {callback!r}")
        if (event, callback) in self._listeners:
            return
        self._listeners.append((event, callback))

    def _remove(self, event: Any, callback: Callable[..., None]) -> None:
        try:
            self._listeners.remove((event, callback))
        except ValueError:
            pass  # not subscribed

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    def emit(self, event: Any, *args: Any) -> None:
        if self._suppress_depth:
            return
        # listeners may (un)subscribe while we deliver
        for key, callback in list(self._listeners):
            if key is None:
                call_args = (event,) + args
            elif key == event:
                call_args = args
            else:
                continue
            try:
                callback(*call_args)
            except Exception:
                logger.exception(f"{self._owner_repr()}: listener {callback!r} failed on {event}")

    @contextmanager
    def suppressed(self) -> Iterator[None]:
        """Drop every event emitted on this bus inside the block."""
        self._suppress_depth += 1
        try:
            yield
        finally:
            self._suppress_depth -= 1

    def isSuppressed(self) -> bool:
        return self._suppress_depth > 0

    def _owner_repr(self) -> str:
        owner = self._owner_ref() if self._owner_ref is not None else None
        return repr(owner) if owner is not None else "EventBus"


class Connection:
    """
    Directed edge from an Outlet to an Inlet.

    Only the Graph registers connections. A Connection built by hand is just a
    description of two endpoints until Graph.connect_connection() accepts it.
    """

    def __init__(self, source: 'Outlet', dest: 'Inlet'):
        self.id = uuid.uuid4().hex
        self._source = source
        self._dest = dest

    @property
    def source(self) -> 'Outlet':
        return self._source

    @property
    def dest(self) -> 'Inlet':
        return self._dest

    def source_node(self) -> Optional['Node']:
        return self._source.node if self._source is not None else None

    def dest_node(self) -> Optional['Node']:
        return self._dest.node if self._dest is not None else None

    def matches(self, source_node: 'Node', source_outlet: int, dest_node: 'Node', dest_inlet: int) -> bool:
        # endpoint identity, not object identity
        if self._source is None or self._dest is None:
            return False
        return (self._source.node is source_node
                and self._source.index == source_outlet
                and self._dest.node is dest_node
                and self._dest.index == dest_inlet)

    def __repr__(self):
        src = f"{self.source_node()!r}.{self._source.index}" if self._source is not None else "None"
        dst = f"{self.dest_node()!r}.{self._dest.index}" if self._dest is not None else "None"
        return f"Connection({src} -> {dst})"
