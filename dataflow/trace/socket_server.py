"""
Socket.IO bridge for the graph trace feed.

Uses python-socketio in ASGI mode. Every graph event is broadcast to all
clients as a "trace" message carrying a TraceEvent dict; a client that has
just connected asks for "snapshot" to receive the current nodes and
connections before live events start arriving.

The graph itself is mutated only on the caller's thread; this module just
schedules emits on the running event loop.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Union

import socketio

from dataflow.core.Graph import Graph
from .trace_emitter import GraphTracer, TraceEmitter, snapshot_payloads

logger = logging.getLogger(__name__)


class TraceSocketServer:
    def __init__(self, cors_allowed_origins: Union[str, Sequence[str]] = "*") -> None:
        self.sio = socketio.AsyncServer(
            async_mode="asgi",
            cors_allowed_origins=cors_allowed_origins,
            logger=False,
            engineio_logger=False,
        )
        self.emitter = TraceEmitter()
        self.emitter.on_trace(self._on_trace)

        self._graph: Optional[Graph] = None
        self._tracer: Optional[GraphTracer] = None
        self._pending: Set["asyncio.Task[Any]"] = set()

        self.sio.on("snapshot", handler=self._on_snapshot)

    # ------------------------------------------------------------------
    # Graph wiring
    # ------------------------------------------------------------------

    def attach_graph(self, graph: Graph) -> None:
        self.detach_graph()
        self._graph = graph
        self._tracer = GraphTracer(graph, self.emitter)

    def detach_graph(self) -> None:
        if self._tracer is not None:
            self._tracer.detach()
        self._tracer = None
        self._graph = None

    @property
    def graph(self) -> Optional[Graph]:
        return self._graph

    # ------------------------------------------------------------------
    # Trace fan-out: emitter -> Socket.IO
    # ------------------------------------------------------------------

    def _on_trace(self, event: Dict[str, Any]) -> None:
        """
        Called synchronously by TraceEmitter.fire().
        We schedule an async emit on the running event loop.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"no running event loop, trace {event.get('type')} not broadcast")
            return
        # the loop only holds weak references to its tasks
        task = loop.create_task(self.sio.emit("trace", event))
        self._pending.add(task)
        task.add_done_callback(self._emit_done)

    def _emit_done(self, task: "asyncio.Task[Any]") -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"trace broadcast failed: {error!r}", exc_info=error)

    async def _on_snapshot(self, sid: str, data: Any = None) -> List[Dict[str, Any]]:
        return snapshot_payloads(self._graph)

    # ------------------------------------------------------------------
    # Factory
    # ------------------------------------------------------------------

    def asgi_app(self, other_app: Any = None) -> socketio.ASGIApp:
        """Wrap *other_app* (if any) inside a Socket.IO ASGI application."""
        return socketio.ASGIApp(self.sio, other_asgi_app=other_app)


# ---------------------------------------------------------------------------
# Module-level server, for callers that only need one feed per process
# ---------------------------------------------------------------------------

_default_server: Optional[TraceSocketServer] = None


def get_trace_server() -> TraceSocketServer:
    global _default_server
    if _default_server is None:
        _default_server = TraceSocketServer()
    return _default_server


def create_socket_app(other_app: Any = None) -> socketio.ASGIApp:
    """Wrap *other_app* inside the module-level server's ASGI application."""
    return get_trace_server().asgi_app(other_app)
