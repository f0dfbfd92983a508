"""
TraceEmitter — fans graph trace payloads out to registered listeners
(sockets, loggers, test recorders).

GraphTracer is the bridge: it subscribes to a Graph's event bus and turns
every GraphEvent into the matching TraceEvent dict (see trace_types).
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional

from dataflow.core.Graph import Graph
from dataflow.core.GraphPrimitives import Connection
from dataflow.core.Node import Node
from dataflow.core.Types import GraphEvent

logger = logging.getLogger(__name__)


class TraceEmitter:
    def __init__(self) -> None:
        self._listeners: List[Callable[[Dict[str, Any]], None]] = []

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def on_trace(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        """Register a callback that receives every emitted trace event."""
        self._listeners.append(callback)

    def off_trace(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    def fire(self, payload: Dict[str, Any]) -> None:
        """Stamp the payload with a millisecond timestamp and broadcast it."""
        if "ts" not in payload:
            payload["ts"] = _now_ms()
        for cb in list(self._listeners):
            try:
                cb(payload)
            except Exception:
                # a broken listener must not break the model call that fired
                logger.exception(f"trace listener {cb!r} failed on {payload.get('type')}")


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------

def node_payload(node: Node) -> Dict[str, Any]:
    return {
        "type": GraphEvent.NODE_ADDED.name,
        "nodeId": node.id,
        "text": node.text,
        "pos": list(node.pos),
        "valid": node.isValid(),
        "inletTypes": [inlet.type for inlet in node.inlets()],
        "outletTypes": [outlet.type for outlet in node.outlets()],
    }


def connection_payload(connection: Connection, event: GraphEvent = GraphEvent.CONNECTION_ADDED) -> Dict[str, Any]:
    source_node = connection.source_node()
    dest_node = connection.dest_node()
    return {
        "type": event.name,
        "connectionId": connection.id,
        "fromNodeId": source_node.id if source_node is not None else None,
        "fromOutlet": connection.source.index,
        "toNodeId": dest_node.id if dest_node is not None else None,
        "toInlet": connection.dest.index,
    }


# value carried by each node field event -> payload key
_NODE_FIELD_KEYS = {
    GraphEvent.NODE_VALID_CHANGED: "valid",
    GraphEvent.NODE_POS_CHANGED: "pos",
    GraphEvent.NODE_TEXT_CHANGED: "text",
    GraphEvent.NODE_INLET_COUNT_CHANGED: "count",
    GraphEvent.NODE_OUTLET_COUNT_CHANGED: "count",
}


def build_payload(event: GraphEvent, *args: Any) -> Dict[str, Any]:
    """Convert one graph event (as delivered by the bus) to its trace payload."""
    if event == GraphEvent.NODE_ADDED:
        return node_payload(args[0])
    if event == GraphEvent.NODE_REMOVED:
        return {"type": event.name, "nodeId": args[0].id}
    if event in (GraphEvent.CONNECTION_ADDED, GraphEvent.CONNECTION_REMOVED):
        return connection_payload(args[0], event)

    node, value = args
    if event == GraphEvent.NODE_POS_CHANGED:
        value = list(value)
    return {"type": event.name, "nodeId": node.id, _NODE_FIELD_KEYS[event]: value}


def snapshot_payloads(graph: Optional[Graph]) -> List[Dict[str, Any]]:
    """Current state as the add-events a fresh subscriber would have seen."""
    if graph is None:
        return []
    now = _now_ms()
    payloads = [node_payload(node) for node in graph.nodes()]
    payloads += [connection_payload(c) for c in graph.connections()]
    for payload in payloads:
        payload["ts"] = now
    return payloads


class GraphTracer:
    """Subscribes to a Graph and fires a trace payload for every event."""

    def __init__(self, graph: Graph, emitter: TraceEmitter) -> None:
        self.graph: Optional[Graph] = graph
        self.emitter = emitter
        graph.subscribe_all(self._on_event)

    def detach(self) -> None:
        if self.graph is not None:
            self.graph.unsubscribe_all(self._on_event)
            self.graph = None

    def _on_event(self, event: GraphEvent, *args: Any) -> None:
        self.emitter.fire(build_payload(event, *args))


# ---------------------------------------------------------------------------
# Helper
# ---------------------------------------------------------------------------

def _now_ms() -> int:
    return int(time.time() * 1000)
