"""
dataflow
========
Data model for a patcher-style node/connection editor.

Public API
----------
    from dataflow import Graph, GraphEvent

    graph = Graph()
    osc = graph.create((0, 0), "osc", 1, 1)
    gain = graph.create((100, 0), "gain", 1, 1)
    graph.subscribe(GraphEvent.CONNECTION_ADDED, print)
    graph.connect(osc, 0, gain, 0)
"""
from dataflow.core import (
    Computation,
    Connection,
    EventBus,
    Graph,
    GraphEvent,
    Inlet,
    Node,
    NodeEvent,
    NodePort,
    Outlet,
    WILDCARD_TYPE,
)

__all__ = [
    "Computation",
    "Connection",
    "EventBus",
    "Graph",
    "GraphEvent",
    "Inlet",
    "Node",
    "NodeEvent",
    "NodePort",
    "Outlet",
    "WILDCARD_TYPE",
]
