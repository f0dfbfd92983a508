"""
TraceEvent type definitions for the graph event feed.
All events are plain dicts so they can be emitted over Socket.IO as-is.
"""
from typing import List, Literal, TypedDict, Union


class NodeAddedEvent(TypedDict):
    type: Literal["NODE_ADDED"]
    nodeId: str
    text: str
    pos: List[float]
    valid: bool
    inletTypes: List[str]
    outletTypes: List[str]
    ts: int


class NodeRemovedEvent(TypedDict):
    type: Literal["NODE_REMOVED"]
    nodeId: str
    ts: int


class NodeValidChangedEvent(TypedDict):
    type: Literal["NODE_VALID_CHANGED"]
    nodeId: str
    valid: bool
    ts: int


class NodePosChangedEvent(TypedDict):
    type: Literal["NODE_POS_CHANGED"]
    nodeId: str
    pos: List[float]
    ts: int


class NodeTextChangedEvent(TypedDict):
    type: Literal["NODE_TEXT_CHANGED"]
    nodeId: str
    text: str
    ts: int


class NodeInletCountChangedEvent(TypedDict):
    type: Literal["NODE_INLET_COUNT_CHANGED"]
    nodeId: str
    count: int
    ts: int


class NodeOutletCountChangedEvent(TypedDict):
    type: Literal["NODE_OUTLET_COUNT_CHANGED"]
    nodeId: str
    count: int
    ts: int


class ConnectionAddedEvent(TypedDict):
    type: Literal["CONNECTION_ADDED"]
    connectionId: str
    fromNodeId: str
    fromOutlet: int
    toNodeId: str
    toInlet: int
    ts: int


class ConnectionRemovedEvent(TypedDict):
    type: Literal["CONNECTION_REMOVED"]
    connectionId: str
    fromNodeId: str
    fromOutlet: int
    toNodeId: str
    toInlet: int
    ts: int


TraceEvent = Union[
    NodeAddedEvent,
    NodeRemovedEvent,
    NodeValidChangedEvent,
    NodePosChangedEvent,
    NodeTextChangedEvent,
    NodeInletCountChangedEvent,
    NodeOutletCountChangedEvent,
    ConnectionAddedEvent,
    ConnectionRemovedEvent,
]
