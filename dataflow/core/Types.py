from enum import Enum, auto
from typing import Dict

# A port declared with this type accepts/produces any type
WILDCARD_TYPE = "*"


class PortDirection(Enum):
    INPUT = auto()
    OUTPUT = auto()


class NodeEvent(Enum):
    """Events emitted on a Node's own bus. The payload is the new value."""
    VALID_CHANGED = "validChanged"
    POS_CHANGED = "posChanged"
    TEXT_CHANGED = "textChanged"
    INLET_COUNT_CHANGED = "inletCountChanged"
    OUTLET_COUNT_CHANGED = "outletCountChanged"


class GraphEvent(Enum):
    """Events emitted on the Graph bus."""
    NODE_ADDED = "nodeAdded"                        # (node)
    NODE_REMOVED = "nodeRemoved"                    # (node)
    NODE_VALID_CHANGED = "nodeValidChanged"         # (node, valid)
    NODE_POS_CHANGED = "nodePosChanged"             # (node, pos)
    NODE_TEXT_CHANGED = "nodeTextChanged"           # (node, text)
    NODE_INLET_COUNT_CHANGED = "nodeInletCountChanged"    # (node, count)
    NODE_OUTLET_COUNT_CHANGED = "nodeOutletCountChanged"  # (node, count)
    CONNECTION_ADDED = "connectionAdded"            # (connection)
    CONNECTION_REMOVED = "connectionRemoved"        # (connection)


# Node-scoped event -> graph-scoped event carrying the node as subject.
# A Node subclass adding a field only needs an entry here.
NODE_EVENT_RELAY: Dict[NodeEvent, GraphEvent] = {
    NodeEvent.VALID_CHANGED: GraphEvent.NODE_VALID_CHANGED,
    NodeEvent.POS_CHANGED: GraphEvent.NODE_POS_CHANGED,
    NodeEvent.TEXT_CHANGED: GraphEvent.NODE_TEXT_CHANGED,
    NodeEvent.INLET_COUNT_CHANGED: GraphEvent.NODE_INLET_COUNT_CHANGED,
    NodeEvent.OUTLET_COUNT_CHANGED: GraphEvent.NODE_OUTLET_COUNT_CHANGED,
}
