
from typing import List, Optional, TYPE_CHECKING
import weakref

import logging

from .Interface import INodePort
from .Types import PortDirection, WILDCARD_TYPE

# Get a logger for this module
logger = logging.getLogger(__name__)

# To avoid circular imports only for typing
if TYPE_CHECKING:
    from .Node import Node
    from .GraphPrimitives import Connection


def types_compatible(type_a: str, type_b: str) -> bool:
    # Allow connection if types match, or if one of them is the wildcard
    if type_a == WILDCARD_TYPE or type_b == WILDCARD_TYPE:
        return True
    return type_a == type_b


class NodePort(INodePort):
    """
    Attachment point on a Node. Holds a weak reference back to its node and
    the connections currently attached to it; the Graph owns the connections.
    """

    direction: PortDirection

    def __init__(self,
                 node: 'Node',
                 index: int,
                 name: str = "",
                 type: str = WILDCARD_TYPE):

        self._node_ref = weakref.ref(node) if node is not None else None
        self._index = index
        self._name = name
        self._type = type
        self._connections: List['Connection'] = []

    @property
    def node(self) -> Optional['Node']:
        if self._node_ref is None:
            return None
        return self._node_ref()

    @property
    def index(self) -> int:
        return self._index

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> str:
        return self._type

    def isWildcard(self) -> bool:
        return self._type == WILDCARD_TYPE

    def isInlet(self) -> bool:
        return self.direction == PortDirection.INPUT

    def isOutlet(self) -> bool:
        return self.direction == PortDirection.OUTPUT

    # The Graph keeps these in step with its own connection set. Nothing else
    # should call them.
    def addConnection(self, connection: 'Connection'):
        if connection not in self._connections:
            self._connections.append(connection)

    def removeConnection(self, connection: 'Connection'):
        self._connections = [c for c in self._connections if c is not connection]

    def connections(self) -> List['Connection']:
        return list(self._connections)

    def isConnected(self) -> bool:
        return len(self._connections) > 0

    def __repr__(self):
        return f"{type(self).__name__}(node={self.node!r}, index={self._index}, type={self._type!r})"


class Inlet(NodePort):
    direction = PortDirection.INPUT

    def canAcceptConnectionFrom(self, outlet: Optional['Outlet']) -> bool:
        if outlet is None or not outlet.isOutlet():
            return False
        return types_compatible(self.type, outlet.type)


class Outlet(NodePort):
    direction = PortDirection.OUTPUT

    def canMakeConnectionTo(self, inlet: Optional[Inlet]) -> bool:
        if inlet is None or not inlet.isInlet():
            return False
        return types_compatible(inlet.type, self.type)
