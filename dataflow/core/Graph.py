from typing import Optional, List, Dict, Any, Sequence, Callable

from .GraphPrimitives import Connection, EventBus
from .Node import Node
from .NodePort import Inlet, Outlet
from .Types import GraphEvent, NodeEvent, NODE_EVENT_RELAY


from logging import getLogger
logger = getLogger(__name__)


class Graph:
    """
    Root of the dataflow model and the only place structure changes.

    Owns every Node and Connection (arena dicts keyed by id) and keeps three
    views of each connection in step: the graph's own set and the connection
    lists of its two endpoint ports. Nothing here raises on bad input; refused
    operations return None / do nothing and log at DEBUG.

    Every change is announced on `events` (see GraphEvent), synchronously and
    only after the model is consistent again.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._connections: Dict[str, Connection] = {}
        # node id -> relay callback registered on that node's bus
        self._relays: Dict[str, Callable[..., None]] = {}
        self.events = EventBus(self)

    # ------------------------------------------------------------------
    # Subscription helpers
    # ------------------------------------------------------------------

    def subscribe(self, event: GraphEvent, callback: Callable[..., None]):
        self.events.subscribe(event, callback)

    def subscribe_all(self, callback: Callable[..., None]):
        self.events.subscribe_all(callback)

    def unsubscribe(self, event: GraphEvent, callback: Callable[..., None]):
        self.events.unsubscribe(event, callback)

    def unsubscribe_all(self, callback: Callable[..., None]):
        self.events.unsubscribe_all(callback)

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def newNode(self, pos: Sequence[Any], text: str, inlet_count: int, outlet_count: int) -> Node:
        """Allocation hook. Subclasses may return a Node subtype."""
        return Node(self, pos, text, inlet_count, outlet_count)

    def create(self, pos: Sequence[Any], text: str, inlet_count: int = 0, outlet_count: int = 0) -> Node:
        node = self.newNode(pos, text, inlet_count, outlet_count)
        return self._register_node(node)

    def create_typed(self,
                     pos: Sequence[Any],
                     text: str,
                     inlet_types: Sequence[str],
                     outlet_types: Sequence[str]) -> Node:
        node = self.newNode(pos, text, 0, 0)
        node.setInletTypes(inlet_types)
        node.setOutletTypes(outlet_types)
        return self._register_node(node)

    def _register_node(self, node: Node) -> Node:
        self._nodes[node.id] = node

        def relay(event: NodeEvent, value: Any, _node=node):
            graph_event = NODE_EVENT_RELAY.get(event)
            if graph_event is None:
                return
            self.events.emit(graph_event, _node, value)

        self._relays[node.id] = relay
        node.events.subscribe_all(relay)

        logger.debug(f"Graph: added {node!r}")
        self.events.emit(GraphEvent.NODE_ADDED, node)
        return node

    def remove(self, node: Optional[Node]):
        if node is None:
            return
        if not self.contains_node(node):
            return

        # connections first, so nobody ever sees an edge to a removed node
        for inlet in node.inlets():
            for connection in inlet.connections():
                self._remove_connection(connection)
        for outlet in node.outlets():
            for connection in outlet.connections():
                self._remove_connection(connection)

        # a connectionRemoved listener may already have removed the node
        if not self.contains_node(node):
            return

        relay = self._relays.pop(node.id, None)
        if relay is not None:
            node.events.unsubscribe_all(relay)

        del self._nodes[node.id]
        logger.debug(f"Graph: removed {node!r}")
        self.events.emit(GraphEvent.NODE_REMOVED, node)

    def clear(self):
        for node in list(self._nodes.values()):
            self.remove(node)

    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def get_node(self, node_id: str) -> Optional[Node]:
        return self._nodes.get(node_id)

    def contains_node(self, node: Optional[Node]) -> bool:
        if node is None:
            return False
        return self._nodes.get(node.id) is node

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    def newConnection(self, source: Outlet, dest: Inlet) -> Connection:
        """Allocation hook. Subclasses may return a Connection subtype."""
        return Connection(source, dest)

    def connect(self,
                source_node: Optional[Node],
                source_outlet: int,
                dest_node: Optional[Node],
                dest_inlet: int) -> Optional[Connection]:
        if source_node is None or dest_node is None:
            return None
        if self.find_connections(source_node, source_outlet, dest_node, dest_inlet):
            logger.debug(f"Graph: {source_node!r}.{source_outlet} -> {dest_node!r}.{dest_inlet} already connected")
            return None

        outlet = source_node.get_outlet(source_outlet)
        inlet = dest_node.get_inlet(dest_inlet)
        if outlet is None or inlet is None:
            logger.debug(f"Graph: no such port for {source_node!r}.{source_outlet} -> {dest_node!r}.{dest_inlet}")
            return None

        return self._add_connection(self.newConnection(outlet, inlet))

    def connect_connection(self, connection: Optional[Connection]) -> Optional[Connection]:
        if connection is None:
            return None
        if self.find_matching_connections(connection):
            logger.debug(f"Graph: {connection!r} already exists")
            return None
        return self._add_connection(connection)

    def disconnect(self,
                   source_node: Optional[Node],
                   source_outlet: int,
                   dest_node: Optional[Node],
                   dest_inlet: int):
        if source_node is None or dest_node is None:
            return
        for connection in self.find_connections(source_node, source_outlet, dest_node, dest_inlet):
            self._remove_connection(connection)

    def disconnect_connection(self, connection: Optional[Connection]):
        if connection is None:
            return
        for match in self.find_matching_connections(connection):
            self._remove_connection(match)

    def _add_connection(self, connection: Connection) -> Optional[Connection]:
        source, dest = connection.source, connection.dest
        if not isinstance(source, Outlet) or not isinstance(dest, Inlet):
            logger.debug(f"Graph: {connection!r} does not run from an outlet to an inlet")
            return None

        if not self.contains_node(source.node) or not self.contains_node(dest.node):
            logger.debug(f"Graph: {connection!r} has an endpoint outside this graph")
            return None

        # a port that was dropped from its node keeps its back-reference
        if source.node.get_outlet(source.index) is not source or dest.node.get_inlet(dest.index) is not dest:
            logger.debug(f"Graph: {connection!r} references a removed port")
            return None

        if self.find_matching_connections(connection):
            return None

        if not source.canMakeConnectionTo(dest) or not dest.canAcceptConnectionFrom(source):
            logger.debug(f"Graph: cannot connect outlet {source!r} to inlet {dest!r}")
            return None

        self._connections[connection.id] = connection
        source.addConnection(connection)
        dest.addConnection(connection)

        logger.debug(f"Graph: added {connection!r}")
        self.events.emit(GraphEvent.CONNECTION_ADDED, connection)
        return connection

    def _remove_connection(self, connection: Connection):
        if self._connections.get(connection.id) is not connection:
            return

        connection.source.removeConnection(connection)
        connection.dest.removeConnection(connection)
        del self._connections[connection.id]

        logger.debug(f"Graph: removed {connection!r}")
        self.events.emit(GraphEvent.CONNECTION_REMOVED, connection)

    def connections(self) -> List[Connection]:
        return list(self._connections.values())

    def get_connection(self, connection_id: str) -> Optional[Connection]:
        return self._connections.get(connection_id)

    def connections_of(self, node: Optional[Node]) -> List[Connection]:
        if node is None:
            return []
        return [c for c in self._connections.values()
                if c.source_node() is node or c.dest_node() is node]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def find_connections(self,
                         source_node: Optional[Node],
                         source_outlet: int,
                         dest_node: Optional[Node],
                         dest_inlet: int) -> List[Connection]:
        if source_node is None or dest_node is None:
            return []
        return [c for c in self._connections.values()
                if c.matches(source_node, source_outlet, dest_node, dest_inlet)]

    def find_connections_between(self, source: Optional[Outlet], dest: Optional[Inlet]) -> List[Connection]:
        if source is None or dest is None:
            return []
        return self.find_connections(source.node, source.index, dest.node, dest.index)

    def find_matching_connections(self, connection: Optional[Connection]) -> List[Connection]:
        if connection is None:
            return []
        return self.find_connections_between(connection.source, connection.dest)

    def __repr__(self):
        return f"Graph(nodes={len(self._nodes)}, connections={len(self._connections)})"
