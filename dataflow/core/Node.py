
from typing import Optional, List, Sequence, Tuple, Any, TYPE_CHECKING
import logging
import uuid
import weakref

from .GraphPrimitives import EventBus
from .NodePort import NodePort, Inlet, Outlet
from .Types import NodeEvent, WILDCARD_TYPE

# To avoid circular imports
if TYPE_CHECKING:
    from .Graph import Graph
    from .Computation import Computation


# Get a logger for this module
logger = logging.getLogger(__name__)

Point = Tuple[Any, Any]


def _as_point(pos: Sequence[Any]) -> Point:
    x, y = pos
    return (x, y)


class Node:
    """
    Graph vertex with display metadata and two ordered port lists.

    Nodes are made by Graph.create() and should not be constructed directly.
    Each node has its own EventBus (`events`) carrying NodeEvent
    notifications; the owning Graph relays them to its bus with the node as
    subject. Ports are only ever appended or removed at the tail.
    """

    def __init__(self,
                 graph: Optional['Graph'],
                 pos: Sequence[Any] = (0, 0),
                 text: str = "",
                 inlet_count: int = 0,
                 outlet_count: int = 0):
        self.id = uuid.uuid4().hex
        self._graph_ref = weakref.ref(graph) if graph is not None else None

        self._valid = False
        self._pos = _as_point(pos)
        self._text = text

        self._inlets: List[Inlet] = []
        self._outlets: List[Outlet] = []
        self._computation: Optional['Computation'] = None

        self.events = EventBus(self)

        for _ in range(max(0, inlet_count)):
            self.add_inlet()
        for _ in range(max(0, outlet_count)):
            self.add_outlet()

    @classmethod
    def with_types(cls,
                   graph: Optional['Graph'],
                   pos: Sequence[Any],
                   text: str,
                   inlet_types: Sequence[str],
                   outlet_types: Sequence[str]) -> 'Node':
        node = cls(graph, pos, text)
        node.setInletTypes(inlet_types)
        node.setOutletTypes(outlet_types)
        return node

    @property
    def graph(self) -> Optional['Graph']:
        if self._graph_ref is None:
            return None
        return self._graph_ref()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def pos(self) -> Point:
        return self._pos

    @property
    def text(self) -> str:
        return self._text

    def isValid(self) -> bool:
        return self._valid

    def setValid(self, valid: bool):
        valid = bool(valid)
        if self._valid == valid:
            return
        self._valid = valid
        self.events.emit(NodeEvent.VALID_CHANGED, valid)

    def setPos(self, pos: Sequence[Any]):
        pos = _as_point(pos)
        if self._pos == pos:
            return
        self._pos = pos
        self.events.emit(NodeEvent.POS_CHANGED, pos)

    def setText(self, text: str):
        if self._text == text:
            return
        self._text = text
        self.events.emit(NodeEvent.TEXT_CHANGED, text)

    # ------------------------------------------------------------------
    # Computation hook
    # ------------------------------------------------------------------

    def computation(self) -> Optional['Computation']:
        return self._computation

    def setComputation(self, computation: Optional['Computation']):
        if computation is self._computation:
            return

        if self._computation is not None:
            self._computation._bind(None)

        self._computation = computation

        if computation is not None:
            previous = computation.node
            if previous is not None and previous is not self:
                # a hook serves one node at a time
                previous._computation = None
            computation._bind(self)

    # ------------------------------------------------------------------
    # Inlets
    # ------------------------------------------------------------------

    def inlets(self) -> List[Inlet]:
        return list(self._inlets)

    def get_inlet(self, index: int) -> Optional[Inlet]:
        if 0 <= index < len(self._inlets):
            return self._inlets[index]
        return None

    def inlet_count(self) -> int:
        return len(self._inlets)

    def add_inlet(self, name: str = "", type: str = WILDCARD_TYPE) -> Inlet:
        inlet = Inlet(self, len(self._inlets), name, type)
        self._inlets.append(inlet)
        self.events.emit(NodeEvent.INLET_COUNT_CHANGED, self.inlet_count())
        return inlet

    def remove_last_inlet(self):
        if not self._inlets:
            return
        inlet = self._inlets[-1]
        self._drop_connections(inlet)
        # a listener may have reshaped the inlets during the cascade
        if not self._inlets or self._inlets[-1] is not inlet:
            return
        self._inlets.pop()
        self.events.emit(NodeEvent.INLET_COUNT_CHANGED, self.inlet_count())

    def setInletCount(self, count: int):
        count = max(0, count)
        if self.inlet_count() == count:
            return

        with self.events.suppressed():
            while self.inlet_count() < count:
                self.add_inlet()
            while self.inlet_count() > count:
                self.remove_last_inlet()

        self.events.emit(NodeEvent.INLET_COUNT_CHANGED, count)

    def setInletTypes(self, types: Sequence[str]):
        old_count = self.inlet_count()

        with self.events.suppressed():
            while self.inlet_count() > 0:
                self.remove_last_inlet()
            for port_type in types:
                self.add_inlet("", port_type)

        # NOTE: a same-length retype emits nothing
        new_count = self.inlet_count()
        if old_count != new_count:
            self.events.emit(NodeEvent.INLET_COUNT_CHANGED, new_count)

    # ------------------------------------------------------------------
    # Outlets
    # ------------------------------------------------------------------

    def outlets(self) -> List[Outlet]:
        return list(self._outlets)

    def get_outlet(self, index: int) -> Optional[Outlet]:
        if 0 <= index < len(self._outlets):
            return self._outlets[index]
        return None

    def outlet_count(self) -> int:
        return len(self._outlets)

    def add_outlet(self, name: str = "", type: str = WILDCARD_TYPE) -> Outlet:
        outlet = Outlet(self, len(self._outlets), name, type)
        self._outlets.append(outlet)
        self.events.emit(NodeEvent.OUTLET_COUNT_CHANGED, self.outlet_count())
        return outlet

    def remove_last_outlet(self):
        if not self._outlets:
            return
        outlet = self._outlets[-1]
        self._drop_connections(outlet)
        if not self._outlets or self._outlets[-1] is not outlet:
            return
        self._outlets.pop()
        self.events.emit(NodeEvent.OUTLET_COUNT_CHANGED, self.outlet_count())

    def setOutletCount(self, count: int):
        count = max(0, count)
        if self.outlet_count() == count:
            return

        with self.events.suppressed():
            while self.outlet_count() < count:
                self.add_outlet()
            while self.outlet_count() > count:
                self.remove_last_outlet()

        self.events.emit(NodeEvent.OUTLET_COUNT_CHANGED, count)

    def setOutletTypes(self, types: Sequence[str]):
        old_count = self.outlet_count()

        with self.events.suppressed():
            while self.outlet_count() > 0:
                self.remove_last_outlet()
            for port_type in types:
                self.add_outlet("", port_type)

        new_count = self.outlet_count()
        if old_count != new_count:
            self.events.emit(NodeEvent.OUTLET_COUNT_CHANGED, new_count)

    # ------------------------------------------------------------------

    def _drop_connections(self, port: NodePort):
        # Connections go through the Graph so its set and event feed stay in step
        graph = self.graph
        for connection in port.connections():
            if graph is not None:
                graph.disconnect_connection(connection)
            else:
                port.removeConnection(connection)

    def __repr__(self):
        return f"Node({self.id[:8]}, text={self._text!r})"
