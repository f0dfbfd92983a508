
from typing import Any, Optional, Sequence, TYPE_CHECKING
import logging
import weakref

from .Interface import IComputation

if TYPE_CHECKING:
    from .Node import Node
    from .NodePort import Inlet, Outlet

logger = logging.getLogger(__name__)


class Computation(IComputation):
    """
    Optional per-node hook that can push payloads through the node's outlets.

    Bind it with node.setComputation(). sendData() hands the payload straight
    to every destination node that has a hook of its own; there is no queue
    and the payload is never inspected.
    """

    def __init__(self):
        self._node_ref = None

    @property
    def node(self) -> Optional['Node']:
        if self._node_ref is None:
            return None
        return self._node_ref()

    def _bind(self, node: Optional['Node']):
        self._node_ref = weakref.ref(node) if node is not None else None

    def onDataReceived(self, inlet_index: int, payload: Any):
        pass

    def sendData(self, outlet_index: int, payload: Any):
        node = self.node
        if node is None:
            logger.debug(f"sendData({outlet_index}) from an unbound computation ignored")
            return

        outlet = node.get_outlet(outlet_index)
        if outlet is None:
            logger.debug(f"sendData: {node!r} has no outlet {outlet_index}")
            return

        for connection in outlet.connections():
            dest_node = connection.dest_node()
            if dest_node is None:
                continue
            hook = dest_node.computation()
            if hook is not None:
                hook.onDataReceived(connection.dest.index, payload)

    # --- convenience proxies onto the bound node ---

    def inlet(self, index: int) -> Optional['Inlet']:
        return self.node.get_inlet(index) if self.node is not None else None

    def outlet(self, index: int) -> Optional['Outlet']:
        return self.node.get_outlet(index) if self.node is not None else None

    def inletCount(self) -> int:
        return self.node.inlet_count() if self.node is not None else 0

    def outletCount(self) -> int:
        return self.node.outlet_count() if self.node is not None else 0

    def setInletCount(self, count: int):
        if self.node is not None:
            self.node.setInletCount(count)

    def setOutletCount(self, count: int):
        if self.node is not None:
            self.node.setOutletCount(count)

    def setInletTypes(self, types: Sequence[str]):
        if self.node is not None:
            self.node.setInletTypes(types)

    def setOutletTypes(self, types: Sequence[str]):
        if self.node is not None:
            self.node.setOutletTypes(types)
