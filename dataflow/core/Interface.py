from __future__ import annotations
from typing import Optional, List, Any, TYPE_CHECKING

from abc import ABC, abstractmethod

if TYPE_CHECKING:
    from .Node import Node
    from .GraphPrimitives import Connection


class INodePort(ABC):
    @property
    @abstractmethod
    def node(self) -> Optional['Node']:
        pass

    @property
    @abstractmethod
    def index(self) -> int:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def type(self) -> str:
        pass

    @abstractmethod
    def isInlet(self) -> bool:
        pass

    @abstractmethod
    def isOutlet(self) -> bool:
        pass

    @abstractmethod
    def connections(self) -> List['Connection']:
        pass


class IComputation(ABC):
    """
    Capability a Node may optionally hold. The model never calls into it
    except to deliver data pushed by another hook through a connection.
    """

    @abstractmethod
    def onDataReceived(self, inlet_index: int, payload: Any):
        pass

    @abstractmethod
    def sendData(self, outlet_index: int, payload: Any):
        pass
