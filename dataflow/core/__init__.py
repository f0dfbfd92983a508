from .Types import WILDCARD_TYPE, PortDirection, NodeEvent, GraphEvent, NODE_EVENT_RELAY
from .GraphPrimitives import EventBus, Connection
from .NodePort import NodePort, Inlet, Outlet, types_compatible
from .Node import Node
from .Computation import Computation
from .Graph import Graph
