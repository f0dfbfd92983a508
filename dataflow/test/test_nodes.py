import pytest

from dataflow.core.Graph import Graph
from dataflow.core.Node import Node
from dataflow.core.NodePort import Inlet, Outlet
from dataflow.core.Types import NodeEvent


class TestNode:

    def setup_method(self):
        self.graph = Graph()
        self.seen = []

    def teardown_method(self):
        self.graph.clear()

    @pytest.fixture
    def node(self):
        """A registered node with one inlet and one outlet, watched by self.seen"""
        node = self.graph.create((0, 0), "test_node", 1, 1)
        node.events.subscribe_all(lambda event, value: self.seen.append((event, value)))
        return node

    def test_node_initialization(self, node):
        assert node.text == "test_node"
        assert node.pos == (0, 0)
        assert node.isValid() is False
        assert node.computation() is None
        assert len(node.id) == 32
        assert isinstance(node.get_inlet(0), Inlet)
        assert isinstance(node.get_outlet(0), Outlet)

    def test_set_text_noop(self, node):
        """Setting the current text emits nothing"""
        node.setText("test_node")
        assert self.seen == []

        node.setText("gain")
        assert self.seen == [(NodeEvent.TEXT_CHANGED, "gain")]

    def test_set_pos(self, node):
        node.setPos((10, 20))
        node.setPos([10, 20])  # same point, different sequence type

        assert node.pos == (10, 20)
        assert self.seen == [(NodeEvent.POS_CHANGED, (10, 20))]

    def test_set_valid(self, node):
        node.setValid(False)
        node.setValid(True)
        node.setValid(True)

        assert node.isValid() is True
        assert self.seen == [(NodeEvent.VALID_CHANGED, True)]

    def test_port_accessors(self, node):
        assert node.get_inlet(1) is None
        assert node.get_outlet(-1) is None
        assert node.inlet_count() == 1
        assert node.outlet_count() == 1

        # returned lists are copies
        node.inlets().clear()
        assert node.inlet_count() == 1

    def test_add_ports_at_tail(self, node):
        inlet = node.add_inlet("freq", "float")
        outlet = node.add_outlet("sig")

        assert inlet.index == 1
        assert inlet.name == "freq"
        assert inlet.type == "float"
        assert outlet.index == 1
        assert outlet.type == "*"
        assert node.inlets()[-1] is inlet
        assert self.seen == [
            (NodeEvent.INLET_COUNT_CHANGED, 2),
            (NodeEvent.OUTLET_COUNT_CHANGED, 2),
        ]

    def test_remove_last_port(self, node):
        first = node.get_inlet(0)
        node.add_inlet()
        self.seen.clear()

        node.remove_last_inlet()
        assert node.inlets() == [first]

        node.remove_last_outlet()
        node.remove_last_outlet()  # already empty

        assert node.outlet_count() == 0
        assert self.seen == [
            (NodeEvent.INLET_COUNT_CHANGED, 1),
            (NodeEvent.OUTLET_COUNT_CHANGED, 0),
        ]

    def test_set_inlet_count_single_event(self, node):
        node.setInletCount(4)
        assert node.inlet_count() == 4
        assert [p.index for p in node.inlets()] == [0, 1, 2, 3]

        node.setInletCount(2)
        assert node.inlet_count() == 2

        assert self.seen == [
            (NodeEvent.INLET_COUNT_CHANGED, 4),
            (NodeEvent.INLET_COUNT_CHANGED, 2),
        ]

    def test_set_count_unchanged_is_noop(self, node):
        node.setInletCount(1)
        node.setOutletCount(1)
        assert self.seen == []

    def test_set_count_negative_clamps(self, node):
        node.setOutletCount(-3)
        assert node.outlet_count() == 0
        assert self.seen == [(NodeEvent.OUTLET_COUNT_CHANGED, 0)]

    def test_shrink_keeps_head_ports(self, node):
        node.setOutletCount(3)
        head = node.outlets()[:2]

        node.setOutletCount(2)

        assert node.outlets() == head

    def test_set_inlet_types(self, node):
        node.setInletTypes(["int", "float", "*"])

        assert [p.type for p in node.inlets()] == ["int", "float", "*"]
        assert all(p.name == "" for p in node.inlets())
        assert self.seen == [(NodeEvent.INLET_COUNT_CHANGED, 3)]

    def test_set_outlet_types_replaces_ports(self, node):
        old = node.get_outlet(0)
        node.setOutletTypes(["bang", "float"])

        assert node.get_outlet(0) is not old
        assert [p.type for p in node.outlets()] == ["bang", "float"]
        assert self.seen == [(NodeEvent.OUTLET_COUNT_CHANGED, 2)]

    def test_same_length_retype_is_silent(self, node):
        """Known gap: retyping without a count change produces no event at all"""
        node.setInletTypes(["int"])
        node.setOutletTypes(["float"])

        assert node.get_inlet(0).type == "int"
        assert node.get_outlet(0).type == "float"
        assert self.seen == []

    def test_node_without_graph(self):
        """A bare node still manages its own ports"""
        node = Node(None, (1, 2), "loose", 2, 0)

        assert node.graph is None
        node.setInletCount(0)
        assert node.inlet_count() == 0

    def test_with_types(self):
        node = Node.with_types(None, (0, 0), "typed", ["a"], ["b", "c"])

        assert [p.type for p in node.inlets()] == ["a"]
        assert [p.type for p in node.outlets()] == ["b", "c"]

    def test_repr(self, node):
        assert repr(node).startswith("Node(")
        assert "test_node" in repr(node)
