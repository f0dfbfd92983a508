import logging

import pytest

from dataflow.core.Graph import Graph
from dataflow.core.GraphPrimitives import EventBus


class TestEventBus:

    def setup_method(self):
        self.bus = EventBus()
        self.calls = []

    def test_delivery_in_subscription_order(self):
        self.bus.subscribe("tick", lambda v: self.calls.append(("first", v)))
        self.bus.subscribe_all(lambda e, v: self.calls.append(("all", e, v)))
        self.bus.subscribe("tick", lambda v: self.calls.append(("second", v)))

        self.bus.emit("tick", 1)

        assert self.calls == [("first", 1), ("all", "tick", 1), ("second", 1)]

    def test_only_matching_event(self):
        self.bus.subscribe("a", self.calls.append)
        self.bus.emit("b", 1)
        self.bus.emit("a", 2)

        assert self.calls == [2]

    def test_subscribe_is_idempotent(self):
        self.bus.subscribe("a", self.calls.append)
        self.bus.subscribe("a", self.calls.append)
        self.bus.emit("a", 1)

        assert self.calls == [1]
        assert self.bus.listener_count() == 1

    def test_unsubscribe(self):
        self.bus.subscribe("a", self.calls.append)
        self.bus.unsubscribe("a", self.calls.append)
        self.bus.unsubscribe("a", self.calls.append)  # not subscribed anymore
        self.bus.emit("a", 1)

        assert self.calls == []

    def test_unsubscribe_during_emit(self):
        def once(value):
            self.calls.append(("once", value))
            self.bus.unsubscribe("a", once)

        self.bus.subscribe("a", once)
        self.bus.subscribe("a", lambda v: self.calls.append(("always", v)))

        self.bus.emit("a", 1)
        self.bus.emit("a", 2)

        assert self.calls == [("once", 1), ("always", 1), ("always", 2)]

    def test_suppressed(self):
        self.bus.subscribe("a", self.calls.append)

        with self.bus.suppressed():
            assert self.bus.isSuppressed() is True
            with self.bus.suppressed():
                self.bus.emit("a", 1)
            self.bus.emit("a", 2)

        assert self.bus.isSuppressed() is False
        self.bus.emit("a", 3)
        assert self.calls == [3]

    def test_failing_listener_is_logged(self, caplog):
        caplog.set_level(logging.ERROR)

        def broken(value):
            raise ValueError("listener exploded")

        self.bus.subscribe("a", broken)
        self.bus.subscribe("a", self.calls.append)
        self.bus.emit("a", 1)

        assert self.calls == [1]
        assert "listener exploded" in caplog.text

    def test_non_callable_rejected(self):
        with pytest.raises(TypeError):
            self.bus.subscribe("a", "not a function")
        with pytest.raises(ValueError):
            self.bus.subscribe(None, self.calls.append)

    def test_failure_log_shows_current_owner(self, caplog):
        caplog.set_level(logging.ERROR)
        graph = Graph()

        def broken(event, *args):
            raise RuntimeError("boom")

        graph.subscribe_all(broken)
        graph.create((0, 0), "first", 0, 0)
        graph.create((0, 0), "second", 0, 0)

        messages = [r.getMessage() for r in caplog.records]
        assert messages[0].startswith("Graph(nodes=1, connections=0)")
        assert messages[1].startswith("Graph(nodes=2, connections=0)")

    def test_owner_is_not_kept_alive(self):
        class Owner:
            pass

        owner = Owner()
        bus = EventBus(owner)
        del owner

        assert bus._owner_repr() == "EventBus"
