"""
GraphLogger — diagnostic observer that writes one log line per graph event.

It only listens; nothing it does feeds back into the model.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

from dataflow.core.Graph import Graph
from dataflow.core.Types import GraphEvent


class GraphLogger:
    def __init__(self,
                 graph: Graph,
                 logger: Optional[logging.Logger] = None,
                 level: int = logging.DEBUG) -> None:
        self.graph: Optional[Graph] = graph
        self.level = level
        self._logger = logger if logger is not None else logging.getLogger(__name__)
        graph.subscribe_all(self._on_event)

    def detach(self) -> None:
        if self.graph is not None:
            self.graph.unsubscribe_all(self._on_event)
            self.graph = None

    def _on_event(self, event: GraphEvent, *args: Any) -> None:
        details = " ".join(repr(arg) for arg in args)
        self._logger.log(self.level, f"{self.graph!r} {event.value} {details}")
