"""
Trace feed server: serves a Graph's event stream over Socket.IO.

Start with:
    python -m dataflow.server.main

Or via uvicorn directly:
    uvicorn dataflow.server.main:get_app --factory --port 3001
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import uvicorn

from dataflow.core.Graph import Graph
from dataflow.server.config import ServerConfig
from dataflow.trace.graph_logger import GraphLogger
from dataflow.trace.socket_server import TraceSocketServer

logger = logging.getLogger(__name__)


def seed_demo(graph: Graph) -> None:
    """Small patch so a freshly connected canvas has something to draw."""
    osc = graph.create((0, 0), "osc", 1, 1)
    gain = graph.create((100, 0), "gain", 1, 1)
    graph.connect(osc, 0, gain, 0)


def build_app(config: ServerConfig, graph: Optional[Graph] = None):
    if graph is None:
        graph = Graph()
        seed_demo(graph)

    server = TraceSocketServer(cors_allowed_origins=config.socketio_origins())
    server.attach_graph(graph)
    GraphLogger(graph, level=logging.INFO)
    return server.asgi_app(), server


# ---------------------------------------------------------------------------
# App factory for `uvicorn dataflow.server.main:get_app --factory`
# ---------------------------------------------------------------------------

_app: Optional[Any] = None


def get_app():
    """Build the app from the environment on first use and reuse it afterwards."""
    global _app
    if _app is None:
        _app, _ = build_app(ServerConfig.from_env())
    return _app


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    config = ServerConfig.from_env()
    logging.basicConfig(level=config.log_level)
    logger.info(f"serving graph trace feed on {config.host}:{config.port}")
    app, _ = build_app(config)
    uvicorn.run(
        app,
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
