"""
Server settings, read from the environment.

A .env file in the working directory is loaded first (python-dotenv) so
local overrides don't need a manual `export`.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from dotenv import load_dotenv


@dataclass(frozen=True)
class ServerConfig:
    host: str = "127.0.0.1"
    port: int = 3001
    log_level: str = "INFO"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ServerConfig":
        if environ is None:
            load_dotenv()
            environ = os.environ

        raw_port = environ.get("DATAFLOW_PORT", "3001")
        try:
            port = int(raw_port)
        except ValueError:
            raise ValueError(f"DATAFLOW_PORT must be an integer, got {raw_port!r}")
        if not 0 < port < 65536:
            raise ValueError(f"DATAFLOW_PORT out of range: {port}")

        origins = [o.strip() for o in environ.get("DATAFLOW_CORS_ORIGINS", "*").split(",") if o.strip()]

        return cls(
            host=environ.get("DATAFLOW_HOST", "127.0.0.1"),
            port=port,
            log_level=environ.get("DATAFLOW_LOG_LEVEL", "INFO").upper(),
            cors_origins=origins or ["*"],
        )

    def socketio_origins(self):
        # python-socketio wants the bare string for "allow all"
        if self.cors_origins == ["*"]:
            return "*"
        return list(self.cors_origins)
