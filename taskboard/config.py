"""
Taskboard Config — Server Settings
===================================
One Settings object for the whole service. Defaults come first, then the
environment (only the listen port), then command-line flags.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace

DEFAULT_PORT = 3000
PORT_ENV = "TASKBOARD_PORT"


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime configuration for the taskboard server."""

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    log_level: str = "info"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    seed: bool = True             # Load the sample tasks at startup

    @classmethod
    def from_env(cls) -> Settings:
        """Defaults, with the port taken from TASKBOARD_PORT when set."""
        return cls(port=_env_int(PORT_ENV, DEFAULT_PORT))

    def override(self, **values) -> Settings:
        """Copy with every non-None value in `values` applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})
