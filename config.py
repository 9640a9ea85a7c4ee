"""Configuration constants and runtime settings for the frontend dev server."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

HOST: str = "127.0.0.1"
PORT: int = 5173
STATIC_DIR: Path = Path(__file__).resolve().parent / "frontend"
SERVER_NAME: str = "frontend-dev-server"
SOCKET_TIMEOUT_SECS: int = 30
MAX_HEADER_BYTES: int = 16_384
MAX_TARGET_LENGTH: int = 8_192
READ_CHUNK_SIZE: int = 4_096
FILE_CHUNK_SIZE: int = 65_536
LISTEN_BACKLOG: int = 128

ENTRY_PAGES: dict[str, str] = {
    "Admin page": "achievement_reward_admin.html",
    "Front page": "achievement_reward_front.html",
}


@dataclass(frozen=True, slots=True)
class ServerConfig:
    host: str = HOST
    port: int = PORT
    base_dir: Path = STATIC_DIR

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_dir", Path(self.base_dir).resolve())

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ServerConfig":
        """Build the process-wide config from ``PORT``, ``HOST`` and ``STATIC_ROOT``."""
        env = os.environ if environ is None else environ
        return cls(
            host=env.get("HOST") or HOST,
            port=_parse_port(env.get("PORT")),
            base_dir=Path(env.get("STATIC_ROOT") or STATIC_DIR),
        )


def _parse_port(raw_value: str | None) -> int:
    if raw_value is None or not raw_value.strip():
        return PORT
    try:
        port = int(raw_value.strip())
    except ValueError:
        logger.warning("Ignoring non-numeric PORT=%r, using %s", raw_value, PORT)
        return PORT
    if not 0 <= port <= 65_535:
        logger.warning("Ignoring out-of-range PORT=%r, using %s", raw_value, PORT)
        return PORT
    return port
