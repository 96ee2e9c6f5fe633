"""Engine configuration resolved from the environment.

SQLGRID_BUSY_TIMEOUT  seconds to wait for another writer's lock (float, 0..600)
SQLGRID_FOREIGN_KEYS  "1" turns on PRAGMA foreign_keys for opened files
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from helpers.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_BUSY_TIMEOUT = 5.0
MAX_BUSY_TIMEOUT = 600.0


@dataclass
class EngineConfig:
    busy_timeout: float = DEFAULT_BUSY_TIMEOUT
    foreign_keys: bool = False

    @classmethod
    def from_env(cls) -> "EngineConfig":
        raw = os.environ.get("SQLGRID_BUSY_TIMEOUT")
        busy_timeout = DEFAULT_BUSY_TIMEOUT
        if raw is not None:
            try:
                busy_timeout = float(raw)
            except ValueError:
                logger.warning(f"Invalid SQLGRID_BUSY_TIMEOUT={raw!r}, using {DEFAULT_BUSY_TIMEOUT}")
        if busy_timeout < 0 or busy_timeout > MAX_BUSY_TIMEOUT:
            clamped = min(MAX_BUSY_TIMEOUT, max(0.0, busy_timeout))
            logger.warning(f"SQLGRID_BUSY_TIMEOUT={busy_timeout} out of range, clamped to {clamped}")
            busy_timeout = clamped
        foreign_keys = os.environ.get("SQLGRID_FOREIGN_KEYS", "0").lower() in {"1", "true", "yes", "on"}
        return cls(busy_timeout=busy_timeout, foreign_keys=foreign_keys)
