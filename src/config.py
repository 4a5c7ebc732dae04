"""Runtime configuration."""

import logging
import os
from dataclasses import dataclass

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass
class Config:
    """Configuration loaded from environment variables."""

    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            log_level=_log_level(os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        )


def _log_level(name: str) -> str:
    """Return the upper-cased level name, or the default if logging does not know it."""
    name = name.strip().upper()
    # getLevelName maps known names to their numeric level, anything else to a string
    if not isinstance(logging.getLevelName(name), int):
        return DEFAULT_LOG_LEVEL
    return name
