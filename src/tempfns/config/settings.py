"""TempFnsConfig dataclass and global configuration state.

This module defines the ``TempFnsConfig`` class (field declarations and simple
accessor methods) and the global ``get_config`` / ``set_config`` helpers.
Loading logic lives in the ``_TempFnsConfigLoader`` mixin (``loader.py``).
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from tempfns.config.loader import _TempFnsConfigLoader

SEVEN_DAYS_MS: int = 7 * 24 * 60 * 60 * 1000


@dataclass
class TempFnsConfig(_TempFnsConfigLoader):
    """Temp directory configuration with support for env vars and TOML overrides."""

    # Physical storage: {scratch_root}/{namespace}/{repo}/.temp
    scratch_root: Path = field(default_factory=lambda: Path("/tmp"))
    namespace: str = "tempfns"

    # Garbage collection
    max_age_ms: int = SEVEN_DAYS_MS
    prune_enabled: bool = True

    # Repo-local identity used for git-enabled temp dirs
    git_user_name: str = "tempfns"
    git_user_email: str = "tempfns@test.local"

    # Logging configuration
    log_level: str = "WARNING"
    structured_logging: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on settings."""
        level = getattr(logging, self.log_level, logging.WARNING)

        if self.structured_logging:
            formatter = logging.Formatter(
                '{"timestamp":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}'
            )
        else:
            formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

        handler = logging.StreamHandler()
        handler.setFormatter(formatter)

        root_logger = logging.getLogger("tempfns")
        root_logger.setLevel(level)
        root_logger.addHandler(handler)


# Global configuration instance
_config: Optional[TempFnsConfig] = None


def get_config() -> TempFnsConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = TempFnsConfig.from_env()
    return _config


def set_config(config: Optional[TempFnsConfig]) -> None:
    """Set the global configuration instance (None reloads on next access)."""
    global _config
    _config = config
