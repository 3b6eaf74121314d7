"""TempFnsConfig loading logic.

Provides ``_TempFnsConfigLoader``, a mixin class whose methods are inherited by
``TempFnsConfig`` (defined in ``settings.py``). Splitting loading logic into its
own module keeps ``settings.py`` focused on field definitions and accessors.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Optional, cast

if TYPE_CHECKING:
    from tempfns.config.settings import TempFnsConfig

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # Python < 3.11 fallback

from tempfns.config.parsing import _parse_bool, _parse_positive_int, _try_parse_bool

logger = logging.getLogger(__name__)

ENV_PREFIX = "TEMPFNS_"


class _TempFnsConfigLoader:
    """Mixin providing config-loading methods for ``TempFnsConfig``.

    At runtime ``self`` is always a ``TempFnsConfig`` instance.
    """

    if TYPE_CHECKING:
        scratch_root: Path
        namespace: str
        max_age_ms: int
        prune_enabled: bool
        git_user_name: str
        git_user_email: str
        log_level: str
        structured_logging: bool

    @classmethod
    def from_env(cls, config_file: Optional[str] = None) -> "TempFnsConfig":
        """
        Create configuration from environment variables and optional TOML files.

        Priority (highest to lowest):
        1. Environment variables
        2. Project TOML config (./tempfns.toml or ./.tempfns.toml)
        3. User TOML config (~/.tempfns.toml)
        4. XDG config (~/.config/tempfns/config.toml)
        5. Default values
        """
        config = cls()

        toml_path = config_file or os.environ.get("TEMPFNS_CONFIG_FILE")
        if toml_path:
            config._load_toml(Path(toml_path))
        else:
            xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
            xdg_config = Path(xdg_config_home) / "tempfns" / "config.toml"
            if xdg_config.exists():
                config._load_toml(xdg_config)
                logger.debug("Loaded XDG config from %s", xdg_config)

            home_config = Path.home() / ".tempfns.toml"
            if home_config.exists():
                config._load_toml(home_config)
                logger.debug("Loaded user config from %s", home_config)

            project_config = Path("tempfns.toml")
            if project_config.exists():
                config._load_toml(project_config)
                logger.debug("Loaded project config from %s", project_config)
            else:
                legacy_config = Path(".tempfns.toml")
                if legacy_config.exists():
                    config._load_toml(legacy_config)
                    logger.debug("Loaded project config from %s", legacy_config)

        config._load_env()

        return cast("TempFnsConfig", config)

    def _load_toml(self, path: Path) -> None:
        """Load configuration from a TOML file."""
        if not path.exists():
            logger.warning("Config file not found: %s", path)
            return

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logger.error("Error loading config file %s: %s", path, e)
            return

        storage = _section(data, "storage", path)
        if "scratch_root" in storage:
            self.scratch_root = Path(storage["scratch_root"]).expanduser()
        if "namespace" in storage:
            self.namespace = str(storage["namespace"])

        prune = _section(data, "prune", path)
        if "max_age_ms" in prune:
            max_age = _parse_positive_int(prune["max_age_ms"], source=f"{path}: [prune].max_age_ms")
            if max_age is not None:
                self.max_age_ms = max_age
        if "enabled" in prune:
            self.prune_enabled = _parse_bool(prune["enabled"])

        git = _section(data, "git", path)
        if "user_name" in git:
            self.git_user_name = str(git["user_name"])
        if "user_email" in git:
            self.git_user_email = str(git["user_email"])

        log = _section(data, "logging", path)
        if "level" in log:
            self.log_level = str(log["level"]).upper()
        if "structured" in log:
            self.structured_logging = _parse_bool(log["structured"])

    def _load_env(self) -> None:
        """Load configuration from environment variables."""
        if scratch_root := os.environ.get("TEMPFNS_SCRATCH_ROOT"):
            self.scratch_root = Path(scratch_root).expanduser()

        if namespace := os.environ.get("TEMPFNS_NAMESPACE"):
            self.namespace = namespace

        if max_age := os.environ.get("TEMPFNS_MAX_AGE_MS"):
            parsed = _parse_positive_int(max_age, source="TEMPFNS_MAX_AGE_MS")
            if parsed is not None:
                self.max_age_ms = parsed

        if prune_enabled := os.environ.get("TEMPFNS_PRUNE_ENABLED"):
            parsed_bool = _try_parse_bool(prune_enabled)
            if parsed_bool is None:
                logger.warning("Ignoring TEMPFNS_PRUNE_ENABLED: not a boolean (%r)", prune_enabled)
            else:
                self.prune_enabled = parsed_bool

        if git_user_name := os.environ.get("TEMPFNS_GIT_USER_NAME"):
            self.git_user_name = git_user_name
        if git_user_email := os.environ.get("TEMPFNS_GIT_USER_EMAIL"):
            self.git_user_email = git_user_email

        if level := os.environ.get("TEMPFNS_LOG_LEVEL"):
            self.log_level = level.upper()
        if structured := os.environ.get("TEMPFNS_STRUCTURED_LOGGING"):
            self.structured_logging = _parse_bool(structured)


def _section(data: Dict[str, Any], name: str, path: Path) -> Dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, dict):
        logger.warning(
            "Ignoring [%s] in %s: expected table, got %s", name, path, type(value).__name__
        )
        return {}
    return value
