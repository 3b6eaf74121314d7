"""Parsing helpers for configuration values.

Provides boolean and positive-integer parsing shared by the TOML and
environment layers of the config loader.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off"}


def _parse_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def _try_parse_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return None


def _parse_positive_int(value: Any, *, source: str) -> Optional[int]:
    """Parse a strictly positive integer, warning and returning None otherwise.

    Args:
        value: Raw value from TOML or the environment
        source: Human-readable origin used in the warning message

    Returns:
        The parsed integer, or None when the value is not a positive integer
    """
    if isinstance(value, bool):
        logger.warning("Ignoring %s: expected a positive integer, got %r", source, value)
        return None
    try:
        parsed = int(str(value).strip().replace("_", ""))
    except (TypeError, ValueError):
        logger.warning("Ignoring %s: expected a positive integer, got %r", source, value)
        return None
    if parsed <= 0:
        logger.warning("Ignoring %s: must be positive, got %d", source, parsed)
        return None
    return parsed
