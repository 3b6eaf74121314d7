"""Error classification registry.

Provides a centralized mapping from exception types to an ``ErrorKind``, so
callers (and the ``log_call`` decorator) can tell a bad request apart from a
broken environment or an internal invariant violation.

Usage:
    from tempfns.core.errors.base import ErrorKind, classify_error

    try:
        gen_temp_dir(slug="x", clone="missing/")
    except Exception as e:
        if classify_error(e) is ErrorKind.USER:
            ...  # caller asked for something impossible
        raise
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Type


class ErrorKind(str, Enum):
    """Broad category of a tempfns failure."""

    USER = "user"
    INTERNAL = "internal"
    ENVIRONMENT = "environment"


class TempFnsError(Exception):
    """Base class for every error raised by tempfns."""

    pass


def _build_mappings() -> Dict[Type[Exception], ErrorKind]:
    from tempfns.core.errors.infra import (
        EnvironmentUnsupportedError,
        GitCommandError,
        GitRootNotFoundError,
        InvariantViolationError,
    )
    from tempfns.core.errors.seeding import (
        FixtureNotFoundError,
        PathNotFoundError,
        SymlinkCollisionError,
        SymlinkTargetNotFoundError,
    )

    return {
        # --- Seeding (caller) errors ---
        PathNotFoundError: ErrorKind.USER,
        FixtureNotFoundError: ErrorKind.USER,
        SymlinkTargetNotFoundError: ErrorKind.USER,
        SymlinkCollisionError: ErrorKind.USER,
        # --- Infrastructure errors ---
        InvariantViolationError: ErrorKind.INTERNAL,
        GitCommandError: ErrorKind.ENVIRONMENT,
        GitRootNotFoundError: ErrorKind.ENVIRONMENT,
        EnvironmentUnsupportedError: ErrorKind.ENVIRONMENT,
    }


_ERROR_KINDS: Optional[Dict[Type[Exception], ErrorKind]] = None


def error_kinds() -> Dict[Type[Exception], ErrorKind]:
    """Return the exception-type registry, building it on first use."""
    global _ERROR_KINDS
    if _ERROR_KINDS is None:
        _ERROR_KINDS = _build_mappings()
    return _ERROR_KINDS


def classify_error(exc: BaseException) -> Optional[ErrorKind]:
    """Classify an exception, or return None if it is not a tempfns error.

    Looks up the exception's *exact* type first, then falls back to the
    nearest registered base class so subclasses inherit their parent's kind.
    """
    mappings = error_kinds()
    kind = mappings.get(type(exc))
    if kind is not None:
        return kind
    for cls in type(exc).__mro__[1:]:
        if cls in mappings:
            return mappings[cls]
    if isinstance(exc, TempFnsError):
        return ErrorKind.INTERNAL
    return None
