"""Unified error hierarchy for tempfns.

All custom exception classes are defined in domain-specific modules within
this package. This __init__.py re-exports everything for convenient access.

Usage:
    from tempfns.core.errors.seeding import SymlinkCollisionError
    from tempfns.core.errors import InvariantViolationError, classify_error
"""

# --- Base / Registry ---
from tempfns.core.errors.base import ErrorKind, TempFnsError, classify_error, error_kinds

# --- Infrastructure errors ---
from tempfns.core.errors.infra import (
    EnvironmentUnsupportedError,
    GitCommandError,
    GitRootNotFoundError,
    InvariantViolationError,
)

# --- Seeding errors ---
from tempfns.core.errors.seeding import (
    FixtureNotFoundError,
    PathNotFoundError,
    SymlinkCollisionError,
    SymlinkTargetNotFoundError,
)

__all__ = [
    # Base / Registry
    "ErrorKind",
    "TempFnsError",
    "classify_error",
    "error_kinds",
    # Infrastructure
    "EnvironmentUnsupportedError",
    "GitCommandError",
    "GitRootNotFoundError",
    "InvariantViolationError",
    # Seeding
    "FixtureNotFoundError",
    "PathNotFoundError",
    "SymlinkCollisionError",
    "SymlinkTargetNotFoundError",
]
