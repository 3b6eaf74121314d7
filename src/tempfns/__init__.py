"""tempfns: ephemeral, auto-pruned temp directories for tests."""

from tempfns.config import TempFnsConfig, get_config, set_config
from tempfns.core.errors import (
    EnvironmentUnsupportedError,
    FixtureNotFoundError,
    GitCommandError,
    GitRootNotFoundError,
    InvariantViolationError,
    PathNotFoundError,
    SymlinkCollisionError,
    SymlinkTargetNotFoundError,
    TempFnsError,
)
from tempfns.core.naming import is_temp_dir
from tempfns.core.tempdir import gen_temp_dir

__all__ = [
    "gen_temp_dir",
    "is_temp_dir",
    "TempFnsConfig",
    "get_config",
    "set_config",
    "TempFnsError",
    "EnvironmentUnsupportedError",
    "FixtureNotFoundError",
    "GitCommandError",
    "GitRootNotFoundError",
    "InvariantViolationError",
    "PathNotFoundError",
    "SymlinkCollisionError",
    "SymlinkTargetNotFoundError",
]
