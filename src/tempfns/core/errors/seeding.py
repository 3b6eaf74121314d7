"""Errors raised while seeding a temp directory (fixture clone, symlinks).

All of these are raised before the offending step mutates anything.
"""

from pathlib import Path
from typing import Optional, Union

from tempfns.core.errors.base import TempFnsError

PathLike = Union[str, Path]


class PathNotFoundError(TempFnsError):
    """Raised when a path a caller asked us to read from does not exist.

    Attributes:
        path: The missing path.
    """

    def __init__(self, message: str, path: PathLike):
        self.path = str(path)
        super().__init__(message)


class FixtureNotFoundError(PathNotFoundError):
    """Raised when the ``clone`` source directory does not exist."""

    def __init__(self, path: PathLike, destination: Optional[PathLike] = None):
        self.destination = str(destination) if destination is not None else None
        super().__init__(f"fixture path not found: {path}", path)


class SymlinkTargetNotFoundError(PathNotFoundError):
    """Raised when a declared symlink ``to`` target does not exist."""

    def __init__(self, target: PathLike, at: str, to: str):
        self.at = at
        self.to = to
        super().__init__(f"symlink target not found: {target}", target)


class SymlinkCollisionError(TempFnsError):
    """Raised when a declared symlink ``at`` path is already occupied."""

    def __init__(self, at: str, symlink_path: PathLike, to: Optional[str] = None):
        self.at = at
        self.to = to
        self.symlink_path = str(symlink_path)
        super().__init__(f"symlink path collides with prior content: {at}")
