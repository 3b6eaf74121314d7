"""Seeding steps for a new temp directory: fixture clone and symlinks."""

import logging
import os
import shutil
from pathlib import Path
from typing import Sequence, Union

from tempfns.core.errors.seeding import (
    FixtureNotFoundError,
    SymlinkCollisionError,
    SymlinkTargetNotFoundError,
)
from tempfns.core.models import SymlinkSpec

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def clone_fixture(source: PathLike, destination: PathLike) -> None:
    """
    Copy all contents of ``source`` into ``destination`` recursively.

    Symlinks inside the fixture are copied as symlinks with their targets
    verbatim. The copy shares nothing with the source.

    Raises:
        FixtureNotFoundError: If ``source`` does not exist
    """
    source = Path(source)
    destination = Path(destination)
    if not source.exists():
        raise FixtureNotFoundError(source, destination)

    destination.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, destination, symlinks=True, dirs_exist_ok=True)
    logger.debug("Cloned fixture %s into %s", source, destination)


def check_symlink_targets(symlinks: Sequence[SymlinkSpec], git_root: PathLike) -> None:
    """
    Verify every symlink target exists.

    Raises:
        SymlinkTargetNotFoundError: Naming the first missing target
    """
    git_root = Path(git_root)
    for spec in symlinks:
        target_path = git_root / spec.to
        if not target_path.exists():
            raise SymlinkTargetNotFoundError(target_path, at=spec.at, to=spec.to)


def create_symlinks(
    symlinks: Sequence[SymlinkSpec],
    temp_dir: PathLike,
    git_root: PathLike,
) -> None:
    """
    Create symlinks inside ``temp_dir`` pointing at paths under ``git_root``.

    All-or-none: every target is checked to exist, and every link path is
    checked to be free, before any link is created.

    Raises:
        SymlinkTargetNotFoundError: Naming the first missing target
        SymlinkCollisionError: Naming the first link path already occupied
    """
    temp_dir = Path(temp_dir)
    git_root = Path(git_root)

    check_symlink_targets(symlinks, git_root)

    claimed = set()
    for spec in symlinks:
        symlink_path = temp_dir / spec.at
        if os.path.lexists(symlink_path) or symlink_path in claimed:
            raise SymlinkCollisionError(spec.at, symlink_path, to=spec.to)
        claimed.add(symlink_path)

    for spec in symlinks:
        symlink_path = temp_dir / spec.at
        symlink_path.parent.mkdir(parents=True, exist_ok=True)
        os.symlink(git_root / spec.to, symlink_path)
        logger.debug("Linked %s -> %s", symlink_path, git_root / spec.to)
