"""Public entry point: generate a temp directory for a test."""

import logging
import os
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Union

from tempfns.config import TempFnsConfig, get_config, log_call, timed
from tempfns.core.ephemeral import gen_ephemeral_temp_dir
from tempfns.core.errors.infra import GitRootNotFoundError
from tempfns.core.git import find_git_root
from tempfns.core.infra import ensure_isolated_temp_infra
from tempfns.core.models import GitOptionInput, SeedOptions, SymlinkSpec
from tempfns.core.pruning import prune_stale_once

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]
SymlinkInput = Union[SymlinkSpec, Mapping[str, Any]]


def resolve_git_root(git_root: Optional[PathLike] = None) -> Path:
    """Return ``git_root`` made absolute, or locate the enclosing repository."""
    if git_root is not None:
        return Path(git_root).resolve()
    found = find_git_root()
    if found is None:
        raise GitRootNotFoundError(os.getcwd())
    return found.resolve()


@log_call()
@timed("gen_temp_dir")
def gen_temp_dir(
    slug: Optional[str] = None,
    clone: Optional[PathLike] = None,
    symlink: Optional[Iterable[SymlinkInput]] = None,
    git: GitOptionInput = None,
    *,
    git_root: Optional[PathLike] = None,
    config: Optional[TempFnsConfig] = None,
) -> Path:
    """
    Generate a fresh temp directory for a test, optionally seeded.

    The directory physically lives outside the repo and is reached through the
    repo's ``.temp/gen_temp_dir.symlink`` link. Directories older than the
    configured TTL (7 days by default) are pruned in the background, at most
    once per process.

    Example:
        # basic usage: empty dir
        gen_temp_dir(slug="my-test")
        # => /path/to/repo/.temp/gen_temp_dir.symlink/2026-01-19T12-34-56.789Z.my-test.a1b2c3d4

        # seeded from a fixture, with a link back to the repo and a git history
        gen_temp_dir(
            slug="clone-test",
            clone="./tests/fixtures/example",
            symlink=[{"at": "node_modules", "to": "node_modules"}],
            git=True,
        )

    Args:
        slug: Label embedded in the directory name, to tell tests apart
        clone: Fixture directory to copy in (relative to the cwd)
        symlink: Links to create, as ``{"at": ..., "to": ...}``; ``at`` is
            relative to the new dir, ``to`` relative to the git root
        git: ``True`` for a repo with ``began``/``fixture`` commits, or a
            mapping like ``{"commits": {"init": True, "fixture": False}}``
        git_root: Repository root (located with ``git rev-parse`` if omitted)
        config: Configuration (defaults to the global config)

    Returns:
        Absolute path to the new directory

    Raises:
        FixtureNotFoundError: If ``clone`` does not exist
        SymlinkTargetNotFoundError: If a symlink target does not exist
        SymlinkCollisionError: If a symlink path is already occupied
        EnvironmentUnsupportedError: If the scratch root is absent
        GitRootNotFoundError: If called outside a repo without ``git_root``
    """
    config = config or get_config()
    options = SeedOptions(
        clone=Path(clone) if clone is not None else None,
        symlinks=list(symlink) if symlink is not None else [],
        git=git,
    )
    root = resolve_git_root(git_root)

    infra = ensure_isolated_temp_infra(root, config)

    if config.prune_enabled:
        prune_stale_once(infra.path_physical, config.max_age_ms)

    dir_name = gen_ephemeral_temp_dir(slug, options, infra=infra, git_root=root, config=config)
    return infra.path_symlink / dir_name
