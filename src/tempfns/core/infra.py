"""Isolated temp infrastructure: physical storage plus a discoverability symlink.

Physical temp directories live outside the repository, under
``{scratch_root}/{namespace}/{repo-dirname}/.temp`` (``/tmp/tempfns/...`` by
default), so nothing created inside them can resolve packages, conftest files,
or config from the repository by walking up the tree. A symlink at
``{git_root}/.temp/gen_temp_dir.symlink`` points at the physical directory so
developers can still find them from the repo.

Provisioning is idempotent and safe for any number of parallel workers.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from tempfns.config import TempFnsConfig, get_config
from tempfns.core.errors.infra import EnvironmentUnsupportedError
from tempfns.core.findsert import findsert_file, findsert_symlink

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

REPO_TEMP_DIRNAME = ".temp"
SYMLINK_NAME = "gen_temp_dir.symlink"
README_NAME = "readme.md"
GITIGNORE_NAME = ".gitignore"
GITIGNORE_CONTENT = "*\n"

README_CONTENT = """\
# gen_temp_dir.symlink

this directory is a symlink to the physical temp directory at `{scratch_root}/{namespace}/{repo}/.temp/`.

## why a symlink?

physical temp directories are stored outside of the repo so that nothing inside
them can discover the repo's packages, conftest.py files, or config by walking
up the directory tree.

## cleanup policy

- directories older than 7 days (by default) are automatically pruned
- prune occurs in the background, at most once per process, when `gen_temp_dir()` is called
- directory names are prefixed with timestamps for age-based cleanup
- directories whose names were not created by `gen_temp_dir()` are never pruned

## safe to delete

all contents of this directory can be safely deleted at any time.
temp directories are ephemeral and should not contain important data.
"""


@dataclass(frozen=True)
class InfraLocation:
    """Where temp directories physically live, and the link that points there."""

    path_physical: Path
    path_symlink: Path


def compute_isolated_temp_base_path(
    git_root: PathLike,
    scratch_root: PathLike = "/tmp",
    namespace: str = "tempfns",
) -> Path:
    """
    Compute the physical temp base path for a repository.

    Example:
        compute_isolated_temp_base_path("/home/user/my-project")
        # => Path("/tmp/tempfns/my-project/.temp")
    """
    repo_dirname = Path(git_root).name
    return Path(scratch_root) / namespace / repo_dirname / REPO_TEMP_DIRNAME


def ensure_isolated_temp_infra(
    git_root: PathLike,
    config: Optional[TempFnsConfig] = None,
) -> InfraLocation:
    """
    Ensure the isolated temp infrastructure exists for a repository.

    Creates the physical directory with its marker files (readme and an
    ignore-everything ``.gitignore``) and the discoverability symlink inside the
    repo. Safe to call redundantly and concurrently; every caller converges on
    the same directory and link.

    Args:
        git_root: Repository root directory
        config: Configuration (defaults to the global config)

    Returns:
        InfraLocation with the physical and symlink paths

    Raises:
        EnvironmentUnsupportedError: If the scratch root does not exist
        InvariantViolationError: If a marker file or the symlink holds
            content/target that disagrees with what this process expects
    """
    config = config or get_config()
    git_root = Path(git_root)
    scratch_root = Path(config.scratch_root)

    if not scratch_root.is_dir():
        raise EnvironmentUnsupportedError(
            str(scratch_root),
            reason="scratch root does not exist (unix-like hosts only)",
        )

    path_physical = compute_isolated_temp_base_path(git_root, scratch_root, config.namespace)
    path_repo_temp = git_root / REPO_TEMP_DIRNAME
    path_symlink = path_repo_temp / SYMLINK_NAME

    path_repo_temp.mkdir(parents=True, exist_ok=True)
    path_physical.mkdir(parents=True, exist_ok=True)

    findsert_file(path_physical / README_NAME, README_CONTENT)
    findsert_file(path_physical / GITIGNORE_NAME, GITIGNORE_CONTENT)
    findsert_symlink(target=os.fspath(path_physical), path=path_symlink)

    logger.debug("Temp infra ready: %s -> %s", path_symlink, path_physical)
    return InfraLocation(path_physical=path_physical, path_symlink=path_symlink)
