"""Per-call temp directory creation and seeding."""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from tempfns.config import TempFnsConfig, get_config
from tempfns.core.errors.seeding import FixtureNotFoundError
from tempfns.core.git import commit_git_changes, init_git_repo
from tempfns.core.infra import InfraLocation
from tempfns.core.models import GitEnabled, SeedOptions
from tempfns.core.naming import compute_temp_dir_name
from tempfns.core.seeding import check_symlink_targets, clone_fixture, create_symlinks

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

GIT_INIT_COMMIT_MESSAGE = "began"
GIT_FIXTURE_COMMIT_MESSAGE = "fixture"


def gen_ephemeral_temp_dir(
    slug: Optional[str],
    options: SeedOptions,
    infra: InfraLocation,
    git_root: PathLike,
    config: Optional[TempFnsConfig] = None,
) -> str:
    """
    Create one new temp directory under ``infra.path_physical`` and seed it.

    Steps, in order, each but the first optional:

    1. allocate a unique name and create the directory
    2. git init (+ empty ``began`` commit) so the baseline predates content
    3. clone the fixture
    4. create symlinks (after the clone, so they may augment it but are
       collision-checked against it)
    5. commit the seeded content as ``fixture``

    Args:
        slug: Human-readable label embedded in the name
        options: Seed options (clone, symlinks, git)
        infra: Provisioned temp infrastructure
        git_root: Repository root; symlink targets resolve against it
        config: Configuration (defaults to the global config)

    Returns:
        The new directory's name (callers compose the full path)
    """
    config = config or get_config()

    # Relative fixture paths resolve against the current working directory
    clone_source = Path(options.clone).resolve() if options.clone is not None else None

    # Fail on missing inputs before anything is created
    if clone_source is not None and not clone_source.exists():
        raise FixtureNotFoundError(clone_source)
    if options.symlinks:
        check_symlink_targets(options.symlinks, git_root)

    dir_name = compute_temp_dir_name(slug)
    temp_dir = Path(infra.path_physical) / dir_name
    temp_dir.mkdir(parents=True, exist_ok=False)

    try:
        _seed(temp_dir, options, clone_source, git_root, config)
    except BaseException:
        # Never hand back (or leave behind) a half-seeded directory
        shutil.rmtree(temp_dir, ignore_errors=True)
        raise

    logger.debug("Created temp dir %s", temp_dir)
    return dir_name


def _seed(
    temp_dir: Path,
    options: SeedOptions,
    clone_source: Optional[Path],
    git_root: PathLike,
    config: TempFnsConfig,
) -> None:
    git = options.git if isinstance(options.git, GitEnabled) else None

    if git is not None:
        init_git_repo(temp_dir, user_name=config.git_user_name, user_email=config.git_user_email)
        if git.init_commit:
            commit_git_changes(temp_dir, GIT_INIT_COMMIT_MESSAGE, allow_empty=True)

    seeded = False

    if clone_source is not None:
        clone_fixture(clone_source, temp_dir)
        seeded = True

    if options.symlinks:
        create_symlinks(options.symlinks, temp_dir=temp_dir, git_root=git_root)
        seeded = True

    if git is not None and git.fixture_commit and seeded:
        # allow_empty: a fixture holding only empty directories stages nothing
        commit_git_changes(temp_dir, GIT_FIXTURE_COMMIT_MESSAGE, allow_empty=True)
