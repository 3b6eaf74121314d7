"""Thin wrappers around the ``git`` executable.

git is an external collaborator: these helpers only shell out to it, with a
repo-local identity so commits work on CI hosts with no global git config.
"""

import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from tempfns.core.errors.infra import GitCommandError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_USER_NAME = "tempfns"
DEFAULT_USER_EMAIL = "tempfns@test.local"


def find_git_root(cwd: Optional[PathLike] = None) -> Optional[Path]:
    """Find the root of the git repository containing ``cwd`` (default: cwd)."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "--show-toplevel"],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (subprocess.CalledProcessError, FileNotFoundError):
        return None
    root = result.stdout.strip()
    return Path(root) if root else None


def run_git(args: List[str], cwd: PathLike) -> str:
    """
    Run a git command in ``cwd`` and return its stdout.

    Raises:
        GitCommandError: If git is missing or exits non-zero
    """
    command = ["git", *args]
    logger.debug("Running %s in %s", " ".join(command), cwd)
    try:
        result = subprocess.run(
            command,
            cwd=cwd,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise GitCommandError(command, None, stderr=str(exc), cwd=str(cwd)) from exc

    if result.returncode != 0:
        raise GitCommandError(command, result.returncode, stderr=result.stderr, cwd=str(cwd))
    return result.stdout


def init_git_repo(
    directory: PathLike,
    user_name: str = DEFAULT_USER_NAME,
    user_email: str = DEFAULT_USER_EMAIL,
) -> None:
    """
    Initialize a git repository with a repo-local user identity.

    Example:
        init_git_repo("/tmp/my-test-dir")
        # creates .git/, sets user.name='tempfns', user.email='tempfns@test.local'
    """
    run_git(["init"], cwd=directory)
    run_git(["config", "user.name", user_name], cwd=directory)
    run_git(["config", "user.email", user_email], cwd=directory)
    # Keep commits independent of signing setups on the host
    run_git(["config", "commit.gpgsign", "false"], cwd=directory)


def commit_git_changes(directory: PathLike, message: str, allow_empty: bool = False) -> None:
    """
    Stage all changes and commit them with ``message``.

    Example:
        commit_git_changes("/tmp/my-repo", "began", allow_empty=True)
    """
    run_git(["add", "-A"], cwd=directory)
    args = ["commit", "--no-verify", "-m", message]
    if allow_empty:
        args.insert(1, "--allow-empty")
    run_git(args, cwd=directory)
