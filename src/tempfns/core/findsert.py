"""Idempotent "find or insert" filesystem primitives.

Both primitives are safe to call from any number of uncoordinated processes at
once. The filesystem's own atomic operations (exclusive create, rename,
symlink) are the only synchronization used:

- ``findsert_file`` writes a file if absent, verifies its bytes if present.
- ``findsert_symlink`` creates a symlink if absent or wrong, and accepts a
  symlink another process created first as long as it has the same target.

A genuine conflict (same path, different content or target) is never silently
overwritten or retried; it raises ``InvariantViolationError``.
"""

import logging
import os
import shutil
import tempfile
import uuid
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from tempfns.core.errors.infra import InvariantViolationError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FindsertOutcome(str, Enum):
    """Result of a findsert attempt."""

    CREATED = "created"  # This call created the entry
    FOUND = "found"  # Entry was already present and correct
    CONFLICT = "conflict"  # Entry present with unexpected content/target


# =============================================================================
# Files
# =============================================================================


def _try_create_file(path: Path, data: bytes) -> FindsertOutcome:
    # Write to a private temp file, then hard-link it into place: the link is an
    # exclusive create, and readers never observe a partially written file.
    fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        try:
            os.link(temp_path, path)
            return FindsertOutcome.CREATED
        except FileExistsError:
            pass
    finally:
        try:
            os.unlink(temp_path)
        except OSError:
            pass

    try:
        found = path.read_bytes()
    except IsADirectoryError:
        return FindsertOutcome.CONFLICT
    if found == data:
        return FindsertOutcome.FOUND
    return FindsertOutcome.CONFLICT


def _describe_found(path: Path) -> str:
    try:
        return path.read_bytes().decode("utf-8", errors="replace")
    except IsADirectoryError:
        return "<directory>"
    except FileNotFoundError:
        return "<missing>"


def findsert_file(path: PathLike, content: str) -> FindsertOutcome:
    """
    Write a file if absent; verify its content if it already exists.

    Uses an exclusive create rather than check-then-write, so two racing
    callers can never both write. An existing file must match the UTF-8
    encoding of ``content`` byte for byte.

    Args:
        path: File to create
        content: Exact expected content

    Returns:
        CREATED or FOUND

    Raises:
        InvariantViolationError: If the path holds different bytes or a directory
    """
    path = Path(path)
    outcome = _try_create_file(path, content.encode("utf-8"))
    if outcome is FindsertOutcome.CONFLICT:
        raise InvariantViolationError(
            "file exists with unexpected content",
            path=str(path),
            expected=content,
            found=_describe_found(path),
        )
    logger.debug("findsert_file %s: %s", path, outcome.value)
    return outcome


# =============================================================================
# Symlinks
# =============================================================================


def _read_link(path: Path) -> Optional[str]:
    """Return the target of the symlink at ``path``, or None if it is not one."""
    try:
        return os.readlink(path)
    except OSError:
        return None


def _inspect_symlink(path: Path, target: str) -> Optional[FindsertOutcome]:
    """Classify what is at ``path``: None if absent, FOUND or CONFLICT otherwise."""
    if not os.path.lexists(path):
        return None
    if _read_link(path) == target:
        return FindsertOutcome.FOUND
    return FindsertOutcome.CONFLICT


def _remove_entry(path: Path) -> None:
    """Free ``path`` in one step, then delete whatever was there.

    The entry is renamed to a unique hidden sibling first, so the path is
    vacated atomically even when the entry is a large directory tree, and no
    other process ever sees it half removed. Only the renamed copy is deleted.
    """
    graveyard = path.with_name(f".{path.name}.{uuid.uuid4().hex[:8]}.stale")
    try:
        os.rename(path, graveyard)
    except FileNotFoundError:
        return

    try:
        if graveyard.is_dir() and not graveyard.is_symlink():
            shutil.rmtree(graveyard)
        else:
            graveyard.unlink()
    except OSError as exc:
        logger.warning("Could not delete moved-aside entry %s: %s", graveyard, exc)


def findsert_symlink(target: PathLike, path: PathLike) -> FindsertOutcome:
    """
    Create a symlink at ``path`` pointing to ``target`` unless it already does.

    Whatever else occupies ``path`` (a regular file, a directory, a symlink to
    somewhere else) is removed without backup first. If another process
    creates the link between our removal and our create, its link is accepted
    when it points at the same target. A non-symlink still in the way after a
    failed create is removed and the create retried once.

    Args:
        target: Link target (compared verbatim against ``os.readlink``)
        path: Where the symlink should live

    Returns:
        CREATED or FOUND

    Raises:
        InvariantViolationError: If a racing process left a symlink to a
            different target, or the path could not be claimed after one retry
    """
    target = str(target)
    path = Path(path)

    current = _inspect_symlink(path, target)
    if current is FindsertOutcome.FOUND:
        logger.debug("findsert_symlink %s -> %s: found", path, target)
        return FindsertOutcome.FOUND
    if current is FindsertOutcome.CONFLICT:
        logger.info("Replacing stale entry at %s with symlink to %s", path, target)
        _remove_entry(path)

    for attempt in range(2):
        try:
            os.symlink(target, path)
            logger.debug("findsert_symlink %s -> %s: created", path, target)
            return FindsertOutcome.CREATED
        except FileExistsError:
            pass

        # Lost a race: something appeared between our check and create
        found = _read_link(path)
        if found == target:
            logger.debug("findsert_symlink %s -> %s: created concurrently", path, target)
            return FindsertOutcome.FOUND
        if found is not None:
            raise InvariantViolationError(
                "symlink exists but points to unexpected target",
                path=str(path),
                expected=target,
                found=found,
            )
        if attempt == 0:
            _remove_entry(path)

    raise InvariantViolationError(
        "symlink path stayed occupied by a non-symlink entry",
        path=str(path),
        expected=target,
        found=None,
    )
