"""Garbage collection of stale temp directories.

Pruning is best effort: it never raises to its caller, it runs on a background
daemon thread so it never delays the caller, and it runs at most once per
process. N parallel test workers therefore scan the temp base at most N times
between them; the redundant scans are wasted work, not a correctness problem,
because removing an already-removed directory counts as success.
"""

import logging
import os
import shutil
import threading
from pathlib import Path
from typing import List, Optional, Union

from tempfns.config import SEVEN_DAYS_MS
from tempfns.core.staleness import DirEntry, compute_stale_dirs

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _list_subdirectories(base_path: Path) -> List[DirEntry]:
    dirs: List[DirEntry] = []
    with os.scandir(base_path) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                dirs.append(DirEntry(name=entry.name, path=entry.path))
    return dirs


def prune_stale(base_path: PathLike, max_age_ms: int = SEVEN_DAYS_MS) -> int:
    """
    Remove temp directories older than ``max_age_ms`` from ``base_path``.

    A missing base path is not an error; it is created on first real use.
    Each removal fails independently: a permission error or a directory
    already removed by another worker is ignored and the batch continues.

    Args:
        base_path: Directory holding the temp directories
        max_age_ms: Age threshold in milliseconds

    Returns:
        Number of directories removed
    """
    base_path = Path(base_path)
    if not base_path.is_dir():
        return 0

    stale = compute_stale_dirs(_list_subdirectories(base_path), max_age_ms=max_age_ms)

    removed = 0
    for entry in stale:
        try:
            shutil.rmtree(entry.path)
            removed += 1
        except FileNotFoundError:
            continue
        except OSError as exc:
            logger.debug("Could not prune %s: %s", entry.path, exc)

    logger.info("Prune completed: removed %d of %d stale temp dirs", removed, len(stale))
    return removed


class PruneThrottle:
    """Runs ``prune_stale`` at most once for this throttle's lifetime.

    One instance backs the module-level helpers and lives for the process;
    tests call ``reset()`` to start over.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._pruned = False

    @property
    def has_pruned(self) -> bool:
        return self._pruned

    def reset(self) -> None:
        """Forget that a prune has run (test isolation only)."""
        with self._lock:
            self._pruned = False

    def prune_once(
        self,
        base_path: PathLike,
        max_age_ms: int = SEVEN_DAYS_MS,
    ) -> Optional[threading.Thread]:
        """
        Start a background prune unless one has already been started.

        Returns:
            The prune thread (callers may ``join`` it), or None if this
            throttle has already pruned
        """
        with self._lock:
            if self._pruned:
                return None
            self._pruned = True

        thread = threading.Thread(
            target=self._run,
            args=(Path(base_path), max_age_ms),
            name="tempfns-prune",
            daemon=True,
        )
        thread.start()
        return thread

    @staticmethod
    def _run(base_path: Path, max_age_ms: int) -> None:
        try:
            prune_stale(base_path, max_age_ms)
        except Exception as exc:
            logger.debug("Background prune of %s failed: %s", base_path, exc)


_default_throttle = PruneThrottle()


def get_prune_throttle() -> PruneThrottle:
    """Return the process-wide prune throttle."""
    return _default_throttle


def prune_stale_once(
    base_path: PathLike,
    max_age_ms: int = SEVEN_DAYS_MS,
) -> Optional[threading.Thread]:
    """Run ``prune_stale`` in the background, at most once per process."""
    return _default_throttle.prune_once(base_path, max_age_ms)


def reset_prune_throttle() -> None:
    """Reset the process-wide prune throttle (test-only hook)."""
    _default_throttle.reset()


def has_pruned_this_process() -> bool:
    """Whether the process-wide prune has already been started."""
    return _default_throttle.has_pruned
