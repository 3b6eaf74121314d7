"""Stale temp directory detection (pure, no I/O)."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from tempfns.core.naming import parse_temp_dir_timestamp


@dataclass(frozen=True)
class DirEntry:
    """A directory listing item: basename and absolute path."""

    name: str
    path: str


def compute_stale_dirs(
    dirs: Iterable[DirEntry],
    max_age_ms: int,
    now: Optional[datetime] = None,
) -> List[DirEntry]:
    """
    Filter directory entries down to those older than the threshold.

    Age comes only from the timestamp encoded in each name. Names that do not
    decode are never stale, however old they look, so anything this package
    did not create is left alone.

    Args:
        dirs: Entries to consider
        max_age_ms: Age threshold in milliseconds (an entry exactly this old
            is not yet stale)
        now: Reference instant; defaults to the current UTC time

    Returns:
        The stale entries, in input order
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    max_age = timedelta(milliseconds=max_age_ms)
    stale: List[DirEntry] = []
    for entry in dirs:
        timestamp = parse_temp_dir_timestamp(entry.name)
        if timestamp is None:
            continue
        if now - timestamp > max_age:
            stale.append(entry)
    return stale
