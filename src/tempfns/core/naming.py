"""Temp directory naming: encode and decode timestamped directory names.

Format::

    {YYYY-MM-DDTHH-mm-ss.sssZ}[.{slug}].{8 lowercase hex}

The timestamp is ISO-8601 UTC with its colons swapped for dashes so the name
is valid on every filesystem. The swap is fixed-width, so sorting names
lexicographically still sorts them by creation time. The name itself is the
only record of a directory's age; nothing else is stored or stat'd.
"""

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union

_TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%S"

_NAME_PATTERN = re.compile(
    r"^(?P<timestamp>\d{4}-\d{2}-\d{2}T\d{2}-\d{2}-\d{2}\.\d{3}Z)"
    r"(?:\.(?P<slug>.+))?"
    r"\.(?P<suffix>[0-9a-f]{8})$",
    re.IGNORECASE,
)

_SLUG_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")

SUFFIX_LENGTH = 8


@dataclass(frozen=True)
class TempDirName:
    """Decoded parts of a temp directory name."""

    timestamp: datetime
    slug: Optional[str]
    suffix: str

    def serialize(self) -> str:
        """Render the name in its on-disk form."""
        parts = [format_timestamp(self.timestamp)]
        if self.slug:
            parts.append(self.slug)
        parts.append(self.suffix)
        return ".".join(parts)


def format_timestamp(moment: datetime) -> str:
    """Format a datetime as a filesystem-safe, millisecond-precision UTC stamp."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return f"{moment.strftime(_TIMESTAMP_FORMAT)}.{moment.microsecond // 1000:03d}Z"


def sanitize_slug(slug: Optional[str]) -> Optional[str]:
    """Make a slug safe to embed in a single path component.

    Runs of characters outside ``[A-Za-z0-9_-]`` collapse to one dash; a slug
    that is empty after trimming becomes None.
    """
    if slug is None:
        return None
    cleaned = _SLUG_UNSAFE.sub("-", slug.strip()).strip("-")
    return cleaned or None


def compute_temp_dir_name(
    slug: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """
    Compute a unique temp directory name with a timestamp prefix.

    Args:
        slug: Optional human-readable label (sanitized before use)
        now: Creation instant; defaults to the current UTC time

    Returns:
        The directory name, e.g. ``2026-01-19T12-34-56.789Z.my-test.a1b2c3d4``
    """
    moment = now or datetime.now(timezone.utc)
    suffix = uuid.uuid4().hex[:SUFFIX_LENGTH]
    return TempDirName(timestamp=moment, slug=sanitize_slug(slug), suffix=suffix).serialize()


def parse_temp_dir_name(name: str) -> Optional[TempDirName]:
    """Decode a temp directory name, or return None if it is not one of ours."""
    if not isinstance(name, str):
        return None
    match = _NAME_PATTERN.match(name)
    if not match:
        return None

    stamp = match.group("timestamp")
    try:
        # %f takes the 3 millisecond digits as a fraction of a second
        timestamp = datetime.strptime(stamp[:-1], f"{_TIMESTAMP_FORMAT}.%f")
    except ValueError:
        return None

    return TempDirName(
        timestamp=timestamp.replace(tzinfo=timezone.utc),
        slug=match.group("slug"),
        suffix=match.group("suffix").lower(),
    )


def parse_temp_dir_timestamp(name: str) -> Optional[datetime]:
    """
    Parse the creation timestamp out of a temp directory name.

    Never raises. Returns None for empty strings, names without the trailing
    8-hex-char suffix, names whose timestamp still contains colons, and
    timestamps that do not name a real instant (e.g. month 13).

    Args:
        name: Directory basename

    Returns:
        Timezone-aware UTC datetime, or None
    """
    parsed = parse_temp_dir_name(name)
    return parsed.timestamp if parsed else None


def is_temp_dir(path: Union[str, Path]) -> bool:
    """
    Check if a path names a temp directory created by gen_temp_dir.

    Only the basename is inspected; the filesystem is not touched.

    Example:
        is_temp_dir("/repo/.temp/gen_temp_dir.symlink/2026-01-19T12-34-56.789Z.my-test.a1b2c3d4")  # True
        is_temp_dir("/tmp/random")  # False
    """
    return parse_temp_dir_name(Path(path).name) is not None
