"""Core temp directory operations for tempfns."""

from tempfns.core.ephemeral import gen_ephemeral_temp_dir
from tempfns.core.findsert import FindsertOutcome, findsert_file, findsert_symlink
from tempfns.core.infra import (
    InfraLocation,
    compute_isolated_temp_base_path,
    ensure_isolated_temp_infra,
)
from tempfns.core.models import (
    GitDisabled,
    GitEnabled,
    SeedOptions,
    SymlinkSpec,
    as_explicit_git_options,
)
from tempfns.core.naming import (
    TempDirName,
    compute_temp_dir_name,
    is_temp_dir,
    parse_temp_dir_name,
    parse_temp_dir_timestamp,
)
from tempfns.core.pruning import (
    PruneThrottle,
    get_prune_throttle,
    has_pruned_this_process,
    prune_stale,
    prune_stale_once,
    reset_prune_throttle,
)
from tempfns.core.staleness import DirEntry, compute_stale_dirs
from tempfns.core.tempdir import gen_temp_dir

__all__ = [
    "gen_temp_dir",
    "gen_ephemeral_temp_dir",
    "FindsertOutcome",
    "findsert_file",
    "findsert_symlink",
    "InfraLocation",
    "compute_isolated_temp_base_path",
    "ensure_isolated_temp_infra",
    "GitDisabled",
    "GitEnabled",
    "SeedOptions",
    "SymlinkSpec",
    "as_explicit_git_options",
    "TempDirName",
    "compute_temp_dir_name",
    "is_temp_dir",
    "parse_temp_dir_name",
    "parse_temp_dir_timestamp",
    "PruneThrottle",
    "get_prune_throttle",
    "has_pruned_this_process",
    "prune_stale",
    "prune_stale_once",
    "reset_prune_throttle",
    "DirEntry",
    "compute_stale_dirs",
]
