"""Shared fixtures for tempfns tests.

Every test gets its own repo root and scratch root under ``tmp_path`` so
nothing is written to the real ``/tmp/tempfns`` or to this checkout.
"""

from pathlib import Path

import pytest

from tempfns.config import TempFnsConfig, set_config
from tempfns.core.pruning import reset_prune_throttle


@pytest.fixture(autouse=True)
def _isolate_process_state():
    """Reset the process-wide prune throttle and global config around each test."""
    reset_prune_throttle()
    set_config(None)
    yield
    reset_prune_throttle()
    set_config(None)


@pytest.fixture
def repo_root(tmp_path) -> Path:
    """A stand-in repository root (only its basename and contents matter)."""
    root = tmp_path / "my-project"
    root.mkdir()
    return root


@pytest.fixture
def scratch_root(tmp_path) -> Path:
    """A stand-in for the OS-wide scratch root (``/tmp``)."""
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def temp_config(scratch_root) -> TempFnsConfig:
    """Configuration pointing physical storage at the test scratch root."""
    return TempFnsConfig(scratch_root=scratch_root, prune_enabled=False)
