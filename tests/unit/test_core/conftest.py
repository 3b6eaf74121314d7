"""Shared fixtures for core unit tests."""

from pathlib import Path

import pytest


@pytest.fixture
def physical_base(scratch_root) -> Path:
    """Where temp dirs for ``repo_root`` physically live under the test scratch root."""
    return scratch_root / "tempfns" / "my-project" / ".temp"
