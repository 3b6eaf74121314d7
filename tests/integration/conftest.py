"""Shared fixtures for integration tests.

These tests shell out to a real ``git`` binary and are skipped when it is
not installed.
"""

import subprocess

import pytest


@pytest.fixture
def git_repo(repo_root):
    """The shared repo root, initialized as a real git repository."""
    subprocess.run(["git", "init"], cwd=repo_root, capture_output=True, check=True)
    return repo_root


@pytest.fixture(autouse=True)
def _isolated_git_env(monkeypatch, tmp_path):
    """Keep the host's global git config (hooks, signing, templates) out of the tests."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
