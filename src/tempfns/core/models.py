"""Option models for seeding a temp directory."""

from __future__ import annotations

from pathlib import Path, PurePath
from typing import Any, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field, field_validator


class SymlinkSpec(BaseModel):
    """A symlink to create inside a new temp directory.

    ``at`` is relative to the temp directory; ``to`` is relative to the
    repository root (an absolute ``to`` is used as-is).
    """

    at: str = Field(..., min_length=1, description="Link path, relative to the temp dir")
    to: str = Field(..., min_length=1, description="Link target, relative to the git root")

    model_config = {"frozen": True}

    @field_validator("at")
    @classmethod
    def validate_at_is_relative(cls, v: str) -> str:
        """Reject ``at`` paths that would land outside the temp directory."""
        if PurePath(v).is_absolute():
            raise ValueError(f"symlink 'at' must be relative to the temp dir, got {v!r}")
        if ".." in PurePath(v).parts:
            raise ValueError(f"symlink 'at' must not contain '..', got {v!r}")
        return v


class GitDisabled(BaseModel):
    """No git repository is initialized."""

    kind: Literal["disabled"] = "disabled"

    model_config = {"frozen": True}


class GitEnabled(BaseModel):
    """Initialize a git repository, optionally committing around the seed content."""

    kind: Literal["enabled"] = "enabled"
    init_commit: bool = Field(default=True, description="Empty 'began' commit before content")
    fixture_commit: bool = Field(default=True, description="'fixture' commit after content")

    model_config = {"frozen": True}


GitMode = Union[GitDisabled, GitEnabled]

GitOptionInput = Union[None, bool, Mapping[str, Any], GitDisabled, GitEnabled]


def as_explicit_git_options(git: GitOptionInput) -> GitMode:
    """
    Normalize the git shorthand into an explicit mode.

    Accepts ``None``/``False`` (disabled), ``True`` (enabled with both commits),
    any mapping, even an empty one (enabled; missing keys default to True) such as
    ``{"commits": {"init": False}}`` or
    ``{"init_commit": False}``, or an already-explicit model.
    """
    if isinstance(git, (GitDisabled, GitEnabled)):
        return git
    if git is None or git is False:
        return GitDisabled()
    if git is True:
        return GitEnabled()
    if isinstance(git, Mapping):
        commits = git.get("commits") or {}
        return GitEnabled(
            init_commit=git.get("init_commit", commits.get("init", True)),
            fixture_commit=git.get("fixture_commit", commits.get("fixture", True)),
        )
    raise TypeError(f"unsupported git option: {git!r}")


class SeedOptions(BaseModel):
    """How to populate a new temp directory."""

    clone: Optional[Path] = Field(default=None, description="Fixture directory to copy in")
    symlinks: List[SymlinkSpec] = Field(default_factory=list, description="Links to create")
    git: GitMode = Field(default_factory=GitDisabled, description="Git initialization mode")

    @field_validator("git", mode="before")
    @classmethod
    def normalize_git(cls, v: Any) -> GitMode:
        """Accept the boolean/mapping shorthand and store the explicit variant."""
        return as_explicit_git_options(v)

    @field_validator("symlinks", mode="before")
    @classmethod
    def normalize_symlinks(cls, v: Any) -> Any:
        """Treat None as no symlinks."""
        return [] if v is None else v
