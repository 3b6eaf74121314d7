"""Infrastructure error classes: shared temp storage, git, and host environment."""

from typing import Optional, Sequence

from tempfns.core.errors.base import TempFnsError


class InvariantViolationError(TempFnsError):
    """Raised when shared state exists with content this process did not expect.

    Never retried: it means the shared temp infrastructure was tampered with,
    or two processes disagree on what it should contain.

    Attributes:
        path: The path holding the unexpected state.
        expected: What this process expected to find.
        found: What was actually found (None when not applicable).
    """

    def __init__(
        self,
        message: str,
        path: str,
        expected: Optional[str] = None,
        found: Optional[str] = None,
    ):
        self.path = path
        self.expected = expected
        self.found = found
        super().__init__(f"{message} (path={path})")


class EnvironmentUnsupportedError(TempFnsError):
    """Raised when the host lacks the scratch root temp dirs live under."""

    def __init__(self, scratch_root: str, reason: Optional[str] = None):
        self.scratch_root = scratch_root
        self.reason = reason or "scratch root does not exist"
        super().__init__(
            f"gen_temp_dir requires the scratch root {scratch_root} ({self.reason})"
        )


class GitRootNotFoundError(TempFnsError):
    """Raised when no enclosing git repository can be located."""

    def __init__(self, cwd: str):
        self.cwd = cwd
        super().__init__(f"gen_temp_dir called outside of a git repository (cwd={cwd})")


class GitCommandError(TempFnsError):
    """Raised when a git subprocess exits non-zero or git is not installed."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: Optional[int],
        stderr: str = "",
        cwd: Optional[str] = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        self.cwd = cwd
        detail = stderr.strip() or "no output"
        super().__init__(
            f"git command failed ({' '.join(self.command)}, exit={returncode}): {detail}"
        )
