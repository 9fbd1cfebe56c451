"""Git repository operations used by a release.

All methods shell out to ``git -C <path>`` and return Result types.

Usage:
    repo = Repository(Path("."))
    match repo.pending_changes():
        case Ok(entries) if not entries:
            print("clean")
        case Ok(entries):
            print(f"{len(entries)} pending changes")
        case Err(e):
            print(e.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

_GIT_TIMEOUT_SECONDS = 30.0
_GIT_NETWORK_TIMEOUT_SECONDS = 3 * 60.0

__all__ = ["GitError", "Repository", "StatusEntry"]


@dataclass(frozen=True, slots=True)
class GitError:
    """Error from a git operation.

    Attributes:
        command: The git subcommand that failed (e.g. "commit")
        message: First useful line of git's output
        returncode: Process return code
    """

    command: str
    message: str
    returncode: int = 1


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """A single ``git status --porcelain`` line.

    Attributes:
        xy: Two-character status code (e.g. "M ", " M", "??")
        path: File path
    """

    xy: str
    path: str

    @property
    def is_untracked(self) -> bool:
        return self.xy == "??"


class Repository:
    """A git working tree."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def pending_changes(self) -> Result[tuple[StatusEntry, ...], GitError]:
        """List staged, unstaged and untracked changes."""
        result = self._run(["status", "--porcelain"])
        if isinstance(result, Err):
            return Err(self._error("status", result.error))
        entries = [_parse_entry(line) for line in result.value.splitlines() if line.strip()]
        return Ok(tuple(e for e in entries if e is not None))

    def add_all(self) -> Result[None, GitError]:
        return self._simple(["add", "-A"])

    def commit(self, message: str) -> Result[None, GitError]:
        return self._simple(["commit", "-m", message])

    def tag(self, name: str) -> Result[None, GitError]:
        return self._simple(["tag", name])

    def push(self, *, tags: bool = False) -> Result[None, GitError]:
        """Push the current branch, or all tags when ``tags`` is set."""
        return self._simple(["push", "--tags"] if tags else ["push"])

    def _simple(self, args: list[str]) -> Result[None, GitError]:
        result = self._run(args)
        if isinstance(result, Err):
            return Err(self._error(args[0], result.error))
        return Ok(None)

    def _error(self, command: str, error: ProcessError) -> GitError:
        text = error.stderr.strip() or error.stdout.strip() or f"git {command} failed"
        return GitError(command=command, message=text.splitlines()[0], returncode=error.returncode)

    def _run(self, args: list[str]) -> Result[str, ProcessError]:
        command = args[0] if args else ""
        timeout = (
            _GIT_NETWORK_TIMEOUT_SECONDS
            if command in {"fetch", "pull", "push"}
            else _GIT_TIMEOUT_SECONDS
        )
        return run_process(["git", "-C", str(self.path), *args], cwd=self.path, timeout=timeout)


def _parse_entry(line: str) -> StatusEntry | None:
    # Format: XY path
    if len(line) < 4:
        return None
    return StatusEntry(xy=line[:2], path=line[3:])
