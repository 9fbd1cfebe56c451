"""Subprocess execution returning Result values.

Every call to git, gh or the platform URL opener goes through here, so the
callers can be tested by monkeypatching their imported ``run_process`` or
``run_output``. Output is always captured as text.
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result

__all__ = ["ProcessError", "ProcessOutput", "run", "run_output"]


@dataclass(frozen=True, slots=True)
class ProcessError:
    """A command that could not be started, timed out or exited non-zero.

    ``returncode`` is -1 when the process never completed; ``stderr`` then
    holds the OS error or timeout text.
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        shown = " ".join(self.command[:3])
        if len(self.command) > 3:
            shown += " ..."
        return f"{shown} failed (exit {self.returncode})"


@dataclass(frozen=True, slots=True)
class ProcessOutput:
    stdout: str
    stderr: str


def _failure(cmd: list[str], returncode: int, stdout: str, stderr: str) -> Err[ProcessError]:
    return Err(ProcessError(tuple(cmd), returncode, stdout, stderr))


def run_output(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[ProcessOutput, ProcessError]:
    """Run ``cmd`` in ``cwd`` and return both streams on exit 0."""
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        partial = e.stdout if isinstance(e.stdout, str) else ""
        return _failure(cmd, -1, partial, f"Command timed out after {timeout}s")
    except OSError as e:
        return _failure(cmd, -1, "", str(e))

    if proc.returncode != 0:
        return _failure(cmd, proc.returncode, proc.stdout, proc.stderr)
    return Ok(ProcessOutput(stdout=proc.stdout, stderr=proc.stderr))


def run(
    cmd: list[str],
    cwd: Path,
    *,
    timeout: float | None = None,
) -> Result[str, ProcessError]:
    """Like ``run_output`` but keep stdout only."""
    match run_output(cmd, cwd, timeout=timeout):
        case Ok(output):
            return Ok(output.stdout)
        case Err() as failed:
            return failed
