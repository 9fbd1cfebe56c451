"""Error presentation utilities.

Centralized one-line error formatting and exit code mapping for release
failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from relkit.core.errors import ErrorCode
from relkit.release.errors import ReleaseError

if TYPE_CHECKING:
    from relkit.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    console.error(error.pretty())


def release_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "malformed_version" | "invalid_config":
            return int(ErrorCode.USER_ERROR)
        case "dirty_working_tree" | "gh_missing":
            return int(ErrorCode.ENV_ERROR)
        case "source_not_found" | "write_failure" | "invalid_manifest" | "missing_target_file":
            return int(ErrorCode.IO_ERROR)
        case _:
            return int(ErrorCode.RELEASE_ERROR)
