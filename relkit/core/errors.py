"""Process exit codes.

The numeric values are part of the CLI contract and should remain stable:
- 0: Success
- 1: User error (malformed version, invalid config)
- 2: Environment error (dirty working tree, git/gh missing)
- 3: Release error (VCS or publish failure, inconsistent files)
- 5: I/O error (source tree missing, write failure, unreadable manifest)
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the release command."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3
    IO_ERROR = 5

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
