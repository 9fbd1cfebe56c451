from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "dirty_working_tree",
    "malformed_version",
    "invalid_manifest",
    "missing_target_file",
    "pattern_mismatch",
    "inconsistent_versions",
    "source_not_found",
    "write_failure",
    "vcs_failed",
    "gh_missing",
    "publish_failure",
    "notify_failure",
    "invalid_config",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Release error payload, rendered on one line by ``pretty``."""

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


def first_line(*texts: str) -> str | None:
    """First non-blank line of the first text that has one.

    Process output used as a hint is cut to one line so ``pretty()`` stays a
    single line.
    """
    for text in texts:
        for line in text.splitlines():
            if line.strip():
                return line.strip()
    return None
