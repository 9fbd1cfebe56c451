"""Which desktop the release runs on, for picking a URL opener."""

from __future__ import annotations

import sys
from enum import Enum

__all__ = ["Platform", "detect_platform"]


class Platform(Enum):
    LINUX = "linux"
    MACOS = "macos"
    WINDOWS = "windows"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


# sys.platform prefixes; cygwin and msys shells still launch Windows programs.
_PREFIXES: tuple[tuple[str, Platform], ...] = (
    ("linux", Platform.LINUX),
    ("darwin", Platform.MACOS),
    ("win32", Platform.WINDOWS),
    ("cygwin", Platform.WINDOWS),
    ("msys", Platform.WINDOWS),
)


def detect_platform(system: str | None = None) -> Platform:
    """Classify ``system`` (default: ``sys.platform``)."""
    name = (system if system is not None else sys.platform).lower()
    for prefix, platform in _PREFIXES:
        if name.startswith(prefix):
            return platform
    return Platform.UNKNOWN
