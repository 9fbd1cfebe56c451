"""Open a URL with the desktop's default handler."""

from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.detection import Platform, detect_platform
from relkit.platform.process import ProcessError
from relkit.platform.process import run as run_process

__all__ = ["open_url", "opener_command"]

_OPEN_TIMEOUT_SECONDS = 15.0


def opener_command(url: str, platform: Platform) -> list[str]:
    match platform:
        case Platform.WINDOWS:
            # `start` is a cmd builtin; the empty string is the window title.
            return ["cmd", "/c", "start", "", url]
        case Platform.MACOS:
            return ["open", url]
        case _:
            return ["xdg-open", url]


def open_url(
    url: str, *, cwd: Path, platform: Platform | None = None
) -> Result[None, ProcessError]:
    cmd = opener_command(url, platform or detect_platform())
    result = run_process(cmd, cwd=cwd, timeout=_OPEN_TIMEOUT_SECONDS)
    if isinstance(result, Err):
        return result
    return Ok(None)
