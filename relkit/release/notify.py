from __future__ import annotations

from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.browser import open_url
from relkit.release.errors import ReleaseError, first_line


class BrowserNotifier:
    """Open the release edit page so the operator can annotate it."""

    def __init__(self, workspace_root: Path) -> None:
        self._root = workspace_root

    def open_release_page(self, url: str) -> Result[None, ReleaseError]:
        result = open_url(url, cwd=self._root)
        if isinstance(result, Err):
            return Err(
                ReleaseError(
                    kind="notify_failure",
                    message=f"failed to open browser for {url}",
                    hint=first_line(result.error.stderr),
                )
            )
        return Ok(None)
