from __future__ import annotations

import shutil
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.platform.process import run_output
from relkit.release.errors import ReleaseError, first_line
from relkit.release.model import PublishOutput

GH_TIMEOUT_SECONDS = 10 * 60.0


def ensure_gh_available() -> Result[None, ReleaseError]:
    if shutil.which("gh") is None:
        return Err(
            ReleaseError(
                kind="gh_missing",
                message="gh: missing",
                hint="Install GitHub CLI: https://cli.github.com/",
            )
        )
    return Ok(None)


class GhReleaseHost:
    """ReleaseHost using ``gh release create`` in the project checkout."""

    def __init__(self, workspace_root: Path) -> None:
        self._root = workspace_root

    def create_release(
        self,
        *,
        tag: str,
        title: str,
        notes: str,
        attachments: list[Path],
    ) -> Result[PublishOutput, ReleaseError]:
        ok = ensure_gh_available()
        if isinstance(ok, Err):
            return ok

        cmd = [
            "gh",
            "release",
            "create",
            tag,
            *[str(p) for p in attachments],
            "--title",
            title,
            "--notes",
            notes,
        ]
        # Not retried: a half-created release must be inspected by hand.
        result = run_output(cmd, cwd=self._root, timeout=GH_TIMEOUT_SECONDS)
        if isinstance(result, Err):
            e = result.error
            return Err(
                ReleaseError(
                    kind="publish_failure",
                    message=f"gh release create {tag} failed (exit {e.returncode})",
                    hint=first_line(e.stderr, e.stdout),
                )
            )
        return Ok(PublishOutput(stdout=result.value.stdout, stderr=result.value.stderr))
