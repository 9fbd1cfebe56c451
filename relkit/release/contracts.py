"""Collaborators the release pipeline talks to.

The pipeline only sees these protocols; ``relkit.release.vcs``,
``relkit.release.gh`` and ``relkit.release.notify`` provide the git, GitHub
CLI and browser implementations, and tests pass in-memory fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from relkit.core.result import Result
from relkit.release.errors import ReleaseError
from relkit.release.model import PublishOutput


class VersionControl(Protocol):
    def status_is_clean(self) -> Result[bool, ReleaseError]: ...

    def commit_all(self, message: str) -> Result[None, ReleaseError]: ...

    def tag(self, name: str) -> Result[None, ReleaseError]: ...

    def push(self, *, include_tags: bool) -> Result[None, ReleaseError]: ...


class ReleaseHost(Protocol):
    def create_release(
        self,
        *,
        tag: str,
        title: str,
        notes: str,
        attachments: list[Path],
    ) -> Result[PublishOutput, ReleaseError]: ...


class Notifier(Protocol):
    def open_release_page(self, url: str) -> Result[None, ReleaseError]: ...
