from __future__ import annotations

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import GitError, Repository
from relkit.release.errors import ReleaseError


def _vcs_error(error: GitError) -> ReleaseError:
    hint = None
    if error.command == "commit":
        hint = "Configure git user.name/user.email, then retry."
    elif error.command == "push":
        hint = "Check the upstream branch and your credentials."
    return ReleaseError(
        kind="vcs_failed",
        message=f"git {error.command} failed: {error.message}",
        hint=hint,
    )


class GitVersionControl:
    """VersionControl backed by a local git working tree."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def status_is_clean(self) -> Result[bool, ReleaseError]:
        result = self._repo.pending_changes()
        if isinstance(result, Err):
            return Err(_vcs_error(result.error))
        return Ok(len(result.value) == 0)

    def commit_all(self, message: str) -> Result[None, ReleaseError]:
        added = self._repo.add_all()
        if isinstance(added, Err):
            return Err(_vcs_error(added.error))
        committed = self._repo.commit(message)
        if isinstance(committed, Err):
            return Err(_vcs_error(committed.error))
        return Ok(None)

    def tag(self, name: str) -> Result[None, ReleaseError]:
        result = self._repo.tag(name)
        if isinstance(result, Err):
            return Err(_vcs_error(result.error))
        return Ok(None)

    def push(self, *, include_tags: bool) -> Result[None, ReleaseError]:
        result = self._repo.push()
        if isinstance(result, Err):
            return Err(_vcs_error(result.error))
        if include_tags:
            tags = self._repo.push(tags=True)
            if isinstance(tags, Err):
                return Err(_vcs_error(tags.error))
        return Ok(None)
