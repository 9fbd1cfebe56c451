"""Git operations.

Usage:
    from relkit.git import Repository

    repo = Repository(Path("."))
    repo.add_all()
    repo.commit("Release v1.0.0")
"""

from relkit.git.repository import GitError, Repository, StatusEntry

__all__ = ["GitError", "Repository", "StatusEntry"]
