"""Release pipeline: version bump, file sync, archives, publication.

Layering (leaf first):
- semver, rules, model: pure data and text transforms
- manifest, sync, archive: file-system effects
- vcs, gh, notify: adapters for git, GitHub CLI and the desktop browser
- pipeline: orchestration over the ``contracts`` protocols
"""

from __future__ import annotations

from relkit.release.errors import ReleaseError
from relkit.release.pipeline import Collaborators, ReleaseOutcome, Stage, run_release
from relkit.release.semver import ReleaseIntent, SemanticVersion, bump, parse_intent, parse_version

__all__ = [
    "Collaborators",
    "ReleaseError",
    "ReleaseIntent",
    "ReleaseOutcome",
    "SemanticVersion",
    "Stage",
    "bump",
    "parse_intent",
    "parse_version",
    "run_release",
]
