from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from relkit.release.errors import ReleaseError
from relkit.release.rules import RewriteRule


@dataclass(frozen=True, slots=True)
class VersionedFile:
    """A file whose embedded version is kept in sync by ``rule``."""

    path: Path
    rule: RewriteRule


@dataclass(frozen=True, slots=True)
class SyncOutcome:
    path: Path
    applied: bool
    # Why the file was skipped (missing_target_file / pattern_mismatch).
    skipped: ReleaseError | None = None


@dataclass(frozen=True, slots=True)
class ArchiveSpec:
    """One zip to build.

    The contents of ``source_root`` are stored under ``arc_prefix``; the
    default empty prefix puts them at the archive root.
    """

    output_path: Path
    source_root: Path
    arc_prefix: str = ""


@dataclass(frozen=True, slots=True)
class PublishOutput:
    stdout: str
    stderr: str
