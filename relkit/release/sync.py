"""Version propagation across text files.

Each file is read once and written at most once, atomically. A file that is
missing or whose pattern does not match is skipped with a warning rather
than failing the release, since optional targets differ between setups.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from relkit.core.config import FileBinding, ReleaseConfig
from relkit.core.result import Err, Ok, Result
from relkit.output.console import ConsoleProtocol, Style
from relkit.platform.files import atomic_write_text
from relkit.release.errors import ReleaseError
from relkit.release.model import SyncOutcome, VersionedFile
from relkit.release.rules import RewriteRule, download_url_rule, version_comment_rule
from relkit.release.semver import SemanticVersion


def rule_for(binding: FileBinding, config: ReleaseConfig) -> RewriteRule:
    match binding.rule:
        case "download_url":
            return download_url_rule(repo=config.repo, artifact_name=config.artifact_name)
        case "version_comment":
            return version_comment_rule()


def versioned_files(*, root: Path, config: ReleaseConfig) -> tuple[VersionedFile, ...]:
    return tuple(
        VersionedFile(path=root / binding.path, rule=rule_for(binding, config))
        for binding in config.files
    )


def _read_text(path: Path) -> Result[str | None, ReleaseError]:
    # Bytes are decoded without newline translation so CRLF files round-trip.
    try:
        return Ok(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Ok(None)
    except (OSError, UnicodeDecodeError) as e:
        return Err(
            ReleaseError(
                kind="write_failure", message=f"failed to read {path}: {e}", hint=str(path)
            )
        )


def sync_file(
    file: VersionedFile, version: SemanticVersion
) -> Result[SyncOutcome, ReleaseError]:
    read = _read_text(file.path)
    if isinstance(read, Err):
        return read

    content = read.value
    if content is None:
        return Ok(
            SyncOutcome(
                path=file.path,
                applied=False,
                skipped=ReleaseError(
                    kind="missing_target_file",
                    message=f"file not found: {file.path}",
                ),
            )
        )

    updated, matches = file.rule.apply(content, str(version))
    if matches == 0:
        return Ok(
            SyncOutcome(
                path=file.path,
                applied=False,
                skipped=ReleaseError(
                    kind="pattern_mismatch",
                    message=f"no version found in {file.path}",
                    hint=f"expected pattern {file.rule.describe()}",
                ),
            )
        )

    if updated != content:
        try:
            atomic_write_text(file.path, updated, encoding="utf-8")
        except OSError as e:
            return Err(
                ReleaseError(
                    kind="write_failure",
                    message=f"failed to write {file.path}: {e}",
                    hint=str(file.path),
                )
            )

    return Ok(SyncOutcome(path=file.path, applied=True))


def sync_all(
    files: Sequence[VersionedFile],
    version: SemanticVersion,
    *,
    console: ConsoleProtocol,
) -> Result[list[SyncOutcome], ReleaseError]:
    """Rewrite every file in declaration order.

    Stops at the first read/write error; files already processed keep their
    new content.
    """
    outcomes: list[SyncOutcome] = []
    for file in files:
        result = sync_file(file, version)
        if isinstance(result, Err):
            return result

        outcome = result.value
        if outcome.skipped is not None:
            console.warning(outcome.skipped.pretty())
        else:
            console.print(f"updated version in {file.path}", Style.DIM)
        outcomes.append(outcome)
    return Ok(outcomes)


def verify_consistency(
    files: Sequence[VersionedFile], version: SemanticVersion
) -> Result[None, ReleaseError]:
    """Check every present, matching file now carries exactly ``version``."""
    expected = str(version)
    for file in files:
        read = _read_text(file.path)
        if isinstance(read, Err):
            return read
        if read.value is None:
            continue

        found = file.rule.extract(read.value)
        if found is None or found == expected:
            continue
        return Err(
            ReleaseError(
                kind="inconsistent_versions",
                message=f"{file.path} has version {found}, expected {expected}",
                hint=f"pattern {file.rule.describe()}",
            )
        )
    return Ok(None)
