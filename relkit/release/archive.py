"""Release archive construction.

The contents of a source directory (not the directory itself) become the
archive root, so unpacking the zip in a target folder yields the packaged
files directly. Entries are added in sorted order; only relative paths and
file bytes are meant to be stable between builds.
"""

from __future__ import annotations

import zipfile
from pathlib import Path
from zipfile import ZIP_DEFLATED, ZipFile

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import ReleaseError
from relkit.release.model import ArchiveSpec

_COMPRESS_LEVEL = 9


def _arcname(prefix: str, rel: str) -> str:
    prefix = prefix.strip("/")
    return f"{prefix}/{rel}" if prefix else rel


def collect_entries(spec: ArchiveSpec) -> list[tuple[Path | None, str]]:
    """List (source file, archive name) pairs.

    Empty directories are returned with a None source and a trailing slash.
    """
    out: list[tuple[Path | None, str]] = []
    output = spec.output_path.resolve()
    for p in sorted(spec.source_root.rglob("*")):
        rel = p.relative_to(spec.source_root).as_posix()
        if p.is_dir():
            if not any(p.iterdir()):
                out.append((None, _arcname(spec.arc_prefix, rel) + "/"))
            continue
        if not p.is_file():
            continue
        # Building into the source tree must not zip the archive into itself.
        if p.resolve() == output:
            continue
        out.append((p, _arcname(spec.arc_prefix, rel)))
    return out


def build_archive(spec: ArchiveSpec) -> Result[Path, ReleaseError]:
    """Write the zip described by ``spec``.

    Returns only after the archive is closed, so the file is complete when
    Ok is returned.
    """
    if not spec.source_root.is_dir():
        return Err(
            ReleaseError(
                kind="source_not_found",
                message=f"source directory not found: {spec.source_root}",
                hint=str(spec.source_root),
            )
        )

    try:
        spec.output_path.parent.mkdir(parents=True, exist_ok=True)
        entries = collect_entries(spec)
        # Files with mtime before 1980 (e.g. epoch from some CI checkouts)
        # cannot be represented in ZIP without strict_timestamps=False.
        with ZipFile(
            spec.output_path,
            "w",
            compression=ZIP_DEFLATED,
            compresslevel=_COMPRESS_LEVEL,
            strict_timestamps=False,
        ) as zf:
            for src, arc in entries:
                if src is None:
                    zf.mkdir(arc)
                else:
                    zf.write(src, arcname=arc)
    except (OSError, zipfile.LargeZipFile) as e:
        return Err(
            ReleaseError(
                kind="write_failure",
                message=f"failed to write archive {spec.output_path}: {e}",
                hint=str(spec.output_path),
            )
        )

    return Ok(spec.output_path)


def archive_specs(
    *,
    root: Path,
    source_dir: str,
    dist_dir: str,
    names: tuple[str, ...],
) -> tuple[ArchiveSpec, ...]:
    """Specs sharing one source tree, one per output file name."""
    source = root / source_dir
    return tuple(
        ArchiveSpec(output_path=root / dist_dir / name, source_root=source) for name in names
    )
