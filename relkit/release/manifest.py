"""Package manifest (``package.json``) version access.

The manifest is parsed as JSON to read its version. On write only the
top-level ``version`` string is replaced in the original text, so separators,
indentation, key order and nested ``version`` keys stay as they were. A
manifest without a top-level version string is re-serialized with the
indentation and trailing newline it was read with.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path

from relkit.core.result import Err, Ok, Result
from relkit.core.structured import StrDict, as_str_dict, get_str
from relkit.platform.files import atomic_write_text
from relkit.release.errors import ReleaseError
from relkit.release.semver import SemanticVersion, parse_version

_INDENT_RE = re.compile(r"^([ \t]+)\S", re.MULTILINE)
_VERSION_FIELD_RE = re.compile(r'("version"\s*:\s*")([^"\\]*)(")')


@dataclass(frozen=True, slots=True)
class Manifest:
    path: Path
    data: StrDict
    indent: int | str | None
    trailing_newline: bool
    text: str

    @property
    def version_text(self) -> str | None:
        return get_str(self.data, "version")

    def render(self, version: SemanticVersion) -> str:
        data = dict(self.data)
        data["version"] = str(version)
        for m in _VERSION_FIELD_RE.finditer(self.text):
            candidate = self.text[: m.start(2)] + str(version) + self.text[m.end(2) :]
            # Skip matches inside nested objects or string values.
            if json.loads(candidate) == data:
                return candidate
        out = json.dumps(data, indent=self.indent, ensure_ascii=False)
        return out + "\n" if self.trailing_newline else out


def _detect_indent(text: str) -> int | str | None:
    m = _INDENT_RE.search(text)
    if m is None:
        return None
    ws = m.group(1)
    if "\t" in ws:
        return ws
    return len(ws)


def read_manifest(path: Path) -> Result[Manifest, ReleaseError]:
    try:
        text = path.read_bytes().decode("utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="invalid_manifest",
                message=f"failed to read {path.name}: {e}",
                hint=str(path),
            )
        )
    except UnicodeDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_manifest", message=f"{path.name} is not UTF-8: {e}", hint=str(path)
            )
        )

    try:
        obj: object = json.loads(text)
    except json.JSONDecodeError as e:
        return Err(
            ReleaseError(
                kind="invalid_manifest",
                message=f"invalid JSON in {path.name}: {e}",
                hint=str(path),
            )
        )

    data = as_str_dict(obj)
    if data is None:
        return Err(
            ReleaseError(
                kind="invalid_manifest",
                message=f"invalid JSON root in {path.name}",
                hint=str(path),
            )
        )

    return Ok(
        Manifest(
            path=path,
            data=data,
            indent=_detect_indent(text),
            trailing_newline=text.endswith("\n"),
            text=text,
        )
    )


def manifest_version(manifest: Manifest) -> Result[SemanticVersion, ReleaseError]:
    text = manifest.version_text
    if text is None:
        return Err(
            ReleaseError(
                kind="malformed_version",
                message=f"missing version in {manifest.path.name}",
                hint=str(manifest.path),
            )
        )
    parsed = parse_version(text)
    if isinstance(parsed, Err):
        return Err(
            ReleaseError(
                kind="malformed_version",
                message=f"malformed version in {manifest.path.name}: {text!r}",
                hint="Expected MAJOR.MINOR.PATCH[-SUFFIX]",
            )
        )
    return parsed


def write_manifest_version(
    manifest: Manifest, version: SemanticVersion
) -> Result[bool, ReleaseError]:
    """Persist ``version`` into the manifest. Ok(False) if already set."""
    if manifest.version_text == str(version):
        return Ok(False)

    try:
        atomic_write_text(manifest.path, manifest.render(version), encoding="utf-8")
    except OSError as e:
        return Err(
            ReleaseError(
                kind="write_failure",
                message=f"failed to write {manifest.path.name}: {e}",
                hint=str(manifest.path),
            )
        )
    return Ok(True)
