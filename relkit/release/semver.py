from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from relkit.core.result import Err, Ok, Result
from relkit.release.errors import ReleaseError

BumpKind = Literal["major", "minor", "patch"]

_BUMP_KINDS: tuple[BumpKind, ...] = ("major", "minor", "patch")

# Structural shape of a version token, shared with the file rewrite rules so
# that any previous value (including a test literal) is matched.
VERSION_TOKEN = r"\d+\.\d+\.\d+(?:-[0-9A-Za-z][0-9A-Za-z.-]*)?"

_VERSION_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-([0-9A-Za-z][0-9A-Za-z.-]*))?$"
)


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    major: int
    minor: int
    patch: int
    suffix: str | None = None

    def __str__(self) -> str:
        core = f"{self.major}.{self.minor}.{self.patch}"
        return f"{core}-{self.suffix}" if self.suffix else core

    @property
    def numeric(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    @property
    def is_dry_run(self) -> bool:
        """Suffixed versions are test literals and never get published."""
        return self.suffix is not None

    def to_tag(self) -> str:
        return f"v{self}"

    def bump(self, kind: BumpKind) -> SemanticVersion:
        match kind:
            case "major":
                return SemanticVersion(self.major + 1, 0, 0)
            case "minor":
                return SemanticVersion(self.major, self.minor + 1, 0)
            case _:
                return SemanticVersion(self.major, self.minor, self.patch + 1)


@dataclass(frozen=True, slots=True)
class ReleaseIntent:
    """Either a bump kind or a literal version supplied whole."""

    kind: BumpKind | Literal["literal"]
    literal: SemanticVersion | None = None


def parse_version(text: str) -> Result[SemanticVersion, ReleaseError]:
    m = _VERSION_RE.match(text.strip())
    if m is None:
        return Err(
            ReleaseError(
                kind="malformed_version",
                message=f"malformed version: {text!r}",
                hint="Expected MAJOR.MINOR.PATCH[-SUFFIX]",
            )
        )
    return Ok(SemanticVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)), m.group(4)))


def parse_intent(
    token: str | None, *, test_marker: str = "-test"
) -> Result[ReleaseIntent, ReleaseError]:
    """Turn the CLI token into an intent.

    A token carrying the test marker is a literal version; a known bump kind
    is used as is; anything else, including no token at all, means patch.
    """
    if token is not None and test_marker and test_marker in token:
        parsed = parse_version(token)
        if isinstance(parsed, Err):
            return parsed
        return Ok(ReleaseIntent(kind="literal", literal=parsed.value))

    for kind in _BUMP_KINDS:
        if token == kind:
            return Ok(ReleaseIntent(kind=kind))
    return Ok(ReleaseIntent(kind="patch"))


def bump(
    current: SemanticVersion | None, intent: ReleaseIntent
) -> Result[SemanticVersion, ReleaseError]:
    """Compute the release version.

    A literal intent is returned verbatim and ``current`` is not consulted,
    so callers may pass None for it.
    """
    if intent.kind == "literal":
        if intent.literal is None:
            return Err(
                ReleaseError(kind="malformed_version", message="literal intent without a version")
            )
        return Ok(intent.literal)
    if current is None:
        return Err(
            ReleaseError(
                kind="malformed_version",
                message=f"cannot {intent.kind}-bump without a current version",
            )
        )
    return Ok(current.bump(intent.kind))
