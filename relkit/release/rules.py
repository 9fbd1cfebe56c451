"""Text rewrite rules for version-bearing files.

Files such as ``.vale.ini`` or ``README.md`` are not owned by the release
tooling, so they are edited as opaque text: a rule locates the version token
by its shape (not its current value) and substitutes a rendered replacement,
leaving every other byte alone. Re-applying a rule with the same version is
a no-op.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass

from relkit.release.semver import VERSION_TOKEN

__all__ = ["RewriteRule", "download_url_rule", "version_comment_rule"]


@dataclass(frozen=True, slots=True)
class RewriteRule:
    """A pattern with a ``version`` group and a renderer for its replacement.

    Attributes:
        name: Rule name as used in the config file.
        pattern: Regex whose ``version`` group captures the version token.
        render: Builds the replacement text for a match from a version string.
        count: Maximum replacements per file, 0 for all.
    """

    name: str
    pattern: re.Pattern[str]
    render: Callable[[str], str]
    count: int = 0

    def apply(self, content: str, version: str) -> tuple[str, int]:
        """Return the rewritten content and the number of matches."""
        replacement = self.render(version)
        return self.pattern.subn(lambda _m: replacement, content, count=self.count)

    def extract(self, content: str) -> str | None:
        """Read the version back out of content, None if absent."""
        m = self.pattern.search(content)
        if m is None:
            return None
        return m.group("version")

    def describe(self) -> str:
        return self.pattern.pattern


def version_comment_rule() -> RewriteRule:
    """``# Version: X.Y.Z`` comments (ini files, vocabularies)."""
    return RewriteRule(
        name="version_comment",
        pattern=re.compile(rf"#\s*Version:\s*(?P<version>{VERSION_TOKEN})"),
        render=lambda v: f"# Version: {v}",
        count=1,
    )


def download_url_rule(*, repo: str, artifact_name: str) -> RewriteRule:
    """Release download links for one artifact.

    Only links to ``<artifact_name>.zip`` in ``repo`` are rewritten; links to
    other artifacts keep their version.
    """
    base = f"https://github.com/{repo}/releases/download"
    pattern = re.compile(
        rf"{re.escape(base)}/v(?P<version>{VERSION_TOKEN})/{re.escape(artifact_name)}\.zip"
    )
    return RewriteRule(
        name="download_url",
        pattern=pattern,
        render=lambda v: f"{base}/v{v}/{artifact_name}.zip",
    )
