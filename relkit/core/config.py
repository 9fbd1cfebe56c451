"""Typed release configuration.

The configuration lives in an optional ``relkit.toml`` at the project root:

    [release]
    manifest = "package.json"
    source_dir = "src"
    dist_dir = "dist"
    artifact_name = "DNB"
    artifact_prefix = "dnb-vale-config"
    repo = "davidsneighbour/dnb-vale-config"

    [[release.files]]
    path = "src/DNB/.vale.ini"
    rule = "version_comment"

Every key is optional. A missing file yields ``ReleaseConfig()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_list, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "FileBinding",
    "ReleaseConfig",
    "RuleName",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "relkit.toml"

RuleName = Literal["version_comment", "download_url"]
_RULE_NAMES: frozenset[str] = frozenset({"version_comment", "download_url"})


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class FileBinding:
    """A version-bearing file and the name of the rule that rewrites it."""

    path: str
    rule: RuleName


def _default_files() -> tuple[FileBinding, ...]:
    return (
        FileBinding("src/DNB/.vale.ini", "version_comment"),
        FileBinding("src/DNB/styles/config/vocabularies/DNB/accept.txt", "version_comment"),
        FileBinding("src/DNB/styles/config/vocabularies/DNB/reject.txt", "version_comment"),
        FileBinding("README.md", "download_url"),
    )


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Release configuration (paths are relative to the project root)."""

    manifest: str = "package.json"
    source_dir: str = "src"
    dist_dir: str = "dist"
    artifact_name: str = "DNB"
    artifact_prefix: str = "dnb-vale-config"
    repo: str = "davidsneighbour/dnb-vale-config"
    test_marker: str = "-test"
    persist_test_version: bool = True
    log_dir: str = "~/.logs"
    log_name: str = "relkit-release"
    files: tuple[FileBinding, ...] = field(default_factory=_default_files)

    def pinned_archive_name(self, version: str) -> str:
        return f"{self.artifact_prefix}-v{version}.zip"

    @property
    def stable_archive_name(self) -> str:
        return f"{self.artifact_name}.zip"

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create a config from parsed TOML.

        Raises:
            ValueError: If ``release.files`` is malformed.
        """
        release: StrDict = get_table(data, "release") or {}
        defaults = cls()

        files = defaults.files
        raw_files = get_list(release, "files")
        if raw_files is not None:
            files = tuple(_parse_binding(item) for item in raw_files)

        persist = get_bool(release, "persist_test_version")

        return cls(
            manifest=get_str(release, "manifest") or defaults.manifest,
            source_dir=get_str(release, "source_dir") or defaults.source_dir,
            dist_dir=get_str(release, "dist_dir") or defaults.dist_dir,
            artifact_name=get_str(release, "artifact_name") or defaults.artifact_name,
            artifact_prefix=get_str(release, "artifact_prefix") or defaults.artifact_prefix,
            repo=get_str(release, "repo") or defaults.repo,
            test_marker=get_str(release, "test_marker") or defaults.test_marker,
            persist_test_version=defaults.persist_test_version if persist is None else persist,
            log_dir=get_str(release, "log_dir") or defaults.log_dir,
            log_name=get_str(release, "log_name") or defaults.log_name,
            files=files,
        )


def _parse_binding(item: object) -> FileBinding:
    table = as_str_dict(item)
    if table is None:
        raise ValueError("release.files entries must be tables")
    path = get_str(table, "path")
    if path is None:
        raise ValueError("release.files entry is missing 'path'")
    rule = get_str(table, "rule")
    if rule not in _RULE_NAMES:
        raise ValueError(f"unknown rule for {path}: {rule!r}")
    return FileBinding(path=path, rule=rule)  # pyright: ignore[reportArgumentType]


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and validate a release config file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_config_or_default(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Like load_config, but an absent file means built-in defaults."""
    if not path.exists():
        return Ok(ReleaseConfig())
    return load_config(path)
