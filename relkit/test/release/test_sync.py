"""Tests for release/sync.py."""

from __future__ import annotations

from pathlib import Path

from relkit.core.config import FileBinding, ReleaseConfig
from relkit.core.result import Err, Ok
from relkit.output.console import MockConsole
from relkit.release.model import VersionedFile
from relkit.release.rules import version_comment_rule
from relkit.release.semver import SemanticVersion
from relkit.release.sync import sync_all, sync_file, verify_consistency, versioned_files

from .fakes import REPO, VOCAB_DIR, make_project

V004 = SemanticVersion(0, 0, 4)


def _files(root: Path) -> tuple[VersionedFile, ...]:
    return versioned_files(root=root, config=ReleaseConfig(repo=REPO))


class TestVersionedFiles:
    def test_default_bindings(self, tmp_path: Path) -> None:
        files = _files(tmp_path)
        assert [f.path for f in files] == [
            tmp_path / "src/DNB/.vale.ini",
            tmp_path / VOCAB_DIR / "accept.txt",
            tmp_path / VOCAB_DIR / "reject.txt",
            tmp_path / "README.md",
        ]
        assert [f.rule.name for f in files] == [
            "version_comment",
            "version_comment",
            "version_comment",
            "download_url",
        ]

    def test_custom_bindings(self, tmp_path: Path) -> None:
        config = ReleaseConfig(files=(FileBinding("docs/INSTALL.md", "download_url"),))
        files = versioned_files(root=tmp_path, config=config)
        assert len(files) == 1
        assert files[0].path == tmp_path / "docs/INSTALL.md"


class TestSyncAll:
    def test_patch_release_rewrites_every_file(self, tmp_path: Path) -> None:
        root = make_project(tmp_path)
        console = MockConsole()

        result = sync_all(_files(root), V004, console=console)

        assert isinstance(result, Ok)
        assert all(o.applied for o in result.value)
        assert (root / "src/DNB/.vale.ini").read_text(encoding="utf-8").startswith(
            "# Version: 0.0.4\n"
        )
        for name in ("accept.txt", "reject.txt"):
            text = (root / VOCAB_DIR / name).read_text(encoding="utf-8")
            assert text.startswith("# Version: 0.0.4\n")
        readme = (root / "README.md").read_text(encoding="utf-8")
        assert f"https://github.com/{REPO}/releases/download/v0.0.4/DNB.zip" in readme
        assert f"https://github.com/{REPO}/releases/download/v0.0.1/Other.zip" in readme
        assert len(console.find("updated version in")) == 4
        assert verify_consistency(_files(root), V004) == Ok(None)

    def test_second_run_changes_nothing(self, tmp_path: Path) -> None:
        root = make_project(tmp_path)
        sync_all(_files(root), V004, console=MockConsole())
        before = {p: p.read_bytes() for p in root.rglob("*") if p.is_file()}

        result = sync_all(_files(root), V004, console=MockConsole())

        assert isinstance(result, Ok)
        assert {p: p.read_bytes() for p in root.rglob("*") if p.is_file()} == before

    def test_missing_file_is_skipped_with_warning(self, tmp_path: Path) -> None:
        root = make_project(tmp_path)
        (root / VOCAB_DIR / "reject.txt").unlink()
        console = MockConsole()

        result = sync_all(_files(root), V004, console=console)

        assert isinstance(result, Ok)
        skipped = [o for o in result.value if o.skipped is not None]
        assert len(skipped) == 1
        assert skipped[0].skipped is not None
        assert skipped[0].skipped.kind == "missing_target_file"
        assert len(console.find("warning: file not found")) == 1
        assert not (root / VOCAB_DIR / "reject.txt").exists()

    def test_pattern_mismatch_is_skipped_and_file_untouched(self, tmp_path: Path) -> None:
        root = make_project(tmp_path)
        ini = root / "src/DNB/.vale.ini"
        ini.write_text("StylesPath = styles\n", encoding="utf-8")

        result = sync_all(_files(root), V004, console=MockConsole())

        assert isinstance(result, Ok)
        assert result.value[0].skipped is not None
        assert result.value[0].skipped.kind == "pattern_mismatch"
        assert ini.read_text(encoding="utf-8") == "StylesPath = styles\n"


class TestSyncFile:
    def test_crlf_is_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "accept.txt"
        path.write_bytes(b"# Version: 0.0.3\r\nHugo\r\n")

        result = sync_file(VersionedFile(path, version_comment_rule()), V004)

        assert isinstance(result, Ok)
        assert path.read_bytes() == b"# Version: 0.0.4\r\nHugo\r\n"

    def test_unchanged_file_is_not_rewritten(self, tmp_path: Path) -> None:
        path = tmp_path / "accept.txt"
        path.write_text("# Version: 0.0.4\n", encoding="utf-8")
        mtime = path.stat().st_mtime_ns

        result = sync_file(VersionedFile(path, version_comment_rule()), V004)

        assert isinstance(result, Ok)
        assert result.value.applied is True
        assert path.stat().st_mtime_ns == mtime


class TestVerifyConsistency:
    def test_detects_stale_file(self, tmp_path: Path) -> None:
        root = make_project(tmp_path)

        result = verify_consistency(_files(root), V004)

        assert isinstance(result, Err)
        assert result.error.kind == "inconsistent_versions"
        assert "0.0.3" in result.error.message

    def test_ignores_missing_and_mismatched_files(self, tmp_path: Path) -> None:
        root = make_project(tmp_path, version="0.0.4")
        (root / "README.md").write_text("no links\n", encoding="utf-8")
        (root / VOCAB_DIR / "accept.txt").unlink()

        assert verify_consistency(_files(root), V004) == Ok(None)
