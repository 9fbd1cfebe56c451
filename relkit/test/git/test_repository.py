"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path

import pytest

from relkit.core.result import Err, Ok, Result
from relkit.git.repository import Repository, StatusEntry
from relkit.platform.process import ProcessError


class FakeGit:
    """Records git invocations and answers from a queue of results."""

    def __init__(self, *responses: Result[str, ProcessError]) -> None:
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []
        self._responses = list(responses)

    def __call__(
        self, cmd: list[str], cwd: Path, *, timeout: float | None = None
    ) -> Result[str, ProcessError]:
        self.calls.append(cmd[3:])
        self.timeouts.append(timeout)
        if self._responses:
            return self._responses.pop(0)
        return Ok("")


def _fail(stderr: str, returncode: int = 1) -> Err[ProcessError]:
    return Err(ProcessError(command=("git",), returncode=returncode, stdout="", stderr=stderr))


@pytest.fixture
def fake(monkeypatch: pytest.MonkeyPatch) -> FakeGit:
    git = FakeGit()
    monkeypatch.setattr("relkit.git.repository.run_process", git)
    return git


class TestStatusEntry:
    def test_untracked(self) -> None:
        assert StatusEntry(xy="??", path="new.txt").is_untracked is True
        assert StatusEntry(xy=" M", path="README.md").is_untracked is False


class TestPendingChanges:
    def test_clean(self, tmp_path: Path, fake: FakeGit) -> None:
        result = Repository(tmp_path).pending_changes()
        assert result == Ok(())
        assert fake.calls == [["status", "--porcelain"]]

    def test_parses_entries(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        git = FakeGit(Ok(" M README.md\n?? notes.txt\n"))
        monkeypatch.setattr("relkit.git.repository.run_process", git)

        result = Repository(tmp_path).pending_changes()

        assert isinstance(result, Ok)
        assert result.value == (
            StatusEntry(xy=" M", path="README.md"),
            StatusEntry(xy="??", path="notes.txt"),
        )

    def test_failure(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        git = FakeGit(_fail("fatal: not a git repository\nmore", returncode=128))
        monkeypatch.setattr("relkit.git.repository.run_process", git)

        result = Repository(tmp_path).pending_changes()

        assert isinstance(result, Err)
        assert result.error.command == "status"
        assert result.error.message == "fatal: not a git repository"
        assert result.error.returncode == 128


class TestWrites:
    def test_commands(self, tmp_path: Path, fake: FakeGit) -> None:
        repo = Repository(tmp_path)
        assert isinstance(repo.add_all(), Ok)
        assert isinstance(repo.commit("Release v1.0.0"), Ok)
        assert isinstance(repo.tag("v1.0.0"), Ok)
        assert isinstance(repo.push(), Ok)
        assert isinstance(repo.push(tags=True), Ok)

        assert fake.calls == [
            ["add", "-A"],
            ["commit", "-m", "Release v1.0.0"],
            ["tag", "v1.0.0"],
            ["push"],
            ["push", "--tags"],
        ]

    def test_push_uses_network_timeout(self, tmp_path: Path, fake: FakeGit) -> None:
        repo = Repository(tmp_path)
        repo.tag("v1.0.0")
        repo.push()
        assert fake.timeouts[0] is not None and fake.timeouts[1] is not None
        assert fake.timeouts[1] > fake.timeouts[0]

    def test_commit_failure_falls_back_to_stdout(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        git = FakeGit(
            Err(ProcessError(command=("git",), returncode=1, stdout="nothing to commit", stderr=""))
        )
        monkeypatch.setattr("relkit.git.repository.run_process", git)

        result = Repository(tmp_path).commit("Release v1.0.0")

        assert isinstance(result, Err)
        assert result.error.command == "commit"
        assert result.error.message == "nothing to commit"
