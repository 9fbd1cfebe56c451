from __future__ import annotations

from relkit.release.notes import commit_message, release_edit_url, release_notes, release_title


def test_release_texts() -> None:
    assert commit_message("v0.0.4") == "Release v0.0.4"
    assert release_title("v0.0.4") == "Release v0.0.4"
    assert release_notes("v0.0.4") == "Version v0.0.4 release."


def test_edit_url() -> None:
    assert (
        release_edit_url("acme/docs", "v0.0.4")
        == "https://github.com/acme/docs/releases/edit/v0.0.4"
    )
