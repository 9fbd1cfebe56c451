from __future__ import annotations


def commit_message(tag: str) -> str:
    return f"Release {tag}"


def release_title(tag: str) -> str:
    return f"Release {tag}"


def release_notes(tag: str) -> str:
    return f"Version {tag} release."


def release_edit_url(repo: str, tag: str) -> str:
    return f"https://github.com/{repo}/releases/edit/{tag}"
