from __future__ import annotations

import sys

import pytest

from relkit.platform.detection import Platform, detect_platform


@pytest.mark.parametrize(
    ("system", "expected"),
    [
        ("linux", Platform.LINUX),
        ("darwin", Platform.MACOS),
        ("win32", Platform.WINDOWS),
        ("cygwin", Platform.WINDOWS),
        ("freebsd14", Platform.UNKNOWN),
    ],
)
def test_detect_platform(system: str, expected: Platform) -> None:
    assert detect_platform(system) is expected


def test_defaults_to_running_interpreter() -> None:
    assert detect_platform() is detect_platform(sys.platform)


def test_str() -> None:
    assert str(Platform.MACOS) == "macos"
