"""Narrowing helpers for parsed TOML and JSON.

``relkit.toml`` and ``package.json`` arrive as plain ``object`` trees; these
helpers check shapes at that boundary and return None on a mismatch.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

StrDict = dict[str, object]


def as_str_dict(obj: object) -> StrDict | None:
    """``obj`` as a string-keyed dict, or None."""
    if not isinstance(obj, dict):
        return None
    items = cast(dict[object, object], obj)
    if any(not isinstance(k, str) for k in items):
        return None
    return cast(StrDict, items)


def get_str(table: Mapping[str, object], key: str) -> str | None:
    """Stripped string value; None when missing, not a string, or blank."""
    value = table.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_bool(table: Mapping[str, object], key: str) -> bool | None:
    value = table.get(key)
    return value if isinstance(value, bool) else None


def get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return as_str_dict(table.get(key))


def get_list(table: Mapping[str, object], key: str) -> list[object] | None:
    value = table.get(key)
    return cast(list[object], value) if isinstance(value, list) else None
