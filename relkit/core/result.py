"""Ok/Err result values.

Release steps return ``Ok(value)`` or ``Err(error)`` instead of raising, so
the pipeline can decide per step whether a failure is fatal or only worth a
warning. Callers narrow with ``isinstance(result, Err)`` or ``match``:

    match parse_version("1.2.3"):
        case Ok(version):
            print(version)
        case Err(error):
            print(error.pretty())
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Err", "Ok", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E


type Result[T, E] = Ok[T] | Err[E]
