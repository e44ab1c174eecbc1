"""Result type for explicit error handling.

Every step of a release (toolchain query, staging, publishing) can fail in an
expected way. Those failures are returned as values instead of raised, so the
orchestrator can decide what is fatal and what is only reported.

Usage:
    def parse_version(text: str) -> Result[ToolchainVersion, VersionError]:
        ...

    match parse_version("rustc 1.48.0"):
        case Ok(version):
            console.success(f"toolchain {version}")
        case Err(error):
            console.error(error.message)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """A successful result carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """A failed result carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
