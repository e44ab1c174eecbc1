"""Error payloads for the release flow.

Each stage has its own payload so the CLI can map it to a distinct exit
code. All of them carry a human message and an optional hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

VersionErrorKind = Literal["too_old", "query_failed", "unparseable"]
StageErrorKind = Literal["copy_failed", "prune_failed", "incomplete"]
PublishErrorKind = Literal[
    "auth",
    "duplicate_version",
    "malformed_manifest",
    "network",
    "tool_missing",
    "unknown",
]
PlanErrorKind = Literal[
    "duplicate", "unknown_dependency", "self_dependency", "out_of_order", "empty", "unsafe_target"
]


@dataclass(frozen=True, slots=True)
class VersionError:
    kind: VersionErrorKind
    message: str
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class StageError:
    """Staging failure.

    ``prune_failed`` is never fatal; it is reported as a warning.
    """

    kind: StageErrorKind
    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class PublishError:
    kind: PublishErrorKind
    message: str
    hint: str | None = None

    def pretty(self) -> str:
        if self.hint:
            return f"{self.message} (hint: {self.hint})"
        return self.message


@dataclass(frozen=True, slots=True)
class PlanError:
    kind: PlanErrorKind
    message: str
    hint: str | None = None
