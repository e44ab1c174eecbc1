from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pubseq.publish.errors import PublishError


class PublishMode(Enum):
    REAL = "real"
    DRY_RUN = "dry-run"

    @property
    def mutates_registry(self) -> bool:
        return self is PublishMode.REAL


class PublishState(Enum):
    """Per-package state. PENDING is the only non-terminal state."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class Package:
    """One publishable package with paths resolved against the release root."""

    name: str
    manifest: Path
    stage_into: tuple[Path, ...] = ()
    excludes: tuple[str, ...] = ()
    require: tuple[str, ...] = ()
    depends_on: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class PublishPlan:
    """Packages in publish order. Build it with ``build_plan``."""

    packages: tuple[Package, ...]

    def __iter__(self) -> Iterator[Package]:
        return iter(self.packages)

    def __len__(self) -> int:
        return len(self.packages)


@dataclass(frozen=True, slots=True)
class PublishResult:
    package: str
    state: PublishState
    reason: PublishError | None = None

    @classmethod
    def succeeded(cls, package: str) -> PublishResult:
        return cls(package, PublishState.SUCCEEDED)

    @classmethod
    def failed(cls, package: str, reason: PublishError) -> PublishResult:
        return cls(package, PublishState.FAILED, reason)

    @classmethod
    def skipped(cls, package: str) -> PublishResult:
        return cls(package, PublishState.SKIPPED)

    @property
    def ok(self) -> bool:
        return self.state is PublishState.SUCCEEDED


def all_succeeded(results: list[PublishResult]) -> bool:
    return all(r.ok for r in results)
