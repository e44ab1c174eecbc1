"""Registry client collaborator.

The sequencer only sees ``RegistryClient``. ``CargoRegistryClient`` drives
``cargo publish`` and classifies its failures from stderr so the report can
say why a package was rejected.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pubseq.core.result import Err, Ok, Result
from pubseq.output.console import ConsoleProtocol, Style
from pubseq.platform.process import ProcessError, run_tee
from pubseq.publish.errors import PublishError, PublishErrorKind
from pubseq.publish.model import PublishMode


class RegistryClient(Protocol):
    def publish(self, manifest: Path, mode: PublishMode) -> Result[None, PublishError]: ...


# Checked in order; the first kind with a matching marker wins.
_MARKERS: tuple[tuple[PublishErrorKind, tuple[str, ...]], ...] = (
    (
        "duplicate_version",
        ("is already uploaded", "already exists on crates.io", "already exists on"),
    ),
    (
        "auth",
        (
            "no token found",
            "cargo login",
            "status 401",
            "status 403",
            "unauthorized",
            "forbidden",
            "authentication",
        ),
    ),
    (
        "malformed_manifest",
        (
            "failed to parse manifest",
            "failed to load manifest",
            "failed to read manifest",
            "could not find `cargo.toml`",
            "missing or empty metadata fields",
            "invalid manifest",
            "manifest path `",
        ),
    ),
    (
        "network",
        (
            "spurious network error",
            "could not resolve host",
            "failed to connect",
            "connection refused",
            "operation timed out",
            "network failure",
            "ssl connect error",
        ),
    ),
)

_HINTS: dict[PublishErrorKind, str] = {
    "duplicate_version": "bump the package version; registry versions are immutable",
    "auth": "run `cargo login` or set CARGO_REGISTRY_TOKEN",
    "malformed_manifest": "run the publish with --dry-run to see cargo's full diagnostics",
    "network": "check connectivity to the registry and retry the release",
    "tool_missing": "install cargo (rustup) and make sure it is on PATH",
}


def classify_failure(error: ProcessError) -> PublishError:
    if not error.started:
        return PublishError(
            kind="tool_missing",
            message=f"{error.command[0]} could not be started: {error.stderr.strip()}",
            hint=_HINTS["tool_missing"],
        )

    stderr = error.stderr.lower()
    kind: PublishErrorKind = "unknown"
    for candidate, markers in _MARKERS:
        if any(m in stderr for m in markers):
            kind = candidate
            break

    return PublishError(kind=kind, message=_summary(error), hint=_HINTS.get(kind))


def _summary(error: ProcessError) -> str:
    """Prefer cargo's own ``error:`` line over the generic exit status."""
    for line in error.stderr.splitlines():
        stripped = line.strip()
        if stripped.lower().startswith("error:"):
            return stripped[len("error:") :].strip()
    return str(error)


class CargoRegistryClient:
    def __init__(
        self,
        *,
        cwd: Path,
        channel: str | None = None,
        allow_dirty: bool = False,
        console: ConsoleProtocol | None = None,
        verbose: bool = False,
    ) -> None:
        self._cwd = cwd
        self._channel = channel
        self._allow_dirty = allow_dirty
        self._console = console
        self._verbose = verbose

    def command(self, manifest: Path, mode: PublishMode) -> list[str]:
        cmd = ["cargo"]
        if self._channel:
            cmd.append(f"+{self._channel}")
        cmd += ["publish", "--manifest-path", str(manifest)]
        if mode is PublishMode.DRY_RUN:
            cmd.append("--dry-run")
        if self._allow_dirty:
            cmd.append("--allow-dirty")
        return cmd

    def publish(self, manifest: Path, mode: PublishMode) -> Result[None, PublishError]:
        cmd = self.command(manifest, mode)
        if self._verbose and self._console is not None:
            self._console.print(f"$ {' '.join(cmd)}", Style.DIM)

        result = run_tee(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            return Err(classify_failure(result.error))
        return Ok(None)
