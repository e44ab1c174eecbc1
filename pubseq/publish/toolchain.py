"""Toolchain query and version gate.

The gate runs before anything touches the filesystem or the registry.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from pubseq.core.result import Err, Ok, Result
from pubseq.core.version import ToolchainVersion, find_version
from pubseq.output.console import ConsoleProtocol, Style
from pubseq.platform.process import run as run_process
from pubseq.publish.errors import VersionError


class ToolchainQuery(Protocol):
    def query(self) -> Result[ToolchainVersion, VersionError]: ...


def check_version(
    required: ToolchainVersion, actual: ToolchainVersion
) -> Result[ToolchainVersion, VersionError]:
    """Accept ``actual`` if it is at least ``required``."""
    if actual < required:
        return Err(
            VersionError(
                kind="too_old",
                message=f"toolchain {actual} is older than the required {required}",
                hint=f"rustup toolchain install {required}",
            )
        )
    return Ok(actual)


class CommandToolchain:
    """Queries ``<tool> [+channel] --version``.

    With a channel, rustup resolves that exact toolchain, so a missing
    install surfaces as ``query_failed`` rather than a silently newer compiler.
    """

    def __init__(
        self,
        *,
        tool: str,
        channel: str | None,
        cwd: Path,
        console: ConsoleProtocol | None = None,
        verbose: bool = False,
    ) -> None:
        self._tool = tool
        self._channel = channel
        self._cwd = cwd
        self._console = console
        self._verbose = verbose

    def command(self) -> list[str]:
        cmd = [self._tool]
        if self._channel:
            cmd.append(f"+{self._channel}")
        cmd.append("--version")
        return cmd

    def query(self) -> Result[ToolchainVersion, VersionError]:
        cmd = self.command()
        if self._verbose and self._console is not None:
            self._console.print(f"$ {' '.join(cmd)}", Style.DIM)

        result = run_process(cmd, cwd=self._cwd)
        if isinstance(result, Err):
            e = result.error
            detail = e.stderr.strip().splitlines()
            return Err(
                VersionError(
                    kind="query_failed",
                    message=f"{' '.join(cmd)}: {detail[-1] if detail else e}",
                    hint=f"install the toolchain with: rustup toolchain install {self._channel}"
                    if self._channel
                    else f"make sure {self._tool} is on PATH",
                )
            )

        version = find_version(result.value)
        if version is None:
            return Err(
                VersionError(
                    kind="unparseable",
                    message=f"no version found in output of {' '.join(cmd)}: {result.value.strip()!r}",
                )
            )
        return Ok(version)


def gate(
    query: ToolchainQuery, required: ToolchainVersion
) -> Result[ToolchainVersion, VersionError]:
    """Query the active toolchain and check it against ``required``."""
    actual = query.query()
    if isinstance(actual, Err):
        return actual
    return check_version(required, actual.value)
