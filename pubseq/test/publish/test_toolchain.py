from __future__ import annotations

from pathlib import Path

import pytest

from pubseq.core.result import Err, Ok
from pubseq.core.version import ToolchainVersion
from pubseq.output.console import MockConsole
from pubseq.platform.process import ProcessError
from pubseq.publish import toolchain as toolchain_mod
from pubseq.publish.toolchain import CommandToolchain, check_version, gate

from ._fakes import FakeToolchain

REQUIRED = ToolchainVersion(1, 48, 0)


class TestCheckVersion:
    def test_rejects_older(self) -> None:
        result = check_version(REQUIRED, ToolchainVersion(1, 47, 9))
        assert isinstance(result, Err)
        assert result.error.kind == "too_old"
        assert "1.47.9" in result.error.message

    def test_accepts_equal(self) -> None:
        assert check_version(REQUIRED, ToolchainVersion(1, 48, 0)) == Ok(ToolchainVersion(1, 48, 0))

    def test_accepts_newer_major(self) -> None:
        assert check_version(REQUIRED, ToolchainVersion(2, 0, 0)) == Ok(ToolchainVersion(2, 0, 0))


class TestGate:
    def test_query_failure_is_reported(self) -> None:
        result = gate(FakeToolchain(version=None), REQUIRED)
        assert isinstance(result, Err)
        assert result.error.kind == "query_failed"

    def test_too_old(self) -> None:
        result = gate(FakeToolchain(version=ToolchainVersion(1, 47, 9)), REQUIRED)
        assert isinstance(result, Err)
        assert result.error.kind == "too_old"


class TestCommandToolchain:
    def test_pinned_command(self, tmp_path: Path) -> None:
        tc = CommandToolchain(tool="rustc", channel="1.48.0", cwd=tmp_path)
        assert tc.command() == ["rustc", "+1.48.0", "--version"]

    def test_unpinned_command(self, tmp_path: Path) -> None:
        tc = CommandToolchain(tool="rustc", channel=None, cwd=tmp_path)
        assert tc.command() == ["rustc", "--version"]

    def test_parses_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[list[str]] = []

        def fake_run(cmd: list[str], *, cwd: Path):
            calls.append(cmd)
            return Ok("rustc 1.48.0 (7eac88abb 2020-11-16)\n")

        monkeypatch.setattr(toolchain_mod, "run_process", fake_run)
        console = MockConsole()
        tc = CommandToolchain(
            tool="rustc", channel="1.48.0", cwd=tmp_path, console=console, verbose=True
        )

        assert tc.query() == Ok(ToolchainVersion(1, 48, 0))
        assert calls == [["rustc", "+1.48.0", "--version"]]
        assert console.find("$ rustc +1.48.0 --version")

    def test_missing_toolchain(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_run(cmd: list[str], *, cwd: Path):
            return Err(
                ProcessError(
                    command=tuple(cmd),
                    returncode=1,
                    stdout="",
                    stderr="error: toolchain '1.48.0' is not installed\n",
                )
            )

        monkeypatch.setattr(toolchain_mod, "run_process", fake_run)
        result = CommandToolchain(tool="rustc", channel="1.48.0", cwd=tmp_path).query()

        assert isinstance(result, Err)
        assert result.error.kind == "query_failed"
        assert "is not installed" in result.error.message
        assert result.error.hint is not None and "1.48.0" in result.error.hint

    def test_unparseable_output(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(toolchain_mod, "run_process", lambda cmd, *, cwd: Ok("rustc dev\n"))
        result = CommandToolchain(tool="rustc", channel=None, cwd=tmp_path).query()
        assert isinstance(result, Err)
        assert result.error.kind == "unparseable"
