from __future__ import annotations

from pathlib import Path

import pytest

from pubseq.core.result import Err, Ok
from pubseq.output.console import MockConsole
from pubseq.platform.process import ProcessError
from pubseq.publish import registry as registry_mod
from pubseq.publish.model import PublishMode
from pubseq.publish.registry import CargoRegistryClient, classify_failure

MANIFEST = Path("components/wasm-opt-sys/Cargo.toml")


def _failed(stderr: str, returncode: int = 101) -> ProcessError:
    return ProcessError(
        command=("cargo", "publish"), returncode=returncode, stdout="", stderr=stderr
    )


class TestCommand:
    def test_real_pinned(self, tmp_path: Path) -> None:
        client = CargoRegistryClient(cwd=tmp_path, channel="1.48.0")
        assert client.command(MANIFEST, PublishMode.REAL) == [
            "cargo",
            "+1.48.0",
            "publish",
            "--manifest-path",
            str(MANIFEST),
        ]

    def test_dry_run_and_allow_dirty(self, tmp_path: Path) -> None:
        client = CargoRegistryClient(cwd=tmp_path, allow_dirty=True)
        cmd = client.command(MANIFEST, PublishMode.DRY_RUN)
        assert cmd[:2] == ["cargo", "publish"]
        assert "--dry-run" in cmd
        assert "--allow-dirty" in cmd


class TestClassify:
    @pytest.mark.parametrize(
        ("stderr", "kind"),
        [
            ("error: crate version `0.1.0` is already uploaded", "duplicate_version"),
            ("error: crate wasm-opt@0.1.0 already exists on crates.io index", "duplicate_version"),
            ("error: no token found, please run `cargo login`", "auth"),
            ("the remote server responded with an error (status 403 Forbidden)", "auth"),
            ("error: failed to parse manifest at `/x/Cargo.toml`", "malformed_manifest"),
            ("warning: spurious network error (2 tries remaining)", "network"),
            ("error: Could not resolve host: crates.io", "network"),
            ("error: failed to read manifest at `/x/Cargo.toml`", "malformed_manifest"),
            ("error: manifest path `x/Cargo.toml` does not exist", "malformed_manifest"),
            ("[35] SSL connect error (error:0A000126)", "network"),
            ("[28] Operation timed out after 30000 milliseconds", "network"),
            ("error: something unexpected", "unknown"),
        ],
    )
    def test_kinds(self, stderr: str, kind: str) -> None:
        assert classify_failure(_failed(stderr)).kind == kind

    @pytest.mark.parametrize(
        "stderr",
        [
            "src/passes/ssl_helper.cpp:12:5: error: use of undeclared identifier\n"
            "error: failed to verify package tarball",
            "error: failed to read `wasm.h` from the build script output",
            "fatal error: openssl/ssl.h: No such file or directory",
            "warning: lit test timed out\nerror: could not compile `wasm-opt-sys`",
        ],
    )
    def test_build_errors_stay_unknown(self, stderr: str) -> None:
        assert classify_failure(_failed(stderr)).kind == "unknown"

    def test_message_uses_cargo_error_line(self) -> None:
        error = classify_failure(
            _failed("   Packaging x\nerror: crate version `0.1.0` is already uploaded\n")
        )
        assert error.message == "crate version `0.1.0` is already uploaded"
        assert error.hint is not None

    def test_not_started_is_tool_missing(self) -> None:
        error = classify_failure(_failed("No such file or directory", returncode=-1))
        assert error.kind == "tool_missing"


class TestPublish:
    def test_success(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[list[str]] = []

        def fake_tee(cmd: list[str], *, cwd: Path):
            calls.append(cmd)
            return Ok("   Uploading wasm-opt-sys\n")

        monkeypatch.setattr(registry_mod, "run_tee", fake_tee)
        console = MockConsole()
        client = CargoRegistryClient(cwd=tmp_path, console=console, verbose=True)

        assert client.publish(MANIFEST, PublishMode.REAL) == Ok(None)
        assert calls == [["cargo", "publish", "--manifest-path", str(MANIFEST)]]
        assert console.find("$ cargo publish")

    def test_failure_is_classified(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(
            registry_mod,
            "run_tee",
            lambda cmd, *, cwd: Err(_failed("error: no token found, please run `cargo login`")),
        )
        result = CargoRegistryClient(cwd=tmp_path).publish(MANIFEST, PublishMode.REAL)
        assert isinstance(result, Err)
        assert result.error.kind == "auth"
