from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from pubseq.core.config import Config
from pubseq.core.result import Err, Ok, Result
from pubseq.core.version import ToolchainVersion
from pubseq.output.console import ConsoleProtocol, Style
from pubseq.publish.dry_run import DryRunGuard
from pubseq.publish.errors import PlanError, StageError, VersionError
from pubseq.publish.model import PublishMode, PublishPlan, PublishResult, all_succeeded
from pubseq.publish.plan import build_plan
from pubseq.publish.registry import CargoRegistryClient, RegistryClient
from pubseq.publish.sequencer import PublishSequencer
from pubseq.publish.stager import SourceStager
from pubseq.publish.toolchain import CommandToolchain, ToolchainQuery, gate

type FatalError = VersionError | PlanError | StageError


def _no_results() -> list[PublishResult]:
    return []


def _no_paths() -> list[Path]:
    return []


def _no_warnings() -> list[StageError]:
    return []


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Everything the CLI needs to report a run.

    ``error`` is set when the run stopped before publishing. Publish
    failures are in ``results``.
    """

    mode: PublishMode
    toolchain: ToolchainVersion | None = None
    plan: PublishPlan | None = None
    staged: list[Path] = field(default_factory=_no_paths)
    stage_warnings: list[StageError] = field(default_factory=_no_warnings)
    results: list[PublishResult] = field(default_factory=_no_results)
    error: FatalError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and all_succeeded(self.results)


class ReleaseService:
    """VersionGate -> SourceStager -> PublishSequencer (or DryRunGuard)."""

    def __init__(
        self,
        *,
        config: Config,
        root: Path,
        console: ConsoleProtocol,
        toolchain: ToolchainQuery | None = None,
        registry: RegistryClient | None = None,
        allow_dirty: bool = False,
        verbose: bool = False,
    ) -> None:
        self._config = config
        self._root = root
        self._console = console
        channel = config.toolchain.channel
        self._toolchain = toolchain or CommandToolchain(
            tool=config.toolchain.tool,
            channel=channel,
            cwd=root,
            console=console,
            verbose=verbose,
        )
        self._registry = registry or CargoRegistryClient(
            cwd=root,
            channel=channel,
            allow_dirty=allow_dirty or config.publish.allow_dirty,
            console=console,
            verbose=verbose,
        )

    def plan(self) -> Result[PublishPlan, PlanError]:
        source = self._root / self._config.source.path
        return build_plan(self._config.packages, root=self._root, source=source)

    def run(self, mode: PublishMode) -> RunOutcome:
        prepared = self._prepare(mode)
        if prepared.error is not None or prepared.plan is None:
            return prepared

        self._console.header("Publish")
        if mode is PublishMode.DRY_RUN:
            results = DryRunGuard(self._registry, console=self._console).run(prepared.plan)
        else:
            results = PublishSequencer(self._registry, console=self._console).run(prepared.plan, mode)

        return RunOutcome(
            mode=mode,
            toolchain=prepared.toolchain,
            plan=prepared.plan,
            staged=prepared.staged,
            stage_warnings=prepared.stage_warnings,
            results=results,
        )

    def stage_only(self) -> RunOutcome:
        """Version check and staging, without touching the registry."""
        return self._prepare(PublishMode.DRY_RUN)

    def _prepare(self, mode: PublishMode) -> RunOutcome:
        required = self._config.toolchain.min_version
        self._console.header("Toolchain")
        checked = gate(self._toolchain, required)
        if isinstance(checked, Err):
            return RunOutcome(mode=mode, error=checked.error)
        toolchain = checked.value
        self._console.success(f"{self._config.toolchain.tool} {toolchain} (required >= {required})")

        planned = self.plan()
        if isinstance(planned, Err):
            return RunOutcome(mode=mode, toolchain=toolchain, error=planned.error)
        plan = planned.value

        self._console.header("Stage")
        stager = SourceStager(console=self._console)
        staged = self._stage(stager, plan)
        if isinstance(staged, Err):
            return RunOutcome(
                mode=mode,
                toolchain=toolchain,
                plan=plan,
                stage_warnings=list(stager.warnings),
                error=staged.error,
            )

        return RunOutcome(
            mode=mode,
            toolchain=toolchain,
            plan=plan,
            staged=staged.value,
            stage_warnings=list(stager.warnings),
        )

    def _stage(self, stager: SourceStager, plan: PublishPlan) -> Result[list[Path], StageError]:
        source = self._root / self._config.source.path
        staged: list[Path] = []
        for pkg in plan:
            if not pkg.stage_into:
                continue
            result = stager.stage(source, pkg.stage_into, pkg.excludes, require=pkg.require)
            if isinstance(result, Err):
                return result
            staged.extend(result.value)

        if not staged:
            self._console.print("nothing to stage", Style.DIM)
        return Ok(staged)
