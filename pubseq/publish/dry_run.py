"""Dry-run mode.

``DryRunGuard`` sits between the sequencer and the real client and forces
every call into check mode, so the mutating path cannot be reached even if
a caller asks for ``PublishMode.REAL``.
"""

from __future__ import annotations

from pathlib import Path

from pubseq.core.result import Result
from pubseq.output.console import ConsoleProtocol
from pubseq.publish.errors import PublishError
from pubseq.publish.model import PublishMode, PublishPlan, PublishResult
from pubseq.publish.registry import RegistryClient
from pubseq.publish.sequencer import PublishSequencer


class DryRunGuard:
    def __init__(self, registry: RegistryClient, *, console: ConsoleProtocol | None = None) -> None:
        self._registry = registry
        self._console = console

    def publish(self, manifest: Path, mode: PublishMode) -> Result[None, PublishError]:
        del mode
        return self._registry.publish(manifest, PublishMode.DRY_RUN)

    def run(self, plan: PublishPlan) -> list[PublishResult]:
        """Run the plan in check mode; SUCCEEDED means "would have succeeded"."""
        return PublishSequencer(self, console=self._console).run(plan, PublishMode.DRY_RUN)
