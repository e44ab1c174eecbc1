"""Publish packages in plan order, stopping at the first failure.

There is no retry: registry publishes are not idempotent, and a package
whose dependency failed would reference a version that does not exist.
Packages already published stay published and are reported as such.
"""

from __future__ import annotations

from pubseq.core.result import Err
from pubseq.output.console import ConsoleProtocol, Style
from pubseq.publish.model import PublishMode, PublishPlan, PublishResult
from pubseq.publish.registry import RegistryClient


class PublishSequencer:
    def __init__(self, registry: RegistryClient, *, console: ConsoleProtocol | None = None) -> None:
        self._registry = registry
        self._console = console

    def run(self, plan: PublishPlan, mode: PublishMode) -> list[PublishResult]:
        results: list[PublishResult] = []
        packages = plan.packages

        for i, pkg in enumerate(packages):
            self._say(f"publish {pkg.name} ({mode.value})", Style.BOLD)
            outcome = self._registry.publish(pkg.manifest, mode)

            if isinstance(outcome, Err):
                results.append(PublishResult.failed(pkg.name, outcome.error))
                if self._console is not None:
                    self._console.error(f"{pkg.name}: {outcome.error.pretty()}")
                for rest in packages[i + 1 :]:
                    results.append(PublishResult.skipped(rest.name))
                    self._say(f"skip {rest.name}: earlier publish failed", Style.WARNING)
                break

            results.append(PublishResult.succeeded(pkg.name))
            if self._console is not None:
                verb = "would publish" if mode is PublishMode.DRY_RUN else "published"
                self._console.success(f"{pkg.name}: {verb}")

        return results

    def _say(self, message: str, style: Style) -> None:
        if self._console is not None:
            self._console.print(message, style)
