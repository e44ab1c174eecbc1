"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import typer

from pubseq.output.console import Style
from pubseq.output.errors import outcome_exit_code, print_fatal_error
from pubseq.publish.model import PublishState

if TYPE_CHECKING:
    from pubseq.cli.context import CLIContext
    from pubseq.publish.service import RunOutcome


_STATE_LABELS = {
    PublishState.SUCCEEDED: "succeeded",
    PublishState.FAILED: "FAILED",
    PublishState.SKIPPED: "skipped",
    PublishState.PENDING: "pending",
}


def print_report(outcome: RunOutcome, ctx: CLIContext) -> None:
    """Print one line per package with its terminal state."""
    console = ctx.console
    if not outcome.results:
        return

    dry = " (dry-run)" if not outcome.mode.mutates_registry else ""
    rows: list[list[str]] = []
    for r in outcome.results:
        reason = ""
        if r.reason is not None:
            reason = f"{r.reason.kind}: {r.reason.message}"
        rows.append([r.package, _STATE_LABELS[r.state], reason])
    console.newline()
    console.table(f"Report{dry}", ["package", "state", "reason"], rows)

    skipped = [r.package for r in outcome.results if r.state is PublishState.SKIPPED]
    if skipped:
        console.warning(f"not published: {', '.join(skipped)}")
    failed = next((r for r in outcome.results if r.reason is not None), None)
    if failed is not None and failed.reason is not None and failed.reason.hint:
        console.print(f"hint: {failed.reason.hint}", Style.DIM)


def finish(outcome: RunOutcome, ctx: CLIContext) -> None:
    """Report ``outcome`` and exit non-zero unless everything succeeded."""
    if outcome.error is not None:
        print_fatal_error(outcome.error, ctx.console)
    for warning in outcome.stage_warnings:
        ctx.console.print(f"pruning incomplete: {warning.path}", Style.DIM)
    print_report(outcome, ctx)

    code = outcome_exit_code(outcome)
    if code != 0:
        exit_with_code(code)


def exit_with_code(code: int) -> NoReturn:
    """Exit with given code. Explicit helper for clarity."""
    raise typer.Exit(code=code)
