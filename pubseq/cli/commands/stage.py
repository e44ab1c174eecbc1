from __future__ import annotations

from pathlib import Path

import typer

from pubseq.cli.commands._helpers import finish
from pubseq.cli.context import build_context
from pubseq.publish.service import ReleaseService


def stage(
    root: Path | None = typer.Option(None, "--root", help="Release root (default: current dir)"),
    config: Path | None = typer.Option(None, "--config", help="Path to publish.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show external commands"),
) -> None:
    """Check the toolchain and stage vendored sources without publishing."""
    ctx = build_context(root=root, config_path=config)
    service = ReleaseService(config=ctx.config, root=ctx.root, console=ctx.console, verbose=verbose)

    outcome = service.stage_only()
    finish(outcome, ctx)
    if outcome.staged:
        ctx.console.success(f"staged {len(outcome.staged)} target(s)")
