from __future__ import annotations

from pathlib import Path

import typer

from pubseq.cli.commands._helpers import finish
from pubseq.cli.context import build_context
from pubseq.publish.model import PublishMode
from pubseq.publish.service import ReleaseService


def publish(
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Validate everything; publish nothing (cargo publish --dry-run)"
    ),
    root: Path | None = typer.Option(None, "--root", help="Release root (default: current dir)"),
    config: Path | None = typer.Option(None, "--config", help="Path to publish.toml"),
    allow_dirty: bool = typer.Option(
        False, "--allow-dirty", help="Pass --allow-dirty to cargo publish"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show external commands"),
) -> None:
    """Check the toolchain, stage vendored sources and publish every package in order."""
    ctx = build_context(root=root, config_path=config)
    service = ReleaseService(
        config=ctx.config,
        root=ctx.root,
        console=ctx.console,
        allow_dirty=allow_dirty,
        verbose=verbose,
    )

    mode = PublishMode.DRY_RUN if dry_run else PublishMode.REAL
    outcome = service.run(mode)
    finish(outcome, ctx)
