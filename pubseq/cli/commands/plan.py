from __future__ import annotations

from pathlib import Path

import typer

from pubseq.cli.commands._helpers import exit_with_code
from pubseq.cli.context import build_context
from pubseq.core.errors import ErrorCode
from pubseq.core.result import Err
from pubseq.output.console import Style
from pubseq.output.errors import print_fatal_error
from pubseq.publish.plan import build_plan


def plan(
    root: Path | None = typer.Option(None, "--root", help="Release root (default: current dir)"),
    config: Path | None = typer.Option(None, "--config", help="Path to publish.toml"),
) -> None:
    """Show the publish order and what gets staged where. No side effects."""
    ctx = build_context(root=root, config_path=config)
    console = ctx.console

    source = ctx.root / ctx.config.source.path
    result = build_plan(ctx.config.packages, root=ctx.root, source=source)
    if isinstance(result, Err):
        print_fatal_error(result.error, console)
        exit_with_code(int(ErrorCode.USER_ERROR))

    toolchain = ctx.config.toolchain
    pin = f" (pinned +{toolchain.channel})" if toolchain.channel else ""
    console.print(f"toolchain: {toolchain.tool} >= {toolchain.min_version}{pin}", Style.DIM)
    console.print(f"source: {source}", Style.DIM)

    console.header("Publish order")
    for i, pkg in enumerate(result.value, start=1):
        console.print(f"{i}. {pkg.name}", Style.BOLD)
        console.print(f"   manifest: {pkg.manifest}", Style.DIM)
        if pkg.depends_on:
            console.print(f"   after: {', '.join(pkg.depends_on)}", Style.DIM)
        for target in pkg.stage_into:
            console.print(f"   stage: {target}", Style.DIM)
        for rel in pkg.excludes:
            console.print(f"   prune: {rel}", Style.DIM)
