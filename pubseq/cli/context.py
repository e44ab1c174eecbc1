from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from pubseq.core.config import Config, load_config_or_default
from pubseq.core.errors import ErrorCode
from pubseq.core.result import Err
from pubseq.output.console import ConsoleProtocol, RichConsole, Style


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: Config
    console: ConsoleProtocol


def build_context(*, root: Path | None, config_path: Path | None) -> CLIContext:
    console = RichConsole()

    try:
        resolved = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --root: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    if not resolved.is_dir():
        console.error(f"release root is not a directory: {resolved}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_config_or_default(resolved, config_path)
    if isinstance(config_result, Err):
        error = config_result.error
        console.error(error.message)
        if error.hint:
            console.print(f"hint: {error.hint}", Style.DIM)
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    return CLIContext(root=resolved, config=config_result.value, console=console)
