"""Copy the vendored source tree into packages before publishing.

Each target is replaced wholesale, so staging is idempotent. A failed copy
does not roll back targets already staged; the caller decides whether to
continue.
"""

from __future__ import annotations

import shutil
from collections.abc import Sequence
from pathlib import Path

from pubseq.core.result import Err, Ok, Result
from pubseq.output.console import ConsoleProtocol, Style
from pubseq.platform.files import copy_tree, remove_path
from pubseq.publish.errors import StageError


class SourceStager:
    def __init__(self, *, console: ConsoleProtocol | None = None) -> None:
        self._console = console
        self.warnings: list[StageError] = []

    def stage(
        self,
        source: Path,
        targets: Sequence[Path],
        excludes: Sequence[str] = (),
        *,
        require: Sequence[str] = (),
    ) -> Result[list[Path], StageError]:
        """Stage ``source`` into every target.

        Args:
            source: Vendored tree to copy.
            targets: Destinations; each ends up a full copy of ``source``.
            excludes: Paths relative to a staged copy to prune afterwards.
            require: Paths relative to a staged copy that must exist.

        Returns:
            Ok(staged targets) or Err on the first fatal error. Prune
            failures are appended to ``warnings`` instead.
        """
        if not source.is_dir():
            return Err(
                StageError(
                    kind="copy_failed",
                    message=f"source tree not found: {source}",
                    path=source,
                    hint="check out the vendored sources (git submodule update --init)",
                )
            )

        staged: list[Path] = []
        for target in targets:
            result = self._stage_one(source, target, excludes, require)
            if isinstance(result, Err):
                return result
            staged.append(target)
        return Ok(staged)

    def _stage_one(
        self,
        source: Path,
        target: Path,
        excludes: Sequence[str],
        require: Sequence[str],
    ) -> Result[None, StageError]:
        self._say(f"stage {source} -> {target}")

        try:
            if remove_path(target):
                self._say(f"  removed previous copy at {target}", Style.DIM)
            copy_tree(source, target)
        except (OSError, shutil.Error) as e:
            return Err(
                StageError(
                    kind="copy_failed",
                    message=f"could not stage {source} into {target}: {e}",
                    path=target,
                )
            )

        for rel in excludes:
            self._prune(target / rel)

        missing = [rel for rel in require if not (target / rel).exists()]
        if missing:
            return Err(
                StageError(
                    kind="incomplete",
                    message=f"staged copy {target} is missing: {', '.join(missing)}",
                    path=target,
                    hint="is the vendored source tree complete?",
                )
            )
        return Ok(None)

    def _prune(self, path: Path) -> None:
        try:
            if remove_path(path):
                self._say(f"  pruned {path}", Style.DIM)
        except OSError as e:
            warning = StageError(kind="prune_failed", message=f"could not prune {path}: {e}", path=path)
            self.warnings.append(warning)
            if self._console is not None:
                self._console.warning(warning.message)

    def _say(self, message: str, style: Style = Style.DEFAULT) -> None:
        if self._console is not None:
            self._console.print(message, style)
