"""Publish plan construction.

The plan order is the declared order. It is validated, never computed:
every dependency must be declared and must come earlier. Stage targets
must stay clear of the release root and the vendored source.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from pubseq.core.config import PackageConfig
from pubseq.core.result import Err, Ok, Result
from pubseq.publish.errors import PlanError
from pubseq.publish.model import Package, PublishPlan


def build_plan(
    packages: Sequence[PackageConfig], *, root: Path, source: Path | None = None
) -> Result[PublishPlan, PlanError]:
    if not packages:
        return Err(PlanError(kind="empty", message="no packages to publish"))

    index: dict[str, int] = {}
    for i, pkg in enumerate(packages):
        if pkg.name in index:
            return Err(PlanError(kind="duplicate", message=f"package '{pkg.name}' declared twice"))
        index[pkg.name] = i

    for i, pkg in enumerate(packages):
        for dep in pkg.depends_on:
            if dep == pkg.name:
                return Err(
                    PlanError(kind="self_dependency", message=f"package '{pkg.name}' depends on itself")
                )
            if dep not in index:
                return Err(
                    PlanError(
                        kind="unknown_dependency",
                        message=f"dependency '{dep}' of '{pkg.name}' is not in the publish plan",
                    )
                )
            if index[dep] > i:
                return Err(
                    PlanError(
                        kind="out_of_order",
                        message=f"'{dep}' must be published before '{pkg.name}'",
                        hint=f"move the '{dep}' [[package]] entry above '{pkg.name}'",
                    )
                )

    for pkg in packages:
        unsafe = _unsafe_target(pkg, root, source)
        if unsafe is not None:
            return Err(unsafe)

    return Ok(PublishPlan(tuple(_resolve(pkg, root) for pkg in packages)))


def _unsafe_target(pkg: PackageConfig, root: Path, source: Path | None) -> PlanError | None:
    """Staging deletes each target first: a target must be strictly inside
    the root and must neither hold nor sit in the source tree."""
    base = root.resolve()
    src = source.resolve() if source is not None else None
    for rel in pkg.stage_into:
        target = (root / rel).resolve()
        if base not in target.parents:
            return PlanError(
                kind="unsafe_target",
                message=f"package '{pkg.name}': stage target '{rel}' is not inside the release root",
            )
        if src is not None and (target == src or target in src.parents or src in target.parents):
            return PlanError(
                kind="unsafe_target",
                message=f"package '{pkg.name}': stage target '{rel}' overlaps the source tree {src}",
                hint="stage into a directory of the package, next to its Cargo.toml",
            )
    return None


def _resolve(pkg: PackageConfig, root: Path) -> Package:
    return Package(
        name=pkg.name,
        manifest=root / pkg.manifest,
        stage_into=tuple(root / t for t in pkg.stage_into),
        excludes=pkg.excludes,
        require=pkg.require,
        depends_on=pkg.depends_on,
    )
