from __future__ import annotations

import ast
from pathlib import Path

import pytest

from ._utils import iter_source_files, package_root, read_tree

_LAYERS = ("core", "output", "platform", "publish")


def _library_files(base: Path) -> list[Path]:
    return [p for p in iter_source_files(base) if p.name != "__init__.py"]


def _public_definitions(path: Path) -> list[tuple[str, int]]:
    """Module-level functions and methods of public classes.

    ``Mock*`` classes are test doubles; their helpers are for tests only.
    """
    found: list[tuple[str, int]] = []
    tree = read_tree(path)
    assert isinstance(tree, ast.Module)
    for node in tree.body:
        if isinstance(node, ast.FunctionDef) and not node.name.startswith("_"):
            found.append((node.name, node.lineno))
        elif isinstance(node, ast.ClassDef) and not node.name.startswith(("_", "Mock")):
            for item in node.body:
                if isinstance(item, ast.FunctionDef) and not item.name.startswith("_"):
                    found.append((item.name, item.lineno))
    return found


def _referenced_names() -> set[str]:
    names: set[str] = set()
    for path in _library_files(package_root()):
        for node in ast.walk(read_tree(path)):
            if isinstance(node, ast.Name):
                names.add(node.id)
            elif isinstance(node, ast.Attribute):
                names.add(node.attr)
            elif isinstance(node, ast.ImportFrom):
                names.update(alias.name for alias in node.names)
    return names


@pytest.mark.parametrize("layer", _LAYERS)
def test_public_api_is_used_by_the_package(layer: str) -> None:
    root = package_root()
    used = _referenced_names()
    offenders: list[str] = []

    for file_path in _library_files(root / layer):
        rel = file_path.relative_to(root)
        for name, line in _public_definitions(file_path):
            if name not in used:
                offenders.append(f"{rel}:{line}: '{name}' is only reachable from tests")

    assert not offenders, "unused public API:\n" + "\n".join(offenders)


def test_process_helpers_take_no_unused_options() -> None:
    tree = read_tree(package_root() / "platform" / "process.py")
    params = {
        node.name: [a.arg for a in (*node.args.args, *node.args.kwonlyargs)]
        for node in ast.walk(tree)
        if isinstance(node, ast.FunctionDef) and node.name in ("run", "run_tee")
    }
    assert params == {"run": ["cmd", "cwd"], "run_tee": ["cmd", "cwd"]}
