"""Filesystem helpers.

These raise ``OSError``/``shutil.Error``; callers turn them into
domain errors.
"""

from __future__ import annotations

import os
import shutil
import stat
from collections.abc import Callable
from pathlib import Path

__all__ = ["copy_tree", "remove_path"]


def _remove_readonly(func: Callable[[str], object], path: str, exc: BaseException) -> None:
    """Handle read-only entries (e.g. .git/objects/pack/*.idx in a vendored checkout).

    Makes ``path`` writable and retries the call that failed on it, which is
    ``os.rmdir`` for directories and ``os.unlink`` for files.
    """
    if isinstance(exc, PermissionError):
        os.chmod(path, stat.S_IWRITE)
        func(path)
    else:
        raise exc


def remove_path(path: Path) -> bool:
    """Remove a file, symlink or directory tree.

    Returns:
        True if something was removed, False if nothing existed.
    """
    if path.is_symlink() or path.is_file():
        path.unlink()
        return True
    if path.is_dir():
        shutil.rmtree(path, onexc=_remove_readonly)
        return True
    return False


def copy_tree(source: Path, target: Path) -> None:
    """Copy ``source`` recursively to ``target`` (which must not exist).

    Symlinks are copied as links so a vendored tree is reproduced as-is.
    """
    target.parent.mkdir(parents=True, exist_ok=True)
    shutil.copytree(source, target, symlinks=True)
