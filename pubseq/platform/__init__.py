"""Platform layer: subprocesses and filesystem primitives."""

from .files import copy_tree, remove_path
from .process import ProcessError, run, run_tee

__all__ = [
    "ProcessError",
    "copy_tree",
    "remove_path",
    "run",
    "run_tee",
]
