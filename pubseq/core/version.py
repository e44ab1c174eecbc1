from __future__ import annotations

import re
from dataclasses import dataclass


_EXACT_RE = re.compile(r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)$")
# First X.Y.Z token in tool output, e.g. "rustc 1.48.0 (7eac88abb 2020-11-16)"
# or "cargo 1.75.0-nightly (abc 2023-10-01)".
_EMBEDDED_RE = re.compile(r"(?<![\d.])(\d+)\.(\d+)\.(\d+)(?:-[0-9A-Za-z.]+)?(?![\d.])")


@dataclass(frozen=True, slots=True, order=True)
class ToolchainVersion:
    """A (major, minor, patch) triple, compared lexicographically."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


def parse_version(text: str) -> ToolchainVersion | None:
    """Parse an exact ``X.Y.Z`` string (as written in publish.toml)."""
    m = _EXACT_RE.match(text.strip())
    if m is None:
        return None
    return ToolchainVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))


def find_version(output: str) -> ToolchainVersion | None:
    """Extract the first version triple from ``--version`` output.

    A pre-release suffix (``-nightly``, ``-beta.3``) is ignored.
    """
    m = _EMBEDDED_RE.search(output)
    if m is None:
        return None
    return ToolchainVersion(int(m.group(1)), int(m.group(2)), int(m.group(3)))
