"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pubseq.core.errors import ErrorCode
from pubseq.output.console import Style
from pubseq.publish.errors import PlanError, StageError, VersionError

if TYPE_CHECKING:
    from pubseq.output.console import ConsoleProtocol
    from pubseq.publish.service import FatalError, RunOutcome

__all__ = ["print_fatal_error", "fatal_error_exit_code", "outcome_exit_code"]


def print_fatal_error(error: FatalError, console: ConsoleProtocol) -> None:
    """Print an error that stopped the run before publishing."""
    match error:
        case VersionError(kind="too_old", message=message):
            console.error(f"toolchain too old: {message}")
        case VersionError(message=message):
            console.error(f"toolchain check failed: {message}")
        case PlanError(message=message):
            console.error(f"invalid publish plan: {message}")
        case StageError(message=message):
            console.error(f"staging failed: {message}")
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def fatal_error_exit_code(error: FatalError) -> int:
    match error:
        case VersionError():
            return int(ErrorCode.TOOLCHAIN_ERROR)
        case PlanError():
            return int(ErrorCode.USER_ERROR)
        case StageError():
            return int(ErrorCode.STAGE_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.USER_ERROR)


def outcome_exit_code(outcome: RunOutcome) -> int:
    if outcome.error is not None:
        return fatal_error_exit_code(outcome.error)
    if not outcome.ok:
        return int(ErrorCode.PUBLISH_ERROR)
    return int(ErrorCode.OK)
