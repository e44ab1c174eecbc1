"""Subprocess execution with Result-based error handling.

``run`` captures output (toolchain queries). ``run_tee`` lets stdout stream
to the terminal and mirrors stderr while also capturing it, so a failed
``cargo publish`` can be both watched live and classified afterwards.

Usage:
    result = run(["rustc", "+1.48.0", "--version"], cwd=Path("."))
    match result:
        case Ok(stdout):
            print(stdout)
        case Err(error):
            print(f"Failed: {error.stderr}")
"""

from __future__ import annotations

import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path

from pubseq.core.result import Err, Ok, Result

__all__ = ["ProcessError", "run", "run_tee"]

# Marks a process that never started (missing executable, bad cwd).
NOT_STARTED = -1


@dataclass(frozen=True, slots=True)
class ProcessError:
    """Error from a failed subprocess execution.

    Attributes:
        command: The command that was executed.
        returncode: The exit code of the process, or -1 if it never started.
        stdout: Standard output (may be empty).
        stderr: Standard error (contains error details).
    """

    command: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def started(self) -> bool:
        return self.returncode != NOT_STARTED

    def __str__(self) -> str:
        """Format error for display."""
        cmd_str = " ".join(self.command[:3])
        if len(self.command) > 3:
            cmd_str += " ..."
        if not self.started:
            return f"{cmd_str} could not be started: {self.stderr}"
        return f"{cmd_str} failed (exit {self.returncode})"


def run(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Execute a command and return stdout or error.

    Args:
        cmd: Command and arguments to execute.
        cwd: Working directory for the command.

    Returns:
        Ok(stdout) on success, Err(ProcessError) on failure.
    """
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=NOT_STARTED, stdout="", stderr=str(e)))

    if proc.returncode != 0:
        return Err(
            ProcessError(
                command=tuple(cmd),
                returncode=proc.returncode,
                stdout=proc.stdout,
                stderr=proc.stderr,
            )
        )

    return Ok(proc.stdout)


def run_tee(cmd: list[str], cwd: Path) -> Result[str, ProcessError]:
    """Execute a command, streaming its output and capturing stderr.

    stdout is inherited. Each stderr line is written to ``sys.stderr`` as
    it arrives.

    Returns:
        Ok(stderr) on success, Err(ProcessError) carrying the captured stderr.
    """
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=str(cwd),
            stderr=subprocess.PIPE,
            text=True,
        )
    except OSError as e:
        return Err(ProcessError(command=tuple(cmd), returncode=NOT_STARTED, stdout="", stderr=str(e)))

    captured: list[str] = []
    assert proc.stderr is not None
    with proc.stderr:
        for line in proc.stderr:
            captured.append(line)
            sys.stderr.write(line)
            sys.stderr.flush()
    returncode = proc.wait()
    stderr = "".join(captured)

    if returncode != 0:
        return Err(ProcessError(command=tuple(cmd), returncode=returncode, stdout="", stderr=stderr))
    return Ok(stderr)
