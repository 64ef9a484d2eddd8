"""
Command executor — the only place that spawns OS processes.

The locator and invoker talk to a ``CommandExecutor``; production code
uses ``SubprocessExecutor``, tests substitute a scripted fake.  Commands
are always passed as an argument vector, never through a shell.
"""
import logging
import subprocess
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecOutput:
    """Captured outcome of one process run."""
    returncode: int
    stdout: str
    stderr: str


class CommandExecutor(Protocol):
    def execute(
        self, argv: Sequence[str], timeout: Optional[float] = None
    ) -> ExecOutput:
        ...


class SubprocessExecutor:
    """Runs commands with :func:`subprocess.run`.

    Spawn errors and timeouts are folded into an ``ExecOutput`` with
    returncode -1 so callers only ever inspect one shape.
    """

    def execute(
        self, argv: Sequence[str], timeout: Optional[float] = None
    ) -> ExecOutput:
        try:
            result = subprocess.run(
                list(argv),
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except subprocess.TimeoutExpired:
            logger.warning("Command timed out after %ss: %s", timeout, argv[0])
            return ExecOutput(-1, "", f"timed out after {timeout}s")
        except OSError as e:
            return ExecOutput(-1, "", str(e))
        return ExecOutput(result.returncode, result.stdout, result.stderr)
