"""
Invoker — one disassembler run over one target file.

Combines a validated tool path, an argument vector and a target into an
InvocationRequest, hands it to the CommandExecutor once (no retries) and
maps the outcome to Success / Failure.
"""
import logging
import shlex
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from binexplore.core.executor import CommandExecutor, SubprocessExecutor
from binexplore.core.result import ErrorKind, Failure, InvocationResult, Success


@dataclass(frozen=True)
class InvocationRequest:
    target_file: str
    tool_path: str
    args: Tuple[str, ...] = ()

    @property
    def argv(self) -> List[str]:
        return [self.tool_path, *self.args, self.target_file]

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


class Invoker:
    """Runs the disassembler and types its outcome."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        timeout: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.executor = executor or SubprocessExecutor()
        self.timeout = timeout
        self._log = logger or logging.getLogger(__name__)

    def run(
        self, tool_path: str, args: Sequence[str], target_file: str
    ) -> InvocationResult:
        request = InvocationRequest(
            target_file=str(target_file),
            tool_path=tool_path,
            args=tuple(args),
        )
        self._log.info('Running: "%s"', request.command_line)

        out = self.executor.execute(request.argv, timeout=self.timeout)

        if out.stderr.strip() or out.returncode != 0:
            detail = out.stderr.strip() or f"exited with status {out.returncode}"
            self._log.error("Error running objdump command: %s", detail)
            return Failure(ErrorKind.INVOCATION_FAILED, detail)

        return Success(out.stdout)
