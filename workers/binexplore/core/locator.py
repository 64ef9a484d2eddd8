"""
Tool locator — resolve, validate and identify the disassembler.

Validation cycle for a configured path:
  1. Sentinel ("objdump") → resolve through $PATH.
  2. Path must be a regular file with an execute bit (suffix on Windows).
  3. ``--help`` output must contain a known usage signature.
  4. ``--version`` first line becomes the version (best effort).

Each call returns a fresh ToolDescriptor, or a Failure value.
"""
import logging
import os
import shutil
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from binexplore.core.classifier import has_execute_bit
from binexplore.core.executor import CommandExecutor, ExecOutput, SubprocessExecutor
from binexplore.core.result import ErrorKind, Failure
from binexplore.policy.profile import Profile


@dataclass(frozen=True)
class ToolDescriptor:
    """A disassembler that passed validation."""
    path: str
    verified: bool
    version: Optional[str] = None


LocateResult = Union[ToolDescriptor, Failure]


class ToolLocator:
    """Validates disassembler paths against a Profile."""

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        profile: Optional[Profile] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.executor = executor or SubprocessExecutor()
        self.profile = profile or Profile.v0()
        self._log = logger or logging.getLogger(__name__)

    # ── Resolution ───────────────────────────────────────────────────

    def _resolve(self, configured_path: str) -> Union[Failure, str]:
        if not configured_path:
            return Failure(ErrorKind.NOT_FOUND, "No disassembler path configured")

        if configured_path != self.profile.search_path_sentinel:
            return configured_path

        resolved = shutil.which(configured_path)
        if resolved is None or not os.access(resolved, os.F_OK):
            return Failure(
                ErrorKind.NOT_FOUND,
                f"{configured_path!r} not found on the system search path",
            )
        self._log.info("Using %s from system path: %s", configured_path, resolved)
        return resolved

    def _check_executable(self, path: str) -> Optional[Failure]:
        try:
            st = Path(path).stat()
        except OSError as e:
            return Failure(ErrorKind.NOT_FOUND, f"Cannot access {path!r}: {e}")

        if not stat.S_ISREG(st.st_mode) or not has_execute_bit(st, Path(path)):
            return Failure(ErrorKind.NOT_EXECUTABLE, f"{path!r} is not an executable file")
        return None

    # ── Probes ───────────────────────────────────────────────────────

    def help_probe(self, path: str) -> ExecOutput:
        return self.executor.execute(
            [path, self.profile.help_switch], timeout=self.profile.timeout
        )

    def is_known_tool(self, path: str, help_output: str) -> bool:
        """True if *help_output* contains a known usage signature."""
        return any(sig in help_output for sig in self.profile.known_signatures(path))

    def probe_version(self, path: str) -> Optional[str]:
        """First stdout line of the version probe, or None."""
        out = self.executor.execute(
            [path, self.profile.version_switch], timeout=self.profile.timeout
        )
        if out.returncode != 0 or not out.stdout.strip():
            self._log.warning(
                "Version probe failed for %s: %s",
                path, out.stderr.strip() or f"exit {out.returncode}",
            )
            return None
        return out.stdout.splitlines()[0].strip() or None

    # ── Public API ───────────────────────────────────────────────────

    def validate(self, configured_path: str) -> LocateResult:
        resolved = self._resolve(configured_path)
        if isinstance(resolved, Failure):
            self._log.warning("Invalid disassembler path: %s", resolved.detail)
            return resolved

        failure = self._check_executable(resolved)
        if failure is not None:
            self._log.warning("Invalid disassembler path: %s", failure.detail)
            return failure

        probe = self.help_probe(resolved)
        if not self.is_known_tool(resolved, probe.stdout):
            self._log.warning("%s does not identify as objdump", resolved)
            detail = f"{resolved!r} did not print a known objdump usage line"
            if probe.stderr.strip():
                detail += f": {probe.stderr.strip()}"
            return Failure(ErrorKind.SIGNATURE_MISMATCH, detail)

        return ToolDescriptor(
            path=resolved,
            verified=True,
            version=self.probe_version(resolved),
        )

    def validate_or_default(self, configured_path: str) -> LocateResult:
        """Validate *configured_path*, falling back to the profile default."""
        result = self.validate(configured_path)
        default = self.profile.default_tool_path
        if isinstance(result, ToolDescriptor) or configured_path == default:
            return result

        self._log.warning(
            "Invalid objdump path %r (%s). Resetting to default %r.",
            configured_path, result.kind.value, default,
        )
        return self.validate(default)
