"""
Result types shared by the invocation layer.

Every core operation returns one of these values instead of raising:
  - Success  — the tool ran and printed something on stdout.
  - Failure  — a typed ErrorKind plus a human-readable detail string.
"""
from dataclasses import dataclass
from enum import Enum, unique
from typing import Union


@unique
class ErrorKind(str, Enum):
    NOT_FOUND = "NOT_FOUND"
    NOT_EXECUTABLE = "NOT_EXECUTABLE"
    SIGNATURE_MISMATCH = "SIGNATURE_MISMATCH"
    INVOCATION_FAILED = "INVOCATION_FAILED"
    PARSE_EMPTY_OUTPUT = "PARSE_EMPTY_OUTPUT"
    NOT_OBJECT_FILE = "NOT_OBJECT_FILE"


@dataclass(frozen=True)
class Success:
    """Disassembler ran cleanly."""
    stdout: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Failure:
    """Recoverable failure; the caller decides how to present *detail*."""
    kind: ErrorKind
    detail: str

    @property
    def ok(self) -> bool:
        return False


InvocationResult = Union[Success, Failure]
