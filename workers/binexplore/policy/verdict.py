"""
Verdict — ACCEPT / REJECT decision for a target before objdump runs.

The gate only looks at the FileClass; it never spawns a process.
Policy rules reference the Profile but never import the invoker.
"""
from enum import Enum, unique
from typing import List, Tuple

from binexplore.core.classifier import FileClass
from binexplore.policy.profile import Profile

EXTENDED_CONTAINERS = frozenset({"pe", "mach-o", "mach-o-fat"})


@unique
class Verdict(str, Enum):
    ACCEPT = "ACCEPT"
    REJECT = "REJECT"


@unique
class TargetRejectReason(str, Enum):
    UNREADABLE = "UNREADABLE"
    NOT_OBJECT_FILE = "NOT_OBJECT_FILE"
    TOOL_UNAVAILABLE = "TOOL_UNAVAILABLE"
    INVOCATION_FAILED = "INVOCATION_FAILED"
    EMPTY_OUTPUT = "EMPTY_OUTPUT"


@unique
class TargetWarnReason(str, Enum):
    NOT_EXECUTABLE_FILE = "NOT_EXECUTABLE_FILE"
    EXTENDED_CONTAINER = "EXTENDED_CONTAINER"


def gate_target(fc: FileClass, profile: Profile) -> Tuple[Verdict, List[str]]:
    """
    Evaluate a classified target against the profile.

    Returns (Verdict, list_of_reason_strings).  ACCEPT may still carry
    warn reasons (e.g. relocatable objects without an execute bit).
    """
    reasons: List[str] = []

    accepted = fc.is_object_like
    if not accepted and profile.accept_extended_containers:
        if fc.container in EXTENDED_CONTAINERS:
            accepted = True
            reasons.append(TargetWarnReason.EXTENDED_CONTAINER.value)

    if not accepted:
        if not fc.readable:
            reasons.append(TargetRejectReason.UNREADABLE.value)
        reasons.append(TargetRejectReason.NOT_OBJECT_FILE.value)
        return Verdict.REJECT, reasons

    if not fc.is_executable:
        reasons.append(TargetWarnReason.NOT_EXECUTABLE_FILE.value)

    return Verdict.ACCEPT, reasons
