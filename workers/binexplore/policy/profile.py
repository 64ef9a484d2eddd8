"""
Profile — tool-family descriptor and tunable parameters.

The profile encapsulates all policy knobs so that the core locator,
builder and invoker contain no opinions.  Supporting another objdump
flavour is a profile change, not a code change.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Profile:
    """Describes which disassembler we trust and how we drive it."""

    # Identity
    profile_id: str

    # Tool resolution
    search_path_sentinel: str = "objdump"     # resolve from $PATH
    default_tool_path: str = "/usr/bin/objdump"

    # Probes
    help_switch: str = "--help"
    version_switch: str = "--version"
    # Templates are formatted with the resolved tool path.
    signatures: Tuple[str, ...] = (
        "objdump [options] <input object files>",
        "Usage: {path} <option(s)> <file(s)>",
    )

    # Invocation
    baseline_args: Tuple[str, ...] = ("-d", "-S")
    timeout: float = 60.0  # seconds per subprocess

    # Target gate
    accept_extended_containers: bool = False

    def known_signatures(self, path: str) -> Tuple[str, ...]:
        """Signature strings with the ``{path}`` placeholder filled in."""
        return tuple(s.format(path=path) for s in self.signatures)

    @classmethod
    def v0(cls) -> "Profile":
        """The default profile: GNU binutils / LLVM objdump."""
        return cls(profile_id="objdump-gnu-llvm")
