"""
Argument builder — declarative configuration → objdump argument vector.

Precedence (highest first):
  1. A non-empty raw override (string or list) is used verbatim.
  2. Enabled boolean switches, emitted as ``--<name>`` in SWITCHES order.
  3. The baseline vector (``-d -S``).

Blank strings and empty/blank lists count as "no override".
"""
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Sequence, Tuple, Union

# Declared order is the output order; never iterate the config mapping.
SWITCHES: Tuple[str, ...] = (
    "archive-headers",
    "target",
    "demangle",
    "disassemble",
    "disassemble-all",
    "disassemble-zeroes",
    "file-headers",
    "file-offsets",
    "file-start-context",
    "debugging",
    "debugging-tags",
    "section-headers",
    "info",
    "line-numbers",
    "source",
    "private-headers",
    "reloc",
    "dynamic-reloc",
    "full-contents",
    "decompress",
    "process-links",
    "stabs",
    "syms",
    "dynamic-syms",
    "all-headers",
    "wide",
    "no-addresses",
    "prefix-addresses",
    "show-raw-insn",
    "show-all-symbols",
    "special-syms",
)

BASELINE_ARGS: Tuple[str, ...] = ("-d", "-S")

RawOverride = Union[str, Sequence[str], None]


@dataclass(frozen=True)
class DumpConfig:
    """Per-run disassembler options."""
    raw: RawOverride = None
    flags: Mapping[str, bool] = field(default_factory=dict)


def split_override(raw: RawOverride) -> List[str]:
    """Tokenise a raw override; an empty result means "absent"."""
    if raw is None:
        return []
    if isinstance(raw, str):
        return raw.split()
    return [token.strip() for token in raw if token and token.strip()]


def unknown_switches(config: DumpConfig) -> List[str]:
    """Configured flag names that are not recognised switches, sorted."""
    return sorted(set(config.flags) - set(SWITCHES))


def build_args(
    config: Optional[DumpConfig] = None,
    baseline: Sequence[str] = BASELINE_ARGS,
) -> List[str]:
    """Build the ordered argument vector for *config*."""
    if config is None:
        return list(baseline)

    override = split_override(config.raw)
    if override:
        return override

    enabled = [f"--{name}" for name in SWITCHES if config.flags.get(name)]
    if enabled:
        return enabled

    return list(baseline)
