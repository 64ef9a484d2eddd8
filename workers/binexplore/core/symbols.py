"""
Symbol extractor — objdump text → section/function symbol tree.

A two-state line walk:
  - outside-section: no parent yet; function headers become root orphans.
  - inside-section:  function headers attach to the most recent section.

Each line is classified once, section header first, then function
header; everything else is ignored.  Lines and columns are 0-based.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum, unique
from typing import Dict, Iterator, List, Optional

# GNU/LLVM on ELF and COFF, then Mach-O ("__TEXT,__text").
SECTION_PATTERNS = (
    re.compile(r"^Disassembly of section \.(\S+):$"),
    re.compile(r"^Disassembly of section __TEXT,__(\S+):$"),
)
FUNCTION_PATTERN = re.compile(r"^[0-9a-f]+ <(.+)>:$")


@unique
class SymbolKind(str, Enum):
    SECTION = "SECTION"
    FUNCTION = "FUNCTION"


@dataclass
class Symbol:
    name: str
    kind: SymbolKind
    start_line: int
    start_column: int
    end_column: int
    children: List[Symbol] = field(default_factory=list)


def _match_section(line: str) -> Optional[re.Match]:
    for pattern in SECTION_PATTERNS:
        m = pattern.match(line)
        if m:
            return m
    return None


def extract_symbols(text: str) -> List[Symbol]:
    """Build the symbol tree for *text*.  Never raises."""
    roots: List[Symbol] = []
    parent: Optional[Symbol] = None

    for lineno, raw in enumerate(text.splitlines()):
        line = raw.rstrip()

        m = _match_section(line)
        if m:
            parent = Symbol(
                name=m.group(1),
                kind=SymbolKind.SECTION,
                start_line=lineno,
                start_column=m.start(),
                end_column=m.end(),
            )
            roots.append(parent)
            continue

        m = FUNCTION_PATTERN.match(line)
        if m:
            func = Symbol(
                name=m.group(1),
                kind=SymbolKind.FUNCTION,
                start_line=lineno,
                start_column=m.start(),
                end_column=m.end(),
            )
            if parent is None:
                roots.append(func)
            else:
                parent.children.append(func)

    return roots


def iter_symbols(tree: List[Symbol]) -> Iterator[Symbol]:
    """Every symbol in document order."""
    for sym in tree:
        yield sym
        yield from sym.children


def count_symbols(tree: List[Symbol]) -> Dict[str, int]:
    counts = {"sections": 0, "functions": 0}
    for sym in iter_symbols(tree):
        if sym.kind is SymbolKind.SECTION:
            counts["sections"] += 1
        else:
            counts["functions"] += 1
    return counts
