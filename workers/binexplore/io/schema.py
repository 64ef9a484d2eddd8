"""
Schema — Pydantic models for explorer JSON outputs.

One report per target:
  explore_report.json — target facts, tool descriptor, argument
  vector, verdict, error block and the symbol tree.

Runtime contract fields (present in every output):
  package_name, explorer_version, profile_id, schema_version.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from binexplore import EXPLORER_VERSION, PACKAGE_NAME, SCHEMA_VERSION
from binexplore.core.symbols import Symbol


# ── Target facts ────────────────────────────────────────────────────────────

class ElfHeaderModel(BaseModel):
    machine: str
    elf_class: int
    endianness: str
    file_type: str


class TargetModel(BaseModel):
    """What the classifier (and pyelftools, for ELF) saw."""
    is_executable: bool = False
    is_object_like: bool = False
    container: Optional[str] = None
    readable: bool = True
    elf: Optional[ElfHeaderModel] = None


# ── Tool + error ────────────────────────────────────────────────────────────

class ToolModel(BaseModel):
    path: str
    verified: bool
    version: Optional[str] = None


class ErrorModel(BaseModel):
    kind: str                # ErrorKind value
    detail: str


# ── Symbol tree ─────────────────────────────────────────────────────────────

class SymbolModel(BaseModel):
    name: str
    kind: str                # SECTION | FUNCTION
    start_line: int          # 0-based
    start_column: int        # 0-based
    end_column: int
    children: List[SymbolModel] = Field(default_factory=list)

    @classmethod
    def from_symbol(cls, sym: Symbol) -> SymbolModel:
        return cls(
            name=sym.name,
            kind=sym.kind.value,
            start_line=sym.start_line,
            start_column=sym.start_column,
            end_column=sym.end_column,
            children=[cls.from_symbol(c) for c in sym.children],
        )


# ── Report ──────────────────────────────────────────────────────────────────

class ExploreReport(BaseModel):
    """Per-target summary — explore_report.json."""

    package_name: str = PACKAGE_NAME
    explorer_version: str = EXPLORER_VERSION
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    target_path: str
    target_sha256: str = ""
    target: TargetModel = Field(default_factory=TargetModel)

    tool: Optional[ToolModel] = None
    args: List[str] = Field(default_factory=list)

    verdict: str              # ACCEPT | REJECT
    reasons: List[str] = Field(default_factory=list)
    error: Optional[ErrorModel] = None

    symbols: List[SymbolModel] = Field(default_factory=list)
    symbol_counts: Dict[str, int] = Field(
        default_factory=lambda: {"sections": 0, "functions": 0}
    )
    n_output_lines: int = 0

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
