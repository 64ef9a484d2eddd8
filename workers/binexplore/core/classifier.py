"""
File classifier — cheap magic-byte and permission checks on a target.

Responsibilities:
  - Decide whether the file carries an execute permission.
  - Decide whether the first bytes look like an object file
    (ELF magic, or the legacy i386 COFF machine type 0x014C).
  - Name the container when it is one we recognise explicitly.

Only the first 4 bytes of the file are read.  I/O errors are logged and
reported as a negative classification, never raised.
"""
import logging
import os
import stat
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

ELF_MAGIC = b"\x7fELF"
COFF_I386_MAGIC = b"\x4c\x01"
PE_MAGIC = b"MZ"
MACHO_MAGICS = (
    b"\xfe\xed\xfa\xce",
    b"\xce\xfa\xed\xfe",
    b"\xfe\xed\xfa\xcf",
    b"\xcf\xfa\xed\xfe",
)
MACHO_FAT_MAGIC = b"\xca\xfe\xba\xbe"

# Hosts without POSIX mode bits fall back to the file extension.
USE_SUFFIX_RULE = os.name == "nt"
WINDOWS_EXECUTABLE_SUFFIXES = frozenset({".exe", ".com", ".bat", ".cmd", ".dll"})


@dataclass(frozen=True)
class FileClass:
    """Classification of a single target file."""
    is_executable: bool
    is_object_like: bool
    container: Optional[str] = None   # elf | coff-i386 | pe | mach-o | mach-o-fat
    readable: bool = True


UNREADABLE = FileClass(is_executable=False, is_object_like=False, readable=False)


def detect_container(prefix: bytes) -> Optional[str]:
    """Name the container format for a 4-byte *prefix*, if recognised."""
    if prefix[:4] == ELF_MAGIC:
        return "elf"
    if prefix[:2] == COFF_I386_MAGIC:
        return "coff-i386"
    if prefix[:4] in MACHO_MAGICS:
        return "mach-o"
    if prefix[:4] == MACHO_FAT_MAGIC:
        return "mach-o-fat"
    if prefix[:2] == PE_MAGIC:
        return "pe"
    return None


def is_object_prefix(prefix: bytes) -> bool:
    """True for the ELF magic or the 2-byte i386 COFF signature."""
    return prefix[:4] == ELF_MAGIC or prefix[:2] == COFF_I386_MAGIC


def has_execute_bit(st: os.stat_result, path: Path) -> bool:
    """Execute permission from mode bits, or from the suffix on Windows."""
    if USE_SUFFIX_RULE:
        return path.suffix.lower() in WINDOWS_EXECUTABLE_SUFFIXES
    return bool(st.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH))


class FileClassifier:
    """Classifies target files before any tool is spawned."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._log = logger or logging.getLogger(__name__)

    def classify(self, path: str | Path) -> FileClass:
        p = Path(path)
        try:
            st = p.stat()
            with open(p, "rb") as f:
                prefix = f.read(4)
        except OSError as e:
            self._log.warning("Cannot classify %s: %s", p, e)
            return UNREADABLE

        return FileClass(
            is_executable=has_execute_bit(st, p),
            is_object_like=is_object_prefix(prefix),
            container=detect_container(prefix),
        )


def classify(path: str | Path) -> FileClass:
    """Module-level shortcut using the default logger."""
    return FileClassifier().classify(path)
