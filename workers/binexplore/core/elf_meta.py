"""
ELF metadata — header facts for ELF targets, read with pyelftools.

Responsibilities:
  - Read machine, class, endianness and object type of an ELF file.
  - Compute the file SHA256 for the report.
  - This module does NOT disassemble or walk sections.
"""
import hashlib
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from elftools.common.exceptions import ELFError
from elftools.elf.elffile import ELFFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElfHeader:
    """Header fields of an ELF object."""
    machine: str        # e.g. "EM_X86_64", "EM_AARCH64", or "30583" if unnamed
    elf_class: int      # 32 or 64
    endianness: str     # "little" or "big"
    file_type: str      # "ET_EXEC", "ET_DYN", "ET_REL", ...


def compute_sha256(path: str | Path) -> str:
    """Compute SHA256 hash of a file."""
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def read_elf_header(path: str | Path) -> Optional[ElfHeader]:
    """
    Open *path* as ELF and return its header facts.

    Returns None when the file cannot be opened or is not valid ELF.
    """
    try:
        with open(path, "rb") as f:
            elffile = ELFFile(f)
            return ElfHeader(
                machine=str(elffile.header.e_machine),
                elf_class=elffile.elfclass,
                endianness="little" if elffile.little_endian else "big",
                file_type=str(elffile.header.e_type),
            )
    except (OSError, ELFError) as e:
        logger.debug("No ELF header for %s: %s", path, e)
        return None
