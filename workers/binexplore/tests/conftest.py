"""
Shared pytest fixtures for binexplore tests.

Provides:
  - A scripted FakeExecutor (no processes spawned) that records argv.
  - Canned objdump outputs for GNU/ELF and macOS/Mach-O flavours.
  - Small target files with ELF / COFF / foreign magic bytes.
  - On-the-fly compilation of a tiny C object with gcc for the
    integration tests; skipped when gcc or objdump is missing.
"""
import shutil
import struct
import subprocess
import textwrap
from pathlib import Path
from typing import Callable, List, Optional, Sequence

import pytest

from binexplore.core.executor import ExecOutput

GNU_HELP = textwrap.dedent("""\
    Usage: {path} <option(s)> <file(s)>
     Display information from object <file(s)>.
     At least one of the following switches must be given:
      -a, --archive-headers    Display archive header information
""")

GNU_VERSION = "GNU objdump (GNU Binutils for Ubuntu) 2.42\nCopyright (C) 2024\n"

# objdump -d -S on a small ELF object
GNU_DISASSEMBLY = textwrap.dedent("""\

    minimal.o:     file format elf64-x86-64


    Disassembly of section .text:

    0000000000000000 <add>:
    int add(int a, int b) {
       0:\t55                   \tpush   %rbp
       1:\t48 89 e5             \tmov    %rsp,%rbp
    }
      14:\tc3                   \tret

    0000000000000015 <main>:
    int main(void) {
      15:\t55                   \tpush   %rbp
      29:\tc3                   \tret

    Disassembly of section .init:

    0000000000001000 <_init>:
        1000:\tf3 0f 1e fa          \tendbr64
""")

# llvm-objdump on macOS
MACHO_DISASSEMBLY = textwrap.dedent("""\

    vector_debug:\tfile format mach-o arm64

    Disassembly of section __TEXT,__text:

    0000000100003f58 <_main>:
    100003f58: ff 43 00 d1 \tsub\tsp, sp, #16
    0000000100003f70 <__Z6squarei>:
    100003f70: ff 43 00 d1 \tsub\tsp, sp, #16

    Disassembly of section __TEXT,__stubs:

    0000000100003f90 <__stubs>:
""")


class FakeExecutor:
    """
    Scripted CommandExecutor.

    *handler* maps an argv to an ExecOutput; every call is recorded in
    ``calls`` so tests can assert on the exact argument vectors.
    """

    def __init__(self, handler: Callable[[List[str]], ExecOutput]):
        self.handler = handler
        self.calls: List[List[str]] = []

    def execute(
        self, argv: Sequence[str], timeout: Optional[float] = None
    ) -> ExecOutput:
        argv = list(argv)
        self.calls.append(argv)
        return self.handler(argv)


def objdump_handler(
    help_text: str = GNU_HELP,
    version_text: str = GNU_VERSION,
    disassembly: str = GNU_DISASSEMBLY,
    stderr: str = "",
    returncode: int = 0,
) -> Callable[[List[str]], ExecOutput]:
    """Handler that behaves like objdump for --help / --version / dumps."""
    def handler(argv: List[str]) -> ExecOutput:
        if argv[1:] == ["--help"]:
            return ExecOutput(0, help_text.format(path=argv[0]), "")
        if argv[1:] == ["--version"]:
            return ExecOutput(0, version_text, "")
        return ExecOutput(returncode, disassembly, stderr)
    return handler


@pytest.fixture
def make_executor() -> Callable[..., FakeExecutor]:
    """Factory: FakeExecutor around objdump_handler(**kwargs)."""
    def _make(**kwargs) -> FakeExecutor:
        return FakeExecutor(objdump_handler(**kwargs))
    return _make


@pytest.fixture
def gnu_executor(make_executor) -> FakeExecutor:
    return make_executor()


@pytest.fixture
def gnu_disassembly() -> str:
    return GNU_DISASSEMBLY


@pytest.fixture
def macho_disassembly() -> str:
    return MACHO_DISASSEMBLY


@pytest.fixture
def fake_objdump(tmp_path) -> Path:
    """An executable file standing in for the objdump binary."""
    p = tmp_path / "bin" / "objdump"
    p.parent.mkdir()
    p.write_text("#!/bin/sh\nexit 0\n")
    p.chmod(0o755)
    return p


@pytest.fixture
def make_target(tmp_path) -> Callable[..., Path]:
    """Factory writing a target file with a given prefix and mode."""
    def _make(name: str, prefix: bytes, mode: int = 0o755) -> Path:
        p = tmp_path / name
        p.write_bytes(prefix + b"\x00" * 60)
        p.chmod(mode)
        return p
    return _make


@pytest.fixture
def elf_target(make_target) -> Path:
    # Magic only; pyelftools will refuse the header, which is fine.
    return make_target("prog", b"\x7fELF")


@pytest.fixture
def text_target(make_target) -> Path:
    return make_target("notes.txt", b"hello world", mode=0o644)


@pytest.fixture
def unknown_machine_elf(tmp_path) -> Path:
    """Bare ELF64 LE header with e_type=ET_REL and unassigned e_machine 0x7777."""
    ident = b"\x7fELF" + bytes([2, 1, 1, 0]) + b"\x00" * 8
    header = ident + struct.pack(
        "<HHIQQQIHHHHHH",
        1,       # e_type
        0x7777,  # e_machine
        1,       # e_version
        0, 0, 0, # e_entry, e_phoff, e_shoff
        0,       # e_flags
        64,      # e_ehsize
        0, 0, 0, 0, 0,
    )
    p = tmp_path / "odd_arch.o"
    p.write_bytes(header)
    return p


# ── Real toolchain fixtures ─────────────────────────────────────────

MINIMAL_C = textwrap.dedent("""\
    int add(int a, int b) {
        return a + b;
    }

    int multiply(int x, int y) {
        return x * y;
    }
""")


@pytest.fixture(scope="session")
def toolchain_ok():
    """Skip tests if gcc or objdump is not available."""
    for tool in ("gcc", "objdump"):
        if shutil.which(tool) is None:
            pytest.skip(f"{tool} not available - install binutils/gcc to run these tests")


@pytest.fixture(scope="session")
def compiled_object(tmp_path_factory, toolchain_ok) -> Path:
    """MINIMAL_C compiled to a relocatable ELF object with debug info."""
    d = tmp_path_factory.mktemp("binexplore_fixtures")
    src = d / "minimal.c"
    obj = d / "minimal.o"
    src.write_text(MINIMAL_C)
    try:
        subprocess.run(
            ["gcc", "-O0", "-g", "-c", str(src), "-o", str(obj)],
            check=True,
            capture_output=True,
            timeout=30,
        )
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        pytest.skip(f"gcc could not build the fixture object: {e}")
    if obj.read_bytes()[:4] != b"\x7fELF":
        pytest.skip("gcc does not produce ELF objects on this host")
    return obj
