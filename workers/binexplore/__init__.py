"""
binexplore — objdump-driven binary explorer.

Runs an external disassembler over a binary or object file and turns
its text output into a section → function symbol tree.
"""

__version__ = "0.1.0"
EXPLORER_VERSION = "v0"
PACKAGE_NAME = "binexplore"
SCHEMA_VERSION = "0.1"
