"""Diff engine stages.

Stages run in this order, once per invocation:

- validate_version: Check each build declares the expected version
- compare: Partition units into added, removed and candidate changed pairs
- filter_significant: Drop pairs that differ only in ignorable chunks
- extract_references: Per changed unit, the changing units it references
- build_instructions: One direction's add/load/delete sequence
- assemble: Package both directions into a Descriptor
"""

from __future__ import annotations

from cutover_core.diff.assembler import assemble
from cutover_core.diff.comparator import compare
from cutover_core.diff.dependencies import extract_references
from cutover_core.diff.instructions import build_instructions
from cutover_core.diff.significance import (
    changed_chunk_kinds,
    filter_significant,
    is_significant,
)
from cutover_core.diff.validator import validate_version

__all__: list[str] = [
    "validate_version",
    "compare",
    "changed_chunk_kinds",
    "is_significant",
    "filter_significant",
    "extract_references",
    "build_instructions",
    "assemble",
]
