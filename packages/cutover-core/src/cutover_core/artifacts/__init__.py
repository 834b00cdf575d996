"""Artifact reading for cutover.

- ArtifactStore: Read versions and compiled units from a build directory
- parse_unit: Parse one chunk container into a CompiledUnit
- read_chunks / decode_atoms: Low-level container and atom table decoding
"""

from __future__ import annotations

from cutover_core.artifacts.beam import (
    LATIN1_ATOM_CHUNK,
    UTF8_ATOM_CHUNK,
    decode_atoms,
    parse_unit,
    read_chunks,
)
from cutover_core.artifacts.store import (
    APP_FILE_SUFFIX,
    EBIN_DIR,
    UNIT_SUFFIX,
    ArtifactStore,
)

__all__: list[str] = [
    "ArtifactStore",
    "EBIN_DIR",
    "UNIT_SUFFIX",
    "APP_FILE_SUFFIX",
    "parse_unit",
    "read_chunks",
    "decode_atoms",
    "UTF8_ATOM_CHUNK",
    "LATIN1_ATOM_CHUNK",
]
