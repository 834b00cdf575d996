"""cutover-core: Upgrade descriptor generation for compiled application builds.

This package provides:
- DescriptorGenerator: Diff two builds into upgrade/downgrade instructions
- ArtifactStore: Read versions and compiled units from build directories
- Descriptor and instruction models: Output contract for the release installer
- Descriptor writers: Deterministic appup and JSON serialization
"""

from __future__ import annotations

__version__ = "0.1.0"

# Artifact reading
from cutover_core.artifacts import ArtifactStore, parse_unit

# Configuration
from cutover_core.config import DEFAULT_IGNORED_CHUNKS, CutoverConfig

# Error types
from cutover_core.errors import (
    ArtifactReadError,
    ConfigurationError,
    CutoverError,
    DescriptorWriteError,
    VersionMismatchError,
)

# Generator
from cutover_core.generator import DescriptorGenerator, make

# Schema models
from cutover_core.schemas import (
    AddUnit,
    BuildDirectory,
    ChangedPair,
    ChangeSet,
    CompiledUnit,
    DeleteUnit,
    Descriptor,
    Instruction,
    LoadUnit,
)

# Writers
from cutover_core.writer import (
    descriptor_path,
    render_appup,
    render_json,
    write_descriptor,
)

__all__ = [
    "__version__",
    # Generator
    "DescriptorGenerator",
    "make",
    # Configuration
    "CutoverConfig",
    "DEFAULT_IGNORED_CHUNKS",
    # Artifacts
    "ArtifactStore",
    "parse_unit",
    # Errors
    "CutoverError",
    "VersionMismatchError",
    "ArtifactReadError",
    "ConfigurationError",
    "DescriptorWriteError",
    # Schema models
    "CompiledUnit",
    "BuildDirectory",
    "ChangedPair",
    "ChangeSet",
    "AddUnit",
    "LoadUnit",
    "DeleteUnit",
    "Instruction",
    "Descriptor",
    # Writers
    "render_appup",
    "render_json",
    "descriptor_path",
    "write_descriptor",
]
