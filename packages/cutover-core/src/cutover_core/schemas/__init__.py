"""Schema definitions for cutover.

This module exports the core Pydantic models:

Input Models:
- CompiledUnit: One parsed compiled unit (chunks + symbol table)
- BuildDirectory: One version of an application's compiled units

Intermediate Models:
- ChangedPair: Old/new versions of a unit present in both builds
- ChangeSet: Added, removed and changed units between two builds

Output Models:
- AddUnit, LoadUnit, DeleteUnit: Upgrade instructions
- Instruction: Discriminated union of the three instruction kinds
- Descriptor: Upgrade and downgrade sequences with version identifiers
"""

from __future__ import annotations

from cutover_core.schemas.changes import ChangedPair, ChangeSet
from cutover_core.schemas.descriptor import Descriptor, units_by_op
from cutover_core.schemas.instructions import (
    ADD_OP,
    CATEGORY_ORDER,
    DELETE_OP,
    LOAD_OP,
    AddUnit,
    DeleteUnit,
    Instruction,
    LoadUnit,
    is_category_ordered,
)
from cutover_core.schemas.units import COMPILE_INFO_CHUNK, BuildDirectory, CompiledUnit

__all__ = [
    # Inputs
    "CompiledUnit",
    "BuildDirectory",
    "COMPILE_INFO_CHUNK",
    # Change sets
    "ChangedPair",
    "ChangeSet",
    # Instructions
    "AddUnit",
    "LoadUnit",
    "DeleteUnit",
    "Instruction",
    "ADD_OP",
    "LOAD_OP",
    "DELETE_OP",
    "CATEGORY_ORDER",
    "is_category_ordered",
    # Output
    "Descriptor",
    "units_by_op",
]
