"""Upgrade descriptor model.

T014: Implement Descriptor output contract

The descriptor is the sole integration point between cutover-core and the
release installer. It is immutable once assembled.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from cutover_core.schemas.instructions import (
    AddUnit,
    DeleteUnit,
    Instruction,
    LoadUnit,
)


class Descriptor(BaseModel):
    """Forward and backward instruction sequences between two versions.

    Attributes:
        from_version: Start version (V1).
        to_version: Target version (V2).
        upgrade_instructions: Instructions moving a running system from V1 to V2.
        downgrade_instructions: Instructions moving it back from V2 to V1.

    Example:
        >>> descriptor = Descriptor(
        ...     from_version="0.0.1",
        ...     to_version="0.0.2",
        ...     upgrade_instructions=(AddUnit(unit="shop_audit"),),
        ...     downgrade_instructions=(DeleteUnit(unit="shop_audit"),),
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    from_version: str = Field(..., min_length=1, description="Start version")
    to_version: str = Field(..., min_length=1, description="Target version")
    upgrade_instructions: tuple[Instruction, ...] = Field(
        default_factory=tuple,
        description="Instructions for V1 -> V2",
    )
    downgrade_instructions: tuple[Instruction, ...] = Field(
        default_factory=tuple,
        description="Instructions for V2 -> V1",
    )

    @property
    def is_empty(self) -> bool:
        """True if neither direction requires any instruction."""
        return not (self.upgrade_instructions or self.downgrade_instructions)


def units_by_op(
    instructions: tuple[Instruction, ...],
) -> dict[type[AddUnit] | type[LoadUnit] | type[DeleteUnit], set[str]]:
    """Group the unit identifiers of a sequence by instruction type.

    Args:
        instructions: One direction's instruction sequence.

    Returns:
        Mapping of instruction class to the set of unit identifiers it carries.
    """
    grouped: dict[type[AddUnit] | type[LoadUnit] | type[DeleteUnit], set[str]] = {
        AddUnit: set(),
        LoadUnit: set(),
        DeleteUnit: set(),
    }
    for instruction in instructions:
        grouped[type(instruction)].add(instruction.unit)
    return grouped
