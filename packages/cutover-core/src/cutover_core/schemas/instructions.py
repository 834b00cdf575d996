"""Upgrade instruction models.

Instructions are a tagged union discriminated by ``op``. The tag values are
the high-level appup instruction names understood by the release installer.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ADD_OP = "add_module"
LOAD_OP = "load_module"
DELETE_OP = "delete_module"

# Position of each instruction kind within one direction's sequence
CATEGORY_ORDER: dict[str, int] = {ADD_OP: 0, LOAD_OP: 1, DELETE_OP: 2}


class AddUnit(BaseModel):
    """Load a unit that did not exist in the start version."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    op: Literal["add_module"] = ADD_OP
    unit: str = Field(..., min_length=1, description="Unit identifier")


class LoadUnit(BaseModel):
    """Reload a changed unit.

    Attributes:
        unit: Unit identifier.
        dependencies: Other changing units this unit references. These are
            ordering hints for the installer, not a resolved load order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    op: Literal["load_module"] = LOAD_OP
    unit: str = Field(..., min_length=1, description="Unit identifier")
    dependencies: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Changing units referenced by this unit (sorted)",
    )


class DeleteUnit(BaseModel):
    """Remove a unit that does not exist in the target version."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    op: Literal["delete_module"] = DELETE_OP
    unit: str = Field(..., min_length=1, description="Unit identifier")


Instruction = Annotated[
    Union[AddUnit, LoadUnit, DeleteUnit],
    Field(discriminator="op"),
]
"""Any one upgrade instruction."""


def is_category_ordered(instructions: tuple[Instruction, ...] | list[Instruction]) -> bool:
    """Return True if every add precedes every load, which precedes every delete.

    Args:
        instructions: One direction's instruction sequence.

    Returns:
        Whether the sequence respects the add/load/delete category order.
    """
    positions = [CATEGORY_ORDER[instruction.op] for instruction in instructions]
    return positions == sorted(positions)
