"""Descriptor assembly."""

from __future__ import annotations

from cutover_core.schemas import Descriptor, Instruction


def assemble(
    v1: str,
    v2: str,
    upgrade: tuple[Instruction, ...],
    downgrade: tuple[Instruction, ...],
) -> Descriptor:
    """Package both instruction sequences with their versions.

    Both versions are expected to be validated and both sequences built
    already; nothing is checked here.
    """
    return Descriptor(
        from_version=v1,
        to_version=v2,
        upgrade_instructions=upgrade,
        downgrade_instructions=downgrade,
    )
