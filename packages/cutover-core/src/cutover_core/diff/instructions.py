"""Instruction list building for one upgrade direction."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set

from cutover_core.schemas import AddUnit, DeleteUnit, Instruction, LoadUnit


def build_instructions(
    added: Iterable[str],
    changed: Mapping[str, Set[str]],
    removed: Iterable[str],
) -> tuple[Instruction, ...]:
    """Build one direction's instruction sequence.

    Adds come first, then loads, then deletes. Within each category entries
    are sorted by identifier so the output is stable; the installer reorders
    loads by their dependency hints anyway.

    Args:
        added: Units that only exist in the destination version.
        changed: Changed units mapped to their dependency hints.
        removed: Units that only exist in the source version.

    Returns:
        The instruction sequence.

    Example:
        >>> build_instructions({"shop_audit"}, {"shop_cart": set()}, set())
        (AddUnit(op='add_module', unit='shop_audit'),
         LoadUnit(op='load_module', unit='shop_cart', dependencies=()))
    """
    # add_module must precede load_module so new units are loadable as dependencies
    return (
        *(AddUnit(unit=unit_id) for unit_id in sorted(added)),
        *(
            LoadUnit(unit=unit_id, dependencies=tuple(sorted(changed[unit_id])))
            for unit_id in sorted(changed)
        ),
        *(DeleteUnit(unit=unit_id) for unit_id in sorted(removed)),
    )
