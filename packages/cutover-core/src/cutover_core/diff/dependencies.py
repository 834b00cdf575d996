"""Dependency hint extraction for changed units.

The hints tell the release installer which other changing units a reloaded
unit references. No load order is computed here: the installer sees the whole
release, reorders load instructions itself and owns the policy for cycles.
"""

from __future__ import annotations

from collections.abc import Set

from cutover_core.schemas import CompiledUnit


def extract_references(unit: CompiledUnit, changing_ids: Set[str]) -> frozenset[str]:
    """Return the changing units referenced by a unit.

    Args:
        unit: Unit whose symbol table is inspected.
        changing_ids: Identifiers of all units changing in this transition.

    Returns:
        The subset of the unit's symbol table that is also changing. References
        to unchanged units and to the unit itself are dropped.

    Example:
        >>> extract_references(cart, {"shop_cart", "shop_pricing"})
        frozenset({'shop_pricing'})
    """
    return frozenset(symbol for symbol in unit.symbols if symbol in changing_ids) - {
        unit.identifier
    }
