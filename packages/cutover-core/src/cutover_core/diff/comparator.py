"""Artifact set comparison.

Partitions the units of two builds by identifier. This stage compares raw
bytes, falling back to the chunks minus compile info (``CInf``). Deciding
whether a difference matters is left to the significance filter.
"""

from __future__ import annotations

import structlog

from cutover_core.schemas import BuildDirectory, ChangedPair, ChangeSet

logger = structlog.get_logger(__name__)


def compare(v1: BuildDirectory, v2: BuildDirectory) -> ChangeSet:
    """Compare two builds of the same application.

    Args:
        v1: Start version build.
        v2: Target version build.

    Returns:
        ChangeSet with units only in ``v2`` as added, units only in ``v1`` as
        removed, and units whose content differs as candidate changed pairs.
        Units identical apart from compile info are left out entirely.

    Example:
        >>> change_set = compare(v1_build, v2_build)
        >>> sorted(change_set.added), sorted(change_set.removed)
        (['shop_audit'], [])
    """
    removed = v1.unit_ids - v2.unit_ids
    added = v2.unit_ids - v1.unit_ids
    pairs = tuple(
        ChangedPair(old=v1.units[unit_id], new=v2.units[unit_id])
        for unit_id in sorted(v1.unit_ids & v2.unit_ids)
        if not v1.units[unit_id].same_content(v2.units[unit_id])
    )

    logger.info(
        "builds_compared",
        added=len(added),
        removed=len(removed),
        candidates=len(pairs),
    )
    return ChangeSet(added=added, removed=removed, changed_pairs=pairs)
