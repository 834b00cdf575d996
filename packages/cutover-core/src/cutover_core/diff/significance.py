"""Change significance filtering.

Raw byte comparison reports a unit as changed whenever a rebuild regenerates
incidental metadata such as debug info. Reloading such a unit at upgrade time
costs CPU for no behavioral change, so pairs whose only differences lie in
ignorable chunks are dropped here.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from cutover_core.config import DEFAULT_IGNORED_CHUNKS
from cutover_core.schemas import ChangedPair

logger = structlog.get_logger(__name__)


def changed_chunk_kinds(pair: ChangedPair) -> frozenset[str]:
    """Return the chunk kinds whose content differs between old and new.

    A kind present on only one side counts as differing. Compile info is
    never reported.
    """
    old, new = pair.old.comparable_chunks, pair.new.comparable_chunks
    return frozenset(kind for kind in old.keys() | new.keys() if old.get(kind) != new.get(kind))


def is_significant(
    pair: ChangedPair,
    ignored_chunks: frozenset[str] = DEFAULT_IGNORED_CHUNKS,
) -> bool:
    """Decide whether a candidate changed pair has a runtime-observable difference.

    Args:
        pair: Old and new versions of one unit.
        ignored_chunks: Chunk kinds that carry no runtime behavior.

    Returns:
        True if the unit must be reloaded; False if the pair only differs in
        ignorable chunks, or does not differ at all.
    """
    if len(pair.old.comparable_chunks) != len(pair.new.comparable_chunks):
        return True

    changed = changed_chunk_kinds(pair)
    if not changed:
        return False
    if changed <= ignored_chunks:
        logger.info(
            "unit_excluded",
            unit=pair.identifier,
            changed_chunks=sorted(changed),
            reason="only non-semantic chunks changed",
        )
        return False
    return True


def filter_significant(
    pairs: Iterable[ChangedPair],
    ignored_chunks: frozenset[str] = DEFAULT_IGNORED_CHUNKS,
) -> tuple[ChangedPair, ...]:
    """Keep only the pairs whose difference is runtime-observable.

    Args:
        pairs: Candidate changed pairs from the comparator.
        ignored_chunks: Chunk kinds that carry no runtime behavior.

    Returns:
        The significant pairs, in input order.
    """
    return tuple(pair for pair in pairs if is_significant(pair, ignored_chunks))
