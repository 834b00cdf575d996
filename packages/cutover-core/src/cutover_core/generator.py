"""Descriptor generator for cutover.

T020: Implement DescriptorGenerator pipeline

This module implements the DescriptorGenerator class that turns two builds of
one application into a Descriptor, and optionally writes it next to the
target build.

Pipeline (strictly linear, one pass per invocation):
    validate(v1), validate(v2) -> load -> compare -> filter -> extract hints
    -> build(upgrade), build(downgrade) -> assemble -> (write)

Replacing whole units avoids asking live processes to convert their own
state: no ``update`` instructions are ever produced, only adds, loads and
deletes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TypeVar

import structlog

from cutover_core.artifacts import ArtifactStore
from cutover_core.config import CutoverConfig
from cutover_core.diff import (
    assemble,
    build_instructions,
    compare,
    extract_references,
    is_significant,
    validate_version,
)
from cutover_core.observability import span
from cutover_core.schemas import BuildDirectory, ChangedPair, ChangeSet, Descriptor
from cutover_core.writer import write_descriptor

logger = structlog.get_logger(__name__)

_T = TypeVar("_T")
_R = TypeVar("_R")


class DescriptorGenerator:
    """Generate upgrade descriptors from two builds.

    Attributes:
        config: Generation configuration.

    Example:
        >>> generator = DescriptorGenerator()
        >>> descriptor = generator.generate(
        ...     "shop", "0.0.1", "0.0.2",
        ...     "rel/shop/lib/shop-0.0.1", "_build/prod/lib/shop",
        ... )
        >>> [i.op for i in descriptor.upgrade_instructions]
        ['add_module', 'load_module']
    """

    def __init__(self, config: CutoverConfig | None = None) -> None:
        """Initialize the generator.

        Args:
            config: Generation configuration. Defaults are used if omitted.
        """
        self.config = config or CutoverConfig()
        self._log = logger.bind(component="descriptor_generator")

    def _map(self, fn: Callable[[_T], _R], items: Iterable[_T]) -> list[_R]:
        """Apply ``fn`` to every item, on a thread pool when configured.

        Results keep input order.
        """
        items = list(items)
        if self.config.max_workers <= 1 or len(items) <= 1:
            return [fn(item) for item in items]
        with ThreadPoolExecutor(max_workers=self.config.max_workers) as pool:
            return list(pool.map(fn, items))

    def significant_pairs(self, change_set: ChangeSet) -> tuple[ChangedPair, ...]:
        """Filter the candidate pairs of a change set down to significant ones."""
        ignored = self.config.ignored_chunks
        keep = self._map(lambda pair: is_significant(pair, ignored), change_set.changed_pairs)
        return tuple(
            pair for pair, significant in zip(change_set.changed_pairs, keep) if significant
        )

    def dependency_hints(self, pairs: tuple[ChangedPair, ...]) -> dict[str, frozenset[str]]:
        """Compute dependency hints for every significant changed pair.

        The new version's symbol table supplies the hints, which are shared by
        the upgrade and downgrade directions.
        """
        changing_ids = frozenset(pair.identifier for pair in pairs)
        hints = self._map(lambda pair: extract_references(pair.new, changing_ids), pairs)
        return {pair.identifier: refs for pair, refs in zip(pairs, hints)}

    def diff(self, v1: BuildDirectory, v2: BuildDirectory) -> Descriptor:
        """Build the descriptor between two already loaded builds.

        Args:
            v1: Start version build.
            v2: Target version build.

        Returns:
            Descriptor with upgrade (v1 -> v2) and downgrade (v2 -> v1) sequences.
        """
        attrs = {"app": v2.name, "from_version": v1.version, "to_version": v2.version}

        with span("compare", attributes=attrs):
            candidates = compare(v1, v2)

        with span("filter", attributes=attrs):
            change_set = candidates.with_changed_pairs(self.significant_pairs(candidates))

        with span("extract_dependencies", attributes=attrs):
            hints = self.dependency_hints(change_set.changed_pairs)

        with span("build_instructions", attributes=attrs):
            upgrade = build_instructions(change_set.added, hints, change_set.removed)
            downgrade = build_instructions(change_set.removed, hints, change_set.added)

        descriptor = assemble(v1.version, v2.version, upgrade, downgrade)
        self._log.info(
            "descriptor_generated",
            added=len(change_set.added),
            removed=len(change_set.removed),
            changed=len(hints),
            excluded=len(candidates.changed_pairs) - len(hints),
            **attrs,
        )
        return descriptor

    def generate(
        self,
        name: str,
        v1: str,
        v2: str,
        v1_dir: str | Path,
        v2_dir: str | Path,
    ) -> Descriptor:
        """Validate, load and diff two builds of an application.

        Both versions are validated before any unit is read.

        Args:
            name: Application name.
            v1: Start version, such as "0.0.1".
            v2: Target version, such as "0.0.2".
            v1_dir: Start version application directory.
            v2_dir: Target version application directory.

        Returns:
            The assembled Descriptor.

        Raises:
            VersionMismatchError: If either directory declares another version.
            ArtifactReadError: If any artifact cannot be read.
        """
        store = ArtifactStore(name)

        with span("validate", attributes={"app": name}):
            validate_version(store, v1_dir, v1)
            validate_version(store, v2_dir, v2)

        with span("load", attributes={"app": name}):
            v1_build = store.load(v1_dir, version=v1)
            v2_build = store.load(v2_dir, version=v2)

        return self.diff(v1_build, v2_build)

    def make(
        self,
        name: str,
        v1: str,
        v2: str,
        v1_dir: str | Path,
        v2_dir: str | Path,
        output_dir: str | Path | None = None,
    ) -> Path:
        """Generate the descriptor and write it.

        Args:
            name: Application name.
            v1: Start version.
            v2: Target version.
            v1_dir: Start version application directory.
            v2_dir: Target version application directory.
            output_dir: Application directory to write into. Defaults to
                ``v2_dir`` (the file lands in its ``ebin/``).

        Returns:
            Path of the written descriptor.

        Raises:
            VersionMismatchError: If either directory declares another version.
            ArtifactReadError: If any artifact cannot be read.
            DescriptorWriteError: If the descriptor cannot be written.
        """
        descriptor = self.generate(name, v1, v2, v1_dir, v2_dir)
        with span("write", attributes={"app": name}):
            return write_descriptor(
                descriptor,
                output_dir if output_dir is not None else v2_dir,
                name,
                self.config.output_format,
            )


def make(
    name: str,
    v1: str,
    v2: str,
    v1_dir: str | Path,
    v2_dir: str | Path,
    *,
    config: CutoverConfig | None = None,
) -> Path:
    """Generate and write the descriptor of ``name`` from ``v1`` to ``v2``.

    Convenience wrapper around ``DescriptorGenerator(config).make(...)``.

    Args:
        name: Application name.
        v1: Start version, such as "0.0.1".
        v2: Target version, such as "0.0.2".
        v1_dir: Path to the v1 artifacts (rel/<app>/lib/<app>-0.0.1).
        v2_dir: Path to the v2 artifacts (_build/prod/lib/<app>).
        config: Generation configuration.

    Returns:
        Path of the written descriptor.
    """
    return DescriptorGenerator(config).make(name, v1, v2, v1_dir, v2_dir)
