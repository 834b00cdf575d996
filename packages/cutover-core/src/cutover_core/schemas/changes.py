"""Change set models produced by directory comparison."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cutover_core.schemas.units import CompiledUnit


class ChangedPair(BaseModel):
    """Old and new versions of a unit present in both build directories.

    Attributes:
        old: Unit as compiled in the start version.
        new: Unit as compiled in the target version.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    old: CompiledUnit
    new: CompiledUnit

    @model_validator(mode="after")
    def _same_identifier(self) -> ChangedPair:
        if self.old.identifier != self.new.identifier:
            msg = (
                f"Changed pair mixes units '{self.old.identifier}' "
                f"and '{self.new.identifier}'"
            )
            raise ValueError(msg)
        return self

    @property
    def identifier(self) -> str:
        """Identifier shared by both sides of the pair."""
        return self.new.identifier


class ChangeSet(BaseModel):
    """Partition of two unit collections into added, removed and changed units.

    A unit identifier appears in at most one category. Units that are
    byte-identical in both directories appear in none.

    Attributes:
        added: Identifiers present only in the target version.
        removed: Identifiers present only in the start version.
        changed_pairs: Pairs present in both versions, ordered by identifier.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    added: frozenset[str] = Field(default_factory=frozenset)
    removed: frozenset[str] = Field(default_factory=frozenset)
    changed_pairs: tuple[ChangedPair, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _disjoint_categories(self) -> ChangeSet:
        changed = [pair.identifier for pair in self.changed_pairs]
        if len(changed) != len(set(changed)):
            raise ValueError("Changed pairs contain duplicate identifiers")
        overlap = (self.added & self.removed) | ((self.added | self.removed) & set(changed))
        if overlap:
            raise ValueError(f"Identifiers in more than one category: {sorted(overlap)}")
        return self

    @property
    def changed_ids(self) -> frozenset[str]:
        """Identifiers of all changed pairs."""
        return frozenset(pair.identifier for pair in self.changed_pairs)

    @property
    def is_empty(self) -> bool:
        """True if nothing was added, removed or changed."""
        return not (self.added or self.removed or self.changed_pairs)

    def with_changed_pairs(self, pairs: tuple[ChangedPair, ...]) -> ChangeSet:
        """Return a copy carrying a different set of changed pairs."""
        return ChangeSet(added=self.added, removed=self.removed, changed_pairs=pairs)
