"""Compiled unit and build directory models.

T004: Implement CompiledUnit and BuildDirectory models

A compiled unit is the parsed form of one ``.beam`` file: its named chunks,
the identifiers it references and the raw bytes it was parsed from. A build
directory is one version of an application's ``ebin/`` contents.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

COMPILE_INFO_CHUNK = "CInf"
"""Chunk holding compiler options and the source path; never compared."""


class CompiledUnit(BaseModel):
    """One compiled unit parsed from a chunk container.

    Attributes:
        identifier: Unit name, taken from the first entry of the atom table.
        chunks: Chunk payloads keyed by their 4-character kind tag.
        symbols: Other unit identifiers referenced by this unit (self excluded).
        raw: Raw bytes of the artifact as stored on disk.
        path: Source path of the artifact, if it was read from disk.

    Example:
        >>> unit = CompiledUnit(
        ...     identifier="shop_cart",
        ...     chunks={"Code": b"...", "AtU8": b"..."},
        ...     symbols=frozenset({"shop_pricing"}),
        ...     raw=b"FOR1...",
        ... )
        >>> unit.chunk("Code")
        b'...'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identifier: str = Field(
        ...,
        min_length=1,
        description="Unit name (first atom of the atom table)",
    )
    chunks: dict[str, bytes] = Field(
        default_factory=dict,
        description="Chunk payloads keyed by chunk-kind tag",
    )
    symbols: frozenset[str] = Field(
        default_factory=frozenset,
        description="Referenced unit identifiers, self excluded",
    )
    raw: bytes = Field(
        default=b"",
        repr=False,
        description="Raw artifact bytes used for byte-level comparison",
    )
    path: str | None = Field(
        default=None,
        description="Source path of the artifact",
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_self_reference(cls, data: Any) -> Any:
        if isinstance(data, dict) and "identifier" in data and "symbols" in data:
            data = {**data, "symbols": frozenset(data["symbols"]) - {data["identifier"]}}
        return data

    @property
    def chunk_kinds(self) -> frozenset[str]:
        """Kinds of all chunks present in the unit."""
        return frozenset(self.chunks)

    def chunk(self, kind: str) -> bytes | None:
        """Return the payload of a chunk, or None if the unit has no such chunk."""
        return self.chunks.get(kind)

    @property
    def comparable_chunks(self) -> dict[str, bytes]:
        """Chunks that take part in comparison, compile info excluded."""
        return {kind: data for kind, data in self.chunks.items() if kind != COMPILE_INFO_CHUNK}

    def same_content(self, other: CompiledUnit) -> bool:
        """Return True if both units are identical apart from compile info.

        Rebuilding from another checkout changes only the source path in
        ``CInf``, so such units count as unchanged.
        """
        if self.raw == other.raw:
            return True
        return bool(self.chunks) and self.comparable_chunks == other.comparable_chunks


class BuildDirectory(BaseModel):
    """One version of an application's compiled units.

    Attributes:
        path: Application directory (the one holding ``ebin/``).
        name: Application name.
        version: Version declared by the application resource file.
        units: Compiled units keyed by identifier.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    path: str = Field(..., description="Application directory")
    name: str = Field(..., min_length=1, description="Application name")
    version: str = Field(..., min_length=1, description="Declared version")
    units: dict[str, CompiledUnit] = Field(
        default_factory=dict,
        description="Compiled units keyed by identifier",
    )

    @property
    def unit_ids(self) -> frozenset[str]:
        """Identifiers of all units in the directory."""
        return frozenset(self.units)
