"""BEAM chunk container reader.

T006: Implement chunk container parsing and atom table decoding

A ``.beam`` file is an IFF container::

    "FOR1" <form size:32> "BEAM" { <kind:4> <size:32> <payload> <pad to 4> }*

This module parses the container into named chunks and decodes the atom
table (``AtU8`` or the legacy ``Atom`` chunk). The first atom is the unit's
own name; the remaining atoms are the unit's symbol table. Gzip-compressed
files are decompressed transparently.
"""

from __future__ import annotations

import gzip
import zlib

import structlog

from cutover_core.errors import ArtifactReadError
from cutover_core.schemas import CompiledUnit

logger = structlog.get_logger(__name__)

FORM_HEADER = b"FOR1"
FORM_TYPE = b"BEAM"
GZIP_MAGIC = b"\x1f\x8b"

UTF8_ATOM_CHUNK = "AtU8"
LATIN1_ATOM_CHUNK = "Atom"

_HEADER_SIZE = 12
_CHUNK_HEADER_SIZE = 8


def _align4(size: int) -> int:
    return (size + 3) & ~3


def decompress(data: bytes, path: str) -> bytes:
    """Return the uncompressed container bytes.

    Args:
        data: Bytes as stored on disk.
        path: Artifact path, used in error messages.

    Returns:
        The data unchanged, or gunzipped if it carries the gzip magic.

    Raises:
        ArtifactReadError: If the gzip stream is corrupt.
    """
    if not data.startswith(GZIP_MAGIC):
        return data
    try:
        return gzip.decompress(data)
    except (OSError, EOFError, zlib.error) as e:
        raise ArtifactReadError(
            path,
            "corrupt compressed artifact",
            internal_details=str(e),
        ) from e


def read_chunks(data: bytes, path: str = "<memory>") -> dict[str, bytes]:
    """Split a chunk container into its chunks.

    Args:
        data: Uncompressed container bytes.
        path: Artifact path, used in error messages.

    Returns:
        Chunk payloads keyed by their 4-character kind tag.

    Raises:
        ArtifactReadError: If the container is malformed or truncated.

    Example:
        >>> chunks = read_chunks(Path("ebin/shop_cart.beam").read_bytes())
        >>> sorted(chunks)
        ['AtU8', 'Code', 'Dbgi', 'ExpT', 'ImpT', 'LitT', 'StrT']
    """
    if len(data) < _HEADER_SIZE:
        raise ArtifactReadError(path, "truncated header")
    if data[:4] != FORM_HEADER or data[8:12] != FORM_TYPE:
        raise ArtifactReadError(path, "not a BEAM chunk container")

    end = 8 + int.from_bytes(data[4:8], "big")
    if end > len(data):
        raise ArtifactReadError(
            path,
            "truncated container",
            internal_details=f"form declares {end} bytes, file has {len(data)}",
        )

    chunks: dict[str, bytes] = {}
    pos = _HEADER_SIZE
    while pos < end:
        if pos + _CHUNK_HEADER_SIZE > end:
            raise ArtifactReadError(path, f"truncated chunk header at offset {pos}")
        kind = data[pos : pos + 4].decode("latin-1")
        size = int.from_bytes(data[pos + 4 : pos + 8], "big")
        start = pos + _CHUNK_HEADER_SIZE
        if start + size > end:
            raise ArtifactReadError(path, f"truncated '{kind}' chunk")
        if kind in chunks:
            raise ArtifactReadError(path, f"duplicate '{kind}' chunk")
        chunks[kind] = data[start : start + size]
        pos = start + _align4(size)

    return chunks


def _compact_length(payload: bytes, pos: int, path: str) -> tuple[int, int]:
    """Decode an atom length in compact term encoding (tag ``u``)."""
    if pos >= len(payload):
        raise ArtifactReadError(path, "truncated atom table")
    first = payload[pos]
    if first & 0x07:
        raise ArtifactReadError(path, f"unexpected tag {first & 0x07} in atom table")
    if not first & 0x08:
        return first >> 4, pos + 1
    if not first & 0x10:
        if pos + 1 >= len(payload):
            raise ArtifactReadError(path, "truncated atom table")
        return ((first & 0xE0) << 3) | payload[pos + 1], pos + 2
    raise ArtifactReadError(path, "atom length out of range")


def decode_atoms(kind: str, payload: bytes, path: str = "<memory>") -> list[str]:
    """Decode an atom table chunk.

    A non-negative count means one length byte per atom; a negative count
    means lengths use the compact term encoding.

    Args:
        kind: Chunk kind (``AtU8`` or ``Atom``).
        payload: Chunk payload.
        path: Artifact path, used in error messages.

    Returns:
        Atoms in table order. The first one is the unit's own name.

    Raises:
        ArtifactReadError: If the table is truncated or cannot be decoded.
    """
    if len(payload) < 4:
        raise ArtifactReadError(path, "truncated atom table")
    encoding = "utf-8" if kind == UTF8_ATOM_CHUNK else "latin-1"
    count = int.from_bytes(payload[:4], "big", signed=True)
    compact = count < 0
    count = abs(count)

    atoms: list[str] = []
    pos = 4
    for _ in range(count):
        if compact:
            length, pos = _compact_length(payload, pos, path)
        else:
            if pos >= len(payload):
                raise ArtifactReadError(path, "truncated atom table")
            length, pos = payload[pos], pos + 1
        if pos + length > len(payload):
            raise ArtifactReadError(path, "truncated atom table")
        try:
            atoms.append(payload[pos : pos + length].decode(encoding))
        except UnicodeDecodeError as e:
            raise ArtifactReadError(
                path,
                "invalid atom encoding",
                internal_details=str(e),
            ) from e
        pos += length

    return atoms


def parse_unit(data: bytes, path: str = "<memory>") -> CompiledUnit:
    """Parse a compiled unit from its stored bytes.

    Args:
        data: Bytes as stored on disk (optionally gzip-compressed).
        path: Artifact path, used in error messages and recorded on the unit.

    Returns:
        CompiledUnit with chunks, symbol table and uncompressed raw bytes.

    Raises:
        ArtifactReadError: If the artifact is corrupt or has no atom table.
    """
    raw = decompress(data, path)
    chunks = read_chunks(raw, path)

    if UTF8_ATOM_CHUNK in chunks:
        atoms = decode_atoms(UTF8_ATOM_CHUNK, chunks[UTF8_ATOM_CHUNK], path)
    elif LATIN1_ATOM_CHUNK in chunks:
        atoms = decode_atoms(LATIN1_ATOM_CHUNK, chunks[LATIN1_ATOM_CHUNK], path)
    else:
        raise ArtifactReadError(path, "missing atom table")
    if not atoms:
        raise ArtifactReadError(path, "empty atom table")

    identifier = atoms[0]
    logger.debug("unit_parsed", unit=identifier, chunks=len(chunks), atoms=len(atoms))
    return CompiledUnit(
        identifier=identifier,
        chunks=chunks,
        symbols=frozenset(atoms[1:]),
        raw=raw,
        path=path,
    )
