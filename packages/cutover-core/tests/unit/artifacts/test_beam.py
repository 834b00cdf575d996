"""Unit tests for the BEAM chunk container reader."""

from __future__ import annotations

import gzip

import pytest

from cutover_core.artifacts.beam import decode_atoms, parse_unit, read_chunks
from cutover_core.errors import ArtifactReadError
from testing.fixtures.artifacts import encode_atoms, encode_container, make_beam


class TestReadChunks:
    """Tests for read_chunks."""

    def test_reads_all_chunks(self) -> None:
        """Every chunk should be returned keyed by kind."""
        data = encode_container({"AtU8": b"\x00\x00\x00\x00", "Code": b"abcde", "Dbgi": b"xy"})
        chunks = read_chunks(data)
        assert chunks == {"AtU8": b"\x00\x00\x00\x00", "Code": b"abcde", "Dbgi": b"xy"}

    def test_padding_is_not_part_of_payload(self) -> None:
        """Payloads are cut at their declared size, not the padded size."""
        chunks = read_chunks(encode_container([("Code", b"a"), ("StrT", b"bcd")]))
        assert chunks["Code"] == b"a"
        assert chunks["StrT"] == b"bcd"

    def test_empty_container(self) -> None:
        """A container with no chunks is valid."""
        assert read_chunks(encode_container({})) == {}

    def test_truncated_header(self) -> None:
        """Fewer than 12 bytes cannot be a container."""
        with pytest.raises(ArtifactReadError, match="truncated header"):
            read_chunks(b"FOR1\x00")

    def test_wrong_magic(self) -> None:
        """Files that are not FOR1/BEAM containers are rejected."""
        with pytest.raises(ArtifactReadError, match="not a BEAM"):
            read_chunks(b"FOR1\x00\x00\x00\x04AIFF")

    def test_truncated_container(self) -> None:
        """A form size larger than the data is rejected."""
        data = encode_container({"Code": b"abcdefgh"})
        with pytest.raises(ArtifactReadError, match="truncated container"):
            read_chunks(data[:-4])

    def test_truncated_chunk(self) -> None:
        """A chunk size running past the form end is rejected."""
        body = b"BEAM" + b"Code" + (100).to_bytes(4, "big") + b"abcd"
        data = b"FOR1" + len(body).to_bytes(4, "big") + body
        with pytest.raises(ArtifactReadError, match="truncated 'Code' chunk"):
            read_chunks(data)

    def test_duplicate_chunk(self) -> None:
        """Two chunks of the same kind are rejected."""
        data = encode_container([("Code", b"a"), ("Code", b"b")])
        with pytest.raises(ArtifactReadError, match="duplicate 'Code'"):
            read_chunks(data)


class TestDecodeAtoms:
    """Tests for decode_atoms."""

    def test_classic_encoding(self) -> None:
        """One length byte per atom."""
        payload = encode_atoms(["shop_cart", "shop_pricing", "ok"])
        assert decode_atoms("AtU8", payload) == ["shop_cart", "shop_pricing", "ok"]

    def test_compact_encoding(self) -> None:
        """Negative count selects compact tagged lengths, short and long."""
        long_atom = "a" * 40
        payload = encode_atoms(["shop_cart", long_atom, "ok"], compact=True)
        assert decode_atoms("AtU8", payload) == ["shop_cart", long_atom, "ok"]

    def test_utf8_atoms(self) -> None:
        """AtU8 atoms are decoded as UTF-8."""
        payload = encode_atoms(["shop", "señal"])
        assert decode_atoms("AtU8", payload) == ["shop", "señal"]

    def test_latin1_atoms(self) -> None:
        """Legacy Atom chunks are decoded as Latin-1."""
        payload = encode_atoms(["shop", "señal"], latin1=True)
        assert decode_atoms("Atom", payload) == ["shop", "señal"]

    def test_truncated_table(self) -> None:
        """A table cut short is rejected."""
        payload = encode_atoms(["shop_cart", "shop_pricing"])
        with pytest.raises(ArtifactReadError, match="truncated atom table"):
            decode_atoms("AtU8", payload[:-3])

    def test_truncated_count(self) -> None:
        """A table shorter than its count field is rejected."""
        with pytest.raises(ArtifactReadError, match="truncated atom table"):
            decode_atoms("AtU8", b"\x00\x00")

    def test_invalid_utf8(self) -> None:
        """Undecodable atom bytes are rejected."""
        payload = b"\x00\x00\x00\x01\x02\xff\xfe"
        with pytest.raises(ArtifactReadError, match="invalid atom encoding"):
            decode_atoms("AtU8", payload)


class TestParseUnit:
    """Tests for parse_unit."""

    def test_identifier_and_symbols(self) -> None:
        """The first atom names the unit; the rest form its symbol table."""
        unit = parse_unit(make_beam("shop_cart", ["shop_pricing", "ok", "shop_cart"]))
        assert unit.identifier == "shop_cart"
        assert unit.symbols == frozenset({"shop_pricing", "ok"})

    def test_chunks_and_raw(self) -> None:
        """Chunks are exposed by kind and raw holds the container bytes."""
        data = make_beam("shop_cart", code=b"code!")
        unit = parse_unit(data, "ebin/shop_cart.beam")
        assert unit.chunk("Code") == b"code!"
        assert unit.chunk("Dbgi") is not None
        assert unit.chunk("Docs") is None
        assert unit.raw == data
        assert unit.path == "ebin/shop_cart.beam"

    def test_compressed_unit(self) -> None:
        """Gzip-compressed units parse to the same raw bytes."""
        data = make_beam("shop_cart", ["shop_pricing"])
        unit = parse_unit(gzip.compress(data))
        assert unit.identifier == "shop_cart"
        assert unit.raw == data

    def test_corrupt_compressed_unit(self) -> None:
        """A broken gzip stream is an ArtifactReadError."""
        with pytest.raises(ArtifactReadError, match="corrupt compressed"):
            parse_unit(b"\x1f\x8b\x08\x00garbage")

    def test_legacy_atom_chunk(self) -> None:
        """Units with only a Latin-1 Atom chunk are supported."""
        data = encode_container({"Atom": encode_atoms(["old_mod", "lists"], latin1=True)})
        unit = parse_unit(data)
        assert unit.identifier == "old_mod"
        assert unit.symbols == frozenset({"lists"})

    def test_missing_atom_table(self) -> None:
        """A unit without atom table cannot be identified."""
        with pytest.raises(ArtifactReadError, match="missing atom table"):
            parse_unit(encode_container({"Code": b"abcd"}))

    def test_empty_atom_table(self) -> None:
        """A unit with an empty atom table cannot be identified."""
        with pytest.raises(ArtifactReadError, match="empty atom table"):
            parse_unit(encode_container({"AtU8": encode_atoms([])}))
