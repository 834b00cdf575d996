"""Unit tests for the change significance filter."""

from __future__ import annotations

from collections.abc import Callable

import pytest

from cutover_core.diff import changed_chunk_kinds, filter_significant, is_significant
from cutover_core.schemas import ChangedPair


class TestChangedChunkKinds:
    """Tests for changed_chunk_kinds."""

    def test_differing_content(self, make_pair: Callable[..., ChangedPair]) -> None:
        """Only chunks with different content are reported."""
        pair = make_pair(
            "a",
            {"Code": b"1", "Dbgi": b"x", "LitT": b"l"},
            {"Code": b"2", "Dbgi": b"y", "LitT": b"l"},
        )
        assert changed_chunk_kinds(pair) == frozenset({"Code", "Dbgi"})

    def test_kind_on_one_side_counts(self, make_pair: Callable[..., ChangedPair]) -> None:
        """A chunk kind present on one side only differs."""
        pair = make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"1", "Docs": b"x"})
        assert changed_chunk_kinds(pair) == frozenset({"Dbgi", "Docs"})


class TestIsSignificant:
    """Tests for is_significant."""

    def test_different_chunk_count(self, make_pair: Callable[..., ChangedPair]) -> None:
        """A different number of chunks is always significant."""
        pair = make_pair("a", {"Code": b"1"}, {"Code": b"1", "Dbgi": b"x"})
        assert is_significant(pair)

    def test_code_change(self, make_pair: Callable[..., ChangedPair]) -> None:
        """A changed code chunk is significant."""
        pair = make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"2", "Dbgi": b"x"})
        assert is_significant(pair)

    def test_code_and_debug_change(self, make_pair: Callable[..., ChangedPair]) -> None:
        """Debug info changing alongside code is still significant."""
        pair = make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"2", "Dbgi": b"y"})
        assert is_significant(pair)

    def test_debug_only_change(self, make_pair: Callable[..., ChangedPair]) -> None:
        """Only debug info changed: insignificant."""
        pair = make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"1", "Dbgi": b"y"})
        assert not is_significant(pair)

    def test_compile_info_is_never_a_difference(
        self, make_pair: Callable[..., ChangedPair]
    ) -> None:
        """Compile info alongside a debug-only change stays insignificant."""
        pair = make_pair(
            "a",
            {"Code": b"1", "Dbgi": b"x", "CInf": b"one"},
            {"Code": b"1", "Dbgi": b"y"},
        )
        assert changed_chunk_kinds(pair) == frozenset({"Dbgi"})
        assert not is_significant(pair)

    def test_debug_only_change_is_logged(
        self,
        make_pair: Callable[..., ChangedPair],
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Excluding a unit emits an informational notice naming it."""
        pair = make_pair(
            "shop_cart", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"1", "Dbgi": b"y"}
        )
        is_significant(pair)
        out = capsys.readouterr().out
        assert "unit_excluded" in out
        assert "shop_cart" in out
        assert "error" not in out.lower()

    def test_no_chunk_difference(self, make_pair: Callable[..., ChangedPair]) -> None:
        """Equal chunks (bytes differed elsewhere) are not significant."""
        pair = make_pair("a", {"Code": b"1"}, {"Code": b"1"})
        assert not is_significant(pair)

    def test_custom_ignored_chunks(self, make_pair: Callable[..., ChangedPair]) -> None:
        """Several chunk kinds can be configured as ignorable."""
        pair = make_pair(
            "a",
            {"Code": b"1", "Dbgi": b"x", "Docs": b"d1"},
            {"Code": b"1", "Dbgi": b"y", "Docs": b"d2"},
        )
        assert is_significant(pair)
        assert not is_significant(pair, frozenset({"Dbgi", "Docs"}))

    def test_empty_ignored_set(self, make_pair: Callable[..., ChangedPair]) -> None:
        """With nothing ignorable, any chunk difference is significant."""
        pair = make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"1", "Dbgi": b"y"})
        assert is_significant(pair, frozenset())


class TestFilterSignificant:
    """Tests for filter_significant."""

    def test_keeps_only_significant_pairs_in_order(
        self, make_pair: Callable[..., ChangedPair]
    ) -> None:
        """Insignificant pairs are dropped; order is preserved."""
        pairs = [
            make_pair("a", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"2", "Dbgi": b"x"}),
            make_pair("b", {"Code": b"1", "Dbgi": b"x"}, {"Code": b"1", "Dbgi": b"y"}),
            make_pair("c", {"Code": b"1"}, {"Code": b"1", "Line": b"l"}),
        ]
        assert [p.identifier for p in filter_significant(pairs)] == ["a", "c"]
