"""Shared pytest fixtures for cutover-core tests.

This module provides common fixtures used across unit, integration,
and contract tests.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from pathlib import Path

import pytest
import structlog

from cutover_core.schemas import BuildDirectory, ChangedPair, CompiledUnit
from testing.fixtures.artifacts import make_beam, write_build

APP_NAME = "shop"
V1 = "0.0.1"
V2 = "0.0.2"


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    The print logger resolves sys.stdout per call, so output lands in
    whichever stream capsys has installed.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


@pytest.fixture
def make_unit() -> Callable[..., CompiledUnit]:
    """Factory fixture for in-memory CompiledUnit instances.

    The raw bytes are derived from the chunks, so units with equal chunks
    compare byte-identical.

    Returns:
        Function creating a CompiledUnit from an identifier, chunks and symbols.
    """

    def _make(
        identifier: str,
        chunks: dict[str, bytes] | None = None,
        symbols: Iterable[str] = (),
    ) -> CompiledUnit:
        chunks = chunks if chunks is not None else {"Code": b"code", "Dbgi": b"dbg"}
        raw = b"".join(kind.encode() + payload for kind, payload in sorted(chunks.items()))
        return CompiledUnit(
            identifier=identifier,
            chunks=chunks,
            symbols=frozenset(symbols),
            raw=raw,
        )

    return _make


@pytest.fixture
def make_pair(make_unit: Callable[..., CompiledUnit]) -> Callable[..., ChangedPair]:
    """Factory fixture for ChangedPair instances from two chunk mappings."""

    def _make(
        identifier: str,
        old_chunks: dict[str, bytes],
        new_chunks: dict[str, bytes],
        new_symbols: Iterable[str] = (),
    ) -> ChangedPair:
        return ChangedPair(
            old=make_unit(identifier, old_chunks),
            new=make_unit(identifier, new_chunks, new_symbols),
        )

    return _make


@pytest.fixture
def make_build(make_unit: Callable[..., CompiledUnit]) -> Callable[..., BuildDirectory]:
    """Factory fixture for in-memory BuildDirectory instances."""

    def _make(version: str, units: Iterable[CompiledUnit]) -> BuildDirectory:
        return BuildDirectory(
            path=f"/builds/{APP_NAME}-{version}",
            name=APP_NAME,
            version=version,
            units={unit.identifier: unit for unit in units},
        )

    return _make


@pytest.fixture
def scenario_a(tmp_path: Path) -> tuple[Path, Path]:
    """Write the two builds of the reference scenario.

    V1 holds ``shop_cart`` and ``shop_pricing``. V2 changes ``shop_cart``
    (which references the unchanged ``shop_pricing``), keeps ``shop_pricing``
    byte-identical and adds ``shop_audit``.

    Returns:
        Tuple of (v1_dir, v2_dir).
    """
    pricing = make_beam("shop_pricing", ["erlang", "lists"])
    v1_dir = write_build(
        tmp_path / "v1" / APP_NAME,
        APP_NAME,
        V1,
        {
            "shop_cart": make_beam("shop_cart", ["shop_pricing", "ok"], code=b"cart-v1"),
            "shop_pricing": pricing,
        },
    )
    v2_dir = write_build(
        tmp_path / "v2" / APP_NAME,
        APP_NAME,
        V2,
        {
            "shop_cart": make_beam("shop_cart", ["shop_pricing", "ok"], code=b"cart-v2"),
            "shop_pricing": pricing,
            "shop_audit": make_beam("shop_audit", ["shop_cart"]),
        },
    )
    return v1_dir, v2_dir
