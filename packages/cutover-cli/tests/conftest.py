"""Shared test fixtures for cutover-cli tests.

Provides CliRunner fixtures and build directory helpers
for testing CLI commands.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

from click.testing import CliRunner
import pytest
from rich.console import Console
import structlog

from cutover_cli import output
from testing.fixtures.artifacts import make_beam, write_build

APP_NAME = "shop"
CONFIG_FILENAME = "cutover.yaml"


@pytest.fixture(autouse=True)
def wide_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """Replace the shared console with a wide, colorless one.

    Long temporary paths would otherwise be wrapped at 80 columns.
    """
    console = Console(width=400, no_color=True, force_terminal=False)
    monkeypatch.setattr(output, "console", console)
    return console


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """Restore structlog defaults after commands reconfigure logging."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner.

    Returns:
        CliRunner instance for testing CLI commands.
    """
    return CliRunner()


@pytest.fixture
def builds(tmp_path: Path) -> tuple[Path, Path]:
    """Write two builds of ``shop``.

    V2 changes ``shop_cart``, rebuilds ``shop_tax`` with new debug info only,
    adds ``shop_audit`` and drops ``shop_legacy``.

    Returns:
        Tuple of (v1_dir, v2_dir).
    """
    v1_dir = write_build(
        tmp_path / "v1" / APP_NAME,
        APP_NAME,
        "0.0.1",
        {
            "shop_cart": make_beam("shop_cart", ["shop_tax"], code=b"cart-1"),
            "shop_tax": make_beam("shop_tax", dbgi=b"debug-1"),
            "shop_legacy": make_beam("shop_legacy"),
        },
    )
    v2_dir = write_build(
        tmp_path / "v2" / APP_NAME,
        APP_NAME,
        "0.0.2",
        {
            "shop_cart": make_beam("shop_cart", ["shop_tax"], code=b"cart-2"),
            "shop_tax": make_beam("shop_tax", dbgi=b"debug-2"),
            "shop_audit": make_beam("shop_audit", ["shop_cart"]),
        },
    )
    return v1_dir, v2_dir


@pytest.fixture
def make_args(builds: tuple[Path, Path]) -> list[str]:
    """Positional arguments of ``cutover make`` for the ``builds`` fixture."""
    v1_dir, v2_dir = builds
    return [APP_NAME, "0.0.1", "0.0.2", str(v1_dir), str(v2_dir)]
