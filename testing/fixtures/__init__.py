"""Shared test fixtures for cutover packages.

Exports:
    Compiled-unit fixtures:
        make_beam: Build a compiled unit's bytes
        encode_atoms: Encode an atom table payload
        encode_container: Encode chunks into a container
        write_build: Write an application build directory
        app_file_content: Render an application resource file

Usage:
    ```python
    from testing.fixtures.artifacts import make_beam, write_build

    write_build(tmp_path / "v1", "shop", "0.0.1", {"shop_cart": make_beam("shop_cart")})
    ```
"""

from __future__ import annotations

from testing.fixtures.artifacts import (
    app_file_content,
    encode_atoms,
    encode_container,
    make_beam,
    write_build,
)

__all__ = [
    "app_file_content",
    "encode_atoms",
    "encode_container",
    "make_beam",
    "write_build",
]
