"""cutover inspect command - Show the chunks and symbols of a compiled unit."""

from __future__ import annotations

from pathlib import Path

import click

from cutover_cli.output import print_unit


@click.command("inspect")
@click.argument("unit_file", type=click.Path(dir_okay=False))
def inspect_cmd(unit_file: str) -> None:
    """Show the chunk table and symbol table of a compiled unit.

    Useful to see why a unit does or does not show up in a descriptor.

    Examples:

        cutover inspect _build/prod/lib/shop/ebin/shop_cart.beam
    """
    from cutover_cli.errors import EXIT_SYSTEM_ERROR, CLIError, handle_cutover_error
    from cutover_core import CutoverError, parse_unit

    path = Path(unit_file)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise CLIError(
            f"Cannot read {unit_file}: {e.strerror}",
            exit_code=EXIT_SYSTEM_ERROR,
        ) from e

    try:
        unit = parse_unit(data, str(path))
    except CutoverError as e:
        handle_cutover_error(e)

    print_unit(unit)
