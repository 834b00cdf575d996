"""Rich console output utilities for cutover-cli.

This module provides formatted console output with Rich,
supporting colored success/error/warning messages and
respecting NO_COLOR environment variable.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from cutover_core.schemas import CompiledUnit, Descriptor, Instruction

# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None

_OP_STYLES = {
    "add_module": "green",
    "load_module": "yellow",
    "delete_module": "red",
}


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Wrote ebin/shop.appup")
        ✓ Wrote ebin/shop.appup
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("Incorrect version 0.0.3 in .app file")
        ✗ Incorrect version 0.0.3 in .app file
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(message, **kwargs)


def print_instructions(title: str, instructions: tuple[Instruction, ...]) -> None:
    """Print one direction's instruction sequence as a table.

    Args:
        title: Table title (e.g., "Upgrade 0.0.1 -> 0.0.2").
        instructions: Instruction sequence to display.
    """
    table = Table(title=title, show_header=True, header_style="bold")
    table.add_column("#", justify="right", width=4)
    table.add_column("Instruction", min_width=14)
    table.add_column("Unit", min_width=20)
    table.add_column("Depends on", min_width=20)

    for index, instruction in enumerate(instructions, start=1):
        deps = getattr(instruction, "dependencies", ())
        table.add_row(
            str(index),
            Text(instruction.op, style=_OP_STYLES[instruction.op]),
            instruction.unit,
            ", ".join(deps) if deps else "-",
        )

    if not instructions:
        table.add_row("-", Text("none", style="dim"), "-", "-")
    console.print(table)


def print_descriptor(descriptor: Descriptor) -> None:
    """Print both directions of a descriptor."""
    print_instructions(
        f"Upgrade {descriptor.from_version} -> {descriptor.to_version}",
        descriptor.upgrade_instructions,
    )
    print_instructions(
        f"Downgrade {descriptor.to_version} -> {descriptor.from_version}",
        descriptor.downgrade_instructions,
    )


def print_unit(unit: CompiledUnit) -> None:
    """Print the chunk table and symbol table of a compiled unit."""
    table = Table(title=f"Unit {unit.identifier}", show_header=True, header_style="bold")
    table.add_column("Chunk", width=6)
    table.add_column("Size", justify="right", width=10)

    for kind in sorted(unit.chunks):
        table.add_row(kind, str(len(unit.chunks[kind])))
    console.print(table)
    console.print(f"Symbols ({len(unit.symbols)}): {', '.join(sorted(unit.symbols)) or '-'}")


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
