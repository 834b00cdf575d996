"""Descriptor serialization and persistence.

T018: Implement appup and JSON descriptor writers

The appup format is an Erlang term consumed by the release installer::

    {"0.0.2",
     [{"0.0.1",
       [{add_module,shop_audit},
        {load_module,shop_cart,[shop_pricing]}]}],
     [{"0.0.1",
       [{load_module,shop_cart,[shop_pricing]},
        {delete_module,shop_audit}]}]}.

Output is byte-stable for identical descriptors. Files are written through a
temporary file and an atomic rename, so a failed write never leaves a partial
descriptor behind. The published file gets the mode a plain write would give
it under the current umask.
"""

from __future__ import annotations

import os
from pathlib import Path
import re
import tempfile

import structlog

from cutover_core.artifacts import EBIN_DIR
from cutover_core.config import OutputFormat
from cutover_core.errors import DescriptorWriteError
from cutover_core.schemas import Descriptor, Instruction, LoadUnit

logger = structlog.get_logger(__name__)

APPUP_SUFFIX = ".appup"
JSON_SUFFIX = ".appup.json"

_BARE_ATOM = re.compile(r"[a-z][A-Za-z0-9_@]*")

# Reserved words cannot appear as unquoted atoms
_RESERVED_WORDS = frozenset(
    {
        "after", "and", "andalso", "band", "begin", "bnot", "bor", "bsl", "bsr",
        "bxor", "case", "catch", "cond", "div", "else", "end", "fun", "if", "let",
        "maybe", "not", "of", "or", "orelse", "receive", "rem", "try", "when", "xor",
    }
)  # fmt: skip


def _published_mode() -> int:
    """Return the mode a plainly created file would get under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def format_atom(name: str) -> str:
    """Render an atom, quoting it when it is not a bare-safe name.

    Example:
        >>> format_atom("shop_cart"), format_atom("Elixir.Shop.Cart")
        ('shop_cart', "'Elixir.Shop.Cart'")
    """
    if _BARE_ATOM.fullmatch(name) and name not in _RESERVED_WORDS:
        return name
    escaped = name.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def format_string(value: str) -> str:
    """Render a string as a double-quoted charlist literal."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_instruction(instruction: Instruction) -> str:
    """Render one instruction as an appup tuple."""
    unit = format_atom(instruction.unit)
    if isinstance(instruction, LoadUnit):
        deps = ",".join(format_atom(dep) for dep in instruction.dependencies)
        return f"{{{instruction.op},{unit},[{deps}]}}"
    return f"{{{instruction.op},{unit}}}"


def _format_direction(version: str, instructions: tuple[Instruction, ...]) -> str:
    if not instructions:
        return f"[{{{format_string(version)},[]}}]"
    body = ",\n    ".join(format_instruction(i) for i in instructions)
    return f"[{{{format_string(version)},\n   [{body}]}}]"


def render_appup(descriptor: Descriptor) -> str:
    """Render a descriptor as appup term text.

    Args:
        descriptor: Assembled descriptor.

    Returns:
        The appup file content, terminated by ``.`` and a newline.
    """
    upgrade = _format_direction(descriptor.from_version, descriptor.upgrade_instructions)
    downgrade = _format_direction(descriptor.from_version, descriptor.downgrade_instructions)
    return f"{{{format_string(descriptor.to_version)},\n {upgrade},\n {downgrade}}}.\n"


def render_json(descriptor: Descriptor) -> str:
    """Render a descriptor as indented JSON."""
    return descriptor.model_dump_json(indent=2) + "\n"


def render(descriptor: Descriptor, fmt: OutputFormat = "appup") -> str:
    """Render a descriptor in the requested format."""
    return render_json(descriptor) if fmt == "json" else render_appup(descriptor)


def descriptor_path(target_dir: str | Path, name: str, fmt: OutputFormat = "appup") -> Path:
    """Return where the descriptor of application ``name`` is written.

    Args:
        target_dir: Target version application directory.
        name: Application name.
        fmt: Output format.

    Returns:
        ``<target_dir>/ebin/<name>.appup`` (or ``.appup.json``).
    """
    suffix = JSON_SUFFIX if fmt == "json" else APPUP_SUFFIX
    return Path(target_dir) / EBIN_DIR / f"{name}{suffix}"


def write_descriptor(
    descriptor: Descriptor,
    target_dir: str | Path,
    name: str,
    fmt: OutputFormat = "appup",
) -> Path:
    """Serialize a descriptor and write it atomically.

    Args:
        descriptor: Assembled descriptor.
        target_dir: Target version application directory.
        name: Application name.
        fmt: Output format.

    Returns:
        Path of the written file.

    Raises:
        DescriptorWriteError: If the file cannot be written.
    """
    path = descriptor_path(target_dir, name, fmt)
    content = render(descriptor, fmt)

    tmp_name: str | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(content)
        os.chmod(tmp_name, _published_mode())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise DescriptorWriteError(str(path), e.strerror or str(e)) from e

    logger.info("descriptor_written", path=str(path), format=fmt, bytes=len(content))
    return path
