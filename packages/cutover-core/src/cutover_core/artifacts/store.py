"""Artifact store reader for application build directories.

T007: Implement ArtifactStore over ``<app dir>/ebin``

A build directory is an application directory holding an ``ebin/``
subdirectory with one ``<unit>.beam`` file per compiled unit and the
application resource file ``<name>.app``, whose ``{vsn, "..."}`` entry
declares the version. This is the only module that touches the filesystem
on the read side.
"""

from __future__ import annotations

import re
from pathlib import Path

import structlog

from cutover_core.artifacts.beam import parse_unit
from cutover_core.errors import ArtifactReadError
from cutover_core.schemas import BuildDirectory, CompiledUnit

logger = structlog.get_logger(__name__)

EBIN_DIR = "ebin"
UNIT_SUFFIX = ".beam"
APP_FILE_SUFFIX = ".app"

_VSN_PATTERN = re.compile(r"\{\s*vsn\s*,\s*\"((?:[^\"\\]|\\.)*)\"\s*\}")


class ArtifactStore:
    """Read versions and compiled units of one application.

    Attributes:
        name: Application name; selects the ``<name>.app`` resource file.

    Example:
        >>> store = ArtifactStore("shop")
        >>> store.read_version("_build/prod/lib/shop")
        '0.0.2'
        >>> build = store.load("_build/prod/lib/shop")
        >>> sorted(build.unit_ids)
        ['shop_cart', 'shop_pricing']
    """

    def __init__(self, name: str) -> None:
        """Initialize the store.

        Args:
            name: Application name.
        """
        self.name = name
        self._log = logger.bind(component="artifact_store", app=name)

    def ebin_dir(self, directory: str | Path) -> Path:
        """Return the ``ebin/`` directory of an application directory."""
        return Path(directory) / EBIN_DIR

    def read_version(self, directory: str | Path) -> str:
        """Read the version declared in the application resource file.

        Args:
            directory: Application directory.

        Returns:
            The declared version string.

        Raises:
            ArtifactReadError: If the file is missing or has no ``vsn`` entry.
        """
        app_file = self.ebin_dir(directory) / f"{self.name}{APP_FILE_SUFFIX}"
        try:
            content = app_file.read_text(encoding="utf-8")
        except OSError as e:
            raise ArtifactReadError(
                str(app_file),
                "application resource file is unreadable",
                internal_details=str(e),
            ) from e

        match = _VSN_PATTERN.search(content)
        if match is None:
            raise ArtifactReadError(str(app_file), "no vsn entry in application resource file")
        return match.group(1)

    def list_unit_ids(self, directory: str | Path) -> frozenset[str]:
        """List identifiers of all compiled units in a build directory.

        Args:
            directory: Application directory.

        Returns:
            File stems of all ``.beam`` files under ``ebin/``.

        Raises:
            ArtifactReadError: If ``ebin/`` cannot be listed.
        """
        ebin = self.ebin_dir(directory)
        if not ebin.is_dir():
            raise ArtifactReadError(str(ebin), "not a directory")
        return frozenset(p.stem for p in ebin.glob(f"*{UNIT_SUFFIX}") if p.is_file())

    def read_unit(self, directory: str | Path, unit_id: str) -> CompiledUnit:
        """Read and parse one compiled unit.

        Args:
            directory: Application directory.
            unit_id: Unit identifier (the ``.beam`` file stem).

        Returns:
            The parsed unit.

        Raises:
            ArtifactReadError: If the file is unreadable, corrupt, or names a
                different unit than its file name.
        """
        path = self.ebin_dir(directory) / f"{unit_id}{UNIT_SUFFIX}"
        try:
            data = path.read_bytes()
        except OSError as e:
            raise ArtifactReadError(
                str(path),
                "unit is unreadable",
                internal_details=str(e),
            ) from e

        unit = parse_unit(data, str(path))
        if unit.identifier != unit_id:
            raise ArtifactReadError(
                str(path),
                f"file declares unit '{unit.identifier}', expected '{unit_id}'",
            )
        return unit

    def load(self, directory: str | Path, version: str | None = None) -> BuildDirectory:
        """Read a whole build directory.

        All units are read eagerly, so a corrupt unit fails the load before any
        comparison work begins.

        Args:
            directory: Application directory.
            version: Already validated version. Read from disk if omitted.

        Returns:
            BuildDirectory holding every unit under ``ebin/``.

        Raises:
            ArtifactReadError: If any artifact cannot be read.
        """
        if version is None:
            version = self.read_version(directory)
        unit_ids = self.list_unit_ids(directory)
        units = {unit_id: self.read_unit(directory, unit_id) for unit_id in sorted(unit_ids)}
        self._log.info("build_loaded", directory=str(directory), version=version, units=len(units))
        return BuildDirectory(
            path=str(directory),
            name=self.name,
            version=version,
            units=units,
        )
