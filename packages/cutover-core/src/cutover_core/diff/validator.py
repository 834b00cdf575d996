"""Build version validation."""

from __future__ import annotations

from pathlib import Path

import structlog

from cutover_core.artifacts import ArtifactStore
from cutover_core.errors import VersionMismatchError

logger = structlog.get_logger(__name__)


def validate_version(store: ArtifactStore, directory: str | Path, expected: str) -> str:
    """Confirm a build directory declares the expected version.

    Args:
        store: Artifact store for the application.
        directory: Application directory to check.
        expected: Version asserted by the caller.

    Returns:
        The validated version.

    Raises:
        VersionMismatchError: If the declared version differs from ``expected``.
        ArtifactReadError: If the application resource file cannot be read.
    """
    found = store.read_version(directory)
    if found != expected:
        raise VersionMismatchError(str(directory), expected, found)
    logger.debug("version_validated", directory=str(directory), version=found)
    return found
