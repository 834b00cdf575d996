"""Custom exception hierarchy for cutover-core.

This module defines the exception classes raised by the descriptor pipeline:
- CutoverError: Base exception for all cutover-related errors
- VersionMismatchError: Declared build version differs from the expected one
- ArtifactReadError: A compiled unit cannot be read or parsed
- ConfigurationError: A configuration file is missing or invalid
- DescriptorWriteError: The descriptor cannot be persisted

User-facing messages are safe to display. Technical details are logged
internally via structlog and never exposed to the user.
"""

from __future__ import annotations

import structlog

logger = structlog.get_logger(__name__)


class CutoverError(Exception):
    """Base exception for cutover.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but NEVER exposed to the user.

    Example:
        >>> raise CutoverError(
        ...     "Build directory is unusable",
        ...     internal_details="ebin/ missing under /builds/app-0.0.2",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize CutoverError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "cutover_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class VersionMismatchError(CutoverError):
    """Raised when a build directory declares a different version than expected.

    Fatal: raised before any comparison work is done.

    Attributes:
        directory: Build directory that was checked.
        expected: Version asserted by the caller.
        found: Version declared by the directory's metadata.

    Example:
        >>> raise VersionMismatchError("_build/prod/lib/shop", "0.0.2", "0.0.3")
        # User sees: "Incorrect version 0.0.3 in .app file under
        #            '_build/prod/lib/shop', expecting 0.0.2"
    """

    def __init__(self, directory: str, expected: str, found: str) -> None:
        """Initialize VersionMismatchError.

        Args:
            directory: Build directory that was checked.
            expected: Version asserted by the caller.
            found: Version declared by the directory's metadata.
        """
        super().__init__(
            f"Incorrect version {found} in .app file under '{directory}', expecting {expected}"
        )
        self.directory = directory
        self.expected = expected
        self.found = found


class ArtifactReadError(CutoverError):
    """Raised when a compiled unit or application file cannot be read or parsed.

    Use this exception when:
    - A listed unit's bytes cannot be read
    - The chunk container is truncated or malformed
    - The atom table is missing or corrupt
    - The application resource file has no version entry

    Attributes:
        path: Path of the offending artifact.
        reason: Short description of what went wrong.
    """

    def __init__(
        self,
        path: str,
        reason: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ArtifactReadError.

        Args:
            path: Path of the offending artifact.
            reason: Short description of what went wrong.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"Cannot read artifact {path}: {reason}",
            internal_details=internal_details,
        )
        self.path = path
        self.reason = reason


class ConfigurationError(CutoverError):
    """Raised when configuration file parsing or validation fails.

    Attributes:
        file_path: Path to the configuration file (if known).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with context.

        Args:
            user_message: Safe message to display to the user.
            file_path: Path to the configuration file (optional).
            internal_details: Technical details for internal logging only.
        """
        full_message = f"{user_message} (in {file_path})" if file_path else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.file_path = file_path


class DescriptorWriteError(CutoverError):
    """Raised when the descriptor cannot be written to its target location.

    Attributes:
        path: Target path of the descriptor.
        reason: Short description of what went wrong.
    """

    def __init__(self, path: str, reason: str) -> None:
        """Initialize DescriptorWriteError.

        Args:
            path: Target path of the descriptor.
            reason: Short description of what went wrong.
        """
        super().__init__(f"Cannot write descriptor to {path}: {reason}")
        self.path = path
        self.reason = reason
