"""CLI error handling for cutover-cli.

This module wraps cutover-core exceptions into user-friendly messages
with appropriate exit codes.
"""

from __future__ import annotations

from typing import NoReturn

import click

from cutover_cli.output import error
from cutover_core.errors import ArtifactReadError, CutoverError, DescriptorWriteError

# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (version mismatch, bad configuration)
EXIT_SYSTEM_ERROR = 2  # System error (unreadable artifact, write failure)


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def exit_code_for(err: CutoverError) -> int:
    """Map a cutover-core error to a CLI exit code.

    Version mismatches and configuration errors are user errors; unreadable
    artifacts and failed writes are system errors.
    """
    if isinstance(err, (ArtifactReadError, DescriptorWriteError)):
        return EXIT_SYSTEM_ERROR
    return EXIT_USER_ERROR


def handle_cutover_error(err: CutoverError) -> NoReturn:
    """Re-raise a cutover-core error as a CLIError.

    Args:
        err: Error raised by the core pipeline.

    Raises:
        CLIError: Always raises with the user message and mapped exit code.
    """
    raise CLIError(err.user_message, exit_code=exit_code_for(err)) from err
