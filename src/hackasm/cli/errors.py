"""
CLI Error Handling
==================

Maps exceptions raised while assembling to a message on stderr and a
process exit code. Usage errors detected by click itself (missing or extra
arguments, nonexistent INPUT_FILE) never reach this module; click exits
with status 2 for those.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from hackasm.errors import HackError


class ExitCode(IntEnum):
    """Exit codes of the hackasm command."""
    SUCCESS = 0
    ASSEMBLY_ERROR = 1   # Strict-mode assembly failure
    INVALID_ARGS = 2     # Usage error, unreadable input or unwritable output
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception raised by the command body and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Prefix for assembler errors (e.g., "Assembly")

    Raises:
        SystemExit: Always
    """
    if isinstance(error, HackError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.ASSEMBLY_ERROR)

    if isinstance(error, (FileNotFoundError, PermissionError, IsADirectoryError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    click.echo(f"Internal error: {error}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.INTERNAL_ERROR)
