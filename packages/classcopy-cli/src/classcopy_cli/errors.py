"""CLI error handling for classcopy-cli.

Translates configuration and compiler failures into user-facing messages and
exit codes. Expected failures become CLIError, which click reports and turns
into the process exit status.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
import yaml

from classcopy_cli.output import error

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Invalid configuration, failed compile
EXIT_SYSTEM_ERROR = 2  # Missing file, permissions


class CLIError(click.ClickException):
    """CLI exception carrying an exit code.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the message with rich formatting.

        Args:
            file: Output file (unused, for click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a pydantic ValidationError as one line per failing field.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - output_location: Field required"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def handle_yaml_error(err: yaml.YAMLError, file_path: str) -> NoReturn:
    """Raise a CLIError pointing at the YAML syntax problem.

    Raises:
        CLIError: Always.
    """
    error_msg = str(err)
    mark = getattr(err, "problem_mark", None)
    if mark is not None:
        problem = getattr(err, "problem", None)
        error_msg = f"YAML syntax error at line {mark.line + 1}, column {mark.column + 1}: {problem}"

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}")


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    """Raise a CLIError listing every invalid field.

    Raises:
        CLIError: Always.
    """
    raise CLIError(f"Invalid configuration in {file_path}:\n{format_pydantic_error(err)}")


def handle_file_not_found(file_path: str) -> NoReturn:
    """Raise a CLIError for a missing configuration file.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Create a classcopy.yaml, use --file to specify a path, "
        "or pass --source-path and --output.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_permission_error(path: str, operation: str = "access") -> NoReturn:
    """Raise a CLIError for a permission problem.

    Raises:
        CLIError: Always, with EXIT_SYSTEM_ERROR.
    """
    raise CLIError(
        f"Permission denied: Cannot {operation} {path}",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def exit_with_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print message and exit the process with exit_code."""
    error(message)
    sys.exit(exit_code)
