"""Console output for classcopy-cli.

Status lines go through a rich Console that honours both the ``NO_COLOR``
environment variable and the ``--no-color`` flag. Compiler logging is set up
here too, so commands share one place that decides what reaches the terminal.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console

LOG_LEVEL_ENV_VAR = "CLASSCOPY_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Console with colors disabled when requested.

    Args:
        no_color: If True, disable colored output. NO_COLOR is honoured too.

    Returns:
        Configured Console instance.
    """
    disable = no_color or _force_no_color
    return Console(force_terminal=False if disable else None, no_color=disable)


console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with a green checkmark.

    Example:
        >>> success("Copied 2 class files to target/classes")
        ✓ Copied 2 class files to target/classes
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with a red X.

    Example:
        >>> error("No compiled classes found for a/Main.java")
        ✗ No compiled classes found for a/Main.java
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with a yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print a plain informational message."""
    console.print(message, **kwargs)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print a mapping as highlighted JSON.

    Args:
        data: JSON-serializable mapping.
        **kwargs: Additional arguments passed to console.print_json().
    """
    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Replace the module console, enabling or disabling colors."""
    global console
    console = create_console(no_color=no_color)


def setup_logging() -> None:
    """Configure compiler logging from ``CLASSCOPY_LOG_LEVEL``.

    Log lines are human readable and default to warnings and above, so the
    console stays limited to status lines unless a user asks for more.

    Raises:
        ValueError: If the environment variable names an unknown level.
    """
    from classcopy_core import configure_logging

    level = os.environ.get(LOG_LEVEL_ENV_VAR, DEFAULT_LOG_LEVEL)
    configure_logging(log_level=level, json_format=False, add_timestamp=False)
