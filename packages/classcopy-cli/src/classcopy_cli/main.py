"""CLI entry point for classcopy.

This module defines the main CLI group. Subcommands are loaded lazily so
``classcopy --help`` does not import the compiler.
"""

from __future__ import annotations

from collections.abc import Mapping
import importlib
from typing import Any

import click
import rich_click as rclick

from classcopy_cli import __version__
from classcopy_cli.output import set_no_color

rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def load_command(target: str) -> click.Command:
    """Import a command from a ``"package.module:attribute"`` reference.

    Raises:
        TypeError: If the attribute is not a click command.
    """
    module_name, _, attr_name = target.partition(":")
    command = getattr(importlib.import_module(module_name), attr_name)
    if not isinstance(command, click.Command):
        raise TypeError(f"{target} is not a click command")
    return command


class LazyGroup(rclick.RichGroup):
    """Rich-click group whose subcommands are imported on first lookup.

    ``classcopy --help`` only lists names, so classcopy_core is not imported
    until a command actually runs. A loaded command is registered on the
    group and later lookups skip the import.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: Mapping[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = dict(lazy_subcommands or {})

    def list_commands(self, ctx: click.Context) -> list[str]:
        return sorted({*super().list_commands(ctx), *self.lazy_subcommands})

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        command = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if command is None and cmd_name in self.lazy_subcommands:
            command = load_command(self.lazy_subcommands[cmd_name])
            self.add_command(command, cmd_name)
        return command


LAZY_COMMANDS = {
    "compile": "classcopy_cli.commands.compile:compile_cmd",
    "validate": "classcopy_cli.commands.validate:validate",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="classcopy")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
def cli() -> None:
    """classcopy - satisfy a Java compile step with pre-built classes.

    Copies the class files compiled from each declared source into the
    compile output directory, driven by a classcopy.yaml configuration.

    **Getting Started:**

    - `classcopy validate` - Validate your configuration
    - `classcopy compile` - Copy pre-built classes into the output directory
    """


if __name__ == "__main__":
    cli()
