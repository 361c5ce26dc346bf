"""classcopy validate command - Validate classcopy.yaml."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from classcopy_cli.output import success, warning

if TYPE_CHECKING:
    from classcopy_core import CompilerConfiguration

DEFAULT_CONFIG_FILE = "./classcopy.yaml"


def load_configuration(file_path: str) -> CompilerConfiguration:
    """Load classcopy.yaml, converting every failure into a CLIError.

    Args:
        file_path: Path to the YAML configuration.

    Returns:
        Validated CompilerConfiguration.

    Raises:
        CLIError: Exit code 2 if the file is missing or unreadable, exit
            code 1 if it is not valid YAML or not a valid configuration.
    """
    # Import here to avoid heavy imports at CLI startup
    from pydantic import ValidationError as PydanticValidationError
    import yaml

    from classcopy_cli.errors import (
        CLIError,
        handle_file_not_found,
        handle_permission_error,
        handle_validation_error,
        handle_yaml_error,
    )
    from classcopy_core import CompilerConfiguration, ConfigurationError

    if not Path(file_path).exists():
        handle_file_not_found(file_path)

    try:
        return CompilerConfiguration.from_yaml(file_path)
    except PermissionError:
        handle_permission_error(file_path, "read")
    except yaml.YAMLError as e:
        handle_yaml_error(e, file_path)
    except PydanticValidationError as e:
        handle_validation_error(e, file_path)
    except ConfigurationError as e:
        raise CLIError(f"Invalid configuration in {file_path}: {e.user_message}") from None


@click.command()
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(dir_okay=False),
    default=DEFAULT_CONFIG_FILE,
    help="Path to classcopy.yaml [default: ./classcopy.yaml]",
)
def validate(file_path: str) -> None:
    """Validate classcopy.yaml configuration.

    Checks the file against the configuration schema and warns about
    directories that do not exist yet.

    Examples:

        classcopy validate

        classcopy validate --file build/classcopy.yaml
    """
    config = load_configuration(file_path)

    source_path = config.source_path
    if source_path is None:
        warning("No -sourcePath configured; compile will fail")
    elif not source_path.is_dir():
        warning(f"Pre-built class directory does not exist: {source_path}")

    for root in config.source_locations:
        if not root.is_dir():
            warning(f"Source root does not exist and will be skipped: {root}")

    success("Configuration valid")
