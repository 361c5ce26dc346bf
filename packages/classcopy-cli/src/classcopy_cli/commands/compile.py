"""classcopy compile command - Copy pre-built classes into the output directory."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import click

from classcopy_cli.commands.validate import DEFAULT_CONFIG_FILE, load_configuration
from classcopy_cli.output import info, print_json, setup_logging, success

if TYPE_CHECKING:
    from classcopy_core import CompilerConfiguration, CompilerResult


def _build_configuration(
    file_path: str | None,
    *,
    source_path: str | None,
    source_roots: tuple[str, ...],
    output_path: str | None,
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    verbose: bool,
) -> CompilerConfiguration:
    """Merge classcopy.yaml with command line overrides.

    The default file is only required when ``--output`` is not given. An
    explicit ``--file`` is always loaded.
    """
    from pydantic import ValidationError as PydanticValidationError

    from classcopy_cli.errors import handle_validation_error
    from classcopy_core import CompilerConfiguration
    from classcopy_core.schemas import SOURCE_PATH_ARGUMENT

    if file_path is None and (output_path is None or Path(DEFAULT_CONFIG_FILE).exists()):
        file_path = DEFAULT_CONFIG_FILE

    data: dict[str, Any] = {}
    if file_path is not None:
        data = load_configuration(file_path).model_dump()

    if source_path is not None:
        arguments = dict(data.get("custom_compiler_arguments") or {})
        arguments[SOURCE_PATH_ARGUMENT] = source_path
        data["custom_compiler_arguments"] = arguments
    if source_roots:
        data["source_locations"] = [Path(p) for p in source_roots]
    if output_path is not None:
        data["output_location"] = Path(output_path)
    if includes:
        data["includes"] = list(includes)
    if excludes:
        data["excludes"] = list(excludes)
    if verbose:
        data["verbose"] = True

    try:
        return CompilerConfiguration.model_validate(data)
    except PydanticValidationError as e:
        handle_validation_error(e, file_path or "command line options")


def _report(result: CompilerResult, *, verbose: bool, as_json: bool) -> None:
    if as_json:
        print_json(result.model_dump(mode="json"))
    elif verbose:
        for note in result.notes:
            info(str(note), markup=False)


@click.command("compile")
@click.option(
    "-f",
    "--file",
    "file_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to classcopy.yaml [default: ./classcopy.yaml]",
)
@click.option(
    "--source-path",
    "source_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory of pre-built class files (sets -sourcePath)",
)
@click.option(
    "--source-root",
    "source_roots",
    type=click.Path(file_okay=False),
    multiple=True,
    help="Source root directory, repeatable (replaces source_locations)",
)
@click.option(
    "-o",
    "--output",
    "output_path",
    type=click.Path(file_okay=False),
    default=None,
    help="Output directory for copied class files",
)
@click.option("--include", "includes", multiple=True, help="Source include pattern, repeatable")
@click.option("--exclude", "excludes", multiple=True, help="Source exclude pattern, repeatable")
@click.option("-v", "--verbose", is_flag=True, default=False, help="List every copied class file")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result as JSON")
def compile_cmd(
    file_path: str | None,
    source_path: str | None,
    source_roots: tuple[str, ...],
    output_path: str | None,
    includes: tuple[str, ...],
    excludes: tuple[str, ...],
    verbose: bool,
    as_json: bool,
) -> None:
    """Copy the pre-built classes of every declared source.

    Each Java source under the source roots is matched to the class files
    compiled from it under -sourcePath. Those classes are copied into the
    output directory, mirroring the source's package directory.

    Examples:

        classcopy compile

        classcopy compile --verbose --file build/classcopy.yaml

        classcopy compile --source-path prebuilt --source-root src -o target/classes
    """
    from classcopy_cli.errors import (
        EXIT_SYSTEM_ERROR,
        EXIT_USER_ERROR,
        CLIError,
        exit_with_error,
    )
    from classcopy_core import ClassCopyError, CopyCompiler

    try:
        setup_logging()
    except ValueError as e:
        raise CLIError(str(e)) from None

    config = _build_configuration(
        file_path,
        source_path=source_path,
        source_roots=source_roots,
        output_path=output_path,
        includes=includes,
        excludes=excludes,
        verbose=verbose,
    )

    try:
        result = CopyCompiler().compile(config)
    except ClassCopyError as e:
        if e.result is not None:
            _report(e.result, verbose=config.verbose, as_json=as_json)
        # Permission problems reading or writing class files are system errors
        exit_code = (
            EXIT_SYSTEM_ERROR if isinstance(e.__cause__, PermissionError) else EXIT_USER_ERROR
        )
        exit_with_error(f"Compilation failed: {e.user_message}", exit_code)

    _report(result, verbose=config.verbose, as_json=as_json)
    if not as_json:
        success(f"Copied {len(result.notes)} class file(s) to {config.output_location}")
