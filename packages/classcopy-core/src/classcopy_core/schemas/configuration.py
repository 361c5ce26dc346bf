"""CompilerConfiguration schema for classcopy.

Describes one compile invocation: where the pre-built class files live, which
source roots declare the compilation units, and where copies go.

The YAML form (``classcopy.yaml``) mirrors the model fields. ``source_path``
is accepted as a top-level shortcut for the ``-sourcePath`` custom argument.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml

from classcopy_core.errors import ConfigurationError

SOURCE_PATH_ARGUMENT = "-sourcePath"
"""Custom compiler argument naming the directory of pre-built class files."""

_PATH_FIELDS = ("output_location", "working_directory")


class CompilerConfiguration(BaseModel):
    """Configuration for a single compile run.

    Attributes:
        source_locations: Source root directories. Roots that do not exist
            are skipped at compile time.
        output_location: Root directory receiving the copied class files.
        working_directory: Working directory of the build (informational).
        custom_compiler_arguments: Compiler-specific arguments. The copy
            compiler reads ``-sourcePath`` from here.
        includes: Include patterns for source enumeration (Ant style).
            Empty means ``**/**``.
        excludes: Exclude patterns for source enumeration (Ant style).
        verbose: Report every copied class file.

    Example:
        >>> config = CompilerConfiguration(
        ...     source_locations=[Path("src/main/java")],
        ...     output_location=Path("target/classes"),
        ...     custom_compiler_arguments={"-sourcePath": "prebuilt/classes"},
        ... )
        >>> config.source_path
        PosixPath('prebuilt/classes')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_locations: list[Path] = Field(
        default_factory=list,
        description="Source root directories",
    )
    output_location: Path = Field(
        ...,
        description="Root directory receiving copied class files",
    )
    working_directory: Path | None = Field(
        default=None,
        description="Working directory of the build",
    )
    custom_compiler_arguments: dict[str, str] = Field(
        default_factory=dict,
        description="Compiler-specific arguments (e.g. -sourcePath)",
    )
    includes: list[str] = Field(
        default_factory=list,
        description="Include patterns for source enumeration",
    )
    excludes: list[str] = Field(
        default_factory=list,
        description="Exclude patterns for source enumeration",
    )
    verbose: bool = Field(
        default=False,
        description="Report every copied class file",
    )

    @field_validator("includes", "excludes")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Reject blank patterns."""
        for pattern in v:
            if not pattern.strip():
                raise ValueError("patterns must not be blank")
        return v

    @property
    def source_path(self) -> Path | None:
        """Directory holding the pre-built class files, if configured."""
        value = self.custom_compiler_arguments.get(SOURCE_PATH_ARGUMENT)
        return Path(value) if value else None

    @classmethod
    def from_yaml(cls, path: str | Path) -> CompilerConfiguration:
        """Load and validate a CompilerConfiguration from a YAML file.

        Relative paths in the file are resolved against the file's directory.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated CompilerConfiguration instance.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            ConfigurationError: If the document is not a mapping.
            pydantic.ValidationError: If schema validation fails.

        Example:
            >>> config = CompilerConfiguration.from_yaml("classcopy.yaml")
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: Any = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Configuration must be a mapping",
                file_path=str(path),
            )

        return cls.model_validate(_normalize(data, path.parent))


def _normalize(data: dict[str, Any], base_dir: Path) -> dict[str, Any]:
    """Apply the YAML shortcuts and resolve relative paths against base_dir."""
    data = dict(data)

    source_path = data.pop("source_path", None)
    if source_path is not None:
        arguments = dict(data.get("custom_compiler_arguments") or {})
        arguments[SOURCE_PATH_ARGUMENT] = str(base_dir / str(source_path))
        data["custom_compiler_arguments"] = arguments

    if isinstance(data.get("source_locations"), list):
        data["source_locations"] = [base_dir / str(p) for p in data["source_locations"]]

    for field_name in _PATH_FIELDS:
        if data.get(field_name) is not None:
            data[field_name] = base_dir / str(data[field_name])

    return data
