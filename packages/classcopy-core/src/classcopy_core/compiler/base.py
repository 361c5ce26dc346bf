"""Base class for compilers.

Defines the interface a build pipeline uses to drive a compiler, and the
source enumeration shared by every implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from classcopy_core.compiler.scanner import DEFAULT_INCLUDES, scan_directory
from classcopy_core.errors import ClassCopyError
from classcopy_core.observability import get_logger
from classcopy_core.schemas import CompilerConfiguration, CompilerResult


class CompilerOutputStyle(str, Enum):
    """How a compiler maps its inputs to outputs.

    Attributes:
        ONE_OUTPUT_FILE_PER_INPUT_FILE: Each source yields its own output(s)
        ONE_OUTPUT_FILE_FOR_ALL_INPUT_FILES: All sources yield one output
    """

    ONE_OUTPUT_FILE_PER_INPUT_FILE = "one-output-file-per-input-file"
    ONE_OUTPUT_FILE_FOR_ALL_INPUT_FILES = "one-output-file-for-all-input-files"


@dataclass(frozen=True)
class CompilerCapabilities:
    """Static description of a compiler.

    Attributes:
        output_style: How inputs map to outputs.
        input_file_ending: Extension of source files, e.g. ``.java``.
        output_file_ending: Extension of produced files, e.g. ``.class``.
        output_file: Name of the single output file, for compilers with
            ONE_OUTPUT_FILE_FOR_ALL_INPUT_FILES style.
    """

    output_style: CompilerOutputStyle
    input_file_ending: str
    output_file_ending: str
    output_file: str | None = None


class AbstractCompiler(ABC):
    """Base class for compilers.

    Subclasses declare their capabilities and implement perform_compile().

    Example:
        >>> class MyCompiler(AbstractCompiler):
        ...     capabilities = CompilerCapabilities(
        ...         CompilerOutputStyle.ONE_OUTPUT_FILE_PER_INPUT_FILE, ".src", ".out"
        ...     )
        ...     def perform_compile(self, config):
        ...         return CompilerResult()
        ...     def create_command_line(self, config):
        ...         return None
    """

    capabilities: CompilerCapabilities

    def compile(self, config: CompilerConfiguration) -> CompilerResult:
        """Run perform_compile() with logging around it.

        Raises:
            ClassCopyError: Whatever perform_compile() raises.
        """
        log = get_logger().bind(compiler=type(self).__name__)
        log.info("compile_started", output=str(config.output_location))
        try:
            result = self.perform_compile(config)
        except ClassCopyError as e:
            log.error("compile_failed", error=e.user_message, error_type=type(e).__name__)
            raise
        log.info("compile_completed", success=result.success, messages=len(result.messages))
        return result

    @abstractmethod
    def perform_compile(self, config: CompilerConfiguration) -> CompilerResult:
        """Compile the sources described by config."""

    @abstractmethod
    def create_command_line(self, config: CompilerConfiguration) -> list[str] | None:
        """Build the command line of an external compiler process, if any."""

    @property
    def output_style(self) -> CompilerOutputStyle:
        return self.capabilities.output_style

    @property
    def input_file_ending(self) -> str:
        return self.capabilities.input_file_ending

    @property
    def output_file_ending(self) -> str:
        return self.capabilities.output_file_ending

    def get_source_files_for_source_root(
        self,
        config: CompilerConfiguration,
        source_root: Path | str,
    ) -> list[Path]:
        """List the source files below one source root.

        Applies the configured include/exclude patterns (default include
        ``**/**``) and keeps only files ending with the input file ending.

        Args:
            config: Compiler configuration with include/exclude patterns.
            source_root: Existing source root directory.

        Returns:
            Sorted source file paths (source_root joined with relative path).

        Raises:
            FileNotFoundError: If source_root does not exist.
        """
        root = Path(source_root)
        includes = config.includes or list(DEFAULT_INCLUDES)
        relatives = scan_directory(root, includes=includes, excludes=config.excludes)
        return [root / r for r in relatives if r.endswith(self.input_file_ending)]

    def get_source_files(self, config: CompilerConfiguration) -> list[Path]:
        """List the source files of every existing source root, in root order."""
        sources: list[Path] = []
        for root in config.source_locations:
            if root.is_dir():
                sources.extend(self.get_source_files_for_source_root(config, root))
        return sources
