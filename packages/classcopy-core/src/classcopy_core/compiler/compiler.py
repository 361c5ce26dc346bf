"""Pass-through "copy" compiler.

Instead of compiling Java sources, CopyCompiler locates the class files that
were already compiled from them (for example by an annotation processor run
elsewhere) and copies them into the compile output directory, so a build
expecting a compile step is satisfied by pre-built classes.

The run is a single linear pass:
1. Index every class file under ``-sourcePath`` by source key
2. Resolve the declared source files of each existing source root
3. Copy each source's classes into the mirrored output directory
"""

from __future__ import annotations

from classcopy_core.compiler.base import (
    AbstractCompiler,
    CompilerCapabilities,
    CompilerOutputStyle,
)
from classcopy_core.compiler.copier import execute
from classcopy_core.compiler.indexer import build_index
from classcopy_core.compiler.resolver import resolve_sources
from classcopy_core.errors import ClassCopyError, ConfigurationError
from classcopy_core.schemas import (
    SOURCE_PATH_ARGUMENT,
    CompilerConfiguration,
    CompilerMessage,
    CompilerResult,
    MessageKind,
)


class CopyCompiler(AbstractCompiler):
    """Compile by copying pre-built class files.

    Example:
        >>> config = CompilerConfiguration(
        ...     source_locations=[Path("src/main/java")],
        ...     output_location=Path("target/classes"),
        ...     custom_compiler_arguments={"-sourcePath": "prebuilt/classes"},
        ... )
        >>> result = CopyCompiler().compile(config)
        >>> result.success
        True
    """

    capabilities = CompilerCapabilities(
        output_style=CompilerOutputStyle.ONE_OUTPUT_FILE_PER_INPUT_FILE,
        input_file_ending=".java",
        output_file_ending=".class",
        output_file=None,
    )

    def perform_compile(self, config: CompilerConfiguration) -> CompilerResult:
        """Copy the pre-built classes of every declared source.

        Args:
            config: Configuration carrying ``-sourcePath``, the source roots
                and the output location.

        Returns:
            Successful CompilerResult with one note per copied class file.

        Raises:
            ConfigurationError: If ``-sourcePath`` is not configured.
            CompilationError: On the first indexing or copy failure. The
                partial result (notes so far plus the error) is attached as
                ``result``.
        """
        scan_root = config.source_path
        if scan_root is None:
            raise ConfigurationError(
                "Copy compiler needs the directory of pre-built classes",
                field_path=f"custom_compiler_arguments.{SOURCE_PATH_ARGUMENT}",
            )

        messages: list[CompilerMessage] = []
        try:
            index = build_index(scan_root)
            sources = resolve_sources(config, self)
            execute(
                sources,
                index,
                config.output_location,
                messages=messages,
                scan_root=scan_root,
            )
        except ClassCopyError as e:
            messages.append(CompilerMessage(message=e.user_message, kind=MessageKind.ERROR))
            e.result = CompilerResult(success=False, messages=messages)
            raise

        return CompilerResult(success=True, messages=messages)

    def create_command_line(self, config: CompilerConfiguration) -> list[str] | None:
        """No external process is involved."""
        return None
