"""classcopy-core: Pass-through compiler for pre-built class files.

This package provides:
- CopyCompiler: Satisfies a compile step by copying already compiled classes
- CompilerConfiguration: Pydantic schema for classcopy.yaml
- CompilerResult / CompilerMessage: Outcome of a compile run
- Error hierarchy rooted at ClassCopyError
"""

from __future__ import annotations

__version__ = "0.1.0"

from classcopy_core.compiler import (
    AbstractCompiler,
    ClassHeader,
    CompilerCapabilities,
    CompilerOutputStyle,
    CopyCompiler,
    build_index,
    read_class_header,
    resolve_sources,
)
from classcopy_core.errors import (
    ArtifactCopyError,
    ArtifactReadError,
    ClassCopyError,
    CompilationError,
    ConfigurationError,
    DirectoryCreationError,
    DuplicateArtifactNameError,
    MissingArtifactsForSourceError,
)
from classcopy_core.observability import configure_logging, get_logger
from classcopy_core.schemas import (
    CompilerConfiguration,
    CompilerMessage,
    CompilerResult,
    MessageKind,
)

__all__ = [
    "__version__",
    # Compiler
    "AbstractCompiler",
    "CompilerCapabilities",
    "CompilerOutputStyle",
    "CopyCompiler",
    "ClassHeader",
    "build_index",
    "read_class_header",
    "resolve_sources",
    # Errors
    "ClassCopyError",
    "ConfigurationError",
    "CompilationError",
    "ArtifactReadError",
    "DuplicateArtifactNameError",
    "MissingArtifactsForSourceError",
    "DirectoryCreationError",
    "ArtifactCopyError",
    # Logging
    "configure_logging",
    "get_logger",
    # Schemas
    "CompilerConfiguration",
    "CompilerMessage",
    "CompilerResult",
    "MessageKind",
]
