"""Compiler module for classcopy.

- AbstractCompiler / CompilerCapabilities / CompilerOutputStyle: Compiler interface
- CopyCompiler: Pass-through compiler copying pre-built class files
- read_class_header / ClassHeader: Class file header reader
- build_index / source_key: Artifact indexer
- resolve_sources / ResolvedSource: Source resolver
- plan_copies / execute / CopyPlanEntry: Copy executor
- scan_directory / match_path: Ant-style directory scanning
"""

from __future__ import annotations

from classcopy_core.compiler.base import (
    AbstractCompiler,
    CompilerCapabilities,
    CompilerOutputStyle,
)
from classcopy_core.compiler.classfile import (
    ClassFormatError,
    ClassHeader,
    read_class_header,
)
from classcopy_core.compiler.compiler import CopyCompiler
from classcopy_core.compiler.copier import CopyPlanEntry, execute, plan_copies
from classcopy_core.compiler.indexer import ArtifactIndex, build_index, source_key
from classcopy_core.compiler.resolver import ResolvedSource, resolve_sources
from classcopy_core.compiler.scanner import match_path, scan_directory

__all__: list[str] = [
    # Compiler interface
    "AbstractCompiler",
    "CompilerCapabilities",
    "CompilerOutputStyle",
    "CopyCompiler",
    # Class files
    "ClassFormatError",
    "ClassHeader",
    "read_class_header",
    # Pipeline stages
    "ArtifactIndex",
    "build_index",
    "source_key",
    "ResolvedSource",
    "resolve_sources",
    "CopyPlanEntry",
    "plan_copies",
    "execute",
    # Scanning
    "match_path",
    "scan_directory",
]
