"""Custom exception hierarchy for classcopy-core.

This module defines the exception classes raised while copying pre-built
class files into a compile output directory:
- ClassCopyError: Base exception for all classcopy errors
- ConfigurationError: Raised when the compiler configuration is unusable
- CompilationError: Raised when a compile run fails part-way

Every error carries a user-facing message. Technical details (absolute paths,
underlying OS errors) are passed as ``internal_details`` and logged through
structlog instead of being shown to the user.

When a compile run fails after some notes were already emitted, the partial
CompilerResult is attached to the exception as ``result``.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from classcopy_core.schemas.result import CompilerResult

logger = structlog.get_logger(__name__)


class ClassCopyError(Exception):
    """Base exception for classcopy.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details. Logged, never displayed.

    Attributes:
        user_message: The message passed at construction.
        result: Partial CompilerResult of the failed run, if any.

    Example:
        >>> raise ClassCopyError(
        ...     "Compile failed",
        ...     internal_details="Permission denied: /out/a/B.class",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(user_message)
        self.user_message = user_message
        self.result: CompilerResult | None = None

        if internal_details:
            logger.error(
                "classcopy_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(ClassCopyError):
    """Raised when the compiler configuration is missing or invalid.

    Use this exception when:
    - The YAML configuration file cannot be parsed
    - The ``-sourcePath`` custom argument is missing
    - Field values fail validation

    Attributes:
        file_path: Path to the configuration file (if known).
        field_path: Dot-separated path to the offending field.

    Example:
        >>> raise ConfigurationError(
        ...     "Missing source path",
        ...     field_path="custom_compiler_arguments.-sourcePath",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        if context_parts:
            full_message = f"{user_message} ({', '.join(context_parts)})"
        else:
            full_message = user_message

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = file_path
        self.field_path = field_path


class CompilationError(ClassCopyError):
    """Raised when a compile run fails.

    Subclasses describe the specific failure. Any CompilationError aborts the
    whole run; artifacts copied before it stay on disk.
    """

    pass


class ArtifactReadError(CompilationError):
    """Raised when a class file cannot be read or its header cannot be parsed.

    A class file without a ``SourceFile`` attribute is reported the same way,
    since every class emitted by a real compiler carries one.

    Attributes:
        artifact_path: The class file that could not be indexed.
    """

    def __init__(
        self,
        artifact_path: Path | str,
        reason: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Cannot index class file {artifact_path}: {reason}",
            internal_details=internal_details,
        )
        self.artifact_path = Path(artifact_path)
        self.reason = reason


class DuplicateArtifactNameError(CompilationError):
    """Raised when two class files of one source would share an output name.

    Attributes:
        source: Relative path of the source file.
        candidates: Every class file indexed for that source.

    Example:
        >>> raise DuplicateArtifactNameError(
        ...     "a/Main.java", [Path("out/a/B.class"), Path("out2/a/B.class")]
        ... )
        # User sees: "a/Main.java resolves to multiple classes with the same
        #            name: out/a/B.class, out2/a/B.class"
    """

    def __init__(
        self,
        source: str,
        candidates: list[Path],
        *,
        internal_details: str | None = None,
    ) -> None:
        listing = ", ".join(str(c) for c in candidates)
        super().__init__(
            f"{source} resolves to multiple classes with the same name: {listing}",
            internal_details=internal_details,
        )
        self.source = source
        self.candidates = list(candidates)


class MissingArtifactsForSourceError(CompilationError):
    """Raised when a declared source file has no indexed class files.

    Attributes:
        source: Relative path of the source file.
        scan_root: Directory that was scanned for class files.
    """

    def __init__(
        self,
        source: str,
        scan_root: Path | str | None = None,
        *,
        internal_details: str | None = None,
    ) -> None:
        where = f" under {scan_root}" if scan_root is not None else ""
        super().__init__(
            f"No compiled classes found for {source}{where}",
            internal_details=internal_details,
        )
        self.source = source
        self.scan_root = Path(scan_root) if scan_root is not None else None


class DirectoryCreationError(CompilationError):
    """Raised when an output directory cannot be created.

    Attributes:
        directory: The directory that could not be created.
    """

    def __init__(
        self,
        directory: Path | str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Cannot create output directory {directory}",
            internal_details=internal_details,
        )
        self.directory = Path(directory)


class ArtifactCopyError(CompilationError):
    """Raised when a class file cannot be copied to its destination.

    Attributes:
        artifact_path: The class file being copied.
        destination: The target file path.
    """

    def __init__(
        self,
        artifact_path: Path | str,
        destination: Path | str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Cannot copy {artifact_path} to {destination}",
            internal_details=internal_details,
        )
        self.artifact_path = Path(artifact_path)
        self.destination = Path(destination)
