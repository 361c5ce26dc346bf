"""Artifact indexer: map source files to the class files compiled from them.

Every class file below a scan root is opened, its header read, and its path
filed under a source key: the package path of the class followed by the
source file name recorded in its SourceFile attribute. ``a/B.class`` and
``a/B$1.class`` compiled from ``a/Main.java`` both land in ``a/Main.java``.
"""

from __future__ import annotations

from pathlib import Path

from classcopy_core.compiler.classfile import ClassFormatError, ClassHeader, read_class_header
from classcopy_core.compiler.scanner import scan_directory
from classcopy_core.errors import ArtifactReadError
from classcopy_core.observability import get_logger

CLASS_FILE_PATTERN = "**/*.class"

ArtifactIndex = dict[str, list[Path]]


def source_key(header: ClassHeader, artifact_path: Path | str | None = None) -> str:
    """Compute the source key of a class.

    Args:
        header: Header read from the class file.
        artifact_path: Class file path, used in the error message only.

    Returns:
        Package path plus source file name, e.g. ``a/b/Main.java``.

    Raises:
        ArtifactReadError: If the class has no SourceFile attribute.
    """
    if not header.source_file:
        raise ArtifactReadError(
            artifact_path if artifact_path is not None else header.class_name,
            "class has no SourceFile attribute",
            internal_details=f"class_name={header.class_name}",
        )
    return header.package_path + header.source_file


def read_artifact_header(artifact_path: Path) -> ClassHeader:
    """Open a class file and read its header.

    Raises:
        ArtifactReadError: If the file cannot be read or parsed.
    """
    try:
        with artifact_path.open("rb") as f:
            data = f.read()
        return read_class_header(data)
    except OSError as e:
        raise ArtifactReadError(
            artifact_path,
            "file could not be read",
            internal_details=repr(e),
        ) from e
    except ClassFormatError as e:
        raise ArtifactReadError(
            artifact_path,
            f"not a valid class file ({e})",
            internal_details=repr(e),
        ) from e


def build_index(root: Path | str) -> ArtifactIndex:
    """Index every class file below root by source key.

    Args:
        root: Directory holding pre-built class files. A missing directory
            yields an empty index.

    Returns:
        Mapping of source key to class file paths. Paths keep discovery
        order (sorted by relative path) within each bucket.

    Raises:
        ArtifactReadError: If any class file cannot be read or parsed, or
            lacks a SourceFile attribute. The index is discarded.

    Example:
        >>> index = build_index("prebuilt/classes")
        >>> index["a/Main.java"]
        [PosixPath('prebuilt/classes/a/B.class'), PosixPath('prebuilt/classes/a/C.class')]
    """
    root = Path(root)
    log = get_logger().bind(scan_root=str(root))

    if not root.is_dir():
        log.info("index_root_missing")
        return {}

    log.info("index_started")
    index: ArtifactIndex = {}
    count = 0
    for relative in scan_directory(root, includes=[CLASS_FILE_PATTERN]):
        artifact_path = root / relative
        header = read_artifact_header(artifact_path)
        key = source_key(header, artifact_path)
        index.setdefault(key, []).append(artifact_path)
        count += 1
        log.debug("artifact_indexed", artifact=relative, source=key)

    log.info("index_completed", sources=len(index), artifacts=count)
    return index
