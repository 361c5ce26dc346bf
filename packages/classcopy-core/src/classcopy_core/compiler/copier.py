"""Copy executor: place indexed class files next to their declared sources.

For every resolved source file the classes compiled from it are copied into
``output_root / <source directory>``. Existing files are replaced. Two
classes of one source that share a file name abort the run, since one would
overwrite the other.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
import shutil

from classcopy_core.compiler.indexer import ArtifactIndex
from classcopy_core.compiler.resolver import ResolvedSource
from classcopy_core.errors import (
    ArtifactCopyError,
    DirectoryCreationError,
    DuplicateArtifactNameError,
    MissingArtifactsForSourceError,
)
from classcopy_core.observability import get_logger
from classcopy_core.schemas import CompilerMessage, MessageKind


@dataclass(frozen=True)
class CopyPlanEntry:
    """Class files to copy for one source file.

    Attributes:
        relative_path: POSIX path of the source relative to its root.
        target_dir: Directory receiving the class files.
        artifacts: Class files in index order.
    """

    relative_path: str
    target_dir: Path
    artifacts: list[Path] = field(default_factory=list)

    def destination(self, artifact: Path) -> Path:
        return self.target_dir / artifact.name


def plan_copies(
    sources: Sequence[ResolvedSource],
    index: ArtifactIndex,
    output_root: Path | str,
    scan_root: Path | str | None = None,
) -> list[CopyPlanEntry]:
    """Build the copy plan without touching the file system.

    Args:
        sources: Resolved source files, in processing order.
        index: Artifact index from build_index().
        output_root: Root directory receiving the copies.
        scan_root: Directory the index was built from, for error messages.

    Returns:
        One CopyPlanEntry per source, in source order.

    Raises:
        MissingArtifactsForSourceError: If a source has no indexed classes.
    """
    output_root = Path(output_root)
    plan: list[CopyPlanEntry] = []
    for source in sources:
        artifacts = index.get(source.relative_path)
        if not artifacts:
            raise MissingArtifactsForSourceError(
                source.relative_path,
                scan_root,
                internal_details=f"source_file={source.source_file}",
            )
        parent = Path(source.relative_path).parent
        plan.append(
            CopyPlanEntry(
                relative_path=source.relative_path,
                target_dir=output_root / parent,
                artifacts=list(artifacts),
            )
        )
    return plan


def _ensure_directory(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(directory, internal_details=repr(e)) from e


def _copy_artifact(artifact: Path, destination: Path) -> None:
    try:
        shutil.copyfile(artifact, destination)
    except shutil.SameFileError:
        # Class already in place, e.g. -sourcePath is the output root
        return
    except OSError as e:
        raise ArtifactCopyError(artifact, destination, internal_details=repr(e)) from e


def execute(
    sources: Sequence[ResolvedSource],
    index: ArtifactIndex,
    output_root: Path | str,
    messages: list[CompilerMessage] | None = None,
    scan_root: Path | str | None = None,
) -> list[CompilerMessage]:
    """Copy the class files of every resolved source into output_root.

    Sources are processed one at a time: a source's bucket is looked up,
    its target directory created, and its classes copied before the next
    source is looked up. The first failure stops the run. Files copied
    before it stay on disk.

    Args:
        sources: Resolved source files, in processing order.
        index: Artifact index from build_index().
        output_root: Root directory receiving the copies.
        messages: Optional list to append notes to. Pass one in to keep the
            notes emitted before a failure.
        scan_root: Directory the index was built from, for error messages.

    Returns:
        The list of notes, one per class file copied.

    Raises:
        MissingArtifactsForSourceError: If a source has no indexed classes.
        DuplicateArtifactNameError: If two classes of one source share a name.
        DirectoryCreationError: If a target directory cannot be created.
        ArtifactCopyError: If a class file cannot be copied.
    """
    log = get_logger()
    notes = messages if messages is not None else []

    for source in sources:
        (entry,) = plan_copies([source], index, output_root, scan_root)
        _ensure_directory(entry.target_dir)

        copied: set[str] = set()
        for artifact in entry.artifacts:
            destination = entry.destination(artifact)
            notes.append(
                CompilerMessage(
                    message=f"Compiling {entry.relative_path}: {artifact} -> {destination}",
                    kind=MessageKind.NOTE,
                )
            )
            if artifact.name in copied:
                raise DuplicateArtifactNameError(entry.relative_path, entry.artifacts)
            copied.add(artifact.name)

            _copy_artifact(artifact, destination)
            log.debug("artifact_copied", source=entry.relative_path, artifact=str(artifact))

    return notes
