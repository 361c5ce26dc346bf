"""Source resolver: turn configured source roots into index lookup keys."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from classcopy_core.observability import get_logger

if TYPE_CHECKING:
    from classcopy_core.compiler.base import AbstractCompiler
    from classcopy_core.schemas import CompilerConfiguration


@dataclass(frozen=True)
class ResolvedSource:
    """A declared source file and its key into the artifact index.

    Attributes:
        source_root: Source root the file was found under.
        source_file: Path of the source file.
        relative_path: POSIX path of the file relative to source_root.
            Matches the source key of the classes compiled from it.
    """

    source_root: Path
    source_file: Path
    relative_path: str


def resolve_sources(
    config: CompilerConfiguration,
    compiler: AbstractCompiler,
) -> list[ResolvedSource]:
    """Enumerate the declared source files of every configured source root.

    Source roots that do not exist are skipped; generated-sources directories
    are legitimately absent for some builds.

    Args:
        config: Compiler configuration listing the source roots.
        compiler: Compiler providing source enumeration rules.

    Returns:
        ResolvedSource entries in source root order, then path order.
    """
    log = get_logger()
    resolved: list[ResolvedSource] = []

    for root in config.source_locations:
        if not root.is_dir():
            log.debug("source_root_skipped", source_root=str(root))
            continue
        for source_file in compiler.get_source_files_for_source_root(config, root):
            resolved.append(
                ResolvedSource(
                    source_root=root,
                    source_file=source_file,
                    relative_path=source_file.relative_to(root).as_posix(),
                )
            )

    log.info("sources_resolved", sources=len(resolved))
    return resolved
