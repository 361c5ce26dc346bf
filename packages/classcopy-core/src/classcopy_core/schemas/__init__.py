"""Schema definitions for classcopy.

- CompilerConfiguration: Input of a compile run (classcopy.yaml)
- CompilerMessage / MessageKind: Messages emitted while compiling
- CompilerResult: Outcome of a compile run
"""

from __future__ import annotations

from classcopy_core.schemas.configuration import (
    SOURCE_PATH_ARGUMENT,
    CompilerConfiguration,
)
from classcopy_core.schemas.result import (
    CompilerMessage,
    CompilerResult,
    MessageKind,
)

__all__: list[str] = [
    "SOURCE_PATH_ARGUMENT",
    "CompilerConfiguration",
    "CompilerMessage",
    "CompilerResult",
    "MessageKind",
]
