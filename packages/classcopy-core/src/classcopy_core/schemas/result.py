"""Compiler result models.

Models for the messages and outcome reported by a compile run.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class MessageKind(str, Enum):
    """Severity of a compiler message.

    Attributes:
        ERROR: Fatal problem; the run failed
        WARNING: Problem that did not stop the run
        MANDATORY_WARNING: Warning that must always be shown
        NOTE: Informational message
        OTHER: Anything else
    """

    ERROR = "error"
    WARNING = "warning"
    MANDATORY_WARNING = "mandatory_warning"
    NOTE = "note"
    OTHER = "other"


class CompilerMessage(BaseModel):
    """A single message emitted during compilation.

    Example:
        >>> CompilerMessage(
        ...     message="Compiling a/Main.java: out/a/B.class -> target/a/B.class",
        ...     kind=MessageKind.NOTE,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    message: str = Field(..., description="Message text")
    kind: MessageKind = Field(default=MessageKind.NOTE, description="Message severity")
    file: str | None = Field(default=None, description="File the message refers to")
    start_line: int | None = Field(default=None, ge=0, description="First line")
    start_column: int | None = Field(default=None, ge=0, description="First column")
    end_line: int | None = Field(default=None, ge=0, description="Last line")
    end_column: int | None = Field(default=None, ge=0, description="Last column")

    @property
    def is_error(self) -> bool:
        return self.kind == MessageKind.ERROR

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}: {self.message}"
        return self.message


class CompilerResult(BaseModel):
    """Outcome of a compile run.

    Attributes:
        success: False once any fatal error occurred.
        messages: Messages in emission order.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    success: bool = Field(default=True, description="Whether the run succeeded")
    messages: list[CompilerMessage] = Field(
        default_factory=list, description="Messages in emission order"
    )

    @property
    def errors(self) -> list[CompilerMessage]:
        """Error messages only."""
        return [m for m in self.messages if m.is_error]

    @property
    def notes(self) -> list[CompilerMessage]:
        """Informational messages only."""
        return [m for m in self.messages if m.kind == MessageKind.NOTE]
