"""Shared test fixtures for classcopy-cli tests.

Provides CliRunner fixtures and a small project on disk with pre-built
classes and matching sources.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
import logging
from pathlib import Path
import struct

from click.testing import CliRunner
import pytest
import structlog

from classcopy_cli import output

CONFIG_FILENAME = "classcopy.yaml"

PROJECT_YAML = """\
source_path: prebuilt
source_locations:
  - src
output_location: target/classes
"""


def build_class_bytes(class_name: str, source_file: str | None) -> bytes:
    """Assemble a class file with no members and an optional SourceFile."""
    pool = [
        struct.pack(">BH", 7, 2),
        struct.pack(">BH", 1, len(class_name)) + class_name.encode(),
    ]
    attributes = struct.pack(">H", 0)
    if source_file is not None:
        pool.append(struct.pack(">BH", 1, len(b"SourceFile")) + b"SourceFile")
        pool.append(struct.pack(">BH", 1, len(source_file)) + source_file.encode())
        attributes = struct.pack(">HHIH", 1, 3, 2, 4)

    return (
        struct.pack(">IHHH", 0xCAFEBABE, 0, 52, len(pool) + 1)
        + b"".join(pool)
        + struct.pack(">HHHHHH", 0x0021, 1, 0, 0, 0, 0)
        + attributes
    )


@pytest.fixture(autouse=True)
def isolate_logging_and_console(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Undo global logging and console changes made by commands."""
    monkeypatch.delenv("CLASSCOPY_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    level = root.level
    console = output.console
    yield
    output.console = console
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner inside a temporary working directory.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def write_class_file() -> Callable[..., Path]:
    """Factory fixture writing a class file, creating parent directories."""

    def _write(path: Path, class_name: str, source_file: str | None = "Main.java") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_class_bytes(class_name, source_file))
        return path

    return _write


@pytest.fixture
def project(isolated_runner: CliRunner, write_class_file: Callable[..., Path]) -> Path:
    """Create a project in the isolated working directory.

    Layout:
        classcopy.yaml
        prebuilt/a/B.class  (a/B, from Main.java)
        prebuilt/a/C.class  (a/C, from Main.java)
        src/a/Main.java

    Returns:
        Relative path to classcopy.yaml.
    """
    write_class_file(Path("prebuilt/a/B.class"), "a/B")
    write_class_file(Path("prebuilt/a/C.class"), "a/C")
    Path("src/a").mkdir(parents=True)
    Path("src/a/Main.java").write_text("package a;\n")
    config = Path(CONFIG_FILENAME)
    config.write_text(PROJECT_YAML)
    return config
