"""Shared pytest fixtures for classcopy-core tests.

Class files are assembled in memory so no JDK is needed. The generated
classes are minimal but well formed: a constant pool (including a Long
constant, which occupies two slots), one field, one method with a Code
attribute, and an optional SourceFile attribute.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
import struct
import sys

import pytest
import structlog

ClassBytesFactory = Callable[..., bytes]
ClassFileWriter = Callable[..., Path]


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


def _modified_utf8(text: str) -> bytes:
    out = bytearray()
    for char in text:
        code = ord(char)
        if code == 0:
            out += b"\xc0\x80"
        elif code > 0xFFFF:
            code -= 0x10000
            for surrogate in (0xD800 + (code >> 10), 0xDC00 + (code & 0x3FF)):
                out += chr(surrogate).encode("utf-8", "surrogatepass")
        else:
            out += char.encode("utf-8")
    return bytes(out)


class _ConstantPool:
    def __init__(self) -> None:
        self.entries: list[bytes] = []
        self.next_index = 1

    def _add(self, entry: bytes, slots: int = 1) -> int:
        index = self.next_index
        self.entries.append(entry)
        self.next_index += slots
        return index

    def utf8(self, text: str) -> int:
        raw = _modified_utf8(text)
        return self._add(struct.pack(">BH", 1, len(raw)) + raw)

    def class_ref(self, name: str) -> int:
        return self._add(struct.pack(">BH", 7, self.utf8(name)))

    def long(self, value: int) -> int:
        return self._add(struct.pack(">Bq", 5, value), slots=2)

    def integer(self, value: int) -> int:
        return self._add(struct.pack(">Bi", 3, value))

    def serialize(self) -> bytes:
        return struct.pack(">H", self.next_index) + b"".join(self.entries)


def build_class_bytes(
    class_name: str,
    source_file: str | None = "Main.java",
    *,
    major_version: int = 52,
    minor_version: int = 0,
) -> bytes:
    """Assemble a minimal class file defining class_name."""
    pool = _ConstantPool()
    this_class = pool.class_ref(class_name)
    super_class = pool.class_ref("java/lang/Object")
    pool.long(1234567890123)
    pool.integer(42)
    field_name = pool.utf8("counter")
    field_desc = pool.utf8("I")
    method_name = pool.utf8("<init>")
    method_desc = pool.utf8("()V")
    code_name = pool.utf8("Code")
    source_attr_name = pool.utf8("SourceFile") if source_file is not None else None
    source_value = pool.utf8(source_file) if source_file is not None else None

    body = bytearray()
    body += struct.pack(">IHH", 0xCAFEBABE, minor_version, major_version)
    body += pool.serialize()
    body += struct.pack(">HHH", 0x0021, this_class, super_class)
    body += struct.pack(">H", 0)  # interfaces

    body += struct.pack(">H", 1)  # fields
    body += struct.pack(">HHHH", 0x0002, field_name, field_desc, 0)

    code = struct.pack(">HHI", 1, 1, 5) + bytes([0x2A, 0xB7, 0x00, 0x01, 0xB1])
    code += struct.pack(">HH", 0, 0)  # exception table, attributes
    body += struct.pack(">H", 1)  # methods
    body += struct.pack(">HHHH", 0x0001, method_name, method_desc, 1)
    body += struct.pack(">HI", code_name, len(code)) + code

    if source_attr_name is not None and source_value is not None:
        body += struct.pack(">H", 1)
        body += struct.pack(">HIH", source_attr_name, 2, source_value)
    else:
        body += struct.pack(">H", 0)

    return bytes(body)


@pytest.fixture
def make_class_bytes() -> ClassBytesFactory:
    """Factory fixture returning class file bytes.

    Returns:
        Function (class_name, source_file="Main.java", **versions) -> bytes.
    """
    return build_class_bytes


@pytest.fixture
def write_class_file() -> ClassFileWriter:
    """Factory fixture writing a class file to disk.

    Returns:
        Function (path, class_name, source_file="Main.java") -> Path that
        creates parent directories and writes the class bytes.
    """

    def _write(path: Path, class_name: str, source_file: str | None = "Main.java") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_class_bytes(class_name, source_file))
        return path

    return _write


@pytest.fixture
def copy_project(tmp_path: Path, write_class_file: ClassFileWriter) -> Path:
    """Create a project with pre-built classes and matching sources.

    Layout:
        prebuilt/a/B.class       (a/B, from Main.java)
        prebuilt/a/C.class       (a/C, from Main.java)
        prebuilt/x/y/Util.class  (x/y/Util, from Util.java)
        src/a/Main.java
        src/x/y/Util.java

    Returns:
        The project directory.
    """
    prebuilt = tmp_path / "prebuilt"
    write_class_file(prebuilt / "a" / "B.class", "a/B", "Main.java")
    write_class_file(prebuilt / "a" / "C.class", "a/C", "Main.java")
    write_class_file(prebuilt / "x" / "y" / "Util.class", "x/y/Util", "Util.java")

    src = tmp_path / "src"
    (src / "a").mkdir(parents=True)
    (src / "a" / "Main.java").write_text("package a;\n")
    (src / "x" / "y").mkdir(parents=True)
    (src / "x" / "y" / "Util.java").write_text("package x.y;\n")

    return tmp_path
