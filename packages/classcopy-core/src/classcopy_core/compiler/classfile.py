"""JVM class file header reader.

Decodes just enough of a class file to recover the internal name of the class
it defines and its ``SourceFile`` attribute. Field and method bodies (Code,
StackMapTable, ...) are skipped by length without being decoded.

Layout (JVMS chapter 4):

    magic u4, minor u2, major u2,
    constant_pool_count u2, cp_info[count - 1],
    access_flags u2, this_class u2, super_class u2,
    interfaces_count u2, u2[interfaces_count],
    fields_count u2, field_info[...],
    methods_count u2, method_info[...],
    attributes_count u2, attribute_info[...]
"""

from __future__ import annotations

from dataclasses import dataclass
import struct

CLASS_MAGIC = 0xCAFEBABE

CONSTANT_UTF8 = 1
CONSTANT_INTEGER = 3
CONSTANT_FLOAT = 4
CONSTANT_LONG = 5
CONSTANT_DOUBLE = 6
CONSTANT_CLASS = 7
CONSTANT_STRING = 8
CONSTANT_FIELDREF = 9
CONSTANT_METHODREF = 10
CONSTANT_INTERFACE_METHODREF = 11
CONSTANT_NAME_AND_TYPE = 12
CONSTANT_METHOD_HANDLE = 15
CONSTANT_METHOD_TYPE = 16
CONSTANT_DYNAMIC = 17
CONSTANT_INVOKE_DYNAMIC = 18
CONSTANT_MODULE = 19
CONSTANT_PACKAGE = 20

# Payload size in bytes of every fixed-size constant pool entry
_FIXED_ENTRY_SIZES = {
    CONSTANT_INTEGER: 4,
    CONSTANT_FLOAT: 4,
    CONSTANT_LONG: 8,
    CONSTANT_DOUBLE: 8,
    CONSTANT_CLASS: 2,
    CONSTANT_STRING: 2,
    CONSTANT_FIELDREF: 4,
    CONSTANT_METHODREF: 4,
    CONSTANT_INTERFACE_METHODREF: 4,
    CONSTANT_NAME_AND_TYPE: 4,
    CONSTANT_METHOD_HANDLE: 3,
    CONSTANT_METHOD_TYPE: 2,
    CONSTANT_DYNAMIC: 4,
    CONSTANT_INVOKE_DYNAMIC: 4,
    CONSTANT_MODULE: 2,
    CONSTANT_PACKAGE: 2,
}

# Long and Double occupy two constant pool slots
_WIDE_ENTRIES = frozenset({CONSTANT_LONG, CONSTANT_DOUBLE})

SOURCE_FILE_ATTRIBUTE = "SourceFile"


class ClassFormatError(ValueError):
    """Raised when bytes are not a well-formed class file."""


@dataclass(frozen=True)
class ClassHeader:
    """Metadata recovered from a class file header.

    Attributes:
        class_name: Internal name of the defined class, e.g. ``a/b/C$Inner``.
        source_file: Value of the SourceFile attribute, e.g. ``C.java``.
            None when the attribute is absent.
        major_version: Class file major version.
        minor_version: Class file minor version.
    """

    class_name: str
    source_file: str | None
    major_version: int = 0
    minor_version: int = 0

    @property
    def package_path(self) -> str:
        """Namespace prefix of the class including the trailing slash.

        Empty for classes in the default package.
        """
        return self.class_name[: self.class_name.rfind("/") + 1]


class _Reader:
    """Big-endian cursor over class file bytes."""

    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    def take(self, size: int) -> bytes:
        end = self.offset + size
        if end > len(self.data):
            raise ClassFormatError(
                f"truncated class file: need {size} bytes at offset {self.offset}"
            )
        chunk = self.data[self.offset : end]
        self.offset = end
        return chunk

    def skip(self, size: int) -> None:
        self.take(size)

    def u1(self) -> int:
        return self.take(1)[0]

    def u2(self) -> int:
        value: int = struct.unpack(">H", self.take(2))[0]
        return value

    def u4(self) -> int:
        value: int = struct.unpack(">I", self.take(4))[0]
        return value


def decode_modified_utf8(raw: bytes) -> str:
    """Decode a JVM "modified UTF-8" string.

    NUL is stored as ``C0 80`` and supplementary characters as a pair of
    encoded surrogates.

    Raises:
        ClassFormatError: If the bytes are not valid modified UTF-8.
    """
    try:
        text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
        return text.encode("utf-16", "surrogatepass").decode("utf-16")
    except UnicodeError as e:
        raise ClassFormatError(f"invalid modified UTF-8 constant: {e}") from e


def _read_constant_pool(reader: _Reader) -> tuple[dict[int, str], dict[int, int]]:
    """Read the constant pool.

    Returns:
        Tuple of (utf8 entries by index, class entries by index mapping to the
        index of their name).
    """
    count = reader.u2()
    utf8: dict[int, str] = {}
    classes: dict[int, int] = {}

    index = 1
    while index < count:
        tag = reader.u1()
        if tag == CONSTANT_UTF8:
            length = reader.u2()
            utf8[index] = decode_modified_utf8(reader.take(length))
        elif tag == CONSTANT_CLASS:
            classes[index] = reader.u2()
        elif tag in _FIXED_ENTRY_SIZES:
            reader.skip(_FIXED_ENTRY_SIZES[tag])
        else:
            raise ClassFormatError(f"unknown constant pool tag {tag} at index {index}")
        index += 2 if tag in _WIDE_ENTRIES else 1

    return utf8, classes


def _skip_members(reader: _Reader) -> None:
    """Skip a fields or methods table, attributes included."""
    for _ in range(reader.u2()):
        reader.skip(6)  # access_flags, name_index, descriptor_index
        for _ in range(reader.u2()):
            reader.skip(2)
            reader.skip(reader.u4())


def _utf8_at(utf8: dict[int, str], index: int, what: str) -> str:
    try:
        return utf8[index]
    except KeyError:
        raise ClassFormatError(f"{what} does not reference a UTF8 constant") from None


def read_class_header(data: bytes) -> ClassHeader:
    """Read the class name and source file name from class file bytes.

    Args:
        data: Complete contents of a class file.

    Returns:
        ClassHeader for the class. ``source_file`` is None when the class
        carries no SourceFile attribute.

    Raises:
        ClassFormatError: If the data is not a well-formed class file.

    Example:
        >>> header = read_class_header(Path("out/a/B.class").read_bytes())
        >>> header.class_name, header.source_file
        ('a/B', 'Main.java')
    """
    reader = _Reader(data)

    if len(data) < 4 or reader.u4() != CLASS_MAGIC:
        raise ClassFormatError("bad magic number, not a class file")
    minor_version = reader.u2()
    major_version = reader.u2()

    utf8, classes = _read_constant_pool(reader)

    reader.skip(2)  # access_flags
    this_class = reader.u2()
    if this_class not in classes:
        raise ClassFormatError("this_class does not reference a Class constant")
    class_name = _utf8_at(utf8, classes[this_class], "this_class name")

    reader.skip(2)  # super_class
    reader.skip(2 * reader.u2())  # interfaces

    _skip_members(reader)  # fields
    _skip_members(reader)  # methods

    source_file: str | None = None
    for _ in range(reader.u2()):
        name = _utf8_at(utf8, reader.u2(), "attribute name")
        length = reader.u4()
        if name == SOURCE_FILE_ATTRIBUTE and source_file is None:
            if length != 2:
                raise ClassFormatError(f"SourceFile attribute has length {length}, expected 2")
            source_file = _utf8_at(utf8, reader.u2(), "SourceFile value")
        else:
            reader.skip(length)

    return ClassHeader(
        class_name=class_name,
        source_file=source_file,
        major_version=major_version,
        minor_version=minor_version,
    )
