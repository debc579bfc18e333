"""Parsing of the PLY magic and header section."""

from __future__ import annotations

__all__ = [
    "FACE_INDEX_NAMES",
    "FormatMode",
    "PLYHeader",
    "VertexProperty",
    "check_magic",
    "parse_header",
]

import dataclasses
import enum
import logging
import typing as t

from plydecode.exceptions import PLYFormatError, PLYHeaderError
from plydecode.properties import NumericKind, PropertyRole, resolve_numeric_kind, resolve_role

logger = logging.getLogger(__name__)

#: The three magic bytes every PLY file starts with.
MAGIC: t.Final[bytes] = b"ply"

#: The only supported format version.
SUPPORTED_VERSION: t.Final[str] = "1.0"

#: Names under which the face's vertex-index list may be declared.
FACE_INDEX_NAMES: t.Final[frozenset[str]] = frozenset({"vertex_indices", "vertex_index"})


class FormatMode(enum.Enum):
    """The encoding of the element bodies."""

    ASCII = "ascii"
    BINARY_LITTLE_ENDIAN = "binary_little_endian"
    BINARY_BIG_ENDIAN = "binary_big_endian"

    @property
    def byte_order(self) -> t.Literal["<", ">"]:
        """The :mod:`struct` byte order prefix for binary bodies."""
        return ">" if self is FormatMode.BINARY_BIG_ENDIAN else "<"


class VertexProperty(t.NamedTuple):
    """One scalar property declared on the ``vertex`` element."""

    #: The declared property name.
    name: str

    #: The role resolved from the name.
    role: PropertyRole

    #: The declared numeric type.
    kind: NumericKind


@dataclasses.dataclass
class PLYHeader:
    """The element counts and property schemas declared by a header."""

    #: The body encoding. ASCII unless a ``format`` line says otherwise.
    format: FormatMode = FormatMode.ASCII

    #: The declared format version.
    version: str = SUPPORTED_VERSION

    #: Number of records declared by ``element vertex N``.
    vertex_count: int = 0

    #: Number of records declared by ``element face N``.
    face_count: int = 0

    #: Vertex properties in the order values appear in each record.
    vertex_properties: list[VertexProperty] = dataclasses.field(default_factory=list)

    #: Face properties other than the vertex-index list, in record order.
    face_properties: list[NumericKind] = dataclasses.field(default_factory=list)

    #: Whether an ``end_header`` line terminated the header.
    terminated: bool = False


class _LineCursor:
    """Reads whitespace-separated tokens from a single header line."""

    def __init__(self, line: str) -> None:
        self._line = line
        self._pos = 0

    def skip_whitespace(self) -> None:
        while self._pos < len(self._line) and self._line[self._pos].isspace():
            self._pos += 1

    def at_end(self) -> bool:
        return self._pos >= len(self._line)

    def separator(self) -> bool:
        """Consume a run of whitespace. Return ``False`` if there is none."""
        if self.at_end() or not self._line[self._pos].isspace():
            return False

        self.skip_whitespace()
        return True

    def token(self) -> str:
        """Consume the next token, skipping leading whitespace."""
        self.skip_whitespace()
        start = self._pos
        while self._pos < len(self._line) and not self._line[self._pos].isspace():
            self._pos += 1

        return self._line[start : self._pos]


def check_magic(stream: t.BinaryIO) -> None:
    """Verify that a stream starts with the PLY magic.

    Reads the three magic bytes and one further byte, which is ignored.

    :param stream: A binary stream positioned at the start of the file.
    :raises PLYFormatError: If the stream cannot be read or the magic is absent.
    """
    try:
        prefix = stream.read(len(MAGIC) + 1)
    except (OSError, ValueError) as e:
        raise PLYFormatError(f"Unable to read stream: {e}") from e

    if prefix is None or len(prefix) < len(MAGIC) + 1:
        raise PLYFormatError("Stream is too short to be a PLY file")

    if prefix[: len(MAGIC)] != MAGIC:
        raise PLYFormatError(f"Missing PLY magic (got {prefix[: len(MAGIC)]!r})")


def parse_header(stream: t.BinaryIO) -> PLYHeader:
    """Parse header lines up to and including ``end_header``.

    The stream must be positioned just after the magic. On return it is
    positioned at the first byte of the body. A header that runs to the end
    of the stream without ``end_header`` is accepted.

    :param stream: A binary stream positioned after the magic.
    :return: The parsed header.
    :raises PLYHeaderError: If a declaration is malformed or unsupported.
    :raises PLYFormatError: If the stream cannot be read.
    """
    header = PLYHeader()
    element: str | None = None

    for raw in _read_lines(stream):
        cursor = _LineCursor(raw.decode("latin-1"))
        cursor.skip_whitespace()
        if cursor.at_end():
            continue

        keyword = cursor.token()
        if keyword == "format":
            _parse_format(cursor, header)
        elif keyword == "element":
            element = _parse_element(cursor, header)
        elif keyword == "property":
            _parse_property(cursor, header, element)
        elif keyword == "end_header":
            header.terminated = True
            break

    if not header.terminated:
        logger.warning("PLY header ended without 'end_header'")

    return header


def _read_lines(stream: t.BinaryIO) -> t.Iterator[bytes]:
    while True:
        try:
            raw = stream.readline()
        except (OSError, ValueError) as e:
            raise PLYFormatError(f"Unable to read header: {e}") from e

        if not raw:
            return

        yield raw


def _parse_format(cursor: _LineCursor, header: PLYHeader) -> None:
    if not cursor.separator():
        raise PLYHeaderError("Malformed 'format' line: expected a format name")

    name = cursor.token()
    if not cursor.separator():
        raise PLYHeaderError("Malformed 'format' line: expected a version")

    version = cursor.token()

    try:
        header.format = FormatMode(name)
    except ValueError:
        supported = ", ".join(f.value for f in FormatMode)
        raise PLYHeaderError(f"Unsupported PLY format '{name}'. Supported: {supported}") from None

    if version != SUPPORTED_VERSION:
        raise PLYHeaderError(f"Unsupported PLY version '{version}', expected '{SUPPORTED_VERSION}'")

    header.version = version


def _parse_element(cursor: _LineCursor, header: PLYHeader) -> str | None:
    if not cursor.separator():
        raise PLYHeaderError("Malformed 'element' line: expected an element name")

    name = cursor.token()
    if not cursor.separator():
        raise PLYHeaderError(f"Malformed 'element' line for '{name}': expected a count")

    count_token = cursor.token()
    if not (count_token.isascii() and count_token.isdigit()):
        raise PLYHeaderError(f"Invalid count '{count_token}' for element '{name}'")

    count = int(count_token)
    if name == "vertex":
        header.vertex_count = count
    elif name == "face":
        header.face_count = count
    else:
        logger.debug("Ignoring properties of element '%s'", name)
        return None

    return name


def _parse_property(cursor: _LineCursor, header: PLYHeader, element: str | None) -> None:
    if element == "vertex":
        type_token = cursor.token()
        name = cursor.token()

        kind = _require_kind(type_token, name)
        header.vertex_properties.append(VertexProperty(name, resolve_role(name), kind))
    elif element == "face":
        type_token = cursor.token()
        if type_token == "list":
            cursor.token()  # count type, always read as uint8
            type_token = cursor.token()

        name = cursor.token()
        if name in FACE_INDEX_NAMES:
            return

        header.face_properties.append(_require_kind(type_token, name))


def _require_kind(type_token: str, name: str) -> NumericKind:
    kind = resolve_numeric_kind(type_token)
    if kind is None:
        raise PLYHeaderError(f"Unknown type '{type_token}' for property '{name}'")

    return kind
