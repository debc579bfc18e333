"""Decoder for whitespace-delimited ASCII bodies."""

from __future__ import annotations

__all__ = ["AsciiBodyDecoder", "AsciiLineSource"]

import logging
import re
import typing as t

import numpy as np

from plydecode.decoders.base import BaseBodyDecoder, ValueSource
from plydecode.exceptions import PLYDecodeError
from plydecode.properties import LexicalClass

if t.TYPE_CHECKING:
    from plydecode.decoders.base import DecodeContext
    from plydecode.properties import NumericKind

logger = logging.getLogger(__name__)

#: Value patterns by lexical class. Each consumes trailing whitespace.
_PATTERNS: t.Final[dict[LexicalClass, re.Pattern[str]]] = {
    LexicalClass.SIGNED: re.compile(r"\s*([-+]?[0-9]+)\s*"),
    LexicalClass.UNSIGNED: re.compile(r"\s*([0-9]+)\s*"),
    LexicalClass.DECIMAL: re.compile(r"\s*([-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?)\s*"),
}

#: A triangle face line. Anything after the third index is ignored.
_TRIANGLE = re.compile(r"\s*3\s+([0-9]+)\s+([0-9]+)\s+([0-9]+)")

#: Largest index that fits the facet array.
_MAX_INDEX: t.Final[int] = int(np.iinfo(np.int64).max)


class AsciiLineSource(ValueSource):
    """Reads values from the tokens of one record line."""

    def __init__(self, line: str, index: int) -> None:
        """Initialize the source.

        :param line: The record line.
        :param index: The zero-based record index, used in error messages.
        """
        self._line = line
        self._pos = 0
        self._index = index

    def read(self, kind: NumericKind) -> int | float:
        """Match and consume the next token of the given kind.

        :raises PLYDecodeError: If the next token does not match the kind's pattern or cannot be converted.
        """
        match = _PATTERNS[kind.lexical_class].match(self._line, self._pos)
        if match is None:
            rest = self._line[self._pos :].strip()
            raise PLYDecodeError("vertex", self._index, f"expected {kind.type_name} value, got {rest!r}")

        self._pos = match.end()
        token = match.group(1)
        if kind.lexical_class is LexicalClass.DECIMAL:
            return float(token)

        try:
            return float(int(token))
        except OverflowError:
            raise PLYDecodeError("vertex", self._index, f"{kind.type_name} value is out of range") from None


class AsciiBodyDecoder(BaseBodyDecoder):
    """Decodes one record per line."""

    def decode(self, stream: t.BinaryIO, context: DecodeContext) -> None:
        """Decode the vertex lines, then the face lines.

        Face lines that are not triangles, or whose indices do not fit the
        facet array, are dropped. Face indices are not checked against the
        vertex count.

        :param stream: The stream positioned at the first body line.
        :param context: The decode context to assemble records into.
        :raises PLYDecodeError: If a vertex value does not match its declared type.
        """
        header = context.header

        for i in range(header.vertex_count):
            line = _read_line(stream, "vertex", i)
            if not line:
                logger.warning("Body ended after %d of %d vertex lines", i, header.vertex_count)
                return

            self.assemble_vertex(AsciiLineSource(line.decode("latin-1"), i), context)

        for i in range(header.face_count):
            line = _read_line(stream, "face", i)
            if not line:
                logger.warning("Body ended after %d of %d face lines", i, header.face_count)
                return

            match = _TRIANGLE.match(line.decode("latin-1"))
            if match is None:
                context.assembler.reject_facet(i, "not a triangle")
                continue

            a, b, c = (int(g) for g in match.groups())
            if max(a, b, c) > _MAX_INDEX:
                context.assembler.reject_facet(i, "index too large to store")
                continue

            context.assembler.add_facet(a, b, c)


def _read_line(stream: t.BinaryIO, element: str, index: int) -> bytes:
    try:
        return stream.readline()
    except (OSError, ValueError) as e:
        raise PLYDecodeError(element, index, f"unable to read stream: {e}") from e
