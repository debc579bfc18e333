"""Decoder for fixed-width binary bodies."""

from __future__ import annotations

__all__ = ["BinaryBodyDecoder", "BinaryValueSource"]

import typing as t

from plydecode.binary import BinaryReader
from plydecode.decoders.base import BaseBodyDecoder, ValueSource
from plydecode.exceptions import PLYDecodeError
from plydecode.properties import NumericKind

if t.TYPE_CHECKING:
    from plydecode.decoders.base import DecodeContext


class BinaryValueSource(ValueSource):
    """Reads values of a declared kind from a byte cursor."""

    def __init__(self, reader: BinaryReader) -> None:
        """Initialize the source.

        :param reader: The byte cursor to read from.
        """
        self.reader = reader
        self._readers: dict[NumericKind, t.Callable[[], int | float]] = {
            NumericKind.INT8: reader.read_int8,
            NumericKind.UINT8: reader.read_uint8,
            NumericKind.INT16: reader.read_int16,
            NumericKind.UINT16: reader.read_uint16,
            NumericKind.INT32: reader.read_int32,
            NumericKind.UINT32: reader.read_uint32,
            NumericKind.FLOAT32: reader.read_float32,
            NumericKind.FLOAT64: reader.read_float64,
        }

    def read(self, kind: NumericKind) -> int | float:
        """Read the next value of the given kind.

        :raises EOFError: If the data ends before the value.
        """
        return self._readers[kind]()


class BinaryBodyDecoder(BaseBodyDecoder):
    """Decodes packed records in the header's byte order."""

    #: The only face size that produces a facet.
    TRIANGLE: t.Final[int] = 3

    def decode(self, stream: t.BinaryIO, context: DecodeContext) -> None:
        """Decode the vertex records, then the face records.

        Face records whose count is not 3 or whose indices are out of range
        are dropped with the cursor still advanced past them.

        :param stream: The stream positioned at the first body byte.
        :param context: The decode context to assemble records into.
        :raises PLYDecodeError: If the data ends before the declared records.
        """
        header = context.header
        try:
            data = stream.read()
        except (OSError, ValueError) as e:
            raise PLYDecodeError("vertex", 0, f"unable to read stream: {e}") from e

        reader = BinaryReader(data, header.format.byte_order)
        source = BinaryValueSource(reader)

        for i in range(header.vertex_count):
            try:
                self.assemble_vertex(source, context)
            except EOFError as e:
                raise PLYDecodeError("vertex", i, str(e)) from e

        for i in range(header.face_count):
            try:
                self._decode_face(reader, i, context)
            except EOFError as e:
                raise PLYDecodeError("face", i, str(e)) from e

    def _decode_face(self, reader: BinaryReader, index: int, context: DecodeContext) -> None:
        header = context.header

        n = reader.read_uint8()
        if n == self.TRIANGLE:
            a = reader.read_uint32()
            b = reader.read_uint32()
            c = reader.read_uint32()
            if a < header.vertex_count and b < header.vertex_count and c < header.vertex_count:
                context.assembler.add_facet(a, b, c)
            else:
                context.assembler.reject_facet(index, f"index out of range in ({a}, {b}, {c})")
        else:
            context.assembler.reject_facet(index, f"not a triangle ({n} vertices)")

        for kind in header.face_properties:
            if kind.is_float:
                # Float entries are stored as uint8-prefixed lists
                m = reader.read_uint8()
                reader.skip(m * kind.width)
            else:
                reader.skip(kind.width)
