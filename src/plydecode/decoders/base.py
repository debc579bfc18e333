"""Base definitions shared by the ASCII and binary body decoders."""

from __future__ import annotations

__all__ = ["BaseBodyDecoder", "DecodeContext", "ValueSource", "read_vertex_values"]

import abc
import dataclasses
import typing as t

import numpy as np

from plydecode.assembler import new_value_buffer
from plydecode.properties import PropertyRole

if t.TYPE_CHECKING:
    from plydecode.assembler import RecordAssembler, ValueBuffer
    from plydecode.header import PLYHeader, VertexProperty
    from plydecode.properties import NumericKind


class ValueSource(abc.ABC):
    """A source of scalar values read one property at a time."""

    @abc.abstractmethod
    def read(self, kind: NumericKind) -> int | float:
        """Read the next value of the given kind.

        :param kind: The declared numeric kind of the value.
        :return: The value as read from the source.
        """
        pass


@dataclasses.dataclass
class DecodeContext:
    """State shared by the decoding stages of one load."""

    #: The parsed header. Read-only once decoding starts.
    header: PLYHeader

    #: The assembler accumulating decoded records.
    assembler: RecordAssembler


def read_vertex_values(source: ValueSource, properties: t.Sequence[VertexProperty]) -> ValueBuffer:
    """Read one vertex record, consuming every declared property in order.

    Values are narrowed to 32-bit floats. Values of generic properties are
    read and dropped.

    :param source: The source positioned at the start of the record.
    :param properties: The vertex properties in declaration order.
    :return: The value buffer, indexed by role.
    """
    values = new_value_buffer()
    for prop in properties:
        value = float(np.float32(source.read(prop.kind)))
        if prop.role is not PropertyRole.GENERIC:
            values[prop.role] = value

    return values


class BaseBodyDecoder(abc.ABC):
    """Abstract base class for element body decoders."""

    @abc.abstractmethod
    def decode(self, stream: t.BinaryIO, context: DecodeContext) -> None:
        """Decode the vertex body followed by the face body.

        :param stream: The stream positioned at the first byte after the header.
        :param context: The decode context to assemble records into.
        """
        pass

    @staticmethod
    def assemble_vertex(source: ValueSource, context: DecodeContext) -> None:
        """Read one vertex record from a source and hand it to the assembler."""
        values = read_vertex_values(source, context.header.vertex_properties)
        context.assembler.add_vertex(values)
