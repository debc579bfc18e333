"""Byte cursor for reading fixed-width values from binary PLY bodies."""

from __future__ import annotations

__all__ = ["BinaryReader"]

import struct
import typing as t


class BinaryReader:
    """Reads fixed-width integers and floats from a byte buffer."""

    #: The data being read.
    data: bytes

    #: The :mod:`struct` byte order prefix, ``"<"`` or ``">"``.
    byte_order: t.Literal["<", ">"]

    def __init__(self, data: bytes, byte_order: t.Literal["<", ">"] = "<") -> None:
        """Initialize the reader.

        :param data: The data to read.
        :param byte_order: ``"<"`` for little-endian, ``">"`` for big-endian. Default is little-endian.
        """
        if byte_order not in ("<", ">"):
            raise ValueError(f"Invalid byte order: {byte_order!r}")

        self.data = data
        self.byte_order = byte_order
        self._pos = 0

        self._int16 = struct.Struct(byte_order + "h")
        self._uint16 = struct.Struct(byte_order + "H")
        self._int32 = struct.Struct(byte_order + "i")
        self._uint32 = struct.Struct(byte_order + "I")
        self._float32 = struct.Struct(byte_order + "f")
        self._float64 = struct.Struct(byte_order + "d")

    @property
    def position(self) -> int:
        """The current byte offset."""
        return self._pos

    @property
    def remaining(self) -> int:
        """The number of unread bytes."""
        return len(self.data) - self._pos

    def is_eof(self) -> bool:
        """Whether all data has been consumed."""
        return self._pos >= len(self.data)

    def read_bytes(self, count: int) -> bytes:
        """Read a number of raw bytes.

        :param count: The number of bytes to read.
        :return: The bytes read.
        :raises EOFError: If fewer than ``count`` bytes remain.
        """
        if self.remaining < count:
            raise EOFError(f"Unexpected end of stream: expected {count} bytes, got {self.remaining}")

        result = self.data[self._pos : self._pos + count]
        self._pos += count

        return result

    def skip(self, count: int) -> None:
        """Advance the cursor without decoding.

        :raises EOFError: If fewer than ``count`` bytes remain.
        """
        if self.remaining < count:
            raise EOFError(f"Unexpected end of stream: expected {count} bytes, got {self.remaining}")

        self._pos += count

    def _unpack(self, fmt: struct.Struct) -> t.Any:
        return fmt.unpack(self.read_bytes(fmt.size))[0]

    def read_int8(self) -> int:
        """Read a signed 8-bit integer."""
        value = self.read_bytes(1)[0]
        return value - 0x100 if value & 0x80 else value

    def read_uint8(self) -> int:
        """Read an unsigned 8-bit integer."""
        return self.read_bytes(1)[0]

    def read_int16(self) -> int:
        """Read a signed 16-bit integer."""
        return self._unpack(self._int16)

    def read_uint16(self) -> int:
        """Read an unsigned 16-bit integer."""
        return self._unpack(self._uint16)

    def read_int32(self) -> int:
        """Read a signed 32-bit integer."""
        return self._unpack(self._int32)

    def read_uint32(self) -> int:
        """Read an unsigned 32-bit integer."""
        return self._unpack(self._uint32)

    def read_float32(self) -> float:
        """Read an IEEE 754 single-precision float."""
        return self._unpack(self._float32)

    def read_float64(self) -> float:
        """Read an IEEE 754 double-precision float."""
        return self._unpack(self._float64)
