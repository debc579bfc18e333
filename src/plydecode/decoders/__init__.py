"""Body decoders for the ASCII and binary PLY encodings."""

from __future__ import annotations

__all__ = [
    "AsciiBodyDecoder",
    "BaseBodyDecoder",
    "BinaryBodyDecoder",
    "DecodeContext",
    "ValueSource",
    "get_decoder",
]

import typing as t

from plydecode.decoders.ascii import AsciiBodyDecoder
from plydecode.decoders.base import BaseBodyDecoder, DecodeContext, ValueSource
from plydecode.decoders.binary import BinaryBodyDecoder
from plydecode.header import FormatMode

#: Mapping of body encodings to their respective decoder classes.
_DECODERS: t.Final[dict[FormatMode, type[BaseBodyDecoder]]] = {
    FormatMode.ASCII: AsciiBodyDecoder,
    FormatMode.BINARY_LITTLE_ENDIAN: BinaryBodyDecoder,
    FormatMode.BINARY_BIG_ENDIAN: BinaryBodyDecoder,
}


def get_decoder(format: FormatMode) -> BaseBodyDecoder:
    """Get the body decoder for the specified encoding.

    :param format: The body encoding declared in the header.
    :return: An instance of the corresponding decoder.
    """
    decoder_class = _DECODERS[format]
    return decoder_class()
