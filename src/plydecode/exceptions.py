"""Exceptions raised while decoding PLY files."""

__all__ = [
    "PLYDecodeError",
    "PLYError",
    "PLYFormatError",
    "PLYHeaderError",
    "PLYSchemaError",
]


class PLYError(Exception):
    """Base class for all PLY decoding errors."""


class PLYFormatError(PLYError):
    """The stream is unreadable or does not start with the PLY magic."""


class PLYHeaderError(PLYError):
    """The header contains a malformed or unsupported declaration."""


class PLYSchemaError(PLYError):
    """The declared vertex properties do not describe a usable point."""


class PLYDecodeError(PLYError):
    """A record in the body could not be decoded."""

    #: The name of the element being decoded.
    element: str

    #: The zero-based index of the offending record.
    index: int

    def __init__(self, element: str, index: int, reason: str) -> None:
        self.element = element
        self.index = index
        super().__init__(f"Failed to decode {element} record {index}: {reason}")
