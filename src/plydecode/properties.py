"""Numeric property types and semantic property roles."""

from __future__ import annotations

__all__ = [
    "LexicalClass",
    "NumericKind",
    "PropertyRole",
    "resolve_numeric_kind",
    "resolve_role",
]

import enum
import typing as t


class LexicalClass(enum.Enum):
    """The textual shape of a value in an ASCII body."""

    SIGNED = "signed"
    UNSIGNED = "unsigned"
    DECIMAL = "decimal"


class NumericKind(enum.Enum):
    """A fixed-width scalar type that a property may be declared with."""

    INT8 = ("int8", 1, LexicalClass.SIGNED)
    UINT8 = ("uint8", 1, LexicalClass.UNSIGNED)
    INT16 = ("int16", 2, LexicalClass.SIGNED)
    UINT16 = ("uint16", 2, LexicalClass.UNSIGNED)
    INT32 = ("int32", 4, LexicalClass.SIGNED)
    UINT32 = ("uint32", 4, LexicalClass.UNSIGNED)
    FLOAT32 = ("float32", 4, LexicalClass.DECIMAL)
    FLOAT64 = ("float64", 8, LexicalClass.DECIMAL)

    def __init__(self, type_name: str, width: int, lexical_class: LexicalClass) -> None:
        #: The canonical sized type name (e.g. ``"uint8"``).
        self.type_name = type_name

        #: The size of one value in a binary body, in bytes.
        self.width = width

        #: The pattern class used to match one value in an ASCII body.
        self.lexical_class = lexical_class

    @property
    def is_float(self) -> bool:
        """Whether the kind is a floating-point type."""
        return self.lexical_class is LexicalClass.DECIMAL


class PropertyRole(enum.IntEnum):
    """The meaning of a vertex property, derived from its name."""

    COORD_X = 0
    COORD_Y = 1
    COORD_Z = 2
    COLOR_R = 3
    COLOR_G = 4
    COLOR_B = 5
    GENERIC = 6


#: Type tokens accepted in ``property`` lines, including the legacy C-style names.
_TYPE_TOKENS: t.Final[dict[str, NumericKind]] = {
    "char": NumericKind.INT8,
    "int8": NumericKind.INT8,
    "uchar": NumericKind.UINT8,
    "uint8": NumericKind.UINT8,
    "short": NumericKind.INT16,
    "int16": NumericKind.INT16,
    "ushort": NumericKind.UINT16,
    "uint16": NumericKind.UINT16,
    "int": NumericKind.INT32,
    "int32": NumericKind.INT32,
    "uint": NumericKind.UINT32,
    "uint32": NumericKind.UINT32,
    "float": NumericKind.FLOAT32,
    "float32": NumericKind.FLOAT32,
    "double": NumericKind.FLOAT64,
    "float64": NumericKind.FLOAT64,
}

#: Property names with a semantic role. Matching is case-sensitive.
_ROLE_NAMES: t.Final[dict[str, PropertyRole]] = {
    "x": PropertyRole.COORD_X,
    "y": PropertyRole.COORD_Y,
    "z": PropertyRole.COORD_Z,
    "red": PropertyRole.COLOR_R,
    "diffuse_red": PropertyRole.COLOR_R,
    "green": PropertyRole.COLOR_G,
    "diffuse_green": PropertyRole.COLOR_G,
    "blue": PropertyRole.COLOR_B,
    "diffuse_blue": PropertyRole.COLOR_B,
}


def resolve_numeric_kind(token: str) -> NumericKind | None:
    """Look up the numeric kind for a type token.

    :param token: The type token from a ``property`` line (e.g. ``"uchar"``).
    :return: The matching kind, or ``None`` if the token is not recognized.
    """
    return _TYPE_TOKENS.get(token)


def resolve_role(name: str) -> PropertyRole:
    """Map a property name to its role. Unknown names are ``GENERIC``."""
    return _ROLE_NAMES.get(name, PropertyRole.GENERIC)
