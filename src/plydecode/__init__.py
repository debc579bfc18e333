"""A library for decoding polygon meshes from PLY files."""

__all__ = [
    "DecodeStats",
    "FormatMode",
    "Material",
    "MaterialBinding",
    "NumericKind",
    "PLYDecodeError",
    "PLYError",
    "PLYFormatError",
    "PLYHeader",
    "PLYHeaderError",
    "PLYMesh",
    "PLYReader",
    "PLYSchemaError",
    "PropertyRole",
    "decode_ply",
    "load_ply",
]

from plydecode.exceptions import PLYDecodeError, PLYError, PLYFormatError, PLYHeaderError, PLYSchemaError
from plydecode.header import FormatMode, PLYHeader
from plydecode.loader import PLYReader, decode_ply, load_ply
from plydecode.mesh import DecodeStats, Material, MaterialBinding, PLYMesh
from plydecode.properties import NumericKind, PropertyRole
