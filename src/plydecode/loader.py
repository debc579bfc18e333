"""Utilities for loading polygon meshes from PLY files."""

from __future__ import annotations

__all__ = ["MeshHandoff", "PLYReader", "decode_ply", "load_ply"]

import io
import logging
import os
import typing as t
from pathlib import Path

from plydecode.assembler import RecordAssembler
from plydecode.decoders import DecodeContext, get_decoder
from plydecode.exceptions import PLYError
from plydecode.header import check_magic, parse_header
from plydecode.mesh import MaterialBinding
from plydecode.schema import validate_schema

if t.TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    from plydecode.mesh import Material, PLYMesh

logger = logging.getLogger(__name__)

#: Receives the decoded points, facets and material after a successful load.
MeshHandoff: t.TypeAlias = t.Callable[
    ["npt.NDArray[np.float32]", "npt.NDArray[np.int64]", "Material | None"],
    None,
]


def decode_ply(stream: t.BinaryIO, material: Material | None = None) -> PLYMesh:
    """Decode a PLY file from a binary stream.

    :param stream: A binary stream positioned at the start of the file.
    :param material: A material sink for vertex colors. Bound per vertex if the file declares colors.
    :return: The decoded mesh.
    :raises PLYFormatError: If the stream is unreadable or not a PLY file.
    :raises PLYHeaderError: If the header is malformed or unsupported.
    :raises PLYSchemaError: If the vertex properties do not describe a point.
    :raises PLYDecodeError: If a body record cannot be decoded.
    """
    check_magic(stream)
    header = parse_header(stream)
    has_colors = validate_schema(header.vertex_properties, material)

    assembler = RecordAssembler(
        header.vertex_count,
        header.face_count,
        has_colors=has_colors,
        material=material,
    )
    context = DecodeContext(header=header, assembler=assembler)
    get_decoder(header.format).decode(stream, context)

    mesh = assembler.build(header.format)
    logger.info(
        "Decoded %s PLY: %d points, %d facets (%d face records dropped)",
        header.format.value,
        mesh.num_points,
        mesh.num_facets,
        mesh.stats.facets_rejected,
    )

    return mesh


def load_ply(file: str | os.PathLike[str] | bytes | t.BinaryIO, *, material: Material | None = None) -> PLYMesh:
    """Load a PLY file and decode its contents.

    :param file: The path to the PLY file, raw bytes, or a binary file-like object.
    :param material: A material sink for vertex colors. Bound per vertex if the file declares colors.
    :return: The decoded mesh.
    :raises PLYError: If the file cannot be decoded.

    .. code-block:: python

        mesh = load_ply("model.ply")
        print(f"Loaded {mesh.num_points} points and {mesh.num_facets} facets.")

    """
    if isinstance(file, bytes):
        return decode_ply(io.BytesIO(file), material)

    if isinstance(file, (str, os.PathLike)):
        with Path(file).open("rb") as f:
            return decode_ply(f, material)

    return decode_ply(file, material)


class PLYReader:
    """Loads PLY streams and hands the result to a downstream consumer.

    :meth:`load` reports failure as ``False`` instead of raising, and calls
    the handoff exactly once per successful load. Nothing is handed off
    when a load fails. The material sink is cleared at the start of
    every load and again after a failed one.
    """

    #: The consumer of decoded points and facets, if any.
    handoff: MeshHandoff | None

    #: The material sink passed to each load, if any.
    material: Material | None

    #: The mesh from the most recent successful load.
    mesh: PLYMesh | None

    def __init__(self, handoff: MeshHandoff | None = None, material: Material | None = None) -> None:
        """Initialize the reader.

        :param handoff: Called with ``(points, facets, material)`` after a successful load.
        :param material: A material sink for vertex colors.
        """
        self.handoff = handoff
        self.material = material
        self.mesh = None

    @staticmethod
    def check_header(stream: t.BinaryIO) -> bool:
        """Check whether a stream starts with the PLY magic.

        Consumes the magic bytes from the stream.

        :param stream: A binary stream positioned at the start of the file.
        :return: Whether the stream looks like a PLY file.
        """
        try:
            check_magic(stream)
        except PLYError:
            return False

        return True

    def load(self, stream: t.BinaryIO) -> bool:
        """Decode a PLY stream.

        :param stream: A binary stream positioned at the start of the file. The caller owns the stream.
        :return: ``True`` if the mesh was decoded and handed off, ``False`` otherwise.
        """
        self.mesh = None
        self._reset_material()

        try:
            mesh = decode_ply(stream, self.material)
        except PLYError as e:
            logger.warning("Failed to load PLY: %s", e)
            self._reset_material()
            return False

        self.mesh = mesh
        if self.handoff is not None:
            self.handoff(mesh.points, mesh.facets, self.material)

        return True

    def _reset_material(self) -> None:
        """Clear colors and binding left in the material by a previous load."""
        if self.material is None:
            return

        self.material.binding = MaterialBinding.OVERALL
        self.material.diffuse_colors.clear()
