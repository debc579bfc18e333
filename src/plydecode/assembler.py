"""Assembly of decoded records into point, color and facet arrays."""

from __future__ import annotations

__all__ = ["RecordAssembler", "ValueBuffer", "new_value_buffer"]

import logging
import typing as t

import numpy as np

from plydecode.mesh import DecodeStats, MaterialBinding, PLYMesh
from plydecode.properties import PropertyRole

if t.TYPE_CHECKING:
    from plydecode.header import FormatMode
    from plydecode.mesh import Material

logger = logging.getLogger(__name__)

#: Decoded values of one vertex record, indexed by :class:`PropertyRole`.
ValueBuffer: t.TypeAlias = list[float]

#: Divisor that maps 8-bit color channels to [0, 1].
_COLOR_SCALE = np.float32(255.0)


def new_value_buffer() -> ValueBuffer:
    """Create a zeroed value buffer with one slot per role."""
    return [0.0] * len(PropertyRole)


class RecordAssembler:
    """Accumulates points, colors and facets in file order.

    Storage is sized from the declared element counts, which bound the
    number of records either decoder will produce.
    """

    #: Counters for assembled and rejected records.
    stats: DecodeStats

    def __init__(
        self,
        vertex_count: int,
        face_count: int,
        *,
        has_colors: bool = False,
        material: Material | None = None,
    ) -> None:
        """Initialize the assembler.

        :param vertex_count: The declared number of vertex records.
        :param face_count: The declared number of face records.
        :param has_colors: Whether vertex records carry a color triple.
        :param material: The material sink receiving per-vertex colors, if any.
        """
        self.has_colors = has_colors
        self.material = material
        self.stats = DecodeStats()

        self._points = np.empty((vertex_count, 3), dtype=np.float32)
        self._colors = np.empty((vertex_count if has_colors else 0, 3), dtype=np.float32)
        self._facets = np.empty((face_count, 3), dtype=np.int64)

    @property
    def binds_material(self) -> bool:
        """Whether colors are forwarded to the material sink."""
        return self.material is not None and self.material.binding is MaterialBinding.PER_VERTEX

    def add_vertex(self, values: ValueBuffer) -> None:
        """Append a point, and its color if the schema declares one.

        :param values: The decoded values of one vertex record.
        """
        i = self.stats.points_read
        self._points[i] = (
            values[PropertyRole.COORD_X],
            values[PropertyRole.COORD_Y],
            values[PropertyRole.COORD_Z],
        )

        if self.has_colors:
            rgb = np.array(
                (values[PropertyRole.COLOR_R], values[PropertyRole.COLOR_G], values[PropertyRole.COLOR_B]),
                dtype=np.float32,
            )
            rgb /= _COLOR_SCALE
            self._colors[i] = rgb

            if self.binds_material:
                self.material.diffuse_colors.append((float(rgb[0]), float(rgb[1]), float(rgb[2])))

        self.stats.points_read += 1

    def add_facet(self, a: int, b: int, c: int) -> None:
        """Append a triangle. Indices are stored as given."""
        self._facets[self.stats.facets_read] = (a, b, c)
        self.stats.facets_read += 1

    def reject_facet(self, index: int, reason: str) -> None:
        """Record a face record that produced no facet.

        :param index: The zero-based index of the face record.
        :param reason: Why the record was dropped.
        """
        logger.debug("Dropping face record %d: %s", index, reason)
        self.stats.facets_rejected += 1

    def build(self, format: FormatMode) -> PLYMesh:
        """Create a mesh from the records assembled so far.

        :param format: The encoding the records were decoded from.
        :return: The assembled mesh.
        """
        return PLYMesh(
            points=self._points[: self.stats.points_read].copy(),
            facets=self._facets[: self.stats.facets_read].copy(),
            vertex_colors=self._colors[: self.stats.points_read].copy(),
            format=format,
            stats=self.stats,
        )
