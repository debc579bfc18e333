"""Mesh data structures produced by the PLY decoder."""

from __future__ import annotations

__all__ = ["DecodeStats", "Material", "MaterialBinding", "PLYMesh"]

import dataclasses
import enum
import typing as t

if t.TYPE_CHECKING:
    import numpy as np
    import numpy.typing as npt

    from plydecode.header import FormatMode


class MaterialBinding(enum.Enum):
    """How colors in a :class:`Material` are associated with the mesh."""

    OVERALL = "overall"
    PER_VERTEX = "per_vertex"
    PER_FACE = "per_face"


@dataclasses.dataclass
class Material:
    """A caller-owned sink for colors found while decoding."""

    #: The binding mode. Set to ``PER_VERTEX`` when the file declares vertex colors.
    binding: MaterialBinding = MaterialBinding.OVERALL

    #: Normalized RGB colors, one per vertex when bound per vertex.
    diffuse_colors: list[tuple[float, float, float]] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class DecodeStats:
    """Counters describing what the body decoders produced and dropped."""

    #: Number of vertex records assembled into points.
    points_read: int = 0

    #: Number of face records assembled into facets.
    facets_read: int = 0

    #: Number of face records dropped without failing the load.
    facets_rejected: int = 0


@dataclasses.dataclass
class PLYMesh:
    """Decoded raw point and triangle data."""

    #: Point positions as (N, 3) float32 array.
    points: npt.NDArray[np.float32]

    #: Triangle vertex indices as (M, 3) integer array.
    facets: npt.NDArray[np.int64]

    #: Per-vertex normalized RGB colors as (N, 3) float32 array, or empty.
    vertex_colors: npt.NDArray[np.float32]

    #: The encoding the bodies were decoded from.
    format: FormatMode

    #: Counters collected while decoding.
    stats: DecodeStats = dataclasses.field(default_factory=DecodeStats)

    @property
    def num_points(self) -> int:
        """Number of points in the mesh."""
        return int(self.points.shape[0])

    @property
    def num_facets(self) -> int:
        """Number of facets in the mesh."""
        return int(self.facets.shape[0])

    @property
    def has_vertex_colors(self) -> bool:
        """Whether the mesh has per-vertex colors."""
        return self.vertex_colors.size > 0
