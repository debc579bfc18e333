"""Validation of the declared vertex schema."""

from __future__ import annotations

__all__ = ["COLOR_ROLES", "COORD_ROLES", "validate_schema"]

import collections
import typing as t

from plydecode.exceptions import PLYSchemaError
from plydecode.mesh import MaterialBinding
from plydecode.properties import PropertyRole

if t.TYPE_CHECKING:
    from plydecode.header import VertexProperty
    from plydecode.mesh import Material


#: Roles that must each appear exactly once.
COORD_ROLES: t.Final[tuple[PropertyRole, ...]] = (
    PropertyRole.COORD_X,
    PropertyRole.COORD_Y,
    PropertyRole.COORD_Z,
)

#: Roles that must appear together or not at all.
COLOR_ROLES: t.Final[tuple[PropertyRole, ...]] = (
    PropertyRole.COLOR_R,
    PropertyRole.COLOR_G,
    PropertyRole.COLOR_B,
)


def validate_schema(properties: t.Sequence[VertexProperty], material: Material | None = None) -> bool:
    """Check that vertex properties describe a point with optional RGB color.

    When a full color triple is declared and a material is given, the
    material is switched to per-vertex binding.

    :param properties: The vertex properties in declaration order.
    :param material: The material sink to bind, if any.
    :return: Whether the vertex records carry a color triple.
    :raises PLYSchemaError: If a coordinate is missing or repeated, or the color channels are incomplete.
    """
    counts = collections.Counter(p.role for p in properties)

    for role in COORD_ROLES:
        if counts[role] != 1:
            raise PLYSchemaError(f"Expected exactly one {role.name} property, found {counts[role]}")

    num_colors = sum(counts[role] for role in COLOR_ROLES)
    if num_colors not in (0, 3):
        raise PLYSchemaError(f"Expected zero or three color properties, found {num_colors}")

    has_colors = num_colors == 3
    if has_colors and material is not None:
        material.binding = MaterialBinding.PER_VERTEX

    return has_colors
