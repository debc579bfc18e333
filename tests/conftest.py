import struct
import typing as t

import numpy as np
import pytest

from plydecode import FormatMode, PLYMesh

#: The header lines of an ASCII triangle with float coordinates.
TRIANGLE_HEADER = """ply
format ascii 1.0
element vertex 3
property float x
property float y
property float z
element face 1
property list uchar int vertex_indices
end_header
"""

#: An ASCII PLY file with three points and one triangle.
TRIANGLE_PLY = TRIANGLE_HEADER + "0 0 0\n1 0 0\n0 1 0\n3 0 1 2\n"

#: An ASCII PLY file with per-vertex colors and a generic normal property.
COLORED_PLY = """ply
format ascii 1.0
comment colored triangle
element vertex 3
property float x
property float y
property float z
property float nx
property uchar red
property uchar green
property uchar blue
element face 1
property list uchar int vertex_indices
end_header
0 0 0 0.5 255 0 0
1 0 0 0.5 0 255 0
0 1 0 0.5 0 51 255
3 0 1 2
"""


@pytest.fixture
def triangle_ply() -> bytes:
    """An ASCII PLY file with three points and one triangle."""
    return TRIANGLE_PLY.encode("ascii")


@pytest.fixture
def colored_ply() -> bytes:
    """An ASCII PLY file with per-vertex colors."""
    return COLORED_PLY.encode("ascii")


@pytest.fixture
def make_binary_ply() -> t.Callable[..., bytes]:
    """A factory for binary PLY files with float x, y, z vertices."""

    def factory(
        points: list[tuple[float, float, float]],
        faces: list[bytes],
        *,
        byte_order: str = "<",
        face_properties: t.Sequence[str] = (),
    ) -> bytes:
        name = "binary_big_endian" if byte_order == ">" else "binary_little_endian"
        lines = [
            "ply",
            f"format {name} 1.0",
            f"element vertex {len(points)}",
            "property float x",
            "property float y",
            "property float z",
            f"element face {len(faces)}",
            "property list uchar int vertex_indices",
            *face_properties,
            "end_header",
        ]
        header = ("\n".join(lines) + "\n").encode("ascii")
        body = b"".join(struct.pack(f"{byte_order}3f", *p) for p in points)

        return header + body + b"".join(faces)

    return factory


@pytest.fixture
def simple_mesh() -> PLYMesh:
    """A simple mesh without colors."""
    return PLYMesh(
        points=np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]], dtype=np.float32),
        facets=np.array([[0, 1, 2]], dtype=np.int64),
        vertex_colors=np.empty((0, 3), dtype=np.float32),
        format=FormatMode.ASCII,
    )


@pytest.fixture
def empty_mesh() -> PLYMesh:
    """An empty mesh with no points, facets or colors."""
    return PLYMesh(
        points=np.empty((0, 3), dtype=np.float32),
        facets=np.empty((0, 3), dtype=np.int64),
        vertex_colors=np.empty((0, 3), dtype=np.float32),
        format=FormatMode.BINARY_LITTLE_ENDIAN,
    )
