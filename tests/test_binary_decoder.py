import struct
import typing as t

import numpy as np
import pytest

from plydecode import FormatMode, Material, MaterialBinding, PLYDecodeError, load_ply

BinaryPLYFactory = t.Callable[..., bytes]

#: Three points forming a unit right triangle.
POINTS = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0)]


def triangle_record(a: int, b: int, c: int, byte_order: str = "<") -> bytes:
    """Pack a face record with a uint8 count and three uint32 indices."""
    return struct.pack(f"{byte_order}B3I", 3, a, b, c)


class TestBinaryVertices:
    """Tests for decoding binary vertex records."""

    @pytest.mark.parametrize("byte_order", ["<", ">"])
    def test_points_and_facets(self, make_binary_ply: BinaryPLYFactory, byte_order: str) -> None:
        """Decode points and facets in either byte order."""
        data = make_binary_ply(POINTS, [triangle_record(0, 1, 2, byte_order)], byte_order=byte_order)

        mesh = load_ply(data)

        expected_format = FormatMode.BINARY_BIG_ENDIAN if byte_order == ">" else FormatMode.BINARY_LITTLE_ENDIAN
        assert mesh.format is expected_format
        np.testing.assert_array_equal(mesh.points, POINTS)
        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2]])

    def test_mixed_property_types(self) -> None:
        """Widen integers and narrow doubles, consuming generic properties."""
        header = (
            b"ply\n"
            b"format binary_little_endian 1.0\n"
            b"element vertex 1\n"
            b"property char flags\n"
            b"property double x\n"
            b"property short y\n"
            b"property ushort quality\n"
            b"property int z\n"
            b"end_header\n"
        )
        body = struct.pack("<bdhHi", -1, 0.1, -300, 65535, 70000)

        mesh = load_ply(header + body)

        assert mesh.points[0, 0] == np.float32(0.1)
        assert mesh.points[0, 1] == -300.0
        assert mesh.points[0, 2] == 70000.0

    def test_colors(self) -> None:
        """Decode uchar colors into normalized per-vertex colors."""
        header = (
            b"ply\n"
            b"format binary_big_endian 1.0\n"
            b"element vertex 2\n"
            b"property float x\n"
            b"property float y\n"
            b"property float z\n"
            b"property uchar red\n"
            b"property uchar green\n"
            b"property uchar blue\n"
            b"property uchar alpha\n"
            b"end_header\n"
        )
        body = struct.pack(">3f4B", 0, 0, 0, 255, 0, 0, 128) + struct.pack(">3f4B", 1, 1, 1, 0, 102, 255, 128)
        material = Material()

        mesh = load_ply(header + body, material=material)

        assert material.binding is MaterialBinding.PER_VERTEX
        assert len(material.diffuse_colors) == 2
        np.testing.assert_array_equal(
            mesh.vertex_colors,
            np.array([[255, 0, 0], [0, 102, 255]], dtype=np.float32) / np.float32(255),
        )

    def test_truncated_vertex_body(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Fail when the body ends inside a vertex record."""
        data = make_binary_ply(POINTS, [])

        with pytest.raises(PLYDecodeError, match="vertex record 2"):
            load_ply(data[:-4])

    def test_truncated_face_body(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Fail when the body ends inside a face record."""
        data = make_binary_ply(POINTS, [triangle_record(0, 1, 2), triangle_record(0, 1, 2)])

        with pytest.raises(PLYDecodeError, match="face record 1"):
            load_ply(data[:-1])


class TestBinaryFaces:
    """Tests for decoding binary face records."""

    def test_out_of_range_facet_dropped(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Drop a facet with an index past the vertex count and keep the cursor aligned."""
        faces = [triangle_record(0, 1, 3), triangle_record(2, 1, 0)]
        data = make_binary_ply(POINTS, faces)

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[2, 1, 0]])
        assert mesh.stats.facets_read == 1
        assert mesh.stats.facets_rejected == 1

    def test_non_triangle_count_skips_index_read(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Drop a record whose count is not 3 without reading indices."""
        faces = [b"\x04", triangle_record(0, 1, 2)]
        data = make_binary_ply(POINTS, faces)

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2]])
        assert mesh.stats.facets_rejected == 1

    def test_scalar_face_properties_skipped(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Skip trailing scalar face properties by width."""
        trailer = struct.pack("<Bi", 7, -1)
        faces = [triangle_record(0, 1, 2) + trailer, triangle_record(1, 2, 0) + trailer]
        data = make_binary_ply(
            POINTS,
            faces,
            face_properties=["property uchar flags", "property int material_index"],
        )

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2], [1, 2, 0]])

    def test_float_face_lists_skipped(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Skip length-prefixed float lists after the index list."""
        texcoords = struct.pack("<B6f", 6, 0, 0, 1, 0, 0, 1)
        weights = struct.pack("<B2d", 2, 0.5, 0.5)
        faces = [triangle_record(0, 1, 2) + texcoords + weights, triangle_record(2, 0, 1) + texcoords + weights]
        data = make_binary_ply(
            POINTS,
            faces,
            face_properties=["property list uchar float texcoord", "property list uchar double weights"],
        )

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2], [2, 0, 1]])

    def test_face_properties_consumed_after_dropped_facet(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Consume trailing properties of a dropped facet so the next record decodes."""
        trailer = struct.pack("<H", 0xBEEF)
        faces = [triangle_record(9, 9, 9) + trailer, triangle_record(0, 1, 2) + trailer]
        data = make_binary_ply(POINTS, faces, face_properties=["property ushort quality"])

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2]])
        assert mesh.stats.facets_rejected == 1

    def test_face_properties_consumed_after_non_triangle(self, make_binary_ply: BinaryPLYFactory) -> None:
        """Consume trailing properties of a record whose count is not 3."""
        faces = [b"\x00" + b"\x05", triangle_record(0, 1, 2) + b"\x06"]
        data = make_binary_ply(POINTS, faces, face_properties=["property uchar flags"])

        mesh = load_ply(data)

        np.testing.assert_array_equal(mesh.facets, [[0, 1, 2]])
