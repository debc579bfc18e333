import argparse
import logging
import pathlib

from plydecode import Material, PLYError, load_ply


def format_bytes(size: int) -> str:
    """Format a byte size into a human-readable string."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size < 1024:
            return f"{size:.2f} {unit}"

        size /= 1024

    return f"{size:.2f} TB"


def main() -> None:
    """Inspect a PLY mesh file and print what was decoded."""
    parser = argparse.ArgumentParser(description="Inspect PLY mesh files.")
    parser.add_argument("input", type=pathlib.Path, help="Path to the PLY file to inspect.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log dropped face records.")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.input.exists():
        print(f"Error: File '{args.input}' does not exist.")
        return

    print(f"=== Inspecting: {args.input.name} ===")
    print(f"File Size: {format_bytes(args.input.stat().st_size)}")

    material = Material()
    try:
        mesh = load_ply(args.input, material=material)
    except PLYError as e:
        print(f"Error loading PLY file: {e}")
        return

    print("\n[Decoded Mesh]")
    print(f"  Format: {mesh.format.value}")
    print(f"  Points: {mesh.num_points}")
    print(f"  Facets: {mesh.num_facets}")
    print(f"  Dropped Face Records: {mesh.stats.facets_rejected}")

    print("\n[Attributes]")
    print(f"  Vertex Colors: {'Yes' if mesh.has_vertex_colors else 'No'}")
    print(f"  Material Binding: {material.binding.value}")

    if mesh.num_points > 0:
        bounds_min = mesh.points.min(axis=0)
        bounds_max = mesh.points.max(axis=0)
        dimensions = bounds_max - bounds_min

        print("\n[Dimensions]")
        print(f"  Bounds: {dimensions[0]:.3f} x {dimensions[1]:.3f} x {dimensions[2]:.3f}")


if __name__ == "__main__":
    main()
