"""
Command-Line Interface for the SVG Voxel Engine

Usage:
    voxsvg --size 8 --slab 1 -o scene.svg
    voxsvg --size 8 --slab 1:#00FF00 --box 3,3,2:2x2x2:#FF0000 -o scene
    voxsvg --size 4 --slab 1 --delete-box 2,2,1 -o ring --format svg png

"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

from .color import LightConfig, normalize_hex
from .engine import VoxelEngine


def parse_position(text: str) -> Tuple[int, int, int]:
    """Parse "x,y,z" into an integer triple."""
    try:
        x, y, z = (int(part) for part in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid position {text!r}, expected X,Y,Z"
        ) from None
    return (x, y, z)


def parse_sizes(text: str) -> Tuple[int, int, int]:
    """Parse "WxDxH" into box extents."""
    try:
        sizes = tuple(int(part) for part in text.lower().split("x"))
    except ValueError:
        sizes = ()
    if len(sizes) != 3 or min(sizes) < 1:
        raise argparse.ArgumentTypeError(
            f"Invalid box size {text!r}, expected WxDxH with positive integers"
        )
    return sizes


def parse_color(text: str) -> str:
    """Validate a hex color."""
    try:
        return normalize_hex(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def parse_slab(text: str) -> Tuple[int, str, int]:
    """Parse "STAGE[:COLOR[:OFFSET]]"."""
    parts = text.split(":")
    try:
        stage = int(parts[0])
        color = parse_color(parts[1]) if len(parts) > 1 and parts[1] else "#00ff00"
        offset = int(parts[2]) if len(parts) > 2 else 0
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"Invalid slab {text!r}, expected STAGE[:COLOR[:OFFSET]]"
        ) from None
    return (stage, color, offset)


def parse_box(text: str) -> Tuple[Tuple[int, int, int], Tuple[int, int, int], str]:
    """Parse "X,Y,Z:WxDxH[:COLOR]"."""
    parts = text.split(":")
    if len(parts) < 2:
        raise argparse.ArgumentTypeError(
            f"Invalid box {text!r}, expected X,Y,Z:WxDxH[:COLOR]"
        )
    color = parse_color(parts[2]) if len(parts) > 2 else "#ff0000"
    return (parse_position(parts[0]), parse_sizes(parts[1]), color)


def parse_voxel(text: str) -> Tuple[Tuple[int, int, int], str]:
    """Parse "X,Y,Z[:COLOR]"."""
    parts = text.split(":")
    color = parse_color(parts[1]) if len(parts) > 1 else "#ff0000"
    return (parse_position(parts[0]), color)


def parse_region(text: str) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Parse "X,Y,Z[:WxDxH]"."""
    parts = text.split(":")
    sizes = parse_sizes(parts[1]) if len(parts) > 1 else (1, 1, 1)
    return (parse_position(parts[0]), sizes)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="voxsvg",
        description="SVG Voxel Engine - Render isometric voxel scenes as merged SVG outlines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  voxsvg --size 8 --slab 1 -o scene.svg
      A green 8x8 ground slab

  voxsvg --size 8 --slab 1 --box 3,3,2:2x2x3:#FF0000 -o scene
      A red 2x2x3 tower standing on the slab

  voxsvg --size 4 --slab 1 --delete-box 2,2,1:2x2x1 -o ring --format svg png
      A slab with a square hole, exported to SVG and PNG

Scene construction flags are applied in this order:
  --slab, --box, --voxel, --delete-box
        """
    )

    # Output
    parser.add_argument(
        "-o", "--output",
        default="scene.svg",
        help="Output file path (extension replaced per format, default: scene.svg)"
    )

    parser.add_argument(
        "-f", "--format",
        nargs="+",
        choices=["svg", "png"],
        default=["svg"],
        help="Output format(s) (default: svg)"
    )

    parser.add_argument(
        "--background",
        default="gray",
        help="Background color (default: gray)"
    )

    # Scene settings
    parser.add_argument(
        "--width",
        type=float,
        default=500,
        help="Surface width (default: 500)"
    )

    parser.add_argument(
        "--height",
        type=float,
        default=500,
        help="Surface height (default: 500)"
    )

    parser.add_argument(
        "--size",
        type=int,
        default=16,
        help="Grid edge length in voxels (default: 16)"
    )

    parser.add_argument(
        "--depth-ratio",
        type=float,
        default=0.5,
        help="Voxel y size / x size ratio (default: 0.5)"
    )

    parser.add_argument(
        "--voxel-offset",
        type=float,
        default=1,
        help="Margin around the grid, in voxels (default: 1)"
    )

    # Light settings
    defaults = LightConfig()
    parser.add_argument(
        "--light",
        type=float,
        default=defaults.light,
        help=f"Lighten percentage of the lit face (default: {defaults.light})"
    )

    parser.add_argument(
        "--light-face",
        choices=["top", "left", "right"],
        default=defaults.light_face,
        help=f"Lit face (default: {defaults.light_face})"
    )

    parser.add_argument(
        "--light-hue",
        type=float,
        default=defaults.light_hue,
        help=f"Hue shift of the lit face in degrees (default: {defaults.light_hue})"
    )

    parser.add_argument(
        "--shadow",
        type=float,
        default=defaults.shadow,
        help=f"Darken percentage of the shadowed face (default: {defaults.shadow})"
    )

    parser.add_argument(
        "--shadow-face",
        choices=["top", "left", "right"],
        default=defaults.shadow_face,
        help=f"Shadowed face (default: {defaults.shadow_face})"
    )

    parser.add_argument(
        "--shadow-hue",
        type=float,
        default=defaults.shadow_hue,
        help=f"Hue shift of the shadowed face in degrees (default: {defaults.shadow_hue})"
    )

    # Scene construction
    parser.add_argument(
        "--slab",
        type=parse_slab,
        action="append",
        default=[],
        metavar="STAGE[:COLOR[:OFFSET]]",
        help="Fill a whole stage"
    )

    parser.add_argument(
        "--box",
        type=parse_box,
        action="append",
        default=[],
        metavar="X,Y,Z:WxDxH[:COLOR]",
        help="Add a box of voxels"
    )

    parser.add_argument(
        "--voxel",
        type=parse_voxel,
        action="append",
        default=[],
        metavar="X,Y,Z[:COLOR]",
        help="Add a single voxel"
    )

    parser.add_argument(
        "--delete-box",
        type=parse_region,
        action="append",
        default=[],
        metavar="X,Y,Z[:WxDxH]",
        help="Delete a box of voxels"
    )

    # Misc
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output with debug logging"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print render statistics"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0"
    )

    return parser


def build_engine(args) -> VoxelEngine:
    """Create an engine and apply the scene construction flags."""
    light_cfg = LightConfig(
        light=args.light,
        light_face=args.light_face,
        light_hue=args.light_hue,
        shadow=args.shadow,
        shadow_face=args.shadow_face,
        shadow_hue=args.shadow_hue
    )

    engine = VoxelEngine(
        width=args.width,
        height=args.height,
        size=args.size,
        depth_ratio=args.depth_ratio,
        light_cfg=light_cfg,
        voxel_offset=args.voxel_offset
    )

    for stage, color, offset in args.slab:
        engine.add_full_slab(stage, color, offset)

    for position, (x_size, y_size, z_size), color in args.box:
        engine.add_box(position, color, x_size, y_size, z_size)

    for position, color in args.voxel:
        engine.add_voxel(position, color)

    for position, (x_size, y_size, z_size) in args.delete_box:
        engine.delete_box(position, x_size, y_size, z_size)

    return engine


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    output_base = Path(args.output).with_suffix("")
    start_time = time.time()

    try:
        engine = build_engine(args)

        if engine.voxel_count == 0:
            print("Error: The scene is empty, add voxels with --slab, --box or --voxel",
                  file=sys.stderr)
            return 1

        if args.verbose:
            print(f"Rendering {engine.voxel_count} voxels...")

        engine.render()

        if args.stats or args.verbose:
            stats = engine.get_render_stats()
            print("\nRender Statistics:")
            print(f"  Voxels: {stats['voxel_count']}")
            print(f"  Triangles: {stats['triangle_count']}")
            print(f"  Visible triangles: {stats['visible_triangle_count']}")
            print(f"  Chunks: {stats['chunk_count']}")
            print(f"  Outlines: {stats['outline_paths']}")
            print(f"  Open outlines: {stats['open_outlines']}")
            print(f"  Path reduction: {stats['path_reduction_percent']:.1f}%")

        for fmt in args.format:
            if fmt == "svg":
                output_path = output_base.with_suffix(".svg")
                engine.export_svg(output_path, background=args.background)
            elif fmt == "png":
                output_path = output_base.with_suffix(".png")
                engine.export_png(output_path, background=args.background)
            if args.verbose:
                print(f"Exported: {output_path}")

        elapsed = time.time() - start_time
        if args.verbose:
            print(f"\nCompleted in {elapsed:.2f}s")

        return 0

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
