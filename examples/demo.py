#!/usr/bin/env python3
"""
SVG Voxel Engine Demo Script

This script demonstrates the full rendering pipeline by:
1. Building a few synthetic scenes (no input files needed)
2. Rendering them into merged outlines
3. Exporting to all supported formats
4. Printing statistics and comparisons

Run with: python examples/demo.py
"""

import sys
from pathlib import Path
import time

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from voxel_svg import VoxelEngine


def build_tower(size: int = 8) -> VoxelEngine:
    """
    A ground slab with a tower and a low wall.

    Returns:
        Populated engine
    """
    engine = VoxelEngine(size=size)
    engine.add_full_slab(1, "#55aa33")
    engine.add_box((3, 3, 2), "#cc5533", x_size=2, y_size=2, z_size=4)
    engine.add_box((6, 2, 2), "#3366cc", x_size=1, y_size=5, z_size=1)
    return engine


def build_steps(size: int = 8) -> VoxelEngine:
    """
    A staircase climbing along +x.

    Returns:
        Populated engine
    """
    engine = VoxelEngine(size=size)
    for step in range(size):
        engine.add_box((step + 1, 1, 1), "#808080", x_size=1, y_size=size, z_size=step + 1)
    return engine


def build_courtyard(size: int = 8) -> VoxelEngine:
    """
    A slab with a hole in the middle.

    The hole leaves the top region with an open outline.

    Returns:
        Populated engine
    """
    engine = VoxelEngine(size=size, light_cfg={"light": 15, "shadowHue": 10})
    engine.add_full_slab(1, "#ddcc44")
    engine.delete_box((3, 3, 1), x_size=size - 4, y_size=size - 4)
    return engine


def run_demo():
    """Run the demonstration."""
    print("=" * 60)
    print("SVG Voxel Engine - Demo")
    print("=" * 60)
    print()

    # Create output directory
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    scenes = [
        ("tower", build_tower(8)),
        ("steps", build_steps(8)),
        ("courtyard", build_courtyard(8)),
    ]

    total_start = time.time()

    for name, engine in scenes:
        print(f"\n--- Rendering: {name} ---")
        print(f"Voxels: {engine.voxel_count}, stages: {engine.max_z}")

        render_start = time.time()
        engine.render()
        render_time = time.time() - render_start

        stats = engine.get_render_stats()
        print(f"  Render: {render_time*1000:.1f}ms")
        print(f"  Triangles: {stats['triangle_count']} ({stats['visible_triangle_count']} visible)")
        print(f"  Chunks: {stats['chunk_count']}")
        print(f"  Outlines: {stats['outline_paths']} ({stats['open_outlines']} open)")
        print(f"  Path reduction: {stats['path_reduction_percent']:.1f}%")

        # Export to all formats
        print(f"\n  Exporting...")
        base_path = output_dir / name

        export_start = time.time()

        try:
            engine.export_svg(base_path.with_suffix(".svg"))
            print(f"    Saved: {base_path.with_suffix('.svg')}")
        except Exception as e:
            print(f"    SVG export failed: {e}")

        try:
            engine.export_png(base_path.with_suffix(".png"))
            print(f"    Saved: {base_path.with_suffix('.png')}")
        except Exception as e:
            print(f"    PNG export failed: {e}")

        export_time = time.time() - export_start
        print(f"    Export time: {export_time*1000:.1f}ms")

    total_time = time.time() - total_start

    print("\n" + "=" * 60)
    print(f"Demo complete! Total time: {total_time:.2f}s")
    print(f"Output files in: {output_dir}")
    print("=" * 60)

    return 0


def benchmark_render():
    """Benchmark render passes on growing slabs."""
    print("\n--- Render Benchmark ---\n")

    for size in [8, 16, 32, 64]:
        engine = VoxelEngine(size=size)
        engine.add_full_slab(1, "#55aa33")
        engine.add_box((size // 4, size // 4, 2), "#cc5533",
                       x_size=size // 2, y_size=size // 2, z_size=size // 4)

        start = time.time()
        engine.render()
        elapsed = time.time() - start

        stats = engine.get_render_stats()
        print(f"Grid size: {size}x{size}, {stats['voxel_count']} voxels")
        print(f"  Render: {elapsed*1000:.1f}ms")
        print(f"  {stats['triangle_paths']} triangles -> {stats['outline_paths']} outlines")
        print()


if __name__ == "__main__":
    run_demo()

    # Uncomment to run benchmark
    # benchmark_render()
