#!/usr/bin/env python3
"""
SVG Voxel Engine Web Interface

A simple Gradio-based web UI for building isometric voxel scenes and
downloading them as merged-outline SVG.

Run with: python app.py
Then open http://localhost:7860 in your browser
"""

import argparse
import sys
from pathlib import Path
import tempfile

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import gradio as gr
from voxel_svg import VoxelEngine, LightConfig
from voxel_svg.cli import parse_box


DEMO_SCENES = {
    "Tower": "1,1,1:8x8x1:#55aa33\n3,3,2:2x2x4:#cc5533\n6,5,2:2x1x1:#3366cc",
    "Steps": "1,1,1:8x8x1:#808080\n1,1,2:8x2x1:#3366cc\n1,1,3:8x1x1:#3366cc",
    "Pillars": "1,1,1:8x8x1:#22aa55\n2,2,2:1x1x3:#ddcc44\n7,2,2:1x1x3:#ddcc44\n"
               "2,7,2:1x1x3:#ddcc44\n7,7,2:1x1x3:#ddcc44",
}


def render_scene(
    scene_text: str,
    size: int,
    depth_ratio: float,
    light: float,
    light_face: str,
    shadow: float,
    shadow_face: str,
    background: str,
    export_png: bool
):
    """
    Render a scene description and export it.

    Each line of the scene is a box: X,Y,Z:WxDxH[:COLOR]

    Returns preview html, stats text, and file paths for downloads.
    """
    if not scene_text or not scene_text.strip():
        return "", "Describe at least one box first.", None, None

    engine = VoxelEngine(
        size=int(size),
        depth_ratio=depth_ratio,
        light_cfg=LightConfig(
            light=light,
            light_face=light_face.lower(),
            shadow=shadow,
            shadow_face=shadow_face.lower()
        )
    )

    for line_number, line in enumerate(scene_text.splitlines(), start=1):
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            position, (x_size, y_size, z_size), color = parse_box(line)
        except argparse.ArgumentTypeError as e:
            return "", f"Line {line_number}: {e}", None, None
        engine.add_box(position, color, x_size, y_size, z_size)

    if engine.voxel_count == 0:
        return "", "No voxel fits inside the grid.", None, None

    engine.render()
    stats = engine.get_render_stats()

    stats_text = f"""## Render Complete!

| Metric | Value |
|--------|-------|
| Grid Size | {int(size)} x {int(size)}, {stats['max_z']} stages |
| Voxel Count | {stats['voxel_count']:,} |
| Triangles | {stats['triangle_count']:,} |
| Visible Triangles | {stats['visible_triangle_count']:,} |
| Outlines | {stats['outline_paths']:,} |
| Open Outlines | {stats['open_outlines']:,} |
| Path Reduction | {stats['path_reduction_percent']:.1f}% |

**Settings:** Depth ratio={depth_ratio}, Light={light}% on {light_face}, Shadow={shadow}% on {shadow_face}
"""

    # Create temp directory for exports
    export_dir = tempfile.mkdtemp(prefix="voxsvg_")

    svg_path = str(Path(export_dir) / "scene.svg")
    engine.export_svg(svg_path, background=background)

    png_path = None
    if export_png:
        png_path = str(Path(export_dir) / "scene.png")
        engine.export_png(png_path, background=background)

    return engine.to_svg(background=background), stats_text, svg_path, png_path


def load_demo_scene(name: str):
    """Get the text of a demo scene."""
    return DEMO_SCENES.get(name, "")


# Build the Gradio interface
with gr.Blocks(title="SVG Voxel Engine") as app:

    gr.Markdown("""
    # SVG Voxel Engine
    ### Isometric Voxel Scenes as Minimal SVG

    Describe a scene with boxes, adjust the light, and download the SVG!
    """)

    with gr.Row():
        # Left column - Scene
        with gr.Column(scale=1):
            gr.Markdown("### Scene")

            scene_input = gr.Textbox(
                label="Boxes, one per line (X,Y,Z:WxDxH[:COLOR])",
                lines=8,
                value=DEMO_SCENES["Tower"]
            )

            with gr.Row():
                demo_dropdown = gr.Dropdown(
                    choices=list(DEMO_SCENES),
                    label="Or try a demo"
                )
                demo_btn = gr.Button("Load Demo")

            gr.Markdown("### Settings")

            size = gr.Slider(
                minimum=1,
                maximum=32,
                value=8,
                step=1,
                label="Grid Size"
            )

            depth_ratio = gr.Slider(
                minimum=0.2,
                maximum=1.0,
                value=0.5,
                step=0.05,
                label="Depth Ratio"
            )

            light = gr.Slider(
                minimum=0,
                maximum=100,
                value=10,
                step=1,
                label="Light (%)"
            )

            light_face = gr.Dropdown(
                choices=["Top", "Left", "Right"],
                value="Top",
                label="Lit Face"
            )

            shadow = gr.Slider(
                minimum=0,
                maximum=100,
                value=30,
                step=1,
                label="Shadow (%)"
            )

            shadow_face = gr.Dropdown(
                choices=["Top", "Left", "Right"],
                value="Right",
                label="Shadowed Face"
            )

            background = gr.Textbox(value="gray", label="Background")

            export_png = gr.Checkbox(value=False, label="Also export PNG")

            render_btn = gr.Button("Render Scene", variant="primary")

        # Middle column - Preview
        with gr.Column(scale=2):
            gr.Markdown("### Preview")

            svg_preview = gr.HTML()

            stats_output = gr.Markdown(
                value="Describe a scene and click 'Render' to see results."
            )

        # Right column - Downloads
        with gr.Column(scale=1):
            gr.Markdown("### Downloads")

            svg_output = gr.File(label="SVG")
            png_output = gr.File(label="PNG (preview)")

            gr.Markdown("""
            ---
            **Tips:**
            - Positions start at **1,1,1**
            - **X** runs down-right, **Y** up-right
            - Later boxes overwrite earlier ones
            - Holes in a region show up as **open outlines**
            """)

    # Wire up events
    demo_btn.click(
        fn=load_demo_scene,
        inputs=[demo_dropdown],
        outputs=[scene_input]
    )

    render_btn.click(
        fn=render_scene,
        inputs=[
            scene_input,
            size,
            depth_ratio,
            light,
            light_face,
            shadow,
            shadow_face,
            background,
            export_png
        ],
        outputs=[svg_preview, stats_output, svg_output, png_output]
    )


if __name__ == "__main__":
    print("\n" + "="*60)
    print("SVG Voxel Engine Web Interface")
    print("="*60)
    print("\nStarting server...")
    print("Open http://localhost:7860 in your browser\n")

    app.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False
    )
