"""
Unit tests for colors, the engine facade, exporters and the CLI.
"""

import sys
import tempfile
from pathlib import Path
import argparse
import unittest
import xml.etree.ElementTree as ET

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from PIL import Image

from voxel_svg import VoxelEngine
from voxel_svg.cli import main, parse_box, parse_position, parse_slab
from voxel_svg.color import (
    ColorShader, LightConfig, darken_color, hex_to_rgb, hue_shift,
    lighten_color, normalize_hex,
)
from voxel_svg.exporters import PNGExporter, SVGExporter, make_path_data
from voxel_svg.faces import Orientation, Point
from voxel_svg.merger import Outline


class TestColor(unittest.TestCase):
    """Tests for color helpers."""

    def test_normalize_hex(self):
        """Test hex normalization."""
        assert normalize_hex("#ABC") == "#aabbcc"
        assert normalize_hex("FF0000") == "#ff0000"
        for bad in ["", "#12", "#gggggg", None]:
            with self.assertRaises(ValueError):
                normalize_hex(bad)

    def test_lighten_darken(self):
        """Test additive channel shifts."""
        assert lighten_color("#000000", 20) == "#333333"
        assert darken_color("#ffffff", 20) == "#cccccc"
        assert lighten_color("#102030", 200) == "#ffffff"
        assert darken_color("#102030", 200) == "#000000"

    def test_darken_lighten_inverse(self):
        """Test that darken undoes lighten away from the clamps."""
        for color in ["#3366cc", "#808080", "#22aa55"]:
            assert darken_color(lighten_color(color, 20), 20) == color

    def test_hue_shift_primaries(self):
        """Test exact hue rotations."""
        assert hue_shift("#ff0000", 120) == "#00ff00"
        assert hue_shift("#ff0000", 240) == "#0000ff"
        assert hue_shift("#ff0000", 360) == "#ff0000"
        assert hue_shift("#00ff00", -120) == "#ff0000"

    def test_hue_shift_roundtrip(self):
        """Test that shifting back and forth stays close."""
        for color in ["#ff0000", "#3366cc", "#22aa55", "#808080"]:
            back = hue_shift(hue_shift(color, 40), -40)
            for a, b in zip(hex_to_rgb(color), hex_to_rgb(back)):
                assert abs(a - b) <= 3

    def test_light_config_from_dict(self):
        """Test camelCase light options."""
        cfg = LightConfig.from_dict({"lightFace": "left", "shadow": 40})
        assert cfg.light_face == "left"
        assert cfg.shadow == 40
        assert cfg.shadow_face == "right"

        with self.assertRaises(ValueError):
            LightConfig.from_dict({"glow": 1})


class TestColorShader(unittest.TestCase):
    """Tests for ColorShader class."""

    def test_default_faces(self):
        """Test the default light setup."""
        shader = ColorShader()
        color = "#3366cc"

        assert shader.face_color(Orientation.TOP, color) == lighten_color(hue_shift(color, 5), 10)
        assert shader.face_color(Orientation.RIGHT, color) == darken_color(hue_shift(color, 20), 30)
        assert shader.face_color(Orientation.LEFT, color) == color

    def test_unknown_orientation(self):
        """Test that unknown faces keep the base color."""
        assert ColorShader().face_color("bottom", "#3366cc") == "#3366cc"

    def test_cache(self):
        """Test memoization per orientation and color."""
        shader = ColorShader()
        shader.face_color(Orientation.TOP, "#3366cc")
        shader.face_color("top", "#3366cc")
        assert shader.cache_size == 1

        shader.face_color(Orientation.RIGHT, "#3366cc")
        assert shader.cache_size == 2

        shader.clear_cache()
        assert shader.cache_size == 0

    def test_custom_light(self):
        """Test a custom light setup."""
        shader = ColorShader(LightConfig(light=0, light_hue=0, light_face="left"))
        assert shader.face_color(Orientation.LEFT, "#3366cc") == hue_shift("#3366cc", 0)
        assert shader.face_color(Orientation.TOP, "#3366cc") == "#3366cc"


class TestExporters(unittest.TestCase):
    """Tests for SVG and PNG exporters."""

    def setUp(self):
        self.outlines = [
            Outline("1#ff0000", "#ff0000",
                    (Point(10, 10), Point(40, 10.5), Point(40, 40), Point(10, 40)), 0),
            Outline("2#00ff00", "#00ff00", (), 0),
        ]

    def test_path_data(self):
        """Test path data formatting."""
        data = make_path_data([(0, 0), (10.25, 5), (1 / 3, 2)])
        assert data == "M 0 0 L 10.25 5 L 0.333 2 Z"
        assert make_path_data([]) == ""

    def test_svg_string(self):
        """Test SVG document structure."""
        content = SVGExporter(background="#123456").to_string(self.outlines, 100, 80)
        root = ET.fromstring(content)
        ns = "{http://www.w3.org/2000/svg}"

        assert root.tag == f"{ns}svg"
        assert root.get("viewBox") == "0 0 100 80"
        assert root.find(f"{ns}rect").get("fill") == "#123456"

        paths = root.findall(f"{ns}path")
        assert len(paths) == 1
        assert paths[0].get("id") == "chunk-1ff0000"
        assert paths[0].get("fill") == "#ff0000"
        assert paths[0].get("d").startswith("M 10 10 L 40 10.5")

    def test_svg_export(self):
        """Test SVG file export."""
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "out.svg"
            SVGExporter().export(self.outlines, path, 100, 80)
            text = path.read_text(encoding="utf-8")
            assert text.startswith("<?xml")
            assert "<path" in text

    def test_empty_export(self):
        """Test that empty outline sets are rejected."""
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                SVGExporter().export([], Path(tmpdir) / "out.svg", 100, 80)
            with self.assertRaises(ValueError):
                PNGExporter().export([], Path(tmpdir) / "out.png", 100, 80)

    def test_png_render(self):
        """Test raster preview."""
        image = PNGExporter(background="white", supersample=1).render(self.outlines, 100, 80)
        assert image.size == (100, 80)
        assert image.getpixel((25, 25)) == (255, 0, 0)
        assert image.getpixel((90, 70)) == (255, 255, 255)


class TestVoxelEngine(unittest.TestCase):
    """Tests for VoxelEngine class."""

    def test_add_delete(self):
        """Test voxel mutation."""
        engine = VoxelEngine(size=4)
        assert engine.add_voxel((1, 1, 1), "#FF0000") is not None
        assert engine.add_voxel((9, 1, 1), "#FF0000") is None
        assert engine.voxel_count == 1

        engine.delete_voxel((1, 1, 1))
        engine.delete_voxel((1, 1, 1))
        assert engine.voxel_count == 0

    def test_boxes_and_slabs(self):
        """Test box helpers."""
        engine = VoxelEngine(size=4)
        assert len(engine.add_full_slab(1, "#00ff00")) == 16
        assert len(engine.add_full_slab(2, "#00ff00", offset=1)) == 4
        assert engine.max_z == 2

        engine.add_box((1, 1, 3), "#ff0000", x_size=2, y_size=2, z_size=2)
        assert engine.voxel_count == 28
        assert engine.max_z == 4

        engine.delete_box((1, 1, 3), 2, 2, 2)
        assert engine.voxel_count == 20
        assert engine.max_z == 2
        assert engine.get_voxel_at((2, 2, 2)).color == "#00ff00"

    def test_box_clipped(self):
        """Test that boxes crossing the border are clipped."""
        engine = VoxelEngine(size=4)
        voxels = engine.add_box((3, 3, 1), "#ff0000", x_size=3, y_size=3)
        assert len(voxels) == 4

    def test_render_slab(self):
        """Test a full render pass."""
        engine = VoxelEngine(size=4)
        engine.add_full_slab(1, "#00ff00")
        outlines = engine.render()

        assert len(outlines) == 3
        assert engine.outlines == outlines

        stats = engine.get_render_stats()
        assert stats["voxel_count"] == 16
        assert stats["triangle_count"] == 96
        assert stats["outline_paths"] == 3
        assert stats["open_outlines"] == 0
        assert stats["max_z"] == 1

    def test_stats_before_render(self):
        """Test stats of an engine that never rendered."""
        assert "error" in VoxelEngine(size=2).get_render_stats()

    def test_empty_render(self):
        """Test that an empty scene renders nothing."""
        engine = VoxelEngine(size=4)
        assert engine.render() == []
        assert engine.max_z == 0

    def test_light_dict(self):
        """Test light options passed as a mapping."""
        engine = VoxelEngine(size=2, light_cfg={"light": 0, "lightHue": 0})
        assert engine.shader.light_cfg.light == 0
        assert engine.shader.face_color(Orientation.TOP, "#3366cc") == hue_shift("#3366cc", 0)

    def test_to_svg_rerenders(self):
        """Test that serialization picks up scene changes."""
        engine = VoxelEngine(size=4)
        engine.add_voxel((1, 1, 1), "#ff0000")
        first = engine.to_svg()
        assert first.count("<path") == 3

        engine.add_voxel((4, 4, 1), "#0000ff")
        second = engine.to_svg()
        assert second.count("<path") == 6

    def test_export_all(self):
        """Test multi-format export."""
        engine = VoxelEngine(width=200, height=200, size=4)
        engine.add_full_slab(1, "#00ff00")
        engine.add_voxel((2, 2, 2), "#ff0000")

        with tempfile.TemporaryDirectory() as tmpdir:
            base = Path(tmpdir) / "scene"
            engine.export_all(base, ["svg", "png"])

            assert base.with_suffix(".svg").exists()
            with Image.open(base.with_suffix(".png")) as image:
                assert image.size == (200, 200)

    def test_export_empty_fails(self):
        """Test exporting an empty scene."""
        engine = VoxelEngine(size=4)
        with tempfile.TemporaryDirectory() as tmpdir:
            with self.assertRaises(ValueError):
                engine.export_svg(Path(tmpdir) / "scene.svg")


class TestCLI(unittest.TestCase):
    """Tests for the command-line interface."""

    def test_parse_helpers(self):
        """Test argument parsing helpers."""
        assert parse_position("1,2,3") == (1, 2, 3)
        assert parse_slab("2") == (2, "#00ff00", 0)
        assert parse_slab("1:#ABC:1") == (1, "#aabbcc", 1)
        assert parse_box("1,1,2:2x2x3:#0000FF") == ((1, 1, 2), (2, 2, 3), "#0000ff")

        for bad in ["1,2", "a,b,c"]:
            with self.assertRaises(argparse.ArgumentTypeError):
                parse_position(bad)
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_box("1,1,1")
        with self.assertRaises(argparse.ArgumentTypeError):
            parse_box("1,1,1:0x1x1")

    def test_main_writes_svg(self):
        """Test a full CLI run."""
        with tempfile.TemporaryDirectory() as tmpdir:
            output = Path(tmpdir) / "scene.svg"
            code = main([
                "--size", "4",
                "--slab", "1",
                "--box", "2,2,2:1x1x2:#FF0000",
                "--delete-box", "4,4,1",
                "-o", str(output),
                "-f", "svg", "png",
            ])

            assert code == 0
            assert output.exists()
            assert output.with_suffix(".png").exists()

    def test_main_empty_scene(self):
        """Test that an empty scene is an error."""
        with tempfile.TemporaryDirectory() as tmpdir:
            code = main(["--size", "4", "-o", str(Path(tmpdir) / "scene.svg")])
            assert code == 1


if __name__ == "__main__":
    unittest.main()
