"""
Color Management Module

Handles:
- Hex color parsing and normalization
- Lighten / darken by a percentage (per-channel additive, clamped)
- Hue rotation through an HSL round trip
- Face shading from a light configuration (ColorShader)

Shading Background:
- Each voxel face orientation (top, left, right) is drawn flat
- The lit face is hue-shifted and lightened, the shadowed face is
  hue-shifted and darkened, the remaining face keeps the base color
- Results are memoized per (orientation, base color)
"""

import math
from dataclasses import dataclass
from typing import Dict, Tuple
from numba import njit


@njit(cache=True)
def _rgb_to_hsl(r: float, g: float, b: float) -> Tuple[float, float, float]:
    """
    Convert normalized RGB to HSL.

    Args:
        r, g, b: Channel values normalized to [0, 1]

    Returns:
        (h, s, l) with h in degrees; h may be negative for red-dominant
        colors and is wrapped by the caller
    """
    c_max = max(r, g, b)
    c_min = min(r, g, b)
    delta = c_max - c_min
    l = (c_max + c_min) / 2.0

    if delta == 0.0:
        return 0.0, 0.0, l

    if c_max == r:
        h = 60.0 * ((g - b) / delta)
    elif c_max == g:
        h = 60.0 * ((b - r) / delta + 2.0)
    else:
        h = 60.0 * ((r - g) / delta + 4.0)

    s = delta / (1.0 - abs(2.0 * l - 1.0))
    return h, s, l


@njit(cache=True)
def _to_channel(value: float, m: float) -> int:
    """Scale a chroma component back to a 0-255 channel (floored)."""
    channel = int(math.floor((value + m) * 255.0))
    if channel < 0:
        channel = 0
    elif channel > 255:
        channel = 255
    return channel


@njit(cache=True)
def _hsl_to_rgb(h: float, s: float, l: float) -> Tuple[int, int, int]:
    """
    Convert HSL to 8-bit RGB.

    Args:
        h: Hue in degrees, [0, 360)
        s: Saturation [0, 1]
        l: Lightness [0, 1]

    Returns:
        (r, g, b) channel values in [0, 255]
    """
    c = (1.0 - abs(2.0 * l - 1.0)) * s
    x = c * (1.0 - abs((h / 60.0) % 2.0 - 1.0))
    m = l - c / 2.0

    if h < 60.0:
        r, g, b = c, x, 0.0
    elif h < 120.0:
        r, g, b = x, c, 0.0
    elif h < 180.0:
        r, g, b = 0.0, c, x
    elif h < 240.0:
        r, g, b = 0.0, x, c
    elif h < 300.0:
        r, g, b = x, 0.0, c
    else:
        r, g, b = c, 0.0, x

    return _to_channel(r, m), _to_channel(g, m), _to_channel(b, m)


def normalize_hex(color: str) -> str:
    """
    Normalize a hex color to lowercase #rrggbb.

    Args:
        color: "#RGB", "#RRGGBB" (leading # optional)

    Returns:
        Normalized color string

    Raises:
        ValueError: If the string is not a hex color
    """
    if not isinstance(color, str):
        raise ValueError(f"Color must be a hex string, got {color!r}")

    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)

    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    try:
        int(value, 16)
    except ValueError:
        raise ValueError(f"Invalid hex color: {color!r}") from None

    return "#" + value.lower()


def hex_to_rgb(color: str) -> Tuple[int, int, int]:
    """Parse a hex color into (r, g, b)."""
    num = int(normalize_hex(color)[1:], 16)
    return (num >> 16) & 0xFF, (num >> 8) & 0xFF, num & 0xFF


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format 8-bit channels as #rrggbb."""
    return "#{:02x}{:02x}{:02x}".format(r, g, b)


def lighten_color(color: str, percent: float) -> str:
    """
    Lighten a color by adding a percentage of 255 to every channel.

    Negative percentages darken. Channels are clamped to [0, 255].

    Args:
        color: Hex color
        percent: Amount in percent of the full channel range

    Returns:
        Adjusted hex color
    """
    r, g, b = hex_to_rgb(color)
    # Round half up
    amount = int(math.floor(2.55 * percent + 0.5))

    def clamp(channel: int) -> int:
        return max(0, min(255, channel + amount))

    return rgb_to_hex(clamp(r), clamp(g), clamp(b))


def darken_color(color: str, amount: float) -> str:
    """Darken a color; the inverse direction of lighten_color."""
    return lighten_color(color, -amount)


def hue_shift(color: str, degree: float) -> str:
    """
    Rotate the hue of a color.

    The color goes through an HSL round trip; the resulting hue is
    wrapped into [0, 360).

    Args:
        color: Hex color
        degree: Hue delta in degrees (may be negative)

    Returns:
        Hue-shifted hex color
    """
    r, g, b = hex_to_rgb(color)
    h, s, l = _rgb_to_hsl(r / 255.0, g / 255.0, b / 255.0)
    h = (h + degree) % 360.0
    return rgb_to_hex(*_hsl_to_rgb(h, s, l))


@dataclass(frozen=True)
class LightConfig:
    """
    Light configuration for face shading.

    Attributes:
        light: Lighten percentage applied to the lit face
        light_face: Orientation name of the lit face
        light_hue: Hue delta (degrees) applied to the lit face
        shadow: Darken percentage applied to the shadowed face
        shadow_face: Orientation name of the shadowed face
        shadow_hue: Hue delta (degrees) applied to the shadowed face
    """

    light: float = 10
    light_face: str = "top"
    light_hue: float = 5
    shadow: float = 30
    shadow_face: str = "right"
    shadow_hue: float = 20

    @classmethod
    def from_dict(cls, cfg: Dict) -> "LightConfig":
        """
        Build a LightConfig from a mapping.

        Accepts both snake_case and camelCase keys
        (e.g. "light_face" or "lightFace"). Missing keys use defaults.
        """
        aliases = {
            "lightFace": "light_face",
            "lightHue": "light_hue",
            "shadowFace": "shadow_face",
            "shadowHue": "shadow_hue",
        }
        kwargs = {aliases.get(key, key): value for key, value in cfg.items()}
        unknown = set(kwargs) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown light options: {sorted(unknown)}")
        return cls(**kwargs)


class ColorShader:
    """
    Derive displayed face colors from a base color and a light setup.

    Results are cached per (orientation, base color) for the lifetime of
    the shader or until clear_cache() is called.
    """

    def __init__(self, light_cfg: LightConfig = None):
        """
        Initialize the shader.

        Args:
            light_cfg: Light configuration (defaults to LightConfig())
        """
        self.light_cfg = light_cfg or LightConfig()
        self._face_colors: Dict[Tuple[str, str], str] = {}

    def face_color(self, orientation, color: str) -> str:
        """
        Get the shaded color of a face.

        Args:
            orientation: Face orientation (Orientation member or its name)
            color: Base hex color

        Returns:
            Shaded hex color; unrecognized orientations keep the base color
        """
        face = getattr(orientation, "value", orientation)
        key = (face, color)
        cached = self._face_colors.get(key)
        if cached is not None:
            return cached

        cfg = self.light_cfg
        if face == cfg.light_face:
            shaded = lighten_color(hue_shift(color, cfg.light_hue), cfg.light)
        elif face == cfg.shadow_face:
            shaded = darken_color(hue_shift(color, cfg.shadow_hue), cfg.shadow)
        else:
            shaded = color

        self._face_colors[key] = shaded
        return shaded

    def clear_cache(self):
        """Drop memoized face colors."""
        self._face_colors.clear()

    @property
    def cache_size(self) -> int:
        """Number of memoized face colors."""
        return len(self._face_colors)
