"""Per-flow geometry and tuning constants, plus the user-tunable settings."""

from __future__ import annotations

from dataclasses import dataclass

from .colors import RgbColor

MAX_CORNER_RADIUS_PERCENT = 50


@dataclass(frozen=True)
class GenerationSettings:
    background_hex: str
    corner_radius_percent: float = 40
    padding: float = 24


@dataclass(frozen=True)
class FlowProfile:
    name: str
    icon_size: int
    banner_width: int
    banner_height: int
    banner_icon_size: int
    banner_icon_offset_y: int = 0
    content_offset_y: int = 0
    # Banner backdrop: faded source image, then a flat wash of the background colour
    backdrop_opacity: float = 0.0
    backdrop_blur: float = 0.0
    overlay_alpha: float = 0.0
    shadow_opacity: float = 0.0
    shadow_blur: float = 0.0
    shadow_offset_y: int = 0
    default_background: str = "#ffffff"
    default_foreground: str = "#000000"
    sample_fallback: RgbColor = RgbColor(255, 255, 255)
    default_corner: float = 40
    default_padding: float = 0
    default_basename: str = "my-image"
    icon_suffix: str = "icon"
    banner_suffix: str = "background"

    def default_settings(self) -> GenerationSettings:
        return GenerationSettings(self.default_background, self.default_corner, self.default_padding)


IMAGE_PROFILE = FlowProfile(
    name="image",
    icon_size=512,
    banner_width=1500,
    banner_height=600,
    banner_icon_size=256,
    backdrop_opacity=0.28,
    overlay_alpha=0.6,
    shadow_opacity=0.18,
    shadow_blur=24,
    shadow_offset_y=12,
    default_background="#f0f0f0",
    sample_fallback=RgbColor(240, 240, 240),
    default_padding=24,
)

ICON_SET_PROFILE = FlowProfile(
    name="iconset",
    icon_size=512,
    banner_width=3000,
    banner_height=1200,
    banner_icon_size=300,
    banner_icon_offset_y=-30,
    content_offset_y=-10,
    default_basename="unibook-icon",
    banner_suffix="cover",
)

# Corner radius and padding are in document units here, not percent/pixels.
VECTOR_PROFILE = FlowProfile(
    name="svg",
    icon_size=512,
    banner_width=1500,
    banner_height=600,
    banner_icon_size=128,
    default_corner=12,
    default_padding=4,
    default_basename="my",
    banner_suffix="wallpaper",
)

PROFILES = {p.name: p for p in (IMAGE_PROFILE, ICON_SET_PROFILE, VECTOR_PROFILE)}
