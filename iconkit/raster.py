"""Raster icon + banner compositing with Pillow.

Icon pass: background fill, cover-fitted source inside the padded square,
everything clipped to a squircle.
Banner pass: background fill, optional faded backdrop of the source under a
wash of the background colour, then the finished icon centered on top with an
optional drop shadow.
"""

from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, UnidentifiedImageError

from .colors import RgbColor, clamp, hex_to_rgb, normalize_hex, round_half_up
from .errors import InputError, SurfaceError
from .geometry import cover_fit, flatten_path, percent_to_pixels, squircle_path
from .profiles import (
    IMAGE_PROFILE,
    MAX_CORNER_RADIUS_PERCENT,
    FlowProfile,
    GenerationSettings,
)

SUPERSAMPLE = 4


@dataclass(frozen=True)
class ResolvedSettings:
    background: RgbColor
    corner_radius_percent: float
    padding: float


@dataclass(frozen=True)
class RasterAssets:
    icon: Image.Image
    banner: Image.Image
    icon_png: bytes
    banner_png: bytes


def new_surface(mode: str, size: tuple[int, int], color=0) -> Image.Image:
    try:
        return Image.new(mode, size, color)
    except (MemoryError, ValueError, OSError) as err:
        raise SurfaceError() from err


def load_image(source) -> Image.Image:
    """Decode a path, raw bytes or an open file into a Pillow image."""
    if isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)
    elif isinstance(source, str):
        source = Path(source)

    try:
        img = Image.open(source)
        img.load()
    except (UnidentifiedImageError, OSError) as err:
        raise InputError(f"cannot decode image: {err}") from err
    return img


def encode_png(image: Image.Image) -> bytes:
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


def resolve_settings(settings: GenerationSettings, profile: FlowProfile) -> ResolvedSettings:
    hex_value = normalize_hex(settings.background_hex) or profile.default_background
    return ResolvedSettings(
        background=hex_to_rgb(hex_value),
        corner_radius_percent=clamp(settings.corner_radius_percent, 0, MAX_CORNER_RADIUS_PERCENT),
        padding=clamp(settings.padding, 0, profile.icon_size / 2),
    )


def squircle_mask(width: int, height: int, radius: float) -> Image.Image:
    """Anti-aliased "L" mask of the squircle, drawn at 4x and scaled down."""
    big = new_surface("L", (width * SUPERSAMPLE, height * SUPERSAMPLE), 0)
    outline = flatten_path(squircle_path(0, 0, width, height, radius), scale=SUPERSAMPLE)
    ImageDraw.Draw(big).polygon(outline, fill=255)
    return big.resize((width, height), Image.Resampling.LANCZOS)


def with_opacity(img: Image.Image, opacity: float) -> Image.Image:
    arr = np.array(img.convert("RGBA"))
    arr[..., 3] = (arr[..., 3].astype(np.float32) * clamp(opacity, 0.0, 1.0)).clip(0, 255).astype(np.uint8)
    return Image.fromarray(arr)


def drop_shadow(icon: Image.Image, canvas_size: tuple[int, int], position: tuple[int, int],
                opacity: float, blur: float, offset_y: int) -> Image.Image:
    """Black shadow cast by the icon's alpha, offset down and blurred."""
    width, height = canvas_size
    shifted = new_surface("L", canvas_size, 0)
    shifted.paste(icon.getchannel("A"), (position[0], position[1] + offset_y))
    if blur > 0:
        # canvas shadowBlur is twice the gaussian sigma
        shifted = shifted.filter(ImageFilter.GaussianBlur(radius=blur / 2))

    s = np.asarray(shifted).astype(np.float32)
    out = np.zeros((height, width, 4), dtype=np.uint8)
    out[..., 3] = (s * opacity).clip(0, 255).astype(np.uint8)
    return Image.fromarray(out)


def _cover_crop(source: Image.Image, width: int, height: int) -> Image.Image:
    rect = cover_fit(source.width, source.height, width, height)
    return source.convert("RGBA").resize((width, height), Image.Resampling.LANCZOS, box=rect.box)


def _check_source(source: Image.Image) -> None:
    if source.width <= 0 or source.height <= 0:
        raise InputError("source image has no pixels")


def render_icon(source: Image.Image, resolved: ResolvedSettings, profile: FlowProfile = IMAGE_PROFILE) -> Image.Image:
    _check_source(source)
    size = profile.icon_size
    inset = round_half_up(resolved.padding)
    target = size - inset * 2

    icon = new_surface("RGBA", (size, size), (*resolved.background, 255))
    if target > 0:
        content = _cover_crop(source, target, target)
        overlay = new_surface("RGBA", (size, size), (0, 0, 0, 0))
        overlay.paste(content, (inset, inset + profile.content_offset_y))
        icon = Image.alpha_composite(icon, overlay)

    radius = percent_to_pixels(resolved.corner_radius_percent, size)
    icon.putalpha(squircle_mask(size, size, radius))
    return icon


def render_banner(source: Image.Image, icon: Image.Image, resolved: ResolvedSettings,
                  profile: FlowProfile = IMAGE_PROFILE) -> Image.Image:
    _check_source(source)
    width, height = profile.banner_width, profile.banner_height
    background = resolved.background

    banner = new_surface("RGBA", (width, height), (*background, 255))

    if profile.backdrop_opacity > 0:
        texture = _cover_crop(source, width, height)
        if profile.backdrop_blur > 0:
            texture = texture.filter(ImageFilter.GaussianBlur(radius=profile.backdrop_blur))
        banner = Image.alpha_composite(banner, with_opacity(texture, profile.backdrop_opacity))

    if profile.overlay_alpha > 0:
        wash_alpha = round_half_up(255 * clamp(profile.overlay_alpha, 0.0, 1.0))
        banner = Image.alpha_composite(banner, new_surface("RGBA", (width, height), (*background, wash_alpha)))

    inset = profile.banner_icon_size
    scaled = icon.resize((inset, inset), Image.Resampling.LANCZOS)
    x = round_half_up((width - inset) / 2)
    y = round_half_up((height - inset) / 2) + profile.banner_icon_offset_y

    if profile.shadow_opacity > 0:
        shadow = drop_shadow(scaled, (width, height), (x, y), profile.shadow_opacity,
                             profile.shadow_blur, profile.shadow_offset_y)
        banner = Image.alpha_composite(banner, shadow)

    overlay = new_surface("RGBA", (width, height), (0, 0, 0, 0))
    overlay.paste(scaled, (x, y))
    return Image.alpha_composite(banner, overlay)


def generate_raster_assets(source: Image.Image, settings: GenerationSettings | None = None,
                           profile: FlowProfile = IMAGE_PROFILE) -> RasterAssets:
    """Build the icon and banner for one request; both or neither."""
    if settings is None:
        settings = profile.default_settings()
    resolved = resolve_settings(settings, profile)

    icon = render_icon(source, resolved, profile)
    banner = render_banner(source, icon, resolved, profile)
    return RasterAssets(icon=icon, banner=banner, icon_png=encode_png(icon), banner_png=encode_png(banner))
