"""Squircle icon and banner generation for raster images and SVG icons."""

from .colors import (
    RgbColor,
    blend_over_backdrop,
    clamp,
    hex_to_rgb,
    normalize_hex,
    rgb_to_hex,
    soften,
)
from .errors import IconKitError, InputError, MarkupError, SurfaceError
from .generation import GenerationGuard
from .geometry import CoverRect, PathSegment, cover_fit, path_data, percent_to_pixels, squircle_path
from .profiles import (
    ICON_SET_PROFILE,
    IMAGE_PROFILE,
    VECTOR_PROFILE,
    FlowProfile,
    GenerationSettings,
)
from .raster import RasterAssets, generate_raster_assets, load_image
from .sampler import sample_average_color, suggest_background, suggest_background_hex
from .vector import (
    VectorAssets,
    apply_background_and_padding,
    generate_banner_markup,
    generate_line_markup,
    generate_vector_assets,
    svg_data_uri,
)

__version__ = "0.1.0"
