"""Average-colour sampling used to pre-fill a background suggestion."""

from __future__ import annotations

import numpy as np
from PIL import Image

from .colors import WHITE, RgbColor, blend_over_backdrop, rgb_to_hex, soften

DEFAULT_FALLBACK = RgbColor(240, 240, 240)


def sample_average_color(image: Image.Image, fallback=DEFAULT_FALLBACK) -> RgbColor:
    """Area-average the whole image down to one pixel.

    Pillow premultiplies alpha while resampling RGBA, so transparent pixels do
    not drag the average toward black. A fully transparent result returns
    ``fallback`` untouched; anything else is flattened onto white.
    """
    tiny = image.convert("RGBA").resize((1, 1), Image.Resampling.BOX)
    r, g, b, a = (int(v) for v in np.asarray(tiny)[0, 0])

    if a == 0:
        return RgbColor(*fallback)
    return blend_over_backdrop((r, g, b), a / 255, WHITE)


def suggest_background(image: Image.Image, fallback=DEFAULT_FALLBACK) -> RgbColor:
    return soften(sample_average_color(image, fallback))


def suggest_background_hex(image: Image.Image, fallback=DEFAULT_FALLBACK) -> str:
    return rgb_to_hex(suggest_background(image, fallback))
