"""Hex/RGB conversion and the small bits of colour arithmetic the compositors need."""

from __future__ import annotations

import math
import re
from typing import NamedTuple

from .errors import InputError

HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class RgbColor(NamedTuple):
    r: int
    g: int
    b: int


WHITE = RgbColor(255, 255, 255)


def clamp(value: float, lo: float, hi: float) -> float:
    """Saturating clamp; NaN resolves to ``lo``."""
    if math.isnan(value):
        return lo
    return min(max(value, lo), hi)


def round_half_up(value: float) -> int:
    # Math.round semantics: 0.5 always rounds toward +inf
    return int(math.floor(value + 0.5))


def _channel(value: float) -> int:
    return round_half_up(clamp(value, 0, 255))


def normalize_hex(value) -> str | None:
    """Canonical ``#rrggbb`` for a 3- or 6-digit hex string, else None."""
    if not isinstance(value, str):
        return None
    trimmed = value.strip()
    if not trimmed:
        return None

    prefixed = trimmed if trimmed.startswith("#") else f"#{trimmed}"
    if not HEX_PATTERN.match(prefixed):
        return None

    digits = prefixed[1:].lower()
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return f"#{digits}"


def hex_to_rgb(value: str) -> RgbColor:
    normalized = normalize_hex(value)
    if normalized is None:
        raise InputError(f"invalid hex colour: {value!r}")
    digits = normalized[1:]
    return RgbColor(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(color) -> str:
    r, g, b = (_channel(c) for c in color)
    return f"#{r:02x}{g:02x}{b:02x}"


def soften(color, amount: float = 0.15) -> RgbColor:
    """Pull a colour toward white so suggested backgrounds stay pastel."""
    amount = clamp(amount, 0.0, 1.0)
    return RgbColor(*(_channel(c + (255 - c) * amount) for c in color))


def blend_over_backdrop(color, alpha: float, backdrop=WHITE) -> RgbColor:
    """Flatten a translucent colour onto an opaque backdrop."""
    alpha = clamp(alpha, 0.0, 1.0)
    if alpha == 0:
        return RgbColor(*backdrop)
    return RgbColor(
        *(_channel(fg * alpha + bg * (1 - alpha)) for fg, bg in zip(color, backdrop))
    )
