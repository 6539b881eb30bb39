"""SVG icon padding, squircle background injection and banner markup.

Every call parses its own element tree, edits that private copy and
serialises it again; nothing is shared between calls.
"""

from __future__ import annotations

import base64
import math
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from xml.sax.saxutils import quoteattr

from .colors import clamp, normalize_hex
from .errors import InputError, MarkupError
from .geometry import format_number, path_data, squircle_path
from .profiles import VECTOR_PROFILE, FlowProfile, GenerationSettings

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
BACKGROUND_MARKER = "data-background-path"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

DEFAULT_LINE_WIDTH = 1600
DEFAULT_LINE_HEIGHT = 4


@dataclass(frozen=True)
class ViewBox:
    x: float
    y: float
    width: float
    height: float

    def expand(self, padding: float) -> ViewBox:
        p = clamp(padding, 0.0, math.inf)
        return ViewBox(self.x - p, self.y - p, self.width + 2 * p, self.height + 2 * p)

    def __str__(self) -> str:
        return " ".join(format_number(v) for v in (self.x, self.y, self.width, self.height))


@dataclass(frozen=True)
class VectorAssets:
    icon_markup: str
    banner_markup: str
    icon_data_uri: str
    banner_data_uri: str


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _namespace(tag: str) -> str | None:
    return tag[1:].split("}", 1)[0] if tag.startswith("{") else None


def _color(value: str, what: str) -> str:
    normalized = normalize_hex(value)
    if normalized is None:
        raise InputError(f"invalid {what} colour: {value!r}")
    return normalized


def parse_length(value: str | None) -> float | None:
    """Leading number of an attribute value ("24px" -> 24.0), None if absent."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(value)
    if not match:
        return None
    number = float(match.group(0))
    return number if math.isfinite(number) else None


def parse_markup(markup: str) -> ET.Element:
    try:
        root = ET.fromstring(markup)
    except ET.ParseError as err:
        raise MarkupError(f"invalid document: {err}") from err
    if _local_name(root.tag) != "svg":
        raise MarkupError("invalid document: root element is not <svg>")
    return root


def read_view_box(root: ET.Element) -> ViewBox:
    raw = root.get("viewBox")
    if raw:
        parts = [p for p in re.split(r"[\s,]+", raw.strip()) if p]
        try:
            values = [float(p) for p in parts]
        except ValueError:
            values = []
        if len(values) != 4 or not all(math.isfinite(v) for v in values):
            raise MarkupError(f"invalid viewBox: {raw!r}")
        return ViewBox(*values)

    width_attr, height_attr = root.get("width"), root.get("height")
    if not width_attr or not height_attr:
        raise MarkupError("missing dimensions: need a viewBox or width and height")

    width, height = parse_length(width_attr), parse_length(height_attr)
    if width is None or height is None:
        raise MarkupError(f"non-numeric dimensions: width={width_attr!r} height={height_attr!r}")
    return ViewBox(0, 0, width, height)


def merge_style(style: str | None, name: str, value: str) -> str:
    """Set one declaration in a style attribute, keeping the others."""
    declarations: list[tuple[str, str]] = []
    for chunk in (style or "").split(";"):
        if ":" not in chunk:
            continue
        key, _, val = chunk.partition(":")
        key = key.strip()
        if key and key.lower() != name:
            declarations.append((key, val.strip()))
    declarations.append((name, value))
    return " ".join(f"{k}: {v};" for k, v in declarations)


def remove_background(root: ET.Element) -> None:
    for parent in list(root.iter()):
        for child in list(parent):
            if _local_name(child.tag) == "path" and child.get(BACKGROUND_MARKER) == "true":
                parent.remove(child)


def apply_background_and_padding(markup: str, bg_color: str, corner_radius: float,
                                 padding: float, foreground_color: str) -> str:
    """Pad an SVG's canvas and put a squircle background behind its content.

    Re-applying to its own output replaces the earlier background instead of
    stacking a second one.
    """
    fill = _color(bg_color, "background")
    foreground = _color(foreground_color, "foreground")

    root = parse_markup(markup)
    view = read_view_box(root).expand(padding)

    root.set("width", format_number(view.width))
    root.set("height", format_number(view.height))
    root.set("viewBox", str(view))

    namespace = _namespace(root.tag)
    if namespace is None:
        root.set("xmlns", SVG_NS)
    root.set("color", foreground)
    root.set("style", merge_style(root.get("style"), "color", foreground))

    remove_background(root)

    path_tag = f"{{{namespace}}}path" if namespace else "path"
    background = ET.Element(path_tag, {
        "d": path_data(squircle_path(view.x, view.y, view.width, view.height, corner_radius)),
        "fill": fill,
        "stroke": "none",
        BACKGROUND_MARKER: "true",
    })
    # text before the first child stays before the background
    root.insert(0, background)

    return ET.tostring(root, encoding="unicode")


def generate_banner_markup(icon_data_uri: str, bg_color: str, profile: FlowProfile = VECTOR_PROFILE) -> str:
    width, height = profile.banner_width, profile.banner_height
    size = profile.banner_icon_size
    x = format_number((width - size) / 2)
    y = format_number((height - size) / 2 + profile.banner_icon_offset_y)
    fill = _color(bg_color, "background")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" viewBox="0 0 {width} {height}">\n'
        f'  <rect width="100%" height="100%" fill="{fill}" />\n'
        f'  <image x="{x}" y="{y}" width="{size}" height="{size}" href={quoteattr(icon_data_uri)} />\n'
        "</svg>"
    )


def generate_line_markup(width: float = DEFAULT_LINE_WIDTH, height: float = DEFAULT_LINE_HEIGHT,
                         radius: float = 4, color: str = "#2463e9") -> str:
    """Rounded horizontal bar, used as a divider image."""
    safe_w = width if math.isfinite(width) and width > 0 else DEFAULT_LINE_WIDTH
    safe_h = height if math.isfinite(height) and height > 0 else DEFAULT_LINE_HEIGHT
    r = clamp(radius, 0, min(safe_w / 2, safe_h / 2))
    w, h, rr = format_number(safe_w), format_number(safe_h), format_number(r)
    fill = _color(color, "line")

    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="{SVG_NS}" width="{w}" height="{h}" viewBox="0 0 {w} {h}">\n'
        f'  <rect width="{w}" height="{h}" rx="{rr}" ry="{rr}" fill="{fill}" />\n'
        "</svg>"
    )


def encode_data_uri(payload, mime: str) -> str:
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return f"data:{mime};base64,{base64.b64encode(payload).decode('ascii')}"


def svg_data_uri(markup: str) -> str:
    return encode_data_uri(markup, "image/svg+xml")


def generate_vector_assets(markup: str, settings: GenerationSettings | None = None,
                           foreground_color: str | None = None,
                           profile: FlowProfile = VECTOR_PROFILE) -> VectorAssets:
    """Icon and banner markup for pasted SVG, plus data URIs for preview."""
    if settings is None:
        settings = profile.default_settings()
    if foreground_color is None:
        foreground_color = profile.default_foreground

    icon_markup = apply_background_and_padding(
        markup,
        settings.background_hex,
        settings.corner_radius_percent,
        settings.padding,
        foreground_color,
    )
    icon_uri = svg_data_uri(icon_markup)
    banner_markup = generate_banner_markup(icon_uri, settings.background_hex, profile)

    return VectorAssets(
        icon_markup=icon_markup,
        banner_markup=banner_markup,
        icon_data_uri=icon_uri,
        banner_data_uri=svg_data_uri(banner_markup),
    )
