"""Generate a squircle icon and a wide banner from an image or an SVG icon.

Usage examples:
  # Raster image, background suggested from the image's average colour
  iconkit image logo.png --out build/

  # Icon-set flow (3000x1200 cover), explicit background
  iconkit iconset A.png --bg "#2463e9" --padding 0

  # Pasted SVG icon
  iconkit svg icon.svg --bg "#384152" --fg "#ffffff" --radius 12 --padding 4

  # Divider line
  iconkit line --width 1600 --height 4 --color "#2463e9"

  # Only print the suggested background
  iconkit suggest photo.jpg
"""

from __future__ import annotations

import argparse
import re
import sys
import unicodedata
from pathlib import Path

from .errors import IconKitError, InputError
from .profiles import ICON_SET_PROFILE, IMAGE_PROFILE, MAX_CORNER_RADIUS_PERCENT, VECTOR_PROFILE, GenerationSettings
from .raster import generate_raster_assets, load_image
from .sampler import suggest_background_hex
from .vector import generate_line_markup, generate_vector_assets

RASTER_PROFILES = {"image": IMAGE_PROFILE, "iconset": ICON_SET_PROFILE}


def sanitize_base_filename(value: str, default: str) -> str:
    """ASCII slug of a file name without its extension."""
    stem = re.sub(r"\.[^/.]+$", "", value)
    decomposed = unicodedata.normalize("NFKD", stem)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = re.sub(r"[^a-zA-Z0-9_-]+", "-", stripped)
    slug = re.sub(r"-{2,}", "-", slug).strip("-").lower()
    return slug or default


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="iconkit", description=__doc__,
                                     formatter_class=argparse.RawDescriptionHelpFormatter)
    sub = parser.add_subparsers(dest="command", required=True)

    for name, profile in RASTER_PROFILES.items():
        p = sub.add_parser(name, help=f"{profile.banner_width}x{profile.banner_height} banner from a raster image")
        p.add_argument("source", type=Path, help="Input image")
        p.add_argument("--out", type=Path, default=Path("."), help="Output directory (default: .)")
        p.add_argument("--name", help="Base file name (default: derived from the input)")
        p.add_argument("--bg", help="Background hex (default: suggested from the image)")
        p.add_argument("--corner", type=float, default=profile.default_corner,
                       help=f"Corner radius percent, 0-{MAX_CORNER_RADIUS_PERCENT} (default: {profile.default_corner})")
        p.add_argument("--padding", type=float, default=profile.default_padding,
                       help=f"Padding in pixels (default: {profile.default_padding})")

    p = sub.add_parser("svg", help="Icon and wallpaper SVG from SVG markup")
    p.add_argument("source", type=Path, help="Input SVG file")
    p.add_argument("--out", type=Path, default=Path("."), help="Output directory (default: .)")
    p.add_argument("--name", help="Base file name (default: derived from the input)")
    p.add_argument("--bg", default=VECTOR_PROFILE.default_background, help="Background hex")
    p.add_argument("--fg", default=VECTOR_PROFILE.default_foreground, help="Icon (currentColor) hex")
    p.add_argument("--radius", type=float, default=VECTOR_PROFILE.default_corner,
                   help="Corner radius in SVG units")
    p.add_argument("--padding", type=float, default=VECTOR_PROFILE.default_padding,
                   help="Padding in SVG units")

    p = sub.add_parser("line", help="Rounded divider line SVG")
    p.add_argument("--width", type=float, default=1600)
    p.add_argument("--height", type=float, default=4)
    p.add_argument("--radius", type=float, default=4)
    p.add_argument("--color", default="#2463e9")
    p.add_argument("--out", type=Path, default=Path("."))
    p.add_argument("--name", default="notion-line")

    p = sub.add_parser("suggest", help="Print the suggested background for an image")
    p.add_argument("source", type=Path)
    p.add_argument("--flow", choices=sorted(RASTER_PROFILES), default="image")

    return parser.parse_args(argv)


def write_output(path: Path, data) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(data, str):
        path.write_text(data, encoding="utf-8")
    else:
        path.write_bytes(data)
    print(f"  Saved: {path}")


def run_raster(args: argparse.Namespace) -> int:
    profile = RASTER_PROFILES[args.command]
    print(f"Generating {profile.name} assets from {args.source}...")

    image = load_image(args.source)
    background = args.bg
    if background is None:
        background = suggest_background_hex(image, profile.sample_fallback)
        print(f"  Background: {background}")

    settings = GenerationSettings(background, args.corner, args.padding)
    assets = generate_raster_assets(image, settings, profile)

    base = sanitize_base_filename(args.name or args.source.name, profile.default_basename)
    write_output(args.out / f"{base}-{profile.icon_suffix}.png", assets.icon_png)
    write_output(args.out / f"{base}-{profile.banner_suffix}.png", assets.banner_png)
    return 0


def run_svg(args: argparse.Namespace) -> int:
    print(f"Generating svg assets from {args.source}...")
    try:
        markup = args.source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise InputError(f"cannot read {args.source}: {err}") from err

    settings = GenerationSettings(args.bg, args.radius, args.padding)
    assets = generate_vector_assets(markup, settings, args.fg)

    base = sanitize_base_filename(args.name or args.source.name, VECTOR_PROFILE.default_basename)
    write_output(args.out / f"{base}-{VECTOR_PROFILE.icon_suffix}.svg", assets.icon_markup)
    write_output(args.out / f"{base}-{VECTOR_PROFILE.banner_suffix}.svg", assets.banner_markup)
    return 0


def run_line(args: argparse.Namespace) -> int:
    print("Generating divider line...")
    markup = generate_line_markup(args.width, args.height, args.radius, args.color)
    base = sanitize_base_filename(args.name, "notion-line")
    write_output(args.out / f"{base}.svg", markup)
    return 0


def run_suggest(args: argparse.Namespace) -> int:
    profile = RASTER_PROFILES[args.flow]
    print(suggest_background_hex(load_image(args.source), profile.sample_fallback))
    return 0


COMMANDS = {
    "image": run_raster,
    "iconset": run_raster,
    "svg": run_svg,
    "line": run_line,
    "suggest": run_suggest,
}


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        return COMMANDS[args.command](args)
    except IconKitError as err:
        print(f"[error] {err}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
