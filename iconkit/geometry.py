"""Cover-fit cropping and squircle paths.

The squircle is a rounded rectangle whose corners are cubic curves with the
control points pulled in to ``0.8 * r``. That is flatter than a circular arc
(``0.5523 * r``) and reads closer to the iOS-style continuous corner.
"""

from __future__ import annotations

from dataclasses import dataclass

from .colors import clamp

SQUIRCLE_K = 0.8

Point = tuple[float, float]


@dataclass(frozen=True)
class CoverRect:
    sx: float
    sy: float
    s_width: float
    s_height: float

    @property
    def box(self) -> tuple[float, float, float, float]:
        """(left, top, right, bottom), ready for ``Image.resize(box=...)``."""
        return (self.sx, self.sy, self.sx + self.s_width, self.sy + self.s_height)


@dataclass(frozen=True)
class PathSegment:
    command: str  # "M", "L", "C" or "Z"
    points: tuple[Point, ...] = ()

    @property
    def end(self) -> Point | None:
        return self.points[-1] if self.points else None


def cover_fit(source_w: float, source_h: float, target_w: float, target_h: float) -> CoverRect:
    """Source rectangle that fills the target like CSS ``object-fit: cover``.

    All four dimensions must be > 0.
    """
    target_ratio = target_w / target_h
    source_ratio = source_w / source_h

    if source_ratio > target_ratio:
        s_height = source_h
        s_width = target_ratio * s_height
        return CoverRect((source_w - s_width) / 2, 0, s_width, s_height)

    s_width = source_w
    s_height = s_width / target_ratio
    return CoverRect(0, (source_h - s_height) / 2, s_width, s_height)


def percent_to_pixels(percent: float, dimension: float) -> float:
    return clamp(percent, 0, 100) / 100 * dimension


def squircle_path(x: float, y: float, width: float, height: float, radius: float) -> tuple[PathSegment, ...]:
    r = min(radius, width / 2, height / 2)
    right = x + width
    bottom = y + height

    if not r > 0:  # also catches NaN
        return (
            PathSegment("M", ((x, y),)),
            PathSegment("L", ((right, y),)),
            PathSegment("L", ((right, bottom),)),
            PathSegment("L", ((x, bottom),)),
            PathSegment("Z"),
        )

    cp = r * SQUIRCLE_K
    return (
        PathSegment("M", ((x + r, y),)),
        PathSegment("L", ((right - r, y),)),
        PathSegment("C", ((right - r + cp, y), (right, y + r - cp), (right, y + r))),
        PathSegment("L", ((right, bottom - r),)),
        PathSegment("C", ((right, bottom - r + cp), (right - r + cp, bottom), (right - r, bottom))),
        PathSegment("L", ((x + r, bottom),)),
        PathSegment("C", ((x + r - cp, bottom), (x, bottom - r + cp), (x, bottom - r))),
        PathSegment("L", ((x, y + r),)),
        PathSegment("C", ((x, y + r - cp), (x + r - cp, y), (x + r, y))),
        PathSegment("Z"),
    )


def format_number(value: float) -> str:
    """Shortest plain rendering: 32.0 -> "32", 2.5 -> "2.5", -0.0 -> "0"."""
    text = f"{value:.4f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def _pair(point: Point) -> str:
    return f"{format_number(point[0])},{format_number(point[1])}"


def path_data(segments) -> str:
    """Serialise segments to SVG path data (absolute commands)."""
    parts: list[str] = []
    current: Point | None = None

    for seg in segments:
        if seg.command == "M":
            parts.append(f"M{_pair(seg.points[0])}")
        elif seg.command == "L":
            px, py = seg.points[0]
            if current is not None and py == current[1]:
                parts.append(f"H{format_number(px)}")
            elif current is not None and px == current[0]:
                parts.append(f"V{format_number(py)}")
            else:
                parts.append(f"L{_pair(seg.points[0])}")
        elif seg.command == "C":
            parts.append("C" + " ".join(_pair(p) for p in seg.points))
        elif seg.command == "Z":
            parts.append("Z")
        else:
            raise ValueError(f"unknown path command: {seg.command!r}")
        if seg.end is not None:
            current = seg.end

    return " ".join(parts)


def _cubic(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    u = 1 - t
    a, b, c, d = u * u * u, 3 * u * u * t, 3 * u * t * t, t * t * t
    return (
        a * p0[0] + b * p1[0] + c * p2[0] + d * p3[0],
        a * p0[1] + b * p1[1] + c * p2[1] + d * p3[1],
    )


def flatten_path(segments, scale: float = 1.0, steps: int = 24) -> list[Point]:
    """Polygon approximation of a closed path, for ``ImageDraw.polygon``."""
    points: list[Point] = []
    current: Point = (0.0, 0.0)

    for seg in segments:
        if seg.command in ("M", "L"):
            current = seg.points[0]
            points.append(current)
        elif seg.command == "C":
            c1, c2, end = seg.points
            for i in range(1, steps + 1):
                points.append(_cubic(current, c1, c2, end, i / steps))
            current = end

    return [(px * scale, py * scale) for px, py in points]
