"""Shared pytest fixtures: small images built in memory."""

from __future__ import annotations

import pytest
from PIL import Image


@pytest.fixture
def red_square() -> Image.Image:
    return Image.new("RGB", (64, 64), (255, 0, 0))


@pytest.fixture
def wide_image() -> Image.Image:
    """200x100, left half black, right half white."""
    img = Image.new("RGB", (200, 100), (0, 0, 0))
    img.paste((255, 255, 255), (100, 0, 200, 100))
    return img


@pytest.fixture
def transparent_image() -> Image.Image:
    return Image.new("RGBA", (32, 32), (10, 20, 30, 0))


@pytest.fixture
def simple_svg() -> str:
    return (
        '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 24 24" fill="currentColor">'
        '<path d="M12 2L2 22h20z"/></svg>'
    )
