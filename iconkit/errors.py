"""Exceptions raised by the icon and banner compositors.

Malformed structure raises; out-of-range magnitudes are clamped and never
reach this module.
"""


class IconKitError(Exception):
    """Base class for every error the engine raises."""


class InputError(IconKitError, ValueError):
    """Caller input that cannot be used as given (bad hex, undecodable image)."""


class MarkupError(InputError):
    """Vector markup that cannot be parsed or lacks its dimensions."""


class SurfaceError(IconKitError, RuntimeError):
    """A drawing surface could not be allocated."""

    def __init__(self, message: str = "surface unavailable"):
        super().__init__(message)
