"""HSL colour values and a lightness-weighted perceptual distance.

Units follow the gradient decoder: hue in degrees ``[0, 360)``, saturation
and lightness in percent ``[0, 100]``.  The light fixture wants all three
normalised to ``[0, 1]``; :meth:`Hsl.normalized` does that at the export
boundary.

Distance
--------
Each colour is projected to ``(cos(h) * s * l, sin(h) * s * l, l)`` and the
Euclidean distance taken.  Hue and saturation differences are weighted by
lightness, so dark or washed-out colours compare as close even when their
hues differ.  Pure lightness differences top out at 100 in these units.
"""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Hsl:
    """Colour in HSL (degrees, percent, percent)."""

    hue: float
    saturation: float
    lightness: float
    alpha: float = 1.0

    def __post_init__(self) -> None:
        if not 0.0 <= self.saturation <= 100.0:
            raise ValueError(f"Saturation must be in [0, 100], got {self.saturation}")
        if not 0.0 <= self.lightness <= 100.0:
            raise ValueError(f"Lightness must be in [0, 100], got {self.lightness}")
        if not 0.0 <= self.hue < 360.0:
            # Wrap instead of rejecting; 360 deg and 0 deg are the same hue.
            object.__setattr__(self, "hue", self.hue % 360.0)

    @classmethod
    def from_rgb(cls, r: float, g: float, b: float, alpha: float = 1.0) -> Hsl:
        """Build from unit-float RGB (``[0, 1]`` per channel)."""
        h, l, s = colorsys.rgb_to_hls(
            min(max(r, 0.0), 1.0),
            min(max(g, 0.0), 1.0),
            min(max(b, 0.0), 1.0),
        )
        return cls(hue=h * 360.0, saturation=s * 100.0, lightness=l * 100.0, alpha=alpha)

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int, a: int = 255) -> Hsl:
        """Build from 8-bit RGB(A) as found in a decoded PNG."""
        return cls.from_rgb(r / 255.0, g / 255.0, b / 255.0, alpha=a / 255.0)

    def to_rgb8(self) -> tuple[int, int, int]:
        r, g, b = colorsys.hls_to_rgb(
            self.hue / 360.0, self.lightness / 100.0, self.saturation / 100.0,
        )
        return (round(r * 255), round(g * 255), round(b * 255))

    def normalized(self) -> tuple[float, float, float]:
        """``(h, s, l)`` scaled to ``[0, 1]`` for the light payload."""
        return (self.hue / 360.0, self.saturation / 100.0, self.lightness / 100.0)


WHITE = Hsl(0.0, 0.0, 100.0)
BLACK = Hsl(0.0, 0.0, 0.0)

FALLBACK_GRADIENT: tuple[Hsl, Hsl] = (Hsl(0.0, 0.0, 50.0), Hsl(0.0, 0.0, 50.0))
"""Flat pair used when a curve has no readable gradient."""


def hsl_distance(x: Hsl, y: Hsl) -> float:
    """Lightness-weighted distance between two colours.

    Parameters
    ----------
    x, y : Hsl
        Colours to compare.

    Returns
    -------
    float
        Non-negative distance; ``0`` for identical colours.  The clustering
        threshold (300 by default) is expressed in these units.
    """
    h1 = math.radians(x.hue)
    h2 = math.radians(y.hue)

    a1 = math.cos(h1) * x.saturation * x.lightness
    b1 = math.sin(h1) * x.saturation * x.lightness
    a2 = math.cos(h2) * y.saturation * y.lightness
    b2 = math.sin(h2) * y.saturation * y.lightness

    return math.sqrt((a1 - a2) ** 2 + (b1 - b2) ** 2 + (x.lightness - y.lightness) ** 2)
