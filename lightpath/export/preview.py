"""Viewer preview -- line vertices and a gradient strip per collection.

The browser viewer draws ``vertices`` as GL line pairs: every two
consecutive vertices form one segment.  Alongside it gets a 16 px tall
strip image holding the concatenated gradients of all curves, which it
maps onto the lines as a texture.

Per curve kind:
    - Polyline: one pair per window.
    - Catmull-Rom: the window is sampled and consecutive samples paired.
    - Particles: one pair per trail, ``prev_location`` to ``location``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Tuple, Union

import numpy as np
from PIL import Image

from lightpath.color.hsl import Hsl
from lightpath.curves.types import CatmullRomCurve, Curve, ParticleSet, Polyline
from lightpath.geometry.interpolation import DEFAULT_SAMPLES, sample_for_preview
from lightpath.job_ir.actions import MotionType
from lightpath.utils import fs

logger = logging.getLogger(__name__)

Vertex = Tuple[float, float, float]

STRIP_HEIGHT = 16
MIN_STRIP_WIDTH = 8
MAX_STRIP_WIDTH = 4096


def next_power_two(width: int) -> int:
    """Smallest power of two strictly above *width*, clamped to [8, 4096]."""
    p = MIN_STRIP_WIDTH
    while p <= width and p < MAX_STRIP_WIDTH:
        p *= 2
    return p


def _pairs(samples: Sequence[Vertex]) -> List[Vertex]:
    out: List[Vertex] = []
    for a, b in zip(samples, samples[1:]):
        out.extend((a, b))
    return out


def build_viewer_data(
    curves: Sequence[Curve],
    samples: int = DEFAULT_SAMPLES,
) -> Tuple[List[Vertex], List[Hsl]]:
    """Line-pair vertices and concatenated gradient stops for *curves*.

    Parameters
    ----------
    curves : Sequence[Curve]
        Curves in machine mm, in drawing order.
    samples : int
        Samples per Catmull-Rom window.

    Returns
    -------
    tuple[list[Vertex], list[Hsl]]
        Vertices (even length) and gradient stops.
    """
    vertices: List[Vertex] = []
    colors: List[Hsl] = []

    for curve in curves:
        if isinstance(curve, Polyline):
            for a, b in curve.windows():
                vertices.extend((a.as_tuple(), b.as_tuple()))
        elif isinstance(curve, CatmullRomCurve):
            for window in curve.windows():
                pts = list(sample_for_preview(window, MotionType.CATMULL_ROM, samples))
                vertices.extend(_pairs(pts))
        elif isinstance(curve, ParticleSet):
            for p in curve.particles:
                vertices.extend((p.prev_location.as_tuple(), p.location.as_tuple()))
        else:
            raise TypeError(f"Cannot preview {type(curve).__name__}")
        colors.extend(curve.colors)

    logger.debug("Preview: %d vertices, %d colour stops", len(vertices), len(colors))
    return vertices, colors


def write_vertices(path: Union[str, Path], vertices: Sequence[Vertex], indent: int = 2) -> Path:
    path = Path(path)
    fs.atomic_json_dump([list(v) for v in vertices], path, indent=indent)
    return path


def gradient_strip(colors: Sequence[Hsl]) -> np.ndarray:
    """(16, W, 3) uint8 strip, W padded to the next power of two.

    Raises
    ------
    ValueError
        If *colors* is empty.
    """
    if not colors:
        raise ValueError("Cannot build a gradient strip from no colours")
    row = np.array([c.to_rgb8() for c in colors], dtype=np.uint8)
    strip = np.repeat(row[np.newaxis, :, :], STRIP_HEIGHT, axis=0)
    target = next_power_two(len(colors))
    resized = Image.fromarray(strip).resize((target, STRIP_HEIGHT), Image.Resampling.BILINEAR)
    return np.asarray(resized)


def write_uv_strip(path: Union[str, Path], colors: Sequence[Hsl]) -> Path:
    """Save the gradient strip as an image (format from the extension)."""
    path = Path(path)
    fs.atomic_save_image(gradient_strip(colors), path)
    return path
