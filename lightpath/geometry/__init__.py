"""Points, curve interpolation and the duration model."""

from lightpath.geometry.duration import (
    MIN_DURATION_MS,
    DurationError,
    distance_3d,
    duration_ms,
    segment_length,
)
from lightpath.geometry.interpolation import (
    InterpolationError,
    PreviewSamples,
    estimate_arc_length,
    interpolate_bezier,
    interpolate_catmull_rom,
    interpolate_line,
    sample_for_preview,
)
from lightpath.geometry.points import ORIGIN, Point3, Point4

__all__ = [
    "MIN_DURATION_MS",
    "ORIGIN",
    "DurationError",
    "InterpolationError",
    "Point3",
    "Point4",
    "PreviewSamples",
    "distance_3d",
    "duration_ms",
    "estimate_arc_length",
    "interpolate_bezier",
    "interpolate_catmull_rom",
    "interpolate_line",
    "sample_for_preview",
    "segment_length",
]
