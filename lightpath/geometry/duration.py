"""Duration model -- distance at a fixed speed to whole milliseconds.

Two points are a straight move; four points are a Catmull-Rom segment whose
length is estimated by sampling.  Anything else is not a segment the
planner produces and is rejected.

Durations are truncated to whole milliseconds and floored at
``MIN_DURATION_MS`` so that coincident points never turn into a 0 ms move
on the device.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from lightpath.geometry.interpolation import DEFAULT_SAMPLES, estimate_arc_length
from lightpath.geometry.points import Point3, Point4
from lightpath.job_ir.actions import MotionType

MIN_DURATION_MS = 10


class DurationError(ValueError):
    """Raised when no duration can be computed for the given points."""

    pass


def distance_3d(a: Point3 | Point4, b: Point3 | Point4) -> float:
    """Euclidean distance in mm (``w`` ignored)."""
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)


def segment_length(
    points: Sequence[Point3 | Point4],
    samples: int = DEFAULT_SAMPLES,
) -> float:
    """Length of a 2-point line or 4-point Catmull-Rom segment in mm.

    Raises
    ------
    DurationError
        For one point, or any count other than 2 or 4.
    """
    if len(points) == 1:
        raise DurationError("No distance over a point")
    if len(points) == 2:
        return distance_3d(points[0], points[1])
    if len(points) == 4:
        return estimate_arc_length(points, MotionType.CATMULL_ROM, samples)
    raise DurationError(
        f"Can't calculate duration on {len(points)} points (expected 2 or 4)"
    )


def duration_ms(
    points: Sequence[Point3 | Point4],
    speed_mm_s: float,
    min_duration_ms: int = MIN_DURATION_MS,
    samples: int = DEFAULT_SAMPLES,
) -> int:
    """Travel time over a segment at *speed_mm_s*.

    Parameters
    ----------
    points : Sequence[Point3 | Point4]
        2 (line) or 4 (Catmull-Rom) points.
    speed_mm_s : float
        Travel speed, must be > 0.
    min_duration_ms : int
        Floor applied after truncation.
    samples : int
        Arc-length sampling resolution for Catmull-Rom segments.

    Returns
    -------
    int
        ``max(int(distance / speed * 1000), min_duration_ms)``.
    """
    if speed_mm_s <= 0:
        raise DurationError(f"Speed must be > 0 mm/s, got {speed_mm_s}")
    distance = segment_length(points, samples)
    return max(int(distance / speed_mm_s * 1000.0), min_duration_ms)
