"""Curve evaluation and sampled arc length.

Provides:
    - Linear, Catmull-Rom and Bezier (quadratic / cubic) evaluation
    - Arc-length estimation by fixed-resolution sampling
    - Lazy preview samples for the viewer export

All evaluators reject parameters outside the open interval ``(0, 1)``:
callers already hold the exact endpoints, so producing them here would
only hide an indexing mistake.

Catmull-Rom uses the uniform basis::

                                [  0  2  0  0 ]   [ p0 ]
    q(t) = 0.5 ( 1, t, t^2, t^3 ) [ -1  0  1  0 ] * [ p1 ]
                                [  2 -5  4 -1 ]   [ p2 ]
                                [ -1  3 -3  1 ]   [ p3 ]

The segment runs from ``p1`` (t=0) to ``p2`` (t=1); ``p0`` and ``p3`` only
shape the tangents.

Arc length is sampled at ``t_i = i / (samples + 2)`` for ``i = 1..samples``
(1% .. 98% with the default 98 samples) and the chord lengths summed.  The
resolution is fixed, so the same control points always give the same
length and therefore the same durations.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

import numpy as np

from lightpath.geometry.points import Point3, Point4, as_array
from lightpath.job_ir.actions import MotionType

DEFAULT_SAMPLES = 98

CATMULL_ROM_BASIS = 0.5 * np.array(
    [
        [0.0, 2.0, 0.0, 0.0],
        [-1.0, 0.0, 1.0, 0.0],
        [2.0, -5.0, 4.0, -1.0],
        [-1.0, 3.0, -3.0, 1.0],
    ]
)


class InterpolationError(ValueError):
    """Raised for a parameter outside (0, 1) or a bad control-point count."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _check_t(t: float) -> None:
    if not 0.0 < t < 1.0:
        raise InterpolationError(
            f"Interpolation parameter must be in (0, 1), got {t}"
        )


def _check_count(points: Sequence, expected: int, kind: str) -> None:
    if len(points) != expected:
        raise InterpolationError(
            f"{kind} needs exactly {expected} control points, got {len(points)}"
        )


def _catmull_rom_many(control: np.ndarray, ts: np.ndarray) -> np.ndarray:
    """Evaluate one Catmull-Rom segment at many parameters -> ``(N, 3)``."""
    powers = np.stack([np.ones_like(ts), ts, ts**2, ts**3], axis=1)
    return powers @ CATMULL_ROM_BASIS @ control


def _bezier_many(control: np.ndarray, ts: np.ndarray) -> np.ndarray:
    """Evaluate a quadratic or cubic Bezier at many parameters."""
    t = ts[:, None]
    u = 1.0 - t
    if len(control) == 3:
        return u**2 * control[0] + 2.0 * u * t * control[1] + t**2 * control[2]
    return (
        u**3 * control[0]
        + 3.0 * u**2 * t * control[1]
        + 3.0 * u * t**2 * control[2]
        + t**3 * control[3]
    )


def _line_many(control: np.ndarray, ts: np.ndarray) -> np.ndarray:
    return control[0] + (control[1] - control[0]) * ts[:, None]


def _evaluator(kind: MotionType):
    if kind == MotionType.LINE:
        return _line_many, 2
    if kind == MotionType.CATMULL_ROM:
        return _catmull_rom_many, 4
    if kind == MotionType.BEZIER_QUADRATIC:
        return _bezier_many, 3
    if kind == MotionType.BEZIER_CUBIC:
        return _bezier_many, 4
    raise InterpolationError(f"No interpolator for motion type {kind!r}")


def sample_parameters(samples: int = DEFAULT_SAMPLES) -> np.ndarray:
    """Interior parameters ``i / (samples + 2)`` for ``i = 1..samples``."""
    if samples < 2:
        raise InterpolationError(f"Need at least 2 samples, got {samples}")
    return np.arange(1, samples + 1, dtype=np.float64) / (samples + 2)


def _to_point(row: np.ndarray) -> Point3:
    return Point3(float(row[0]), float(row[1]), float(row[2]))


# ---------------------------------------------------------------------------
# Point evaluation
# ---------------------------------------------------------------------------


def interpolate_line(a: Point3 | Point4, b: Point3 | Point4, t: float) -> Point3:
    """Linear blend ``a + (b - a) * t`` for ``t`` in (0, 1)."""
    _check_t(t)
    return Point3(
        a.x + (b.x - a.x) * t,
        a.y + (b.y - a.y) * t,
        a.z + (b.z - a.z) * t,
    )


def interpolate_catmull_rom(
    p0: Point3 | Point4,
    p1: Point3 | Point4,
    p2: Point3 | Point4,
    p3: Point3 | Point4,
    t: float,
) -> Point3:
    """Evaluate the Catmull-Rom segment ``p1 -> p2`` at ``t`` in (0, 1).

    Parameters
    ----------
    p0, p1, p2, p3 : Point3 | Point4
        Control points; ``w`` is ignored.
    t : float
        Fraction along the segment.

    Returns
    -------
    Point3
        Interpolated position.

    Raises
    ------
    InterpolationError
        If ``t`` is not strictly inside (0, 1).
    """
    _check_t(t)
    control = as_array([p0, p1, p2, p3])
    return _to_point(_catmull_rom_many(control, np.array([t]))[0])


def interpolate_bezier(points: Sequence[Point3 | Point4], t: float) -> Point3:
    """Evaluate a quadratic (3 points) or cubic (4 points) Bezier."""
    _check_t(t)
    if len(points) not in (3, 4):
        raise InterpolationError(
            f"Bezier needs 3 or 4 control points, got {len(points)}"
        )
    return _to_point(_bezier_many(as_array(points), np.array([t]))[0])


# ---------------------------------------------------------------------------
# Arc length
# ---------------------------------------------------------------------------


def estimate_arc_length(
    points: Sequence[Point3 | Point4],
    kind: MotionType = MotionType.CATMULL_ROM,
    samples: int = DEFAULT_SAMPLES,
) -> float:
    """Estimate segment length by summing chords between interior samples.

    Parameters
    ----------
    points : Sequence[Point3 | Point4]
        Control points; the count must match *kind*.
    kind : MotionType
        Which interpolator to sample.
    samples : int
        Number of interior parameters.  98 gives the 1% .. 98% grid.

    Returns
    -------
    float
        Estimated length in mm.  The span before the first and after the
        last sample is not included.
    """
    evaluate, count = _evaluator(MotionType(kind))
    _check_count(points, count, MotionType(kind).name)
    curve = evaluate(as_array(points), sample_parameters(samples))
    chords = np.linalg.norm(np.diff(curve, axis=0), axis=1)
    return float(chords.sum())


# ---------------------------------------------------------------------------
# Preview
# ---------------------------------------------------------------------------


class PreviewSamples:
    """Finite, restartable iterable of ``(x, y, z)`` samples along a segment.

    Nothing is evaluated until iteration; each ``iter()`` starts over.
    Lines yield their two endpoints, curved kinds yield ``count`` interior
    samples.
    """

    def __init__(
        self,
        points: Sequence[Point3 | Point4],
        kind: MotionType,
        count: int = DEFAULT_SAMPLES,
    ) -> None:
        self._kind = MotionType(kind)
        self._points = tuple(points)
        self._count = count
        if self._kind == MotionType.POINT_TRANSIT:
            _check_count(self._points, 1, self._kind.name)
        else:
            _, expected = _evaluator(self._kind)
            _check_count(self._points, expected, self._kind.name)

    def __len__(self) -> int:
        if self._kind in (MotionType.POINT_TRANSIT, MotionType.LINE):
            return len(self._points)
        return self._count

    def __iter__(self) -> Iterator[tuple[float, float, float]]:
        if self._kind in (MotionType.POINT_TRANSIT, MotionType.LINE):
            for p in self._points:
                yield p.as_tuple()
            return
        evaluate, _ = _evaluator(self._kind)
        control = as_array(self._points)
        for t in sample_parameters(self._count):
            row = evaluate(control, np.array([t]))[0]
            yield (float(row[0]), float(row[1]), float(row[2]))


def sample_for_preview(
    points: Sequence[Point3 | Point4],
    kind: MotionType,
    count: int = DEFAULT_SAMPLES,
) -> PreviewSamples:
    """Lazy preview samples for one segment (see :class:`PreviewSamples`)."""
    return PreviewSamples(points, kind, count)
