"""Curve variants -- the closed set of inputs the planner understands.

``Polyline``
    Chain of straight segments, walked two points at a time.
``CatmullRomCurve``
    Blender "nurbs" splines, walked four control points at a time; each
    window draws the segment between its two middle points.
``ParticleSet``
    Unordered particle trails sharing one colour.

Every variant supports ``scale``, ``offset`` and ``close_loop`` and exposes
its gradient as ``colors``.  Point curves also expose ``WINDOW_SIZE`` and
start/end selectors so the planner can walk them without caring which
variant it has beyond the motion type.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import ClassVar, Union

from lightpath.color.hsl import FALLBACK_GRADIENT, Hsl
from lightpath.geometry.points import Point3, Point4
from lightpath.job_ir.actions import MotionType


class CurveError(Exception):
    """Raised for malformed curves or unsupported curve operations."""

    pass


# ---------------------------------------------------------------------------
# Point curves
# ---------------------------------------------------------------------------


@dataclass
class _PointCurve:
    """Shared behaviour of window-walked curves."""

    points: list[Point4]
    colors: list[Hsl] = field(default_factory=lambda: list(FALLBACK_GRADIENT))
    curve_length: float = 0.0
    cyclic: bool = False
    _closed: bool = field(default=False, init=False, repr=False)

    WINDOW_SIZE: ClassVar[int] = 2
    LOOP_TAIL: ClassVar[int] = 1
    START_INDEX: ClassVar[int] = 0
    END_INDEX: ClassVar[int] = 1
    MOTION_TYPE: ClassVar[MotionType] = MotionType.LINE

    def __post_init__(self) -> None:
        self.points = list(self.points)
        self.colors = list(self.colors)
        if len(self.points) < self.WINDOW_SIZE:
            raise CurveError(
                f"{type(self).__name__} needs >= {self.WINDOW_SIZE} points, "
                f"got {len(self.points)}"
            )
        if len(self.colors) < 2:
            raise CurveError(
                f"{type(self).__name__} needs a gradient of >= 2 colours, "
                f"got {len(self.colors)}"
            )

    # -- transforms ---------------------------------------------------------

    def scale(self, factor: float) -> None:
        """Scale all points (and the declared length) about the origin."""
        self.points = [p.scale(factor) for p in self.points]
        self.curve_length *= factor

    def offset(self, dx: float, dy: float, dz: float) -> None:
        self.points = [p.offset(dx, dy, dz) for p in self.points]

    def close_loop(self) -> None:
        """Append the head points to the tail when the curve is cyclic.

        Safe to call more than once; the loop is only closed the first time.
        """
        if self.cyclic and not self._closed:
            self.points.extend(self.points[: self.LOOP_TAIL])
            self._closed = True

    # -- walking ------------------------------------------------------------

    def windows(self) -> Iterator[tuple[Point4, ...]]:
        """Sliding windows of ``WINDOW_SIZE`` points, step 1."""
        n = self.WINDOW_SIZE
        for i in range(len(self.points) - n + 1):
            yield tuple(self.points[i : i + n])

    @classmethod
    def start_point(cls, window: tuple[Point4, ...]) -> Point4:
        return window[cls.START_INDEX]

    @classmethod
    def end_point(cls, window: tuple[Point4, ...]) -> Point4:
        return window[cls.END_INDEX]

    @property
    def first_point(self) -> Point4:
        """Where drawing begins (start of the first window)."""
        return self.start_point(tuple(self.points[: self.WINDOW_SIZE]))

    @property
    def last_point(self) -> Point4:
        """Where drawing ends (end of the last window)."""
        return self.end_point(tuple(self.points[-self.WINDOW_SIZE :]))


@dataclass
class Polyline(_PointCurve):
    """Chain of straight segments."""

    WINDOW_SIZE: ClassVar[int] = 2
    LOOP_TAIL: ClassVar[int] = 1
    START_INDEX: ClassVar[int] = 0
    END_INDEX: ClassVar[int] = 1
    MOTION_TYPE: ClassVar[MotionType] = MotionType.LINE


@dataclass
class CatmullRomCurve(_PointCurve):
    """Catmull-Rom spline; the first and last control points only shape tangents.

    Closing the loop appends three head points so the seam still sees a
    full four-point window on both sides.
    """

    WINDOW_SIZE: ClassVar[int] = 4
    LOOP_TAIL: ClassVar[int] = 3
    START_INDEX: ClassVar[int] = 1
    END_INDEX: ClassVar[int] = 2
    MOTION_TYPE: ClassVar[MotionType] = MotionType.CATMULL_ROM


# ---------------------------------------------------------------------------
# Particles
# ---------------------------------------------------------------------------


_ZERO3 = Point3(0.0, 0.0, 0.0)
_ZERO4 = Point4(0.0, 0.0, 0.0, 0.0)


@dataclass(frozen=True, slots=True)
class Particle:
    """One particle sample: current and previous frame state.

    The trail drawn for a particle runs from ``prev_location`` to
    ``location``.
    """

    location: Point3
    prev_location: Point3
    velocity: Point3 = _ZERO3
    prev_velocity: Point3 = _ZERO3
    rotation: Point4 = _ZERO4
    prev_rotation: Point4 = _ZERO4

    def scale(self, factor: float) -> Particle:
        """Scale every vector field (``w`` of the rotations is kept)."""
        return Particle(
            location=self.location.scale(factor),
            prev_location=self.prev_location.scale(factor),
            velocity=self.velocity.scale(factor),
            prev_velocity=self.prev_velocity.scale(factor),
            rotation=self.rotation.scale(factor),
            prev_rotation=self.prev_rotation.scale(factor),
        )

    def offset(self, dx: float, dy: float, dz: float) -> Particle:
        """Translate every vector field (``w`` of the rotations is kept)."""
        return Particle(
            location=self.location.offset(dx, dy, dz),
            prev_location=self.prev_location.offset(dx, dy, dz),
            velocity=self.velocity.offset(dx, dy, dz),
            prev_velocity=self.prev_velocity.offset(dx, dy, dz),
            rotation=self.rotation.offset(dx, dy, dz),
            prev_rotation=self.prev_rotation.offset(dx, dy, dz),
        )


@dataclass
class ParticleSet:
    """Unordered particles sharing one colour."""

    particles: list[Particle]
    color: Hsl = FALLBACK_GRADIENT[0]

    WINDOW_SIZE: ClassVar[int] = 1
    MOTION_TYPE: ClassVar[MotionType] = MotionType.LINE

    def __post_init__(self) -> None:
        self.particles = list(self.particles)

    @property
    def colors(self) -> list[Hsl]:
        """Flat two-stop gradient of the shared colour."""
        return [self.color, self.color]

    def scale(self, factor: float) -> None:
        self.particles = [p.scale(factor) for p in self.particles]

    def offset(self, dx: float, dy: float, dz: float) -> None:
        self.particles = [p.offset(dx, dy, dz) for p in self.particles]

    def close_loop(self) -> None:
        raise CurveError("Particle sets have no loop to close")


Curve = Union[Polyline, CatmullRomCurve, ParticleSet]
"""Any curve the planner accepts."""
