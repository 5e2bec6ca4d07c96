"""Toolpath planner -- curves to a sequenced set of device actions.

Walks the curves of one output unit in order and emits motions and fades
into a fresh :class:`~lightpath.sequencer.action_groups.ActionGroups`.

Per curve kind:

``Polyline`` / ``CatmullRomCurve``
    transit to the first drawn point, reset the barrier, one motion per
    window, then the compressed gradient as linear fades.
``ParticleSet``
    optionally reordered (greedy nearest neighbour); per particle a
    transit, a short relative dwell, a reset, one line from
    ``prev_location`` to ``location`` and a constant-on fade.

Transits:
    The tool starts at home ``(0, 0, 0)``.  Leaving home is a point transit
    of fixed duration.  Any other repositioning is a cubic Bezier whose
    inner control points sit a small fraction along the A-B line, so the
    effector eases in and out instead of jerking.  A transit to the current
    position is skipped.

Units: waypoints in **mm**, durations in **ms**.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import numpy as np

from lightpath.color.clustering import compress_gradient
from lightpath.configs.loader import PlannerConfig
from lightpath.curves.routing import order_particles
from lightpath.curves.types import CatmullRomCurve, ParticleSet, Polyline
from lightpath.geometry.duration import duration_ms
from lightpath.geometry.points import Point3, Point4
from lightpath.job_ir.actions import AnimationType, Fade, Motion, MotionType, Reference
from lightpath.sequencer.action_groups import ActionGroups

logger = logging.getLogger(__name__)


class PlanningError(Exception):
    """Raised when a curve cannot be turned into actions."""

    pass


class EnvelopeError(PlanningError):
    """Raised when a waypoint leaves the machine's work envelope."""

    pass


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _xyz(p: Point3 | Point4) -> tuple[float, float, float]:
    return (float(p.x), float(p.y), float(p.z))


def _lerp(a: Point3, b: Point3, t: float) -> tuple[float, float, float]:
    return (
        a.x + (b.x - a.x) * t,
        a.y + (b.y - a.y) * t,
        a.z + (b.z - a.z) * t,
    )


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------


class ToolpathPlanner:
    """Convert curves into motion and light actions.

    Parameters
    ----------
    config : PlannerConfig
        Validated planner configuration.
    rng : np.random.Generator | None
        Source for particle route starts.  ``None`` seeds a generator from
        ``routing.seed`` (unseeded when that is null).

    Notes
    -----
    The planner keeps no state between :meth:`plan` calls apart from the
    configuration and the generator; each call returns a new group.
    """

    def __init__(
        self,
        config: PlannerConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self._cfg = config
        self._rng = rng if rng is not None else np.random.default_rng(config.routing.seed)
        self._position: Point3 = config.home
        self._groups: ActionGroups = ActionGroups()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def plan(self, curves: Iterable[object]) -> ActionGroups:
        """Sequence every curve of one output unit.

        Parameters
        ----------
        curves : Iterable[Polyline | CatmullRomCurve | ParticleSet]
            Curves in drawing order.

        Returns
        -------
        ActionGroups
            Freshly built group for this unit.

        Raises
        ------
        PlanningError
            For an unsupported curve object.
        EnvelopeError
            If any absolute waypoint lies outside the work envelope.
        """
        self._groups = ActionGroups()
        self._position = self._cfg.home

        count = 0
        for curve in curves:
            self._plan_curve(curve)
            count += 1

        if self._cfg.output.capture_trigger:
            self._groups.add_generic("capture", comment="expose frame")

        groups = self._groups
        logger.info(
            "Planned %d curves: %d moves, %d fades, %d ms",
            count, len(groups.delta), len(groups.light), groups.total_duration_ms(),
        )
        return groups

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def _plan_curve(self, curve: object) -> None:
        if isinstance(curve, (Polyline, CatmullRomCurve)):
            self._plan_point_curve(curve)
        elif isinstance(curve, ParticleSet):
            self._plan_particles(curve)
        else:
            raise PlanningError(
                f"Unsupported curve object: {type(curve).__name__}"
            )

    def _plan_point_curve(self, curve: Polyline | CatmullRomCurve) -> None:
        m = self._cfg.motion
        groups = self._groups

        self._move_to(curve.first_point.to_point3())
        groups.reset_barrier()

        for window in curve.windows():
            self._add_motion(
                Motion(
                    motion_type=curve.MOTION_TYPE,
                    duration=duration_ms(
                        window, m.speed_mm_s, m.min_duration_ms, m.arc_length_samples
                    ),
                    points=tuple(_xyz(p) for p in window),
                )
            )
        self._position = curve.last_point.to_point3()

        fades = compress_gradient(
            curve.colors,
            groups.movement_duration(),
            self._cfg.lighting.cluster_threshold,
        )
        for fade in fades:
            groups.add_light(fade)
        logger.debug(
            "%s: %d segments, %d fades",
            type(curve).__name__, len(curve.points) - curve.WINDOW_SIZE + 1, len(fades),
        )

    def _plan_particles(self, particle_set: ParticleSet) -> None:
        m = self._cfg.motion
        groups = self._groups

        particles = particle_set.particles
        if self._cfg.routing.sort_particles:
            particles = order_particles(particles, self._rng)

        color = particle_set.color.normalized()
        for particle in particles:
            start = particle.prev_location
            end = particle.location

            self._move_to(start)
            self._add_delay(m.particle_delay_ms)
            groups.reset_barrier()

            trail = (_xyz(start), _xyz(end))
            stamped = self._add_motion(
                Motion(
                    motion_type=MotionType.LINE,
                    duration=duration_ms(
                        (start, end), m.speed_mm_s, m.min_duration_ms, m.arc_length_samples
                    ),
                    points=trail,
                )
            )
            groups.add_light(
                Fade(
                    animation_type=AnimationType.CONSTANT_ON,
                    duration=float(stamped.duration),
                    points=(color, color),
                )
            )
            self._position = end

        logger.debug("Particle set: %d trails", len(particles))

    # ------------------------------------------------------------------
    # Motions
    # ------------------------------------------------------------------

    def _add_motion(self, motion: Motion) -> Motion:
        if motion.reference == Reference.ABSOLUTE:
            self._check_envelope(motion.points)
        return self._groups.add_motion(motion)

    def _add_delay(self, delay_ms: int) -> None:
        """Hold position: a relative point transit by zero."""
        self._add_motion(
            Motion(
                motion_type=MotionType.POINT_TRANSIT,
                duration=delay_ms,
                points=((0.0, 0.0, 0.0),),
                reference=Reference.RELATIVE,
            )
        )

    def _move_to(self, target: Point3) -> None:
        transit = self._transit(self._position, target)
        if transit is not None:
            self._add_motion(transit)
        self._position = target

    def _transit(self, a: Point3, b: Point3) -> Motion | None:
        """Shaped repositioning move from *a* to *b*, or ``None`` if a == b away from home."""
        m = self._cfg.motion
        # Leaving home always emits the fixed point transit, even when b is home.
        if a == self._cfg.home:
            return Motion(
                motion_type=MotionType.POINT_TRANSIT,
                duration=m.home_transit_duration_ms,
                points=(_xyz(b),),
            )
        if a == b:
            return None

        f = m.transit_shaping_fraction
        # Control points are collinear, so the straight distance is the length.
        return Motion(
            motion_type=MotionType.BEZIER_CUBIC,
            duration=duration_ms((a, b), m.speed_mm_s, m.min_duration_ms),
            points=(_xyz(a), _lerp(a, b, f), _lerp(a, b, 1.0 - f), _xyz(b)),
        )

    def _check_envelope(self, points: Sequence[tuple[float, float, float]]) -> None:
        env = self._cfg.envelope
        if not env.enabled:
            return
        for x, y, z in points:
            if not env.contains(x, y, z):
                raise EnvelopeError(
                    f"Waypoint ({x:.2f}, {y:.2f}, {z:.2f}) outside work envelope "
                    f"(r <= {env.radius_mm}, {env.z_min_mm} <= z <= {env.z_max_mm})"
                )
