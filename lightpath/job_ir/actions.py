"""Action vocabulary -- the contract between the planner and the device.

Every queued command is an immutable, slotted dataclass.  Motions use
**millimetre** waypoints and **whole millisecond** durations; fades use
HSL endpoints normalised to ``[0, 1]``.

Identifiers
-----------
The ``id`` carried *inside* a payload is list-local: a motion's position
in the motion list (1-based), or for a fade the id of the motion it is
tied to (the barrier).  Payloads are built with ``id=0`` and stamped by
:class:`~lightpath.sequencer.action_groups.ActionGroups`.  The envelope
records (``DeltaAction`` etc.) carry the *global* id, which is the only
thing the device uses to order execution.

Enumerations
------------
The integer values are part of the wire format and must not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

Waypoint = tuple[float, float, float]

# ---------------------------------------------------------------------------
# Wire enumerations
# ---------------------------------------------------------------------------


class MotionType(IntEnum):
    """Interpolation used by the effector for one motion."""

    POINT_TRANSIT = 0
    LINE = 1
    CATMULL_ROM = 2
    BEZIER_QUADRATIC = 3
    BEZIER_CUBIC = 4

    @property
    def min_points(self) -> int:
        """Minimum waypoint count the device accepts for this type."""
        return _MIN_POINTS[self]


_MIN_POINTS = {
    MotionType.POINT_TRANSIT: 1,
    MotionType.LINE: 2,
    MotionType.CATMULL_ROM: 4,
    MotionType.BEZIER_QUADRATIC: 3,
    MotionType.BEZIER_CUBIC: 4,
}


class Reference(IntEnum):
    """Coordinate frame of a motion's waypoints."""

    ABSOLUTE = 0
    RELATIVE = 1


class AnimationType(IntEnum):
    """Lighting animation for one fade."""

    CONSTANT_ON = 0
    LINEAR_FADE = 1


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Motion:
    """One queued movement of the effector.

    Parameters
    ----------
    motion_type : MotionType
        Interpolation kind.
    duration : int
        Travel time in whole milliseconds.
    points : tuple[Waypoint, ...]
        Waypoints in mm.  Must hold at least ``motion_type.min_points``.
    reference : Reference
        Absolute (machine frame) or relative to the current position.
    id : int
        List-local id, stamped by the sequencer.
    """

    motion_type: MotionType
    duration: int
    points: tuple[Waypoint, ...]
    reference: Reference = Reference.ABSOLUTE
    id: int = 0

    def __post_init__(self) -> None:
        needed = MotionType(self.motion_type).min_points
        if len(self.points) < needed:
            raise ValueError(
                f"{MotionType(self.motion_type).name} motion requires >= "
                f"{needed} points, got {len(self.points)}"
            )
        if self.duration < 0:
            raise ValueError(f"Motion duration must be >= 0, got {self.duration}")

    @property
    def accumulates_time(self) -> bool:
        """True for content moves; transits and Bezier shaping moves are not."""
        return self.motion_type in (MotionType.LINE, MotionType.CATMULL_ROM)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": int(self.motion_type),
            "reference": int(self.reference),
            "id": self.id,
            "duration": self.duration,
            "points": [list(p) for p in self.points],
        }


@dataclass(frozen=True, slots=True)
class Fade:
    """One queued lighting animation.

    Parameters
    ----------
    animation_type : AnimationType
        Constant-on or linear fade between the first two points.
    duration : float
        Animation length in milliseconds.
    points : tuple[Waypoint, ...]
        ``(h, s, l)`` endpoints normalised to ``[0, 1]``.  At least two.
    id : int
        Barrier id of the motion group this fade illuminates.
    """

    animation_type: AnimationType
    duration: float
    points: tuple[Waypoint, ...]
    id: int = 0

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError(
                f"Fade requires >= 2 points, got {len(self.points)}"
            )
        for point in self.points:
            for val in point:
                if not 0.0 <= val <= 1.0:
                    raise ValueError(
                        f"Fade point components must be in [0, 1], got {point}"
                    )
        if self.duration < 0:
            raise ValueError(f"Fade duration must be >= 0, got {self.duration}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": int(self.animation_type),
            "id": self.id,
            "duration": self.duration,
            "points": [list(p) for p in self.points],
        }


# ---------------------------------------------------------------------------
# Envelopes (global ids)
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class DeltaAction:
    """Motion queued on the delta effector."""

    id: int
    payload: Motion
    action: str = "queue_movement"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "action": self.action, "payload": self.payload.to_dict()}


@dataclass(frozen=True, slots=True)
class LightAction:
    """Fade queued on the light fixture."""

    id: int
    payload: Fade
    comment: str = ""
    action: str = "queue_light"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action,
            "payload": self.payload.to_dict(),
            "comment": self.comment,
        }


@dataclass(frozen=True, slots=True)
class GenericAction:
    """Auxiliary step (sync point, camera capture, ...).

    ``wait_for`` names the global id this step must wait on; ``0`` means
    no dependency.
    """

    id: int
    action: str
    payload: str = ""
    comment: str = ""
    wait_for: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "action": self.action,
            "payload": self.payload,
            "comment": self.comment,
            "waitFor": self.wait_for,
        }
