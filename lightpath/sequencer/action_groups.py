"""Action groups -- ordered motion / light / run lists for one output unit.

The device receives three arrays (``delta``, ``light``, ``run``) whose
order is not guaranteed to survive transport.  Every action therefore gets
a **global id** from one counter shared by all three lists, and the device
rebuilds the total order from those ids alone.

Barrier
-------
A fade has to start together with the motion it illuminates.  The group
tracks a *barrier*: the list-local id of the first motion added since the
last :meth:`ActionGroups.reset_barrier`.  Every fade is stamped with the
current barrier, so all fades of a curve hang off that curve's first
content move.

Movement time
-------------
Line and Catmull-Rom motions add their duration to an accumulator that
the gradient compressor uses as its timing budget.  Point transits and
Bezier shaping moves do not, so the lighting only spans the drawn part of
a group.  :meth:`ActionGroups.reset_barrier` also zeroes the accumulator.

One ``ActionGroups`` per output unit; it is never shared.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from lightpath.job_ir.actions import (
    DeltaAction,
    Fade,
    GenericAction,
    LightAction,
    Motion,
)

logger = logging.getLogger(__name__)


class ActionGroups:
    """Accumulates actions and hands out ids.

    Notes
    -----
    Mutated only through :meth:`add_motion`, :meth:`add_light`,
    :meth:`add_generic` and :meth:`reset_barrier`.
    """

    def __init__(self) -> None:
        self.delta: list[DeltaAction] = []
        self.light: list[LightAction] = []
        self.run: list[GenericAction] = []

        self._global_id: int = 0
        self._movement_ms: int = 0
        self._barrier_id: int = 0
        self._barrier_pending: bool = True

    # ------------------------------------------------------------------
    # Bookkeeping
    # ------------------------------------------------------------------

    def _take_global_id(self) -> int:
        gid = self._global_id
        self._global_id += 1
        return gid

    @property
    def next_global_id(self) -> int:
        """Global id the next action of any kind will receive."""
        return self._global_id

    @property
    def barrier_id(self) -> int:
        """List-local id fades are currently tied to (0 before any motion)."""
        return self._barrier_id

    def movement_duration(self) -> int:
        """Content-move time (ms) accumulated since the last barrier reset."""
        return self._movement_ms

    def reset_barrier(self) -> None:
        """Start a new motion group.

        The next motion becomes the barrier and the movement-time
        accumulator starts again from zero.
        """
        self._barrier_pending = True
        self._movement_ms = 0

    # ------------------------------------------------------------------
    # Adding actions
    # ------------------------------------------------------------------

    def add_motion(self, motion: Motion) -> Motion:
        """Queue a motion and return it with its list-local id stamped."""
        local_id = len(self.delta) + 1
        stamped = dataclasses.replace(motion, id=local_id)

        if self._barrier_pending:
            self._barrier_id = local_id
            self._barrier_pending = False

        if stamped.accumulates_time:
            self._movement_ms += stamped.duration

        self.delta.append(DeltaAction(id=self._take_global_id(), payload=stamped))
        return stamped

    def add_light(self, fade: Fade, comment: str = "") -> Fade:
        """Queue a fade tied to the current barrier and return it stamped."""
        stamped = dataclasses.replace(fade, id=self._barrier_id)
        self.light.append(
            LightAction(id=self._take_global_id(), payload=stamped, comment=comment)
        )
        return stamped

    def add_generic(
        self,
        action: str,
        payload: str = "",
        comment: str = "",
        wait_for: int = 0,
    ) -> GenericAction:
        """Queue an auxiliary step (no barrier semantics)."""
        record = GenericAction(
            id=self._take_global_id(),
            action=action,
            payload=payload,
            comment=comment,
            wait_for=wait_for,
        )
        self.run.append(record)
        return record

    # ------------------------------------------------------------------
    # Summaries / serialisation
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        return not (self.delta or self.light or self.run)

    def total_duration_ms(self) -> int:
        """Sum of every motion's duration, transits included."""
        return sum(d.payload.duration for d in self.delta)

    @property
    def first_move_id(self) -> int | None:
        return self.delta[0].payload.id if self.delta else None

    @property
    def last_move_id(self) -> int | None:
        return self.delta[-1].payload.id if self.delta else None

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: ``{"delta": [...], "light": [...], "run": [...]}``."""
        return {
            "delta": [d.to_dict() for d in self.delta],
            "light": [l.to_dict() for l in self.light],
            "run": [r.to_dict() for r in self.run],
        }

    def __repr__(self) -> str:
        return (
            f"ActionGroups(delta={len(self.delta)}, light={len(self.light)}, "
            f"run={len(self.run)}, next_global_id={self._global_id})"
        )
