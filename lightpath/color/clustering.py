"""Gradient compression -- dense colour strips to a few linear fades.

A curve's gradient usually has one stop per pixel of its UV strip, far
more than the light needs.  :func:`compress_gradient` walks the stops once
and only emits a fade when the colour has moved visibly away from the
start of the current cluster, so gentle gradients collapse to a handful of
fades while sharp transitions keep their timing.

Timing
------
The caller passes the movement time of the curve the gradient belongs to.
Every stop owns an equal slice of it::

    per_step = total_time_ms / (len(colors) - 1)

and a fade lasts ``(i - cluster_start) * per_step``, so the fade durations
always add up to the whole budget.

Emission rule (for each index ``i >= 1``)
    - distance from the cluster start exceeds the threshold, or
    - the gradient is too short to cluster (fewer than 3 steps), or
    - ``i`` is the last index (always flush).
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from lightpath.color.hsl import Hsl, hsl_distance
from lightpath.job_ir.actions import AnimationType, Fade

logger = logging.getLogger(__name__)

CLUSTER_THRESHOLD = 300.0
MIN_CLUSTER_STEPS = 3


def compress_gradient(
    colors: Sequence[Hsl],
    total_time_ms: float,
    threshold: float = CLUSTER_THRESHOLD,
) -> list[Fade]:
    """Collapse a gradient into linear fades between visually distinct stops.

    Parameters
    ----------
    colors : Sequence[Hsl]
        Gradient stops in traversal order.  At least two.
    total_time_ms : float
        Movement time the gradient is spread across.
    threshold : float
        Distance (see :func:`hsl_distance`) above which a stop starts a
        new cluster.

    Returns
    -------
    list[Fade]
        Linear fades in emission order, ids unset.  The last one always
        ends on the last stop.

    Raises
    ------
    ValueError
        If fewer than two colours are given.
    """
    steps = len(colors) - 1
    if steps < 1:
        raise ValueError(
            f"Gradient compression needs at least 2 colours, got {len(colors)}"
        )

    per_step = total_time_ms / steps
    start_index, start_color = 0, colors[0]
    fades: list[Fade] = []

    for i in range(1, len(colors)):
        color = colors[i]
        if (
            hsl_distance(start_color, color) > threshold
            or steps < MIN_CLUSTER_STEPS
            or i == steps
        ):
            fades.append(
                Fade(
                    animation_type=AnimationType.LINEAR_FADE,
                    duration=(i - start_index) * per_step,
                    points=(start_color.normalized(), color.normalized()),
                )
            )
            start_index, start_color = i, color

    logger.debug(
        "Compressed %d gradient stops into %d fades over %.1f ms",
        len(colors), len(fades), total_time_ms,
    )
    return fades

