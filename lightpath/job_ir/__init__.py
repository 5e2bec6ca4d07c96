"""
Action vocabulary module.

Defines motion, fade and generic actions as immutable dataclasses, plus
the integer enumerations used on the wire.
"""

from lightpath.job_ir.actions import (
    AnimationType,
    DeltaAction,
    Fade,
    GenericAction,
    LightAction,
    Motion,
    MotionType,
    Reference,
    Waypoint,
)

__all__ = [
    "AnimationType",
    "DeltaAction",
    "Fade",
    "GenericAction",
    "LightAction",
    "Motion",
    "MotionType",
    "Reference",
    "Waypoint",
]
