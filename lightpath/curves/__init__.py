"""Curve variants and particle route ordering."""

from lightpath.curves.routing import order_particles, route_length
from lightpath.curves.types import (
    CatmullRomCurve,
    Curve,
    CurveError,
    Particle,
    ParticleSet,
    Polyline,
)

__all__ = [
    "CatmullRomCurve",
    "Curve",
    "CurveError",
    "Particle",
    "ParticleSet",
    "Polyline",
    "order_particles",
    "route_length",
]
