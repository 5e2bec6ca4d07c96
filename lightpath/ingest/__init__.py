"""Blender export ingest."""

from lightpath.ingest.blender import (
    CurveRecord,
    IngestError,
    ParticlesRecord,
    gradient_or_fallback,
    load_curve_file,
    load_gradient,
    parse_record,
)

__all__ = [
    "CurveRecord",
    "IngestError",
    "ParticlesRecord",
    "gradient_or_fallback",
    "load_curve_file",
    "load_gradient",
    "parse_record",
]
