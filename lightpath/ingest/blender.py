"""Blender export ingest -- JSON curve records to planner curves.

Each ``.json`` file in a collection folder holds one record:

``{"type": "poly" | "nurbs", "curve_length", "points": [{x, y, z, w?}], "cyclic"?, "uv"?}``
    A spline.  ``uv`` names a gradient strip image relative to the JSON
    file; its first pixel row, left to right, is the colour gradient.
``{"type"?: "particles", "particles": [...], "color": [r, g, b, a]}``
    A particle system with one colour (unit floats).  ``type`` may be
    omitted when a ``particles`` list is present.

Records are validated with pydantic, then converted, scaled from Blender
metres to millimetres, offset into the machine frame and, for cyclic
splines, closed.

A missing or unreadable gradient image is not fatal: the curve gets the
configured flat fallback gradient and a warning is logged.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, List, Literal, Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from lightpath.color.hsl import Hsl
from lightpath.configs.loader import PlannerConfig
from lightpath.curves.types import (
    CatmullRomCurve,
    Curve,
    Particle,
    ParticleSet,
    Polyline,
)
from lightpath.geometry.points import Point3, Point4
from lightpath.utils.fs import load_json

logger = logging.getLogger(__name__)


class IngestError(Exception):
    """Raised when a Blender export cannot be read or understood."""

    pass


# ============================================================================
# RECORD SCHEMA
# ============================================================================

class PointRecord(BaseModel):
    """Spline control point (Blender units)."""
    x: float
    y: float
    z: float
    w: float = Field(0.0, description="Homogeneous weight, carried but unused")

    def to_point(self) -> Point4:
        return Point4(self.x, self.y, self.z, self.w)


class Vector3Record(BaseModel):
    x: float
    y: float
    z: float

    def to_point(self) -> Point3:
        return Point3(self.x, self.y, self.z)


class CurveRecord(BaseModel):
    """Poly or NURBS spline record."""
    type: Literal["poly", "nurbs"]
    curve_length: float = Field(0.0, ge=0.0, description="Blender-reported length")
    points: List[PointRecord] = Field(..., min_length=1)
    cyclic: bool = False
    uv: Optional[str] = Field(None, description="Gradient strip, relative to the JSON file")


class ParticleRecord(BaseModel):
    """One particle: current and previous frame state."""
    location: Vector3Record
    prev_location: Vector3Record
    velocity: Vector3Record = Vector3Record(x=0.0, y=0.0, z=0.0)
    prev_velocity: Vector3Record = Vector3Record(x=0.0, y=0.0, z=0.0)
    rotation: PointRecord = PointRecord(x=0.0, y=0.0, z=0.0, w=0.0)
    prev_rotation: PointRecord = PointRecord(x=0.0, y=0.0, z=0.0, w=0.0)

    def to_particle(self) -> Particle:
        return Particle(
            location=self.location.to_point(),
            prev_location=self.prev_location.to_point(),
            velocity=self.velocity.to_point(),
            prev_velocity=self.prev_velocity.to_point(),
            rotation=self.rotation.to_point(),
            prev_rotation=self.prev_rotation.to_point(),
        )


class ParticlesRecord(BaseModel):
    """Particle system record; colour is RGBA in [0, 1]."""
    type: Literal["particles"] = "particles"
    particles: List[ParticleRecord]
    color: Tuple[float, float, float, float]


BlenderRecord = Annotated[
    Union[CurveRecord, ParticlesRecord], Field(discriminator="type")
]

_RECORD_ADAPTER: TypeAdapter[Union[CurveRecord, ParticlesRecord]] = TypeAdapter(BlenderRecord)


def parse_record(data: Any) -> Union[CurveRecord, ParticlesRecord]:
    """Validate one decoded JSON record.

    Raises
    ------
    IngestError
        For an unknown ``type`` or any schema violation.
    """
    if isinstance(data, dict) and "type" not in data and "particles" in data:
        data = {**data, "type": "particles"}
    try:
        return _RECORD_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise IngestError(f"Invalid Blender record: {exc}") from exc


# ============================================================================
# GRADIENTS
# ============================================================================

def load_gradient(path: Union[str, Path]) -> List[Hsl]:
    """Read the first pixel row of an image as an HSL gradient.

    Parameters
    ----------
    path : str | Path
        Any image Pillow can open.

    Returns
    -------
    list[Hsl]
        One stop per pixel, left to right.

    Raises
    ------
    FileNotFoundError
        If *path* does not exist.
    OSError
        If Pillow cannot decode the file.
    """
    with Image.open(path) as img:
        rgba = np.asarray(img.convert("RGBA"))
    row = rgba[0]
    logger.debug("Gradient %s: %d stops", Path(path).name, len(row))
    return [Hsl.from_rgb8(int(r), int(g), int(b), int(a)) for r, g, b, a in row]


def gradient_or_fallback(path: Optional[Path], config: PlannerConfig) -> List[Hsl]:
    """Gradient from *path*, or the configured fallback with a warning."""
    fallback = config.lighting.fallback_gradient
    if path is None:
        return fallback
    try:
        colors = load_gradient(path)
    except FileNotFoundError:
        logger.warning("Gradient image %s not found, using fallback", path)
        return fallback
    except (UnidentifiedImageError, OSError) as exc:
        logger.warning("Gradient image %s unreadable (%s), using fallback", path, exc)
        return fallback
    if len(colors) < 2:
        logger.warning("Gradient image %s is narrower than 2 px, using fallback", path)
        return fallback
    return colors


# ============================================================================
# CONVERSION
# ============================================================================

def record_to_curve(
    record: Union[CurveRecord, ParticlesRecord],
    config: PlannerConfig,
    base_dir: Optional[Path] = None,
) -> Curve:
    """Build a machine-frame curve from a validated record.

    Scale is applied before offset.  Cyclic splines are closed after the
    transform.

    Raises
    ------
    CurveError
        If the record has too few points for its curve kind.
    """
    ingest = config.ingest

    if isinstance(record, ParticlesRecord):
        r, g, b, a = record.color
        curve: Curve = ParticleSet(
            particles=[p.to_particle() for p in record.particles],
            color=Hsl.from_rgb(r, g, b, a),
        )
    else:
        uv_path = None
        if record.uv:
            uv_path = Path(record.uv)
            if base_dir is not None and not uv_path.is_absolute():
                uv_path = base_dir / uv_path
        cls = Polyline if record.type == "poly" else CatmullRomCurve
        curve = cls(
            points=[p.to_point() for p in record.points],
            colors=gradient_or_fallback(uv_path, config),
            curve_length=record.curve_length,
            cyclic=record.cyclic,
        )

    curve.scale(ingest.unit_scale)
    curve.offset(*ingest.offset_mm)
    if not isinstance(curve, ParticleSet):
        curve.close_loop()
    return curve


def load_curve_file(path: Union[str, Path], config: PlannerConfig) -> Curve:
    """Load one Blender JSON export as a planner curve.

    Parameters
    ----------
    path : str | Path
        JSON record file.
    config : PlannerConfig
        Supplies the ingest transform and fallback gradient.

    Returns
    -------
    Curve
        Polyline, CatmullRomCurve or ParticleSet in machine mm.

    Raises
    ------
    IngestError
        If the file is missing, not JSON, or fails validation.
    CurveError
        If the record is valid JSON but describes a degenerate curve.
    """
    path = Path(path)
    try:
        data = load_json(path)
    except FileNotFoundError as exc:
        raise IngestError(str(exc)) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise IngestError(f"{path.name} is not valid JSON: {exc}") from exc

    try:
        record = parse_record(data)
    except IngestError as exc:
        raise IngestError(f"{path.name}: {exc}") from exc

    curve = record_to_curve(record, config, base_dir=path.parent)
    logger.debug("Loaded %s as %s", path.name, type(curve).__name__)
    return curve


__all__ = [
    "BlenderRecord",
    "CurveRecord",
    "IngestError",
    "ParticleRecord",
    "ParticlesRecord",
    "PointRecord",
    "gradient_or_fallback",
    "load_curve_file",
    "load_gradient",
    "parse_record",
    "record_to_curve",
]
