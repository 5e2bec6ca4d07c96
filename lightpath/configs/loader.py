"""Configuration loader for the toolpath planner.

Loads and validates ``planner.yaml`` into typed, frozen dataclasses.
Speeds, timing floors, clustering and shaping constants, the work envelope
and the ingest transform all come from the config -- the planner hardcodes
none of them.

Units: distances in **mm**, speeds in **mm/s**, durations in **ms**.

Usage::

    from lightpath.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/planner.yaml")  # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from lightpath.color.hsl import Hsl
from lightpath.geometry.points import Point3
from lightpath.utils.fs import load_yaml

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MotionConfig:
    """Speed and timing of generated motions."""

    speed_mm_s: float
    min_duration_ms: int
    home_transit_duration_ms: int
    particle_delay_ms: int
    transit_shaping_fraction: float
    arc_length_samples: int


@dataclass(frozen=True)
class LightingConfig:
    """Gradient clustering settings.

    ``cluster_threshold`` is in :func:`~lightpath.color.hsl.hsl_distance`
    units (hue in degrees, saturation / lightness in percent).
    """

    cluster_threshold: float
    fallback_hsl: tuple[float, float, float]

    @property
    def fallback_gradient(self) -> list[Hsl]:
        """Flat two-stop gradient for curves without a UV strip."""
        color = Hsl(*self.fallback_hsl)
        return [color, color]


@dataclass(frozen=True)
class EnvelopeConfig:
    """Cylindrical work envelope centred on the machine Z axis."""

    enabled: bool
    radius_mm: float
    z_min_mm: float
    z_max_mm: float

    def contains(self, x: float, y: float, z: float) -> bool:
        """True when ``(x, y, z)`` lies inside (or on) the cylinder."""
        return (
            x * x + y * y <= self.radius_mm * self.radius_mm
            and self.z_min_mm <= z <= self.z_max_mm
        )


@dataclass(frozen=True)
class IngestConfig:
    """Transform applied to Blender exports: scale first, then offset."""

    unit_scale: float
    offset_mm: tuple[float, float, float]


@dataclass(frozen=True)
class RoutingConfig:
    """Particle ordering."""

    sort_particles: bool
    seed: int | None = None


@dataclass(frozen=True)
class OutputConfig:
    """Toolpath document and preview settings."""

    name: str
    format_version: str
    indent: int | None
    capture_trigger: bool
    preview_samples: int


@dataclass(frozen=True)
class PlannerConfig:
    """Complete planner configuration loaded from ``planner.yaml``."""

    motion: MotionConfig
    lighting: LightingConfig
    envelope: EnvelopeConfig
    ingest: IngestConfig
    routing: RoutingConfig
    output: OutputConfig

    @property
    def home(self) -> Point3:
        """Machine origin; the first transit always departs from here."""
        return Point3(0.0, 0.0, 0.0)


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------


def _parse_triple(name: str, raw: Any) -> tuple[float, float, float]:
    if not isinstance(raw, (list, tuple)) or len(raw) != 3:
        raise ConfigError(f"{name} must be a 3-element list, got {raw!r}")
    return (float(raw[0]), float(raw[1]), float(raw[2]))


def _parse_motion(data: dict[str, Any]) -> MotionConfig:
    return MotionConfig(
        speed_mm_s=float(data["speed_mm_s"]),
        min_duration_ms=int(data.get("min_duration_ms", 10)),
        home_transit_duration_ms=int(data.get("home_transit_duration_ms", 500)),
        particle_delay_ms=int(data.get("particle_delay_ms", 10)),
        transit_shaping_fraction=float(data.get("transit_shaping_fraction", 0.01)),
        arc_length_samples=int(data.get("arc_length_samples", 98)),
    )


def _parse_lighting(data: dict[str, Any]) -> LightingConfig:
    return LightingConfig(
        cluster_threshold=float(data.get("cluster_threshold", 300.0)),
        fallback_hsl=_parse_triple(
            "lighting.fallback_hsl", data.get("fallback_hsl", [0.0, 0.0, 50.0])
        ),
    )


def _parse_envelope(data: dict[str, Any]) -> EnvelopeConfig:
    return EnvelopeConfig(
        enabled=bool(data.get("enabled", True)),
        radius_mm=float(data["radius_mm"]),
        z_min_mm=float(data["z_min_mm"]),
        z_max_mm=float(data["z_max_mm"]),
    )


def _parse_ingest(data: dict[str, Any]) -> IngestConfig:
    return IngestConfig(
        unit_scale=float(data.get("unit_scale", 1000.0)),
        offset_mm=_parse_triple(
            "ingest.offset_mm", data.get("offset_mm", [0.0, 0.0, 0.0])
        ),
    )


def _parse_routing(data: dict[str, Any]) -> RoutingConfig:
    seed = data.get("seed")
    return RoutingConfig(
        sort_particles=bool(data.get("sort_particles", True)),
        seed=int(seed) if seed is not None else None,
    )


def _parse_output(data: dict[str, Any]) -> OutputConfig:
    indent = data.get("indent", 2)
    return OutputConfig(
        name=str(data.get("name", "VortexFile")),
        format_version=str(data.get("format_version", "0.0.1")),
        indent=int(indent) if indent is not None else None,
        capture_trigger=bool(data.get("capture_trigger", False)),
        preview_samples=int(data.get("preview_samples", 98)),
    )


def _validate_config(cfg: PlannerConfig) -> None:
    """Validate value ranges and cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid combination.
    """
    m = cfg.motion
    if m.speed_mm_s <= 0:
        raise ConfigError(f"motion.speed_mm_s must be > 0, got {m.speed_mm_s}")
    if m.min_duration_ms < 1:
        raise ConfigError(
            f"motion.min_duration_ms must be >= 1, got {m.min_duration_ms}"
        )
    if m.home_transit_duration_ms < m.min_duration_ms:
        raise ConfigError(
            f"motion.home_transit_duration_ms ({m.home_transit_duration_ms}) "
            f"is below min_duration_ms ({m.min_duration_ms})"
        )
    if m.particle_delay_ms < 0:
        raise ConfigError(
            f"motion.particle_delay_ms must be >= 0, got {m.particle_delay_ms}"
        )
    # Control points must stay ordered along A-B.
    if not 0.0 < m.transit_shaping_fraction < 0.5:
        raise ConfigError(
            f"motion.transit_shaping_fraction must be in (0, 0.5), "
            f"got {m.transit_shaping_fraction}"
        )
    if m.arc_length_samples < 2:
        raise ConfigError(
            f"motion.arc_length_samples must be >= 2, got {m.arc_length_samples}"
        )

    if cfg.lighting.cluster_threshold < 0:
        raise ConfigError(
            f"lighting.cluster_threshold must be >= 0, "
            f"got {cfg.lighting.cluster_threshold}"
        )
    try:
        cfg.lighting.fallback_gradient
    except ValueError as exc:
        raise ConfigError(f"lighting.fallback_hsl is not a valid colour: {exc}") from exc

    e = cfg.envelope
    if e.radius_mm <= 0:
        raise ConfigError(f"envelope.radius_mm must be > 0, got {e.radius_mm}")
    if e.z_min_mm >= e.z_max_mm:
        raise ConfigError(
            f"envelope.z_min_mm ({e.z_min_mm}) must be below "
            f"z_max_mm ({e.z_max_mm})"
        )
    if not e.enabled:
        logger.warning("Work-envelope checking is disabled")

    if cfg.ingest.unit_scale <= 0:
        raise ConfigError(
            f"ingest.unit_scale must be > 0, got {cfg.ingest.unit_scale}"
        )

    if cfg.output.preview_samples < 2:
        raise ConfigError(
            f"output.preview_samples must be >= 2, got {cfg.output.preview_samples}"
        )
    if not cfg.output.name:
        raise ConfigError("output.name must not be empty")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> PlannerConfig:
    """Load and validate planner configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``planner.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    PlannerConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If the file is not valid YAML, or any field is missing or fails
        validation.
    FileNotFoundError
        If *path* does not exist.
    """
    if path is None:
        path = Path(__file__).parent / "planner.yaml"
    else:
        path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading configuration from %s", path)

    try:
        data: dict[str, Any] = load_yaml(path)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Malformed YAML in {path}: {exc}") from exc
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")

    try:
        config = PlannerConfig(
            motion=_parse_motion(data["motion"]),
            lighting=_parse_lighting(data.get("lighting") or {}),
            envelope=_parse_envelope(data["envelope"]),
            ingest=_parse_ingest(data.get("ingest") or {}),
            routing=_parse_routing(data.get("routing") or {}),
            output=_parse_output(data.get("output") or {}),
        )
    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid configuration value: {exc}"
        ) from exc

    _validate_config(config)
    logger.info("Configuration loaded successfully")
    return config
