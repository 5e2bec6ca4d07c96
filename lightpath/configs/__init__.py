"""Planner configuration loading and validation."""

from lightpath.configs.loader import (
    ConfigError,
    EnvelopeConfig,
    IngestConfig,
    LightingConfig,
    MotionConfig,
    OutputConfig,
    PlannerConfig,
    RoutingConfig,
    load_config,
)

__all__ = [
    "ConfigError",
    "EnvelopeConfig",
    "IngestConfig",
    "LightingConfig",
    "MotionConfig",
    "OutputConfig",
    "PlannerConfig",
    "RoutingConfig",
    "load_config",
]
