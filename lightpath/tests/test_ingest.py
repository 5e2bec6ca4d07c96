"""Tests for Blender JSON ingest and gradient loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from lightpath.configs.loader import PlannerConfig, load_config
from lightpath.curves.types import CatmullRomCurve, CurveError, ParticleSet, Polyline
from lightpath.ingest.blender import (
    CurveRecord,
    IngestError,
    ParticlesRecord,
    gradient_or_fallback,
    load_curve_file,
    load_gradient,
    parse_record,
)


@pytest.fixture()
def config() -> PlannerConfig:
    return load_config()


def _write_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def _write_strip(path: Path, rgb_row: list[tuple[int, int, int]], height: int = 4) -> Path:
    row = np.array(rgb_row, dtype=np.uint8)[np.newaxis, :, :]
    Image.fromarray(np.repeat(row, height, axis=0)).save(path)
    return path


def _point(x: float, y: float = 0.0, z: float = 0.0) -> dict:
    return {"x": x, "y": y, "z": z, "w": 1.0}


def _particle(x: float) -> dict:
    zero = {"x": 0.0, "y": 0.0, "z": 0.0}
    return {
        "location": {"x": x, "y": 0.0, "z": 0.02},
        "prev_location": {"x": x, "y": 0.0, "z": 0.01},
        "velocity": zero,
        "prev_velocity": zero,
        "rotation": {**zero, "w": 1.0},
        "prev_rotation": {**zero, "w": 1.0},
    }


class TestParseRecord:
    def test_poly(self) -> None:
        rec = parse_record({"type": "poly", "curve_length": 1.0, "points": [_point(0), _point(1)], "uv": "a.png"})
        assert isinstance(rec, CurveRecord)
        assert rec.cyclic is False

    def test_particles_type_optional(self) -> None:
        rec = parse_record({"particles": [_particle(0.0)], "color": [1, 0, 0, 1]})
        assert isinstance(rec, ParticlesRecord)

    def test_unknown_type(self) -> None:
        with pytest.raises(IngestError):
            parse_record({"type": "bezier", "points": [_point(0)]})

    def test_missing_points(self) -> None:
        with pytest.raises(IngestError):
            parse_record({"type": "nurbs", "curve_length": 1.0})

    def test_not_a_mapping(self) -> None:
        with pytest.raises(IngestError):
            parse_record([1, 2, 3])


class TestGradient:
    def test_first_row_left_to_right(self, tmp_path: Path) -> None:
        path = _write_strip(tmp_path / "g.png", [(255, 0, 0), (0, 255, 0), (0, 0, 255)])
        colors = load_gradient(path)
        assert [round(c.hue) for c in colors] == [0, 120, 240]

    def test_missing_image_uses_fallback(
        self, tmp_path: Path, config: PlannerConfig, caplog: pytest.LogCaptureFixture,
    ) -> None:
        with caplog.at_level(logging.WARNING):
            colors = gradient_or_fallback(tmp_path / "nope.png", config)
        assert colors == config.lighting.fallback_gradient
        assert "not found" in caplog.text

    def test_unreadable_image_uses_fallback(self, tmp_path: Path, config: PlannerConfig) -> None:
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"not an image")
        assert gradient_or_fallback(bad, config) == config.lighting.fallback_gradient

    def test_one_pixel_uses_fallback(self, tmp_path: Path, config: PlannerConfig) -> None:
        path = _write_strip(tmp_path / "one.png", [(255, 0, 0)])
        assert gradient_or_fallback(path, config) == config.lighting.fallback_gradient


class TestLoadCurveFile:
    def test_poly_scaled_and_offset(self, tmp_path: Path, config: PlannerConfig) -> None:
        _write_strip(tmp_path / "ribbon.png", [(255, 255, 255)] * 8)
        path = _write_json(tmp_path / "ribbon.json", {
            "type": "poly",
            "curve_length": 0.1,
            "points": [_point(0.0), _point(0.1)],
            "uv": "ribbon.png",
        })
        curve = load_curve_file(path, config)
        assert isinstance(curve, Polyline)
        assert curve.points[1].x == pytest.approx(100.0)
        assert curve.points[1].z == pytest.approx(30.0)
        assert curve.curve_length == pytest.approx(100.0)
        assert len(curve.colors) == 8

    def test_nurbs_cyclic_closed(self, tmp_path: Path, config: PlannerConfig) -> None:
        path = _write_json(tmp_path / "loop.json", {
            "type": "nurbs",
            "curve_length": 0.3,
            "points": [_point(0.0), _point(0.01), _point(0.02), _point(0.03)],
            "cyclic": True,
            "uv": "missing.png",
        })
        curve = load_curve_file(path, config)
        assert isinstance(curve, CatmullRomCurve)
        assert len(curve.points) == 7
        assert curve.colors == config.lighting.fallback_gradient

    def test_particles(self, tmp_path: Path, config: PlannerConfig) -> None:
        path = _write_json(tmp_path / "sparks.json", {
            "type": "particles",
            "particles": [_particle(0.0), _particle(0.05)],
            "color": [0.0, 0.0, 1.0, 1.0],
        })
        curve = load_curve_file(path, config)
        assert isinstance(curve, ParticleSet)
        assert curve.particles[1].location.x == pytest.approx(50.0)
        assert curve.particles[0].prev_location.z == pytest.approx(40.0)
        assert curve.color.hue == pytest.approx(240.0)

    def test_invalid_json(self, tmp_path: Path, config: PlannerConfig) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(IngestError):
            load_curve_file(path, config)

    def test_missing_file(self, tmp_path: Path, config: PlannerConfig) -> None:
        with pytest.raises(IngestError):
            load_curve_file(tmp_path / "absent.json", config)

    def test_degenerate_curve(self, tmp_path: Path, config: PlannerConfig) -> None:
        path = _write_json(tmp_path / "short.json", {
            "type": "nurbs", "curve_length": 0.0, "points": [_point(0.0), _point(0.1)],
        })
        with pytest.raises(CurveError):
            load_curve_file(path, config)
