"""Tests for curve variants: construction, transforms and loop closing."""

from __future__ import annotations

import pytest

from lightpath.color.hsl import FALLBACK_GRADIENT, WHITE
from lightpath.curves.types import CatmullRomCurve, CurveError, Particle, ParticleSet, Polyline
from lightpath.geometry.points import Point3, Point4


def _pts(*xs: float) -> list[Point4]:
    return [Point4(x, 0.0, 0.0, 1.0) for x in xs]


class TestConstruction:
    def test_polyline_needs_two_points(self) -> None:
        with pytest.raises(CurveError):
            Polyline(points=_pts(0.0))

    def test_catmull_needs_four_points(self) -> None:
        with pytest.raises(CurveError):
            CatmullRomCurve(points=_pts(0.0, 1.0, 2.0))

    def test_gradient_needs_two_colours(self) -> None:
        with pytest.raises(CurveError):
            Polyline(points=_pts(0.0, 1.0), colors=[WHITE])

    def test_default_gradient_is_fallback(self) -> None:
        assert Polyline(points=_pts(0.0, 1.0)).colors == list(FALLBACK_GRADIENT)


class TestWalking:
    def test_polyline_windows(self) -> None:
        curve = Polyline(points=_pts(0.0, 1.0, 2.0))
        windows = list(curve.windows())
        assert len(windows) == 2
        assert curve.first_point.x == 0.0
        assert curve.last_point.x == 2.0

    def test_catmull_draws_between_middle_points(self) -> None:
        curve = CatmullRomCurve(points=_pts(0.0, 1.0, 2.0, 3.0, 4.0))
        assert len(list(curve.windows())) == 2
        assert curve.first_point.x == 1.0
        assert curve.last_point.x == 3.0


class TestTransforms:
    def test_scale_includes_length_but_not_w(self) -> None:
        curve = Polyline(points=_pts(0.1, 0.2), curve_length=0.1)
        curve.scale(1000.0)
        assert [p.x for p in curve.points] == pytest.approx([100.0, 200.0])
        assert curve.points[0].w == 1.0
        assert curve.curve_length == pytest.approx(100.0)

    def test_offset(self) -> None:
        curve = Polyline(points=_pts(0.0, 1.0))
        curve.offset(0.0, 0.0, 30.0)
        assert all(p.z == 30.0 for p in curve.points)


class TestCloseLoop:
    def test_polyline_appends_head(self) -> None:
        curve = Polyline(points=_pts(0.0, 1.0, 2.0), cyclic=True)
        curve.close_loop()
        assert [p.x for p in curve.points] == [0.0, 1.0, 2.0, 0.0]

    def test_catmull_appends_three(self) -> None:
        curve = CatmullRomCurve(points=_pts(0.0, 1.0, 2.0, 3.0), cyclic=True)
        curve.close_loop()
        assert [p.x for p in curve.points] == [0.0, 1.0, 2.0, 3.0, 0.0, 1.0, 2.0]

    def test_idempotent(self) -> None:
        curve = Polyline(points=_pts(0.0, 1.0), cyclic=True)
        curve.close_loop()
        curve.close_loop()
        assert len(curve.points) == 3

    def test_open_curve_unchanged(self) -> None:
        curve = Polyline(points=_pts(0.0, 1.0))
        curve.close_loop()
        assert len(curve.points) == 2


class TestParticles:
    def test_close_loop_unsupported(self) -> None:
        with pytest.raises(CurveError):
            ParticleSet(particles=[]).close_loop()

    def test_colors_are_flat_pair(self) -> None:
        assert ParticleSet(particles=[], color=WHITE).colors == [WHITE, WHITE]

    def test_scale_and_offset(self) -> None:
        p = Particle(
            location=Point3(0.001, 0.0, 0.0),
            prev_location=Point3(0.0, 0.0, 0.0),
            velocity=Point3(0.002, 0.0, 0.0),
            rotation=Point4(0.001, 0.002, 0.003, 1.0),
            prev_rotation=Point4(0.0, 0.0, 0.001, 0.5),
        )
        s = ParticleSet(particles=[p])
        s.scale(1000.0)
        s.offset(0.0, 0.0, 30.0)
        moved = s.particles[0]
        assert moved.location.x == pytest.approx(1.0)
        assert moved.location.z == pytest.approx(30.0)
        assert moved.prev_location.z == pytest.approx(30.0)
        assert moved.velocity.x == pytest.approx(2.0)
        assert moved.velocity.z == pytest.approx(30.0)
        assert moved.prev_velocity.z == pytest.approx(30.0)
        assert moved.rotation.x == pytest.approx(1.0)
        assert moved.rotation.y == pytest.approx(2.0)
        assert moved.rotation.z == pytest.approx(33.0)
        assert moved.rotation.w == 1.0
        assert moved.prev_rotation.z == pytest.approx(31.0)
        assert moved.prev_rotation.w == 0.5
