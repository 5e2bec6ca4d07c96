"""Tests for the distance-to-duration model."""

from __future__ import annotations

import pytest

from lightpath.geometry.duration import (
    MIN_DURATION_MS,
    DurationError,
    distance_3d,
    duration_ms,
    segment_length,
)
from lightpath.geometry.points import Point3, Point4


class TestSegmentLength:
    def test_line(self) -> None:
        assert segment_length([Point3(0, 0, 0), Point3(0, 30, 40)]) == pytest.approx(50.0)

    def test_single_point(self) -> None:
        with pytest.raises(DurationError, match="No distance over a point"):
            segment_length([Point3(0, 0, 0)])

    @pytest.mark.parametrize("n", [0, 3, 5])
    def test_unsupported_counts(self, n: int) -> None:
        with pytest.raises(DurationError):
            segment_length([Point3(float(i), 0, 0) for i in range(n)])

    def test_distance_ignores_w(self) -> None:
        assert distance_3d(Point4(0, 0, 0, 1), Point4(1, 0, 0, 5)) == pytest.approx(1.0)


class TestDuration:
    def test_straight_line(self) -> None:
        assert duration_ms([Point3(0, 0, 0), Point3(100, 0, 0)], 200.0) == 500

    def test_two_metres_at_200(self) -> None:
        assert duration_ms([Point3(0, 0, 0), Point3(2000, 0, 0)], 200.0) == 10000

    def test_monotonic(self) -> None:
        seg = [Point3(0, 0, 0), Point3(500, 0, 0)]
        assert duration_ms(seg, 100.0) > duration_ms(seg, 200.0) > duration_ms(seg, 400.0)

    def test_truncates(self) -> None:
        # 0.9 mm at 100 mm/s is 9 ms -> floored to the minimum.
        assert duration_ms([Point3(0, 0, 0), Point3(0.9, 0, 0)], 100.0) == MIN_DURATION_MS
        # 50.5 mm at 100 mm/s is 505 ms before float truncation.
        assert duration_ms([Point3(0, 0, 0), Point3(50.5, 0, 0)], 100.0) in (504, 505)

    def test_coincident_points_get_floor(self) -> None:
        assert duration_ms([Point3(5, 5, 5), Point3(5, 5, 5)], 200.0) == 10

    def test_custom_floor(self) -> None:
        assert duration_ms([Point3(0, 0, 0), Point3(0, 0, 0)], 200.0, min_duration_ms=25) == 25

    def test_catmull_segment(self) -> None:
        straight = [
            Point4(-100.0, 0.0, 0.0),
            Point4(0.0, 0.0, 0.0),
            Point4(100.0, 0.0, 0.0),
            Point4(200.0, 0.0, 0.0),
        ]
        # ~97 mm of sampled length at 200 mm/s.
        assert 480 <= duration_ms(straight, 200.0) <= 486

    @pytest.mark.parametrize("speed", [0.0, -1.0])
    def test_rejects_non_positive_speed(self, speed: float) -> None:
        with pytest.raises(DurationError):
            duration_ms([Point3(0, 0, 0), Point3(1, 0, 0)], speed)

    def test_error_is_value_error(self) -> None:
        assert issubclass(DurationError, ValueError)
