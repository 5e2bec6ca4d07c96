"""Tests for gradient compression into linear fades."""

from __future__ import annotations

import pytest

from lightpath.color.clustering import CLUSTER_THRESHOLD, compress_gradient
from lightpath.color.hsl import WHITE, Hsl
from lightpath.job_ir.actions import AnimationType

RED = Hsl(0.0, 100.0, 50.0)
CYAN = Hsl(180.0, 100.0, 50.0)


class TestCompressGradient:
    def test_two_stops_give_one_fade(self) -> None:
        fades = compress_gradient([WHITE, WHITE], 500)
        assert len(fades) == 1
        fade = fades[0]
        assert fade.animation_type == AnimationType.LINEAR_FADE
        assert fade.duration == pytest.approx(500.0)
        assert fade.points == ((0.0, 0.0, 1.0), (0.0, 0.0, 1.0))
        assert fade.id == 0

    def test_flat_gradient_collapses(self) -> None:
        fades = compress_gradient([WHITE] * 5, 400)
        assert len(fades) == 1
        assert fades[0].duration == pytest.approx(400.0)

    def test_sharp_change_splits(self) -> None:
        fades = compress_gradient([RED, RED, CYAN, CYAN, CYAN], 400)
        assert [f.duration for f in fades] == pytest.approx([200.0, 200.0])
        assert fades[0].points == (RED.normalized(), CYAN.normalized())
        assert fades[1].points == (CYAN.normalized(), CYAN.normalized())

    def test_short_gradient_emits_every_step(self) -> None:
        fades = compress_gradient([WHITE, WHITE, WHITE], 300)
        assert len(fades) == 2
        assert [f.duration for f in fades] == pytest.approx([150.0, 150.0])

    def test_durations_cover_budget(self) -> None:
        colors = [Hsl(h, 100.0, 50.0) for h in range(0, 360, 15)]
        fades = compress_gradient(colors, 1234)
        assert sum(f.duration for f in fades) == pytest.approx(1234.0)
        assert fades[-1].points[1] == colors[-1].normalized()

    def test_higher_threshold_fewer_fades(self) -> None:
        colors = [Hsl(h, 100.0, 50.0) for h in range(0, 360, 15)]
        loose = compress_gradient(colors, 1000, threshold=CLUSTER_THRESHOLD * 20)
        tight = compress_gradient(colors, 1000, threshold=CLUSTER_THRESHOLD)
        assert len(loose) < len(tight)

    @pytest.mark.parametrize("colors", [[], [WHITE]])
    def test_needs_two_colours(self, colors: list) -> None:
        with pytest.raises(ValueError):
            compress_gradient(colors, 100)
