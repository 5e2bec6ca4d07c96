"""Tests for the action vocabulary and its wire shape."""

from __future__ import annotations

import pytest

from lightpath.job_ir.actions import (
    AnimationType,
    DeltaAction,
    Fade,
    GenericAction,
    LightAction,
    Motion,
    MotionType,
    Reference,
)


class TestEnums:
    def test_wire_values(self) -> None:
        assert [int(t) for t in MotionType] == [0, 1, 2, 3, 4]
        assert int(Reference.ABSOLUTE) == 0 and int(Reference.RELATIVE) == 1
        assert int(AnimationType.CONSTANT_ON) == 0 and int(AnimationType.LINEAR_FADE) == 1

    def test_min_points(self) -> None:
        assert MotionType.POINT_TRANSIT.min_points == 1
        assert MotionType.LINE.min_points == 2
        assert MotionType.CATMULL_ROM.min_points == 4
        assert MotionType.BEZIER_QUADRATIC.min_points == 3
        assert MotionType.BEZIER_CUBIC.min_points == 4


class TestMotion:
    def test_too_few_points(self) -> None:
        with pytest.raises(ValueError, match="LINE motion requires >= 2 points"):
            Motion(MotionType.LINE, 10, ((0.0, 0.0, 0.0),))

    def test_negative_duration(self) -> None:
        with pytest.raises(ValueError):
            Motion(MotionType.POINT_TRANSIT, -1, ((0.0, 0.0, 0.0),))

    def test_accumulates_time(self) -> None:
        line = Motion(MotionType.LINE, 10, ((0, 0, 0), (1, 0, 0)))
        transit = Motion(MotionType.POINT_TRANSIT, 10, ((0, 0, 0),))
        bezier = Motion(MotionType.BEZIER_CUBIC, 10, ((0, 0, 0),) * 4)
        assert line.accumulates_time
        assert not transit.accumulates_time
        assert not bezier.accumulates_time

    def test_to_dict(self) -> None:
        m = Motion(MotionType.LINE, 500, ((0.0, 0.0, 0.0), (100.0, 0.0, 0.0)), id=3)
        assert m.to_dict() == {
            "type": 1,
            "reference": 0,
            "id": 3,
            "duration": 500,
            "points": [[0.0, 0.0, 0.0], [100.0, 0.0, 0.0]],
        }


class TestFade:
    def test_needs_two_points(self) -> None:
        with pytest.raises(ValueError, match="Fade requires >= 2 points"):
            Fade(AnimationType.LINEAR_FADE, 10.0, ((0.0, 0.0, 1.0),))

    def test_components_normalised(self) -> None:
        with pytest.raises(ValueError):
            Fade(AnimationType.LINEAR_FADE, 10.0, ((0.0, 0.0, 1.0), (0.0, 0.0, 50.0)))

    def test_to_dict(self) -> None:
        f = Fade(AnimationType.CONSTANT_ON, 12.5, ((0.5, 1.0, 0.5), (0.5, 1.0, 0.5)), id=2)
        assert f.to_dict() == {
            "type": 0,
            "id": 2,
            "duration": 12.5,
            "points": [[0.5, 1.0, 0.5], [0.5, 1.0, 0.5]],
        }


class TestEnvelopes:
    def test_delta(self) -> None:
        m = Motion(MotionType.POINT_TRANSIT, 500, ((1.0, 2.0, 3.0),), id=1)
        d = DeltaAction(id=0, payload=m).to_dict()
        assert d["action"] == "queue_movement"
        assert d["id"] == 0
        assert d["payload"]["points"] == [[1.0, 2.0, 3.0]]

    def test_light(self) -> None:
        f = Fade(AnimationType.LINEAR_FADE, 1.0, ((0, 0, 0), (0, 0, 1)))
        d = LightAction(id=4, payload=f, comment="ribbon").to_dict()
        assert d["action"] == "queue_light"
        assert d["comment"] == "ribbon"

    def test_generic_uses_camel_case_wait(self) -> None:
        d = GenericAction(id=7, action="capture", wait_for=6).to_dict()
        assert d == {"id": 7, "action": "capture", "payload": "", "comment": "", "waitFor": 6}
