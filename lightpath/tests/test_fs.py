"""Test atomic filesystem operations.

Tests for lightpath.utils.fs:
    - ensure_dir creates parents
    - Atomic writes leave no temporary files behind
    - JSON dump / load roundtrip
    - YAML load, including missing files
    - Atomic image save clips non-uint8 data
"""

from __future__ import annotations

import json
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from lightpath.utils import fs


def test_ensure_dir(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c"
    assert fs.ensure_dir(target) == target
    assert target.is_dir()
    fs.ensure_dir(target)


class TestAtomicWrites:
    def test_bytes(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "data.bin"
        fs.atomic_write_bytes(path, b"\x00\x01")
        assert path.read_bytes() == b"\x00\x01"
        assert not list(path.parent.glob("*.tmp"))

    def test_overwrite(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"
        fs.atomic_write_text(path, "first")
        fs.atomic_write_text(path, "second")
        assert path.read_text(encoding="utf-8") == "second"

    def test_json_roundtrip(self, tmp_path: Path) -> None:
        obj = {"metadata": {"name": "VortexFile"}, "actions": [1, 2.5, None]}
        path = tmp_path / "doc.json"
        fs.atomic_json_dump(obj, path)
        assert fs.load_json(path) == obj
        assert path.read_text(encoding="utf-8").endswith("\n")

    def test_json_compact(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.json"
        fs.atomic_json_dump({"a": [1, 2]}, path, indent=None)
        assert path.read_text(encoding="utf-8") == json.dumps({"a": [1, 2]}) + "\n"

    def test_image_clips(self, tmp_path: Path) -> None:
        img = np.full((2, 3, 3), 300.0)
        path = tmp_path / "strip.png"
        fs.atomic_save_image(img, path)
        with Image.open(path) as loaded:
            assert loaded.size == (3, 2)
            assert loaded.getpixel((0, 0)) == (255, 255, 255)
        assert sorted(p.name for p in tmp_path.iterdir()) == ["strip.png"]


class TestLoaders:
    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "c.yaml"
        path.write_text("motion:\n  speed_mm_s: 200\n", encoding="utf-8")
        assert fs.load_yaml(path) == {"motion": {"speed_mm_s": 200}}

    def test_missing_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fs.load_yaml(tmp_path / "missing.yaml")

    def test_missing_json(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fs.load_json(tmp_path / "missing.json")
