"""Batch runner -- an exported animation folder to toolpaths and a summary.

Folder layout (as written by the Blender exporter)::

    root/
        0001/                   frame folder (numeric name)
            Ribbons/            collection folder
                spline_000.json
                spline_000.png
            Sparks/
                particles.json
        0002/
            ...

For every collection the runner writes, beside the collection folder::

    <name>_toolpath.json    device document
    <name>_vertices.json    viewer line vertices
    <name>_uv.png           viewer gradient strip

where ``<name>`` is the collection name lower-cased with whitespace
removed, and finally ``root/summary.json`` listing every frame.

Failure policy:
    A JSON file that cannot be ingested is skipped with a warning; the
    rest of its collection still plans.  A collection that fails to plan
    is skipped with a warning and left out of the summary.  Nothing else
    is caught.
"""

from __future__ import annotations

import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

from lightpath.configs.loader import PlannerConfig
from lightpath.curves.types import Curve, CurveError
from lightpath.export.preview import build_viewer_data, write_uv_strip, write_vertices
from lightpath.export.toolpath import build_document, write_toolpath
from lightpath.geometry.duration import DurationError
from lightpath.geometry.interpolation import InterpolationError
from lightpath.ingest.blender import IngestError, load_curve_file
from lightpath.sequencer.planner import PlanningError, ToolpathPlanner
from lightpath.utils import fs
from lightpath.utils.logging_config import log_context

logger = logging.getLogger(__name__)

SUMMARY_FILENAME = "summary.json"

_INGEST_ERRORS = (IngestError, CurveError)
_PLANNING_ERRORS = (PlanningError, InterpolationError, DurationError)


# ---------------------------------------------------------------------------
# Summary records
# ---------------------------------------------------------------------------


@dataclass
class CollectionSummary:
    """What was written for one collection of one frame."""

    name: str
    toolpath_path: str
    duration: int
    first_move: int
    last_move: int
    num_lights: int
    viewer_vertices_path: str
    viewer_uv_path: str


@dataclass
class FrameSummary:
    frame_num: int
    collections: List[CollectionSummary] = field(default_factory=list)


@dataclass
class AnimationSummary:
    """Contents of ``summary.json``."""

    collections: List[str]
    frames: List[FrameSummary]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Discovery helpers
# ---------------------------------------------------------------------------


def is_frame_folder(path: Path) -> bool:
    """Visible directory whose name is a frame number."""
    name = path.name
    if not path.is_dir() or name.startswith(".") or name.startswith("__"):
        return False
    return name.isdigit()


def discover_frames(root: Union[str, Path]) -> List[Path]:
    """Frame folders directly under *root*, in ascending frame order."""
    root = Path(root)
    frames = [p for p in root.iterdir() if is_frame_folder(p)]
    return sorted(frames, key=lambda p: int(p.name))


def discover_collections(frame_dir: Path) -> List[Path]:
    return sorted(
        p for p in frame_dir.iterdir()
        if p.is_dir() and not p.name.startswith(".") and not p.name.startswith("__")
    )


def format_filename(destination: Path, name: str, suffix: str) -> Path:
    """``destination / "<name>_<suffix>"`` with *name* lower-cased and de-spaced."""
    clean = "".join(ch for ch in name.lower() if not ch.isspace())
    return destination / f"{clean}_{suffix}"


# ---------------------------------------------------------------------------
# Processing
# ---------------------------------------------------------------------------


def load_collection(collection_dir: Path, config: PlannerConfig) -> List[Curve]:
    """Ingest every JSON record of a collection, skipping unreadable ones."""
    curves: List[Curve] = []
    for json_path in sorted(collection_dir.glob("*.json")):
        try:
            curves.append(load_curve_file(json_path, config))
        except _INGEST_ERRORS as exc:
            logger.warning("Skipping %s: %s", json_path.name, exc)
    return curves


def process_collection(
    collection_dir: Union[str, Path],
    config: PlannerConfig,
    rng: Optional[np.random.Generator] = None,
) -> Optional[CollectionSummary]:
    """Plan one collection and write its toolpath and preview files.

    Returns
    -------
    CollectionSummary | None
        ``None`` when there was nothing to plan or planning failed.
    """
    collection_dir = Path(collection_dir)
    name = collection_dir.name

    with log_context(collection=name):
        curves = load_collection(collection_dir, config)
        if not curves:
            logger.info("No curves, skipping")
            return None

        try:
            groups = ToolpathPlanner(config, rng=rng).plan(curves)
        except _PLANNING_ERRORS as exc:
            logger.warning("Planning failed, skipping collection: %s", exc)
            return None

        if not groups.delta:
            logger.info("No moves planned, skipping")
            return None

        destination = collection_dir.parent
        out = config.output

        toolpath_path = write_toolpath(
            format_filename(destination, name, "toolpath.json"),
            build_document(groups, out.name, out.format_version),
            indent=out.indent,
        )
        vertices, colors = build_viewer_data(curves, out.preview_samples)
        vertices_path = write_vertices(
            format_filename(destination, name, "vertices.json"), vertices, indent=out.indent
        )
        uv_path = write_uv_strip(format_filename(destination, name, "uv.png"), colors)

        return CollectionSummary(
            name=name,
            toolpath_path=str(toolpath_path),
            duration=groups.total_duration_ms(),
            first_move=groups.first_move_id,
            last_move=groups.last_move_id,
            num_lights=len(groups.light),
            viewer_vertices_path=str(vertices_path),
            viewer_uv_path=str(uv_path),
        )


def process_frame(
    frame_dir: Union[str, Path],
    config: PlannerConfig,
    rng: Optional[np.random.Generator] = None,
) -> FrameSummary:
    frame_dir = Path(frame_dir)
    frame_num = int(frame_dir.name)

    with log_context(frame=frame_num):
        logger.info("Processing frame %d", frame_num)
        summary = FrameSummary(frame_num=frame_num)
        for collection_dir in discover_collections(frame_dir):
            result = process_collection(collection_dir, config, rng)
            if result is not None:
                summary.collections.append(result)
    return summary


def build_animation(
    root: Union[str, Path],
    config: PlannerConfig,
    rng: Optional[np.random.Generator] = None,
) -> AnimationSummary:
    """Process every frame under *root* and write ``summary.json``.

    Parameters
    ----------
    root : str | Path
        Animation export folder.
    config : PlannerConfig
        Validated planner configuration.
    rng : np.random.Generator | None
        Shared by every collection; ``None`` seeds one from
        ``routing.seed``.

    Returns
    -------
    AnimationSummary
        Also written to ``root/summary.json``.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Animation folder not found: {root}")
    rng = rng if rng is not None else np.random.default_rng(config.routing.seed)

    t0 = time.perf_counter()
    frames = [process_frame(f, config, rng) for f in discover_frames(root)]

    names: List[str] = []
    for frame in frames:
        for collection in frame.collections:
            if collection.name not in names:
                names.append(collection.name)

    summary = AnimationSummary(collections=names, frames=frames)
    fs.atomic_json_dump(summary.to_dict(), root / SUMMARY_FILENAME, indent=config.output.indent)
    logger.info(
        "Processed %d frames, %d collections in %.2fs",
        len(frames), len(names), time.perf_counter() - t0,
    )
    return summary
