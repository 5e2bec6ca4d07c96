"""Folder-level batch processing of exported animations."""

from lightpath.batch.collections import (
    AnimationSummary,
    CollectionSummary,
    FrameSummary,
    build_animation,
    discover_frames,
    format_filename,
    process_collection,
    process_frame,
)

__all__ = [
    "AnimationSummary",
    "CollectionSummary",
    "FrameSummary",
    "build_animation",
    "discover_frames",
    "format_filename",
    "process_collection",
    "process_frame",
]
