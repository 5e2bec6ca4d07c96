"""Toolpath and viewer preview exports."""

from lightpath.export.preview import (
    build_viewer_data,
    gradient_strip,
    next_power_two,
    write_uv_strip,
    write_vertices,
)
from lightpath.export.toolpath import build_document, write_toolpath

__all__ = [
    "build_document",
    "build_viewer_data",
    "gradient_strip",
    "next_power_two",
    "write_toolpath",
    "write_uv_strip",
    "write_vertices",
]
