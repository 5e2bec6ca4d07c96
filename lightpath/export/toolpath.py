"""Toolpath document -- the JSON file the device uploader consumes.

Shape::

    {
      "metadata": {"name": "VortexFile", "formatVersion": "0.0.1"},
      "actions": [ {"delta": [...], "light": [...], "run": [...]} ]
    }

``actions`` holds one entry per action group.  Field names and enum values
are a compatibility contract with the device firmware.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from lightpath.sequencer.action_groups import ActionGroups
from lightpath.utils import fs

logger = logging.getLogger(__name__)

DEFAULT_NAME = "VortexFile"
FORMAT_VERSION = "0.0.1"


def build_header(name: str = DEFAULT_NAME, format_version: str = FORMAT_VERSION) -> Dict[str, str]:
    return {"name": name, "formatVersion": format_version}


def build_document(
    groups: Union[ActionGroups, Iterable[ActionGroups]],
    name: str = DEFAULT_NAME,
    format_version: str = FORMAT_VERSION,
) -> Dict[str, Any]:
    """Wrap one or more action groups in the versioned document envelope."""
    if isinstance(groups, ActionGroups):
        groups = [groups]
    return {
        "metadata": build_header(name, format_version),
        "actions": [g.to_dict() for g in groups],
    }


def write_toolpath(
    path: Union[str, Path],
    document: Dict[str, Any],
    indent: Optional[int] = 2,
) -> Path:
    """Write *document* atomically and return the path written."""
    path = Path(path)
    fs.atomic_json_dump(document, path, indent=indent)
    logger.info("Wrote toolpath %s", path)
    return path
