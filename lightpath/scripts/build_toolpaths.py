#!/usr/bin/env python3
"""
Build Toolpaths Script.

Convert an exported animation folder into device toolpaths, viewer
previews and a ``summary.json``.

Usage:
    python -m lightpath.scripts.build_toolpaths
    python -m lightpath.scripts.build_toolpaths --root ./export --seed 7
    python -m lightpath.scripts.build_toolpaths --config my_planner.yaml --log-level DEBUG
    python -m lightpath.scripts.build_toolpaths --json-logs --log-file logs/build.log
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

import numpy as np

from lightpath.batch.collections import build_animation
from lightpath.configs.loader import ConfigError, load_config
from lightpath.utils.logging_config import install_excepthook, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build light-painting toolpaths from a Blender export",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--root",
        "-r",
        type=str,
        default=".",
        help="Animation export folder containing numbered frame folders",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        help="Planner configuration file path",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Particle routing seed (overrides routing.seed)",
    )
    parser.add_argument(
        "--capture",
        action="store_true",
        help="Append a camera capture trigger to every toolpath",
    )

    # Logging
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Log verbosity",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        help="Also log to this file",
    )
    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Emit JSON lines instead of human-readable logs",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(
        args.log_level,
        args.log_file,
        json=args.json_logs,
        context={"app": "lightpath"},
    )
    install_excepthook()

    try:
        config = load_config(args.config)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("Error loading config: %s", e)
        return 1

    if args.capture:
        config = replace(config, output=replace(config.output, capture_trigger=True))

    seed = args.seed if args.seed is not None else config.routing.seed
    rng = np.random.default_rng(seed)

    root = Path(args.root)
    try:
        summary = build_animation(root, config, rng)
    except FileNotFoundError as e:
        logger.error("%s", e)
        return 1

    print(f"Built {len(summary.frames)} frames -> {root / 'summary.json'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
