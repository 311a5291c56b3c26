"""Command line entry point for shortest path queries.

Example:
    gridroute --start=-5,-6 --end=9,-6 --obstacles obstacles.geojson --output path.geojson
"""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from loguru import logger

from gridroute.common.errors import RoutingError
from gridroute.common.logging import configure_logging
from gridroute.nav.geojson_io import coerce_obstacles
from gridroute.planner.shortest_path import (
    ShortestPathConfig,
    load_route_config,
    shortest_path,
)

if TYPE_CHECKING:
    from collections.abc import Sequence


def _parse_xy(text: str) -> dict:
    """Parse ``"x,y"`` into a GeoJSON Point geometry."""
    parts = text.split(",")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {text!r}")
    try:
        coords = [float(parts[0]), float(parts[1])]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected numeric 'x,y', got {text!r}") from exc
    return {"type": "Point", "coordinates": coords}


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Returns:
        argparse.Namespace: Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        prog="gridroute",
        description="Shortest path between two points avoiding polygon obstacles.",
    )
    parser.add_argument(
        "--start",
        type=_parse_xy,
        required=True,
        help="Start point as 'x,y' (write --start=x,y when x is negative).",
    )
    parser.add_argument("--end", type=_parse_xy, required=True, help="End point as 'x,y'.")
    parser.add_argument(
        "--obstacles",
        type=Path,
        default=None,
        help="GeoJSON FeatureCollection of Polygon obstacles.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with route options (units, resolution, metric, ...).",
    )
    parser.add_argument("--units", default=None, help="Distance unit of the resolution.")
    parser.add_argument(
        "--resolution",
        type=float,
        default=None,
        help="Grid node spacing in the chosen units.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write the path Feature to this file instead of stdout.",
    )
    parser.add_argument("--plot", type=Path, default=None, help="Save a route plot image.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> ShortestPathConfig:
    config = load_route_config(args.config) if args.config else ShortestPathConfig()
    overrides = {}
    if args.units is not None:
        overrides["units"] = args.units
    if args.resolution is not None:
        overrides["resolution"] = args.resolution
    return replace(config, **overrides) if overrides else config


def main(argv: Sequence[str] | None = None) -> int:
    """Run a shortest path query from the command line.

    Args:
        argv: Optional CLI argument overrides.

    Returns:
        int: Process exit code; 0 on success, 1 on invalid input or failure, 2 when
        only the degraded direct line could be returned.
    """
    args = parse_args(argv)
    configure_logging(verbose=args.verbose)

    try:
        obstacles = None
        if args.obstacles is not None:
            obstacles = json.loads(args.obstacles.read_text(encoding="utf-8"))
        config = _build_config(args)
        result = shortest_path(args.start, args.end, obstacles, config)
    except (RoutingError, OSError, json.JSONDecodeError) as exc:
        logger.error("Route query failed: {error}", error=exc)
        return 1

    feature = json.dumps(result.to_feature(), indent=2)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(feature + "\n", encoding="utf-8")
        logger.info("Wrote route to {path}", path=args.output)
    else:
        sys.stdout.write(feature + "\n")

    if args.plot is not None:
        from gridroute.planner.visualization import plot_route

        plot_route(result, coerce_obstacles(obstacles), save_path=args.plot, show=False)

    return 0 if result.found else 2
