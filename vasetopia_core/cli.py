"""Command line interface for Vasetopia workflows."""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, List

from .config import AppConfig, load_config
from .export import write_obj
from .lathe import LatheSettings, build
from .logging_config import setup_logging
from .profiles import canonical_axes, canonical_sketch_profiles

logger = logging.getLogger(__name__)


def _read_polyline(path: Path) -> List[List[float]]:
    with path.open("r", encoding="utf-8") as handle:
        data = json.load(handle)
    if isinstance(data, dict):
        if "points" in data:
            data = data["points"]
        elif "polyline" in data:
            data = data["polyline"]
    if not isinstance(data, list):
        raise ValueError("Polyline file must contain a list of point coordinates.")
    pts: List[List[float]] = []
    for item in data:
        if not isinstance(item, (list, tuple)):
            raise ValueError("Each point must be a list or tuple of coordinates.")
        coords = [float(v) for v in item]
        if len(coords) == 2:
            coords.append(0.0)
        if len(coords) != 3:
            raise ValueError("Points must be 2D or 3D.")
        pts.append(coords)
    return pts


def _named(bank: dict, name: str, kind: str) -> List[List[float]]:
    if name not in bank:
        raise ValueError(f"{kind.capitalize()} '{name}' not found. Use 'list-profiles' to inspect options.")
    return [[float(x), float(y), 0.0] for x, y in bank[name]]


def _cmd_list_profiles(args: argparse.Namespace, config: AppConfig) -> None:
    print("Available profiles:")
    for name, pts in canonical_sketch_profiles().items():
        print(f"  - {name} (points={len(pts)})")
    print("Available axes:")
    for name, pts in canonical_axes().items():
        print(f"  - {name} (points={len(pts)})")


def _cmd_lathe(args: argparse.Namespace, config: AppConfig) -> None:
    if args.polyline:
        profile = _read_polyline(Path(args.polyline))
    else:
        profile = _named(canonical_sketch_profiles(), args.profile, "profile")
    if args.axis_polyline:
        axis = _read_polyline(Path(args.axis_polyline))
    elif args.axis:
        axis = _named(canonical_axes(), args.axis, "axis")
    else:
        axis = [list(pt) for pt in config.default_axis]

    rings = args.rings if args.rings is not None else config.lathe.ring_resolution
    logger.info("Sweeping %d profile points around %d axis points", len(profile), len(axis))
    mesh = build(profile, axis, rings, settings=LatheSettings.from_config(config.lathe))
    out_path = write_obj(Path(args.output), mesh)
    print(f"Wrote {out_path} | verts={mesh.vertex_count} tris={mesh.triangle_count} rings={rings}")


def _cmd_gui(args: argparse.Namespace, config: AppConfig) -> None:
    from vasetopia_playground.app import run

    raise SystemExit(run(config))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vasetopia",
        description="Sketch a profile and an axis, sweep them into a lathe mesh.",
    )
    parser.add_argument("--config", help="Path to a JSON configuration file")
    parser.add_argument("--log-level", dest="log_level", help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", dest="log_file", help="Also write logs to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    list_parser = sub.add_parser("list-profiles", help="List canonical profiles and axes")
    list_parser.set_defaults(func=_cmd_list_profiles)

    lathe = sub.add_parser("lathe", help="Sweep a profile around an axis and export OBJ")
    source = lathe.add_mutually_exclusive_group()
    source.add_argument("--profile", default="square", help="Name of a canonical profile")
    source.add_argument("--polyline", help="Path to JSON file containing 2D/3D profile points")
    axis = lathe.add_mutually_exclusive_group()
    axis.add_argument("--axis", help="Name of a canonical axis (defaults to the configured axis)")
    axis.add_argument("--axis-polyline", dest="axis_polyline", help="Path to JSON file containing axis points")
    lathe.add_argument("--rings", type=int, help="Vertices per ring (>= 3)")
    lathe.add_argument("--output", default="lathe.obj", help="Output OBJ path")
    lathe.set_defaults(func=_cmd_lathe)

    gui = sub.add_parser("gui", help="Open the interactive sketch playground")
    gui.set_defaults(func=_cmd_gui)

    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(None if argv is None else list(argv))
    try:
        config = load_config(args.config)
        setup_logging(args.log_level or config.log_level, args.log_file)
        args.func(args, config)
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
