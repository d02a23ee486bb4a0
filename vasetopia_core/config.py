"""Configuration for the lathe pipeline and the playground.

Defaults live in the dataclasses below. :func:`load_config` layers an
optional JSON file and then environment variables on top of them:

``VASETOPIA_RING_RESOLUTION``
    overrides ``lathe.ring_resolution``.
``VASETOPIA_LOG_LEVEL``
    overrides ``log_level``.
"""
from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Tuple

Point3 = Tuple[float, float, float]

ENV_RING_RESOLUTION = "VASETOPIA_RING_RESOLUTION"
ENV_LOG_LEVEL = "VASETOPIA_LOG_LEVEL"


@dataclass(frozen=True)
class LatheConfig:
    ring_resolution: int = 128
    radius_base: float = 3.0
    radius_amplitude: float = 0.25
    radius_sharpness: float = 4.0
    radius_lobes: int = 12
    uv_offset: float = 5.0
    uv_scale: float = 10.0


@dataclass(frozen=True)
class AppConfig:
    lathe: LatheConfig = field(default_factory=LatheConfig)
    default_axis: Tuple[Point3, ...] = ((0.0, 0.0, 0.0), (0.0, 5.0, 0.0))
    log_level: str = "INFO"
    window_size: Tuple[int, int] = (1200, 800)


def _check_keys(data: Mapping[str, Any], cls: type, where: str) -> None:
    if not isinstance(data, Mapping):
        raise ValueError(f"The {where} section must be a JSON object.")
    known = {f.name for f in fields(cls)}
    unknown = sorted(str(key) for key in set(data) - known)
    if unknown:
        raise ValueError(f"Unknown {where} option(s): {', '.join(unknown)}")


def _lathe_from_dict(data: Mapping[str, Any]) -> LatheConfig:
    _check_keys(data, LatheConfig, "lathe")
    cfg = LatheConfig(**data)
    try:
        return replace(
            cfg,
            ring_resolution=int(cfg.ring_resolution),
            radius_base=float(cfg.radius_base),
            radius_amplitude=float(cfg.radius_amplitude),
            radius_sharpness=float(cfg.radius_sharpness),
            radius_lobes=int(cfg.radius_lobes),
            uv_offset=float(cfg.uv_offset),
            uv_scale=float(cfg.uv_scale),
        )
    except TypeError as exc:
        raise ValueError(f"Invalid lathe option value: {exc}") from exc


def _axis_from_list(axis: Any) -> Tuple[Point3, ...]:
    if not isinstance(axis, (list, tuple)):
        raise ValueError("default_axis must be a list of points.")
    points = []
    for pt in axis:
        if not isinstance(pt, (list, tuple)) or len(pt) not in (2, 3):
            raise ValueError(f"default_axis points must be 2D or 3D, got {pt!r}")
        try:
            coords = [float(v) for v in pt]
        except (TypeError, ValueError) as exc:
            raise ValueError(f"default_axis point {pt!r} is not numeric") from exc
        if len(coords) == 2:
            coords.append(0.0)
        points.append((coords[0], coords[1], coords[2]))
    return tuple(points)


def config_from_dict(data: Mapping[str, Any]) -> AppConfig:
    """Build an :class:`AppConfig` from a parsed JSON document.

    Raises ``ValueError`` for unknown keys and for values of the wrong type.
    """
    if not isinstance(data, Mapping):
        raise ValueError("Configuration must be a JSON object.")
    _check_keys(data, AppConfig, "configuration")
    base = AppConfig()
    lathe = _lathe_from_dict(data.get("lathe", {}))
    default_axis = _axis_from_list(data.get("default_axis", base.default_axis))
    log_level = data.get("log_level", base.log_level)
    if not isinstance(log_level, str):
        raise ValueError(f"log_level must be a string, got {log_level!r}")
    try:
        width, height = data.get("window_size", base.window_size)
        window_size = (int(width), int(height))
    except (TypeError, ValueError) as exc:
        raise ValueError("window_size must be a pair of integers.") from exc
    return AppConfig(
        lathe=lathe,
        default_axis=default_axis,
        log_level=log_level.upper(),
        window_size=window_size,
    )


def _apply_env(cfg: AppConfig, env: Mapping[str, str]) -> AppConfig:
    rings = env.get(ENV_RING_RESOLUTION)
    if rings:
        try:
            ring_resolution = int(rings)
        except ValueError as exc:
            raise ValueError(f"{ENV_RING_RESOLUTION} must be an integer, got {rings!r}") from exc
        cfg = replace(cfg, lathe=replace(cfg.lathe, ring_resolution=ring_resolution))
    level = env.get(ENV_LOG_LEVEL)
    if level:
        cfg = replace(cfg, log_level=level.upper())
    return cfg


def load_config(path: str | Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Return the effective configuration."""
    cfg = AppConfig()
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            cfg = config_from_dict(json.load(handle))
    return _apply_env(cfg, os.environ if env is None else env)


__all__ = ["LatheConfig", "AppConfig", "config_from_dict", "load_config"]
