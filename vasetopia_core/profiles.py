"""Canonical sketches used by the CLI and as playground presets.

All points live in the XY sketch plane; 2D entries are lifted with ``z = 0``.
"""
from __future__ import annotations

import math
from typing import Dict, List, Tuple

Point2 = Tuple[float, float]


def _loop(center: Point2, radius: float, samples: int) -> List[Point2]:
    cx, cy = center
    return [
        (cx + radius * math.cos(2.0 * math.pi * k / samples), cy + radius * math.sin(2.0 * math.pi * k / samples))
        for k in range(samples)
    ]


def canonical_sketch_profiles() -> Dict[str, List[Point2]]:
    return {
        "square": [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)],
        "vase_profile": [
            (0.0, 0.0),
            (0.18, 0.1),
            (0.28, 0.4),
            (0.32, 0.75),
            (0.26, 1.15),
            (0.14, 1.4),
            (0.05, 1.55),
        ],
        "loop": _loop((0.35, 0.5), 0.15, 24),
    }


def canonical_axes() -> Dict[str, List[Point2]]:
    return {
        "vertical": [(0.0, -1.0), (0.0, 2.0)],
        "centre_line": [(0.0, 0.0), (0.0, 5.0)],
        "bent": [(0.0, -1.0), (0.0, 0.5), (0.4, 1.5), (0.4, 2.5)],
    }


__all__ = ["canonical_sketch_profiles", "canonical_axes"]
