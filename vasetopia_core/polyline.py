"""Nearest-point queries against ordered polylines.

Only the first two coordinates of every point take part in the search; the
sketch lives in the XY plane and the third coordinate, when present, is
ignored. The search is vectorised over all segments at once.
"""
from __future__ import annotations

from typing import NamedTuple, Sequence

import numpy as np

EPS = 1e-12


class Projection(NamedTuple):
    distance: float
    point: np.ndarray
    segment: int
    t: float


def _as_xy(points: Sequence[Sequence[float]] | np.ndarray) -> np.ndarray:
    arr = np.asarray(points, dtype=float)
    if arr.ndim != 2 or arr.shape[1] < 2:
        raise ValueError("polyline must be a sequence of 2D or 3D points")
    return arr[:, :2]


def project(polyline: Sequence[Sequence[float]] | np.ndarray, query: Sequence[float]) -> Projection:
    """Return the point of ``polyline`` closest to ``query``.

    ``t`` is the clamped segment parameter of the winner, so
    ``point == v + t * (w - v)`` for ``segment``'s endpoints ``v, w``.
    Equal distances resolve to the lowest segment index. Zero-length segments
    behave as single points.
    """
    pts = _as_xy(polyline)
    if pts.shape[0] < 2:
        raise ValueError("polyline must contain at least two points")
    q = np.asarray(query, dtype=float)[:2]

    seg_vec = pts[1:] - pts[:-1]
    seg_len_sq = np.sum(seg_vec ** 2, axis=1)
    to_point = q - pts[:-1]
    dots = np.sum(to_point * seg_vec, axis=1)
    degenerate = seg_len_sq <= EPS
    t = np.where(degenerate, 0.0, dots / np.where(degenerate, 1.0, seg_len_sq))
    t = np.clip(t, 0.0, 1.0)
    candidates = pts[:-1] + seg_vec * t[:, None]
    dist = np.hypot(q[0] - candidates[:, 0], q[1] - candidates[:, 1])

    best = int(np.argmin(dist))
    return Projection(
        distance=float(dist[best]),
        point=candidates[best].copy(),
        segment=best,
        t=float(t[best]),
    )


def distance_to_polyline(point: Sequence[float], polyline: Sequence[Sequence[float]] | np.ndarray) -> float:
    """Minimum distance from ``point`` to ``polyline``.

    Unlike :func:`project` this accepts short inputs: an empty polyline is
    infinitely far away and a single point is measured directly.
    """
    pts = np.asarray(polyline, dtype=float)
    if pts.shape[0] == 0:
        return float("inf")
    if pts.shape[0] == 1:
        return float(np.hypot(point[0] - pts[0, 0], point[1] - pts[0, 1]))
    return project(pts, point).distance


__all__ = ["Projection", "project", "distance_to_polyline"]
