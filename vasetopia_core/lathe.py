"""Sweep a sketched profile around a sketched axis into a closed triangle mesh.

Every profile point is projected onto the axis polyline. The foot of that
projection becomes the local centre, and the direction from the foot to the
profile point fixes the plane of the ring. Each ring is the canonical
around-Y circle, scaled by the point's distance to the axis and modulated by
a periodic radius profile, rotated into that plane and moved onto the foot.

Rings and profile points both wrap around, so the index buffer describes a
grid closed in both directions (a torus when the profile is a closed loop).
The result is always recomputed from scratch.
"""
from __future__ import annotations

import logging
import math
import warnings
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence, Union

import numpy as np

from .config import LatheConfig
from .curve import Curve
from .errors import DegenerateProfileError, DegenerateRingError, EmptyProfileWarning, InvalidAxisError
from .mesh import Mesh
from .polyline import project

logger = logging.getLogger(__name__)

EPS = 1e-12

RadiusProfile = Callable[[np.ndarray], np.ndarray]
CurveLike = Union[Curve, Iterable[Sequence[float]]]


@dataclass(frozen=True)
class RippleRadius:
    """``base + amplitude * tanh(sharpness * sin(lobes * t))``.

    With the defaults this gives the twelve soft lobes of the reference vase.
    """

    base: float = 3.0
    amplitude: float = 0.25
    sharpness: float = 4.0
    lobes: int = 12

    def __call__(self, theta: np.ndarray) -> np.ndarray:
        theta = np.asarray(theta, dtype=float)
        return self.base + self.amplitude * np.tanh(self.sharpness * np.sin(self.lobes * theta))


@dataclass(frozen=True)
class ConstantRadius:
    """Plain circular rings."""

    value: float = 1.0

    def __call__(self, theta: np.ndarray) -> np.ndarray:
        return np.full(np.shape(theta), float(self.value))


@dataclass(frozen=True)
class LatheSettings:
    radius: RadiusProfile = field(default_factory=RippleRadius)
    uv_offset: float = 5.0
    uv_scale: float = 10.0

    @classmethod
    def from_config(cls, config: LatheConfig) -> "LatheSettings":
        return cls(
            radius=RippleRadius(
                base=config.radius_base,
                amplitude=config.radius_amplitude,
                sharpness=config.radius_sharpness,
                lobes=config.radius_lobes,
            ),
            uv_offset=config.uv_offset,
            uv_scale=config.uv_scale,
        )


def _snapshot(curve: CurveLike) -> np.ndarray:
    """Private ``(N, 3)`` copy of the curve taken before any work starts."""
    if isinstance(curve, Curve):
        return curve.points
    arr = np.asarray(list(curve), dtype=float)
    if arr.size == 0:
        return np.zeros((0, 3), dtype=float)
    if arr.ndim != 2 or arr.shape[1] not in (2, 3):
        raise ValueError("curves must be sequences of 2D or 3D points")
    if arr.shape[1] == 2:
        arr = np.column_stack([arr, np.zeros(arr.shape[0])])
    return arr.copy()


def _check_ring_resolution(ring_resolution: int) -> int:
    try:
        m = int(ring_resolution)
    except (TypeError, ValueError) as exc:
        raise DegenerateRingError(f"ring resolution must be an integer, got {ring_resolution!r}") from exc
    if m != ring_resolution or m < 3:
        raise DegenerateRingError(f"ring resolution must be an integer >= 3, got {ring_resolution!r}")
    return m


def _check_axis(axis: np.ndarray) -> None:
    if axis.shape[0] < 2:
        raise InvalidAxisError(f"axis needs at least two points, got {axis.shape[0]}")
    spread = np.linalg.norm(axis[:, :2] - axis[0, :2], axis=1)
    if not np.any(spread > EPS):
        raise InvalidAxisError("axis points all coincide")


def _rotate_cw_unit(vectors: np.ndarray) -> np.ndarray:
    """Normalise 2D vectors and turn them by -90 degrees; zero stays zero."""
    length = np.linalg.norm(vectors, axis=1)
    safe = np.where(length > EPS, length, 1.0)
    unit = np.where((length > EPS)[:, None], vectors / safe[:, None], 0.0)
    return np.column_stack([unit[:, 1], -unit[:, 0]])


def profile_normals(profile: np.ndarray) -> np.ndarray:
    """Finite-difference outward directions of a cyclic 2D profile.

    For a counter-clockwise profile the result points away from the enclosed
    region. The vectors are not normalised.
    """
    xy = np.asarray(profile, dtype=float)[:, :2]
    to_next = np.roll(xy, -1, axis=0) - xy
    from_prev = xy - np.roll(xy, 1, axis=0)
    return 0.5 * (_rotate_cw_unit(to_next) + _rotate_cw_unit(from_prev))


def axis_frames(profile: np.ndarray, axis: np.ndarray) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Per profile point: distance to the axis, foot on the axis, ring angle."""
    count = profile.shape[0]
    dist = np.zeros(count, dtype=float)
    feet = np.zeros((count, 3), dtype=float)
    angles = np.zeros(count, dtype=float)
    for j, point in enumerate(profile):
        hit = project(axis, point)
        dist[j] = hit.distance
        feet[j] = (hit.point[0], hit.point[1], 0.0)
        sweep = point - feet[j]
        angles[j] = -math.atan2(sweep[0], sweep[1]) + math.pi / 2.0
    return dist, feet, angles


def ring_indices(profile_count: int, ring_resolution: int) -> np.ndarray:
    """Two triangles per cell of the ``profile_count x ring_resolution`` grid, wrapped both ways."""
    n, m = profile_count, ring_resolution
    jj, ii = np.meshgrid(np.arange(n), np.arange(m), indexing="ij")

    def idx(i: np.ndarray, j: np.ndarray) -> np.ndarray:
        return (j % n) * m + (i % m)

    a = idx(ii, jj)
    b = idx(ii + 1, jj)
    c = idx(ii, jj + 1)
    d = idx(ii + 1, jj + 1)
    return np.stack([a, b, c, d, c, b], axis=-1).reshape(-1).astype(np.uint32)


def build(
    profile: CurveLike,
    axis: CurveLike,
    ring_resolution: int,
    *,
    settings: LatheSettings | None = None,
) -> Mesh:
    """Sweep ``profile`` around ``axis`` with ``ring_resolution`` vertices per ring.

    Raises :class:`DegenerateRingError`, :class:`InvalidAxisError` or
    :class:`DegenerateProfileError` before doing any work. An empty profile
    emits :class:`EmptyProfileWarning` and yields an empty mesh.
    """
    settings = settings or LatheSettings()
    m = _check_ring_resolution(ring_resolution)
    prof = _snapshot(profile)
    axis_pts = _snapshot(axis)

    n = prof.shape[0]
    if n == 0:
        warnings.warn("profile is empty; nothing to sweep", EmptyProfileWarning, stacklevel=2)
        return Mesh.empty()
    _check_axis(axis_pts)
    if n == 1:
        raise DegenerateProfileError("profile needs at least two points to estimate normals")

    nm = profile_normals(prof)
    dist, feet, angles = axis_frames(prof, axis_pts)

    theta = np.arange(m) * (2.0 * math.pi / m)
    radius = np.asarray(settings.radius(theta), dtype=float)
    if radius.shape != theta.shape:
        raise ValueError("radius profile must return one value per ring angle")
    cos_t, sin_t = np.cos(theta), np.sin(theta)
    ring_x = radius * cos_t
    ring_z = radius * sin_t

    # Canonical around-Y ring scaled by the axis distance, then turned in XY.
    local_x = dist[:, None] * ring_x[None, :]
    local_z = dist[:, None] * ring_z[None, :]
    cos_a = np.cos(angles)[:, None]
    sin_a = np.sin(angles)[:, None]
    positions = np.stack(
        [
            cos_a * local_x + feet[:, 0:1],
            sin_a * local_x + feet[:, 1:2],
            local_z + feet[:, 2:3],
        ],
        axis=-1,
    )

    raw = np.stack(
        [
            nm[:, 0:1] * ring_x[None, :],
            np.broadcast_to(nm[:, 1:2], (n, m)),
            nm[:, 0:1] * ring_z[None, :],
        ],
        axis=-1,
    )
    length = np.linalg.norm(raw, axis=-1)
    ok = length > EPS
    fallback = np.broadcast_to(np.stack([cos_t, np.zeros(m), sin_t], axis=-1)[None, :, :], (n, m, 3))
    normals = np.where(ok[..., None], raw / np.where(ok, length, 1.0)[..., None], fallback)

    u = settings.uv_offset + settings.uv_scale * np.arange(m) / m
    v = settings.uv_offset + settings.uv_scale * np.arange(n) / (n - 1)
    uvs = np.stack(np.broadcast_arrays(u[None, :], v[:, None]), axis=-1)

    mesh = Mesh(
        positions=positions.reshape(-1, 3),
        normals=normals.reshape(-1, 3),
        uvs=uvs.reshape(-1, 2),
        indices=ring_indices(n, m),
    )
    logger.debug(
        "lathe: %d profile points x %d ring steps -> %d vertices, %d indices",
        n,
        m,
        mesh.vertex_count,
        mesh.index_count,
    )
    return mesh


__all__ = [
    "RippleRadius",
    "ConstantRadius",
    "LatheSettings",
    "build",
    "profile_normals",
    "axis_frames",
    "ring_indices",
]
