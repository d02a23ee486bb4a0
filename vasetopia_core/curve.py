"""Mutable sketch curves shared by the profile and the sweep axis."""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

Point3 = Tuple[float, float, float]
CurveListener = Callable[["Curve"], None]


def _to_point3(point: Sequence[float]) -> Point3:
    coords = [float(v) for v in point]
    if len(coords) == 2:
        coords.append(0.0)
    if len(coords) != 3:
        raise ValueError("Points must be 2D or 3D.")
    return (coords[0], coords[1], coords[2])


class Curve:
    """Ordered 2D/3D polyline.

    Insertion order is the path of the curve. Every mutation bumps
    :attr:`revision` and notifies listeners so that GPU-side copies of the
    points can be refreshed on the next draw.
    """

    def __init__(self, points: Iterable[Sequence[float]] = (), name: str = "curve"):
        self.name = name
        self._points: List[Point3] = [_to_point3(pt) for pt in points]
        self._listeners: List[CurveListener] = []
        self.revision = 0

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[Point3]:
        return iter(list(self._points))

    def __getitem__(self, index: int) -> Point3:
        return self._points[index]

    def __repr__(self) -> str:
        return f"Curve(name={self.name!r}, points={len(self._points)})"

    @property
    def points(self) -> np.ndarray:
        """Copy of the points as an ``(N, 3)`` float array."""
        if not self._points:
            return np.zeros((0, 3), dtype=float)
        return np.array(self._points, dtype=float)

    def line_strip(self) -> np.ndarray:
        """Points packed for a line-strip draw call."""
        return self.points.astype(np.float32)

    # ------------------------------------------------------------------
    # Mutation
    def append(self, point: Sequence[float]) -> None:
        self._points.append(_to_point3(point))
        logger.debug("%s: appended %s (%d points)", self.name, self._points[-1], len(self._points))
        self._changed()

    def set_points(self, points: Iterable[Sequence[float]]) -> None:
        self._points = [_to_point3(pt) for pt in points]
        logger.debug("%s: replaced with %d points", self.name, len(self._points))
        self._changed()

    def remove_last(self) -> Point3 | None:
        if not self._points:
            return None
        removed = self._points[-1]
        self.set_points(self._points[:-1])
        return removed

    def clear(self) -> None:
        self.set_points([])

    # ------------------------------------------------------------------
    # Listeners
    def subscribe(self, listener: CurveListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable removes it again."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _changed(self) -> None:
        self.revision += 1
        for listener in list(self._listeners):
            listener(self)


__all__ = ["Curve", "Point3", "CurveListener"]
