"""Triangle mesh value produced by the lathe builder."""
from __future__ import annotations

from dataclasses import dataclass

import numpy as np


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Mesh:
    """Positions, normals and texture coordinates plus a triangle index list.

    The arrays are read-only. A mesh is never patched in place; holders swap
    in a whole new instance instead.
    """

    positions: np.ndarray
    normals: np.ndarray
    uvs: np.ndarray
    indices: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "positions", _frozen(np.array(self.positions, dtype=np.float32).reshape(-1, 3)))
        object.__setattr__(self, "normals", _frozen(np.array(self.normals, dtype=np.float32).reshape(-1, 3)))
        object.__setattr__(self, "uvs", _frozen(np.array(self.uvs, dtype=np.float32).reshape(-1, 2)))
        object.__setattr__(self, "indices", _frozen(np.array(self.indices, dtype=np.uint32).reshape(-1)))
        self.validate()

    @classmethod
    def empty(cls) -> "Mesh":
        return cls(
            positions=np.zeros((0, 3)),
            normals=np.zeros((0, 3)),
            uvs=np.zeros((0, 2)),
            indices=np.zeros(0),
        )

    def validate(self) -> None:
        """Raise ``ValueError`` if the buffers are inconsistent."""
        count = self.positions.shape[0]
        if self.normals.shape[0] != count or self.uvs.shape[0] != count:
            raise ValueError(
                f"attribute length mismatch: positions={count} normals={self.normals.shape[0]} uvs={self.uvs.shape[0]}"
            )
        if self.indices.size % 3:
            raise ValueError("index count must be a multiple of 3")
        if self.indices.size and int(self.indices.max()) >= count:
            raise ValueError("index out of range")

    @property
    def vertex_count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def index_count(self) -> int:
        return int(self.indices.size)

    @property
    def triangle_count(self) -> int:
        return self.index_count // 3

    @property
    def is_empty(self) -> bool:
        return self.vertex_count == 0

    @property
    def triangles(self) -> np.ndarray:
        return self.indices.reshape(-1, 3)

    def interleaved(self) -> np.ndarray:
        """``(V, 8)`` float32 rows of position, normal and uv for one vertex buffer."""
        return np.hstack([self.positions, self.normals, self.uvs]).astype(np.float32)

    def bounds(self) -> tuple[np.ndarray, np.ndarray] | None:
        if self.is_empty:
            return None
        return self.positions.min(axis=0), self.positions.max(axis=0)


__all__ = ["Mesh"]
