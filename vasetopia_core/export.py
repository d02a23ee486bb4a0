"""Wavefront OBJ export for lathe meshes."""
from __future__ import annotations

from pathlib import Path
from typing import TextIO

from .mesh import Mesh


def write_obj_stream(handle: TextIO, mesh: Mesh, *, name: str = "lathe") -> None:
    handle.write(f"o {name}\n")
    for vx, vy, vz in mesh.positions:
        handle.write(f"v {vx:.6f} {vy:.6f} {vz:.6f}\n")
    for u, v in mesh.uvs:
        handle.write(f"vt {u:.6f} {v:.6f}\n")
    for nx, ny, nz in mesh.normals:
        handle.write(f"vn {nx:.6f} {ny:.6f} {nz:.6f}\n")
    for tri in mesh.triangles:
        a, b, c = (int(i) + 1 for i in tri)
        handle.write(f"f {a}/{a}/{a} {b}/{b}/{b} {c}/{c}/{c}\n")


def write_obj(path: str | Path, mesh: Mesh, *, name: str = "lathe") -> Path:
    """Write ``mesh`` to ``path``; attribute indices share the vertex index."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as handle:
        write_obj_stream(handle, mesh, name=name)
    return path


__all__ = ["write_obj", "write_obj_stream"]
