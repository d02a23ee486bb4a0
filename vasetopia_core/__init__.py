"""Sketch-driven lathe meshes: curves, nearest-point projection and the sweep builder."""
from .curve import Curve
from .errors import (
    DegenerateProfileError,
    DegenerateRingError,
    EmptyProfileWarning,
    InvalidAxisError,
    LatheError,
)
from .lathe import ConstantRadius, LatheSettings, RippleRadius, build
from .mesh import Mesh
from .polyline import Projection, project

__all__ = [
    "Curve",
    "Mesh",
    "Projection",
    "project",
    "build",
    "LatheSettings",
    "RippleRadius",
    "ConstantRadius",
    "LatheError",
    "InvalidAxisError",
    "DegenerateRingError",
    "DegenerateProfileError",
    "EmptyProfileWarning",
]
