"""Errors and warnings raised by the lathe pipeline."""
from __future__ import annotations


class LatheError(ValueError):
    """Base class for inputs the lathe builder refuses to sweep."""


class InvalidAxisError(LatheError):
    """The axis curve cannot be projected onto (fewer than two distinct points)."""


class DegenerateRingError(LatheError):
    """The requested ring resolution cannot form a closed ring."""


class DegenerateProfileError(LatheError):
    """The profile has a single point, so no tangent can be estimated."""


class EmptyProfileWarning(UserWarning):
    """The profile is empty; an empty mesh is produced instead of an error."""


__all__ = [
    "LatheError",
    "InvalidAxisError",
    "DegenerateRingError",
    "DegenerateProfileError",
    "EmptyProfileWarning",
]
