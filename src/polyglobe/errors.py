"""Exceptions raised by polyglobe.

Every error is a :class:`ValueError` so callers that only guard against bad
arguments keep working.
"""

from __future__ import annotations


class PolyglobeError(ValueError):
    """Base class for all polyglobe errors."""


class InvalidSubdivisionLevel(PolyglobeError):
    """Subdivision level is not an integer >= 1."""


class MalformedWeights(PolyglobeError):
    """Barycentric weights are negative, mis-shaped, or do not sum to 1.

    Only checked while ``__debug__`` is true; under ``python -O`` the check
    is skipped and malformed weights give undefined results.
    """


class InvalidPackedIndex(PolyglobeError):
    """A packed index decodes to a seed-face id outside ``[0, 32)``."""


class PlacementDidNotConverge(PolyglobeError):
    """Spherical averaging exceeded its iteration budget."""
