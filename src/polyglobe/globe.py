"""Sphere positions for a :class:`~polyglobe.polyhedron.Polyhedron`.

Only the five base faces are placed numerically: one vectorised spherical
average per face over the centroid weights of every lattice triangle.  The
other fifteen faces reuse those results through their stored rotation, so
a level-N globe costs five averages of N² points instead of twenty.

Functions
---------
- :func:`seed_face_positions`: unit positions as a ``(20, N², 3)`` array
- :func:`resolved_positions`: packed index → point on a sphere of given radius
- :func:`tile_centers`, :func:`tile_normals`, :func:`tile_lat_lon`: per-tile helpers
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import numpy as np

from .packed_index import pack
from .polyhedron import Polyhedron
from .seed import SEED_FACE_COUNT, base_faces, symmetries
from .spherical import PlacementConfig, spherical_average

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════
# Placement
# ═══════════════════════════════════════════════════════════════════

def seed_face_positions(
    polyhedron: Polyhedron,
    config: Optional[PlacementConfig] = None,
) -> np.ndarray:
    """Unit-sphere centroid of every lattice triangle on every seed face.

    Returns an array of shape ``(20, N², 3)``; entry ``[f, t]`` is the
    position addressed by ``pack(f, t)``.
    """
    weights = polyhedron.lattice.centroid_weights()
    out = np.empty((SEED_FACE_COUNT, weights.shape[0], 3))

    for face in base_faces():
        out[face.id] = spherical_average(weights, face.corners, config)
    for derived in symmetries():
        out[derived.id] = derived.rotation.apply(out[derived.base_id])

    logger.debug(
        "placed %d lattice triangles per face for n=%d",
        weights.shape[0], polyhedron.subdivisions,
    )
    return out


def resolved_positions(
    polyhedron: Polyhedron,
    radius: float = 1.0,
    config: Optional[PlacementConfig] = None,
) -> Dict[int, np.ndarray]:
    """Map every packed index of *polyhedron* to its 3-D point.

    Points lie on the sphere of *radius* about the origin.  Computed afresh
    on every call.
    """
    if radius <= 0:
        raise ValueError(f"radius must be > 0, got {radius}")
    positions = seed_face_positions(polyhedron, config) * radius
    return {
        pack(face_id, tri): positions[face_id, tri]
        for face_id in range(SEED_FACE_COUNT)
        for tri in range(positions.shape[1])
    }


# ═══════════════════════════════════════════════════════════════════
# Per-tile helpers
# ═══════════════════════════════════════════════════════════════════

def _tile_corner_means(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    return np.array([
        np.mean([positions[p] for p in face.vertex_ids], axis=0)
        for face in polyhedron.faces
    ])


def tile_centers(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    """Centre of each tile on the sphere, shape ``(F, 3)``, in face order.

    The mean of the tile corners, pushed out to the corners' radius.
    """
    means = _tile_corner_means(polyhedron, positions)
    radius = float(np.linalg.norm(next(iter(positions.values()))))
    return radius * means / np.linalg.norm(means, axis=1, keepdims=True)


def tile_normals(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    """Outward unit normal of each tile, shape ``(F, 3)``."""
    means = _tile_corner_means(polyhedron, positions)
    return means / np.linalg.norm(means, axis=1, keepdims=True)


def tile_lat_lon(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    """``(latitude_deg, longitude_deg)`` of each tile centre, shape ``(F, 2)``.

    Latitude is measured from the xy-plane towards +z, longitude
    counterclockwise from +x about +z.
    """
    normals = tile_normals(polyhedron, positions)
    lat = np.degrees(np.arcsin(np.clip(normals[:, 2], -1.0, 1.0)))
    lon = np.degrees(np.arctan2(normals[:, 1], normals[:, 0]))
    return np.column_stack([lat, lon])
