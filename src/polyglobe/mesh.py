"""Flat render buffers for a Goldberg polyhedron.

Every tile contributes its own copy of its corners, so each vertex carries
the flat normal of exactly one tile.  Layout of the vertex buffer:

    Pentagons:  12 × 5 vertices, first
    Hexagons:   H × 6 vertices

Triangles fan out from the first corner of each tile: 3 per pentagon, 4 per
hexagon, all counterclockwise seen from outside.

Functions
---------
- :func:`mesh_vertices`: ``(M, 3)`` positions in tile order
- :func:`mesh_faces`: per-tile index cycles into the vertex buffer
- :func:`mesh_triangles`: flat triangle index buffer
- :func:`mesh_normals`: one flat normal per tile, repeated per vertex
- :func:`build_mesh`: all of the above in one :class:`GlobeMesh`
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

import numpy as np

from .globe import resolved_positions
from .polyhedron import PENTAGON_COUNT, Polyhedron
from .spherical import PlacementConfig

PENTAGON_VERTICES = PENTAGON_COUNT * 5


@dataclass(frozen=True, eq=False)
class GlobeMesh:
    """Render-ready buffers of one polyhedron."""

    vertices: np.ndarray   # (M, 3) float
    triangles: np.ndarray  # (3T,) uint32
    normals: np.ndarray    # (M, 3) float
    faces: Tuple[Tuple[int, ...], ...]

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.triangles) // 3


def mesh_vertices(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    """Corner positions of every tile in face order, shape ``(M, 3)``."""
    return np.array([
        positions[p]
        for face in polyhedron.faces
        for p in face.vertex_ids
    ], dtype=float)


def mesh_faces(polyhedron: Polyhedron) -> List[Tuple[int, ...]]:
    """Index cycle of each tile into the :func:`mesh_vertices` buffer."""
    cycles: List[Tuple[int, ...]] = []
    offset = 0
    for face in polyhedron.faces:
        k = face.vertex_count()
        cycles.append(tuple(range(offset, offset + k)))
        offset += k
    return cycles


def mesh_triangles(polyhedron: Polyhedron) -> np.ndarray:
    """Fan triangulation as a flat ``uint32`` index buffer."""
    indices: List[int] = []
    for cycle in mesh_faces(polyhedron):
        first = cycle[0]
        for a, b in zip(cycle[1:-1], cycle[2:]):
            indices.extend((first, a, b))
    return np.asarray(indices, dtype=np.uint32)


def _unit(v: np.ndarray) -> np.ndarray:
    return v / np.linalg.norm(v, axis=-1, keepdims=True)


def mesh_normals(vertices) -> np.ndarray:
    """Flat outward normal of each tile, repeated for each of its vertices.

    *vertices* must follow the :func:`mesh_vertices` layout.  A pentagon's
    normal is the cross product of two of its diagonals; a hexagon's is the
    direction of the sum of alternate corners.
    """
    vertices = np.asarray(vertices, dtype=float)
    count = len(vertices)
    if vertices.ndim != 2 or vertices.shape[1] != 3:
        raise ValueError(f"vertices must have shape (M, 3), got {vertices.shape}")
    if count < PENTAGON_VERTICES or (count - PENTAGON_VERTICES) % 6:
        raise ValueError(
            f"{count} vertices do not form 12 pentagons followed by hexagons"
        )

    pents = vertices[:PENTAGON_VERTICES].reshape(PENTAGON_COUNT, 5, 3)
    pent_normals = _unit(np.cross(
        pents[:, 2] - pents[:, 0],
        pents[:, 3] - pents[:, 0],
    ))

    hexes = vertices[PENTAGON_VERTICES:].reshape(-1, 6, 3)
    hex_normals = _unit(hexes[:, 0] + hexes[:, 2] + hexes[:, 4])

    return np.concatenate([
        np.repeat(pent_normals, 5, axis=0),
        np.repeat(hex_normals, 6, axis=0),
    ])


def build_mesh(
    polyhedron: Polyhedron,
    radius: float = 1.0,
    config: Optional[PlacementConfig] = None,
) -> GlobeMesh:
    """Place *polyhedron* on a sphere of *radius* and export its buffers."""
    positions = resolved_positions(polyhedron, radius, config)
    vertices = mesh_vertices(polyhedron, positions)
    return GlobeMesh(
        vertices=vertices,
        triangles=mesh_triangles(polyhedron),
        normals=mesh_normals(vertices),
        faces=tuple(mesh_faces(polyhedron)),
    )
