"""Tile adjacency derived from lattice adjacency.

Two tiles touch exactly when their centre lattice vertices are joined by a
lattice edge, so the adjacency of the whole polyhedron is the lattice edge
list replayed on each of the 20 seed faces.  The only work is translating
a (seed face, lattice vertex) pair into a tile index, which depends on
where the vertex sits:

    Corner    one of 12 pentagons, looked up by band and ``face_id % 5``
    Edge      12 + seam ordinal·(N-1) + position along the seam - 1
    Interior  12 + 30·(N-1) + face_id·(N-1)(N-2)/2 + interior index

Lattice vertices on seed edges and corners are reached from several seed
faces; the resulting duplicate pairs are dropped.
"""

from __future__ import annotations

import logging
from typing import List, Sequence, Set, Tuple

from .lattice import SubdividedTriangle
from .polyhedron import PENTAGON_COUNT, Polyhedron
from .seed import SEED_EDGE_COUNT, SEED_FACE_COUNT

logger = logging.getLogger(__name__)


# ── Corner lookups, indexed by band (top, upper, lower, bottom) ─────

def _u_corner(m: int) -> Tuple[int, int, int, int]:
    return (0, 7 + m, 2 + m, 1)


def _v_corner(m: int) -> Tuple[int, int, int, int]:
    return (2 + (m + 4) % 5, 2 + m, 7 + m, 7 + (m + 1) % 5)


def _w_corner(m: int) -> Tuple[int, int, int, int]:
    return (2 + m, 2 + (m + 4) % 5, 7 + (m + 1) % 5, 7 + m)


# ── Seam ordinals, indexed the same way ─────────────────────────────

def _uv_seam(m: int) -> Tuple[int, int, int, int]:
    return ((m + 4) % 5, 10 + m, 10 + m, 25 + m)


def _vw_seam(m: int) -> Tuple[int, int, int, int]:
    return (5 + m, 5 + m, 20 + m, 20 + m)


def _wu_seam(m: int) -> Tuple[int, int, int, int]:
    return (m, 15 + (m + 4) % 5, 15 + m, 25 + (m + 4) % 5)


def _tile_index(lattice: SubdividedTriangle, face_id: int, x: int, y: int, z: int) -> int:
    n = lattice.n
    band, m = divmod(face_id, 5)

    if y == 0 and z == 0:
        return _u_corner(m)[band]
    if x == 0 and z == 0:
        return _v_corner(m)[band]
    if x == 0 and y == 0:
        return _w_corner(m)[band]

    if z == 0:
        ordinal, position = _uv_seam(m)[band], (x, y, x, y)[band]
    elif x == 0:
        ordinal, position = _vw_seam(m)[band], (z, y, z, y)[band]
    elif y == 0:
        ordinal, position = _wu_seam(m)[band], (x, z, x, z)[band]
    else:
        interior_per_face = (n - 1) * (n - 2) // 2
        return (
            PENTAGON_COUNT
            + SEED_EDGE_COUNT * (n - 1)
            + face_id * interior_per_face
            + lattice.interior_index_unchecked((x, y, z))
        )
    return PENTAGON_COUNT + ordinal * (n - 1) + position - 1


def face_index_of(polyhedron: Polyhedron, face_id: int, lattice_vertex: Sequence[int]) -> int:
    """Index into ``polyhedron.faces`` of the tile centred on *lattice_vertex*
    of seed face *face_id*."""
    if not 0 <= face_id < SEED_FACE_COUNT:
        raise ValueError(f"seed face id must be in [0, {SEED_FACE_COUNT}), got {face_id}")
    lattice = polyhedron.lattice
    x, y, z = lattice_vertex
    lattice.vertex_index(lattice_vertex)  # validates
    return _tile_index(lattice, face_id, x, y, z)


def adjacency(polyhedron: Polyhedron) -> List[Tuple[int, int]]:
    """Every pair of tiles sharing an edge, as ``(i, j)`` with ``i < j``.

    Pairs index ``polyhedron.faces``.  The list is sorted, though callers
    should treat it as unordered.  Level *N* gives ``30·N²`` pairs.
    """
    lattice = polyhedron.lattice
    edges = list(lattice.vertex_adjacency())
    vertices = lattice.vertices

    pairs: Set[Tuple[int, int]] = set()
    for face_id in range(SEED_FACE_COUNT):
        tiles = [_tile_index(lattice, face_id, *v) for v in vertices]
        for a, b in edges:
            i, j = tiles[a], tiles[b]
            pairs.add((i, j) if i < j else (j, i))

    logger.debug(
        "adjacency for n=%d: %d lattice edges per face, %d tile pairs",
        lattice.n, len(edges), len(pairs),
    )
    return sorted(pairs)
