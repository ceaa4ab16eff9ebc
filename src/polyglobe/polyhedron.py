"""Face assembly of a Goldberg polyhedron from 20 subdivided seed faces.

Every tile of the polyhedron surrounds one lattice vertex; its corners are
the centroids of the lattice triangles meeting at that vertex.  Tiles fall
into three groups, emitted in this order:

    Vertex faces:  12 pentagons, one per icosahedron vertex
    Edge faces:    30·(N-1) hexagons straddling an icosahedron edge
    Face faces:    20·(N-1)(N-2)/2 hexagons inside one seed face

    Total faces:   10·N² + 2

Tile corners are packed indices ``(triangle index, seed face)`` and run
counterclockwise seen from outside the sphere.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Sequence, Tuple

from .lattice import SubdividedTriangle, check_subdivision_level
from .models import PolyhedronFace, hexagon, pentagon
from .packed_index import pack
from .seed import seed_edge_pairs, vertex_corners

logger = logging.getLogger(__name__)

PENTAGON_COUNT = 12


# ═══════════════════════════════════════════════════════════════════
# Counting helpers
# ═══════════════════════════════════════════════════════════════════

def face_count(n: int) -> int:
    """Total number of tiles at subdivision level *n*."""
    n = check_subdivision_level(n)
    return PENTAGON_COUNT + 30 * (n - 1) + 10 * (n - 1) * (n - 2)


def hexagon_count(n: int) -> int:
    return face_count(n) - PENTAGON_COUNT


def _windows(pairs: Sequence[Tuple[int, int]]) -> Iterator[Tuple[Tuple[int, int], ...]]:
    """Overlapping triples of *pairs* starting at every even position."""
    for start in range(0, len(pairs) - 2, 2):
        yield tuple(pairs[start : start + 3])


# ═══════════════════════════════════════════════════════════════════
# Polyhedron
# ═══════════════════════════════════════════════════════════════════

class Polyhedron:
    """The tiles of a Goldberg polyhedron at subdivision level *n*.

    Built once, then read-only.  Sphere positions are not stored; see
    :func:`polyglobe.globe.resolved_positions`.
    """

    def __init__(self, n: int) -> None:
        self._lattice = SubdividedTriangle(n)
        faces: List[PolyhedronFace] = []
        faces.extend(self.vertex_faces())
        faces.extend(self.edge_faces())
        faces.extend(self.face_faces())
        self._faces: Tuple[PolyhedronFace, ...] = tuple(faces)

    # ── Properties ──────────────────────────────────────────────────

    @property
    def subdivisions(self) -> int:
        return self._lattice.n

    @property
    def lattice(self) -> SubdividedTriangle:
        return self._lattice

    @property
    def faces(self) -> Tuple[PolyhedronFace, ...]:
        return self._faces

    @property
    def face_count(self) -> int:
        return len(self._faces)

    @property
    def pentagons(self) -> Tuple[PolyhedronFace, ...]:
        return self._faces[:PENTAGON_COUNT]

    @property
    def hexagons(self) -> Tuple[PolyhedronFace, ...]:
        return self._faces[PENTAGON_COUNT:]

    @property
    def mesh_vertex_count(self) -> int:
        """Entries in the flat vertex buffer: 5 per pentagon, 6 per hexagon."""
        return 5 * PENTAGON_COUNT + 6 * len(self.hexagons)

    @property
    def mesh_triangle_count(self) -> int:
        """Fan triangles: 3 per pentagon, 4 per hexagon."""
        return 3 * PENTAGON_COUNT + 4 * len(self.hexagons)

    # ── Face generators ─────────────────────────────────────────────

    def _corner_triangle(self, corner: str) -> int:
        return getattr(self._lattice, corner)()

    def vertex_faces(self) -> Iterator[PolyhedronFace]:
        """The 12 pentagons around the icosahedron vertices."""
        for corners in vertex_corners():
            yield pentagon(*(
                pack(face_id, self._corner_triangle(corner))
                for face_id, corner in corners
            ))

    def edge_faces(self) -> Iterator[PolyhedronFace]:
        """Hexagons centred on the lattice vertices inside each seed edge.

        Along an edge the run of face A pairs with the reversed run of face
        B; every window of three pairs is one tile, walked forward on A and
        back on B.
        """
        lattice = self._lattice
        for face_a, face_b, side_a, side_b in seed_edge_pairs():
            run_a = getattr(lattice, side_a)()
            run_b = getattr(lattice, side_b)()[::-1]
            for (a0, b0), (a1, b1), (a2, b2) in _windows(list(zip(run_a, run_b))):
                yield hexagon(
                    pack(face_a, a0),
                    pack(face_a, a1),
                    pack(face_a, a2),
                    pack(face_b, b2),
                    pack(face_b, b1),
                    pack(face_b, b0),
                )

    def face_faces(self) -> Iterator[PolyhedronFace]:
        """Hexagons centred on interior lattice vertices, seed face by face."""
        lattice = self._lattice
        rows = [lattice.row(i) for i in range(lattice.n)]
        for face_id in range(20):
            for lower, upper in zip(rows, rows[1:]):
                pairs = list(zip(lower[1:-1], upper))
                for (a0, b0), (a1, b1), (a2, b2) in _windows(pairs):
                    yield hexagon(
                        pack(face_id, a0),
                        pack(face_id, a1),
                        pack(face_id, a2),
                        pack(face_id, b2),
                        pack(face_id, b1),
                        pack(face_id, b0),
                    )

    def __repr__(self) -> str:
        return f"Polyhedron(n={self.subdivisions}, faces={self.face_count})"


def construct(n: int) -> Polyhedron:
    """Build the Goldberg polyhedron at subdivision level *n* (>= 1)."""
    polyhedron = Polyhedron(n)
    logger.debug(
        "constructed polyhedron n=%d: %d pentagons, %d hexagons",
        polyhedron.subdivisions, len(polyhedron.pentagons), len(polyhedron.hexagons),
    )
    return polyhedron
