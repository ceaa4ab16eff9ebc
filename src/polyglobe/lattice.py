"""Integer-barycentric lattice of one triangle subdivided *N* times.

Lattice vertices are integer triples ``(x, y, z)`` with ``x + y + z = N``;
the true barycentric weights are the triple divided by *N*.  Structural
invariants:

    Vertices:            (N+1)(N+2)/2, ordered lexicographically on (x, y)
    Upward triangles:    N(N+1)/2, stored first
    Downward triangles:  N(N-1)/2
    Edges:               3·N(N+1)/2  (one per side of every upward triangle)
    Boundary run:        2N-1 triangles touch each side of the parent

Every query below is computed from closed forms on the storage order; none
of them searches the vertex or triangle lists.
"""

from __future__ import annotations

import numbers
from itertools import zip_longest
from typing import Iterator, List, Sequence, Tuple

import numpy as np

from .errors import InvalidSubdivisionLevel
from .models import LatticeTriangle

LatticeVertex = Tuple[int, int, int]


# ═══════════════════════════════════════════════════════════════════
# Counting helpers
# ═══════════════════════════════════════════════════════════════════

def lattice_vertex_count(n: int) -> int:
    """Number of lattice vertices at subdivision level *n*."""
    return (n + 1) * (n + 2) // 2


def lattice_triangle_count(n: int) -> int:
    """Number of lattice triangles at subdivision level *n*."""
    return n * n


def upward_triangle_count(n: int) -> int:
    return n * (n + 1) // 2


def downward_triangle_count(n: int) -> int:
    return n * (n - 1) // 2


def lattice_edge_count(n: int) -> int:
    """Number of undirected vertex-to-vertex edges at level *n*."""
    return 3 * upward_triangle_count(n)


def check_subdivision_level(n: object) -> int:
    """Return *n* if it is an integer >= 1, else raise."""
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise InvalidSubdivisionLevel(f"subdivision level must be an integer, got {n!r}")
    if n < 1:
        raise InvalidSubdivisionLevel(f"subdivision level must be >= 1, got {n}")
    return int(n)


def _vertex_index(n: int, x: int, y: int) -> int:
    # z is implied by x + y + z = n
    return x * (2 * (n + 1) + 1 - x) // 2 + y


# ═══════════════════════════════════════════════════════════════════
# Lattice
# ═══════════════════════════════════════════════════════════════════

class SubdividedTriangle:
    """One triangle with corners U=(N,0,0), V=(0,N,0), W=(0,0,N) subdivided
    *n* times.

    An upward triangle sits below every vertex with ``x > 0`` and has corners
    ``{v, v+(-1,1,0), v+(-1,0,1)}``; a downward triangle sits above every
    vertex with ``y > 0`` and ``z > 0`` and has corners
    ``{v, v-(-1,1,0), v-(-1,0,1)}``.  Both keep the (U, V, W) winding.
    """

    def __init__(self, n: int) -> None:
        n = check_subdivision_level(n)
        self.n = n

        vertices: List[LatticeVertex] = [
            (x, y, n - x - y)
            for x in range(n + 1)
            for y in range(n + 1 - x)
        ]

        upward = [
            LatticeTriangle(
                _vertex_index(n, x, y),
                _vertex_index(n, x - 1, y + 1),
                _vertex_index(n, x - 1, y),
            )
            for x, y, _ in vertices
            if x > 0
        ]
        downward = [
            LatticeTriangle(
                _vertex_index(n, x, y),
                _vertex_index(n, x + 1, y - 1),
                _vertex_index(n, x + 1, y),
            )
            for x, y, z in vertices
            if y > 0 and z > 0
        ]

        self._vertices: Tuple[LatticeVertex, ...] = tuple(vertices)
        self._triangles: Tuple[LatticeTriangle, ...] = tuple(upward + downward)

    # ── Sizes ───────────────────────────────────────────────────────

    @property
    def vertex_count(self) -> int:
        return lattice_vertex_count(self.n)

    @property
    def triangle_count(self) -> int:
        return lattice_triangle_count(self.n)

    @property
    def upward_count(self) -> int:
        return upward_triangle_count(self.n)

    @property
    def downward_count(self) -> int:
        return downward_triangle_count(self.n)

    @property
    def edge_count(self) -> int:
        return lattice_edge_count(self.n)

    # ── Element access ──────────────────────────────────────────────

    @property
    def vertices(self) -> Tuple[LatticeVertex, ...]:
        return self._vertices

    def vertex(self, i: int) -> LatticeVertex:
        return self._vertices[i]

    def triangle(self, i: int) -> LatticeTriangle:
        return self._triangles[i]

    def triangles(self) -> Tuple[LatticeTriangle, ...]:
        return self._triangles

    def upward_triangles(self) -> Tuple[LatticeTriangle, ...]:
        return self._triangles[: self.upward_count]

    def downward_triangles(self) -> Tuple[LatticeTriangle, ...]:
        return self._triangles[self.upward_count :]

    def triangle_vertices(self, i: int) -> Tuple[LatticeVertex, LatticeVertex, LatticeVertex]:
        t = self._triangles[i]
        return (self._vertices[t.u], self._vertices[t.v], self._vertices[t.w])

    def centroid_weights(self) -> np.ndarray:
        """Barycentric weights of every triangle centroid, shape ``(N², 3)``.

        Row *i* is ``(u + v + w) / 3N`` for the lattice vertices of triangle
        *i*, so each row sums to 1.
        """
        verts = np.asarray(self._vertices, dtype=np.int64)
        tris = np.asarray([t.vertex_ids() for t in self._triangles], dtype=np.int64)
        return verts[tris].sum(axis=1) / (3 * self.n)

    # ── Vertex indexing ─────────────────────────────────────────────

    def vertex_index(self, vertex: Sequence[int]) -> int:
        """Index of lattice vertex ``(x, y, z)`` in storage order."""
        x, y, z = vertex
        if min(x, y, z) < 0 or x + y + z != self.n:
            raise ValueError(f"{tuple(vertex)} is not a lattice vertex at level {self.n}")
        return _vertex_index(self.n, x, y)

    def vertex_index_unchecked(self, vertex: Sequence[int]) -> int:
        return _vertex_index(self.n, vertex[0], vertex[1])

    def interior_index(self, vertex: Sequence[int]) -> int:
        """Index of *vertex* among the vertices with ``x, y, z > 0``.

        The interior of a level-N lattice is itself a level N-3 lattice
        shifted by (1, 1, 1).
        """
        x, y, z = vertex
        if min(x, y, z) <= 0 or x + y + z != self.n:
            raise ValueError(f"{tuple(vertex)} is not an interior lattice vertex at level {self.n}")
        return self.interior_index_unchecked(vertex)

    def interior_index_unchecked(self, vertex: Sequence[int]) -> int:
        return _vertex_index(self.n - 3, vertex[0] - 1, vertex[1] - 1)

    # ── Rows ────────────────────────────────────────────────────────

    def _upward_row(self, i: int) -> range:
        if i >= self.n:
            return range(0)
        k = self.n - i
        start = self.upward_count - k * (k + 1) // 2
        return range(start, start + k)

    def _downward_row(self, i: int) -> range:
        if i >= self.n - 1:
            return range(0)
        k = self.n - 1 - i
        start = self.triangle_count - k * (k + 1) // 2
        return range(start, start + k)

    def row(self, i: int) -> List[int]:
        """Triangles between lattice ``x = i`` and ``x = i + 1``.

        Ordered by ascending centroid ``y``, alternating upward and downward
        triangles and starting and ending with an upward one.
        """
        out: List[int] = []
        for up, down in zip_longest(self._upward_row(i), self._downward_row(i)):
            out.append(up)
            if down is not None:
                out.append(down)
        return out

    # ── Corners and boundary runs ───────────────────────────────────

    def u(self) -> int:
        """Triangle touching corner U = (N, 0, 0)."""
        return self.upward_count - 1

    def v(self) -> int:
        """Triangle touching corner V = (0, N, 0)."""
        return self.n - 1

    def w(self) -> int:
        """Triangle touching corner W = (0, 0, N)."""
        return 0

    def uv(self) -> List[int]:
        """Triangles touching side ``z = 0``, running from U to V."""
        n = self.n
        edge = [0] * (2 * n - 1)
        for i in range(n):
            edge[2 * i] = self.upward_count - i * (i + 1) // 2 - 1
        for i in range(n - 1):
            edge[2 * i + 1] = self.triangle_count - i * (i + 1) // 2 - 1
        return edge

    def vw(self) -> List[int]:
        """Triangles touching side ``x = 0``, running from V to W."""
        n = self.n
        edge = [0] * (2 * n - 1)
        for i in range(n):
            edge[2 * i] = n - 1 - i
        for i in range(n - 1):
            edge[2 * i + 1] = self.upward_count + n - 2 - i
        return edge

    def wu(self) -> List[int]:
        """Triangles touching side ``y = 0``, running from W to U."""
        n = self.n
        edge = [0] * (2 * n - 1)
        for i in range(n):
            k = n - 1 - i
            edge[2 * i] = self.upward_count - (k + 1) * (k + 2) // 2
        for i in range(1, n):
            k = n - 1 - i
            edge[2 * i - 1] = self.triangle_count - (k + 1) * (k + 2) // 2
        return edge

    # ── Adjacency ───────────────────────────────────────────────────

    def vertex_adjacency(self) -> Iterator[Tuple[int, int]]:
        """Undirected lattice edges, each exactly once.

        Walks the vertex groups of equal ``x``: every vertex links to its
        successor in the group and to its two neighbours in the next group.
        """
        total = self.vertex_count
        for x in range(self.n):
            size = self.n + 1 - x
            start = total - size * (size + 1) // 2
            end = start + size
            for a in range(start, end - 1):
                yield (a, a + 1)
            for a in range(start, end - 1):
                yield (a, a + size)
            for a in range(start + 1, end):
                yield (a, a + size - 1)

    def __repr__(self) -> str:
        return f"SubdividedTriangle(n={self.n})"
