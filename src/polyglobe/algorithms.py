from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np


def neighbour_map(
    pairs: Iterable[Tuple[int, int]],
    face_count: Optional[int] = None,
) -> Dict[int, List[int]]:
    """Return tile -> sorted neighbour tiles from an adjacency pair list.

    With *face_count* every tile ``0 .. face_count-1`` gets an entry, even
    one without neighbours.
    """
    neighbours: dict[int, set[int]] = defaultdict(set)
    for face in range(face_count or 0):
        neighbours[face] = set()
    for i, j in pairs:
        if i == j:
            raise ValueError(f"tile {i} cannot neighbour itself")
        neighbours[i].add(j)
        neighbours[j].add(i)
    return {face: sorted(neigh) for face, neigh in sorted(neighbours.items())}


def ring_faces(
    pairs: Iterable[Tuple[int, int]],
    start: int,
    max_depth: int,
    face_count: Optional[int] = None,
) -> List[np.ndarray]:
    """Tiles grouped by hop distance from *start*, nearest ring first.

    *pairs* is an adjacency list as returned by
    :func:`polyglobe.adjacency.adjacency`.  Entry ``d`` of the result holds
    the sorted tile indices exactly ``d`` hops away; the list stops early
    once a ring comes out empty.
    """
    import scipy.sparse as sp
    from scipy.sparse import csgraph

    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    edges = np.asarray(list(pairs), dtype=np.int64).reshape(-1, 2)
    if face_count is None:
        face_count = max(int(edges.max(initial=-1)), start) + 1
    if not 0 <= start < face_count:
        raise ValueError(f"start tile {start} outside [0, {face_count})")

    rows = np.concatenate([edges[:, 0], edges[:, 1]])
    cols = np.concatenate([edges[:, 1], edges[:, 0]])
    graph = sp.csr_matrix(
        (np.ones(len(rows)), (rows, cols)), shape=(face_count, face_count),
    )
    hops = csgraph.shortest_path(graph, directed=False, unweighted=True, indices=start)

    rings: List[np.ndarray] = []
    for depth in range(max_depth + 1):
        ring = np.flatnonzero(hops == depth)
        if ring.size == 0:
            break
        rings.append(ring)
    return rings
