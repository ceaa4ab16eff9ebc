"""Seed icosahedron: fixed topology, base faces and rotational symmetries.

Vertices are the golden-ratio rectangle points ``(±1/2, 0, ±φ/2)`` and
their cyclic permutations, normalised onto the unit sphere.  Vertex 0 is
the north pole and vertex 3 the south pole.  The 20 faces form four bands
of five::

    top           0..5    (N, a[k], a[k+1])
    upper middle  5..10   (b[k], a[k+1], a[k])
    lower middle 10..15   (a[k+1], b[k], b[k+1])
    bottom       15..20   (S, b[k+1], b[k])

with upper ring ``a = (5, 10, 2, 8, 4)`` and lower ring
``b = (11, 7, 6, 9, 1)``.  Seed triangles turn clockwise seen from outside,
which makes every Goldberg tile built on them counterclockwise.

Only the five top faces carry explicit corners.  Every other face is the
image of a top face under a chain of turns by multiples of 72° about
icosahedron vertex axes, so sphere positions need only be computed for a
quarter of the faces.
"""

from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

from .models import BaseFace, DerivedFace

PHI = (1.0 + math.sqrt(5.0)) / 2.0

SEED_VERTEX_COUNT = 12
SEED_EDGE_COUNT = 30
SEED_FACE_COUNT = 20

NORTH_POLE = 0
SOUTH_POLE = 3
UPPER_RING = (5, 10, 2, 8, 4)
LOWER_RING = (11, 7, 6, 9, 1)


def _golden_vertices() -> np.ndarray:
    h = PHI / 2.0
    raw = np.array([
        (0.5, 0.0, h),
        (0.5, 0.0, -h),
        (-0.5, 0.0, h),
        (-0.5, 0.0, -h),
        (h, 0.5, 0.0),
        (h, -0.5, 0.0),
        (-h, 0.5, 0.0),
        (-h, -0.5, 0.0),
        (0.0, h, 0.5),
        (0.0, h, -0.5),
        (0.0, -h, 0.5),
        (0.0, -h, -0.5),
    ])
    unit = raw / np.linalg.norm(raw, axis=1, keepdims=True)
    unit.setflags(write=False)
    return unit


_VERTICES = _golden_vertices()

_FACES: Tuple[Tuple[int, int, int], ...] = (
    # Top
    (0, 5, 10),
    (0, 10, 2),
    (0, 2, 8),
    (0, 8, 4),
    (0, 4, 5),
    # Upper middle
    (11, 10, 5),
    (7, 2, 10),
    (6, 8, 2),
    (9, 4, 8),
    (1, 5, 4),
    # Lower middle
    (10, 11, 7),
    (2, 7, 6),
    (8, 6, 9),
    (4, 9, 1),
    (5, 1, 11),
    # Bottom
    (3, 7, 11),
    (3, 6, 7),
    (3, 9, 6),
    (3, 1, 9),
    (3, 11, 1),
)

BASE_FACE_IDS = (0, 1, 2, 3, 4)

# (face, base face, ((axis vertex, turns of 72°), ...)); turns are applied
# left to right and negative turns run clockwise seen from outside.
_SYMMETRY_TABLE: Tuple[Tuple[int, int, Tuple[Tuple[int, int], ...]], ...] = (
    # Upper middle: one turn about a ring vertex shared with the base face
    (5, 1, ((10, -2),)),
    (6, 2, ((2, -2),)),
    (7, 3, ((8, -2),)),
    (8, 4, ((4, -2),)),
    (9, 0, ((5, -2),)),
    # Lower middle: one turn about the next-but-one upper ring vertex
    (10, 0, ((2, -1),)),
    (11, 1, ((8, -1),)),
    (12, 2, ((4, -1),)),
    (13, 3, ((5, -1),)),
    (14, 4, ((10, -1),)),
    # Bottom: through the lower middle face, then about a lower ring vertex
    (15, 4, ((10, -1), (11, -2))),
    (16, 0, ((2, -1), (7, -2))),
    (17, 1, ((8, -1), (6, -2))),
    (18, 2, ((4, -1), (9, -2))),
    (19, 3, ((5, -1), (1, -2))),
)


# ═══════════════════════════════════════════════════════════════════
# Topology accessors
# ═══════════════════════════════════════════════════════════════════

def seed_vertices() -> np.ndarray:
    """The 12 unit vertices, shape ``(12, 3)``, read-only."""
    return _VERTICES


def seed_faces() -> Tuple[Tuple[int, int, int], ...]:
    """The 20 faces as ``(u, v, w)`` vertex-id triples."""
    return _FACES


def face_corners(face_id: int) -> np.ndarray:
    """Corners of seed face *face_id*, rows U, V, W."""
    return _VERTICES[list(_FACES[face_id])]


def vertex_turn(axis_vertex: int, turns: int) -> Rotation:
    """Rotation by ``turns × 72°`` about the axis through *axis_vertex*."""
    axis = _VERTICES[axis_vertex]
    return Rotation.from_rotvec(axis * (turns * 2.0 * math.pi / 5.0))


def _compose(steps: Sequence[Tuple[int, int]]) -> Rotation:
    rotation = Rotation.identity()
    for axis_vertex, turns in steps:
        rotation = vertex_turn(axis_vertex, turns) * rotation
    return rotation


_BASE_FACES: Tuple[BaseFace, ...] = tuple(
    BaseFace(face_id, face_corners(face_id)) for face_id in BASE_FACE_IDS
)

_SYMMETRIES: Tuple[DerivedFace, ...] = tuple(
    DerivedFace(face_id, base_id, _compose(steps))
    for face_id, base_id, steps in _SYMMETRY_TABLE
)


def base_faces() -> Tuple[BaseFace, ...]:
    """The five faces whose sphere positions are computed directly."""
    return _BASE_FACES


def symmetries() -> Tuple[DerivedFace, ...]:
    """The fifteen faces obtained by rotating a base face."""
    return _SYMMETRIES


def symmetry_steps(face_id: int) -> Tuple[Tuple[int, int], ...]:
    """Declared vertex turns carrying the base face onto *face_id*."""
    for fid, _, steps in _SYMMETRY_TABLE:
        if fid == face_id:
            return steps
    raise ValueError(f"face {face_id} is a base face or out of range")


# ═══════════════════════════════════════════════════════════════════
# Seams and corners
# ═══════════════════════════════════════════════════════════════════

# Icosahedron edges as (face_a, face_b, side of a, side of b).  The order
# fixes the position of every edge hexagon in the face list.
SEAMS: Tuple[Tuple[int, int, str, str], ...] = (
    tuple((f, (f + 1) % 5, "wu", "uv") for f in range(0, 5))
    + tuple((f, f + 5, "vw", "vw") for f in range(0, 5))
    + tuple((f, f + 5, "uv", "uv") for f in range(5, 10))
    + tuple((f, 5 + (f + 1) % 5, "wu", "wu") for f in range(10, 15))
    + tuple((f, f + 5, "vw", "vw") for f in range(10, 15))
    + tuple((f, 15 + (f + 1) % 5, "uv", "wu") for f in range(15, 20))
)


def seed_edge_pairs() -> Tuple[Tuple[int, int, str, str], ...]:
    """The 30 adjacent face pairs with the lattice side each contributes.

    A side name (``"uv"``, ``"vw"`` or ``"wu"``) selects the boundary run
    of :class:`~polyglobe.lattice.SubdividedTriangle` lying on the shared
    icosahedron edge.
    """
    return SEAMS


def vertex_corners() -> Tuple[Tuple[Tuple[int, str], ...], ...]:
    """For each icosahedron vertex, the ``(face, corner)`` pairs meeting there.

    Corners are listed counterclockwise seen from outside.  Order: north
    pole, south pole, the five upper ring vertices, the five lower ring
    vertices.
    """
    poles = (
        tuple((f, "u") for f in (4, 3, 2, 1, 0)),
        tuple((f, "u") for f in (15, 16, 17, 18, 19)),
    )
    upper = tuple(
        (
            (k, "w"),
            ((k + 1) % 5, "v"),
            (5 + (k + 1) % 5, "w"),
            (10 + k, "u"),
            (5 + k, "v"),
        )
        for k in range(5)
    )
    lower = tuple(
        (
            (15 + k, "w"),
            (15 + (k + 4) % 5, "v"),
            (10 + (k + 4) % 5, "w"),
            (5 + k, "u"),
            (10 + k, "v"),
        )
        for k in range(5)
    )
    return poles + upper + lower


def vertex_face_ids() -> Dict[int, Tuple[int, ...]]:
    """Seed vertex id -> ids of the five faces around it."""
    around: Dict[int, list] = {v: [] for v in range(SEED_VERTEX_COUNT)}
    for face_id, face in enumerate(_FACES):
        for v in face:
            around[v].append(face_id)
    return {v: tuple(fids) for v, fids in around.items()}
