from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Set, Tuple

import numpy as np

from .algorithms import neighbour_map
from .mesh import GlobeMesh
from .polyhedron import PENTAGON_COUNT, Polyhedron, face_count

NORMAL_TOLERANCE = 0.01
RADIUS_RTOL = 1e-6


@dataclass(frozen=True)
class MeshStats:
    """Worst-case geometric errors of a placed polyhedron."""

    max_planarity_error: float
    max_normal_error: float
    min_radius: float
    max_radius: float
    misoriented_faces: Tuple[int, ...]


# ═══════════════════════════════════════════════════════════════════
# Topology checks
# ═══════════════════════════════════════════════════════════════════

def polyhedron_errors(polyhedron: Polyhedron) -> List[str]:
    """Structural problems with the tile list; empty when sound.

    Each Goldberg vertex is a lattice-triangle centroid and must be a corner
    of exactly three tiles.
    """
    errors: List[str] = []
    for index, face in enumerate(polyhedron.faces):
        errors.extend(f"tile {index}: {msg}" for msg in face.validate_polygon())

    expected = face_count(polyhedron.subdivisions)
    if polyhedron.face_count != expected:
        errors.append(f"expected {expected} tiles, got {polyhedron.face_count}")

    pents = [i for i, face in enumerate(polyhedron.faces) if face.is_pentagon]
    if pents != list(range(PENTAGON_COUNT)):
        errors.append(f"pentagons must be tiles 0..11, found at {pents}")

    uses = Counter(p for face in polyhedron.faces for p in face.vertex_ids)
    bad = sorted(p for p, count in uses.items() if count != 3)
    if bad:
        errors.append(f"{len(bad)} corner(s) not shared by exactly 3 tiles, e.g. {bad[:5]}")
    return errors


def shared_edge_pairs(polyhedron: Polyhedron) -> Set[Tuple[int, int]]:
    """Tile pairs found by matching corner-to-corner edges."""
    edge_to_faces: dict[Tuple[int, int], list[int]] = defaultdict(list)
    for index, face in enumerate(polyhedron.faces):
        ids = face.vertex_ids
        for a, b in zip(ids, ids[1:] + ids[:1]):
            edge_to_faces[(min(a, b), max(a, b))].append(index)

    pairs: Set[Tuple[int, int]] = set()
    for faces in edge_to_faces.values():
        for i, face in enumerate(faces):
            for other in faces[i + 1 :]:
                pairs.add((min(face, other), max(face, other)))
    return pairs


def adjacency_errors(polyhedron: Polyhedron, pairs: Iterable[Tuple[int, int]]) -> List[str]:
    """Problems with an adjacency list for *polyhedron*; empty when sound."""
    pairs = list(pairs)
    errors: List[str] = []
    count = polyhedron.face_count

    for i, j in pairs:
        if not 0 <= i < j < count:
            errors.append(f"pair ({i}, {j}) is not ordered within [0, {count})")
    if len(set(pairs)) != len(pairs):
        errors.append(f"{len(pairs) - len(set(pairs))} duplicate pair(s)")

    neighbours = neighbour_map(pairs, count)
    for index, face in enumerate(polyhedron.faces):
        degree = len(neighbours.get(index, []))
        if degree != face.vertex_count():
            errors.append(f"tile {index} ({face.kind}) has {degree} neighbours")

    expected = shared_edge_pairs(polyhedron)
    missing = expected - set(pairs)
    extra = set(pairs) - expected
    if missing:
        errors.append(f"{len(missing)} pair(s) missing, e.g. {sorted(missing)[:3]}")
    if extra:
        errors.append(f"{len(extra)} pair(s) share no edge, e.g. {sorted(extra)[:3]}")
    return errors


# ═══════════════════════════════════════════════════════════════════
# Geometry checks
# ═══════════════════════════════════════════════════════════════════

def _corners(face_ids: Iterable[int], positions: Mapping[int, np.ndarray]) -> np.ndarray:
    return np.array([positions[p] for p in face_ids])


def planarity_errors(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> np.ndarray:
    """Per tile, the largest distance of a corner from the plane of the
    first three corners."""
    out = np.empty(polyhedron.face_count)
    for index, face in enumerate(polyhedron.faces):
        pts = _corners(face.vertex_ids, positions)
        normal = np.cross(pts[1] - pts[0], pts[2] - pts[0])
        normal /= np.linalg.norm(normal)
        out[index] = np.max(np.abs((pts - pts[0]) @ normal))
    return out


def normal_errors(mesh: GlobeMesh) -> np.ndarray:
    """Per fan triangle, the largest ``|n · e|`` over its two edges from the
    first corner, with *n* the stored vertex normal."""
    tris = mesh.triangles.reshape(-1, 3).astype(np.int64)
    a, b, c = (mesh.vertices[tris[:, k]] for k in range(3))
    n = mesh.normals[tris[:, 0]]
    return np.maximum(
        np.abs(np.sum(n * (b - a), axis=1)),
        np.abs(np.sum(n * (c - a), axis=1)),
    )


def misoriented_faces(polyhedron: Polyhedron, positions: Mapping[int, np.ndarray]) -> List[int]:
    """Tiles whose corners do not run counterclockwise seen from outside."""
    bad: List[int] = []
    for index, face in enumerate(polyhedron.faces):
        pts = _corners(face.vertex_ids, positions)
        centre = pts.mean(axis=0)
        turn = np.cross(pts[1] - pts[0], pts[2] - pts[0])
        if np.dot(turn, centre) <= 0:
            bad.append(index)
    return bad


def mesh_stats(polyhedron: Polyhedron, mesh: GlobeMesh, positions: Mapping[int, np.ndarray]) -> MeshStats:
    radii = np.linalg.norm(mesh.vertices, axis=1)
    return MeshStats(
        max_planarity_error=float(planarity_errors(polyhedron, positions).max()),
        max_normal_error=float(normal_errors(mesh).max()),
        min_radius=float(radii.min()),
        max_radius=float(radii.max()),
        misoriented_faces=tuple(misoriented_faces(polyhedron, positions)),
    )


def diagnostics_report(
    polyhedron: Polyhedron,
    mesh: GlobeMesh,
    positions: Mapping[int, np.ndarray],
    pairs: Iterable[Tuple[int, int]],
) -> Dict[str, object]:
    """Build a structured diagnostics report.

    Besides the topology checks, ``passed`` requires every normal to sit
    within :data:`NORMAL_TOLERANCE` of its tile plane and every vertex on
    one sphere.
    """
    stats = mesh_stats(polyhedron, mesh, positions)
    topology = polyhedron_errors(polyhedron)
    adjacency = adjacency_errors(polyhedron, pairs)
    return {
        "subdivisions": polyhedron.subdivisions,
        "tiles": polyhedron.face_count,
        "topology_errors": topology,
        "adjacency_errors": adjacency,
        "max_planarity_error": stats.max_planarity_error,
        "max_normal_error": stats.max_normal_error,
        "radius_range": (stats.min_radius, stats.max_radius),
        "misoriented_faces": list(stats.misoriented_faces),
        "passed": bool(
            not topology
            and not adjacency
            and not stats.misoriented_faces
            and stats.max_normal_error <= NORMAL_TOLERANCE
            and np.isclose(stats.min_radius, stats.max_radius, rtol=RADIUS_RTOL, atol=0.0)
        ),
    }
