from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from scipy.spatial.transform import Rotation


@dataclass(frozen=True)
class LatticeTriangle:
    """Three lattice-vertex indices, counterclockwise in the (U, V, W) sense."""

    u: int
    v: int
    w: int

    def vertex_ids(self) -> tuple[int, int, int]:
        return (self.u, self.v, self.w)


@dataclass(frozen=True, eq=False)
class BaseFace:
    """A seed face whose corners are given explicitly."""

    id: int
    corners: np.ndarray  # (3, 3), rows are the U, V, W corners

    def __post_init__(self) -> None:
        corners = np.array(self.corners, dtype=float)
        corners.setflags(write=False)
        object.__setattr__(self, "corners", corners)


@dataclass(frozen=True, eq=False)
class DerivedFace:
    """A seed face obtained by rotating the base face *base_id*."""

    id: int
    base_id: int
    rotation: Rotation


@dataclass(frozen=True)
class PolyhedronFace:
    """One tile of the Goldberg polyhedron.

    *vertex_ids* are packed indices in counterclockwise order seen from
    outside the sphere.
    """

    kind: str
    vertex_ids: tuple[int, ...]

    def vertex_count(self) -> int:
        return len(self.vertex_ids)

    @property
    def is_pentagon(self) -> bool:
        return self.kind == "pent"

    def validate_polygon(self) -> list[str]:
        errors: list[str] = []
        if len(set(self.vertex_ids)) != self.vertex_count():
            errors.append(f"Face {self.vertex_ids} has repeated vertex ids")
        if self.kind == "pent" and self.vertex_count() != 5:
            errors.append(f"Face {self.vertex_ids} is pent but has {self.vertex_count()} vertices")
        if self.kind == "hex" and self.vertex_count() != 6:
            errors.append(f"Face {self.vertex_ids} is hex but has {self.vertex_count()} vertices")
        if self.kind not in ("pent", "hex"):
            errors.append(f"Face {self.vertex_ids} has unknown kind {self.kind!r}")
        return errors


def pentagon(*vertex_ids: int) -> PolyhedronFace:
    return PolyhedronFace("pent", tuple(vertex_ids))


def hexagon(*vertex_ids: int) -> PolyhedronFace:
    return PolyhedronFace("hex", tuple(vertex_ids))
