"""polyglobe: Goldberg polyhedra from a subdivided icosahedron.

Public API is organised into layers:

- **Core**: models, errors, lattice, packed indices, seed icosahedron
- **Building**: face assembly and adjacency
- **Placement**: spherical averaging and sphere positions
- **Mesh**: flat render buffers
- **Algorithms**: neighbour maps and tile rings
- **Diagnostics**: quality checks and reports
"""

# ── Core ────────────────────────────────────────────────────────────
from .errors import (
    PolyglobeError,
    InvalidSubdivisionLevel,
    MalformedWeights,
    InvalidPackedIndex,
    PlacementDidNotConverge,
)
from .models import LatticeTriangle, BaseFace, DerivedFace, PolyhedronFace
from .lattice import SubdividedTriangle
from .packed_index import pack, unpack, face_of, lattice_of
from .seed import (
    seed_vertices,
    seed_faces,
    face_corners,
    seed_edge_pairs,
    base_faces,
    symmetries,
)

# ── Building ────────────────────────────────────────────────────────
from .polyhedron import Polyhedron, construct, face_count, hexagon_count
from .adjacency import adjacency, face_index_of

# ── Placement ───────────────────────────────────────────────────────
from .spherical import PlacementConfig, spherical_average, slerp_3
from .globe import (
    resolved_positions,
    seed_face_positions,
    tile_centers,
    tile_normals,
    tile_lat_lon,
)

# ── Mesh ────────────────────────────────────────────────────────────
from .mesh import (
    GlobeMesh,
    build_mesh,
    mesh_vertices,
    mesh_faces,
    mesh_triangles,
    mesh_normals,
)

# ── Algorithms ──────────────────────────────────────────────────────
from .algorithms import neighbour_map, ring_faces

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    MeshStats,
    polyhedron_errors,
    adjacency_errors,
    planarity_errors,
    normal_errors,
    mesh_stats,
    diagnostics_report,
)

__all__ = [
    # Errors
    "PolyglobeError",
    "InvalidSubdivisionLevel",
    "MalformedWeights",
    "InvalidPackedIndex",
    "PlacementDidNotConverge",
    # Core
    "LatticeTriangle",
    "BaseFace",
    "DerivedFace",
    "PolyhedronFace",
    "SubdividedTriangle",
    "pack",
    "unpack",
    "face_of",
    "lattice_of",
    "seed_vertices",
    "seed_faces",
    "face_corners",
    "seed_edge_pairs",
    "base_faces",
    "symmetries",
    # Building
    "Polyhedron",
    "construct",
    "face_count",
    "hexagon_count",
    "adjacency",
    "face_index_of",
    # Placement
    "PlacementConfig",
    "spherical_average",
    "slerp_3",
    "resolved_positions",
    "seed_face_positions",
    "tile_centers",
    "tile_normals",
    "tile_lat_lon",
    # Mesh
    "GlobeMesh",
    "build_mesh",
    "mesh_vertices",
    "mesh_faces",
    "mesh_triangles",
    "mesh_normals",
    # Algorithms
    "neighbour_map",
    "ring_faces",
    # Diagnostics
    "MeshStats",
    "polyhedron_errors",
    "adjacency_errors",
    "planarity_errors",
    "normal_errors",
    "mesh_stats",
    "diagnostics_report",
]
