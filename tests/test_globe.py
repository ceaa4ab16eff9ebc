"""Tests for sphere placement of the polyhedron."""

from __future__ import annotations

import math

import numpy as np
import pytest

from polyglobe.globe import (
    resolved_positions,
    seed_face_positions,
    tile_centers,
    tile_lat_lon,
    tile_normals,
)
from polyglobe.packed_index import pack
from polyglobe.polyhedron import construct
from polyglobe.seed import NORTH_POLE, SOUTH_POLE, face_corners, seed_vertices
from polyglobe.spherical import PlacementConfig, spherical_average


# ═══════════════════════════════════════════════════════════════════
# Resolved positions
# ═══════════════════════════════════════════════════════════════════

class TestResolvedPositions:
    @pytest.mark.parametrize("n", range(1, 6))
    def test_keys_cover_every_packed_index(self, n):
        positions = resolved_positions(construct(n))
        expected = {pack(f, t) for f in range(20) for t in range(n * n)}
        assert set(positions) == expected

    @pytest.mark.parametrize("n", range(1, 6))
    def test_every_corner_resolves(self, n):
        poly = construct(n)
        positions = resolved_positions(poly)
        for face in poly.faces:
            for p in face.vertex_ids:
                assert p in positions

    @pytest.mark.parametrize("radius", [0.5, 1.0, 6371.0])
    def test_points_on_sphere(self, radius):
        positions = resolved_positions(construct(4), radius=radius)
        radii = np.linalg.norm(np.array(list(positions.values())), axis=1)
        np.testing.assert_allclose(radii, radius, rtol=1e-9)

    @pytest.mark.parametrize("radius", [0.0, -1.0])
    def test_bad_radius(self, radius):
        with pytest.raises(ValueError):
            resolved_positions(construct(1), radius=radius)

    def test_level_1_is_dodecahedron(self):
        positions = resolved_positions(construct(1))
        points = np.array([positions[pack(f, 0)] for f in range(20)])
        assert len({tuple(np.round(p, 9)) for p in points}) == 20
        for f, point in enumerate(points):
            centroid = face_corners(f).sum(axis=0)
            np.testing.assert_allclose(point, centroid / np.linalg.norm(centroid), atol=1e-9)

        dist = np.linalg.norm(points[:, None, :] - points[None, :, :], axis=2)
        nearest = np.sort(dist, axis=1)[:, 1:4]
        np.testing.assert_allclose(nearest, nearest[0, 0], rtol=1e-6)

    def test_distinct_points(self):
        positions = resolved_positions(construct(5))
        points = np.round(np.array(list(positions.values())), 9)
        assert len({tuple(p) for p in points}) == len(points)


class TestSymmetricPlacement:
    @pytest.mark.parametrize("n", [1, 2, 5])
    def test_rotated_faces_equal_direct_placement(self, n):
        poly = construct(n)
        config = PlacementConfig(tolerance=1e-12)
        placed = seed_face_positions(poly, config)
        weights = poly.lattice.centroid_weights()
        for face_id in range(20):
            direct = spherical_average(weights, face_corners(face_id), config)
            np.testing.assert_allclose(placed[face_id], direct, atol=1e-9)

    def test_shape(self):
        assert seed_face_positions(construct(3)).shape == (20, 9, 3)

    def test_shared_corners_agree_across_faces(self):
        # a corner placed on the wrong seed face would stretch some tile edge
        poly = construct(6)
        positions = resolved_positions(poly)
        longest = max(
            np.linalg.norm(positions[a] - positions[b])
            for face in poly.faces
            for a, b in zip(face.vertex_ids, face.vertex_ids[1:] + face.vertex_ids[:1])
        )
        assert longest < 2.5 / 6


# ═══════════════════════════════════════════════════════════════════
# Per-tile helpers
# ═══════════════════════════════════════════════════════════════════

class TestTileHelpers:
    def test_centres_on_sphere(self):
        poly = construct(3)
        positions = resolved_positions(poly, radius=2.0)
        centres = tile_centers(poly, positions)
        assert centres.shape == (poly.face_count, 3)
        np.testing.assert_allclose(np.linalg.norm(centres, axis=1), 2.0)

    def test_normals_unit_and_outward(self):
        poly = construct(3)
        positions = resolved_positions(poly, radius=3.0)
        normals = tile_normals(poly, positions)
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)
        centres = tile_centers(poly, positions)
        assert (np.sum(normals * centres, axis=1) > 0).all()

    def test_pole_pentagons_sit_on_poles(self):
        poly = construct(4)
        normals = tile_normals(poly, resolved_positions(poly))
        verts = seed_vertices()
        np.testing.assert_allclose(normals[0], verts[NORTH_POLE], atol=1e-6)
        np.testing.assert_allclose(normals[1], verts[SOUTH_POLE], atol=1e-6)

    def test_lat_lon(self):
        poly = construct(4)
        lat_lon = tile_lat_lon(poly, resolved_positions(poly))
        assert lat_lon.shape == (poly.face_count, 2)
        assert (np.abs(lat_lon[:, 0]) <= 90.0).all()
        assert (np.abs(lat_lon[:, 1]) <= 180.0).all()
        north = seed_vertices()[NORTH_POLE]
        assert lat_lon[0, 0] == pytest.approx(math.degrees(math.asin(north[2])), abs=1e-4)
        assert lat_lon[0, 1] == pytest.approx(math.degrees(math.atan2(north[1], north[0])), abs=1e-4)
        assert lat_lon[1, 0] == pytest.approx(-lat_lon[0, 0], abs=1e-4)
