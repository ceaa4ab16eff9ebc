"""Tests for flat mesh export."""

import numpy as np
import pytest

from polyglobe.diagnostics import normal_errors, planarity_errors
from polyglobe.globe import resolved_positions
from polyglobe.mesh import (
    GlobeMesh,
    build_mesh,
    mesh_faces,
    mesh_normals,
    mesh_triangles,
    mesh_vertices,
)
from polyglobe.polyhedron import construct


class TestBuffers:
    @pytest.mark.parametrize("n", range(1, 6))
    def test_vertex_buffer(self, n):
        poly = construct(n)
        vertices = mesh_vertices(poly, resolved_positions(poly))
        assert vertices.shape == (poly.mesh_vertex_count, 3)

    def test_level_1_counts(self):
        mesh = build_mesh(construct(1))
        assert mesh.vertex_count == 60
        assert mesh.triangle_count == 36

    @pytest.mark.parametrize("n", range(1, 6))
    def test_triangle_buffer(self, n):
        poly = construct(n)
        tris = mesh_triangles(poly)
        assert tris.dtype == np.uint32
        assert tris.shape == (3 * poly.mesh_triangle_count,)
        assert tris.max() < poly.mesh_vertex_count

    @pytest.mark.parametrize("n", range(1, 5))
    def test_faces_tile_the_buffer(self, n):
        poly = construct(n)
        cycles = mesh_faces(poly)
        assert len(cycles) == poly.face_count
        flat = [i for cycle in cycles for i in cycle]
        assert flat == list(range(poly.mesh_vertex_count))
        assert all(len(c) == 5 for c in cycles[:12])
        assert all(len(c) == 6 for c in cycles[12:])

    def test_fans_start_at_first_corner(self):
        poly = construct(2)
        tris = mesh_triangles(poly).reshape(-1, 3)
        np.testing.assert_array_equal(tris[:3], [[0, 1, 2], [0, 2, 3], [0, 3, 4]])
        np.testing.assert_array_equal(tris[36:40], [[60, 61, 62], [60, 62, 63], [60, 63, 64], [60, 64, 65]])

    def test_vertex_buffer_follows_faces(self):
        poly = construct(3)
        positions = resolved_positions(poly)
        vertices = mesh_vertices(poly, positions)
        for cycle, face in zip(mesh_faces(poly), poly.faces):
            for index, p in zip(cycle, face.vertex_ids):
                np.testing.assert_array_equal(vertices[index], positions[p])


class TestNormals:
    @pytest.mark.parametrize("n", range(1, 6))
    def test_normals_orthogonal_to_face_edges(self, n):
        mesh = build_mesh(construct(n))
        assert normal_errors(mesh).max() <= 0.01

    @pytest.mark.parametrize("n", range(1, 6))
    def test_normals_unit_and_outward(self, n):
        mesh = build_mesh(construct(n))
        np.testing.assert_allclose(np.linalg.norm(mesh.normals, axis=1), 1.0)
        assert (np.sum(mesh.normals * mesh.vertices, axis=1) > 0).all()

    @pytest.mark.parametrize("n", range(1, 6))
    def test_triangles_wind_outward(self, n):
        mesh = build_mesh(construct(n))
        tris = mesh.triangles.reshape(-1, 3).astype(np.int64)
        a, b, c = (mesh.vertices[tris[:, k]] for k in range(3))
        facing = np.sum(np.cross(b - a, c - a) * mesh.normals[tris[:, 0]], axis=1)
        assert (facing > 0).all()

    def test_normals_constant_per_face(self):
        mesh = build_mesh(construct(3))
        for cycle in mesh.faces:
            np.testing.assert_array_equal(
                mesh.normals[list(cycle)],
                np.repeat(mesh.normals[cycle[0]][None, :], len(cycle), axis=0),
            )

    @pytest.mark.parametrize("count", [0, 59, 61, 63, 65])
    def test_bad_vertex_count(self, count):
        with pytest.raises(ValueError):
            mesh_normals(np.ones((count, 3)))

    def test_bad_vertex_shape(self):
        with pytest.raises(ValueError):
            mesh_normals(np.ones((60, 2)))


class TestPlanarity:
    @pytest.mark.parametrize("n", range(1, 8))
    def test_normals_lie_in_tile_plane(self, n):
        mesh = build_mesh(construct(n))
        assert normal_errors(mesh).max() <= 0.01

    @pytest.mark.parametrize("n", range(1, 6))
    def test_corner_offsets_bounded(self, n):
        # Corners are spherical centroids, so hexagons bow slightly off the
        # plane of their first three corners; the offset shrinks as n grows.
        poly = construct(n)
        assert planarity_errors(poly, resolved_positions(poly)).max() < 0.03

    def test_level_1_pentagons_planar(self):
        poly = construct(1)
        assert planarity_errors(poly, resolved_positions(poly)).max() < 1e-9


class TestBuildMesh:
    def test_bundle(self):
        poly = construct(3)
        mesh = build_mesh(poly, radius=2.0)
        assert isinstance(mesh, GlobeMesh)
        assert mesh.vertex_count == poly.mesh_vertex_count
        assert mesh.triangle_count == poly.mesh_triangle_count
        assert mesh.normals.shape == mesh.vertices.shape
        np.testing.assert_allclose(np.linalg.norm(mesh.vertices, axis=1), 2.0)
