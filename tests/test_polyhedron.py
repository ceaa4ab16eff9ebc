"""Tests for Goldberg polyhedron face assembly."""

import pytest

from polyglobe.errors import InvalidSubdivisionLevel
from polyglobe.packed_index import face_of, lattice_of
from polyglobe.polyhedron import Polyhedron, construct, face_count, hexagon_count


class TestFaceCount:
    def test_level_1(self):
        assert face_count(1) == 12
        assert hexagon_count(1) == 0

    def test_level_2(self):
        assert face_count(2) == 42

    def test_level_3(self):
        assert face_count(3) == 92

    @pytest.mark.parametrize("n", range(1, 10))
    def test_closed_form(self, n):
        assert face_count(n) == 10 * n * n + 2
        assert face_count(n) == 12 + 30 * (n - 1) + 20 * (n - 1) * (n - 2) // 2

    @pytest.mark.parametrize("n", [0, -3])
    def test_invalid_raises(self, n):
        with pytest.raises(InvalidSubdivisionLevel):
            face_count(n)


class TestConstruct:
    @pytest.mark.parametrize("n", range(1, 8))
    def test_face_count_matches(self, n):
        poly = construct(n)
        assert poly.face_count == face_count(n)
        assert len(poly.faces) == face_count(n)
        assert poly.subdivisions == n

    @pytest.mark.parametrize("n", range(1, 8))
    def test_twelve_pentagons_first(self, n):
        poly = construct(n)
        assert len(poly.pentagons) == 12
        assert all(f.is_pentagon and f.vertex_count() == 5 for f in poly.pentagons)
        assert all(not f.is_pentagon and f.vertex_count() == 6 for f in poly.hexagons)
        assert len(poly.hexagons) == hexagon_count(n)

    def test_level_1_is_all_pentagons(self):
        poly = construct(1)
        assert poly.face_count == 12
        assert poly.hexagons == ()

    def test_level_2_has_42_faces(self):
        poly = construct(2)
        assert poly.face_count == 42
        assert len(poly.hexagons) == 30

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_level_raises(self, n):
        with pytest.raises(InvalidSubdivisionLevel):
            construct(n)

    def test_idempotent(self):
        assert construct(5).faces == construct(5).faces

    @pytest.mark.parametrize("n", range(1, 7))
    def test_packed_indices_in_range(self, n):
        poly = construct(n)
        for face in poly.faces:
            for p in face.vertex_ids:
                assert 0 <= face_of(p) < 20
                assert 0 <= lattice_of(p) < n * n

    @pytest.mark.parametrize("n", range(1, 7))
    def test_no_repeated_corners(self, n):
        for face in construct(n).faces:
            assert face.validate_polygon() == []

    @pytest.mark.parametrize("n", range(1, 7))
    def test_every_corner_in_three_tiles(self, n):
        counts = {}
        for face in construct(n).faces:
            for p in face.vertex_ids:
                counts[p] = counts.get(p, 0) + 1
        assert len(counts) == 20 * n * n
        assert set(counts.values()) == {3}

    @pytest.mark.parametrize("n", range(1, 7))
    def test_mesh_counts(self, n):
        poly = construct(n)
        h = hexagon_count(n)
        assert poly.mesh_vertex_count == 60 + 6 * h
        assert poly.mesh_triangle_count == 36 + 4 * h
        assert poly.mesh_vertex_count == sum(f.vertex_count() for f in poly.faces)


class TestGenerators:
    @pytest.mark.parametrize("n", range(1, 7))
    def test_generator_sizes(self, n):
        poly = Polyhedron(n)
        assert len(list(poly.vertex_faces())) == 12
        assert len(list(poly.edge_faces())) == 30 * (n - 1)
        assert len(list(poly.face_faces())) == 20 * (n - 1) * (n - 2) // 2

    @pytest.mark.parametrize("n", range(1, 7))
    def test_generator_kinds(self, n):
        poly = Polyhedron(n)
        assert all(f.is_pentagon for f in poly.vertex_faces())
        assert not any(f.is_pentagon for f in poly.edge_faces())
        assert not any(f.is_pentagon for f in poly.face_faces())

    @pytest.mark.parametrize("n", range(1, 7))
    def test_generators_are_exclusive(self, n):
        poly = Polyhedron(n)
        groups = [
            {frozenset(f.vertex_ids) for f in poly.vertex_faces()},
            {frozenset(f.vertex_ids) for f in poly.edge_faces()},
            {frozenset(f.vertex_ids) for f in poly.face_faces()},
        ]
        assert not groups[0] & groups[1]
        assert not groups[0] & groups[2]
        assert not groups[1] & groups[2]
        assert sum(len(g) for g in groups) == poly.face_count

    @pytest.mark.parametrize("n", range(1, 7))
    def test_faces_in_generator_order(self, n):
        poly = Polyhedron(n)
        expected = list(poly.vertex_faces()) + list(poly.edge_faces()) + list(poly.face_faces())
        assert list(poly.faces) == expected

    @pytest.mark.parametrize("n", range(3, 7))
    def test_face_faces_stay_on_one_seed_face(self, n):
        for face in Polyhedron(n).face_faces():
            assert len({face_of(p) for p in face.vertex_ids}) == 1

    @pytest.mark.parametrize("n", range(2, 7))
    def test_edge_faces_span_two_seed_faces(self, n):
        for face in Polyhedron(n).edge_faces():
            assert len({face_of(p) for p in face.vertex_ids}) == 2

    def test_vertex_faces_span_five_seed_faces(self):
        for face in Polyhedron(4).vertex_faces():
            assert len({face_of(p) for p in face.vertex_ids}) == 5

    def test_repr(self):
        assert repr(Polyhedron(2)) == "Polyhedron(n=2, faces=42)"
