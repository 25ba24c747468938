"""Unit tests for end-cap triangulation."""

from unittest.mock import patch

import mapbox_earcut
import numpy as np
import pytest

from membermesh.domain import ContractViolation, CrossSectionProfile
from membermesh.domain.services import build_profile, triangulate_cap, triangulate_profile
from membermesh.domain.value_objects import (
    BackToBackChannelsShape,
    ChannelShape,
    CrossShape,
    FaceToFaceAnglesShape,
    LShape,
    TShape,
)


def _points(profile: CrossSectionProfile) -> list[tuple[float, float]]:
    oriented = profile.oriented()
    return [(p.x, p.y) for loop in oriented.loops() for p in loop]


def _signed_areas(profile: CrossSectionProfile, triangles) -> list[float]:
    pts = _points(profile)
    areas = []
    for a, b, c in triangles:
        (ax, ay), (bx, by), (cx, cy) = pts[a], pts[b], pts[c]
        areas.append(((bx - ax) * (cy - ay) - (by - ay) * (cx - ax)) / 2.0)
    return areas


def assert_valid_triangulation(profile: CrossSectionProfile, triangles) -> None:
    """Triangles are counter-clockwise, cover every vertex and sum to the net area."""
    expected_count = profile.total_vertex_count + 2 * len(profile.holes) - 2
    assert len(triangles) == expected_count
    areas = _signed_areas(profile, triangles)
    assert min(areas) >= -1e-9
    assert sum(areas) == pytest.approx(profile.area, rel=1e-9)
    used = {i for tri in triangles for i in tri}
    assert used == set(range(profile.total_vertex_count))


class TestTriangulateProfile:
    """Tests for triangulate_profile."""

    def test_triangle(self) -> None:
        profile = CrossSectionProfile.from_points([(0.0, 0.0), (1.0, 0.0), (0.0, 1.0)])
        assert triangulate_profile(profile) == [(0, 1, 2)]

    def test_rectangle(self, small_rectangle: CrossSectionProfile) -> None:
        triangles = triangulate_profile(small_rectangle)
        assert_valid_triangulation(small_rectangle, triangles)
        assert len(triangles) == 2

    def test_clockwise_input_is_oriented_first(self) -> None:
        profile = CrossSectionProfile.from_points(
            [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]
        )
        assert_valid_triangulation(profile, triangulate_profile(profile))

    def test_concave_h_section(self, h_profile: CrossSectionProfile) -> None:
        triangles = triangulate_profile(h_profile)
        assert len(triangles) == 10
        assert_valid_triangulation(h_profile, triangles)

    @pytest.mark.parametrize(
        "kind",
        [
            ChannelShape(depth=200.0, flange_width=75.0, web_thickness=8.0, flange_thickness=12.0),
            LShape(depth=100.0, width=80.0, thickness=10.0),
            TShape(depth=150.0, flange_width=120.0, web_thickness=10.0, flange_thickness=15.0),
            CrossShape(height=200.0, width=150.0, thickness=12.0),
            FaceToFaceAnglesShape(depth=75.0, width=65.0, thickness=6.0, gap=10.0),
            BackToBackChannelsShape(
                depth=300.0, flange_width=90.0, web_thickness=9.0, flange_thickness=13.0, gap=10.0
            ),
        ],
    )
    def test_concave_open_sections(self, kind) -> None:
        profile = build_profile(kind)
        assert_valid_triangulation(profile, triangulate_profile(profile))

    def test_box_with_hole(self, box_profile: CrossSectionProfile) -> None:
        """4 outer + 4 hole vertices and one bridge give 8 triangles."""
        triangles = triangulate_profile(box_profile)
        assert len(triangles) == 8
        assert_valid_triangulation(box_profile, triangles)

    def test_pipe_with_hole(self, pipe_profile: CrossSectionProfile) -> None:
        triangles = triangulate_profile(pipe_profile)
        assert len(triangles) == 32
        assert_valid_triangulation(pipe_profile, triangles)

    def test_two_holes(self) -> None:
        profile = CrossSectionProfile.from_points(
            [(0.0, 0.0), (100.0, 0.0), (100.0, 50.0), (0.0, 50.0)],
            holes=[
                [(10.0, 15.0), (10.0, 35.0), (30.0, 35.0), (30.0, 15.0)],
                [(60.0, 10.0), (60.0, 40.0), (90.0, 40.0), (90.0, 10.0)],
            ],
        )
        triangles = triangulate_profile(profile)
        assert len(triangles) == 14
        assert_valid_triangulation(profile, triangles)

    def test_reverse_flips_winding(self, box_profile: CrossSectionProfile) -> None:
        forward = triangulate_profile(box_profile)
        backward = triangulate_profile(box_profile, reverse=True)
        assert backward == [(a, c, b) for a, b, c in forward]
        assert max(_signed_areas(box_profile, backward)) <= 1e-9


class TestTriangulateCap:
    """Tests for triangulate_cap."""

    def test_cap_vertices_lie_on_plane(self, box_profile: CrossSectionProfile) -> None:
        vertices, indices = triangulate_cap(box_profile, depth=-2000.0)
        assert vertices.shape == (8, 3)
        assert (vertices[:, 2] == -2000.0).all()
        assert indices.shape == (8, 3)

    def test_base_index_offsets_triangles(self, box_profile: CrossSectionProfile) -> None:
        _, plain = triangulate_cap(box_profile, depth=0.0)
        _, shifted = triangulate_cap(box_profile, depth=0.0, base_index=100)
        assert (shifted == plain + 100).all()
        assert shifted.min() == 100

    def test_cap_normals_follow_reverse_flag(self, small_rectangle: CrossSectionProfile) -> None:
        vertices, up = triangulate_cap(small_rectangle, depth=5.0)
        _, down = triangulate_cap(small_rectangle, depth=5.0, reverse=True)
        for indices, sign in ((up, 1.0), (down, -1.0)):
            tri = vertices[indices]
            normals = np.cross(tri[:, 1] - tri[:, 0], tri[:, 2] - tri[:, 0])
            assert (np.sign(normals[:, 2]) == sign).all()


class TestSkippedVertices:
    """Vertices earcut leaves out are split back into the cap."""

    EDGE_MIDPOINT = CrossSectionProfile.from_points(
        [(0.0, 0.0), (5.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0)]
    )

    def test_collinear_vertex_is_kept(self) -> None:
        triangles = triangulate_profile(self.EDGE_MIDPOINT)
        assert len(triangles) == 3
        assert_valid_triangulation(self.EDGE_MIDPOINT, triangles)

    def test_skipped_vertex_splits_spanning_triangle(self) -> None:
        """Vertex 1 left out by earcut is restored with n + 2h - 2 triangles."""
        skipped = np.array([0, 2, 3, 0, 3, 4], dtype=np.uint32)
        with patch.object(mapbox_earcut, "triangulate_float64", return_value=skipped):
            triangles = triangulate_profile(self.EDGE_MIDPOINT)
        assert sorted(triangles) == [(0, 1, 3), (0, 3, 4), (1, 2, 3)]
        assert_valid_triangulation(self.EDGE_MIDPOINT, triangles)

    def test_zero_area_profile_rejected(self) -> None:
        flat = CrossSectionProfile.from_points([(0.0, 0.0), (5.0, 0.0), (10.0, 0.0)])
        with pytest.raises(ContractViolation, match="no area"):
            triangulate_profile(flat)
