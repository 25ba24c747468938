"""Integration tests for end-to-end member generation.

Exercises the full path from shape records through boundary resolution,
meshing and placement:
- Straight, tapered and haunched members of every shape family
- Closed, outward-facing output in world space
- Member independence within a batch and across worker threads
"""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from membermesh.application import ElementType, GenerateMemberCommand, MemberInput
from membermesh.application.config import MeshingConfig
from membermesh.domain import (
    ContractViolation,
    HaunchKind,
    HaunchSpec,
    NamedSection,
    PlacementMode,
    SectionPosition,
    Vector3,
    build_profile,
    resolve_segment_boundaries,
)
from membermesh.domain.services import (
    build_prismatic_mesh,
    compute_beam_placement,
    interpolate_profiles,
)
from membermesh.domain.value_objects import (
    BackToBackAnglesShape,
    BackToBackChannelsShape,
    BoxShape,
    ChannelShape,
    CircleShape,
    CrossShape,
    FaceToFaceAnglesShape,
    FaceToFaceChannelsShape,
    FlatShape,
    HShape,
    LShape,
    PipeShape,
    RectangleShape,
    TShape,
)
from membermesh.domain.vector_math import add, midpoint, scale

ALL_SHAPES = [
    HShape(depth=400.0, width=200.0, web_thickness=9.0, flange_thickness=14.0),
    BoxShape(height=300.0, width=200.0, wall_thickness=12.0),
    PipeShape(diameter=219.0, wall_thickness=8.0, segments=24),
    RectangleShape(height=300.0, width=150.0),
    CircleShape(diameter=600.0, segments=20),
    ChannelShape(depth=200.0, flange_width=75.0, web_thickness=8.0, flange_thickness=12.0),
    LShape(depth=100.0, width=75.0, thickness=8.0),
    TShape(depth=150.0, flange_width=150.0, web_thickness=10.0, flange_thickness=12.0),
    CrossShape(height=250.0, width=250.0, thickness=16.0),
    FlatShape(width=100.0, thickness=12.0),
    BackToBackAnglesShape(depth=75.0, width=75.0, thickness=9.0, gap=10.0),
    FaceToFaceAnglesShape(depth=75.0, width=75.0, thickness=9.0, gap=10.0),
    BackToBackChannelsShape(
        depth=200.0, flange_width=80.0, web_thickness=7.5, flange_thickness=11.0, gap=9.0
    ),
    FaceToFaceChannelsShape(
        depth=200.0, flange_width=80.0, web_thickness=7.5, flange_thickness=11.0, gap=9.0
    ),
]


class TestStraightMembers:
    """Prismatic members of every shape family."""

    @pytest.mark.parametrize("kind", ALL_SHAPES, ids=lambda k: type(k).__name__)
    def test_closed_solid(self, kind) -> None:
        profile = build_profile(kind)
        mesh = build_prismatic_mesh(profile, 3000.0)
        assert mesh.is_watertight()
        assert mesh.volume() == pytest.approx(profile.area * 3000.0, rel=1e-9)

    @pytest.mark.parametrize("t", [0.0, 0.3, 0.5, 1.0])
    def test_identical_profiles_reproduce_input(self, h_profile, t: float) -> None:
        """A straight prism's section at any interpolation parameter is the input profile."""
        assert interpolate_profiles(h_profile, h_profile, t) == h_profile

    def test_box_scenario(self, box_profile) -> None:
        """300x300 box, 20 mm wall, 4000 mm long, any subdivision count."""
        counts = set()
        for subdivisions in (1, 2, 8, 32):
            mesh = build_prismatic_mesh(box_profile, 4000.0, subdivisions)
            assert mesh.is_watertight()
            counts.add(mesh.triangle_count)
        # outer and inner walls: 2 * (4 + 4) triangles; caps: 8 each
        assert counts == {32}


class TestHaunchedMembers:
    """Members with START, CENTER and END sections."""

    def _sections(self):
        end = build_profile(HShape(depth=700.0, width=250.0, web_thickness=12.0, flange_thickness=20.0))
        center = build_profile(HShape(depth=450.0, width=200.0, web_thickness=9.0, flange_thickness=14.0))
        return [
            NamedSection(SectionPosition.START, end),
            NamedSection(SectionPosition.CENTER, center),
            NamedSection(SectionPosition.END, end),
        ]

    @pytest.mark.parametrize(
        "start_kind,end_kind",
        [
            (HaunchKind.SLOPE, HaunchKind.SLOPE),
            (HaunchKind.DROP, HaunchKind.DROP),
            (HaunchKind.SLOPE, HaunchKind.DROP),
        ],
    )
    def test_haunched_beam_is_closed(self, start_kind: HaunchKind, end_kind: HaunchKind) -> None:
        member = MemberInput(
            member_id="HB1",
            element_type=ElementType.BEAM,
            sections=self._sections(),
            start=Vector3(0.0, 0.0, 4000.0),
            end=Vector3(12000.0, 0.0, 4000.0),
            haunch=HaunchSpec(
                start_length=1500.0,
                end_length=1500.0,
                start_kind=start_kind,
                end_kind=end_kind,
            ),
        )
        result = GenerateMemberCommand(MeshingConfig(subdivisions=4)).execute(member)
        world = result.world_mesh()
        assert world.is_watertight()
        assert world.volume() > 0
        assert world.positions[:, 0].min() == pytest.approx(0.0)
        assert world.positions[:, 0].max() == pytest.approx(12000.0)

    def test_double_drop_boundaries(self) -> None:
        epsilon = 0.25
        boundaries = resolve_segment_boundaries(
            self._sections(),
            10000.0,
            HaunchSpec(
                start_length=1000.0,
                end_length=2000.0,
                start_kind=HaunchKind.DROP,
                end_kind=HaunchKind.DROP,
            ),
            drop_epsilon=epsilon,
        )
        positions = [b.position for b in boundaries]
        assert len(boundaries) == 6
        assert all(b > a for a, b in zip(positions, positions[1:]))
        assert positions[2] - positions[1] < 2 * epsilon
        assert positions[4] - positions[3] < 2 * epsilon

    def test_mismatched_profiles_are_rejected(self, h_profile, box_profile) -> None:
        member = MemberInput(
            member_id="X1",
            element_type=ElementType.BEAM,
            sections=[
                NamedSection(SectionPosition.START, h_profile),
                NamedSection(SectionPosition.CENTER, box_profile),
            ],
            start=Vector3.zero(),
            end=Vector3(5000.0, 0.0, 0.0),
        )
        with pytest.raises(ContractViolation, match="Vertex count mismatch"):
            GenerateMemberCommand().execute(member)


class TestPlacementProperties:
    """World placement conventions."""

    def test_top_aligned_center_returns_to_reference_midpoint(self) -> None:
        start = Vector3(1000.0, 2000.0, 3500.0)
        end = Vector3(7000.0, 5000.0, 3900.0)
        height = 500.0
        result = compute_beam_placement(
            start,
            end,
            roll_angle=math.radians(15.0),
            placement_mode=PlacementMode.TOP_ALIGNED,
            section_height=height,
        )
        assert result.basis is not None
        restored = add(result.center, scale(result.basis.y_axis, height / 2.0))
        expected = midpoint(start, end)
        assert restored.as_tuple() == pytest.approx(expected.as_tuple())

    def test_inclined_brace_world_extent(self, pipe_profile) -> None:
        member = MemberInput(
            member_id="BR1",
            element_type=ElementType.BRACE,
            sections=[NamedSection(SectionPosition.START, pipe_profile)],
            start=Vector3(0.0, 0.0, 0.0),
            end=Vector3(3000.0, 0.0, 4000.0),
        )
        result = GenerateMemberCommand().execute(member)
        world = result.world_mesh()
        axis = np.array(result.placement.direction.as_tuple())
        projected = (world.positions - np.array(result.placement.adjusted_start.as_tuple())) @ axis
        assert projected.min() == pytest.approx(0.0, abs=1e-6)
        assert projected.max() == pytest.approx(5000.0)


class TestMemberIndependence:
    """Members share no state and may be generated concurrently."""

    def _members(self) -> list[MemberInput]:
        members = []
        for i, kind in enumerate(ALL_SHAPES):
            members.append(
                MemberInput(
                    member_id=f"M{i}",
                    element_type=ElementType.COLUMN,
                    sections=[NamedSection(SectionPosition.START, build_profile(kind))],
                    start=Vector3(i * 1000.0, 0.0, 0.0),
                    end=Vector3(i * 1000.0, 0.0, 3000.0),
                )
            )
        return members

    def test_threaded_generation_matches_sequential(self) -> None:
        members = self._members()
        command = GenerateMemberCommand()
        sequential = command.execute_batch(members)
        with ThreadPoolExecutor(max_workers=4) as pool:
            threaded = list(pool.map(command.execute, members))

        assert sequential.is_complete
        for a, b in zip(sequential.members, threaded):
            assert a.member_id == b.member_id
            assert np.array_equal(a.mesh.positions, b.mesh.positions)
            assert np.array_equal(a.mesh.indices, b.mesh.indices)

    def test_one_bad_member_does_not_stop_the_batch(self) -> None:
        members = self._members()
        members.insert(
            2,
            MemberInput(
                member_id="ZERO",
                element_type=ElementType.PILE,
                sections=members[0].sections,
                start=Vector3(5.0, 5.0, 5.0),
                end=Vector3(5.0, 5.0, 5.0),
            ),
        )
        result = GenerateMemberCommand().execute_batch(members)
        assert len(result.members) == len(ALL_SHAPES)
        assert [s.member_id for s in result.skipped] == ["ZERO"]
