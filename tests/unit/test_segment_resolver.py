"""Unit tests for segment boundary resolution.

This module tests resolve_segment_boundaries and validate_segment_inputs.
It covers:
- Uniform and linearly tapered members
- Two-section haunched members with and without explicit haunch lengths
- Three-section members with SLOPE and DROP transitions
- Error cases (no sections, duplicates, bad lengths, oversized haunches)
"""

import pytest

from membermesh.domain import (
    ContractViolation,
    CrossSectionProfile,
    HaunchKind,
    HaunchSpec,
    NamedSection,
    SectionPosition,
    resolve_segment_boundaries,
    validate_segment_inputs,
)
from membermesh.domain.services import build_profile
from membermesh.domain.value_objects import RectangleShape

START = build_profile(RectangleShape(height=600.0, width=200.0))
CENTER = build_profile(RectangleShape(height=400.0, width=200.0))
END = build_profile(RectangleShape(height=500.0, width=200.0))


def sections(**profiles: CrossSectionProfile) -> list[NamedSection]:
    return [NamedSection(SectionPosition(name), profile) for name, profile in profiles.items()]


def assert_layout(boundaries, expected: list[tuple[float, CrossSectionProfile]]) -> None:
    assert len(boundaries) == len(expected)
    for boundary, (position, profile) in zip(boundaries, expected):
        assert boundary.position == pytest.approx(position)
        assert boundary.profile == profile


class TestUniformAndLinear:
    """Members without a CENTER section."""

    @pytest.mark.parametrize("position", ["start", "center", "end"])
    def test_single_section_is_uniform(self, position: str) -> None:
        result = resolve_segment_boundaries(sections(**{position: START}), 3000.0)
        assert_layout(result, [(0.0, START), (3000.0, START)])

    def test_start_and_end_taper_linearly(self) -> None:
        result = resolve_segment_boundaries(sections(start=START, end=END), 3000.0)
        assert_layout(result, [(0.0, START), (3000.0, END)])

    def test_haunch_is_ignored_without_center(self) -> None:
        haunch = HaunchSpec(start_length=500.0, start_kind=HaunchKind.DROP)
        result = resolve_segment_boundaries(sections(start=START, end=END), 3000.0, haunch)
        assert len(result) == 2


class TestTwoSectionHaunches:
    """START+CENTER and CENTER+END members."""

    def test_start_center_default_fraction(self) -> None:
        result = resolve_segment_boundaries(sections(start=START, center=CENTER), 1000.0)
        assert_layout(result, [(0.0, START), (200.0, CENTER), (1000.0, CENTER)])

    def test_start_center_custom_fraction(self) -> None:
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER), 1000.0, default_haunch_fraction=0.1
        )
        assert_layout(result, [(0.0, START), (100.0, CENTER), (1000.0, CENTER)])

    def test_start_center_explicit_slope(self) -> None:
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER), 1000.0, HaunchSpec(start_length=300.0)
        )
        assert_layout(result, [(0.0, START), (300.0, CENTER), (1000.0, CENTER)])

    def test_start_center_drop(self) -> None:
        haunch = HaunchSpec(start_length=300.0, start_kind=HaunchKind.DROP)
        result = resolve_segment_boundaries(sections(start=START, center=CENTER), 1000.0, haunch)
        assert_layout(
            result, [(0.0, START), (299.9, START), (300.0, CENTER), (1000.0, CENTER)]
        )

    def test_center_end_default_fraction(self) -> None:
        result = resolve_segment_boundaries(sections(center=CENTER, end=END), 1000.0)
        assert_layout(result, [(0.0, CENTER), (800.0, CENTER), (1000.0, END)])

    def test_center_end_drop(self) -> None:
        haunch = HaunchSpec(end_length=300.0, end_kind=HaunchKind.DROP)
        result = resolve_segment_boundaries(sections(center=CENTER, end=END), 1000.0, haunch)
        assert_layout(result, [(0.0, CENTER), (700.0, CENTER), (700.1, END), (1000.0, END)])

    def test_custom_drop_epsilon(self) -> None:
        haunch = HaunchSpec(start_length=300.0, start_kind=HaunchKind.DROP)
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER), 1000.0, haunch, drop_epsilon=5.0
        )
        assert result[1].position == pytest.approx(295.0)


class TestThreeSections:
    """START+CENTER+END members."""

    def test_both_haunches_slope(self) -> None:
        haunch = HaunchSpec(start_length=200.0, end_length=300.0)
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, haunch
        )
        assert_layout(
            result, [(0.0, START), (200.0, CENTER), (700.0, CENTER), (1000.0, END)]
        )

    def test_both_haunches_drop(self) -> None:
        """Each DROP yields a pair of boundaries closer together than twice epsilon."""
        haunch = HaunchSpec(
            start_length=200.0,
            end_length=300.0,
            start_kind=HaunchKind.DROP,
            end_kind=HaunchKind.DROP,
        )
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, haunch
        )
        assert_layout(
            result,
            [
                (0.0, START),
                (199.9, START),
                (200.0, CENTER),
                (700.0, CENTER),
                (700.1, END),
                (1000.0, END),
            ],
        )
        assert result[2].position - result[1].position < 2 * 0.1
        assert result[4].position - result[3].position < 2 * 0.1

    def test_mixed_slope_and_drop(self) -> None:
        haunch = HaunchSpec(start_length=200.0, end_length=300.0, end_kind=HaunchKind.DROP)
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, haunch
        )
        assert [b.position for b in result] == pytest.approx([0.0, 200.0, 700.0, 700.1, 1000.0])

    def test_only_start_haunch(self) -> None:
        """CENTER tapers straight into END after the start haunch."""
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, HaunchSpec(start_length=200.0)
        )
        assert_layout(result, [(0.0, START), (200.0, CENTER), (1000.0, END)])

    def test_only_start_haunch_drop(self) -> None:
        haunch = HaunchSpec(
            start_length=1000.0, start_kind=HaunchKind.DROP, end_kind=HaunchKind.DROP
        )
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 6000.0, haunch
        )
        assert_layout(
            result, [(0.0, START), (999.9, START), (1000.0, CENTER), (6000.0, END)]
        )

    def test_only_end_haunch(self) -> None:
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, HaunchSpec(end_length=300.0)
        )
        assert_layout(
            result, [(0.0, START), (350.0, CENTER), (700.0, CENTER), (1000.0, END)]
        )

    def test_no_haunches_taper_through_midpoint(self) -> None:
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0
        )
        assert_layout(result, [(0.0, START), (500.0, CENTER), (1000.0, END)])

    def test_haunches_filling_member_merge(self) -> None:
        """Haunches meeting in the middle leave no uniform CENTER region."""
        haunch = HaunchSpec(start_length=400.0, end_length=600.0)
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 1000.0, haunch
        )
        assert_layout(result, [(0.0, START), (400.0, CENTER), (1000.0, END)])

    def test_positions_strictly_ascending(self) -> None:
        haunch = HaunchSpec(
            start_length=10.0,
            end_length=10.0,
            start_kind=HaunchKind.DROP,
            end_kind=HaunchKind.DROP,
        )
        result = resolve_segment_boundaries(
            sections(start=START, center=CENTER, end=END), 100.0, haunch
        )
        positions = [b.position for b in result]
        assert all(b > a for a, b in zip(positions, positions[1:]))
        assert positions[0] == 0.0
        assert positions[-1] == 100.0


class TestResolverErrors:
    """Malformed inputs raise ContractViolation."""

    def test_no_sections(self) -> None:
        with pytest.raises(ContractViolation, match="At least one named section"):
            resolve_segment_boundaries([], 1000.0)

    @pytest.mark.parametrize("length", [0.0, -5.0, float("nan"), float("inf")])
    def test_bad_length(self, length: float) -> None:
        with pytest.raises(ContractViolation, match="length must be positive"):
            resolve_segment_boundaries(sections(start=START), length)

    def test_duplicate_position(self) -> None:
        duplicate = [
            NamedSection(SectionPosition.START, START),
            NamedSection(SectionPosition.START, END),
        ]
        with pytest.raises(ContractViolation, match="Duplicate START"):
            resolve_segment_boundaries(duplicate, 1000.0)

    def test_haunches_longer_than_member(self) -> None:
        haunch = HaunchSpec(start_length=600.0, end_length=600.0)
        with pytest.raises(ContractViolation, match="exceed member length"):
            resolve_segment_boundaries(
                sections(start=START, center=CENTER, end=END), 1000.0, haunch
            )

    def test_drop_shorter_than_epsilon(self) -> None:
        haunch = HaunchSpec(start_length=0.05, start_kind=HaunchKind.DROP)
        with pytest.raises(ContractViolation, match="DROP haunch at the start"):
            resolve_segment_boundaries(sections(start=START, center=CENTER), 1000.0, haunch)

    def test_negative_haunch_length(self) -> None:
        with pytest.raises(ContractViolation, match="non-negative"):
            HaunchSpec(start_length=-1.0)

    def test_bad_fraction(self) -> None:
        with pytest.raises(ContractViolation, match="haunch fraction"):
            resolve_segment_boundaries(
                sections(start=START, center=CENTER), 1000.0, default_haunch_fraction=0.8
            )


class TestValidateSegmentInputs:
    """Tests for the non-throwing validator."""

    def test_valid_inputs(self) -> None:
        assert validate_segment_inputs(sections(start=START, end=END), 1000.0) == []

    def test_collects_multiple_input_errors(self) -> None:
        errors = validate_segment_inputs([], -1.0, drop_epsilon=0.0)
        assert len(errors) == 3

    def test_reports_resolution_errors(self) -> None:
        haunch = HaunchSpec(end_length=0.05, end_kind=HaunchKind.DROP)
        errors = validate_segment_inputs(sections(center=CENTER, end=END), 1000.0, haunch)
        assert len(errors) == 1
        assert "DROP haunch at the end" in errors[0]
