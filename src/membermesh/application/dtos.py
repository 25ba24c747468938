"""Data Transfer Objects for the application layer."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from membermesh.domain import (
    EndOffsets,
    HaunchSpec,
    MeshBuffers,
    NamedSection,
    PlacementMode,
    PlacementResult,
    SegmentBoundary,
    Vector3,
)


class ElementType(str, Enum):
    """Kind of structural member; beams get an explicit section frame."""

    COLUMN = "column"
    BEAM = "beam"
    BRACE = "brace"
    PILE = "pile"


@dataclass
class MemberInput:
    """Input DTO describing one member as supplied by a model loader.

    Attributes:
        member_id: Identifier used in logs, skip reports and export names.
        element_type: Member kind; selects beam or axial placement.
        sections: One to three named sections.
        start: Start reference point (mm).
        end: End reference point (mm).
        haunch: Optional haunch lengths and transition kinds.
        offsets: World-space offsets of the two endpoints.
        roll_angle: Roll about the member axis in radians.
        placement_mode: Datum of the reference points (beams only).
        section_height: Depth used by the top-aligned datum. Defaults to the
            tallest section profile.
    """

    member_id: str
    element_type: ElementType
    sections: list[NamedSection]
    start: Vector3
    end: Vector3
    haunch: HaunchSpec | None = None
    offsets: EndOffsets = field(default_factory=EndOffsets)
    roll_angle: float = 0.0
    placement_mode: PlacementMode = PlacementMode.CENTER
    section_height: float | None = None

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if not self.member_id:
            errors.append("Member id is required")
        if not self.sections:
            errors.append("At least one section is required")
        if len(self.sections) > 3:
            errors.append("At most 3 sections (START, CENTER, END) are supported")
        positions = [s.position for s in self.sections]
        if len(set(positions)) != len(positions):
            errors.append("Section positions must be distinct")
        if not math.isfinite(self.roll_angle):
            errors.append("Roll angle must be finite")
        if self.section_height is not None and self.section_height < 0:
            errors.append("Section height cannot be negative")
        return errors

    def resolved_section_height(self) -> float:
        """Section height for the top-aligned datum."""
        if self.section_height is not None:
            return self.section_height
        return max((s.profile.height for s in self.sections), default=0.0)


@dataclass
class MemberMeshOutput:
    """Output DTO for one generated member.

    Attributes:
        member_id: Identifier of the source member.
        mesh: Mesh in member-local coordinates (axis along z, centered).
        placement: World transform of the mesh.
        boundaries: Segment boundaries the mesh was built from.
    """

    member_id: str
    mesh: MeshBuffers
    placement: PlacementResult
    boundaries: list[SegmentBoundary] = field(default_factory=list)

    def world_mesh(self) -> MeshBuffers:
        """Return the mesh moved into world coordinates."""
        return self.mesh.transformed(self.placement.center, self.placement.rotation)


@dataclass
class SkippedMember:
    """A member that could not be generated."""

    member_id: str
    reason: str


@dataclass
class BatchOutput:
    """Output DTO of a batch run.

    Attributes:
        members: Successfully generated members, in input order.
        skipped: Members rejected with the reason they were skipped.
    """

    members: list[MemberMeshOutput] = field(default_factory=list)
    skipped: list[SkippedMember] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        """Check if every member was generated."""
        return len(self.skipped) == 0
