"""Application commands (use cases) for member mesh generation."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from membermesh.domain import (
    ContractViolation,
    TaperedMeshBuilder,
    compute_axial_placement,
    compute_beam_placement,
    resolve_segment_boundaries,
)
from membermesh.domain.services import require_valid_placement
from membermesh.domain.value_objects import PlacementMode, PlacementResult

from .config import MeshingConfig
from .dtos import BatchOutput, ElementType, MemberInput, MemberMeshOutput, SkippedMember

logger = logging.getLogger(__name__)


class GenerateMemberCommand:
    """Command to generate the mesh and placement of structural members.

    Each member is resolved into segment boundaries, meshed along local z and
    placed between its reference points. Members are independent; a member
    with malformed input never affects the others in a batch.
    """

    def __init__(
        self,
        settings: MeshingConfig | None = None,
        mesh_builder: TaperedMeshBuilder | None = None,
    ) -> None:
        self.settings = settings or MeshingConfig()
        self.mesh_builder = mesh_builder or TaperedMeshBuilder(self.settings.subdivisions)

    def _place(self, member: MemberInput) -> PlacementResult:
        if member.element_type == ElementType.BEAM:
            placement = compute_beam_placement(
                member.start,
                member.end,
                member.offsets,
                member.roll_angle,
                member.placement_mode,
                member.resolved_section_height(),
            )
        else:
            if member.placement_mode != PlacementMode.CENTER:
                logger.debug(
                    "Member %s: placement mode %s applies to beams only",
                    member.member_id,
                    member.placement_mode.value,
                )
            placement = compute_axial_placement(
                member.start,
                member.end,
                member.offsets,
                member.roll_angle,
            )
        return require_valid_placement(placement)

    def execute(self, member: MemberInput) -> MemberMeshOutput:
        """Generate one member.

        Args:
            member: Member description.

        Returns:
            Local mesh, placement and boundaries of the member.

        Raises:
            ContractViolation: If the member input is malformed. No partial
                output is produced.
        """
        errors = member.validate()
        if errors:
            raise ContractViolation(f"Member {member.member_id}: " + "; ".join(errors))

        placement = self._place(member)
        boundaries = resolve_segment_boundaries(
            member.sections,
            placement.length,
            member.haunch,
            drop_epsilon=self.settings.drop_epsilon,
            default_haunch_fraction=self.settings.default_haunch_fraction,
        )
        mesh = self.mesh_builder.build(boundaries, placement.length)
        logger.debug(
            "Member %s: %d boundaries, %d triangles, length %.3f",
            member.member_id,
            len(boundaries),
            mesh.triangle_count,
            placement.length,
        )
        return MemberMeshOutput(
            member_id=member.member_id,
            mesh=mesh,
            placement=placement,
            boundaries=boundaries,
        )

    def execute_batch(self, members: Iterable[MemberInput]) -> BatchOutput:
        """Generate many members, skipping the ones with malformed input.

        Skipped members are logged as warnings and reported in the output.
        """
        output = BatchOutput()
        for member in members:
            try:
                output.members.append(self.execute(member))
            except ContractViolation as e:
                logger.warning("Skipping member %s: %s", member.member_id, e)
                output.skipped.append(SkippedMember(member.member_id, str(e)))
        return output
