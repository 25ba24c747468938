"""Domain layer - member geometry and mesh generation."""

from .exceptions import ContractViolation
from .segment_resolver import (
    DEFAULT_DROP_EPSILON,
    DEFAULT_HAUNCH_FRACTION,
    resolve_segment_boundaries,
    validate_segment_inputs,
)
from .services import (
    TaperedMeshBuilder,
    build_prismatic_mesh,
    build_profile,
    build_tapered_mesh,
    compute_axial_placement,
    compute_beam_placement,
    triangulate_profile,
)
from .value_objects import (
    CrossSectionProfile,
    EndOffsets,
    HaunchKind,
    HaunchSpec,
    MeshBuffers,
    NamedSection,
    PlacementMode,
    PlacementResult,
    Point2,
    Quaternion,
    SectionPosition,
    SegmentBoundary,
    Vector3,
)

__all__ = [
    "ContractViolation",
    "CrossSectionProfile",
    "DEFAULT_DROP_EPSILON",
    "DEFAULT_HAUNCH_FRACTION",
    "EndOffsets",
    "HaunchKind",
    "HaunchSpec",
    "MeshBuffers",
    "NamedSection",
    "PlacementMode",
    "PlacementResult",
    "Point2",
    "Quaternion",
    "SectionPosition",
    "SegmentBoundary",
    "TaperedMeshBuilder",
    "Vector3",
    "build_prismatic_mesh",
    "build_profile",
    "build_tapered_mesh",
    "compute_axial_placement",
    "compute_beam_placement",
    "resolve_segment_boundaries",
    "triangulate_profile",
    "validate_segment_inputs",
]
