"""Value objects for the member geometry domain.

This module provides immutable data types used throughout the mesh
generator. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Vectors, rotations and frames
from ._vectors import (
    X_AXIS,
    Y_AXIS,
    Z_AXIS,
    Basis,
    Point2,
    Point3,
    Quaternion,
    Vector3,
)

# Cross-section profiles
from ._profiles import (
    CrossSectionProfile,
    Loop,
    reverse_loop,
    signed_area,
)

# Shape families
from ._profile_kinds import (
    DEFAULT_CIRCLE_SEGMENTS,
    SHAPE_KINDS,
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
    ProfileKind,
    RectangleShape,
    TShape,
    shape_fields,
)

# Member sections and haunches
from ._sections import (
    HaunchKind,
    HaunchSpec,
    NamedSection,
    SectionPosition,
    SegmentBoundary,
)

# Placement
from ._placement import (
    EndOffsets,
    PlacementMode,
    PlacementResult,
)

# Mesh output
from ._mesh import MeshBuffers

__all__ = [
    # Vectors
    "Basis",
    "Point2",
    "Point3",
    "Quaternion",
    "Vector3",
    "X_AXIS",
    "Y_AXIS",
    "Z_AXIS",
    # Profiles
    "CrossSectionProfile",
    "Loop",
    "reverse_loop",
    "signed_area",
    # Shape families
    "BackToBackAnglesShape",
    "BackToBackChannelsShape",
    "BoxShape",
    "ChannelShape",
    "CircleShape",
    "CrossShape",
    "DEFAULT_CIRCLE_SEGMENTS",
    "FaceToFaceAnglesShape",
    "FaceToFaceChannelsShape",
    "FlatShape",
    "HShape",
    "LShape",
    "PipeShape",
    "ProfileKind",
    "RectangleShape",
    "SHAPE_KINDS",
    "TShape",
    "shape_fields",
    # Sections
    "HaunchKind",
    "HaunchSpec",
    "NamedSection",
    "SectionPosition",
    "SegmentBoundary",
    # Placement
    "EndOffsets",
    "PlacementMode",
    "PlacementResult",
    # Mesh
    "MeshBuffers",
]
