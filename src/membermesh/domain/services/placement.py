"""Member placement: world transform from two reference points.

Member meshes are built along local z and centered on the origin. The
functions here compute where that local frame goes in the world: center,
length, direction and rotation, after per-endpoint offsets, roll about the
member axis and (for beams) the top-aligned datum have been applied.
"""

from __future__ import annotations

import logging
import math

from ..exceptions import ContractViolation
from ..value_objects import (
    X_AXIS,
    Z_AXIS,
    Basis,
    EndOffsets,
    PlacementMode,
    PlacementResult,
    Point3,
    Quaternion,
    Vector3,
)
from ..vector_math import (
    add,
    cross,
    distance,
    dot,
    midpoint,
    multiply_quaternions,
    normalize,
    quaternion_from_axis_angle,
    quaternion_from_basis,
    quaternion_from_unit_vectors,
    rotate_vector_around_axis,
    scale,
    subtract,
)

logger = logging.getLogger(__name__)

# Adjusted endpoints closer than this (mm) cannot define a member axis.
DEGENERATE_LENGTH_TOLERANCE = 1e-3

# |z . up| above this treats a member as vertical when building its basis.
VERTICAL_DOT_THRESHOLD = 0.99

GLOBAL_UP = Z_AXIS


def _apply_offsets(
    start: Point3, end: Point3, offsets: EndOffsets | None
) -> tuple[Point3, Point3]:
    if offsets is None:
        return start, end
    return add(start, offsets.start), add(end, offsets.end)


def calculate_beam_basis(direction: Vector3) -> Basis:
    """Derive a member frame whose y axis stays as close to global up as possible.

    For near-vertical members the cross product with global up is
    ill-conditioned, so the frame is derived from global X instead.

    Args:
        direction: Member axis (normalized here).

    Returns:
        Orthonormal right-handed basis with ``z_axis`` along ``direction``.
    """
    z_axis = normalize(direction)
    if abs(dot(z_axis, GLOBAL_UP)) > VERTICAL_DOT_THRESHOLD:
        y_axis = normalize(cross(z_axis, X_AXIS))
        x_axis = normalize(cross(y_axis, z_axis))
        return Basis(x_axis, y_axis, z_axis)

    x_axis = normalize(cross(GLOBAL_UP, z_axis))
    y_axis = normalize(cross(z_axis, x_axis))
    return Basis(x_axis, y_axis, z_axis)


def _roll_basis(basis: Basis, roll_angle: float) -> Basis:
    if roll_angle == 0.0:
        return basis
    return Basis(
        normalize(rotate_vector_around_axis(basis.x_axis, basis.z_axis, roll_angle)),
        normalize(rotate_vector_around_axis(basis.y_axis, basis.z_axis, roll_angle)),
        basis.z_axis,
    )


def _degenerate_result(
    start: Point3,
    end: Point3,
    *,
    basis: Basis | None,
    placement_mode: PlacementMode,
    section_height: float,
    roll_angle: float,
) -> PlacementResult:
    logger.debug(
        "Degenerate placement: endpoints %s and %s are closer than %s mm",
        start,
        end,
        DEGENERATE_LENGTH_TOLERANCE,
    )
    return PlacementResult(
        center=midpoint(start, end),
        length=distance(start, end),
        direction=Vector3.zero(),
        rotation=Quaternion.identity(),
        adjusted_start=start,
        adjusted_end=end,
        basis=basis,
        is_degenerate=True,
        placement_mode=placement_mode,
        section_height=section_height,
        roll_angle=roll_angle,
    )


def compute_axial_placement(
    start: Point3,
    end: Point3,
    offsets: EndOffsets | None = None,
    roll_angle: float = 0.0,
    canonical_axis: Vector3 = Z_AXIS,
) -> PlacementResult:
    """Place a column, brace or pile between two reference points.

    The rotation aligns ``canonical_axis`` to the member direction and then
    rolls the section by ``roll_angle`` radians about the member axis.

    Args:
        start: Start reference point.
        end: End reference point.
        offsets: World-space offsets added to each endpoint.
        roll_angle: Roll about the member axis in radians.
        canonical_axis: Local axis the mesh is built along.

    Returns:
        Placement result without a basis. ``is_degenerate`` is set when the
        adjusted endpoints nearly coincide.
    """
    adjusted_start, adjusted_end = _apply_offsets(start, end, offsets)
    length = distance(adjusted_start, adjusted_end)
    if length < DEGENERATE_LENGTH_TOLERANCE:
        return _degenerate_result(
            adjusted_start,
            adjusted_end,
            basis=None,
            placement_mode=PlacementMode.CENTER,
            section_height=0.0,
            roll_angle=roll_angle,
        )

    direction = normalize(subtract(adjusted_end, adjusted_start))
    rotation = quaternion_from_unit_vectors(normalize(canonical_axis), direction)
    if roll_angle != 0.0:
        # Rolling about the local axis before alignment equals rolling about
        # the world direction after it.
        roll = quaternion_from_axis_angle(canonical_axis, roll_angle)
        rotation = multiply_quaternions(rotation, roll)

    return PlacementResult(
        center=midpoint(adjusted_start, adjusted_end),
        length=length,
        direction=direction,
        rotation=rotation,
        adjusted_start=adjusted_start,
        adjusted_end=adjusted_end,
        roll_angle=roll_angle,
    )


def compute_beam_placement(
    start: Point3,
    end: Point3,
    offsets: EndOffsets | None = None,
    roll_angle: float = 0.0,
    placement_mode: PlacementMode = PlacementMode.CENTER,
    section_height: float = 0.0,
) -> PlacementResult:
    """Place a beam between two reference points with an explicit frame.

    With ``PlacementMode.TOP_ALIGNED`` and a positive section height both
    endpoints move down by half the height along the (rolled) section y axis
    before center and length are computed, so the top face of the section
    runs through the reference points.

    Args:
        start: Start reference point.
        end: End reference point.
        offsets: World-space offsets added to each endpoint.
        roll_angle: Roll about the member axis in radians.
        placement_mode: Datum of the reference points.
        section_height: Section depth used by the top-aligned datum.

    Returns:
        Placement result carrying the member basis.
    """
    adjusted_start, adjusted_end = _apply_offsets(start, end, offsets)
    if distance(adjusted_start, adjusted_end) < DEGENERATE_LENGTH_TOLERANCE:
        return _degenerate_result(
            adjusted_start,
            adjusted_end,
            basis=Basis.canonical(),
            placement_mode=placement_mode,
            section_height=section_height,
            roll_angle=roll_angle,
        )

    direction = normalize(subtract(adjusted_end, adjusted_start))
    basis = _roll_basis(calculate_beam_basis(direction), roll_angle)

    if (
        placement_mode == PlacementMode.TOP_ALIGNED
        and math.isfinite(section_height)
        and section_height > 0
    ):
        shift = scale(basis.y_axis, -section_height / 2.0)
        adjusted_start = add(adjusted_start, shift)
        adjusted_end = add(adjusted_end, shift)

    return PlacementResult(
        center=midpoint(adjusted_start, adjusted_end),
        length=distance(adjusted_start, adjusted_end),
        direction=direction,
        rotation=quaternion_from_basis(basis),
        adjusted_start=adjusted_start,
        adjusted_end=adjusted_end,
        basis=basis,
        placement_mode=placement_mode,
        section_height=section_height,
        roll_angle=roll_angle,
    )


def require_valid_placement(placement: PlacementResult) -> PlacementResult:
    """Return ``placement`` unchanged, or raise if it is degenerate.

    Raises:
        ContractViolation: If the adjusted endpoints nearly coincide.
    """
    if placement.is_degenerate:
        raise ContractViolation(
            f"Member endpoints are closer than {DEGENERATE_LENGTH_TOLERANCE} mm "
            f"(length {placement.length:.6f})"
        )
    return placement
