"""Build cross-section profiles from shape dimension records."""

from __future__ import annotations

import logging
import math

from ..exceptions import ContractViolation
from ..value_objects import (
    BackToBackAnglesShape,
    BackToBackChannelsShape,
    BoxShape,
    ChannelShape,
    CircleShape,
    CrossSectionProfile,
    CrossShape,
    FaceToFaceAnglesShape,
    FaceToFaceChannelsShape,
    FlatShape,
    HShape,
    LShape,
    PipeShape,
    Point2,
    ProfileKind,
    RectangleShape,
    TShape,
)

logger = logging.getLogger(__name__)


def _rectangle(half_width: float, half_height: float) -> tuple[Point2, ...]:
    return (
        Point2(-half_width, -half_height),
        Point2(half_width, -half_height),
        Point2(half_width, half_height),
        Point2(-half_width, half_height),
    )


def _circle(radius: float, segments: int, clockwise: bool = False) -> tuple[Point2, ...]:
    sign = -1.0 if clockwise else 1.0
    return tuple(
        Point2(
            math.cos(sign * 2.0 * math.pi * i / segments) * radius,
            math.sin(sign * 2.0 * math.pi * i / segments) * radius,
        )
        for i in range(segments)
    )


def _i_outline(
    half_width: float, half_depth: float, half_web: float, flange_thickness: float
) -> tuple[Point2, ...]:
    inner = half_depth - flange_thickness
    return (
        Point2(-half_width, half_depth),
        Point2(half_width, half_depth),
        Point2(half_width, inner),
        Point2(half_web, inner),
        Point2(half_web, -inner),
        Point2(half_width, -inner),
        Point2(half_width, -half_depth),
        Point2(-half_width, -half_depth),
        Point2(-half_width, -inner),
        Point2(-half_web, -inner),
        Point2(-half_web, inner),
        Point2(-half_width, inner),
    )


def _t_outline(
    half_flange: float, half_web: float, flange_thickness: float, depth: float
) -> tuple[Point2, ...]:
    """Tee with its flange on y = 0 and the web rising to ``depth``."""
    t = flange_thickness
    return (
        Point2(-half_flange, 0.0),
        Point2(half_flange, 0.0),
        Point2(half_flange, t),
        Point2(half_web, t),
        Point2(half_web, depth),
        Point2(-half_web, depth),
        Point2(-half_web, t),
        Point2(-half_flange, t),
    )


def _h_shape(kind: HShape) -> CrossSectionProfile:
    return CrossSectionProfile(
        outer=_i_outline(
            kind.width / 2, kind.depth / 2, kind.web_thickness / 2, kind.flange_thickness
        )
    )


def _box(kind: BoxShape) -> CrossSectionProfile:
    half_width = kind.width / 2
    half_height = kind.height / 2
    inner_half_width = half_width - kind.wall_thickness
    inner_half_height = half_height - kind.wall_thickness
    holes: tuple[tuple[Point2, ...], ...] = ()
    if inner_half_width > 0 and inner_half_height > 0:
        holes = (_rectangle(inner_half_width, inner_half_height),)
    else:
        logger.debug("Box wall %s consumes the section; building a solid rectangle", kind)
    return CrossSectionProfile(outer=_rectangle(half_width, half_height), holes=holes)


def _pipe(kind: PipeShape) -> CrossSectionProfile:
    outer_radius = kind.diameter / 2
    inner_radius = outer_radius - kind.wall_thickness
    holes: tuple[tuple[Point2, ...], ...] = ()
    if inner_radius > 0:
        holes = (_circle(inner_radius, kind.segments, clockwise=True),)
    else:
        logger.debug("Pipe wall %s consumes the section; building a solid circle", kind)
    return CrossSectionProfile(outer=_circle(outer_radius, kind.segments), holes=holes)


def _channel(kind: ChannelShape) -> CrossSectionProfile:
    x_left = -kind.flange_width / 2
    x_web = x_left + kind.web_thickness
    x_right = kind.flange_width / 2
    y_bot = -kind.depth / 2
    y_top = kind.depth / 2
    t = kind.flange_thickness
    return CrossSectionProfile(
        outer=(
            Point2(x_left, y_bot),
            Point2(x_right, y_bot),
            Point2(x_right, y_bot + t),
            Point2(x_web, y_bot + t),
            Point2(x_web, y_top - t),
            Point2(x_right, y_top - t),
            Point2(x_right, y_top),
            Point2(x_left, y_top),
        )
    )


def _l_shape(kind: LShape) -> CrossSectionProfile:
    t = kind.thickness
    return CrossSectionProfile(
        outer=(
            Point2(0.0, 0.0),
            Point2(kind.width, 0.0),
            Point2(kind.width, t),
            Point2(t, t),
            Point2(t, kind.depth),
            Point2(0.0, kind.depth),
        )
    )


def _t_shape(kind: TShape) -> CrossSectionProfile:
    return CrossSectionProfile(
        outer=_t_outline(
            kind.flange_width / 2, kind.web_thickness / 2, kind.flange_thickness, kind.depth
        )
    )


def _cross(kind: CrossShape) -> CrossSectionProfile:
    hw = kind.width / 2
    hh = kind.height / 2
    ht = kind.thickness / 2
    return CrossSectionProfile(
        outer=(
            Point2(ht, -hh),
            Point2(ht, -ht),
            Point2(hw, -ht),
            Point2(hw, ht),
            Point2(ht, ht),
            Point2(ht, hh),
            Point2(-ht, hh),
            Point2(-ht, ht),
            Point2(-hw, ht),
            Point2(-hw, -ht),
            Point2(-ht, -ht),
            Point2(-ht, -hh),
        )
    )


def _back_to_back_angles(kind: BackToBackAnglesShape) -> CrossSectionProfile:
    half_gap = kind.gap / 2
    return CrossSectionProfile(
        outer=_t_outline(
            half_gap + kind.width, half_gap + kind.thickness, kind.thickness, kind.depth
        )
    )


def _face_to_face_angles(kind: FaceToFaceAnglesShape) -> CrossSectionProfile:
    # a channel-like outline: vertical legs on x = 0, horizontal legs at the top and bottom
    y_top = kind.gap / 2 + kind.depth
    t = kind.thickness
    return CrossSectionProfile(
        outer=(
            Point2(0.0, -y_top),
            Point2(kind.width, -y_top),
            Point2(kind.width, -y_top + t),
            Point2(t, -y_top + t),
            Point2(t, y_top - t),
            Point2(kind.width, y_top - t),
            Point2(kind.width, y_top),
            Point2(0.0, y_top),
        )
    )


def _back_to_back_channels(kind: BackToBackChannelsShape) -> CrossSectionProfile:
    half_gap = kind.gap / 2
    return CrossSectionProfile(
        outer=_i_outline(
            half_gap + kind.flange_width,
            kind.depth / 2,
            half_gap + kind.web_thickness,
            kind.flange_thickness,
        )
    )


def _face_to_face_channels(kind: FaceToFaceChannelsShape) -> CrossSectionProfile:
    half_width = kind.gap / 2 + kind.flange_width
    half_depth = kind.depth / 2
    cell = _rectangle(half_width - kind.web_thickness, half_depth - kind.flange_thickness)
    return CrossSectionProfile(outer=_rectangle(half_width, half_depth), holes=(cell,))


def build_profile(kind: ProfileKind) -> CrossSectionProfile:
    """Build the section polygon for a shape dimension record.

    Args:
        kind: One of the shape records making up ``ProfileKind``.

    Returns:
        Profile with its outer contour and any holes, in section-local mm.

    Raises:
        ContractViolation: If ``kind`` is not a known shape record.
    """
    match kind:
        case HShape():
            return _h_shape(kind)
        case BoxShape():
            return _box(kind)
        case PipeShape():
            return _pipe(kind)
        case RectangleShape():
            return CrossSectionProfile(outer=_rectangle(kind.width / 2, kind.height / 2))
        case CircleShape():
            return CrossSectionProfile(outer=_circle(kind.diameter / 2, kind.segments))
        case ChannelShape():
            return _channel(kind)
        case LShape():
            return _l_shape(kind)
        case TShape():
            return _t_shape(kind)
        case CrossShape():
            return _cross(kind)
        case FlatShape():
            return CrossSectionProfile(outer=_rectangle(kind.width / 2, kind.thickness / 2))
        case BackToBackAnglesShape():
            return _back_to_back_angles(kind)
        case FaceToFaceAnglesShape():
            return _face_to_face_angles(kind)
        case BackToBackChannelsShape():
            return _back_to_back_channels(kind)
        case FaceToFaceChannelsShape():
            return _face_to_face_channels(kind)
        case _:
            raise ContractViolation(f"Unsupported profile kind: {type(kind).__name__}")


def section_height(kind: ProfileKind) -> float:
    """Return the section depth measured along section y."""
    match kind:
        case HShape() | ChannelShape() | LShape() | TShape():
            return kind.depth
        case BackToBackAnglesShape() | BackToBackChannelsShape() | FaceToFaceChannelsShape():
            return kind.depth
        case FaceToFaceAnglesShape():
            return 2 * kind.depth + kind.gap
        case BoxShape() | RectangleShape() | CrossShape():
            return kind.height
        case FlatShape():
            return kind.thickness
        case PipeShape() | CircleShape():
            return kind.diameter
        case _:
            raise ContractViolation(f"Unsupported profile kind: {type(kind).__name__}")
