"""Segment boundary resolution for haunched and tapered members.

A member references one to three named sections (START, CENTER, END) and an
optional haunch specification. This module turns them into the ordered list
of (position, profile) boundaries the mesh builder consumes.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence

from .exceptions import ContractViolation
from .value_objects import (
    CrossSectionProfile,
    HaunchKind,
    HaunchSpec,
    NamedSection,
    SectionPosition,
    SegmentBoundary,
)

logger = logging.getLogger(__name__)

# Offset (mm) between the two boundaries of an abrupt DROP transition.
DEFAULT_DROP_EPSILON = 0.1

# Haunch length, as a fraction of member length, when none is given for a
# two-section START+CENTER or CENTER+END member.
DEFAULT_HAUNCH_FRACTION = 0.2


def _section_map(
    sections: Sequence[NamedSection],
) -> dict[SectionPosition, CrossSectionProfile]:
    profiles: dict[SectionPosition, CrossSectionProfile] = {}
    for section in sections:
        if section.position in profiles:
            raise ContractViolation(f"Duplicate {section.position.name} section")
        profiles[section.position] = section.profile
    return profiles


def _start_transition(
    start: CrossSectionProfile,
    center: CrossSectionProfile,
    at: float,
    kind: HaunchKind,
    epsilon: float,
) -> list[SegmentBoundary]:
    """Boundaries from position 0 up to the CENTER profile at ``at``."""
    if kind == HaunchKind.DROP:
        if at <= epsilon:
            raise ContractViolation(
                f"DROP haunch at the start must be longer than {epsilon} mm (got {at})"
            )
        return [
            SegmentBoundary(0.0, start),
            SegmentBoundary(at - epsilon, start),
            SegmentBoundary(at, center),
        ]
    return [SegmentBoundary(0.0, start), SegmentBoundary(at, center)]


def _end_transition(
    center: CrossSectionProfile,
    end: CrossSectionProfile,
    at: float,
    length: float,
    kind: HaunchKind,
    epsilon: float,
) -> list[SegmentBoundary]:
    """Boundaries from the CENTER profile at ``at`` to the member end."""
    if kind == HaunchKind.DROP:
        if length - at <= epsilon:
            raise ContractViolation(
                f"DROP haunch at the end must be longer than {epsilon} mm (got {length - at})"
            )
        return [
            SegmentBoundary(at, center),
            SegmentBoundary(at + epsilon, end),
            SegmentBoundary(length, end),
        ]
    return [SegmentBoundary(at, center), SegmentBoundary(length, end)]


def _three_section_boundaries(
    start: CrossSectionProfile,
    center: CrossSectionProfile,
    end: CrossSectionProfile,
    length: float,
    haunch: HaunchSpec,
    epsilon: float,
) -> list[SegmentBoundary]:
    hs = haunch.start_length
    he = haunch.end_length
    if hs > 0 and he > 0:
        boundaries = _start_transition(start, center, hs, haunch.start_kind, epsilon)
        return boundaries + _end_transition(
            center, end, length - he, length, haunch.end_kind, epsilon
        )
    if hs > 0:
        # CENTER tapers straight into END over the rest of the member
        boundaries = _start_transition(start, center, hs, haunch.start_kind, epsilon)
        return boundaries + [SegmentBoundary(length, end)]
    if he > 0:
        middle = (length - he) / 2.0
        boundaries = [SegmentBoundary(0.0, start), SegmentBoundary(middle, center)]
        return boundaries + _end_transition(
            center, end, length - he, length, haunch.end_kind, epsilon
        )
    return [
        SegmentBoundary(0.0, start),
        SegmentBoundary(length / 2.0, center),
        SegmentBoundary(length, end),
    ]


def _merge_coincident(boundaries: list[SegmentBoundary]) -> list[SegmentBoundary]:
    merged: list[SegmentBoundary] = []
    for boundary in boundaries:
        if (
            merged
            and merged[-1].position == boundary.position
            and merged[-1].profile == boundary.profile
        ):
            continue
        merged.append(boundary)
    return merged


def _input_errors(
    sections: Sequence[NamedSection],
    length: float,
    haunch: HaunchSpec,
    drop_epsilon: float,
    default_haunch_fraction: float,
) -> list[str]:
    errors: list[str] = []
    if not sections:
        errors.append("At least one named section is required")
    if not math.isfinite(length) or length <= 0:
        errors.append(f"Member length must be positive (got {length})")
    if drop_epsilon <= 0:
        errors.append(f"DROP epsilon must be positive (got {drop_epsilon})")
    if not 0 < default_haunch_fraction <= 0.5:
        errors.append(
            f"Default haunch fraction must be in (0, 0.5] (got {default_haunch_fraction})"
        )
    if errors:
        return errors
    if haunch.start_length + haunch.end_length > length:
        errors.append(
            f"Haunch lengths ({haunch.start_length} + {haunch.end_length}) "
            f"exceed member length {length}"
        )
    return errors


def resolve_segment_boundaries(
    sections: Sequence[NamedSection],
    length: float,
    haunch: HaunchSpec | None = None,
    *,
    drop_epsilon: float = DEFAULT_DROP_EPSILON,
    default_haunch_fraction: float = DEFAULT_HAUNCH_FRACTION,
) -> list[SegmentBoundary]:
    """Resolve named sections into ordered segment boundaries.

    The case depends on which positions are present:

    - One section: a uniform member, the same profile at 0 and ``length``.
    - START and END: one linear taper over the whole member.
    - START and CENTER: one transition near the start, at the start haunch
      length or ``default_haunch_fraction`` of the length; uniform CENTER
      after it.
    - CENTER and END: the mirror image near the end.
    - START, CENTER and END: a transition at each haunch and a uniform CENTER
      region between them. With only a start haunch, CENTER tapers straight
      into END over the rest of the member. With only an end haunch, START
      tapers to CENTER at the middle of the region before the haunch. With
      no haunch lengths the member tapers START to CENTER at mid-length and
      on to END.

    A SLOPE transition tapers across the haunch region. A DROP transition
    keeps the outer profile up to the haunch and switches to the next
    profile within ``drop_epsilon`` mm.

    Args:
        sections: One to three sections with distinct positions.
        length: Member length in mm.
        haunch: Haunch lengths and transition kinds. Defaults to no haunches
            with SLOPE transitions.
        drop_epsilon: Gap between the two boundaries of a DROP transition.
        default_haunch_fraction: Haunch length as a fraction of ``length``
            for two-section members without an explicit haunch length.

    Returns:
        Boundaries in strictly ascending position order, spanning 0 to
        ``length``.

    Raises:
        ContractViolation: If the inputs cannot describe a member, for
            example no sections, duplicate positions, non-positive length,
            haunches longer than the member, or a DROP haunch not longer than
            ``drop_epsilon``.
    """
    haunch = haunch or HaunchSpec()
    errors = _input_errors(sections, length, haunch, drop_epsilon, default_haunch_fraction)
    if errors:
        raise ContractViolation(errors[0])

    profiles = _section_map(sections)
    start = profiles.get(SectionPosition.START)
    center = profiles.get(SectionPosition.CENTER)
    end = profiles.get(SectionPosition.END)
    hs = haunch.start_length
    he = haunch.end_length
    eps = drop_epsilon

    boundaries: list[SegmentBoundary]
    if len(profiles) == 1:
        (profile,) = profiles.values()
        boundaries = [SegmentBoundary(0.0, profile), SegmentBoundary(length, profile)]
    elif center is None and start is not None and end is not None:
        boundaries = [SegmentBoundary(0.0, start), SegmentBoundary(length, end)]
    elif center is not None and start is not None and end is None:
        at = hs if hs > 0 else default_haunch_fraction * length
        boundaries = _start_transition(start, center, at, haunch.start_kind, eps)
        boundaries.append(SegmentBoundary(length, center))
    elif center is not None and start is None and end is not None:
        at = length - he if he > 0 else (1.0 - default_haunch_fraction) * length
        boundaries = [SegmentBoundary(0.0, center)]
        boundaries += _end_transition(center, end, at, length, haunch.end_kind, eps)
    elif center is not None and start is not None and end is not None:
        boundaries = _three_section_boundaries(start, center, end, length, haunch, eps)
    else:
        positions = sorted(p.value for p in profiles)
        raise ContractViolation(f"Unsupported section positions: {positions}")

    boundaries = _merge_coincident(boundaries)
    for a, b in zip(boundaries, boundaries[1:]):
        if not b.position > a.position:
            raise ContractViolation(
                f"Segment boundaries are not strictly ascending ({a.position} then {b.position})"
            )

    logger.debug(
        "Resolved %d segment boundaries at %s",
        len(boundaries),
        [round(b.position, 6) for b in boundaries],
    )
    return boundaries


def validate_segment_inputs(
    sections: Sequence[NamedSection],
    length: float,
    haunch: HaunchSpec | None = None,
    *,
    drop_epsilon: float = DEFAULT_DROP_EPSILON,
    default_haunch_fraction: float = DEFAULT_HAUNCH_FRACTION,
) -> list[str]:
    """Validate member section inputs and return a list of errors.

    This is a non-throwing version of :func:`resolve_segment_boundaries`
    for collecting problems before reporting them.

    Returns:
        List of error messages. Empty list if valid.
    """
    haunch = haunch or HaunchSpec()
    errors = _input_errors(sections, length, haunch, drop_epsilon, default_haunch_fraction)
    if errors:
        return errors

    try:
        resolve_segment_boundaries(
            sections,
            length,
            haunch,
            drop_epsilon=drop_epsilon,
            default_haunch_fraction=default_haunch_fraction,
        )
    except ContractViolation as e:
        errors.append(str(e))

    return errors
