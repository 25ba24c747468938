"""Named sections, haunch specifications and segment boundaries."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..exceptions import ContractViolation
from ._profiles import CrossSectionProfile


class SectionPosition(str, Enum):
    """Where along a member a named section applies."""

    START = "start"
    CENTER = "center"
    END = "end"


class HaunchKind(str, Enum):
    """How a haunch region transitions between profiles.

    SLOPE tapers linearly across the haunch length. DROP changes the profile
    abruptly at a single position.
    """

    SLOPE = "slope"
    DROP = "drop"


@dataclass(frozen=True)
class NamedSection:
    """A profile tagged with the member position it applies to."""

    position: SectionPosition
    profile: CrossSectionProfile


@dataclass(frozen=True)
class HaunchSpec:
    """Haunch (joint region) lengths and transition kinds at both member ends.

    Attributes:
        start_length: Length of the start haunch region in mm.
        end_length: Length of the end haunch region in mm.
        start_kind: Transition kind at the start haunch.
        end_kind: Transition kind at the end haunch.
    """

    start_length: float = 0.0
    end_length: float = 0.0
    start_kind: HaunchKind = HaunchKind.SLOPE
    end_kind: HaunchKind = HaunchKind.SLOPE

    def __post_init__(self) -> None:
        if self.start_length < 0:
            raise ContractViolation(
                f"Haunch start_length must be non-negative (got {self.start_length})"
            )
        if self.end_length < 0:
            raise ContractViolation(
                f"Haunch end_length must be non-negative (got {self.end_length})"
            )


@dataclass(frozen=True)
class SegmentBoundary:
    """A profile pinned at a distance along the member axis.

    Two boundaries at nearly the same position with different profiles encode
    an abrupt (DROP) change of section.
    """

    position: float
    profile: CrossSectionProfile
