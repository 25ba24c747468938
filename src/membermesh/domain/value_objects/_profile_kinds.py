"""Dimension records for the supported cross-section shape families.

Each shape family has its own frozen record. ``ProfileKind`` is the closed
union of those records; ``membermesh.domain.services.profile_factory`` turns
any of them into a ``CrossSectionProfile``.
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields

from ..exceptions import ContractViolation

DEFAULT_CIRCLE_SEGMENTS = 32


def _require_positive(record: object, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if value <= 0:
            raise ContractViolation(
                f"{type(record).__name__}.{name} must be positive (got {value})"
            )


def _require_non_negative(record: object, *names: str) -> None:
    for name in names:
        value = getattr(record, name)
        if value < 0:
            raise ContractViolation(
                f"{type(record).__name__}.{name} must be non-negative (got {value})"
            )


@dataclass(frozen=True)
class HShape:
    """Wide-flange (I/H) section.

    Attributes:
        depth: Overall depth, flange outside to flange outside.
        width: Flange width.
        web_thickness: Web thickness.
        flange_thickness: Thickness of each flange.
    """

    depth: float
    width: float
    web_thickness: float
    flange_thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "width", "web_thickness", "flange_thickness")
        if self.web_thickness >= self.width:
            raise ContractViolation("HShape web_thickness must be less than width")
        if 2 * self.flange_thickness >= self.depth:
            raise ContractViolation("HShape flanges must be thinner than half the depth")


@dataclass(frozen=True)
class BoxShape:
    """Rectangular hollow section.

    A wall thickness that consumes the section produces a solid rectangle.
    """

    height: float
    width: float
    wall_thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "height", "width", "wall_thickness")


@dataclass(frozen=True)
class PipeShape:
    """Circular hollow section approximated by ``segments`` straight edges."""

    diameter: float
    wall_thickness: float
    segments: int = DEFAULT_CIRCLE_SEGMENTS

    def __post_init__(self) -> None:
        _require_positive(self, "diameter", "wall_thickness")
        if self.segments < 3:
            raise ContractViolation(f"PipeShape needs at least 3 segments (got {self.segments})")


@dataclass(frozen=True)
class RectangleShape:
    """Solid rectangular section."""

    height: float
    width: float

    def __post_init__(self) -> None:
        _require_positive(self, "height", "width")


@dataclass(frozen=True)
class CircleShape:
    """Solid circular section approximated by ``segments`` straight edges."""

    diameter: float
    segments: int = DEFAULT_CIRCLE_SEGMENTS

    def __post_init__(self) -> None:
        _require_positive(self, "diameter")
        if self.segments < 3:
            raise ContractViolation(f"CircleShape needs at least 3 segments (got {self.segments})")


@dataclass(frozen=True)
class ChannelShape:
    """Channel (C) section with the web on the negative-x side."""

    depth: float
    flange_width: float
    web_thickness: float
    flange_thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "flange_width", "web_thickness", "flange_thickness")
        if self.web_thickness >= self.flange_width:
            raise ContractViolation("ChannelShape web_thickness must be less than flange_width")
        if 2 * self.flange_thickness >= self.depth:
            raise ContractViolation("ChannelShape flanges must be thinner than half the depth")


@dataclass(frozen=True)
class LShape:
    """Equal or unequal angle with its heel at the section origin."""

    depth: float
    width: float
    thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "width", "thickness")
        if self.thickness >= min(self.depth, self.width):
            raise ContractViolation("LShape thickness must be less than both legs")


@dataclass(frozen=True)
class TShape:
    """Tee section with the flange on the section origin line."""

    depth: float
    flange_width: float
    web_thickness: float
    flange_thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "flange_width", "web_thickness", "flange_thickness")
        if self.web_thickness >= self.flange_width:
            raise ContractViolation("TShape web_thickness must be less than flange_width")
        if self.flange_thickness >= self.depth:
            raise ContractViolation("TShape flange_thickness must be less than depth")


@dataclass(frozen=True)
class CrossShape:
    """Cruciform (+) section of two plates crossing at the section origin.

    Attributes:
        height: Overall extent of the vertical plate.
        width: Overall extent of the horizontal plate.
        thickness: Thickness of both plates.
    """

    height: float
    width: float
    thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "height", "width", "thickness")
        if self.thickness >= min(self.height, self.width):
            raise ContractViolation("CrossShape thickness must be less than height and width")


@dataclass(frozen=True)
class FlatShape:
    """Flat bar lying with its width along section x."""

    width: float
    thickness: float

    def __post_init__(self) -> None:
        _require_positive(self, "width", "thickness")


@dataclass(frozen=True)
class BackToBackAnglesShape:
    """Two angles with their vertical legs back to back (2L).

    The horizontal legs point away from each other along y = 0. The gap
    between the backs is taken as filled by the gusset or filler plate that
    joins the pair, so the section is one closed outline.
    """

    depth: float
    width: float
    thickness: float
    gap: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "width", "thickness")
        _require_non_negative(self, "gap")
        if self.thickness >= min(self.depth, self.width):
            raise ContractViolation("BackToBackAnglesShape thickness must be less than both legs")


@dataclass(frozen=True)
class FaceToFaceAnglesShape:
    """Two angles stacked toe to toe along y (2L).

    The vertical legs line up on x = 0 with their toes ``gap`` apart, and
    the horizontal legs close the top and bottom. The gap is filled like
    the back-to-back pair's.
    """

    depth: float
    width: float
    thickness: float
    gap: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "width", "thickness")
        _require_non_negative(self, "gap")
        if self.thickness >= min(self.depth, self.width):
            raise ContractViolation("FaceToFaceAnglesShape thickness must be less than both legs")


@dataclass(frozen=True)
class BackToBackChannelsShape:
    """Two channels with their webs back to back (2C).

    With the gap filled the pair reads as an I section whose web is both
    channel webs plus the gap.
    """

    depth: float
    flange_width: float
    web_thickness: float
    flange_thickness: float
    gap: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "flange_width", "web_thickness", "flange_thickness")
        _require_non_negative(self, "gap")
        if self.web_thickness >= self.flange_width:
            raise ContractViolation(
                "BackToBackChannelsShape web_thickness must be less than flange_width"
            )
        if 2 * self.flange_thickness >= self.depth:
            raise ContractViolation(
                "BackToBackChannelsShape flanges must be thinner than half the depth"
            )


@dataclass(frozen=True)
class FaceToFaceChannelsShape:
    """Two channels with their flange toes meeting (2C).

    The pair encloses one rectangular cell, like a box section with webs
    as its sides.
    """

    depth: float
    flange_width: float
    web_thickness: float
    flange_thickness: float
    gap: float = 0.0

    def __post_init__(self) -> None:
        _require_positive(self, "depth", "flange_width", "web_thickness", "flange_thickness")
        _require_non_negative(self, "gap")
        if self.web_thickness >= self.flange_width:
            raise ContractViolation(
                "FaceToFaceChannelsShape web_thickness must be less than flange_width"
            )
        if 2 * self.flange_thickness >= self.depth:
            raise ContractViolation(
                "FaceToFaceChannelsShape flanges must be thinner than half the depth"
            )


ProfileKind = (
    HShape
    | BoxShape
    | PipeShape
    | RectangleShape
    | CircleShape
    | ChannelShape
    | LShape
    | TShape
    | CrossShape
    | FlatShape
    | BackToBackAnglesShape
    | FaceToFaceAnglesShape
    | BackToBackChannelsShape
    | FaceToFaceChannelsShape
)

# Shape identifiers used by the CLI and settings files.
SHAPE_KINDS: dict[str, type] = {
    "h": HShape,
    "box": BoxShape,
    "pipe": PipeShape,
    "rectangle": RectangleShape,
    "circle": CircleShape,
    "channel": ChannelShape,
    "l": LShape,
    "t": TShape,
    "cross": CrossShape,
    "flat": FlatShape,
    "2l-bb": BackToBackAnglesShape,
    "2l-ff": FaceToFaceAnglesShape,
    "2c-bb": BackToBackChannelsShape,
    "2c-ff": FaceToFaceChannelsShape,
}


def shape_fields(kind: type, *, required_only: bool = False) -> list[str]:
    """Return the dimension field names of a shape record type.

    With ``required_only``, fields that have a default (``segments``,
    ``gap``) are left out.
    """
    return [
        f.name for f in fields(kind) if not required_only or f.default is MISSING
    ]
