"""Cross-section profile value object."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from ..exceptions import ContractViolation
from ._vectors import Point2

Loop = tuple[Point2, ...]


def signed_area(loop: Sequence[Point2]) -> float:
    """Return the shoelace signed area of a closed loop.

    Positive for counter-clockwise loops (y up), negative for clockwise.
    """
    n = len(loop)
    total = 0.0
    for i in range(n):
        a = loop[i]
        b = loop[(i + 1) % n]
        total += a.x * b.y - b.x * a.y
    return total / 2.0


def reverse_loop(loop: Sequence[Point2]) -> Loop:
    """Reverse loop orientation while keeping the first vertex in place.

    Keeping the first vertex preserves index correspondence between loops
    of different profiles that were authored from the same start corner.
    """
    if not loop:
        return ()
    return (loop[0], *reversed(loop[1:]))


def _strip_closing_vertex(points: Iterable[Point2 | tuple[float, float]]) -> Loop:
    loop = tuple(p if isinstance(p, Point2) else Point2(float(p[0]), float(p[1])) for p in points)
    if len(loop) > 1 and loop[0] == loop[-1]:
        loop = loop[:-1]
    return loop


@dataclass(frozen=True)
class CrossSectionProfile:
    """A section shape: an outer contour with optional holes.

    The outer contour is a simple polygon with at least three vertices. Holes
    lie fully inside the outer contour and never overlap each other. Neither
    the outer contour nor the holes repeat their first vertex at the end.

    Attributes:
        outer: Ordered outer contour vertices in section-local mm.
        holes: Ordered vertex loops of interior holes (box/pipe cavities).
    """

    outer: Loop
    holes: tuple[Loop, ...] = ()

    def __post_init__(self) -> None:
        if len(self.outer) < 3:
            raise ContractViolation(
                f"Profile outer contour must have at least 3 vertices (got {len(self.outer)})"
            )
        for i, hole in enumerate(self.holes):
            if len(hole) < 3:
                raise ContractViolation(
                    f"Profile hole {i} must have at least 3 vertices (got {len(hole)})"
                )

    @classmethod
    def from_points(
        cls,
        outer: Iterable[Point2 | tuple[float, float]],
        holes: Iterable[Iterable[Point2 | tuple[float, float]]] = (),
    ) -> CrossSectionProfile:
        """Build a profile from point sequences or (x, y) tuples.

        A closing vertex equal to the first one is dropped from every loop.
        """
        return cls(
            outer=_strip_closing_vertex(outer),
            holes=tuple(_strip_closing_vertex(h) for h in holes),
        )

    @property
    def vertex_count(self) -> int:
        """Number of outer contour vertices."""
        return len(self.outer)

    @property
    def total_vertex_count(self) -> int:
        """Number of vertices over the outer contour and all holes."""
        return len(self.outer) + sum(len(h) for h in self.holes)

    @property
    def hole_vertex_counts(self) -> tuple[int, ...]:
        return tuple(len(h) for h in self.holes)

    @property
    def signed_area(self) -> float:
        """Signed area of the outer contour alone."""
        return signed_area(self.outer)

    @property
    def is_counter_clockwise(self) -> bool:
        return self.signed_area > 0.0

    @property
    def area(self) -> float:
        """Net material area: outer contour minus holes."""
        return abs(signed_area(self.outer)) - sum(abs(signed_area(h)) for h in self.holes)

    def loops(self) -> tuple[Loop, ...]:
        """Outer contour followed by the holes, in flattened index order."""
        return (self.outer, *self.holes)

    def oriented(self) -> CrossSectionProfile:
        """Return a copy with a counter-clockwise outer contour and clockwise holes."""
        outer = self.outer if signed_area(self.outer) >= 0.0 else reverse_loop(self.outer)
        holes = tuple(h if signed_area(h) <= 0.0 else reverse_loop(h) for h in self.holes)
        if outer is self.outer and all(a is b for a, b in zip(holes, self.holes)):
            return self
        return CrossSectionProfile(outer=outer, holes=holes)

    def is_compatible_with(self, other: CrossSectionProfile) -> bool:
        """Check whether two profiles can be interpolated vertex-for-vertex."""
        return (
            self.vertex_count == other.vertex_count
            and self.hole_vertex_counts == other.hole_vertex_counts
        )

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) of the outer contour."""
        xs = [p.x for p in self.outer]
        ys = [p.y for p in self.outer]
        return (min(xs), min(ys), max(xs), max(ys))

    @property
    def width(self) -> float:
        min_x, _, max_x, _ = self.bounding_box()
        return max_x - min_x

    @property
    def height(self) -> float:
        _, min_y, _, max_y = self.bounding_box()
        return max_y - min_y
