"""End-cap triangulation for cross-section profiles with holes.

Profiles can be concave (H, channel, angle, tee, cross) and can carry holes
(box and pipe cavities), so a fan from the first vertex is not enough. The
outer contour and holes are handed to earcut, which bridges the holes into the
outer contour and ear clips the result.

Triangle indices refer to the flattened vertex order of the *oriented*
profile: outer contour first, then each hole in turn. No vertex is dropped or
merged, so cap vertices line up one-to-one with the wall rings built from the
same profile.
"""

from __future__ import annotations

import logging

import mapbox_earcut
import numpy as np

from ..exceptions import ContractViolation
from ..value_objects import CrossSectionProfile

logger = logging.getLogger(__name__)

Triangle = tuple[int, int, int]


def _twice_area(points: np.ndarray, tri: Triangle) -> float:
    a, b, c = points[tri[0]], points[tri[1]], points[tri[2]]
    return float((b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0]))


def _canonical(points: np.ndarray, tri: Triangle) -> Triangle:
    """Counter-clockwise, rotated so the smallest index comes first."""
    a, b, c = tri
    if _twice_area(points, tri) < 0.0:
        b, c = c, b
    while a != min(a, b, c):
        a, b, c = b, c, a
    return a, b, c


def _restore_skipped(
    triangles: list[Triangle], loop_sizes: list[int], used: set[int]
) -> None:
    """Put back loop vertices earcut filtered out as collinear or duplicate.

    A skipped vertex ``v`` sits on the straight run between the nearest used
    vertices ``p`` and ``q`` around its loop. The triangle holding the
    boundary edge ``p -> q`` is split in two at ``v``, which adds exactly one
    triangle per restored vertex.
    """
    offset = 0
    for size in loop_sizes:
        loop = range(offset, offset + size)
        for k in range(size):
            v = loop[k]
            if v in used:
                continue
            behind = (loop[(k - s) % size] for s in range(1, size))
            ahead = (loop[(k + s) % size] for s in range(1, size))
            p = next((i for i in behind if i in used), None)
            q = next((i for i in ahead if i in used), None)
            if p is None or q is None:
                raise ContractViolation(f"Profile loop around vertex {v} has no area")
            for t, (a, b, c) in enumerate(triangles):
                rotations = ((a, b, c), (b, c, a), (c, a, b))
                hit = next((r for r in rotations if r[0] == p and r[1] == q), None)
                if hit is not None:
                    triangles[t] = (p, v, hit[2])
                    triangles.append((v, q, hit[2]))
                    used.add(v)
                    break
            else:
                raise ContractViolation(f"Cannot place profile vertex {v} on a cap edge")
        offset += size


def triangulate_profile(profile: CrossSectionProfile, *, reverse: bool = False) -> list[Triangle]:
    """Triangulate a profile's area, holes excluded.

    Args:
        profile: Section to triangulate. It is oriented (outer contour
            counter-clockwise, holes clockwise) before triangulation.
        reverse: Emit clockwise triangles instead of counter-clockwise ones.

    Returns:
        ``n + 2h - 2`` triangles for ``n`` total vertices and ``h`` holes, as
        index triples into the oriented profile's flattened loops.

    Raises:
        ContractViolation: If the profile has no area to triangulate.
    """
    oriented = profile.oriented()
    loops = oriented.loops()
    points = np.array([(p.x, p.y) for loop in loops for p in loop], dtype=np.float64)
    loop_sizes = [len(loop) for loop in loops]
    ring_ends = np.cumsum(loop_sizes).astype(np.uint32)

    flat = mapbox_earcut.triangulate_float64(points, ring_ends)
    if flat.size == 0:
        raise ContractViolation("Profile has no area to triangulate")
    triangles = [
        _canonical(points, (int(a), int(b), int(c))) for a, b, c in flat.reshape(-1, 3)
    ]

    used = {i for tri in triangles for i in tri}
    if len(used) < len(points):
        logger.debug(
            "Earcut skipped %d of %d profile vertices; splitting cap triangles",
            len(points) - len(used),
            len(points),
        )
        _restore_skipped(triangles, loop_sizes, used)

    if reverse:
        return [(a, c, b) for a, b, c in triangles]
    return triangles


def triangulate_cap(
    profile: CrossSectionProfile,
    depth: float,
    base_index: int = 0,
    reverse: bool = False,
) -> tuple[np.ndarray, np.ndarray]:
    """Build a flat end cap at ``z = depth``.

    Args:
        profile: Section to cap.
        depth: Local z coordinate of the cap plane.
        base_index: Offset added to every triangle index, typically the
            number of vertices already in the target buffer.
        reverse: Face -z instead of +z.

    Returns:
        Tuple of (vertices, triangles): an (n, 3) float array of cap
        vertices in flattened loop order and an (m, 3) int array of indices
        offset by ``base_index``.
    """
    oriented = profile.oriented()
    vertices = np.array(
        [(p.x, p.y, depth) for loop in oriented.loops() for p in loop],
        dtype=np.float64,
    )
    triangles = np.array(triangulate_profile(oriented, reverse=reverse), dtype=np.int64)
    return vertices, triangles.reshape(-1, 3) + base_index
