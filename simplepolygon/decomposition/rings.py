from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Real
from typing import List, Optional, Sequence, Set, Tuple

from simplepolygon.geometry.polygon2d import Point2, close_ring


class InvalidPolygonError(ValueError):
    pass


@dataclass
class OutputRing:
    """A simple ring produced by the decomposition.

    ``parent`` is the index of the smallest output ring enclosing this one, or
    None for a root. ``net_winding`` is filled in once nesting is resolved.
    """

    index: int
    coords: List[Point2] = field(default_factory=list)
    winding: int = 1
    parent: Optional[int] = None
    net_winding: Optional[int] = None


def _as_point(p: object, ring: int, vertex: int) -> Point2:
    if not isinstance(p, (list, tuple)) or len(p) < 2:
        raise InvalidPolygonError(f"Ring {ring} vertex {vertex} is not a coordinate pair: {p!r}")
    x, y = p[0], p[1]
    for v in (x, y):
        if isinstance(v, bool) or not isinstance(v, Real):
            raise InvalidPolygonError(f"Ring {ring} vertex {vertex} has a non-numeric ordinate: {p!r}")
        if not math.isfinite(float(v)):
            raise InvalidPolygonError(f"Ring {ring} vertex {vertex} has a non-finite ordinate: {p!r}")
    return (float(x), float(y))


def normalize_rings(rings: Sequence[Sequence[object]], *, auto_close: bool = True) -> List[List[Point2]]:
    """Closed copies of ``rings`` as float tuples, rejecting malformed input.

    Extra ordinates beyond x and y are dropped. No vertex may appear twice in
    the polygon apart from each ring's closing repeat.
    """
    if not isinstance(rings, (list, tuple)) or not rings:
        raise InvalidPolygonError("Polygon must have at least one ring.")

    out: List[List[Point2]] = []
    for r, ring in enumerate(rings):
        if not isinstance(ring, (list, tuple)):
            raise InvalidPolygonError(f"Ring {r} is not a coordinate sequence.")
        pts = [_as_point(p, r, v) for v, p in enumerate(ring)]
        if not auto_close and pts and pts[0] != pts[-1]:
            raise InvalidPolygonError(f"Ring {r} is not closed.")
        pts = close_ring(pts)
        if len(pts) < 4:
            raise InvalidPolygonError(f"Ring {r} needs at least 3 distinct vertices, got {max(len(pts) - 1, 0)}.")
        out.append(pts)

    duplicates = _duplicate_vertices(out)
    if duplicates:
        shown = ", ".join(f"ring {r} vertex {v} {p}" for r, v, p in duplicates[:3])
        raise InvalidPolygonError(
            "The input polygon may not have duplicate vertices "
            f"(except for the first and last vertex of each ring): {shown}"
        )
    return out


def _duplicate_vertices(rings: Sequence[Sequence[Point2]]) -> List[Tuple[int, int, Point2]]:
    seen: Set[Point2] = set()
    dups: List[Tuple[int, int, Point2]] = []
    for r, ring in enumerate(rings):
        for v, p in enumerate(ring[:-1]):
            if p in seen:
                dups.append((r, v, p))
                continue
            seen.add(p)
    return dups
