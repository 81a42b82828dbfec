from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from simplepolygon.geometry.tolerance import EPS_PARALLEL


Point2 = Tuple[float, float]


@dataclass(frozen=True)
class IntersectionRecord:
    """One edge's view of a crossing between two polygon edges.

    Every crossing is reported twice, once from each edge. Both records share
    the same ``coord`` object and exactly one of them is ``canonical``.
    """

    coord: Point2
    ring0: int
    edge0: int
    frac0: float
    ring1: int
    edge1: int
    frac1: float
    canonical: bool

    def mirrored(self) -> "IntersectionRecord":
        return IntersectionRecord(
            coord=self.coord,
            ring0=self.ring1,
            edge0=self.edge1,
            frac0=self.frac1,
            ring1=self.ring0,
            edge1=self.edge0,
            frac1=self.frac0,
            canonical=not self.canonical,
        )


def segment_intersection(a0: Point2, a1: Point2, b0: Point2, b1: Point2) -> Optional[Tuple[Point2, float, float]]:
    """Crossing point of segments ``a0-a1`` and ``b0-b1`` and its fraction along each.

    Only crossings strictly inside both segments are reported. Parallel and
    collinear segments return None.
    """
    dax = a1[0] - a0[0]
    day = a1[1] - a0[1]
    dbx = b1[0] - b0[0]
    dby = b1[1] - b0[1]
    denom = dax * dby - day * dbx
    scale = ((dax * dax + day * day) * (dbx * dbx + dby * dby)) ** 0.5
    if abs(denom) <= EPS_PARALLEL * scale:
        return None
    wx = b0[0] - a0[0]
    wy = b0[1] - a0[1]
    t = (wx * dby - wy * dbx) / denom
    u = (wx * day - wy * dax) / denom
    if t <= 0.0 or t >= 1.0 or u <= 0.0 or u >= 1.0:
        return None
    return (a0[0] + t * dax, a0[1] + t * day), t, u


def _edges(rings: Sequence[Sequence[Point2]]) -> List[Tuple[int, int, Point2, Point2]]:
    out: List[Tuple[int, int, Point2, Point2]] = []
    for r, ring in enumerate(rings):
        for e in range(len(ring) - 1):
            out.append((r, e, ring[e], ring[e + 1]))
    return out


def find_self_intersections(rings: Sequence[Sequence[Point2]]) -> List[IntersectionRecord]:
    """All self- and cross-intersections between the edges of closed ``rings``.

    Edges sharing an endpoint (adjacent edges of one ring) are never reported.
    Each crossing yields a canonical record followed by its mirror.
    """
    edges = _edges(rings)
    if len(edges) < 2:
        return []
    starts = np.array([e[2] for e in edges], dtype=float)
    ends = np.array([e[3] for e in edges], dtype=float)
    mins = np.minimum(starts, ends)
    maxs = np.maximum(starts, ends)

    out: List[IntersectionRecord] = []
    for i in range(len(edges) - 1):
        ri, ei, a0, a1 = edges[i]
        rest = slice(i + 1, None)
        overlap = np.all(mins[rest] <= maxs[i], axis=1) & np.all(maxs[rest] >= mins[i], axis=1)
        for j in (np.nonzero(overlap)[0] + i + 1).tolist():
            rj, ej, b0, b1 = edges[j]
            if a0 == b0 or a0 == b1 or a1 == b0 or a1 == b1:
                continue
            hit = segment_intersection(a0, a1, b0, b1)
            if hit is None:
                continue
            coord, t, u = hit
            rec = IntersectionRecord(
                coord=coord,
                ring0=ri,
                edge0=ei,
                frac0=t,
                ring1=rj,
                edge1=ej,
                frac1=u,
                canonical=True,
            )
            out.append(rec)
            out.append(rec.mirrored())
    return out

