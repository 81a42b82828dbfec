from __future__ import annotations

from typing import List, Sequence, Tuple

import numpy as np

from simplepolygon.geometry.tolerance import EPS_POS


Point2 = Tuple[float, float]


def _open(ring: Sequence[Point2]) -> Sequence[Point2]:
    if len(ring) > 1 and tuple(ring[0]) == tuple(ring[-1]):
        return ring[:-1]
    return ring


def close_ring(ring: Sequence[Point2]) -> List[Point2]:
    out = [(float(p[0]), float(p[1])) for p in ring]
    if out and out[0] != out[-1]:
        out.append(out[0])
    return out


def orient(a: Point2, b: Point2, c: Point2) -> float:
    return (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])


def is_convex(a: Point2, b: Point2, c: Point2, righthanded: bool = True) -> bool:
    """Whether ``b`` is a convex vertex of a simple ring passing ``a -> b -> c``.

    ``righthanded`` selects the assumed orientation: positive (counter-clockwise)
    when true, negative otherwise. Collinear triples count as convex.
    """
    return (orient(a, b, c) >= 0.0) == righthanded


def signed_area(ring: Sequence[Point2]) -> float:
    pts = _open(ring)
    if len(pts) < 3:
        return 0.0
    arr = np.asarray(pts, dtype=float)
    x = arr[:, 0]
    y = arr[:, 1]
    return 0.5 * float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y))


def ring_area(ring: Sequence[Point2]) -> float:
    return abs(signed_area(ring))


def ring_winding(ring: Sequence[Point2]) -> int:
    """Winding number (+1 or -1) of a simple ring.

    The left-most vertex of a simple ring is always convex, so testing its
    convexity under a positive orientation tells the orientation of the ring.
    """
    pts = _open(ring)
    n = len(pts)
    if n < 3:
        raise ValueError("Ring winding requires at least 3 distinct vertices.")
    left = 0
    for i in range(n):
        if pts[i][0] < pts[left][0]:
            left = i
    return 1 if is_convex(pts[(left - 1) % n], pts[left], pts[(left + 1) % n], True) else -1


def point_on_segment(p: Point2, a: Point2, b: Point2, eps: float = EPS_POS) -> bool:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    seg2 = dx * dx + dy * dy
    if seg2 <= 0.0:
        return p[0] == a[0] and p[1] == a[1]
    if abs(orient(a, b, p)) > eps * seg2:
        return False
    t = (p[0] - a[0]) * dx + (p[1] - a[1]) * dy
    return -eps * seg2 <= t <= seg2 * (1.0 + eps)


def point_on_ring(p: Point2, ring: Sequence[Point2], eps: float = EPS_POS) -> bool:
    pts = _open(ring)
    n = len(pts)
    for i in range(n):
        if point_on_segment(p, pts[i], pts[(i + 1) % n], eps):
            return True
    return False


def point_in_ring(p: Point2, ring: Sequence[Point2]) -> bool:
    # Even-odd ray casting; points on the boundary are not classified reliably,
    # callers test point_on_ring first.
    x, y = p
    inside = False
    pts = _open(ring)
    n = len(pts)
    for i in range(n):
        x1, y1 = pts[i]
        x2, y2 = pts[(i + 1) % n]
        if ((y1 > y) != (y2 > y)) and (x < (x2 - x1) * (y - y1) / (y2 - y1) + x1):
            inside = not inside
    return inside

