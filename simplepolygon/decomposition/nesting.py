from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Optional, Sequence

from simplepolygon.decomposition.graph import GraphConsistencyError
from simplepolygon.decomposition.rings import OutputRing
from simplepolygon.geometry.polygon2d import Point2, point_in_ring, point_on_ring, ring_area

logger = logging.getLogger(__name__)


def _probe_points(coords: Sequence[Point2]) -> Iterator[Point2]:
    pts = coords[:-1]
    yield from pts
    n = len(pts)
    for i in range(n):
        a, b = pts[i], pts[(i + 1) % n]
        yield (0.5 * (a[0] + b[0]), 0.5 * (a[1] + b[1]))


def ring_contains(outer: Sequence[Point2], inner: Sequence[Point2]) -> bool:
    """Whether ``inner`` lies inside ``outer``.

    Output rings only touch at shared vertices, so the first probe point of
    ``inner`` not on the boundary of ``outer`` decides.
    """
    for p in _probe_points(inner):
        if point_on_ring(p, outer):
            continue
        return point_in_ring(p, outer)
    return False


def find_parent(rings: Sequence[OutputRing], idx: int, areas: Sequence[float]) -> Optional[int]:
    """Smallest other ring containing ring ``idx``, or None."""
    parent: Optional[int] = None
    parent_area = float("inf")
    for j, other in enumerate(rings):
        if j == idx:
            continue
        if areas[j] < parent_area and ring_contains(other.coords, rings[idx].coords):
            parent = j
            parent_area = areas[j]
    return parent


def assign_parents(rings: List[OutputRing], verify_parents: bool = False) -> None:
    roots = [r.index for r in rings if r.parent is None]
    logger.debug("Output rings without parent: %s", roots)
    if verify_parents:
        todo = [r.index for r in rings]
    elif len(roots) > 1:
        todo = roots
    else:
        return

    areas = [ring_area(r.coords) for r in rings]
    for idx in todo:
        parent = find_parent(rings, idx, areas)
        if parent != rings[idx].parent:
            logger.debug("Ring %d is assigned parent %s (was %s)", idx, parent, rings[idx].parent)
        rings[idx].parent = parent


def assign_net_winding(rings: List[OutputRing]) -> None:
    children: Dict[Optional[int], List[int]] = {}
    for r in rings:
        children.setdefault(r.parent, []).append(r.index)

    for r in rings:
        r.net_winding = None
    work: List[int] = list(children.get(None, []))
    while work:
        idx = work.pop()
        ring = rings[idx]
        base = 0 if ring.parent is None else rings[ring.parent].net_winding
        ring.net_winding = int(base) + ring.winding
        work.extend(children.get(idx, []))

    unreached = [r.index for r in rings if r.net_winding is None]
    if unreached:
        raise GraphConsistencyError(f"Output rings {unreached} are not reachable from a root ring.")


def resolve_nesting(rings: List[OutputRing], verify_parents: bool = False) -> List[OutputRing]:
    """Finalize parents and net winding numbers of ``rings`` in place.

    Parents predicted during the walk are kept unless ``verify_parents`` is
    set, in which case every parent is re-derived by containment. Parentless
    rings are always resolved by containment when there is more than one.
    """
    assign_parents(rings, verify_parents=verify_parents)
    assign_net_winding(rings)
    return rings
