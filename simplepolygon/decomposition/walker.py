from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from simplepolygon.decomposition.graph import EdgeRef, GraphConsistencyError, IntersectionGraph
from simplepolygon.decomposition.rings import OutputRing
from simplepolygon.geometry.polygon2d import is_convex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueueEntry:
    isect: int
    parent: Optional[int]
    winding: int


def seed_queue(graph: IntersectionGraph) -> List[QueueEntry]:
    """One start intersection per input ring: its left-most ring vertex.

    The returned list is consumed from the end, so the globally left-most seed
    comes out first and outer rings are walked before inner ones.
    """
    isects = graph.intersections
    entries: List[QueueEntry] = []
    for ring in range(len(graph.ring_sizes)):
        lo, hi = graph.ring_vertex_span(ring)
        left = lo
        for k in range(lo, hi):
            if isects[k].coord[0] < isects[left].coord[0]:
                left = k
        before = graph.predecessor(left)
        after = isects[left].next2
        # A left-most vertex is convex on whatever output ring passes it.
        convex = is_convex(isects[before].coord, isects[left].coord, isects[after].coord, True)
        entries.append(QueueEntry(isect=left, parent=None, winding=1 if convex else -1))
    entries.sort(key=lambda e: isects[e.isect].coord, reverse=True)
    return entries


def _drop_queued(queue: List[QueueEntry], isect: int) -> None:
    for i, entry in enumerate(queue):
        if entry.isect == isect:
            logger.debug("Removing intersection %d from queue", isect)
            del queue[i]
            return


def walk_rings(graph: IntersectionGraph) -> List[OutputRing]:
    """Walk the intersection graph into simple output rings.

    Each walk leaves its start intersection along a walkable edge and, at
    every intersection it reaches, continues along the edge it did not arrive
    on. Every departing half-edge is consumed exactly once over all walks.
    Parents assigned here are provisional; see ``resolve_nesting``.
    """
    isects = graph.intersections
    queue = seed_queue(graph)
    out: List[OutputRing] = []

    while queue:
        entry = queue.pop()
        start = entry.isect
        index = len(out)
        parent = entry.parent
        winding = entry.winding
        here = isects[start]
        coords = [here.coord]
        logger.debug("Starting output ring %d with winding %d from intersection %d", index, winding, start)

        walking: EdgeRef
        if here.walkable1:
            walking, nxt = here.edge1, here.next1
            here.walkable1 = False
        elif here.walkable2:
            walking, nxt = here.edge2, here.next2
            here.walkable2 = False
        else:
            raise GraphConsistencyError(f"Intersection {start} has no walkable edge left.")

        current = start
        while nxt != start:
            here = isects[nxt]
            coords.append(here.coord)
            _drop_queued(queue, nxt)

            if walking == here.edge1:
                walking, far = here.edge2, here.next2
                if not here.walkable2:
                    raise GraphConsistencyError(f"Edge {walking} at intersection {nxt} walked twice.")
                here.walkable2 = False
                branch = here.walkable1
            else:
                walking, far = here.edge1, here.next1
                if not here.walkable1:
                    raise GraphConsistencyError(f"Edge {walking} at intersection {nxt} walked twice.")
                here.walkable1 = False
                branch = here.walkable2

            if branch:
                # Turning convexly means the ring leaving along the other edge lies outside this one.
                if is_convex(isects[current].coord, here.coord, isects[far].coord, winding == 1):
                    queued = QueueEntry(isect=nxt, parent=parent, winding=-winding)
                else:
                    queued = QueueEntry(isect=nxt, parent=index, winding=winding)
                queue.append(queued)
                logger.debug("Queued intersection %d with parent %s and winding %d", nxt, queued.parent, queued.winding)

            current, nxt = nxt, far

        coords.append(isects[nxt].coord)
        out.append(OutputRing(index=index, coords=coords, winding=winding, parent=parent))
        logger.debug("Closed output ring %d with %d vertices", index, len(coords) - 1)

    return out
