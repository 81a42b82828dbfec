from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from simplepolygon.geometry.intersections import IntersectionRecord
from simplepolygon.geometry.polygon2d import Point2

logger = logging.getLogger(__name__)


class GraphConsistencyError(RuntimeError):
    pass


@dataclass(frozen=True)
class EdgeRef:
    """Directed edge from vertex ``edge`` to ``edge + 1`` of ring ``ring``."""

    ring: int
    edge: int


@dataclass
class PseudoVertex:
    coord: Point2
    # Fractional position on edge_in; 1.0 for the ring vertex ending the edge.
    param: float
    edge_in: EdgeRef
    edge_out: EdgeRef
    # Next intersection reached by continuing along edge_in.
    next_isect: Optional[int] = None


@dataclass
class Intersection:
    """A point where exactly two edges meet.

    ``walkable1``/``walkable2`` say whether a walk may still leave this point
    along ``edge1``/``edge2``. A ring vertex is only ever left along its
    outgoing edge, so its ``edge1`` (the incoming ring edge) starts consumed.
    """

    coord: Point2
    edge1: EdgeRef
    edge2: EdgeRef
    next1: Optional[int] = None
    next2: Optional[int] = None
    walkable1: bool = True
    walkable2: bool = True


@dataclass
class IntersectionGraph:
    # pseudo_vertices[ring][edge] holds the pseudo-vertices whose edge_in is
    # (ring, edge), sorted by param; the ring vertex is always last.
    pseudo_vertices: List[List[List[PseudoVertex]]]
    # Ring-vertex intersections first, in input order, then self-intersections.
    intersections: List[Intersection]
    ring_sizes: List[int]
    index_by_coord: Dict[Point2, int] = field(default_factory=dict)

    @property
    def num_ring_vertices(self) -> int:
        return sum(self.ring_sizes)

    def ring_vertex_span(self, ring: int) -> Tuple[int, int]:
        lo = sum(self.ring_sizes[:ring])
        return lo, lo + self.ring_sizes[ring]

    def lookup(self, coord: Point2) -> int:
        idx = self.index_by_coord.get(coord)
        if idx is None:
            raise GraphConsistencyError(f"No intersection found at {coord}.")
        return idx

    def predecessor(self, idx: int) -> int:
        """Intersection whose walk pointer leads to ``idx``."""
        for k, isect in enumerate(self.intersections):
            if isect.next1 == idx or isect.next2 == idx:
                return k
        raise GraphConsistencyError(f"Intersection {idx} is not reached from any other intersection.")


def _add_ring_vertices(rings: Sequence[Sequence[Point2]], graph: IntersectionGraph) -> None:
    for i, ring in enumerate(rings):
        n = graph.ring_sizes[i]
        edges: List[List[PseudoVertex]] = []
        for j in range(n):
            edges.append(
                [
                    PseudoVertex(
                        coord=ring[(j + 1) % n],
                        param=1.0,
                        edge_in=EdgeRef(i, j),
                        edge_out=EdgeRef(i, (j + 1) % n),
                    )
                ]
            )
            graph.intersections.append(
                Intersection(
                    coord=ring[j],
                    edge1=EdgeRef(i, (j - 1) % n),
                    edge2=EdgeRef(i, j),
                    walkable1=False,
                )
            )
        graph.pseudo_vertices.append(edges)


def _add_self_intersections(records: Sequence[IntersectionRecord], graph: IntersectionGraph) -> None:
    for rec in records:
        if not (0.0 < rec.frac0 < 1.0):
            raise GraphConsistencyError(
                f"Intersection {rec.coord} lies outside ring {rec.ring0} edge {rec.edge0} (param {rec.frac0})."
            )
        try:
            edge_list = graph.pseudo_vertices[rec.ring0][rec.edge0]
        except IndexError:
            raise GraphConsistencyError(f"Intersection {rec.coord} refers to unknown ring {rec.ring0} edge {rec.edge0}.") from None
        edge_in = EdgeRef(rec.ring0, rec.edge0)
        edge_out = EdgeRef(rec.ring1, rec.edge1)
        edge_list.append(PseudoVertex(coord=rec.coord, param=float(rec.frac0), edge_in=edge_in, edge_out=edge_out))
        if rec.canonical:
            graph.intersections.append(Intersection(coord=rec.coord, edge1=edge_in, edge2=edge_out))


def _sort_edges(graph: IntersectionGraph) -> None:
    for i, edges in enumerate(graph.pseudo_vertices):
        for j, pvs in enumerate(edges):
            pvs.sort(key=lambda pv: pv.param)
            for a, b in zip(pvs, pvs[1:]):
                if a.param == b.param:
                    raise GraphConsistencyError(f"Coincident pseudo-vertices {a.coord} and {b.coord} on ring {i} edge {j}.")


def _index_coords(graph: IntersectionGraph) -> None:
    for k, isect in enumerate(graph.intersections):
        if isect.coord in graph.index_by_coord:
            raise GraphConsistencyError(f"More than two edges meet at {isect.coord}.")
        graph.index_by_coord[isect.coord] = k


def _link_pseudo_vertices(graph: IntersectionGraph) -> None:
    for edges in graph.pseudo_vertices:
        n = len(edges)
        for j, pvs in enumerate(edges):
            for k, pv in enumerate(pvs):
                # The last pseudo-vertex is the ring vertex; its successor is on the next edge.
                nxt = pvs[k + 1] if k + 1 < len(pvs) else edges[(j + 1) % n][0]
                pv.next_isect = graph.lookup(nxt.coord)


def _link_intersections(graph: IntersectionGraph) -> None:
    k = 0
    for edges in graph.pseudo_vertices:
        n = len(edges)
        for j in range(n):
            # Ring vertex j ends edge j - 1; that pseudo-vertex's successor lies on edge j.
            nxt = edges[(j - 1) % n][-1].next_isect
            graph.intersections[k].next1 = nxt
            graph.intersections[k].next2 = nxt
            k += 1

    by_coord: Dict[Point2, List[PseudoVertex]] = {}
    for edges in graph.pseudo_vertices:
        for pvs in edges:
            for pv in pvs[:-1]:
                by_coord.setdefault(pv.coord, []).append(pv)

    for isect in graph.intersections[k:]:
        for pv in by_coord.get(isect.coord, []):
            if pv.edge_in == isect.edge1:
                isect.next1 = pv.next_isect
            else:
                isect.next2 = pv.next_isect
        if isect.next1 is None or isect.next2 is None:
            raise GraphConsistencyError(f"Intersection {isect.coord} is missing a pseudo-vertex on one of its edges.")


def build_graph(rings: Sequence[Sequence[Point2]], records: Sequence[IntersectionRecord]) -> IntersectionGraph:
    """Build the intersection graph of closed ``rings`` and their crossings.

    After this returns every intersection knows the next intersection along
    both of its edges. Those pointers are never recomputed; walks only flip
    the walkable flags.
    """
    graph = IntersectionGraph(pseudo_vertices=[], intersections=[], ring_sizes=[len(r) - 1 for r in rings])
    _add_ring_vertices(rings, graph)
    _add_self_intersections(records, graph)
    _sort_edges(graph)
    _index_coords(graph)
    _link_pseudo_vertices(graph)
    _link_intersections(graph)
    logger.debug(
        "Built intersection graph: %d ring vertices, %d self-intersections",
        graph.num_ring_vertices,
        len(graph.intersections) - graph.num_ring_vertices,
    )
    return graph
