from simplepolygon.decomposition.graph import (
    EdgeRef,
    GraphConsistencyError,
    Intersection,
    IntersectionGraph,
    PseudoVertex,
    build_graph,
)
from simplepolygon.decomposition.nesting import assign_net_winding, assign_parents, resolve_nesting
from simplepolygon.decomposition.pipeline import DecomposeConfig, decompose
from simplepolygon.decomposition.rings import InvalidPolygonError, OutputRing, normalize_rings
from simplepolygon.decomposition.walker import QueueEntry, seed_queue, walk_rings

__all__ = [
    "EdgeRef",
    "GraphConsistencyError",
    "Intersection",
    "IntersectionGraph",
    "PseudoVertex",
    "build_graph",
    "assign_net_winding",
    "assign_parents",
    "resolve_nesting",
    "DecomposeConfig",
    "decompose",
    "InvalidPolygonError",
    "OutputRing",
    "normalize_rings",
    "QueueEntry",
    "seed_queue",
    "walk_rings",
]
