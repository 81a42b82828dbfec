from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from simplepolygon.decomposition.graph import build_graph
from simplepolygon.decomposition.nesting import resolve_nesting
from simplepolygon.decomposition.rings import OutputRing, normalize_rings
from simplepolygon.decomposition.walker import walk_rings
from simplepolygon.geometry.intersections import find_self_intersections
from simplepolygon.geometry.polygon2d import ring_winding

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecomposeConfig:
    # Re-derive every parent by containment instead of trusting walk predictions.
    verify_parents: bool = False
    # Close open rings instead of rejecting them.
    auto_close: bool = True


def decompose(rings: Sequence[Sequence[object]], config: Optional[DecomposeConfig] = None) -> List[OutputRing]:
    """Break a possibly self-intersecting polygon into simple one-ring polygons.

    ``rings`` is the outer ring followed by any inner rings. The result covers
    every input edge exactly once; each ring carries its winding number,
    parent and net winding number.
    """
    cfg = config or DecomposeConfig()
    closed = normalize_rings(rings, auto_close=cfg.auto_close)
    records = find_self_intersections(closed)
    num_isects = sum(1 for rec in records if rec.canonical)

    if num_isects == 0:
        # Already simple: the input rings are the output rings.
        out = [
            OutputRing(index=i, coords=list(ring), winding=ring_winding(ring), parent=None)
            for i, ring in enumerate(closed)
        ]
    else:
        graph = build_graph(closed, records)
        out = walk_rings(graph)

    resolve_nesting(out, verify_parents=cfg.verify_parents)
    logger.info(
        "Decomposed %d input ring(s) with %d self-intersection(s) into %d simple ring(s)",
        len(closed),
        num_isects,
        len(out),
    )
    return out
