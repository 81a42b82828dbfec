from __future__ import annotations

import math
import time

from simplepolygon.decomposition.graph import build_graph
from simplepolygon.decomposition.nesting import resolve_nesting
from simplepolygon.decomposition.rings import normalize_rings
from simplepolygon.decomposition.walker import walk_rings
from simplepolygon.geometry.intersections import find_self_intersections


def _star_polygon(n: int = 61, step: int = 20, radius: float = 100.0):
    # Regular {n/step} star; n prime keeps every crossing between exactly two edges.
    return [
        [
            (radius * math.cos(2.0 * math.pi * step * k / n), radius * math.sin(2.0 * math.pi * step * k / n))
            for k in range(n)
        ]
    ]


def main() -> int:
    rings = normalize_rings(_star_polygon())

    t0 = time.perf_counter()
    records = find_self_intersections(rings)
    t1 = time.perf_counter()
    graph = build_graph(rings, records)
    t2 = time.perf_counter()
    out = walk_rings(graph)
    t3 = time.perf_counter()
    resolve_nesting(out, verify_parents=True)
    t4 = time.perf_counter()

    print("bench_decompose")
    print(f"  vertices: {graph.num_ring_vertices}")
    print(f"  self_intersections: {len(graph.intersections) - graph.num_ring_vertices}")
    print(f"  output_rings: {len(out)}")
    print(f"  max_net_winding: {max(r.net_winding for r in out)}")
    print(f"  detect_s: {t1 - t0:.4f}")
    print(f"  build_graph_s: {t2 - t1:.4f}")
    print(f"  walk_s: {t3 - t2:.4f}")
    print(f"  nesting_s: {t4 - t3:.4f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
