from __future__ import annotations

import math
from collections import Counter, defaultdict

import pytest

from simplepolygon import decompose
from simplepolygon.decomposition.rings import normalize_rings
from simplepolygon.geometry.intersections import find_self_intersections
from simplepolygon.geometry.polygon2d import point_in_ring, point_on_ring, ring_winding


def _star(n: int, step: int):
    return [
        [
            (math.cos(math.radians(90 + 360.0 * step * k / n)), math.sin(math.radians(90 + 360.0 * step * k / n)))
            for k in range(n)
        ]
    ]


def _pentagram():
    return _star(5, 2)


CASES = {
    "bowtie": [[[0, 0], [2, 0], [0, 2], [2, 2]]],
    "crossing_rings": [
        [[0, 0], [4, 0], [4, 4], [0, 4]],
        [[2, 1], [6, 1], [6, 3], [2, 3]],
    ],
    "pentagram": _pentagram(),
    "heptagram_7_3": _star(7, 3),
    "nested_squares": [
        [[0, 0], [10, 0], [10, 10], [0, 10]],
        [[2, 2], [2, 8], [8, 8], [8, 2]],
        [[20, 0], [22, 0], [22, 2], [20, 2]],
    ],
    "bowtie_hole": [
        [[0, 0], [10, 0], [10, 10], [0, 10]],
        [[2, 2], [8, 2], [2, 8], [8, 8]],
    ],
    "inner_ring_left_of_outer": [
        [[0, 0], [4, 0], [4, 4], [0, 4]],
        [[-2, 1], [2, 1], [2, 3], [-2, 3]],
    ],
}


def _split_input_segments(closed):
    cuts = defaultdict(list)
    for rec in find_self_intersections(closed):
        cuts[(rec.ring0, rec.edge0)].append((rec.frac0, rec.coord))
    segments = Counter()
    for r, ring in enumerate(closed):
        for e in range(len(ring) - 1):
            pts = [ring[e]] + [c for _, c in sorted(cuts[(r, e)])] + [ring[e + 1]]
            segments.update(zip(pts[:-1], pts[1:]))
    return segments


@pytest.fixture(params=sorted(CASES))
def case(request):
    rings = CASES[request.param]
    return normalize_rings(rings), decompose(rings)


def test_output_walks_every_split_input_segment_once(case) -> None:
    closed, out = case
    walked = Counter()
    for r in out:
        walked.update(zip(r.coords[:-1], r.coords[1:]))
    assert walked == _split_input_segments(closed)


def test_output_rings_are_closed_and_simple(case) -> None:
    _, out = case
    for r in out:
        assert r.coords[0] == r.coords[-1]
        assert len(r.coords) >= 4
        assert find_self_intersections([r.coords]) == []


def test_assigned_winding_matches_ring_geometry(case) -> None:
    _, out = case
    for r in out:
        assert r.winding == ring_winding(r.coords)


def test_parents_form_a_forest_of_enclosing_rings(case) -> None:
    _, out = case
    for r in out:
        seen = set()
        cur = r
        while cur.parent is not None:
            assert cur.index not in seen
            seen.add(cur.index)
            cur = out[cur.parent]
        if r.parent is not None:
            parent = out[r.parent]
            for p in r.coords:
                assert point_on_ring(p, parent.coords) or point_in_ring(p, parent.coords)


def test_net_winding_is_additive(case) -> None:
    _, out = case
    for r in out:
        base = 0 if r.parent is None else out[r.parent].net_winding
        assert r.net_winding == base + r.winding


def test_pentagram_yields_outline_and_doubly_wound_centre() -> None:
    out = decompose(_pentagram())
    assert [len(r.coords) for r in out] == [11, 6]
    assert [r.parent for r in out] == [None, 0]
    assert [r.net_winding for r in out] == [1, 2]


def test_already_simple_input_is_idempotent() -> None:
    rings = CASES["nested_squares"]
    closed = normalize_rings(rings)
    out = decompose(rings)
    assert [r.coords for r in out] == closed
    assert [r.winding for r in out] == [ring_winding(r) for r in closed]
    assert [r.parent for r in out] == [None, 0, None]


def test_heptagram_centre_is_wound_three_times() -> None:
    out = decompose(_star(7, 3))
    assert out[0].parent is None
    assert max(r.net_winding for r in out) == 3
    assert all(r.net_winding >= 1 for r in out)


def test_self_intersecting_hole_splits_into_oppositely_wound_triangles() -> None:
    out = decompose(CASES["bowtie_hole"])
    assert [len(r.coords) for r in out] == [5, 4, 4]
    assert [r.winding for r in out] == [1, 1, -1]
    assert [r.parent for r in out] == [None, 0, 0]
    assert [r.net_winding for r in out] == [1, 2, 0]


def test_ring_reaching_left_of_outer_ring_seeds_the_outline() -> None:
    out = decompose(CASES["inner_ring_left_of_outer"])
    assert out[0].coords == [(-2.0, 1.0), (0.0, 1.0), (0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0), (0.0, 3.0), (-2.0, 3.0), (-2.0, 1.0)]
    assert out[1].coords == [(0.0, 3.0), (0.0, 1.0), (2.0, 1.0), (2.0, 3.0), (0.0, 3.0)]
    assert [r.parent for r in out] == [None, 0]
    assert [r.net_winding for r in out] == [1, 2]
