from __future__ import annotations

import pytest

import simplepolygon
import simplepolygon.decomposition.pipeline as pipeline
from simplepolygon import DecomposeConfig, InvalidPolygonError, decompose


def test_decompose_function_and_decomposition_package_are_both_importable() -> None:
    assert callable(simplepolygon.decompose)
    assert simplepolygon.decompose is pipeline.decompose
    assert simplepolygon.decomposition.pipeline is pipeline


def test_bowtie_splits_into_two_opposite_triangles() -> None:
    rings = decompose([[[0, 0], [2, 0], [0, 2], [2, 2], [0, 0]]])
    assert [r.coords for r in rings] == [
        [(0, 0), (2, 0), (1, 1), (0, 0)],
        [(1, 1), (0, 2), (2, 2), (1, 1)],
    ]
    assert [r.parent for r in rings] == [None, None]
    assert [r.winding for r in rings] == [1, -1]
    assert [r.net_winding for r in rings] == [1, -1]


def test_simple_square_is_returned_unchanged() -> None:
    square = [[0, 0], [4, 0], [4, 4], [0, 4], [0, 0]]
    rings = decompose([square])
    assert len(rings) == 1
    assert rings[0].coords == [tuple(float(v) for v in p) for p in square]
    assert rings[0].winding == 1
    assert rings[0].parent is None
    assert rings[0].net_winding == rings[0].winding


def test_clockwise_square_gets_negative_winding() -> None:
    rings = decompose([[[0, 0], [0, 4], [4, 4], [4, 0], [0, 0]]])
    assert rings[0].winding == -1
    assert rings[0].net_winding == -1


def test_inner_ring_is_nested_in_outer_ring() -> None:
    rings = decompose(
        [
            [[0, 0], [10, 0], [10, 10], [0, 10], [0, 0]],
            [[2, 2], [2, 8], [8, 8], [8, 2], [2, 2]],
        ]
    )
    outer, inner = rings
    assert (outer.parent, outer.winding, outer.net_winding) == (None, 1, 1)
    assert inner.parent == outer.index
    assert inner.winding == -1
    assert inner.net_winding == outer.winding + inner.winding == 0


def test_duplicate_vertex_is_rejected_before_graph_construction(monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise AssertionError("intersections must not be computed for invalid input")

    monkeypatch.setattr(pipeline, "find_self_intersections", _fail)
    monkeypatch.setattr(pipeline, "build_graph", _fail)
    with pytest.raises(InvalidPolygonError, match="duplicate vertices"):
        decompose([[[0, 0], [2, 0], [1, 1], [0, 2], [1, 3], [2, 2], [1, 1], [0, 0]]])


def test_crossing_rings_produce_union_and_overlap() -> None:
    rings = decompose(
        [
            [[0, 0], [4, 0], [4, 4], [0, 4]],
            [[2, 1], [6, 1], [6, 3], [2, 3]],
        ]
    )
    assert len(rings) == 2
    union, overlap = rings
    assert len(union.coords) == 9
    assert overlap.coords == [(4.0, 3.0), (2.0, 3.0), (2.0, 1.0), (4.0, 1.0), (4.0, 3.0)]
    assert (union.parent, union.net_winding) == (None, 1)
    assert (overlap.parent, overlap.net_winding) == (0, 2)


def test_open_rings_are_closed_without_mutating_input() -> None:
    ring = [[0, 0], [2, 0], [0, 2], [2, 2]]
    rings = decompose([ring])
    assert ring == [[0, 0], [2, 0], [0, 2], [2, 2]]
    assert [r.winding for r in rings] == [1, -1]


def test_strict_rings_reject_open_input() -> None:
    with pytest.raises(InvalidPolygonError, match="not closed"):
        decompose([[[0, 0], [2, 0], [0, 2], [2, 2]]], DecomposeConfig(auto_close=False))


def test_verify_parents_matches_walk_on_crossing_rings() -> None:
    rings = [
        [[0, 0], [4, 0], [4, 4], [0, 4]],
        [[2, 1], [6, 1], [6, 3], [2, 3]],
    ]
    trusted = decompose(rings)
    verified = decompose(rings, DecomposeConfig(verify_parents=True))
    assert [r.parent for r in verified] == [r.parent for r in trusted]
    assert [r.net_winding for r in verified] == [r.net_winding for r in trusted]
