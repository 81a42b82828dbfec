"""
simplepolygon geometry module

Planar predicates used by the decomposition: orientation, convexity, ring
area and containment, and segment self-intersection detection.
"""

from simplepolygon.geometry.intersections import (
    IntersectionRecord,
    find_self_intersections,
    segment_intersection,
)
from simplepolygon.geometry.polygon2d import (
    Point2,
    close_ring,
    is_convex,
    point_in_ring,
    point_on_ring,
    ring_area,
    ring_winding,
    signed_area,
)

__all__ = [
    "IntersectionRecord",
    "find_self_intersections",
    "segment_intersection",
    "Point2",
    "close_ring",
    "is_convex",
    "point_in_ring",
    "point_on_ring",
    "ring_area",
    "ring_winding",
    "signed_area",
]
