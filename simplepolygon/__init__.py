"""
simplepolygon

Decomposes self-intersecting polygons into simple, non-self-intersecting
one-ring polygons annotated with winding number, parent and net winding.
"""

from simplepolygon.decomposition import (
    DecomposeConfig,
    GraphConsistencyError,
    InvalidPolygonError,
    OutputRing,
    decompose,
)
from simplepolygon.io import decompose_feature, to_feature_collection

__all__ = [
    "DecomposeConfig",
    "GraphConsistencyError",
    "InvalidPolygonError",
    "OutputRing",
    "decompose",
    "decompose_feature",
    "to_feature_collection",
]
