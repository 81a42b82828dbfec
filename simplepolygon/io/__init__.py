"""
simplepolygon I/O module

GeoJSON reading and writing around the decomposition.
"""

from simplepolygon.io.geojson import (
    decompose_feature,
    load_feature,
    ring_to_feature,
    rings_from_feature,
    to_feature_collection,
)

__all__ = [
    "decompose_feature",
    "load_feature",
    "ring_to_feature",
    "rings_from_feature",
    "to_feature_collection",
]
