from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

from simplepolygon.decomposition.pipeline import DecomposeConfig, decompose
from simplepolygon.decomposition.rings import InvalidPolygonError, OutputRing


def rings_from_feature(feature: Mapping[str, Any]) -> List[Sequence[object]]:
    if not isinstance(feature, Mapping) or feature.get("type") != "Feature":
        raise InvalidPolygonError("The input must be a GeoJSON object of type Feature.")
    geometry = feature.get("geometry")
    if not isinstance(geometry, Mapping) or not geometry:
        raise InvalidPolygonError("The input must be a GeoJSON Feature with a non-empty geometry.")
    if geometry.get("type") != "Polygon":
        raise InvalidPolygonError("The input must be a GeoJSON Polygon.")
    coords = geometry.get("coordinates")
    if not isinstance(coords, list):
        raise InvalidPolygonError("The Polygon geometry has no coordinate list.")
    return list(coords)


def ring_to_feature(ring: OutputRing) -> Dict[str, Any]:
    return {
        "type": "Feature",
        "properties": {
            "index": int(ring.index),
            "parent": -1 if ring.parent is None else int(ring.parent),
            "winding": int(ring.winding),
            "netWinding": ring.net_winding,
        },
        "geometry": {
            "type": "Polygon",
            "coordinates": [[[float(x), float(y)] for x, y in ring.coords]],
        },
    }


def to_feature_collection(rings: Sequence[OutputRing]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": [ring_to_feature(r) for r in rings]}


def decompose_feature(feature: Mapping[str, Any], config: Optional[DecomposeConfig] = None) -> Dict[str, Any]:
    """GeoJSON Polygon Feature in, FeatureCollection of simple polygons out.

    Output features carry ``index``, ``parent`` (-1 for none), ``winding`` and
    ``netWinding`` properties.
    """
    return to_feature_collection(decompose(rings_from_feature(feature), config))


def load_feature(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise InvalidPolygonError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidPolygonError(f"{path} does not hold a GeoJSON object.")
    return data
