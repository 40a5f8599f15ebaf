from typing import Any, List, Sequence, Tuple

import numpy as np
from shapely.geometry import GeometryCollection, LineString, Polygon

from .backend import DrawCall


DEFAULT_FRAME = ((-1.0, 1.0), (-1.0, 1.0))


def call_to_shapely(call: DrawCall) -> Any:
    if call.kind == "polygon":
        geom = Polygon(call.vertices)
        if not geom.is_valid:
            geom = geom.buffer(0)
        if geom.is_empty:
            # flattened onto a line by a zero scale on one axis
            geom = LineString(call.vertices)
        return geom
    if call.kind == "path":
        return LineString(call.vertices)
    raise ValueError(f"Unknown draw call kind {call.kind}")


def calls_to_shapely(calls: Sequence[DrawCall]) -> List[Any]:
    """
    Shapely geometries for the drawable calls. Collapsed output (zero scale
    transforms) that shrinks to a point is dropped since it has no extent.
    """
    geoms = []
    for call in calls:
        if len(call.vertices) < 2 or np.ptp(call.vertices, axis=0).max() == 0.0:
            continue
        geom = call_to_shapely(call)
        if geom.is_empty or not geom.is_valid:
            continue
        geoms.append(geom)
    return geoms


def drawing_bounds(
    calls: Sequence[DrawCall],
    margin: float = 0.1,
) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Square frame (xlim, ylim) around everything drawn, padded by 'margin'.
    """
    all_geoms = calls_to_shapely(calls)
    if not all_geoms:
        return DEFAULT_FRAME

    minx, miny, maxx, maxy = GeometryCollection(all_geoms).bounds

    max_dim = max(maxx - minx, maxy - miny)
    center_x = (minx + maxx) / 2
    center_y = (miny + maxy) / 2
    half_side = (max_dim / 2) + margin

    return (center_x - half_side, center_x + half_side), (center_y - half_side, center_y + half_side)
