"""Nearest coastal sample point lookup."""
from __future__ import annotations

import math
from typing import Dict, Optional, Sequence

from pyproj import Geod

WGS84 = Geod(ellps='WGS84')


def find_nearest(query: Dict, points: Sequence[Dict]) -> Optional[Dict]:
    """Return ``{'index', 'distance'}`` of the closest point, or None for an empty set.

    Distance is planar in raw lat/lon degrees, which only holds for points
    spread along a short stretch of coast. Ties go to the lowest index.
    """
    if not points:
        return None
    lat, lon = query['lat'], query['lon']
    best_index = -1
    best_d2 = float('inf')
    for idx, point in enumerate(points):
        d_lat = lat - point['lat']
        d_lon = lon - point['lon']
        d2 = d_lat * d_lat + d_lon * d_lon
        if d2 < best_d2:
            best_index = idx
            best_d2 = d2
    if best_index < 0:
        # every candidate was NaN
        return None
    return {'index': best_index, 'distance': math.sqrt(best_d2)}


def geodesic_km(a: Dict, b: Dict) -> float:
    _, _, dist_m = WGS84.inv(a['lon'], a['lat'], b['lon'], b['lat'])
    return dist_m / 1000.0
