"""Statistics and proximity queries against the subsidence ArcGIS feature layer."""
from __future__ import annotations

import json
from typing import Dict, Optional

import requests

from subsidence_viewer.config import HTTP_TIMEOUT, LAYER_URL, PROXIMITY_DISTANCE_M

ZERO_RANGE = {'min': 0.0, 'max': 0.0}


def build_field_name(condition: str, threshold_cm, year) -> str:
    return f"{condition}_{threshold_cm}_{year}"


def build_field_label(threshold_cm, year) -> str:
    return f"Probability of exceeding {threshold_cm}cm subsidence in the next {year} years"


def _query(layer_url: str, params: Dict) -> Dict:
    response = requests.get(f"{layer_url.rstrip('/')}/query", params={**params, 'f': 'json'}, timeout=HTTP_TIMEOUT)
    response.raise_for_status()
    payload = response.json()
    # ArcGIS reports query errors in a 200 body
    if 'error' in payload:
        error = payload['error']
        raise RuntimeError(f"ArcGIS error {error.get('code')}: {error.get('message')}")
    return payload


def _as_number(value: Optional[float]) -> float:
    if value is None:
        return 0.0
    return float(value)


def query_field_range(field_name: str, layer_url: str = LAYER_URL) -> Dict[str, float]:
    """Min/max of ``field_name`` across the layer; failures degrade to a zero range."""
    statistics = [
        {'statisticType': 'min', 'onStatisticField': field_name, 'outStatisticFieldName': 'minValue'},
        {'statisticType': 'max', 'onStatisticField': field_name, 'outStatisticFieldName': 'maxValue'},
    ]
    try:
        payload = _query(layer_url, {'where': '1=1', 'outStatistics': json.dumps(statistics)})
        features = payload.get('features') or []
        if not features:
            raise RuntimeError('statistics query returned no features')
        stats = features[0].get('attributes') or {}
        return {'min': _as_number(stats.get('minValue')), 'max': _as_number(stats.get('maxValue'))}
    except (requests.RequestException, ValueError, RuntimeError) as exc:
        print(f"⚠️  Field range query failed for {field_name}: {exc}")
        return dict(ZERO_RANGE)


def is_near_hazard_line(
    lat: float,
    lon: float,
    distance_m: float = PROXIMITY_DISTANCE_M,
    layer_url: str = LAYER_URL,
) -> bool:
    """True when any hazard line lies within ``distance_m`` of the point; False on failure."""
    geometry = {'x': lon, 'y': lat, 'spatialReference': {'wkid': 4326}}
    params = {
        'geometry': json.dumps(geometry),
        'geometryType': 'esriGeometryPoint',
        'inSR': '4326',
        'spatialRel': 'esriSpatialRelIntersects',
        'distance': distance_m,
        'units': 'esriSRUnit_Meter',
        'returnCountOnly': 'true',
    }
    try:
        payload = _query(layer_url, params)
        return int(payload.get('count') or 0) > 0
    except (requests.RequestException, ValueError, RuntimeError) as exc:
        print(f"⚠️  Coastline proximity query failed: {exc}")
        return False
