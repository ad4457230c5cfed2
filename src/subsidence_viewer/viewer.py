"""Filter-change and map-click handling for the subsidence viewer."""
from __future__ import annotations

import itertools
import threading
from typing import Dict, Optional

from subsidence_viewer import feature_service
from subsidence_viewer.class_breaks import build_legend, compute_breaks, make_renderer
from subsidence_viewer.config import IMAGE_DIR, LAYER_URL, PROXIMITY_DISTANCE_M
from subsidence_viewer.nearest_point import find_nearest, geodesic_km
from subsidence_viewer.popup import build_image_gallery, build_popup_title
from subsidence_viewer.reference_points import ReferencePoints


class RequestSequencer:
    """Hands out increasing tokens; only the most recent one is current."""

    def __init__(self):
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next_token(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._latest


class SubsidenceViewer:
    def __init__(
        self,
        reference_points: ReferencePoints,
        layer_url: str = LAYER_URL,
        image_dir: str = IMAGE_DIR,
        proximity_m: float = PROXIMITY_DISTANCE_M,
    ):
        self.reference_points = tuple(reference_points)
        self.layer_url = layer_url
        self.image_dir = image_dir
        self.proximity_m = proximity_m
        self._renderer_requests = RequestSequencer()
        self._click_requests = RequestSequencer()

    def update_renderer(self, condition: str, threshold_cm, year) -> Optional[Dict]:
        """Recompute breaks, renderer and legend for the selected filters.

        Returns None when a newer update started while this one was waiting
        on the statistics query.
        """
        token = self._renderer_requests.next_token()
        field_name = feature_service.build_field_name(condition, threshold_cm, year)
        label = feature_service.build_field_label(threshold_cm, year)
        field_range = feature_service.query_field_range(field_name, layer_url=self.layer_url)
        if not self._renderer_requests.is_current(token):
            print(f"⚠️  Discarding stale renderer update for {field_name}")
            return None
        result = compute_breaks(field_range['max'])
        return {
            'fieldName': field_name,
            'label': label,
            'range': field_range,
            'roundedMax': result['roundedMax'],
            'breaks': result['breaks'],
            'renderer': make_renderer(field_name, result['breaks']),
            'legend': build_legend(label, result),
        }

    def handle_click(self, lat: float, lon: float, year) -> Optional[Dict]:
        """Popup payload for a click, or None when nothing should be shown."""
        token = self._click_requests.next_token()
        near = feature_service.is_near_hazard_line(lat, lon, distance_m=self.proximity_m, layer_url=self.layer_url)
        if not self._click_requests.is_current(token):
            print(f"⚠️  Discarding stale click at {lat:.3f}, {lon:.3f}")
            return None
        if not near:
            print('Not close to coast; skipping marker and popup.')
            return None
        click = {'lat': lat, 'lon': lon}
        match = find_nearest(click, self.reference_points)
        if match is None:
            return None
        sample = self.reference_points[match['index']]
        return {
            'marker': click,
            'nearest': {**match, 'lat': sample['lat'], 'lon': sample['lon']},
            'distanceKm': geodesic_km(click, sample),
            'title': build_popup_title(year, lat, lon),
            'images': build_image_gallery(match['index'], year, image_dir=self.image_dir),
        }
