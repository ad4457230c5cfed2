"""Runtime settings for the subsidence viewer, overridable via environment variables."""
from __future__ import annotations

import os
from pathlib import Path
from typing import List


def _split_env(name: str, default: str) -> List[str]:
    return [item.strip() for item in os.environ.get(name, default).split(',') if item.strip()]


LAYER_URL = os.environ.get(
    'SUBSIDENCE_LAYER_URL',
    'https://services.arcgis.com/JL4BwWcjcPuWhBm9/arcgis/rest/services/subsidence_map_line_highres/FeatureServer/0',
)
POINTS_SOURCE = os.environ.get('SUBSIDENCE_POINTS_SOURCE', 'coastal_points.txt')
IMAGE_DIR = os.environ.get('SUBSIDENCE_IMAGE_DIR', './images')
OUTPUT_DIR = Path(os.environ.get('SUBSIDENCE_VIEWER_OUTPUT', Path.cwd() / 'subsidence_viewer'))
HTTP_TIMEOUT = float(os.environ.get('SUBSIDENCE_HTTP_TIMEOUT', 30))

# Dropdown options; field names are f"{condition}_{cm}_{year}"
CONDITIONS = _split_env('SUBSIDENCE_CONDITIONS', 'bo,y,n')
THRESHOLDS_CM = _split_env('SUBSIDENCE_THRESHOLDS_CM', '5,10,20')
YEARS = _split_env('SUBSIDENCE_YEARS', '30,50,100')

BUCKET_COUNT = 7
ROUND_TO = 5
PROXIMITY_DISTANCE_M = 10000

COLOR_RAMP = ['#00FF00', '#7FFF00', '#FFFF00', '#FFD700', '#FFA500', '#FF4500', '#FF0000']
DEFAULT_LINE_COLOR = [200, 200, 200, 0.5]
LINE_WIDTH = 8
