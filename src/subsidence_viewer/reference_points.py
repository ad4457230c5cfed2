"""Load the coastal sample points whose order keys the pre-rendered popup images."""
from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

import requests

from subsidence_viewer.config import HTTP_TIMEOUT

ReferencePoints = Tuple[Dict[str, float], ...]


def _is_url(source: Union[str, Path]) -> bool:
    return str(source).startswith(('http://', 'https://'))


def _read_source(source: Union[str, Path]) -> str:
    if _is_url(source):
        response = requests.get(str(source), timeout=HTTP_TIMEOUT)
        response.raise_for_status()
        return response.text
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Missing coastal points file: {path}")
    return path.read_text(encoding='utf-8')


def parse_reference_points(lines: Iterable[str]) -> ReferencePoints:
    """Parse ``<lon> <lat>`` lines; malformed lines keep their slot as NaN."""
    records = []
    for line_no, line in enumerate(lines, start=1):
        line = line.strip()
        if not line:
            continue
        parts = line.split()
        try:
            lon = float(parts[0])
            lat = float(parts[1])
        except (IndexError, ValueError):
            print(f"⚠️  Malformed coastal point on line {line_no}: {line!r}")
            lon = lat = math.nan
        records.append({'lat': lat, 'lon': lon})
    return tuple(records)


def load_reference_points(source: Union[str, Path]) -> ReferencePoints:
    """Load points from a file path or URL; any failure yields an empty set."""
    try:
        text = _read_source(source)
    except (OSError, requests.RequestException) as exc:
        print(f"⚠️  Could not load coastal points from {source}: {exc}")
        return ()
    points = parse_reference_points(text.splitlines())
    print(f"✔️  Loaded {len(points)} coastal points")
    return points
