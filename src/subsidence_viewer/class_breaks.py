"""Dynamic class breaks, renderer and legend view-models for the subsidence line layer."""
from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from subsidence_viewer.config import BUCKET_COUNT, COLOR_RAMP, DEFAULT_LINE_COLOR, LINE_WIDTH, ROUND_TO


def format_fixed(value: float) -> str:
    """One-decimal text with exact halves rounded away from zero, as JS toFixed(1) does."""
    return str(Decimal(value).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP))


def _format_label(low: float, high: float) -> str:
    return f"{format_fixed(low)} – {format_fixed(high)}"


def _color_index(position: int, palette: Sequence[str]) -> int:
    return min(position, len(palette) - 1)


def compute_breaks(
    max_value: float,
    bucket_count: int = BUCKET_COUNT,
    round_to: float = ROUND_TO,
    palette: Sequence[str] = COLOR_RAMP,
) -> Dict:
    """Split ``[0, ceil(max_value / round_to) * round_to]`` into equal-width breaks.

    A zero range is valid: every break collapses to ``[0, 0]``.
    """
    if bucket_count < 1:
        raise ValueError(f"bucket_count must be >= 1, got {bucket_count}")
    if round_to <= 0:
        raise ValueError(f"round_to must be > 0, got {round_to}")
    max_value = max(float(max_value or 0), 0.0)
    rounded_max = float(math.ceil(max_value / round_to) * round_to)
    step = rounded_max / bucket_count
    breaks = []
    for idx in range(bucket_count):
        low = idx * step
        # pin the final edge so float error cannot leave a gap at the top
        high = rounded_max if idx == bucket_count - 1 else (idx + 1) * step
        color_index = _color_index(idx, palette)
        breaks.append(
            {
                'min': low,
                'max': high,
                'colorIndex': color_index,
                'color': palette[color_index],
                'label': _format_label(low, high),
            }
        )
    return {'breaks': breaks, 'roundedMax': rounded_max}


def _line_symbol(color) -> Dict:
    return {'type': 'esriSLS', 'style': 'esriSLSSolid', 'color': color, 'width': LINE_WIDTH}


def make_renderer(field_name: str, breaks: List[Dict]) -> Dict:
    """ArcGIS class-breaks renderer JSON for the given field."""
    return {
        'type': 'classBreaks',
        'field': field_name,
        'defaultSymbol': _line_symbol(DEFAULT_LINE_COLOR),
        'defaultLabel': 'No data',
        'minValue': breaks[0]['min'] if breaks else 0.0,
        'classBreakInfos': [
            {
                'classMinValue': entry['min'],
                'classMaxValue': entry['max'],
                'label': entry['label'],
                'symbol': _line_symbol(entry['color']),
            }
            for entry in breaks
        ],
    }


def build_legend(title: str, result: Dict) -> Dict:
    """Declarative legend: a colour bar from 0% to the rounded max, one row per break."""
    return {
        'title': title,
        'minLabel': '0%',
        'maxLabel': f"{result['roundedMax']:g}%",
        'rows': [{'color': entry['color'], 'label': entry['label']} for entry in result['breaks']],
    }
