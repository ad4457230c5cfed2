#!/usr/bin/env python3
"""Precompute subsidence viewer data (renderers, legends, coastal points) from the feature layer."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from subsidence_viewer.config import CONDITIONS, LAYER_URL, OUTPUT_DIR, POINTS_SOURCE, THRESHOLDS_CM, YEARS
from subsidence_viewer.reference_points import load_reference_points
from subsidence_viewer.viewer import SubsidenceViewer


def _display(path: Path) -> Path:
    try:
        return path.relative_to(Path.cwd())
    except ValueError:
        return path


def _pick(requested: Optional[List[str]], available: List[str], kind: str) -> List[str]:
    if not requested:
        return list(available)
    picked = []
    for value in requested:
        if value not in available:
            print(f"Unknown {kind} '{value}'. Available: {', '.join(available)}", file=sys.stderr)
            continue
        picked.append(value)
    return picked


def build_renderers(viewer: SubsidenceViewer, conditions: List[str], thresholds: List[str], years: List[str]) -> Dict[str, Dict]:
    renderers: Dict[str, Dict] = {}
    for condition in conditions:
        for cm in thresholds:
            for year in years:
                update = viewer.update_renderer(condition, cm, year)
                if update is not None:
                    renderers[update['fieldName']] = update
    return renderers


def _ranges_frame(renderers: Dict[str, Dict]) -> pd.DataFrame:
    rows = [
        {
            'field_name': field_name,
            'min': update['range']['min'],
            'max': update['range']['max'],
            'rounded_max': update['roundedMax'],
            'step': update['breaks'][0]['max'] - update['breaks'][0]['min'],
        }
        for field_name, update in renderers.items()
    ]
    return pd.DataFrame(rows, columns=['field_name', 'min', 'max', 'rounded_max', 'step'])


def _write_csv(df: pd.DataFrame, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    print(f"✔️  Wrote {_display(path)}")


def _write_data_js(payload: Dict, output_dir: Path) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    data_js = output_dir / 'subsidence_data.js'
    data_js.write_text(f"window.SUBSIDENCE_DATA = {json.dumps(payload)};\n", encoding='utf-8')
    print(f"✔️  Wrote {_display(data_js)}")
    return data_js


def build_payload(viewer: SubsidenceViewer, conditions: List[str], thresholds: List[str], years: List[str]) -> Dict:
    return {
        'layerUrl': viewer.layer_url,
        'options': {'conditions': conditions, 'thresholdsCm': thresholds, 'years': years},
        'renderers': build_renderers(viewer, conditions, thresholds, years),
        'coastalPoints': list(viewer.reference_points),
    }


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Build subsidence viewer data from the hazard feature layer.')
    parser.add_argument('--points', default=POINTS_SOURCE, help='Coastal points file or URL (lines of "lon lat")')
    parser.add_argument('--layer-url', default=LAYER_URL)
    parser.add_argument('--output', type=Path, default=OUTPUT_DIR)
    parser.add_argument('--condition', action='append', help='Restrict to a condition (repeatable)')
    parser.add_argument('--cm', action='append', help='Restrict to a threshold in cm (repeatable)')
    parser.add_argument('--year', action='append', help='Restrict to a horizon in years (repeatable)')
    parser.add_argument('--click', nargs=2, type=float, metavar=('LAT', 'LON'), help='Print the popup for a single click and exit')
    args = parser.parse_args(argv)

    viewer = SubsidenceViewer(load_reference_points(args.points), layer_url=args.layer_url)
    years = _pick(args.year, YEARS, 'year')

    if args.click:
        if not years:
            print('No year available for the click lookup; set --year or SUBSIDENCE_YEARS', file=sys.stderr)
            return
        lat, lon = args.click
        popup = viewer.handle_click(lat, lon, years[0])
        print(json.dumps(popup, indent=2, ensure_ascii=False))
        return

    conditions = _pick(args.condition, CONDITIONS, 'condition')
    thresholds = _pick(args.cm, THRESHOLDS_CM, 'threshold')
    payload = build_payload(viewer, conditions, thresholds, years)
    _write_data_js(payload, args.output)
    _write_csv(_ranges_frame(payload['renderers']), args.output / 'field_ranges.csv')


if __name__ == '__main__':
    main()
