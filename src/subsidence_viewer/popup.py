"""Popup gallery view-model for a clicked coastal point."""
from __future__ import annotations

from typing import Dict, List

from subsidence_viewer.class_breaks import format_fixed
from subsidence_viewer.config import IMAGE_DIR

IMAGE_PREFIX = 'new_result_smoothed_10272025'
HAZARD_CURVE_PREFIX = f"Hazard_curve{IMAGE_PREFIX}"

GALLERY_SUFFIXES = [
    ('bo', 'Overall Probability'),
    ('y', 'At least 1 Earthquake Affects the Area'),
    ('n', 'No Earthquake Affects the Area'),
]
HAZARD_CURVE_TITLE = 'Overall Exceedance Hazard Curve'


def build_image_gallery(point_index: int, year, image_dir: str = IMAGE_DIR) -> List[Dict[str, str]]:
    base = f"{image_dir.rstrip('/')}/{IMAGE_PREFIX}_{point_index}_{year}"
    images = [{'src': f"{base}_{suffix}.png", 'title': title} for suffix, title in GALLERY_SUFFIXES]
    images.append(
        {
            'src': f"{image_dir.rstrip('/')}/{HAZARD_CURVE_PREFIX}_{point_index}_{year}.png",
            'title': HAZARD_CURVE_TITLE,
        }
    )
    return images


def _degrees_west(lon: float) -> str:
    # longitude is rounded first, then negated and printed as a plain number (90.0 -> "90", -0.0 -> "0")
    value = -float(format_fixed(lon))
    if value == 0:
        return '0'
    if value.is_integer():
        return str(int(value))
    return repr(value)


def build_popup_title(year, lat: float, lon: float) -> str:
    return (
        f"Probability of vertical land motion in the next {year} years at the closest coastal point "
        f"({format_fixed(lat)}° N,{_degrees_west(lon)}° W)"
    )


class GalleryPager:
    """Prev/next paging over a fixed list of gallery images."""

    def __init__(self, images: List[Dict[str, str]]):
        if not images:
            raise ValueError('GalleryPager needs at least one image')
        self.images = list(images)
        self.position = 0

    @property
    def current(self) -> Dict[str, str]:
        return self.images[self.position]

    @property
    def has_prev(self) -> bool:
        return self.position > 0

    @property
    def has_next(self) -> bool:
        return self.position < len(self.images) - 1

    def next(self) -> Dict[str, str]:
        if self.has_next:
            self.position += 1
        return self.current

    def prev(self) -> Dict[str, str]:
        if self.has_prev:
            self.position -= 1
        return self.current

    def state(self) -> Dict:
        return {
            'position': self.position,
            'total': len(self.images),
            'current': self.current,
            'prevDisabled': not self.has_prev,
            'nextDisabled': not self.has_next,
        }
