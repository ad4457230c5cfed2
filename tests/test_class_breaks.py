import math
import random

import pytest

from subsidence_viewer import class_breaks as cb
from subsidence_viewer.config import COLOR_RAMP

_rng = random.Random(20251027)
RANDOM_MAXIMA = [0.0, 0.01, 4.999, 5.0, 5.0001, 33.3, 1e-9, 97.25] + [_rng.uniform(0, 500) for _ in range(40)]


def test_compute_breaks_for_35_gives_width_five_intervals():
    result = cb.compute_breaks(35)

    assert result['roundedMax'] == 35
    assert [(b['min'], b['max']) for b in result['breaks']] == [
        (0, 5), (5, 10), (10, 15), (15, 20), (20, 25), (25, 30), (30, 35)
    ]
    assert [b['colorIndex'] for b in result['breaks']] == list(range(7))
    assert result['breaks'][0]['label'] == '0.0 – 5.0'
    assert result['breaks'][-1]['color'] == '#FF0000'


def test_compute_breaks_rounds_max_up_to_multiple_of_five():
    result = cb.compute_breaks(12.3)

    assert result['roundedMax'] == 15
    assert result['breaks'][1]['label'] == '2.1 – 4.3'


def test_compute_breaks_zero_range_collapses_without_error():
    result = cb.compute_breaks(0)

    assert result['roundedMax'] == 0
    assert len(result['breaks']) == 7
    assert all(b['min'] == 0 and b['max'] == 0 for b in result['breaks'])
    assert all(b['label'] == '0.0 – 0.0' for b in result['breaks'])


def test_compute_breaks_clamps_negative_and_missing_max():
    assert cb.compute_breaks(-3)['roundedMax'] == 0
    assert cb.compute_breaks(None)['roundedMax'] == 0


@pytest.mark.parametrize('max_value', RANDOM_MAXIMA)
def test_compute_breaks_is_contiguous(max_value):
    result = cb.compute_breaks(max_value)
    breaks = result['breaks']

    assert result['roundedMax'] == math.ceil(max_value / 5) * 5
    assert result['roundedMax'] >= max_value
    assert breaks[0]['min'] == 0
    assert breaks[-1]['max'] == result['roundedMax']
    for left, right in zip(breaks, breaks[1:]):
        assert left['max'] == right['min']
        assert left['min'] <= left['max']


def test_compute_breaks_custom_bucket_count_reuses_last_colour():
    result = cb.compute_breaks(50, bucket_count=10, round_to=10)

    assert len(result['breaks']) == 10
    assert result['breaks'][-1]['max'] == 50
    assert result['breaks'][-1]['colorIndex'] == len(COLOR_RAMP) - 1


@pytest.mark.parametrize('kwargs', [{'bucket_count': 0}, {'round_to': 0}])
def test_compute_breaks_rejects_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        cb.compute_breaks(10, **kwargs)


def test_make_renderer_mirrors_breaks():
    result = cb.compute_breaks(35)
    renderer = cb.make_renderer('bo_5_30', result['breaks'])

    assert renderer['type'] == 'classBreaks'
    assert renderer['field'] == 'bo_5_30'
    assert renderer['defaultLabel'] == 'No data'
    assert renderer['defaultSymbol']['color'] == [200, 200, 200, 0.5]
    infos = renderer['classBreakInfos']
    assert len(infos) == 7
    assert infos[2]['classMaxValue'] == 15
    assert infos[2]['symbol']['color'] == COLOR_RAMP[2]
    assert infos[2]['symbol']['width'] == 8


def test_build_legend_is_a_plain_view_model():
    result = cb.compute_breaks(20)
    legend = cb.build_legend('Probability of exceeding 5cm subsidence in the next 30 years', result)

    assert legend['minLabel'] == '0%'
    assert legend['maxLabel'] == '20%'
    assert legend['title'].startswith('Probability of exceeding 5cm')
    assert [row['color'] for row in legend['rows']] == COLOR_RAMP
    assert legend['rows'][0]['label'] == result['breaks'][0]['label']


def test_labels_round_exact_halves_away_from_zero():
    result = cb.compute_breaks(5, bucket_count=4)

    assert [b['label'] for b in result['breaks']] == ['0.0 – 1.3', '1.3 – 2.5', '2.5 – 3.8', '3.8 – 5.0']


@pytest.mark.parametrize(
    'value, expected',
    [(0.0, '0.0'), (1.25, '1.3'), (-1.25, '-1.3'), (0.15, '0.1'), (33.04, '33.0'), (2.142857, '2.1')],
)
def test_format_fixed_matches_one_decimal_to_fixed(value, expected):
    assert cb.format_fixed(value) == expected
