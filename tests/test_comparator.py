import pytest

from app.motion.core.data_types import InvalidSummary, ValidSummary
from app.motion.modules.comparator import (
    ComparisonResult, ComparisonUnavailable, RangeVerdict, SmoothnessVerdict, SpeedVerdict,
    compare, pct_diff, ratio,
)


def summary(avg_speed=0.2, range=0.3, smoothness=0.001):
    return ValidSummary(range=range, avg_speed=avg_speed, smoothness=smoothness,
                        tracked_frame_count=20, wave_window_ms=600)


INVALID = InvalidSummary(reason='not enough tracked frames in wave segment')


@pytest.mark.parametrize('x', [0.0, 1.0, -3.0, 1e9])
def test_degenerate_baselines(x):
    assert ratio(0, x) == 1
    assert pct_diff(0, x) == 0


def test_ratio_and_pct_diff():
    assert ratio(0.2, 0.4) == pytest.approx(2.0)
    assert pct_diff(0.3, 0.33) == pytest.approx(10.0)
    assert pct_diff(-2.0, -1.0) == pytest.approx(-50.0)


def test_speed_ratio():
    result = compare(summary(avg_speed=0.2), summary(avg_speed=0.4))
    assert isinstance(result, ComparisonResult)
    assert result.speed_ratio == pytest.approx(2.0)
    assert result.speed == SpeedVerdict.FASTER


def test_speed_ratio_clamps_at_three():
    result = compare(summary(avg_speed=0.2), summary(avg_speed=10.0))
    assert result.speed_ratio == 3.0


def test_zero_baseline_speed():
    result = compare(summary(avg_speed=0.0), summary(avg_speed=0.4))
    assert result.speed_ratio == 1.0
    assert result.speed == SpeedVerdict.SIMILAR


def test_deltas_are_clamped():
    result = compare(summary(range=0.1, smoothness=0.001), summary(range=0.5, smoothness=0.0))
    assert result.range_delta == 100
    assert result.smoothness_delta == -100
    assert result.range == RangeVerdict.LARGER
    assert result.smoothness == SmoothnessVerdict.SMOOTHER


def test_similar_sessions():
    result = compare(summary(), summary(avg_speed=0.21, range=0.31, smoothness=0.00105))
    assert result.speed == SpeedVerdict.SIMILAR
    assert result.range == RangeVerdict.SIMILAR
    assert result.smoothness == SmoothnessVerdict.SIMILAR
    assert result.describe() == "Speed looks similar. Range looks similar. Smoothness looks similar."


def test_description_and_dict():
    result = compare(summary(), summary(avg_speed=0.1, range=0.2, smoothness=0.002))
    assert result.describe() == "B looks slower. B has smaller movement range. B looks more shaky."
    data = result.to_dict()
    assert data['speed'] == 'slower'
    assert data['scoreA'] == result.score_a
    assert data['scoreB'] < data['scoreA']


def test_invalid_side_is_reported():
    assert compare(INVALID, summary()) == ComparisonUnavailable(side='A', reason=INVALID.reason)
    assert compare(summary(), INVALID) == ComparisonUnavailable(side='B', reason=INVALID.reason)
    # A is checked first
    assert compare(INVALID, INVALID).side == 'A'
    assert not compare(INVALID, INVALID).ok
