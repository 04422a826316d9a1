import pytest

from app.motion.core.data_types import InvalidSummary, ValidSummary
from app.motion.modules.scoring import QualityScorer, clamp, quality_score, round_half_up


def summary(avg_speed=0.2, range=0.3, smoothness=0.001):
    return ValidSummary(range=range, avg_speed=avg_speed, smoothness=smoothness,
                        tracked_frame_count=20, wave_window_ms=600)


def test_reference_values():
    # 0.4 * 100 + 0.35 * 100 + 0.25 * 100
    assert quality_score(summary(avg_speed=0.35, range=0.55, smoothness=0.0)) == 100
    assert quality_score(summary(avg_speed=0.0, range=0.0, smoothness=0.002)) == 0


def test_breakdown_components():
    breakdown = QualityScorer().breakdown(summary(avg_speed=0.175, range=0.275, smoothness=0.001))
    assert breakdown.speed_score == pytest.approx(50)
    assert breakdown.range_score == pytest.approx(50)
    assert breakdown.jitter_score == pytest.approx(50)
    assert breakdown.total == 50
    assert breakdown.to_dict()['score'] == 50


def test_invalid_summary_has_no_score():
    assert quality_score(InvalidSummary(reason='not enough tracked frames in wave segment')) is None


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert clamp(-1, 0, 100) == 0


@pytest.mark.parametrize('values', [
    (0.0, 0.0, 0.0),
    (1e9, 1e9, 0.0),
    (0.0, 0.0, 1e9),
    (1e9, 1e9, 1e9),
    (0.1, 10.0, 0.5),
])
def test_score_is_bounded(values):
    avg_speed, range_, smoothness = values
    score = quality_score(summary(avg_speed=avg_speed, range=range_, smoothness=smoothness))
    assert 0 <= score <= 100
    assert isinstance(score, int)


def test_score_monotonic_in_each_metric():
    grid = [0.0, 0.05, 0.1, 0.2, 0.3, 0.5, 1.0, 5.0]
    speeds = [quality_score(summary(avg_speed=v)) for v in grid]
    ranges = [quality_score(summary(range=v)) for v in grid]
    jitters = [quality_score(summary(smoothness=v / 100)) for v in grid]
    assert speeds == sorted(speeds)
    assert ranges == sorted(ranges)
    assert jitters == sorted(jitters, reverse=True)


def test_custom_calibration():
    scorer = QualityScorer(speed_ceiling=0.7, speed_weight=1.0, range_weight=0.0, jitter_weight=0.0)
    assert scorer.score(summary(avg_speed=0.35)) == 50
