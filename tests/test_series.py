from dataclasses import replace

import pytest

from app.motion.modules.series import SeriesMetric, paired_series, window_series

from conftest import linear_frames, make_frame, make_session


def test_wrist_x_follows_window():
    frames = linear_frames(n=10, x0=0.0, x1=0.9)
    session = make_session(frames, wave_start_ms=66, wave_end_ms=198)
    assert window_series(session, SeriesMetric.WRIST_X) == pytest.approx([0.2, 0.3, 0.4, 0.5, 0.6])


def test_wrist_y_in_timestamp_order():
    frames = [make_frame(66, 0.5, y=0.3), make_frame(0, 0.5, y=0.1), make_frame(33, 0.5, y=0.2)]
    assert window_series(make_session(frames), SeriesMetric.WRIST_Y) == [0.1, 0.2, 0.3]


def test_low_confidence_frames_are_left_out():
    frames = [make_frame(0, 0.5, confidence=0.9), make_frame(33, 0.6, confidence=0.2),
              make_frame(66, 0.7, confidence=0.9)]
    assert window_series(make_session(frames), SeriesMetric.WRIST_X) == [0.5, 0.7]


def test_missing_elbow_angle_reads_zero():
    frames = [
        replace(make_frame(0, 0.5), elbow_angle_deg=92.5),
        make_frame(33, 0.6),
        replace(make_frame(66, 0.7), elbow_angle_deg=101.25),
    ]
    assert window_series(make_session(frames), SeriesMetric.ELBOW_ANGLE) == [92.5, 0.0, 101.25]


def test_paired_series_pads_shorter_side():
    short = make_session(linear_frames(n=3, x0=0.2, x1=0.4), session_id='short')
    long = make_session(linear_frames(n=5, x0=0.2, x1=0.6), session_id='long')

    paired = paired_series(short, long, SeriesMetric.WRIST_X)
    assert paired.metric is SeriesMetric.WRIST_X
    assert paired.labels == [0, 1, 2, 3, 4]
    assert paired.series_a[:3] == pytest.approx([0.2, 0.3, 0.4])
    assert paired.series_a[3:] == [None, None]
    assert paired.series_b == pytest.approx([0.2, 0.3, 0.4, 0.5, 0.6])


def test_paired_series_of_empty_sessions():
    paired = paired_series(make_session([]), make_session([]), SeriesMetric.WRIST_Y)
    assert paired.labels == []
    assert paired.series_a == []
    assert paired.series_b == []
