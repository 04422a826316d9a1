"""
Window Series Module for WAVECHECK.

Per-frame values of one metric over the wave window, for plotting two
clips on a shared frame axis.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..core.data_types import Frame, Session
from .window import MIN_WRIST_CONFIDENCE, extract_window


class SeriesMetric(Enum):
    WRIST_X = "wristX"
    WRIST_Y = "wristY"
    ELBOW_ANGLE = "elbowAngle"


def _frame_value(frame: Frame, metric: SeriesMetric) -> float:
    if metric is SeriesMetric.WRIST_X:
        return frame.wrist.x
    if metric is SeriesMetric.WRIST_Y:
        return frame.wrist.y
    # Frames recorded without an angle plot at 0
    return frame.elbow_angle_deg if frame.elbow_angle_deg is not None else 0.0


def window_series(session: Session, metric: SeriesMetric,
                  min_confidence: float = MIN_WRIST_CONFIDENCE) -> List[float]:
    """
    Values of a metric for every frame of the analysis window.

    Uses the same window and wrist confidence filter as the summarizer,
    in timestamp order.
    """
    window = extract_window(session, min_confidence=min_confidence)
    return [_frame_value(f, metric) for f in window.frames]


def pad(values: List[float], length: int) -> List[Optional[float]]:
    return list(values) + [None] * (length - len(values))


@dataclass(frozen=True)
class PairedSeries:
    """Two series padded with None to a common length."""
    metric: SeriesMetric
    labels: List[int]
    series_a: List[Optional[float]]
    series_b: List[Optional[float]]


def paired_series(session_a: Session, session_b: Session, metric: SeriesMetric,
                  min_confidence: float = MIN_WRIST_CONFIDENCE) -> PairedSeries:
    a = window_series(session_a, metric, min_confidence)
    b = window_series(session_b, metric, min_confidence)
    length = max(len(a), len(b))
    return PairedSeries(
        metric=metric,
        labels=list(range(length)),
        series_a=pad(a, length),
        series_b=pad(b, length),
    )
